"""aiokenku: asyncio client for the Kenku FM Remote API."""

from __future__ import annotations

from aiokenku.controller import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT, Controller
from aiokenku.exceptions import (
    KenkuConnectionError,
    KenkuDecodeError,
    KenkuError,
    KenkuRequestError,
)
from aiokenku.models import (
    CommandResult,
    KenkuState,
    Playlist,
    PlaylistGetResponse,
    PlaylistPlayback,
    PlaylistRef,
    RepeatMode,
    Sound,
    Soundboard,
    SoundboardGetResponse,
    SoundboardPlayback,
    Track,
)
from aiokenku.routes import KENKU_ROUTES, Command, Route, Routes

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_TIMEOUT",
    "KENKU_ROUTES",
    "Command",
    "CommandResult",
    "Controller",
    "KenkuConnectionError",
    "KenkuDecodeError",
    "KenkuError",
    "KenkuRequestError",
    "KenkuState",
    "Playlist",
    "PlaylistGetResponse",
    "PlaylistPlayback",
    "PlaylistRef",
    "RepeatMode",
    "Route",
    "Routes",
    "Sound",
    "Soundboard",
    "SoundboardGetResponse",
    "SoundboardPlayback",
    "Track",
]
