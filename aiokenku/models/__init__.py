"""Models for the Kenku FM Remote API."""

from __future__ import annotations

from . import playlist, soundboard, types
from .playlist import Playlist, PlaylistGetResponse, PlaylistPlayback, PlaylistRef, Track
from .soundboard import Sound, Soundboard, SoundboardGetResponse, SoundboardPlayback
from .types import CommandResult, KenkuModel, KenkuState, RepeatMode

__all__ = [
    "CommandResult",
    "KenkuModel",
    "KenkuState",
    "Playlist",
    "PlaylistGetResponse",
    "PlaylistPlayback",
    "PlaylistRef",
    "RepeatMode",
    "Sound",
    "Soundboard",
    "SoundboardGetResponse",
    "SoundboardPlayback",
    "Track",
    "playlist",
    "soundboard",
    "types",
]
