"""Shared enums and result types used by the Kenku models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from mashumaro.config import BaseConfig
from mashumaro.mixins.orjson import DataClassORJSONMixin


@dataclass
class KenkuModel(DataClassORJSONMixin):
    """Base class for payloads returned by the Kenku Remote."""

    class Config(BaseConfig):
        """Config for parsing json payloads."""

        serialize_by_alias = True
        omit_none = True


class RepeatMode(Enum):
    """Repeat mode of the playlist player."""

    TRACK = "track"
    PLAYLIST = "playlist"
    OFF = "off"


class KenkuState(Enum):
    """Reachability of the Kenku Remote."""

    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(slots=True)
class CommandResult:
    """Outcome of a command sent to the remote."""

    status_code: int
    payload: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        """Return True for a 2xx status code."""
        return 200 <= self.status_code < 300

    @property
    def status(self) -> str | None:
        """Return the ``status`` reported in the response body, if any."""
        if self.payload is None:
            return None
        value = self.payload.get("status")
        return None if value is None else str(value)
