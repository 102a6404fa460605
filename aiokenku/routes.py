"""HTTP routes of the Kenku FM Remote API.

The remote owns its endpoint layout, so every request the controller makes is
looked up here instead of being hard-coded. A controller can be given a
different :class:`Routes` table to talk to a remote with another layout.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple
from urllib.parse import quote

ID_PLACEHOLDER = "{id}"


class Command(Enum):
    """Every request the client knows how to send."""

    STATUS = "status"
    PLAYLIST = "playlist"
    PLAYLIST_PLAYBACK = "playlist_playback"
    SOUNDBOARD = "soundboard"
    SOUNDBOARD_PLAYBACK = "soundboard_playback"
    PLAYLIST_PLAY = "playlist_play"
    TRACK_PLAY = "track_play"
    PLAYBACK_PLAY = "playback_play"
    PLAYBACK_PAUSE = "playback_pause"
    PLAYBACK_NEXT = "playback_next"
    PLAYBACK_PREVIOUS = "playback_previous"
    PLAYBACK_MUTE = "playback_mute"
    PLAYBACK_VOLUME = "playback_volume"
    PLAYBACK_SHUFFLE = "playback_shuffle"
    PLAYBACK_REPEAT = "playback_repeat"
    SOUND_PLAY = "sound_play"
    SOUND_STOP = "sound_stop"


class Route(NamedTuple):
    """HTTP method plus path template for a single command."""

    method: str
    path: str

    @property
    def takes_id_in_path(self) -> bool:
        """Return True if the entity id is part of the path."""
        return ID_PLACEHOLDER in self.path

    def format_path(self, entity_id: str | None = None) -> str:
        """Return the concrete path, substituting the entity id if needed."""
        if not self.takes_id_in_path:
            return self.path
        if entity_id is None:
            raise ValueError(f"Route {self.path} requires an entity id")
        return self.path.replace(ID_PLACEHOLDER, quote(entity_id, safe=""))


@dataclass(frozen=True, slots=True)
class Routes:
    """Route table with one entry per :class:`Command`."""

    status: Route = Route("GET", "/")
    playlist: Route = Route("GET", "/v1/playlist")
    playlist_playback: Route = Route("GET", "/v1/playlist/playback")
    soundboard: Route = Route("GET", "/v1/soundboard")
    soundboard_playback: Route = Route("GET", "/v1/soundboard/playback")
    playlist_play: Route = Route("PUT", "/v1/playlist/play")
    track_play: Route = Route("PUT", "/v1/playlist/play")
    playback_play: Route = Route("PUT", "/v1/playlist/playback/play")
    playback_pause: Route = Route("PUT", "/v1/playlist/playback/pause")
    playback_next: Route = Route("POST", "/v1/playlist/playback/next")
    playback_previous: Route = Route("POST", "/v1/playlist/playback/previous")
    playback_mute: Route = Route("PUT", "/v1/playlist/playback/mute")
    playback_volume: Route = Route("PUT", "/v1/playlist/playback/volume")
    playback_shuffle: Route = Route("PUT", "/v1/playlist/playback/shuffle")
    playback_repeat: Route = Route("PUT", "/v1/playlist/playback/repeat")
    sound_play: Route = Route("PUT", "/v1/soundboard/play")
    sound_stop: Route = Route("PUT", "/v1/soundboard/stop")

    def resolve(self, command: Command) -> Route:
        """Return the route registered for a command."""
        route: Route = getattr(self, command.value)
        return route

    def replace(self, **changes: Route | tuple[str, str]) -> Routes:
        """Return a copy with some routes swapped out.

        Plain ``(method, path)`` tuples are accepted for convenience.
        """
        normalized = {name: Route(*route) for name, route in changes.items()}
        return dataclasses.replace(self, **normalized)


KENKU_ROUTES = Routes()
"""Routes of the Kenku FM Remote v1 API."""
