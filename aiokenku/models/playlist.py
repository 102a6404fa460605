"""Playlist models of the Kenku Remote API.

``GET /v1/playlist`` returns every playlist together with every track known to
Kenku FM. Playlists only reference their tracks by id; use
:meth:`PlaylistGetResponse.tracks_for` to resolve them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from aiokenku.routes import Command

from .types import CommandResult, KenkuModel, RepeatMode

if TYPE_CHECKING:
    from aiokenku.controller import Controller


@dataclass
class Track(KenkuModel):
    """A playable track of the playlist player."""

    id: str
    """Unique identifier of the track."""
    title: str = ""
    """Display title."""
    url: str = ""
    """Location of the audio file."""
    duration: int | None = None
    """Total duration in milliseconds (playback responses only)."""
    progress: int | None = None
    """Current position in milliseconds (playback responses only)."""

    @classmethod
    def __pre_deserialize__(cls, d: dict[Any, Any]) -> dict[Any, Any]:
        # Some remotes label tracks with "name" instead of "title"
        if "title" not in d and "name" in d:
            d = {**d, "title": d["name"]}
        return d

    async def play(self, controller: Controller) -> CommandResult:
        """Start playing this track on the remote behind ``controller``."""
        return await controller.send_command(Command.TRACK_PLAY, entity_id=self.id)


@dataclass
class Playlist(KenkuModel):
    """A named, ordered list of track ids."""

    id: str
    title: str
    tracks: list[str] = field(default_factory=list)
    """Track ids in play order."""
    background: str | None = None
    """Background image URL shown by Kenku FM."""

    @classmethod
    def __pre_deserialize__(cls, d: dict[Any, Any]) -> dict[Any, Any]:
        # Empty playlists may be sent with "tracks": null
        if d.get("tracks", []) is None:
            d = {**d, "tracks": []}
        return d

    async def play(self, controller: Controller) -> CommandResult:
        """Start this playlist on the remote behind ``controller``."""
        return await controller.send_command(Command.PLAYLIST_PLAY, entity_id=self.id)


@dataclass
class PlaylistRef(KenkuModel):
    """Short playlist reference included in playback responses."""

    id: str
    title: str


@dataclass
class PlaylistGetResponse(KenkuModel):
    """Answer of ``GET /v1/playlist``."""

    playlists: list[Playlist] = field(default_factory=list)
    tracks: list[Track] = field(default_factory=list)

    @classmethod
    def __pre_deserialize__(cls, d: dict[Any, Any]) -> dict[Any, Any]:
        for key in ("playlists", "tracks"):
            if d.get(key, []) is None:
                d = {**d, key: []}
        return d

    def get_track(self, track_id: str) -> Track | None:
        """Return the track with the given id, if present."""
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    def get_playlist(self, playlist_id: str) -> Playlist | None:
        """Return the playlist with the given id, if present."""
        for playlist in self.playlists:
            if playlist.id == playlist_id:
                return playlist
        return None

    def tracks_for(self, playlist: Playlist) -> list[Track]:
        """Resolve the track ids of a playlist, keeping playlist order.

        Ids without a matching track are skipped.
        """
        by_id = {track.id: track for track in self.tracks}
        return [by_id[track_id] for track_id in playlist.tracks if track_id in by_id]


@dataclass
class PlaylistPlayback(KenkuModel):
    """Answer of ``GET /v1/playlist/playback``."""

    playing: bool
    volume: float
    """Volume between 0 and 1."""
    muted: bool
    shuffle: bool
    repeat: RepeatMode
    track: Track | None = None
    """Currently loaded track."""
    playlist: PlaylistRef | None = None
    """Playlist the current track belongs to."""

    async def play(self, controller: Controller) -> CommandResult | None:
        """Resume the current track.

        Returns None without contacting the remote when no track is loaded.
        """
        if self.track is None:
            return None
        return await controller.send_command(Command.PLAYBACK_PLAY, entity_id=self.track.id)
