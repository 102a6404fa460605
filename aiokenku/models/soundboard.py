"""Soundboard models of the Kenku Remote API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mashumaro import field_options

from aiokenku.routes import Command

from .types import CommandResult, KenkuModel

if TYPE_CHECKING:
    from aiokenku.controller import Controller


@dataclass
class Sound(KenkuModel):
    """A short clip that can be triggered from a soundboard."""

    id: str
    """Unique identifier of the sound."""
    title: str
    """Display title."""
    url: str = ""
    """Location of the audio file."""
    loop: bool = False
    """Restart the sound when it ends."""
    volume: float = 1.0
    """Volume between 0 and 1."""
    fade_in: int = field(default=0, metadata=field_options(alias="fadeIn"))
    """Fade-in duration in milliseconds."""
    fade_out: int = field(default=0, metadata=field_options(alias="fadeOut"))
    """Fade-out duration in milliseconds."""
    duration: int | None = None
    """Total duration in milliseconds (playback responses only)."""
    progress: float | None = None
    """Current position, from 0 up to duration (playback responses only)."""

    async def play(self, controller: Controller) -> CommandResult:
        """Trigger this sound on the remote behind ``controller``."""
        return await controller.send_command(Command.SOUND_PLAY, entity_id=self.id)

    async def stop(self, controller: Controller) -> CommandResult:
        """Stop this sound on the remote behind ``controller``."""
        return await controller.send_command(Command.SOUND_STOP, entity_id=self.id)


@dataclass
class Soundboard(KenkuModel):
    """A named group of sound ids."""

    id: str
    title: str
    sounds: list[str] = field(default_factory=list)
    background: str | None = None


@dataclass
class SoundboardGetResponse(KenkuModel):
    """Answer of ``GET /v1/soundboard``."""

    soundboards: list[Soundboard] = field(default_factory=list)
    sounds: list[Sound] = field(default_factory=list)

    def get_sound(self, sound_id: str) -> Sound | None:
        """Return the sound with the given id, if present."""
        for sound in self.sounds:
            if sound.id == sound_id:
                return sound
        return None

    def get_soundboard(self, soundboard_id: str) -> Soundboard | None:
        """Return the soundboard with the given id, if present."""
        for soundboard in self.soundboards:
            if soundboard.id == soundboard_id:
                return soundboard
        return None

    def sounds_for(self, soundboard: Soundboard) -> list[Sound]:
        """Resolve the sound ids of a soundboard, skipping unknown ids."""
        by_id = {sound.id: sound for sound in self.sounds}
        return [by_id[sound_id] for sound_id in soundboard.sounds if sound_id in by_id]


@dataclass
class SoundboardPlayback(KenkuModel):
    """Answer of ``GET /v1/soundboard/playback``: the sounds now playing."""

    sounds: list[Sound] = field(default_factory=list)
