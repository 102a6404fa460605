"""Command-line interface for remote controlling Kenku FM."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

import aioconsole

from aiokenku.controller import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT, Controller
from aiokenku.exceptions import KenkuError
from aiokenku.models import CommandResult, KenkuState, PlaylistPlayback, RepeatMode

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands:\n"
    "  playlists, tracks [playlist-id], soundboards, sounds [soundboard-id]\n"
    "  play <track-or-playlist-id>, sound <id>, stop <id>\n"
    "  status, resume, pause, next, prev\n"
    "  vol <0..1>, mute, unmute, shuffle on|off, repeat track|playlist|off\n"
    "  help, quit(q)"
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the Kenku remote."""
    parser = argparse.ArgumentParser(description="Remote control Kenku FM")
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help="Address the Kenku Remote listens on",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help="Port of the Kenku Remote",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Timeout per request in seconds",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level to use",
    )
    return parser.parse_args(argv)


def describe_playback(playback: PlaylistPlayback) -> str:
    """Return a human-friendly description of the playlist player."""
    lines: list[str] = []
    if playback.track is not None:
        lines.append(f"Now playing: {playback.track.title}")
        if playback.track.duration:
            progress = (playback.track.progress or 0) // 1000
            lines.append(f"Progress: {progress} / {playback.track.duration // 1000} s")
    if playback.playlist is not None:
        lines.append(f"Playlist: {playback.playlist.title}")
    vol_line = f"Volume: {round(playback.volume * 100)}%"
    if playback.muted:
        vol_line += " (muted)"
    lines.append(vol_line)
    lines.append(f"Shuffle: {'on' if playback.shuffle else 'off'}")
    lines.append(f"Repeat: {playback.repeat.value}")
    lines.append(f"State: {'playing' if playback.playing else 'paused'}")
    return "\n".join(lines)


async def handle_command(controller: Controller, line: str) -> bool:
    """Run one command line against the remote.

    Returns False when the user asked to quit.
    """
    parts = line.split()
    if not parts:
        return True
    keyword = parts[0].lower()
    args = parts[1:]

    if keyword in {"quit", "exit", "q"}:
        return False
    if keyword == "help":
        _print_event(HELP_TEXT)
    elif keyword == "playlists":
        await _list_playlists(controller)
    elif keyword == "tracks":
        await _list_tracks(controller, args[0] if args else None)
    elif keyword == "soundboards":
        await _list_soundboards(controller)
    elif keyword == "sounds":
        await _list_sounds(controller, args[0] if args else None)
    elif keyword == "play" and args:
        await _play(controller, args[0])
    elif keyword in {"sound", "stop"} and args:
        await _sound(controller, args[0], stop=keyword == "stop")
    elif keyword == "status":
        _print_event(describe_playback(await controller.get_playlist_playback()))
    elif keyword == "resume":
        _report(await controller.playback_play())
    elif keyword == "pause":
        _report(await controller.playback_pause())
    elif keyword == "next":
        _report(await controller.playback_next())
    elif keyword in {"prev", "previous"}:
        _report(await controller.playback_previous())
    elif keyword in {"mute", "unmute"}:
        _report(await controller.playback_mute(keyword == "mute"))
    elif keyword in {"vol", "volume"} and len(args) == 1:
        try:
            volume = float(args[0])
            result = await controller.playback_volume(volume)
        except ValueError as err:
            _print_event(f"Invalid volume: {err}")
            return True
        _report(result)
    elif keyword == "shuffle" and args and args[0].lower() in {"on", "off"}:
        _report(await controller.playback_shuffle(args[0].lower() == "on"))
    elif keyword == "repeat" and len(args) == 1:
        try:
            mode = RepeatMode(args[0].lower())
        except ValueError:
            _print_event("Usage: repeat track|playlist|off")
            return True
        _report(await controller.playback_repeat(mode))
    else:
        _print_event("Unknown command, type 'help' for a list")
    return True


async def _list_playlists(controller: Controller) -> None:
    response = await controller.get_playlist()
    if not response.playlists:
        _print_event("No playlists")
    for playlist in response.playlists:
        _print_event(f"{playlist.id}  {playlist.title} ({len(playlist.tracks)} tracks)")


async def _list_tracks(controller: Controller, playlist_id: str | None) -> None:
    response = await controller.get_playlist()
    tracks = response.tracks
    if playlist_id is not None:
        playlist = response.get_playlist(playlist_id)
        if playlist is None:
            _print_event(f"No playlist with id {playlist_id}")
            return
        tracks = response.tracks_for(playlist)
    for track in tracks:
        _print_event(f"{track.id}  {track.title}")


async def _list_soundboards(controller: Controller) -> None:
    response = await controller.get_soundboard()
    if not response.soundboards:
        _print_event("No soundboards")
    for soundboard in response.soundboards:
        _print_event(f"{soundboard.id}  {soundboard.title} ({len(soundboard.sounds)} sounds)")


async def _list_sounds(controller: Controller, soundboard_id: str | None) -> None:
    response = await controller.get_soundboard()
    sounds = response.sounds
    if soundboard_id is not None:
        soundboard = response.get_soundboard(soundboard_id)
        if soundboard is None:
            _print_event(f"No soundboard with id {soundboard_id}")
            return
        sounds = response.sounds_for(soundboard)
    for sound in sounds:
        _print_event(f"{sound.id}  {sound.title}{' (loop)' if sound.loop else ''}")


async def _play(controller: Controller, entity_id: str) -> None:
    response = await controller.get_playlist()
    playlist = response.get_playlist(entity_id)
    if playlist is not None:
        _report(await playlist.play(controller))
        return
    track = response.get_track(entity_id)
    if track is None:
        _print_event(f"No track or playlist with id {entity_id}")
        return
    _report(await track.play(controller))


async def _sound(controller: Controller, sound_id: str, *, stop: bool) -> None:
    response = await controller.get_soundboard()
    sound = response.get_sound(sound_id)
    if sound is None:
        _print_event(f"No sound with id {sound_id}")
        return
    _report(await (sound.stop(controller) if stop else sound.play(controller)))


def _report(result: CommandResult) -> None:
    _print_event(f"OK ({result.status})" if result.status else "OK")


async def _command_loop(controller: Controller) -> None:
    while True:
        try:
            line = await aioconsole.ainput("kenku> ")
        except EOFError:
            break
        try:
            if not await handle_command(controller, line.strip()):
                break
        except KenkuError as err:
            logger.warning("Command %r failed: %s", line.strip(), err)
            _print_event(f"Error: {err}")


async def main_async(argv: Sequence[str] | None = None) -> int:
    """Entry point executing the asynchronous CLI workflow."""
    args = parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=getattr(logging, args.log_level))

    async with Controller(args.host, args.port, timeout=args.timeout) as controller:
        state = await controller.check_state()
        if state is KenkuState.OFFLINE:
            _print_event(
                f"Kenku Remote at {controller.base_url} is offline. "
                "Start Kenku FM and enable its Remote."
            )
            return 1
        _print_event(f"Connected to Kenku Remote at {controller.base_url}")
        _print_event(HELP_TEXT)
        try:
            await _command_loop(controller)
        except asyncio.CancelledError:
            logger.debug("Command loop cancelled")
            raise
    return 0


def _print_event(message: str) -> None:
    print(message, flush=True)  # noqa: T201


def main() -> int:
    """Run the CLI."""
    try:
        return asyncio.run(main_async(sys.argv[1:]))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
