"""Controller talking to the Kenku FM Remote over HTTP."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any, NamedTuple, Self, TypeVar

import orjson
from aiohttp import ClientError, ClientSession, ClientTimeout
from mashumaro.exceptions import InvalidFieldValue, MissingField

from aiokenku.exceptions import KenkuConnectionError, KenkuDecodeError, KenkuRequestError
from aiokenku.models import (
    CommandResult,
    KenkuModel,
    KenkuState,
    PlaylistGetResponse,
    PlaylistPlayback,
    RepeatMode,
    SoundboardGetResponse,
    SoundboardPlayback,
)
from aiokenku.routes import KENKU_ROUTES, Command, Route, Routes

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3333
DEFAULT_TIMEOUT = 5.0

ModelT = TypeVar("ModelT", bound=KenkuModel)


class Controller:
    """Async client for a single Kenku FM Remote.

    The controller only holds the address of the remote. Nothing is contacted
    until the first request, so creating one never blocks or fails. Every
    method performs a single HTTP round trip and may be awaited concurrently.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int | str = DEFAULT_PORT,
        *,
        routes: Routes | None = None,
        session: ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Create a controller for the remote at ``host``:``port``.

        Args:
            host: Hostname or IP address the Remote listens on.
            port: Port of the Remote, as int or string.
            routes: Endpoint table to use instead of the Kenku v1 API.
            session: Shared aiohttp session. It is not closed by the controller.
            timeout: Total timeout per request in seconds.
        """
        self._host = host
        self._port = port
        self._routes = routes if routes is not None else KENKU_ROUTES
        self._session = session
        self._owns_session = session is None
        self._timeout = timeout

    # ---------------------------------------------------------------------
    # Properties
    # ---------------------------------------------------------------------
    @property
    def host(self) -> str:
        """Return the host of the remote."""
        return self._host

    @property
    def port(self) -> int | str:
        """Return the port of the remote."""
        return self._port

    @property
    def routes(self) -> Routes:
        """Return the endpoint table in use."""
        return self._routes

    @property
    def timeout(self) -> float:
        """Return the per-request timeout in seconds."""
        return self._timeout

    @property
    def base_url(self) -> str:
        """Return the root URL of the remote."""
        host_fmt = f"[{self._host}]" if ":" in self._host else self._host
        return f"http://{host_fmt}:{self._port}"

    # ---------------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------------
    async def get_playlist(self) -> PlaylistGetResponse:
        """Return all playlists and tracks known to the remote."""
        return await self._fetch(Command.PLAYLIST, PlaylistGetResponse)

    async def get_playlist_playback(self) -> PlaylistPlayback:
        """Return the state of the playlist player."""
        return await self._fetch(Command.PLAYLIST_PLAYBACK, PlaylistPlayback)

    async def get_soundboard(self) -> SoundboardGetResponse:
        """Return all soundboards and sounds known to the remote."""
        return await self._fetch(Command.SOUNDBOARD, SoundboardGetResponse)

    async def get_soundboard_playback(self) -> SoundboardPlayback:
        """Return the sounds that are currently playing."""
        return await self._fetch(Command.SOUNDBOARD_PLAYBACK, SoundboardPlayback)

    async def check_state(self) -> KenkuState:
        """Probe the remote and report whether it answers at all.

        Any HTTP answer counts as online. Transport failures are reported as
        offline instead of being raised.
        """
        route = self._routes.resolve(Command.STATUS)
        try:
            await self._request(route)
        except KenkuConnectionError as err:
            logger.debug("Kenku Remote at %s is offline: %s", self.base_url, err)
            return KenkuState.OFFLINE
        except KenkuRequestError as err:
            logger.debug("Kenku Remote at %s answered the probe with %s", self.base_url, err.status)
        return KenkuState.ONLINE

    # ---------------------------------------------------------------------
    # Playlist playback commands
    # ---------------------------------------------------------------------
    async def playback_play(self) -> CommandResult:
        """Resume the playlist player."""
        return await self.send_command(Command.PLAYBACK_PLAY)

    async def playback_pause(self) -> CommandResult:
        """Pause the playlist player."""
        return await self.send_command(Command.PLAYBACK_PAUSE)

    async def playback_next(self) -> CommandResult:
        """Skip to the next track."""
        return await self.send_command(Command.PLAYBACK_NEXT)

    async def playback_previous(self) -> CommandResult:
        """Go back to the previous track."""
        return await self.send_command(Command.PLAYBACK_PREVIOUS)

    async def playback_mute(self, mute: bool) -> CommandResult:
        """Mute or unmute the playlist player."""
        return await self.send_command(Command.PLAYBACK_MUTE, payload={"mute": mute})

    async def playback_volume(self, volume: float) -> CommandResult:
        """Set the playlist volume, between 0.0 and 1.0."""
        if not 0.0 <= volume <= 1.0:
            raise ValueError(f"Volume must be between 0 and 1, got {volume}")
        return await self.send_command(Command.PLAYBACK_VOLUME, payload={"volume": volume})

    async def playback_shuffle(self, shuffle: bool) -> CommandResult:
        """Enable or disable shuffle."""
        return await self.send_command(Command.PLAYBACK_SHUFFLE, payload={"shuffle": shuffle})

    async def playback_repeat(self, repeat: RepeatMode | str) -> CommandResult:
        """Set the repeat mode (``track``, ``playlist`` or ``off``)."""
        mode = RepeatMode(repeat)
        return await self.send_command(Command.PLAYBACK_REPEAT, payload={"repeat": mode.value})

    async def send_command(
        self,
        command: Command,
        *,
        entity_id: str | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> CommandResult:
        """Send a command and return the remote's answer.

        The entity id is placed in the path when the route has an ``{id}``
        placeholder and in the JSON body otherwise.
        """
        route = self._routes.resolve(command)
        response = await self._request(route, entity_id=entity_id, payload=payload)
        return CommandResult(status_code=response.status, payload=_decode_command_body(response))

    async def close(self) -> None:
        """Close the HTTP session if the controller created it."""
        if self._owns_session and self._session is not None:
            logger.info("Closing HTTP session for Kenku Remote at %s", self.base_url)
            await self._session.close()
            self._session = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_session(self) -> ClientSession:
        if self._session is None:
            logger.info("Opening HTTP session for Kenku Remote at %s", self.base_url)
            self._session = ClientSession()
        return self._session

    async def _request(
        self,
        route: Route,
        *,
        entity_id: str | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> _RawResponse:
        url = self.base_url + route.format_path(entity_id)
        body: dict[str, Any] = dict(payload) if payload else {}
        if entity_id is not None and not route.takes_id_in_path:
            body["id"] = entity_id

        kwargs: dict[str, Any] = {"timeout": ClientTimeout(total=self._timeout)}
        if body:
            kwargs["data"] = orjson.dumps(body)
            kwargs["headers"] = {"Content-Type": "application/json"}

        logger.debug("%s %s %s", route.method, url, body or "")
        session = self._get_session()
        try:
            async with session.request(route.method, url, **kwargs) as response:
                raw = await response.read()
                status = response.status
                reason = response.reason
                content_type = response.content_type
        except TimeoutError as err:
            raise KenkuConnectionError(f"Timed out talking to {url}", url=url) from err
        except ClientError as err:
            raise KenkuConnectionError(
                f"Could not reach Kenku Remote at {url}: {err}", url=url
            ) from err

        logger.debug("%s %s -> %s", route.method, url, status)
        if not 200 <= status < 300:
            raise KenkuRequestError(
                status, reason, url=url, body=raw.decode("utf-8", "replace")
            )
        return _RawResponse(status=status, content_type=content_type, body=raw, url=url)

    async def _fetch(self, command: Command, model: type[ModelT]) -> ModelT:
        response = await self._request(self._routes.resolve(command))
        data = _decode_object(response)
        try:
            return model.from_dict(data)
        except (MissingField, InvalidFieldValue, ValueError, TypeError) as err:
            raise KenkuDecodeError(
                f"Unexpected {model.__name__} payload from {response.url}: {err}",
                url=response.url,
                body=response.text,
            ) from err

    async def __aenter__(self) -> Self:
        """Enter the async context manager returning this instance."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the session when leaving the async context manager."""
        await self.close()


class _RawResponse(NamedTuple):
    """Successful response read off the wire."""

    status: int
    content_type: str
    body: bytes
    url: str

    @property
    def text(self) -> str:
        """Return the body decoded as UTF-8, replacing invalid bytes."""
        return self.body.decode("utf-8", "replace")


def _decode_object(response: _RawResponse) -> dict[str, Any]:
    """Parse a body that must be a JSON object."""
    try:
        data = orjson.loads(response.body)
    except orjson.JSONDecodeError as err:
        raise KenkuDecodeError(
            f"Invalid JSON from {response.url}: {err}", url=response.url, body=response.text
        ) from err
    if not isinstance(data, dict):
        raise KenkuDecodeError(
            f"Expected a JSON object from {response.url}, got {type(data).__name__}",
            url=response.url,
            body=response.text,
        )
    return data


def _decode_command_body(response: _RawResponse) -> dict[str, Any] | None:
    """Parse the optional JSON body of a command response.

    Empty and non-JSON bodies carry no payload. A body declared as JSON must
    still parse. Remotes that send a JSON object under another content type
    are decoded as well.
    """
    body = response.body.strip()
    if not body:
        return None
    if response.content_type.endswith("json"):
        return _decode_object(response)
    if body.startswith(b"{"):
        try:
            data = orjson.loads(body)
        except orjson.JSONDecodeError:
            data = None
        if isinstance(data, dict):
            return data
    logger.debug("Ignoring %s body from %s", response.content_type, response.url)
    return None
