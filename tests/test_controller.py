"""Tests for the Kenku Controller."""

import asyncio

import pytest
from aiohttp import ClientSession, web
from aiohttp.test_utils import TestServer, unused_port

from aiokenku import (
    KENKU_ROUTES,
    Controller,
    KenkuConnectionError,
    KenkuDecodeError,
    KenkuError,
    KenkuRequestError,
    RepeatMode,
    Sound,
)

from .conftest import (
    PLAYBACK_PAYLOAD,
    PLAYLIST_PAYLOAD,
    SOUNDBOARD_PAYLOAD,
    MockRemote,
)


class TestControllerConstruction:
    """Tests for creating a Controller."""

    def test_defaults(self) -> None:
        """Test the default address points at a local Kenku Remote."""
        controller = Controller()
        assert controller.host == "127.0.0.1"
        assert controller.port == 3333
        assert controller.base_url == "http://127.0.0.1:3333"
        assert controller.routes is KENKU_ROUTES
        assert controller.timeout == 5.0

    def test_no_io_on_construction(self) -> None:
        """Test construction succeeds for an unresolvable host and opens nothing."""
        controller = Controller("kenku.invalid", "1")
        assert controller.port == "1"
        assert controller.base_url == "http://kenku.invalid:1"
        assert controller._session is None

    def test_ipv6_host(self) -> None:
        """Test IPv6 literals are bracketed."""
        assert Controller("::1", 3333).base_url == "http://[::1]:3333"

    @pytest.mark.asyncio
    async def test_shared_session_is_not_closed(self, remote: MockRemote) -> None:
        """Test a caller supplied session survives the controller."""
        remote.reply_json("GET", "/v1/soundboard", {"soundboards": [], "sounds": []})
        async with ClientSession() as session:
            async with Controller(remote.host, remote.port, session=session) as controller:
                await controller.get_soundboard()
            assert session.closed is False


class TestQueries:
    """Tests for the GET operations."""

    @pytest.mark.asyncio
    async def test_get_playlist(self, remote: MockRemote, controller: Controller) -> None:
        """Test every track is returned in the order received."""
        remote.reply_json("GET", "/v1/playlist", PLAYLIST_PAYLOAD)
        response = await controller.get_playlist()
        assert len(response.tracks) == 3
        assert [t.id for t in response.tracks] == ["t1", "t2", "t3"]
        assert [r.method for r in remote.requests] == ["GET"]

    @pytest.mark.asyncio
    async def test_get_empty_soundboard(self, remote: MockRemote, controller: Controller) -> None:
        """Test an empty soundboard is a result, not an error."""
        remote.reply_json("GET", "/v1/soundboard", {"soundboards": [], "sounds": []})
        response = await controller.get_soundboard()
        assert response.sounds == []
        assert response.soundboards == []

    @pytest.mark.asyncio
    async def test_get_soundboard(self, remote: MockRemote, controller: Controller) -> None:
        """Test soundboards and sounds are decoded."""
        remote.reply_json("GET", "/v1/soundboard", SOUNDBOARD_PAYLOAD)
        response = await controller.get_soundboard()
        assert [s.title for s in response.sounds] == ["Sword Clash", "Rain"]

    @pytest.mark.asyncio
    async def test_get_playlist_playback(
        self, remote: MockRemote, controller: Controller
    ) -> None:
        """Test the playlist player state is decoded."""
        remote.reply_json("GET", "/v1/playlist/playback", PLAYBACK_PAYLOAD)
        playback = await controller.get_playlist_playback()
        assert playback.repeat is RepeatMode.PLAYLIST
        assert playback.track is not None
        assert playback.track.title == "Lute Song"

    @pytest.mark.asyncio
    async def test_get_soundboard_playback(
        self, remote: MockRemote, controller: Controller
    ) -> None:
        """Test the playing sounds are decoded."""
        remote.reply_json(
            "GET",
            "/v1/soundboard/playback",
            {"sounds": [{**SOUNDBOARD_PAYLOAD["sounds"][1], "duration": 5000, "progress": 1.5}]},
        )
        playback = await controller.get_soundboard_playback()
        assert len(playback.sounds) == 1
        assert playback.sounds[0].progress == 1.5


class TestErrors:
    """Tests for the error taxonomy."""

    @pytest.mark.asyncio
    async def test_unreachable_remote(self) -> None:
        """Test a closed port raises a connection error."""
        async with Controller("127.0.0.1", unused_port(), timeout=2.0) as controller:
            with pytest.raises(KenkuConnectionError) as exc_info:
                await controller.get_playlist()
        assert not isinstance(exc_info.value, KenkuDecodeError)
        assert exc_info.value.url is not None
        assert exc_info.value.url.endswith("/v1/playlist")

    @pytest.mark.asyncio
    async def test_non_json_body(self, remote: MockRemote, controller: Controller) -> None:
        """Test a non JSON body raises a decode error."""
        remote.reply_raw("GET", "/v1/playlist", "<html>Kenku</html>", content_type="text/html")
        with pytest.raises(KenkuDecodeError) as exc_info:
            await controller.get_playlist()
        assert not isinstance(exc_info.value, KenkuConnectionError)
        assert exc_info.value.body == "<html>Kenku</html>"

    @pytest.mark.asyncio
    async def test_json_array_body(self, remote: MockRemote, controller: Controller) -> None:
        """Test a JSON body that is not an object raises a decode error."""
        remote.reply_json("GET", "/v1/playlist", [1, 2, 3])
        with pytest.raises(KenkuDecodeError, match="Expected a JSON object"):
            await controller.get_playlist()

    @pytest.mark.asyncio
    async def test_schema_violation(self, remote: MockRemote, controller: Controller) -> None:
        """Test a payload missing required fields raises a decode error."""
        remote.reply_json("GET", "/v1/playlist", {"tracks": [{"title": "No id"}]})
        with pytest.raises(KenkuDecodeError, match="PlaylistGetResponse"):
            await controller.get_playlist()

    @pytest.mark.asyncio
    async def test_error_status(self, remote: MockRemote, controller: Controller) -> None:
        """Test a non-2xx answer raises a request error."""
        remote.reply_json("PUT", "/v1/soundboard/play", {"error": "unknown id"}, status=404)
        ghost = Sound.from_dict({"id": "zzz", "title": "Ghost"})
        with pytest.raises(KenkuRequestError) as exc_info:
            await ghost.play(controller)
        assert exc_info.value.status == 404
        assert "unknown id" in (exc_info.value.body or "")

    @pytest.mark.asyncio
    async def test_unknown_route_is_request_error(
        self, remote: MockRemote, controller: Controller
    ) -> None:
        """Test the mock's 404 for unregistered routes maps to a request error."""
        with pytest.raises(KenkuRequestError) as exc_info:
            await controller.get_soundboard()
        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_invalid_command_json(self, remote: MockRemote, controller: Controller) -> None:
        """Test a command body declared as JSON must parse."""
        remote.reply_raw(
            "PUT", "/v1/playlist/playback/pause", "{oops", content_type="application/json"
        )
        with pytest.raises(KenkuDecodeError):
            await controller.playback_pause()

    @pytest.mark.asyncio
    async def test_timeout_is_connection_error(self) -> None:
        """Test a remote that stalls past the timeout raises a connection error."""

        async def stall(_request: web.Request) -> web.Response:
            await asyncio.sleep(2)
            return web.json_response({})

        app = web.Application()
        app.router.add_get("/v1/playlist", stall)
        server = TestServer(app)
        await server.start_server()
        try:
            async with Controller(server.host, server.port, timeout=0.2) as controller:
                with pytest.raises(KenkuConnectionError) as exc_info:
                    await controller.get_playlist()
        finally:
            await server.close()
        assert isinstance(exc_info.value.__cause__, TimeoutError)
        assert "Timed out" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_all_errors_share_base(self) -> None:
        """Test callers can catch every failure with KenkuError."""
        async with Controller("127.0.0.1", unused_port(), timeout=2.0) as controller:
            with pytest.raises(KenkuError):
                await controller.playback_next()
