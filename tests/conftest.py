"""Test fixtures for aiokenku tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Any

import orjson
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from aiokenku import Controller


@dataclass
class RecordedRequest:
    """A request received by the mock remote."""

    method: str
    path: str
    body: Any


@dataclass
class _Reply:
    status: int
    body: str
    content_type: str


class MockRemote:
    """Minimal stand-in for the Kenku FM Remote HTTP server.

    Unregistered routes answer 404.
    """

    def __init__(self) -> None:
        """Create the aiohttp application."""
        self.requests: list[RecordedRequest] = []
        self._replies: dict[tuple[str, str], _Reply] = {}
        self.app = web.Application()
        self.app.router.add_route("*", "/{tail:.*}", self._handle)
        self.host = "127.0.0.1"
        self.port = 0

    def reply_json(self, method: str, path: str, data: Any, status: int = 200) -> None:
        """Answer ``method path`` with a JSON body."""
        self._replies[(method, path)] = _Reply(
            status=status, body=orjson.dumps(data).decode(), content_type="application/json"
        )

    def reply_raw(
        self,
        method: str,
        path: str,
        body: str,
        status: int = 200,
        content_type: str = "text/plain",
    ) -> None:
        """Answer ``method path`` with an arbitrary body."""
        self._replies[(method, path)] = _Reply(
            status=status, body=body, content_type=content_type
        )

    def requests_to(self, path: str) -> list[RecordedRequest]:
        """Return the recorded requests for a path."""
        return [request for request in self.requests if request.path == path]

    async def _handle(self, request: web.Request) -> web.Response:
        raw = await request.read()
        body = orjson.loads(raw) if raw else None
        self.requests.append(RecordedRequest(request.method, request.path, body))
        reply = self._replies.get((request.method, request.path))
        if reply is None:
            return web.Response(status=404, text="Not Found")
        return web.Response(
            status=reply.status, text=reply.body, content_type=reply.content_type
        )


PLAYLIST_PAYLOAD: dict[str, Any] = {
    "playlists": [
        {
            "id": "p1",
            "title": "Tavern",
            "tracks": ["t2", "t1", "missing"],
            "background": "https://example.com/tavern.jpg",
        },
        {"id": "p2", "title": "Dungeon", "tracks": []},
    ],
    "tracks": [
        {"id": "t1", "title": "Lute Song", "url": "https://example.com/lute.mp3"},
        {"id": "t2", "title": "Crowd Noise", "url": "https://example.com/crowd.mp3"},
        {"id": "t3", "title": "Dripping Water", "url": "https://example.com/drip.mp3"},
    ],
}

SOUNDBOARD_PAYLOAD: dict[str, Any] = {
    "soundboards": [
        {"id": "sb1", "title": "Combat", "sounds": ["s2", "s1"], "background": ""},
    ],
    "sounds": [
        {
            "id": "s1",
            "title": "Sword Clash",
            "url": "https://example.com/sword.mp3",
            "loop": False,
            "volume": 0.8,
            "fadeIn": 0,
            "fadeOut": 200,
        },
        {
            "id": "s2",
            "title": "Rain",
            "url": "https://example.com/rain.mp3",
            "loop": True,
            "volume": 0.5,
            "fadeIn": 1000,
            "fadeOut": 1000,
        },
    ],
}

PLAYBACK_PAYLOAD: dict[str, Any] = {
    "playing": True,
    "volume": 0.75,
    "muted": False,
    "shuffle": False,
    "repeat": "playlist",
    "track": {
        "id": "t1",
        "url": "https://example.com/lute.mp3",
        "title": "Lute Song",
        "duration": 180000,
        "progress": 42000,
    },
    "playlist": {"id": "p1", "title": "Tavern"},
}


@pytest.fixture
async def remote() -> AsyncGenerator[MockRemote, None]:
    """Fixture providing a running mock Kenku Remote."""
    mock = MockRemote()
    server = TestServer(mock.app)
    await server.start_server()
    mock.host = server.host
    assert server.port is not None
    mock.port = server.port
    yield mock
    await server.close()


@pytest.fixture
async def controller(remote: MockRemote) -> AsyncGenerator[Controller, None]:
    """Fixture providing a controller pointed at the mock remote."""
    async with Controller(remote.host, remote.port) as ctrl:
        yield ctrl
