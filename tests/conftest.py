"""Shared fixtures: fake upstreams behind httpx.MockTransport."""

import asyncio
from collections.abc import Callable

import httpx
import pytest

from edge_gateway.config import Settings

Responder = Callable[[httpx.Request], httpx.Response]


class FakeUpstream:
    """Routes outbound requests by host and records every call in order."""

    def __init__(self) -> None:
        self.routes: dict[str, Responder] = {}
        self.calls: list[httpx.Request] = []

    def route(self, host: str, responder: Responder) -> None:
        self.routes[host] = responder

    def json(self, host: str, payload, status_code: int = 200) -> None:
        self.route(host, lambda request: httpx.Response(status_code, json=payload))

    def fail(self, host: str, exc_type: type[httpx.TransportError] = httpx.ConnectError) -> None:
        def responder(request: httpx.Request) -> httpx.Response:
            raise exc_type("upstream down", request=request)

        self.route(host, responder)

    @property
    def hosts(self) -> list[str]:
        return [request.url.host for request in self.calls]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        responder = self.routes.get(request.url.host)
        if responder is None:
            raise httpx.ConnectError("no route to host", request=request)
        return responder(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport())


async def start_trickle_server(interval: float = 0.2, chunks: int = 200) -> tuple[asyncio.AbstractServer, str]:
    """Start a local HTTP server that sends headers, then one body byte per ``interval``.

    Each byte resets a per-read timeout, so only a total deadline ends the call.

    Returns:
        The server and its base URL
    """

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(
                b"HTTP/1.1 200 OK\r\n"
                b"Content-Type: application/json\r\n"
                + f"Content-Length: {chunks}\r\n\r\n".encode()
            )
            for _ in range(chunks):
                await writer.drain()
                await asyncio.sleep(interval)
                writer.write(b" ")
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    return server, f"http://127.0.0.1:{port}"


def invidious_video(index: int, **overrides) -> dict:
    entry = {
        "type": "video",
        "videoId": f"vid{index:08d}",
        "title": f"Video {index}",
        "author": f"Channel {index}",
        "videoThumbnails": [{"url": f"https://i.ytimg.com/vi/{index}/{n}.jpg"} for n in range(6)],
        "lengthSeconds": 60 + index,
        "viewCount": 1000 * index,
    }
    entry.update(overrides)
    return entry


def piped_video(index: int, **overrides) -> dict:
    entry = {
        "type": "stream",
        "url": f"/watch?v=pip{index:08d}",
        "title": f"Piped {index}",
        "uploaderName": f"Uploader {index}",
        "thumbnail": f"https://pipedproxy.test/{index}.jpg",
        "duration": 30 + index,
        "views": 10 * index,
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def gateway_settings() -> Settings:
    """Settings with fake mirrors and a small allowlist."""
    return Settings(
        allowed_domains=("i.ytimg.com", "inv-a.test"),
        allowed_exact_hosts=("maps.example.com",),
        invidious_instances=("https://inv-a.test", "https://inv-b.test"),
        piped_instances=("https://piped-a.test",),
        embed_base_url="https://embed.test",
        cors_allow_origins=("*",),
    )
