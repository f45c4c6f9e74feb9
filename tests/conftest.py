"""Shared fixtures: raw API documents and a scripted fake catalog service."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio

from playlist_export.exporter.client import CatalogClient

API = "https://api.example.test/v1"


def raw_track(**overrides: Any) -> dict[str, Any]:
    track: dict[str, Any] = {
        "uri": "spotify:track:t1",
        "name": "Song A",
        "artists": [{"uri": "spotify:artist:a1", "name": "Alice"}],
        "album": {
            "uri": "spotify:album:al1",
            "name": "Album A",
            "release_date": "2020-05-01",
            "artists": [{"uri": "spotify:artist:a1", "name": "Alice"}],
            "images": [{"url": "https://img.example.test/1.jpg"}],
            "disc_number": 1,
            "track_number": 3,
        },
        "duration_ms": 215000,
        "popularity": 42,
        "isrc": "USABC2000001",
        "preview_url": "https://p.example.test/1.mp3",
        "explicit": True,
    }
    track.update(overrides)
    return track


def raw_playlist(name: str, href: str, owner: str = "Dana") -> dict[str, Any]:
    return {
        "name": name,
        "owner": {"display_name": owner},
        "tracks": {"href": href, "total": 0},
    }


def page(items: list[Any], next_url: str | None = None) -> dict[str, Any]:
    return {"items": items, "next": next_url}


class FakeService:
    """Serves scripted responses by URL and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def add_json(self, url: str, payload: Any, status: int = 200) -> None:
        self.routes[url] = httpx.Response(status, json=payload)

    def add_text(self, url: str, body: str, status: int = 200) -> None:
        self.routes[url] = httpx.Response(status, text=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get(str(request.url))
        if response is None:
            return httpx.Response(404, text=f"no route for {request.url}")
        return response

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest_asyncio.fixture
async def client(
    service: FakeService,
    sleeps: SleepRecorder,
) -> AsyncIterator[CatalogClient]:
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(service.handler),
    ) as http_client:
        yield CatalogClient("test-token", http_client=http_client, sleep=sleeps)
