# src/playlist_export/exporter/client.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx

import playlist_export.config  # noqa: F401 - load .env early
from playlist_export.config import (
    DEFAULT_MAX_PAGES,
    DEFAULT_PLAYLIST_PAGE_DELAY,
    DEFAULT_TIMEOUT,
    DEFAULT_TRACK_PAGE_DELAY,
)
from playlist_export.exporter.errors import DecodeError, PaginationError, RequestError
from playlist_export.exporter.models import (
    Page,
    Playlist,
    TrackEntry,
    decode_page,
    playlist_from_raw,
    track_entry_from_raw,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[Any]]


class CatalogClient:
    """Authenticated HTTP client for the catalog service's paged collections.

    The underlying httpx client is shared by every request of a run and is
    never reconfigured after construction.
    """

    def __init__(
        self,
        auth_token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_pages: int = DEFAULT_MAX_PAGES,
        http_client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if not auth_token:
            msg = "auth_token must not be empty."
            raise ValueError(msg)
        if max_pages < 1:
            msg = "max_pages must be >= 1."
            raise ValueError(msg)

        self._auth_token = auth_token
        self._max_pages = max_pages
        self._sleep = sleep
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.aclose()

    async def get_page(self, url: str, decode_item: Callable[[Any], T]) -> Page[T]:
        """Fetch and decode a single page.

        The body is read in full as text first so that a decoding failure can
        report the raw payload.

        Raises:
            RequestError: The response status is outside the 2xx range.
            DecodeError: The body is not a valid page envelope.
        """
        response = await self._client.get(
            url,
            headers={"Authorization": f"Bearer {self._auth_token}"},
        )
        body = response.text

        if not response.is_success:
            logger.error("HTTP %s for %s: %s", response.status_code, url, body)
            raise RequestError(response.status_code, body, url)

        try:
            page = decode_page(body, decode_item)
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Deserialization error for %s: %s", url, exc)
            logger.error("Response body: %s", body)
            raise DecodeError(exc, body, url) from exc

        logger.debug(
            "Fetched %s items from %s (next=%s).",
            len(page.items),
            url,
            page.next,
        )
        return page

    async def fetch_all(
        self,
        start_url: str,
        decode_item: Callable[[Any], T],
        *,
        delay: float,
    ) -> list[T]:
        """Follow the continuation cursor from `start_url` and collect all items.

        Items keep server order; pages are concatenated in visiting order.
        `delay` seconds are slept between pages, never after the last one.

        Raises:
            RequestError, DecodeError: Propagated from `get_page`.
            PaginationError: A cursor was seen twice or the page ceiling
                was reached.
        """
        items: list[T] = []
        visited: set[str] = set()
        pending: str | None = start_url

        while pending is not None:
            if pending in visited or len(visited) >= self._max_pages:
                logger.error(
                    "Refusing to fetch %s after %s pages (repeated cursor or "
                    "page limit %s reached).",
                    pending,
                    len(visited),
                    self._max_pages,
                )
                raise PaginationError(pending, len(visited))
            visited.add(pending)

            page = await self.get_page(pending, decode_item)
            items.extend(page.items)
            pending = page.next

            if pending is not None:
                logger.debug("Sleeping %.1fs before fetching %s.", delay, pending)
                await self._sleep(delay)

        return items

    async def fetch_playlists(
        self,
        url: str,
        *,
        delay: float = DEFAULT_PLAYLIST_PAGE_DELAY,
    ) -> list[Playlist]:
        """Fetch the full playlist collection starting at `url`."""
        return await self.fetch_all(url, playlist_from_raw, delay=delay)

    async def fetch_playlist_tracks(
        self,
        url: str,
        *,
        delay: float = DEFAULT_TRACK_PAGE_DELAY,
    ) -> list[TrackEntry]:
        """Fetch every track entry of one playlist's track collection."""
        return await self.fetch_all(url, track_entry_from_raw, delay=delay)
