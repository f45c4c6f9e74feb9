# src/playlist_export/exporter/models.py

"""Decoded shapes of the catalog service's playlist and track documents."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class Artist:
    uri: str | None = None
    name: str | None = None


@dataclass(slots=True)
class Image:
    url: str


@dataclass(slots=True)
class Album:
    uri: str | None = None
    name: str | None = None
    release_date: str | None = None
    artists: list[Artist] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    disc_number: int | None = None
    track_number: int | None = None


@dataclass(slots=True)
class Track:
    """A single catalog track. Everything but artists and album may be absent."""

    album: Album
    artists: list[Artist] = field(default_factory=list)
    uri: str | None = None
    name: str | None = None
    duration_ms: int | None = None
    popularity: int | None = None
    isrc: str | None = None
    preview_url: str | None = None
    explicit: bool | None = None


@dataclass(slots=True)
class TrackEntry:
    """One slot of a playlist. `track` is None for removed/unavailable items."""

    track: Track | None = None


@dataclass(slots=True)
class Playlist:
    name: str
    owner_display_name: str
    track_collection_ref: str


@dataclass(slots=True)
class Page(Generic[T]):
    """One page of a paginated collection; `next` is None on the last page."""

    items: list[T]
    next: str | None = None


def _mapping(raw: Any, what: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        msg = f"Expected {what} object, got {type(raw).__name__}."
        raise TypeError(msg)
    return raw


def _sequence(raw: Any, what: str) -> list[Any]:
    if not isinstance(raw, list):
        msg = f"Expected {what} array, got {type(raw).__name__}."
        raise TypeError(msg)
    return raw


def _string(raw: Any, what: str) -> str:
    if not isinstance(raw, str):
        msg = f"Expected {what} string, got {type(raw).__name__}."
        raise TypeError(msg)
    return raw


def _optional(raw: dict[str, Any], key: str, kind: type) -> Any:
    """Read an optional key; missing and null both mean absent.

    Integers must be non-negative and booleans are not accepted as integers.
    """
    value = raw.get(key)
    if value is None:
        return None
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"Expected {key} integer, got {type(value).__name__}."
            raise TypeError(msg)
        if value < 0:
            msg = f"Expected non-negative {key}, got {value}."
            raise ValueError(msg)
        return value
    if not isinstance(value, kind):
        msg = f"Expected {key} {kind.__name__}, got {type(value).__name__}."
        raise TypeError(msg)
    return value


def artist_from_raw(raw: Any) -> Artist:
    raw = _mapping(raw, "artist")
    return Artist(uri=_optional(raw, "uri", str), name=_optional(raw, "name", str))


def image_from_raw(raw: Any) -> Image:
    raw = _mapping(raw, "image")
    return Image(url=_string(raw["url"], "image url"))


def album_from_raw(raw: Any) -> Album:
    raw = _mapping(raw, "album")
    return Album(
        uri=_optional(raw, "uri", str),
        name=_optional(raw, "name", str),
        release_date=_optional(raw, "release_date", str),
        artists=[artist_from_raw(a) for a in _sequence(raw["artists"], "artists")],
        images=[image_from_raw(i) for i in _sequence(raw["images"], "images")],
        disc_number=_optional(raw, "disc_number", int),
        track_number=_optional(raw, "track_number", int),
    )


def track_from_raw(raw: Any) -> Track:
    """Convert a raw track JSON dict into a Track instance."""
    raw = _mapping(raw, "track")
    return Track(
        uri=_optional(raw, "uri", str),
        name=_optional(raw, "name", str),
        artists=[artist_from_raw(a) for a in _sequence(raw["artists"], "artists")],
        album=album_from_raw(raw["album"]),
        duration_ms=_optional(raw, "duration_ms", int),
        popularity=_optional(raw, "popularity", int),
        isrc=_optional(raw, "isrc", str),
        preview_url=_optional(raw, "preview_url", str),
        explicit=_optional(raw, "explicit", bool),
    )


def track_entry_from_raw(raw: Any) -> TrackEntry:
    raw = _mapping(raw, "playlist item")
    track = raw.get("track")
    return TrackEntry(track=track_from_raw(track) if track is not None else None)


def playlist_from_raw(raw: Any) -> Playlist:
    """Convert a raw playlist JSON dict into a Playlist instance."""
    raw = _mapping(raw, "playlist")
    owner = _mapping(raw["owner"], "owner")
    tracks = _mapping(raw["tracks"], "tracks")
    return Playlist(
        name=_string(raw["name"], "playlist name"),
        owner_display_name=_string(owner["display_name"], "owner display_name"),
        track_collection_ref=_string(tracks["href"], "tracks href"),
    )


def decode_page(body: str, decode_item: Callable[[Any], T]) -> Page[T]:
    """Parse a page envelope `{items, next}` from raw JSON text.

    Raises:
        ValueError: The body is not valid JSON.
        KeyError, TypeError: The envelope or an item has the wrong shape.
    """
    raw = _mapping(json.loads(body), "page")
    items = [decode_item(item) for item in _sequence(raw["items"], "items")]
    return Page(items=items, next=_optional(raw, "next", str))
