# src/playlist_export/exporter/projection.py

"""Flatten nested playlist/track/album/artist documents into table rows."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import NamedTuple

from playlist_export.exporter.models import Artist, Playlist, Track, TrackEntry

ARTIST_SEPARATOR = ", "
UNKNOWN_RELEASE_DATE = "Unknown"
NO_IMAGE = "No Image"

HEADER: tuple[str, ...] = (
    "Track URI",
    "Track Name",
    "Artist URI(s)",
    "Artist Name(s)",
    "Album URI",
    "Album Name",
    "Album Artist URI(s)",
    "Album Artist Name(s)",
    "Album Release Date",
    "Album Image URL",
    "Disc Number",
    "Track Number",
    "Track Duration (ms)",
    "Track Preview URL",
    "Explicit",
    "Popularity",
    "ISRC",
    "Added By",
    "Added At",
)


class OutputRow(NamedTuple):
    """One rendered track; field order matches HEADER."""

    track_uri: str
    track_name: str
    artist_uris: str
    artist_names: str
    album_uri: str
    album_name: str
    album_artist_uris: str
    album_artist_names: str
    album_release_date: str
    album_image_url: str
    disc_number: str
    track_number: str
    duration_ms: str
    preview_url: str
    explicit: str
    popularity: str
    isrc: str
    added_by: str
    added_at: str


def join_artist_uris(artists: Iterable[Artist]) -> str:
    return ARTIST_SEPARATOR.join(a.uri or "" for a in artists)


def join_artist_names(artists: Iterable[Artist]) -> str:
    return ARTIST_SEPARATOR.join(a.name or "" for a in artists)


def format_timestamp(value: datetime) -> str:
    """Render an export timestamp in UTC. Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f UTC")


def _number(value: int | None) -> str:
    return str(value if value is not None else 0)


def project_track(track: Track, playlist: Playlist, added_at: str) -> OutputRow:
    album = track.album
    return OutputRow(
        track_uri=track.uri or "",
        track_name=track.name or "",
        artist_uris=join_artist_uris(track.artists),
        artist_names=join_artist_names(track.artists),
        album_uri=album.uri or "",
        album_name=album.name or "",
        album_artist_uris=join_artist_uris(album.artists),
        album_artist_names=join_artist_names(album.artists),
        album_release_date=(
            album.release_date
            if album.release_date is not None
            else UNKNOWN_RELEASE_DATE
        ),
        album_image_url=album.images[0].url if album.images else NO_IMAGE,
        disc_number=_number(album.disc_number),
        track_number=_number(album.track_number),
        duration_ms=_number(track.duration_ms),
        preview_url=track.preview_url or "",
        explicit="true" if track.explicit else "false",
        popularity=_number(track.popularity),
        isrc=track.isrc or "",
        added_by=playlist.owner_display_name,
        added_at=added_at,
    )


def project(
    playlist: Playlist,
    track_entries: Iterable[TrackEntry],
    export_timestamp: datetime,
) -> list[OutputRow]:
    """Project a playlist's entries into rows, in entry order.

    Entries without a track (removed or unavailable items) produce no row.
    Every row carries the same `Added At` value, rendered from
    `export_timestamp`.
    """
    added_at = format_timestamp(export_timestamp)
    return [
        project_track(entry.track, playlist, added_at)
        for entry in track_entries
        if entry.track is not None
    ]
