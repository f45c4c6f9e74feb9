# src/playlist_export/exporter/pipeline.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from playlist_export.config import DEFAULT_PLAYLIST_PAGE_DELAY, DEFAULT_TRACK_PAGE_DELAY
from playlist_export.exporter.client import CatalogClient
from playlist_export.exporter.projection import project
from playlist_export.exporter.storage import table_filename, write_table

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def export_playlists(
    client: CatalogClient,
    start_url: str,
    output_dir: Path,
    *,
    playlist_delay: float = DEFAULT_PLAYLIST_PAGE_DELAY,
    track_delay: float = DEFAULT_TRACK_PAGE_DELAY,
    clock: Callable[[], datetime] = _utc_now,
) -> list[Path]:
    """Export every playlist reachable from `start_url` into one CSV each.

    Playlists are processed one at a time. A playlist's tracks are fetched
    completely before its file is opened, so a failed fetch leaves no file
    behind for that playlist. The first error aborts the run; files of
    playlists finished earlier stay on disk.

    Returns:
        Paths of the written files, in playlist order.
    """
    playlists = await client.fetch_playlists(start_url, delay=playlist_delay)
    logger.info("Exporting %s playlists to CSV in %s.", len(playlists), output_dir)

    written: list[Path] = []
    for playlist in playlists:
        entries = await client.fetch_playlist_tracks(
            playlist.track_collection_ref,
            delay=track_delay,
        )
        rows = project(playlist, entries, clock())

        skipped = len(entries) - len(rows)
        if skipped:
            logger.debug(
                "Skipping %s unavailable tracks in %s.",
                skipped,
                playlist.name,
            )

        path = output_dir / table_filename(playlist.name)
        write_table(path, rows)
        written.append(path)
        logger.info("Finished writing: %s (%s tracks)", path, len(rows))

    return written
