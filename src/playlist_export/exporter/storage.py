# src/playlist_export/exporter/storage.py

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from playlist_export.exporter.errors import SinkError
from playlist_export.exporter.projection import HEADER

logger = logging.getLogger(__name__)

TABLE_EXTENSION = "csv"


def table_filename(playlist_name: str, ext: str = TABLE_EXTENSION) -> str:
    """Return the output file name for a playlist (`/` replaced by `_`)."""
    return f"{playlist_name.replace('/', '_')}.{ext}"


def write_table(path: Path, rows: Iterable[Sequence[str]]) -> int:
    """Write the header and all rows to a CSV file at `path`.

    The file is flushed and closed before returning.

    Returns:
        The number of data rows written.

    Raises:
        SinkError: The file could not be created or written.
    """
    count = 0
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(HEADER)
            for row in rows:
                writer.writerow(row)
                count += 1
    except (OSError, csv.Error) as exc:
        logger.error("Failed writing %s: %s", path, exc)
        raise SinkError(path, exc) from exc
    return count
