# src/playlist_export/exporter/errors.py

"""Exceptions raised by the export pipeline.

Every error is logged with its diagnostic context where it is detected and
then propagated unchanged; nothing in the pipeline retries or continues past
a failure.
"""

from __future__ import annotations

from pathlib import Path


class ExportError(Exception):
    """Base class for all export pipeline errors."""


class RequestError(ExportError):
    """The service answered with a non-success HTTP status."""

    def __init__(self, status: int, body: str, url: str | None = None) -> None:
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"Failed request: {status}: {body}")


class DecodeError(ExportError):
    """A response body did not match the expected page or item shape."""

    def __init__(
        self,
        cause: Exception,
        raw_body: str,
        url: str | None = None,
    ) -> None:
        self.cause = cause
        self.raw_body = raw_body
        self.url = url
        super().__init__(f"Could not decode response from {url}: {cause}")


class SinkError(ExportError):
    """An output table could not be created, written or flushed."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not write {path}: {cause}")


class PaginationError(ExportError):
    """The continuation cursor repeated or the page ceiling was reached."""

    def __init__(self, url: str, pages: int) -> None:
        self.url = url
        self.pages = pages
        super().__init__(f"Pagination stopped at {url} after {pages} pages")
