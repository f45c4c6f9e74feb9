# playlist_export/config.py

"""Shared configuration and environment setup."""

from __future__ import annotations

from dataclasses import dataclass
from os import getenv
from pathlib import Path
from urllib.parse import urlencode

from dotenv import load_dotenv

load_dotenv(override=True)

DEFAULT_API_BASE_URL = "https://api.spotify.com/v1"
DEFAULT_PAGE_SIZE = 50
DEFAULT_PLAYLIST_PAGE_DELAY = 2.0
DEFAULT_TRACK_PAGE_DELAY = 1.0
DEFAULT_MAX_PAGES = 10_000
DEFAULT_TIMEOUT = 30.0


class ConfigError(ValueError):
    """Raised for invalid or missing settings."""


def get_project_root() -> Path:
    """Return the project root directory.

    Prefers PLAYLIST_EXPORT_PROJECT_ROOT env var. Falls back to current
    working directory.
    """
    if root := getenv("PLAYLIST_EXPORT_PROJECT_ROOT"):
        return Path(root).resolve()
    return Path.cwd()


def playlists_url(base_url: str, page_size: int) -> str:
    """Build the first-page URL of the current user's playlist collection."""
    return f"{base_url.rstrip('/')}/me/playlists?{urlencode({'limit': page_size})}"


@dataclass(slots=True)
class ExportSettings:
    """Runtime settings for one export run."""

    auth_token: str | None
    api_base_url: str = DEFAULT_API_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    playlist_page_delay: float = DEFAULT_PLAYLIST_PAGE_DELAY
    track_page_delay: float = DEFAULT_TRACK_PAGE_DELAY
    max_pages: int = DEFAULT_MAX_PAGES
    timeout: float = DEFAULT_TIMEOUT
    output_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.page_size < 1:
            msg = "page_size must be >= 1."
            raise ConfigError(msg)
        if self.max_pages < 1:
            msg = "max_pages must be >= 1."
            raise ConfigError(msg)
        if self.playlist_page_delay < 0 or self.track_page_delay < 0:
            msg = "Page delays must be non-negative."
            raise ConfigError(msg)
        if self.timeout <= 0:
            msg = "timeout must be positive."
            raise ConfigError(msg)
        if self.output_dir is None:
            self.output_dir = get_project_root() / "exports"

    @property
    def start_url(self) -> str:
        return playlists_url(self.api_base_url, self.page_size)

    @classmethod
    def from_env(cls) -> "ExportSettings":
        """Build settings from environment variables (and a loaded .env file)."""
        output_dir = getenv("PLAYLIST_EXPORT_OUTPUT_DIR")
        return cls(
            auth_token=getenv("SPOTIFY_AUTH_TOKEN") or None,
            api_base_url=getenv("SPOTIFY_API_BASE_URL", DEFAULT_API_BASE_URL),
            page_size=_env_number("PLAYLIST_EXPORT_PAGE_SIZE", int, DEFAULT_PAGE_SIZE),
            playlist_page_delay=_env_number(
                "PLAYLIST_EXPORT_PLAYLIST_DELAY", float, DEFAULT_PLAYLIST_PAGE_DELAY
            ),
            track_page_delay=_env_number(
                "PLAYLIST_EXPORT_TRACK_DELAY", float, DEFAULT_TRACK_PAGE_DELAY
            ),
            max_pages=_env_number("PLAYLIST_EXPORT_MAX_PAGES", int, DEFAULT_MAX_PAGES),
            timeout=_env_number("PLAYLIST_EXPORT_TIMEOUT", float, DEFAULT_TIMEOUT),
            output_dir=Path(output_dir) if output_dir else None,
        )


def _env_number(name: str, kind: type, default: int | float) -> int | float:
    raw = getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return kind(raw.strip())
    except ValueError as exc:
        msg = f"{name} must be a valid {kind.__name__}, got {raw!r}."
        raise ConfigError(msg) from exc
