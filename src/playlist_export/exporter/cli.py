# src/playlist_export/exporter/cli.py

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from playlist_export.config import ConfigError, ExportSettings
from playlist_export.exporter.client import CatalogClient
from playlist_export.exporter.errors import ExportError
from playlist_export.exporter.pipeline import export_playlists

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the playlist export CLI."""
    args = _build_arg_parser().parse_args(argv)

    _configure_logging(verbose=args.verbose)

    try:
        settings = _settings_from_args(args)
        start_url = args.start_url or settings.start_url
        asyncio.run(_run(settings, start_url))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user. Exiting.")
        return 1
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    except ExportError as exc:
        logger.error("Export failed: %s", exc)
        return 1
    except httpx.HTTPError as exc:
        logger.error("Export failed, could not reach the service: %s", exc)
        return 1

    logger.info("All playlists backed up successfully.")
    return 0


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="playlist-export",
        description="Export the current user's playlists into one CSV file each.",
    )

    parser.add_argument(
        "--token",
        default=None,
        help="Bearer token for the API (default: $SPOTIFY_AUTH_TOKEN).",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the CSV files (default: ./exports).",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Playlists per page when listing playlists (default: 50).",
    )
    parser.add_argument(
        "--start-url",
        default=None,
        help="Playlist collection URL to start from (overrides --limit).",
    )
    parser.add_argument(
        "--playlist-delay",
        type=float,
        default=None,
        help="Seconds to wait between playlist pages (default: 2).",
    )
    parser.add_argument(
        "--track-delay",
        type=float,
        default=None,
        help="Seconds to wait between track pages (default: 1).",
    )
    parser.add_argument(
        "--max-pages",
        type=int,
        default=None,
        help="Give up on a collection after this many pages (default: 10000).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging.",
    )

    return parser


def _configure_logging(*, verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _settings_from_args(args: argparse.Namespace) -> ExportSettings:
    env = ExportSettings.from_env()
    settings = ExportSettings(
        auth_token=args.token or env.auth_token,
        api_base_url=env.api_base_url,
        page_size=args.limit if args.limit is not None else env.page_size,
        playlist_page_delay=(
            args.playlist_delay
            if args.playlist_delay is not None
            else env.playlist_page_delay
        ),
        track_page_delay=(
            args.track_delay if args.track_delay is not None else env.track_page_delay
        ),
        max_pages=args.max_pages if args.max_pages is not None else env.max_pages,
        timeout=env.timeout,
        output_dir=Path(args.output_dir) if args.output_dir else env.output_dir,
    )
    if not settings.auth_token:
        msg = "No bearer token given. Use --token or set SPOTIFY_AUTH_TOKEN."
        raise ConfigError(msg)
    return settings


async def _run(settings: ExportSettings, start_url: str) -> list[Path]:
    assert settings.auth_token is not None
    assert settings.output_dir is not None

    async with CatalogClient(
        settings.auth_token,
        timeout=settings.timeout,
        max_pages=settings.max_pages,
    ) as client:
        return await export_playlists(
            client,
            start_url,
            settings.output_dir,
            playlist_delay=settings.playlist_page_delay,
            track_delay=settings.track_page_delay,
        )


if __name__ == "__main__":
    # python -m playlist_export.exporter.cli -v --token <token> --output-dir exports
    sys.exit(main())
