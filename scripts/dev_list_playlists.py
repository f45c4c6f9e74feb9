#!/usr/bin/env python3
"""Manual script to list the current user's playlists without exporting."""

import asyncio

from playlist_export.config import ExportSettings
from playlist_export.exporter.client import CatalogClient


async def main() -> None:
    settings = ExportSettings.from_env()
    async with CatalogClient(settings.auth_token or "") as client:
        for playlist in await client.fetch_playlists(settings.start_url):
            print(playlist)


if __name__ == "__main__":
    asyncio.run(main())
