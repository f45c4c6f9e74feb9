"""Tests for the command-line entry point."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from playlist_export.exporter import cli
from playlist_export.exporter.errors import RequestError, SinkError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SPOTIFY_AUTH_TOKEN", raising=False)
    monkeypatch.delenv("PLAYLIST_EXPORT_OUTPUT_DIR", raising=False)


class FakeExport:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[dict] = []

    async def __call__(self, client, start_url, output_dir, **kwargs):
        self.calls.append(
            {"start_url": start_url, "output_dir": output_dir, **kwargs},
        )
        if self.error is not None:
            raise self.error
        return []


def test_missing_token_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeExport()
    monkeypatch.setattr(cli, "export_playlists", fake)

    assert cli.main([]) == 1
    assert fake.calls == []


def test_successful_run(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    fake = FakeExport()
    monkeypatch.setattr(cli, "export_playlists", fake)

    code = cli.main(
        [
            "--token",
            "abc",
            "--output-dir",
            str(tmp_path),
            "--limit",
            "10",
            "--track-delay",
            "0",
        ]
    )

    assert code == 0
    (call,) = fake.calls
    assert call["start_url"] == "https://api.spotify.com/v1/me/playlists?limit=10"
    assert call["output_dir"] == tmp_path
    assert call["track_delay"] == 0
    assert call["playlist_delay"] == 2.0


def test_start_url_overrides_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeExport()
    monkeypatch.setattr(cli, "export_playlists", fake)
    monkeypatch.setenv("SPOTIFY_AUTH_TOKEN", "from-env")

    assert cli.main(["--start-url", "https://h/v1/me/playlists?limit=3"]) == 0
    assert fake.calls[0]["start_url"] == "https://h/v1/me/playlists?limit=3"


@pytest.mark.parametrize(
    "error",
    [
        RequestError(429, "rate limited"),
        SinkError(Path("x.csv"), OSError("disk full")),
        httpx.ConnectError("connection refused"),
    ],
)
def test_errors_give_exit_status_one(
    monkeypatch: pytest.MonkeyPatch,
    error: Exception,
) -> None:
    monkeypatch.setattr(cli, "export_playlists", FakeExport(error))

    assert cli.main(["--token", "abc"]) == 1


def test_invalid_limit_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = FakeExport()
    monkeypatch.setattr(cli, "export_playlists", fake)

    assert cli.main(["--token", "abc", "--limit", "0"]) == 1
    assert fake.calls == []
