"""Tests for hitchsync.source.fetch - snapshot download."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from hitchsync.core.exceptions import TransportError
from hitchsync.http.client import HttpClient
from hitchsync.protocols.source import SnapshotFetcher
from hitchsync.source.fetch import HttpSnapshotFetcher

DUMP_URL = "https://hitchmap.com/dump.sqlite"


def make_fetcher(handler) -> HttpSnapshotFetcher:
    return HttpSnapshotFetcher(HttpClient(transport=httpx.MockTransport(handler)))


class TestHttpSnapshotFetcher:
    """Tests for HttpSnapshotFetcher.fetch."""

    def test_implements_protocol(self) -> None:
        assert isinstance(make_fetcher(lambda r: httpx.Response(200)), SnapshotFetcher)

    async def test_downloads_to_destination(self, tmp_path: Path) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, content=b"SQLite format 3\x00rest")

        fetcher = make_fetcher(handler)
        dest = tmp_path / "cache" / "hitchwiki.sqlite"
        try:
            path = await fetcher.fetch(DUMP_URL, dest)
        finally:
            await fetcher.close()

        assert requested == [DUMP_URL]
        assert path == dest
        assert dest.read_bytes() == b"SQLite format 3\x00rest"

    async def test_replaces_previous_snapshot(self, tmp_path: Path) -> None:
        dest = tmp_path / "hitchwiki.sqlite"
        dest.write_bytes(b"old")
        fetcher = make_fetcher(lambda r: httpx.Response(200, content=b"new"))
        await fetcher.fetch(DUMP_URL, dest)
        await fetcher.close()
        assert dest.read_bytes() == b"new"

    async def test_http_error(self, tmp_path: Path) -> None:
        dest = tmp_path / "hitchwiki.sqlite"
        dest.write_bytes(b"old")
        fetcher = make_fetcher(lambda r: httpx.Response(503))

        with pytest.raises(TransportError) as exc_info:
            await fetcher.fetch(DUMP_URL, dest)
        await fetcher.close()

        assert exc_info.value.stage == "fetch"
        assert DUMP_URL in str(exc_info.value)
        assert dest.read_bytes() == b"old"
        assert list(tmp_path.iterdir()) == [dest]

    async def test_connection_error(self, tmp_path: Path) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = make_fetcher(handler)
        with pytest.raises(TransportError, match="connection refused"):
            await fetcher.fetch(DUMP_URL, tmp_path / "hitchwiki.sqlite")
        await fetcher.close()
        assert not (tmp_path / "hitchwiki.sqlite").exists()
