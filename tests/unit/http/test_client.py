"""Tests for hitchsync.http.client - HttpClient."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from hitchsync.http.client import DownloadError, HttpClient, HttpClientError


def make_client(handler, **kwargs) -> HttpClient:
    return HttpClient(transport=httpx.MockTransport(handler), **kwargs)


# =============================================================================
# Configuration
# =============================================================================


class TestHttpClientConfig:
    """Tests for client defaults."""

    def test_defaults(self) -> None:
        client = HttpClient()
        assert client.rate_limit is None
        assert client.timeout == 30.0
        assert client.user_agent.startswith("hitchsync/")

    def test_headers_merge(self) -> None:
        client = HttpClient(user_agent="test-agent", headers={"X-Extra": "1"})
        assert client.headers["User-Agent"] == "test-agent"
        assert client.headers["X-Extra"] == "1"

    def test_rate_limit(self) -> None:
        assert HttpClient(rate_limit=5.0).rate_limit == 5.0


# =============================================================================
# Requests
# =============================================================================


class TestRequest:
    """Tests for request() and request_json()."""

    async def test_request_sends_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="ok")

        async with make_client(handler, user_agent="test-agent") as client:
            response = await client.request("GET", "https://example.com/a")

        assert response.text == "ok"
        assert seen[0].headers["User-Agent"] == "test-agent"

    async def test_base_url(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200)

        async with make_client(handler, base_url="https://example.com/v1") as client:
            await client.request("GET", "/items")
        assert seen == ["https://example.com/v1/items"]

    async def test_request_json(self) -> None:
        async with make_client(lambda r: httpx.Response(200, json={"a": [1]})) as client:
            assert await client.request_json("GET", "https://example.com") == {"a": [1]}

    async def test_invalid_json(self) -> None:
        async with make_client(lambda r: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(HttpClientError, match="Invalid JSON"):
                await client.request_json("GET", "https://example.com")

    async def test_status_error(self) -> None:
        async with make_client(lambda r: httpx.Response(404, text="not here")) as client:
            with pytest.raises(HttpClientError) as exc_info:
                await client.request("GET", "https://example.com/missing")
        assert exc_info.value.status_code == 404
        assert "not here" in str(exc_info.value)

    async def test_no_retry(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(503)

        async with make_client(handler) as client:
            with pytest.raises(HttpClientError):
                await client.request("GET", "https://example.com")
        assert calls == 1

    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        async with make_client(handler) as client:
            with pytest.raises(HttpClientError, match="timeout") as exc_info:
                await client.request("GET", "https://example.com")
        assert exc_info.value.status_code is None

    async def test_connect_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(HttpClientError, match="Request failed"):
                await client.request("GET", "https://example.com")

    async def test_reopens_after_close(self) -> None:
        client = make_client(lambda r: httpx.Response(200))
        await client.request("GET", "https://example.com")
        await client.close()
        await client.close()
        response = await client.request("GET", "https://example.com")
        assert response.status_code == 200
        await client.close()


# =============================================================================
# Downloads
# =============================================================================


class TestDownload:
    """Tests for download()."""

    async def test_download(self, tmp_path: Path) -> None:
        payload = b"x" * 200_000
        async with make_client(lambda r: httpx.Response(200, content=payload)) as client:
            path = await client.download("https://example.com/f", tmp_path / "sub" / "f.bin")
        assert path.read_bytes() == payload
        assert not (tmp_path / "sub" / "f.bin.tmp").exists()

    async def test_download_failure_cleans_up(self, tmp_path: Path) -> None:
        dest = tmp_path / "f.bin"
        async with make_client(lambda r: httpx.Response(500)) as client:
            with pytest.raises(DownloadError) as exc_info:
                await client.download("https://example.com/f", dest)
        assert exc_info.value.url == "https://example.com/f"
        assert not dest.exists()
        assert list(tmp_path.iterdir()) == []
