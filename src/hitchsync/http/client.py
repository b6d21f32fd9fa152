"""HTTP client with rate limiting and download support.

Async HTTP client shared by the snapshot download and the Firestore REST
store:
- Optional rate limiting
- Streaming downloads to files with atomic rename
- Connection pooling

Requests are not retried; a failed request surfaces immediately and the
pass is re-run by the scheduler.

Example:
    >>> from hitchsync.http import HttpClient
    >>>
    >>> async with HttpClient(timeout=60.0) as client:
    ...     await client.download("https://hitchmap.com/dump.sqlite", "dump.sqlite")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import httpx

from hitchsync.http.rate_limiter import RateLimiter


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class DownloadError(HttpClientError):
    """Raised when download fails."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download {url}: {reason}")


class HttpClient:
    """Async HTTP client with rate limiting.

    Example:
        >>> async with HttpClient(rate_limit=5.0) as client:
        ...     data = await client.request_json("GET", "https://example.com/api")

    Attributes:
        rate_limit: Requests per second limit (None: unlimited)
        user_agent: User-Agent header value
        timeout: Default request timeout in seconds
    """

    def __init__(
        self,
        base_url: str = "",
        rate_limit: float | None = None,
        user_agent: str = "hitchsync/1.0",
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize HTTP client.

        Args:
            base_url: Base URL for relative requests
            rate_limit: Maximum requests per second
            user_agent: User-Agent header
            timeout: Default request timeout
            headers: Additional default headers
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url
        self._rate_limiter = RateLimiter(rate_limit)
        self._user_agent = user_agent
        self._timeout = timeout
        self._extra_headers = headers or {}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def rate_limit(self) -> float | None:
        """Current rate limit (requests per second)."""
        return self._rate_limiter.rate

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def headers(self) -> dict[str, str]:
        """Default headers for requests."""
        return {
            "User-Agent": self._user_agent,
            "Accept-Encoding": "gzip, deflate",
            "Accept": "*/*",
            **self._extra_headers,
        }

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self.headers,
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> HttpClient:
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make a rate-limited request.

        Args:
            method: HTTP method
            url: URL (relative to base_url or absolute)
            **kwargs: Additional arguments for httpx

        Returns:
            HTTP response

        Raises:
            HttpClientError: On transport failures and non-2xx responses
        """
        client = await self._ensure_client()
        await self._rate_limiter.acquire()

        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise HttpClientError(
                f"HTTP {status} for {method} {url}: {e.response.text[:200]}",
                status_code=status,
            ) from e
        except httpx.TimeoutException as e:
            raise HttpClientError(f"Request timeout: {e}") from e
        except httpx.RequestError as e:
            raise HttpClientError(f"Request failed: {e}") from e
        return response

    async def request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """Make a request and decode the JSON body."""
        response = await self.request(method, url, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise HttpClientError(f"Invalid JSON from {method} {url}") from e

    async def download(
        self,
        url: str,
        dest: Path | str,
        *,
        chunk_size: int = 65536,
    ) -> Path:
        """Download a file to local storage.

        Uses a temporary file to avoid partial downloads, then
        atomically renames to the destination path.

        Args:
            url: URL to download
            dest: Destination path
            chunk_size: Download chunk size

        Returns:
            Path to downloaded file

        Raises:
            DownloadError: If download fails
        """
        dest = Path(dest)
        temp_path = dest.with_suffix(dest.suffix + ".tmp")

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            await self._rate_limiter.acquire()
            client = await self._ensure_client()

            async with client.stream("GET", url) as response:
                response.raise_for_status()

                with open(temp_path, "wb") as f:
                    async for chunk in response.aiter_bytes(chunk_size):
                        f.write(chunk)

            temp_path.replace(dest)
            return dest

        except (httpx.HTTPError, OSError) as e:
            if temp_path.exists():
                temp_path.unlink()
            raise DownloadError(url, str(e) or type(e).__name__) from e


__all__ = [
    "DownloadError",
    "HttpClient",
    "HttpClientError",
]
