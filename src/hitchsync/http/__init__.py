"""hitchsync HTTP utilities.

Provides rate limiting and download helpers for HTTP operations.

Example:
    >>> from hitchsync.http import HttpClient, RateLimiter
    >>>
    >>> limiter = RateLimiter(rate=5.0)  # 5 requests/second
    >>> await limiter.acquire()
    >>>
    >>> async with HttpClient(rate_limit=5.0) as client:
    ...     await client.download("https://hitchmap.com/dump.sqlite", "dump.sqlite")
"""

from hitchsync.http.client import DownloadError, HttpClient, HttpClientError
from hitchsync.http.rate_limiter import RateLimiter

__all__ = [
    "DownloadError",
    "HttpClient",
    "HttpClientError",
    "RateLimiter",
]
