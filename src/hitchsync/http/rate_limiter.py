"""Rate limiter for controlling request frequency.

Keeps target store writes under an operation-rate quota.

Example:
    >>> from hitchsync.http import RateLimiter
    >>>
    >>> limiter = RateLimiter(rate=5.0)  # 5 requests per second
    >>>
    >>> # In async code
    >>> await limiter.acquire()  # Waits if needed
    >>> # ... make request ...
"""

from __future__ import annotations

import asyncio
import time


class RateLimiter:
    """Minimum-interval rate limiter.

    Spaces calls so that no more than ``rate`` happen per second. A rate of
    None disables limiting.

    Attributes:
        rate: Maximum requests per second, or None
        min_interval: Minimum interval between requests
    """

    def __init__(self, rate: float | None = None):
        """Initialize rate limiter.

        Args:
            rate: Maximum requests per second (None: unlimited)

        Raises:
            ValueError: If rate is not positive
        """
        if rate is not None and rate <= 0:
            raise ValueError("rate must be positive")
        self.rate = rate
        self.min_interval = 0.0 if rate is None else 1.0 / rate
        self._last_request: float = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> float:
        """Wait until a request can be made.

        Returns:
            Time waited in seconds
        """
        if self.rate is None:
            return 0.0

        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request
            wait_time = 0.0

            if elapsed < self.min_interval:
                wait_time = self.min_interval - elapsed
                await asyncio.sleep(wait_time)

            self._last_request = time.monotonic()
            return wait_time

    def reset(self) -> None:
        """Reset the rate limiter state."""
        self._last_request = 0.0


__all__ = ["RateLimiter"]
