"""Tests for hitchsync.http.rate_limiter."""

from __future__ import annotations

import time

import pytest

from hitchsync.http.rate_limiter import RateLimiter


class TestRateLimiter:
    """Tests for RateLimiter."""

    def test_unlimited(self) -> None:
        limiter = RateLimiter()
        assert limiter.rate is None
        assert limiter.min_interval == 0.0

    @pytest.mark.parametrize("rate", [0, -1.0])
    def test_invalid_rate(self, rate: float) -> None:
        with pytest.raises(ValueError, match="positive"):
            RateLimiter(rate)

    async def test_unlimited_never_waits(self) -> None:
        limiter = RateLimiter()
        for _ in range(10):
            assert await limiter.acquire() == 0.0

    async def test_first_call_is_immediate(self) -> None:
        assert await RateLimiter(rate=2.0).acquire() == 0.0

    async def test_spaces_calls(self) -> None:
        limiter = RateLimiter(rate=20.0)
        start = time.monotonic()
        for _ in range(3):
            await limiter.acquire()
        elapsed = time.monotonic() - start
        assert elapsed >= 2 * limiter.min_interval * 0.9

    async def test_reset(self) -> None:
        limiter = RateLimiter(rate=1.0)
        await limiter.acquire()
        limiter.reset()
        assert await limiter.acquire() == 0.0
