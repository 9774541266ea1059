"""Tests for the request rate limiter."""

import asyncio
import time

import pytest

from csfd_scraper.clients.rate_limit import RateLimiter

# asyncio may wake a sleeper up to one clock tick early.
TOLERANCE = 0.01


class TestRateLimiter:
    """Test cases for RateLimiter."""

    def test_min_interval(self):
        """Test the interval is the inverse of the rate."""
        assert RateLimiter(2.0).min_interval == pytest.approx(0.5)
        assert RateLimiter(10.0).min_interval == pytest.approx(0.1)

    @pytest.mark.parametrize("rate", [0, -1.0])
    def test_rejects_non_positive_rate(self, rate):
        """Test a zero or negative rate is refused."""
        with pytest.raises(ValueError):
            RateLimiter(rate)

    @pytest.mark.asyncio
    async def test_first_acquire_does_not_wait(self):
        """Test the very first call returns immediately."""
        limiter = RateLimiter(0.5)

        started = time.monotonic()
        await limiter.acquire()

        assert time.monotonic() - started < 0.5

    @pytest.mark.asyncio
    async def test_consecutive_acquires_are_spaced(self):
        """Test back-to-back calls are at least min_interval apart."""
        limiter = RateLimiter(10.0)

        await limiter.acquire()
        first = time.monotonic()
        await limiter.acquire()
        second = time.monotonic()

        assert second - first >= limiter.min_interval - TOLERANCE

    @pytest.mark.asyncio
    async def test_no_wait_after_idle_period(self):
        """Test a caller arriving after the interval has elapsed is not delayed."""
        limiter = RateLimiter(20.0)

        await limiter.acquire()
        await asyncio.sleep(limiter.min_interval * 2)
        started = time.monotonic()
        await limiter.acquire()

        assert time.monotonic() - started < limiter.min_interval

    @pytest.mark.asyncio
    async def test_concurrent_callers_are_serialized(self):
        """Test callers racing on acquire still observe the spacing."""
        limiter = RateLimiter(20.0)
        stamps: list[float] = []

        async def worker() -> None:
            await limiter.acquire()
            stamps.append(time.monotonic())

        await asyncio.gather(*(worker() for _ in range(4)))

        stamps.sort()
        gaps = [later - earlier for earlier, later in zip(stamps, stamps[1:])]
        assert len(gaps) == 3
        assert all(gap >= limiter.min_interval - TOLERANCE for gap in gaps)

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_advance_timestamp(self):
        """Test cancelling a waiting caller leaves the schedule untouched."""
        limiter = RateLimiter(1.0)
        await limiter.acquire()
        recorded = limiter._last_request

        waiter = asyncio.create_task(limiter.acquire())
        await asyncio.sleep(0.05)
        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter

        assert limiter._last_request == recorded
