"""Process-wide request spacing for the CSFD client."""

from __future__ import annotations

import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class RateLimiter:
    """Keeps consecutive requests at least ``1 / requests_per_second`` apart.

    The last request time is the only shared state. It is guarded by an
    ``asyncio.Lock`` held across the wait, so callers racing on ``acquire``
    are serialized and never observe a stale timestamp. A cancelled waiter
    releases the lock without touching the timestamp.
    """

    def __init__(self, requests_per_second: float) -> None:
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        self._min_interval = 1.0 / requests_per_second
        self._last_request: float | None = None
        self._lock = asyncio.Lock()

    @property
    def min_interval(self) -> float:
        """Minimum spacing between requests, in seconds."""
        return self._min_interval

    async def acquire(self) -> None:
        async with self._lock:
            if self._last_request is not None:
                elapsed = time.monotonic() - self._last_request
                if elapsed < self._min_interval:
                    wait_for = self._min_interval - elapsed
                    logger.debug(f"[CSFD] Rate limiter sleeping {wait_for:.3f}s")
                    await asyncio.sleep(wait_for)
            self._last_request = time.monotonic()


__all__ = ["RateLimiter"]
