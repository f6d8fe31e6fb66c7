"""Outbound request throttle: a fixed minimum gap between calls.

A leaky bucket of size one. All requests made through one upstream client
share a single timestamp, whatever endpoint they target. Waiters queue on a
lock, so concurrent callers leave one at a time, each at least the interval
after the previous one.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class MinIntervalThrottle:
    """Suspend callers so consecutive calls are at least ``min_interval_seconds`` apart."""

    def __init__(
        self,
        min_interval_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_interval_seconds < 0:
            raise ValueError("min_interval_seconds must be >= 0")

        self.min_interval_seconds = min_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_request_at: float | None = None

    @property
    def last_request_at(self) -> float | None:
        return self._last_request_at

    async def wait(self) -> float:
        """Block until the next call may go out, then claim the slot.

        Returns:
            Seconds spent sleeping (0.0 when no wait was needed).
        """
        async with self._lock:
            delay = 0.0
            if self._last_request_at is not None:
                elapsed = self._clock() - self._last_request_at
                if elapsed < self.min_interval_seconds:
                    delay = self.min_interval_seconds - elapsed

            if delay > 0:
                logger.debug("steam.throttle.wait", extra={"delay_ms": round(delay * 1000, 1)})
                await self._sleep(delay)

            self._last_request_at = self._clock()
            return delay
