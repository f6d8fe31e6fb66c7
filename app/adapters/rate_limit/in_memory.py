"""Per-process fixed-window limiter for inbound requests.

Each worker keeps its own counters, so running N workers allows N times the
configured budget.
"""

from __future__ import annotations

import math
import threading
import time
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Allow ``limit`` units per key in each aligned window of ``window_seconds``."""

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._limit = limit
        self._window = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (window_start, used)
        self._usage: dict[str, tuple[int, int]] = {}

    def consume(self, key: str, *, cost: int = 1) -> RateLimitResult:
        """Count ``cost`` against ``key`` unless it would exceed the limit.

        Raises:
            ValueError: If key is empty or cost is < 1.
        """
        if not key:
            raise ValueError("key must be a non-empty string")
        if cost < 1:
            raise ValueError("cost must be >= 1")

        now = self._clock()
        window_start = int(now // self._window) * self._window
        reset_at = window_start + self._window

        with self._lock:
            start, used = self._usage.get(key, (window_start, 0))
            if start != window_start:
                used = 0
            # Drop counters of finished windows so idle clients don't accumulate
            if len(self._usage) > 10_000:
                self._usage = {k: v for k, v in self._usage.items() if v[0] == window_start}

            allowed = used + cost <= self._limit
            if allowed:
                used += cost
            self._usage[key] = (window_start, used)

        return RateLimitResult(
            allowed=allowed,
            limit=self._limit,
            remaining=max(0, self._limit - used),
            reset_at=reset_at,
            retry_after_seconds=None if allowed else max(0, math.ceil(reset_at - now)),
        )
