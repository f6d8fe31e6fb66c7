"""Inbound rate limiter interface.

The HTTP dependency in ``app.core.rate_limit`` talks to this abstraction so
the per-process store can later be replaced by a shared one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of consuming budget for one client.

    Attributes:
        allowed: Whether the request may proceed.
        limit: Requests allowed per window.
        remaining: Budget left in the current window.
        reset_at: UNIX epoch seconds when the window rolls over.
        retry_after_seconds: Suggested wait when blocked, else None.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None = None


class AbstractRateLimiter(ABC):
    """Interface for inbound rate limiters."""

    @abstractmethod
    def consume(self, key: str, *, cost: int = 1) -> RateLimitResult:
        """Consume ``cost`` units of budget for ``key`` (client identifier)."""
        raise NotImplementedError
