"""Rate limiting adapters.

- ``InMemoryFixedWindowRateLimiter`` caps inbound requests per client.
- ``MinIntervalThrottle`` spaces outbound calls to the Steam API.
"""

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from app.adapters.rate_limit.min_interval import MinIntervalThrottle

__all__ = [
    "AbstractRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "MinIntervalThrottle",
    "RateLimitResult",
]
