"""Inbound rate limiting dependency for FastAPI routes.

Fixed-window limit per client IP (100 requests per 15 minutes by default).
This protects the proxy itself; the spacing of calls towards Steam is the
Steam client's own throttle.

Every limited response carries ``RateLimit-Limit``, ``RateLimit-Remaining``
and ``RateLimit-Reset`` (seconds until the window rolls over); a rejected
one adds ``Retry-After``.
"""

from __future__ import annotations

import hashlib
import logging
import time

from fastapi import HTTPException, Request, Response, status

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from app.core.config import settings

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

_limiter: AbstractRateLimiter | None = None
_limiter_window: tuple[int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the shared limiter; a settings change (tests) starts a fresh one."""

    global _limiter, _limiter_window

    window = (settings.app.rate_limit_requests, settings.app.rate_limit_window_seconds)
    if _limiter is None or _limiter_window != window:
        requests, seconds = window
        _limiter = InMemoryFixedWindowRateLimiter(limit=requests, window_seconds=seconds)
        _limiter_window = window
    return _limiter


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _headers(result: RateLimitResult) -> dict[str, str]:
    if not settings.app.rate_limit_include_headers:
        return {}
    headers = {
        "RateLimit-Limit": str(result.limit),
        "RateLimit-Remaining": str(result.remaining),
        "RateLimit-Reset": str(max(0, result.reset_at - int(time.time()))),
    }
    if not result.allowed:
        headers["Retry-After"] = str(result.retry_after_seconds or 0)
    return headers


async def enforce_rate_limit(request: Request, response: Response) -> None:
    """Consume one unit of the caller's budget or raise HTTP 429.

    Raises:
        HTTPException: 429 Too Many Requests when the window is exhausted.
    """

    if not settings.app.rate_limit_enabled:
        return

    ip = client_ip(request)
    result = get_rate_limiter().consume(f"ip:{ip}")
    headers = _headers(result)

    if result.allowed:
        response.headers.update(headers)
        return

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "client_hash": hashlib.sha256(ip.encode()).hexdigest()[:16],
            "limit": result.limit,
            "window_s": settings.app.rate_limit_window_seconds,
            "retry_after_s": result.retry_after_seconds,
            "path": request.url.path,
        },
    )
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=RATE_LIMIT_MESSAGE,
        headers=headers or None,
    )
