"""Application-level exception types.

Every failure the proxy can report maps to one of these classes. The HTTP
layer turns them into status codes (see ``exception_handlers``); the cache
layer raises ``CacheAppError`` internally and never lets it escape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for diagnostics.

    Upstream status and message are attached for logs and debug responses
    only; no decision logic reads them.
    """

    status: int | None
    message: str
    hint: str
    steam_id: str
    app_id: int
    field: str
    value: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class NotFoundAppError(AppError):
    """Upstream has no matching entity."""


class PrivateResourceAppError(AppError):
    """Entity exists but its visibility excludes public access."""


class InvalidCredentialAppError(AppError):
    """Upstream rejected the configured API key. Fatal: alert, do not retry."""


class UpstreamAppError(AppError):
    """Network failure, timeout or non-2xx answer from upstream."""


class CacheAppError(AppError):
    """Failure inside a cache backing store. Absorbed by the cache manager."""
