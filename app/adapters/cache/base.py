"""Cache store interfaces.

``CacheManager`` depends on this abstraction only, so the Redis store and the
local fallback are interchangeable per call.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CacheStats:
    """Best-effort cache counters.

    Attributes:
        hits: Reads that found a live entry.
        misses: Reads that found nothing or an expired entry.
        key_count: Live entries currently stored.
    """

    hits: int = 0
    misses: int = 0
    key_count: int = 0


class AbstractCacheStore(ABC):
    """Key-value store holding serialized values with a per-key TTL."""

    async def connect(self) -> None:
        """Prepare the store for use. Local stores need nothing."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the serialized value, or None when absent or expired."""
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove ``key``; return whether something was removed."""
        raise NotImplementedError

    @abstractmethod
    async def clear(self) -> None:
        """Remove every key."""
        raise NotImplementedError

    @abstractmethod
    async def keys(self, pattern: str) -> list[str]:
        """List keys matching a ``*`` glob, in the store's enumeration order."""
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Release resources. Must be safe to call more than once."""
        raise NotImplementedError
