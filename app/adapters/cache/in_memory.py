"""In-process TTL store used when Redis is unavailable.

Entries expire lazily on read and through a periodic sweep that runs on
access at most once per ``check_period_seconds``. There is no size-based
eviction. Keys enumerate in insertion order.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from app.adapters.cache.base import AbstractCacheStore, CacheStats
from app.utils.glob import filter_keys

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Serialized value with its expiry instant (clock seconds)."""

    value: str
    expires_at: float


class LocalTTLStore(AbstractCacheStore):
    """Thread-safe, in-memory TTL store with hit/miss counters."""

    def __init__(
        self,
        *,
        check_period_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the store.

        Args:
            check_period_seconds: Minimum gap between two sweeps of expired
                entries; 0 sweeps on every access.
            clock: Monotonic time source in seconds.
        """
        if check_period_seconds < 0:
            raise ValueError("check_period_seconds must be >= 0")

        self._check_period = check_period_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._last_sweep = clock()

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"LocalTTLStore(size={len(self._entries)}, hits={self._hits}, "
            f"misses={self._misses})"
        )

    def _is_live(self, entry: CacheEntry, now: float) -> bool:
        return now < entry.expires_at

    def _maybe_sweep_locked(self, now: float) -> None:
        if now - self._last_sweep < self._check_period:
            return
        self._last_sweep = now
        expired = [k for k, entry in self._entries.items() if not self._is_live(entry, now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("cache.local.swept", extra={"expired": len(expired)})

    async def get(self, key: str) -> str | None:
        with self._lock:
            now = self._clock()
            self._maybe_sweep_locked(now)
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if not self._is_live(entry, now):
                del self._entries[key]
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    async def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")

        with self._lock:
            now = self._clock()
            self._maybe_sweep_locked(now)
            self._entries[key] = CacheEntry(value=value, expires_at=now + ttl_seconds)
            return True

    async def delete(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.pop(key, None)
            return entry is not None and self._is_live(entry, self._clock())

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    async def keys(self, pattern: str) -> list[str]:
        with self._lock:
            now = self._clock()
            self._maybe_sweep_locked(now)
            live = [k for k, entry in self._entries.items() if self._is_live(entry, now)]
        return filter_keys(live, pattern)

    async def close(self) -> None:
        await self.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            now = self._clock()
            live = sum(1 for entry in self._entries.values() if self._is_live(entry, now))
            return CacheStats(hits=self._hits, misses=self._misses, key_count=live)
