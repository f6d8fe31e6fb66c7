"""Two-tier cache: Redis when reachable, in-process store otherwise.

A single ``mode`` decides which store serves every call:

- starts ``LOCAL``;
- ``LOCAL -> REMOTE`` only after ``connect()`` succeeds;
- ``REMOTE -> LOCAL`` on any transport error reported by the remote store,
  whether raised by a call or noticed by its background health check.

There is no reconnect loop. Once downgraded, the process stays local until
``connect()`` is called again. Cache failures never reach callers: reads
degrade to a miss and writes to ``False``.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any

from app.adapters.cache.base import AbstractCacheStore, CacheStats
from app.adapters.cache.in_memory import LocalTTLStore
from app.adapters.cache.redis_store import RedisStore

logger = logging.getLogger(__name__)


class CacheMode(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


def _error_extra(operation: str, exc: Exception, **fields: Any) -> dict[str, Any]:
    return {
        "operation": operation,
        "error_type": type(exc).__name__,
        "error_msg": str(exc),
        **fields,
    }


class CacheManager:
    """Uniform get/set/delete/clear/keys over the active backing store.

    Attributes:
        default_ttl_seconds: TTL used when ``set`` gets none (or a non-positive one).
    """

    def __init__(
        self,
        *,
        local_store: LocalTTLStore | None = None,
        remote_store: RedisStore | None = None,
        default_ttl_seconds: int = 300,
    ) -> None:
        """Wire the two stores.

        Args:
            local_store: Fallback store; a fresh ``LocalTTLStore`` by default.
            remote_store: Preferred store, or None to stay local for good.
            default_ttl_seconds: TTL applied when callers pass none.
        """
        if default_ttl_seconds < 1:
            raise ValueError("default_ttl_seconds must be >= 1")

        self._local = local_store or LocalTTLStore()
        self._remote = remote_store
        self.default_ttl_seconds = default_ttl_seconds
        self._mode = CacheMode.LOCAL

        if remote_store is not None:
            remote_store.add_error_listener(self.handle_remote_error)

    @property
    def mode(self) -> CacheMode:
        return self._mode

    def _active_store(self) -> AbstractCacheStore:
        if self._mode is CacheMode.REMOTE and self._remote is not None:
            return self._remote
        return self._local

    async def connect(self) -> None:
        """Try the remote store. Never raises; failure leaves the cache local."""

        if self._remote is None:
            logger.info("cache.remote_disabled", extra={"mode": self._mode.value})
            return

        try:
            await self._remote.connect()
        except Exception as exc:
            self._mode = CacheMode.LOCAL
            logger.warning(
                "cache.remote_connect_failed",
                extra=_error_extra("connect", exc, mode=self._mode.value),
            )
            return

        self._mode = CacheMode.REMOTE
        logger.info("cache.mode_changed", extra={"mode": self._mode.value})

    def handle_remote_error(self, exc: Exception) -> None:
        """Error-event callback from the remote store: fall back to local."""

        if self._mode is CacheMode.LOCAL:
            return
        self._mode = CacheMode.LOCAL
        logger.error(
            "cache.mode_changed",
            extra=_error_extra("remote_error", exc, mode=self._mode.value),
        )

    async def get(self, key: str) -> Any | None:
        """Return the cached value for ``key`` or None (miss or error)."""

        store = self._active_store()
        try:
            raw = await store.get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except Exception as exc:
            logger.error("cache.get_failed", extra=_error_extra("get", exc, cache_key=key))
            return None

    async def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> bool:
        """Serialize ``value`` and store it; return False on any failure."""

        ttl = ttl_seconds if ttl_seconds and ttl_seconds > 0 else self.default_ttl_seconds
        store = self._active_store()
        try:
            payload = json.dumps(value, separators=(",", ":"))
            return await store.set(key, payload, ttl)
        except Exception as exc:
            logger.error(
                "cache.set_failed",
                extra=_error_extra("set", exc, cache_key=key, ttl_s=ttl),
            )
            return False

    async def delete(self, key: str) -> bool:
        store = self._active_store()
        try:
            return await store.delete(key)
        except Exception as exc:
            logger.error("cache.delete_failed", extra=_error_extra("delete", exc, cache_key=key))
            return False

    async def clear(self) -> bool:
        """Flush the remote store (when active) and always the local one."""

        try:
            if self._mode is CacheMode.REMOTE and self._remote is not None:
                await self._remote.clear()
        except Exception as exc:
            logger.error("cache.clear_failed", extra=_error_extra("clear", exc))
            return False
        finally:
            await self._local.clear()

        logger.info("cache.cleared", extra={"mode": self._mode.value})
        return True

    async def keys(self, pattern: str) -> list[str]:
        """List keys matching a ``*`` glob, in store enumeration order."""

        store = self._active_store()
        try:
            return await store.keys(pattern)
        except Exception as exc:
            logger.error("cache.keys_failed", extra=_error_extra("keys", exc, pattern=pattern))
            return []

    def stats(self) -> CacheStats:
        """Local counters; all zeros while remote (Redis has no cheap equivalent)."""

        if self._mode is CacheMode.REMOTE:
            return CacheStats()
        return self._local.stats()

    async def disconnect(self) -> None:
        """Release the remote connection and local resources. Idempotent."""

        if self._remote is not None:
            try:
                await self._remote.close()
                logger.info("cache.remote_disconnected")
            except Exception as exc:
                logger.error("cache.disconnect_failed", extra=_error_extra("disconnect", exc))
        self._mode = CacheMode.LOCAL

        await self._local.close()
        logger.info("cache.local_closed")
