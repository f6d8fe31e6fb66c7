"""Redis-backed cache store.

Redis errors are wrapped in ``CacheAppError``. Transport failures (lost
connection, timeouts) are also reported to error listeners, which is how the
``CacheManager`` learns it must fall back to the local store. A background
watcher pings Redis periodically so an outage is noticed even while no cache
call is in flight.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from app.adapters.cache.base import AbstractCacheStore
from app.core.errors import CacheAppError
from app.core.logging import redact_url

logger = logging.getLogger(__name__)

ErrorListener = Callable[[Exception], None]

_TRANSPORT_ERRORS = (RedisConnectionError, RedisTimeoutError, OSError)


class RedisStore(AbstractCacheStore):
    """Cache store on top of ``redis.asyncio``.

    Args:
        url: Redis connection URL.
        connect_timeout_seconds: Socket connect timeout.
        socket_timeout_seconds: Per-command socket timeout.
        health_check_interval_seconds: Ping period of the watcher; 0 disables it.
        client: Pre-built client (tests); skips ``from_url``.
    """

    def __init__(
        self,
        url: str,
        *,
        connect_timeout_seconds: float = 5.0,
        socket_timeout_seconds: float = 5.0,
        health_check_interval_seconds: float = 30.0,
        client: redis.Redis | None = None,
    ) -> None:
        self._url = url
        self._connect_timeout = connect_timeout_seconds
        self._socket_timeout = socket_timeout_seconds
        self._health_check_interval = health_check_interval_seconds
        self._client = client
        self._listeners: list[ErrorListener] = []
        self._watcher: asyncio.Task[None] | None = None

    def add_error_listener(self, listener: ErrorListener) -> None:
        """Register a callback fired on every transport error."""
        self._listeners.append(listener)

    def _emit_error(self, exc: Exception) -> None:
        for listener in self._listeners:
            listener(exc)

    def _wrap(self, operation: str, exc: Exception) -> CacheAppError:
        if isinstance(exc, _TRANSPORT_ERRORS):
            self._emit_error(exc)
        return CacheAppError(
            code="cache_remote_error",
            message=f"Redis {operation} failed",
            details={"message": str(exc)},
        )

    def _require_client(self) -> redis.Redis:
        if self._client is None:
            raise CacheAppError(code="cache_remote_not_connected", message="Redis client not connected")
        return self._client

    async def connect(self) -> None:
        """Create the client (if needed) and verify it with PING.

        Raises:
            CacheAppError: If Redis cannot be reached.
        """
        if self._client is None:
            self._client = redis.from_url(
                self._url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=self._connect_timeout,
                socket_timeout=self._socket_timeout,
            )
        try:
            await self._client.ping()
        except (RedisError, OSError) as exc:
            raise CacheAppError(
                code="cache_remote_connect_failed",
                message="Could not connect to Redis",
                details={"message": str(exc)},
            ) from exc

        logger.info("cache.redis.connected", extra={"url": redact_url(self._url)})
        self._start_watcher()

    def _start_watcher(self) -> None:
        if self._health_check_interval <= 0:
            return
        if self._watcher is not None and not self._watcher.done():
            return
        self._watcher = asyncio.create_task(self._watch(), name="redis-health-check")

    async def _watch(self) -> None:
        while True:
            await asyncio.sleep(self._health_check_interval)
            try:
                await self._require_client().ping()
            except (RedisError, OSError, CacheAppError) as exc:
                logger.warning("cache.redis.health_check_failed", extra={"error_msg": str(exc)})
                # a later connect() must be able to start a new watcher
                self._watcher = None
                self._emit_error(exc)
                return

    async def get(self, key: str) -> str | None:
        client = self._require_client()
        try:
            return await client.get(key)
        except (RedisError, OSError) as exc:
            raise self._wrap("get", exc) from exc

    async def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        client = self._require_client()
        try:
            return bool(await client.setex(key, ttl_seconds, value))
        except (RedisError, OSError) as exc:
            raise self._wrap("set", exc) from exc

    async def delete(self, key: str) -> bool:
        client = self._require_client()
        try:
            return await client.delete(key) > 0
        except (RedisError, OSError) as exc:
            raise self._wrap("delete", exc) from exc

    async def clear(self) -> None:
        client = self._require_client()
        try:
            await client.flushdb()
        except (RedisError, OSError) as exc:
            raise self._wrap("clear", exc) from exc

    async def keys(self, pattern: str) -> list[str]:
        client = self._require_client()
        try:
            return [key async for key in client.scan_iter(match=pattern)]
        except (RedisError, OSError) as exc:
            raise self._wrap("keys", exc) from exc

    async def close(self) -> None:
        if self._watcher is not None:
            self._watcher.cancel()
            try:
                await self._watcher
            except asyncio.CancelledError:
                pass
            self._watcher = None

        if self._client is None:
            return
        client, self._client = self._client, None
        try:
            await client.aclose()
        except (RedisError, OSError) as exc:
            raise CacheAppError(
                code="cache_remote_close_failed",
                message="Error while closing Redis connection",
                details={"message": str(exc)},
            ) from exc
