"""Cache adapters.

Two backing stores behind one async interface (Redis and an in-process TTL
store) plus the ``CacheManager`` that picks between them.
"""

from app.adapters.cache.base import AbstractCacheStore, CacheStats
from app.adapters.cache.in_memory import LocalTTLStore
from app.adapters.cache.redis_store import RedisStore
from app.adapters.cache.tiered import CacheManager, CacheMode
from app.adapters.cache.factory import create_cache_manager

__all__ = [
    "AbstractCacheStore",
    "CacheManager",
    "CacheMode",
    "CacheStats",
    "LocalTTLStore",
    "RedisStore",
    "create_cache_manager",
]
