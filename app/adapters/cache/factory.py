"""Factory for the process-wide cache manager."""

from app.adapters.cache.in_memory import LocalTTLStore
from app.adapters.cache.redis_store import RedisStore
from app.adapters.cache.tiered import CacheManager
from app.core.config import CacheSettings, settings


def create_cache_manager(cache_settings: CacheSettings | None = None) -> CacheManager:
    """Build a ``CacheManager`` from configuration.

    The manager starts in local mode; call ``connect()`` (done once in the
    app lifespan) to try Redis. With ``CACHE_REDIS_ENABLED=false`` no remote
    store is created at all.

    Args:
        cache_settings: Optional settings; defaults to the global ones.

    Returns:
        CacheManager: Unconnected manager owning its own stores.
    """
    cfg = cache_settings or settings.cache

    remote = None
    if cfg.redis_enabled:
        remote = RedisStore(
            cfg.redis_url,
            connect_timeout_seconds=cfg.connect_timeout_seconds,
            socket_timeout_seconds=cfg.socket_timeout_seconds,
            health_check_interval_seconds=cfg.health_check_interval_seconds,
        )

    return CacheManager(
        local_store=LocalTTLStore(check_period_seconds=cfg.check_period_seconds),
        remote_store=remote,
        default_ttl_seconds=cfg.default_ttl_seconds,
    )
