from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.adapters.cache.tiered import CacheManager
from app.api.routes.info import API_VERSION
from app.core.dependencies import get_cache

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(cache: CacheManager = Depends(get_cache)) -> dict:
    """Liveness check reporting which cache tier is active.

    Cache stats are only meaningful in local mode; in remote mode they are
    reported as zeros.
    """

    stats = cache.stats()
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": API_VERSION,
        "cache": {
            "mode": cache.mode.value,
            "hits": stats.hits,
            "misses": stats.misses,
            "keys": stats.key_count,
        },
    }
