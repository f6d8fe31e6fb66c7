"""Application factory for the FastAPI app.

Centralizes app construction (metadata, lifespan, middleware, handlers,
routers) so tests can build isolated instances.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app.adapters.cache.factory import create_cache_manager
from app.adapters.steam.factory import create_steam_client
from app.api.routes import (
    games_router,
    health_router,
    info_router,
    inventory_router,
    profile_router,
)
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware, security_middleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared cache and Steam client, and release them on shutdown.

    The Steam client is built first so a missing API key aborts startup
    before any cache connection is opened.
    """
    steam_client = create_steam_client(settings.steam)
    cache = create_cache_manager(settings.cache)
    await cache.connect()

    app.state.steam_client = steam_client
    app.state.cache = cache
    logger.info(
        "app.startup",
        extra={"app_env": settings.app_env, "cache_mode": cache.mode.value},
    )
    try:
        yield
    finally:
        await cache.disconnect()
        await steam_client.aclose()
        logger.info("app.shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="SafeSteamTools API",
        description=(
            "Read-only proxy over the official Steam Web API and Steam Community "
            "endpoints: public profiles, owned games, achievements, inventories "
            "and market prices, with caching and throttled upstream calls."
        ),
        version="1.0.0",
        lifespan=lifespan,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    # Middleware; the last one registered runs outermost
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["Content-Type", settings.log.request_id_header],
    )
    app.middleware("http")(security_middleware)
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(info_router)
    app.include_router(profile_router, prefix="/api")
    app.include_router(games_router, prefix="/api")
    app.include_router(inventory_router, prefix="/api")
    app.include_router(health_router)

    return app
