from __future__ import annotations

from app.api.routes.games import router as games_router
from app.api.routes.health import router as health_router
from app.api.routes.info import router as info_router
from app.api.routes.inventory import router as inventory_router
from app.api.routes.profile import router as profile_router

__all__ = [
    "games_router",
    "health_router",
    "info_router",
    "inventory_router",
    "profile_router",
]
