"""FastAPI dependencies resolving the shared cache and Steam client.

Both are created once in the application lifespan and stored on
``app.state``; tests swap them through ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Depends, Request

from app.adapters.cache.tiered import CacheManager
from app.adapters.steam.base import AbstractSteamClient
from app.services.games_service import GamesService
from app.services.inventory_service import InventoryService
from app.services.profile_service import ProfileService


def get_cache(request: Request) -> CacheManager:
    return request.app.state.cache


def get_steam_client(request: Request) -> AbstractSteamClient:
    return request.app.state.steam_client


def get_profile_service(
    client: AbstractSteamClient = Depends(get_steam_client),
    cache: CacheManager = Depends(get_cache),
) -> ProfileService:
    return ProfileService(client=client, cache=cache)


def get_games_service(
    client: AbstractSteamClient = Depends(get_steam_client),
    cache: CacheManager = Depends(get_cache),
) -> GamesService:
    return GamesService(client=client, cache=cache)


def get_inventory_service(
    client: AbstractSteamClient = Depends(get_steam_client),
    cache: CacheManager = Depends(get_cache),
) -> InventoryService:
    return InventoryService(client=client, cache=cache)
