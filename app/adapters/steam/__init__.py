"""Steam Web API adapter layer."""

from app.adapters.steam.base import AbstractSteamClient
from app.adapters.steam.client import SteamApiClient
from app.adapters.steam.factory import create_steam_client

__all__ = [
    "AbstractSteamClient",
    "SteamApiClient",
    "create_steam_client",
]
