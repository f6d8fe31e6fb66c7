from abc import ABC, abstractmethod

from app.schemas.steam import Inventory, MarketPrice, PlayerStats, SteamGame, SteamProfile


class AbstractSteamClient(ABC):
    """Interface for typed, rate-limited access to the Steam Web API.

    Only ``get_profile`` surfaces NotFound/PrivateResource/Upstream errors.
    The secondary lookups absorb them into empty results; an
    ``InvalidCredentialAppError`` always propagates.
    """

    @abstractmethod
    async def get_profile(self, steam_id: str) -> SteamProfile:
        """Return the public profile for ``steam_id``.

        Raises:
            NotFoundAppError: No player with that id.
            PrivateResourceAppError: The profile is not public.
            UpstreamAppError: Transport failure or non-2xx answer.
            InvalidCredentialAppError: The API key was rejected.
        """
        ...

    @abstractmethod
    async def get_owned_games(self, steam_id: str) -> list[SteamGame]:
        ...

    @abstractmethod
    async def get_player_achievements(self, steam_id: str, app_id: int) -> PlayerStats | None:
        ...

    @abstractmethod
    async def get_inventory(self, steam_id: str, app_id: int, context_id: int = 2) -> Inventory:
        ...

    @abstractmethod
    async def get_market_price(self, app_id: int, market_hash_name: str) -> MarketPrice:
        ...

    async def aclose(self) -> None:
        """Release network resources."""
