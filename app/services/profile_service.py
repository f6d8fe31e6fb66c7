"""Profile lookups: cache first, then Steam.

Only successful, public profiles are written to the cache. Errors such as a
private or missing profile propagate and are not cached, so the next request
asks Steam again.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from pydantic import ValidationError

from app.adapters.cache.tiered import CacheManager
from app.adapters.steam.base import AbstractSteamClient
from app.schemas.profile import ExportInfo, ProfileData, ProfileExportResponse, ProfileResponse
from app.schemas.steam import SteamProfile
from app.services import cache_keys

logger = logging.getLogger(__name__)


class ProfileService:
    """Serve public Steam profiles through the tiered cache.

    Attributes:
        client: Steam client used on cache misses.
        cache: Shared cache manager.
    """

    def __init__(self, client: AbstractSteamClient, cache: CacheManager) -> None:
        self.client = client
        self.cache = cache

    async def load_profile(self, steam_id: str) -> tuple[SteamProfile, bool]:
        """Return the profile and whether it came from the cache.

        Raises:
            NotFoundAppError, PrivateResourceAppError, UpstreamAppError,
            InvalidCredentialAppError: Propagated from the Steam client.
        """
        key = cache_keys.profile_key(steam_id)

        cached = await self.cache.get(key)
        if cached is not None:
            try:
                profile = SteamProfile.model_validate(cached)
                logger.info("profile.cache_hit", extra={"steam_id": steam_id})
                return profile, True
            except ValidationError:
                logger.warning("profile.cache_entry_invalid", extra={"cache_key": key})

        profile = await self.client.get_profile(steam_id)
        await self.cache.set(key, profile.model_dump(mode="json"), cache_keys.PROFILE_TTL_SECONDS)
        return profile, False

    async def get_profile(self, steam_id: str) -> ProfileResponse:
        profile, cached = await self.load_profile(steam_id)
        return ProfileResponse(
            **_public_fields(profile).model_dump(),
            cached=cached,
            timestamp=datetime.now(timezone.utc),
        )

    async def export_profile(self, steam_id: str) -> ProfileExportResponse:
        profile, _ = await self.load_profile(steam_id)
        return ProfileExportResponse(
            export_info=ExportInfo(generated_at=datetime.now(timezone.utc), steam_id=steam_id),
            profile_data=_public_fields(profile),
        )


def _public_fields(profile: SteamProfile) -> ProfileData:
    return ProfileData.model_validate(profile.model_dump())
