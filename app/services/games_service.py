"""Owned games and achievements lookups.

Both collections may legitimately be private. The Steam client turns that
into an empty result, which is returned but never cached.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from pydantic import TypeAdapter, ValidationError

from app.adapters.cache.tiered import CacheManager
from app.adapters.steam.base import AbstractSteamClient
from app.schemas.games import AchievementItem, AchievementsResponse, GameItem, GamesResponse
from app.schemas.steam import PlayerStats, SteamGame
from app.services import cache_keys

logger = logging.getLogger(__name__)

GAME_IMAGE_BASE_URL = "https://media.steampowered.com/steamcommunity/public/images/apps"
ACHIEVEMENTS_UNAVAILABLE = (
    "Achievements not available (game may not support achievements or data is private)"
)

_games_adapter = TypeAdapter(list[SteamGame])


def _image_url(app_id: int, image_hash: str | None) -> str | None:
    if not image_hash:
        return None
    return f"{GAME_IMAGE_BASE_URL}/{app_id}/{image_hash}.jpg"


def shape_game(game: SteamGame) -> GameItem:
    return GameItem(
        appid=game.appid,
        name=game.name,
        playtime_forever=game.playtime_forever,
        playtime_2weeks=game.playtime_2weeks or 0,
        img_icon_url=_image_url(game.appid, game.img_icon_url),
        img_logo_url=_image_url(game.appid, game.img_logo_url),
        rtime_last_played=game.rtime_last_played,
    )


class GamesService:
    def __init__(self, client: AbstractSteamClient, cache: CacheManager) -> None:
        self.client = client
        self.cache = cache

    async def _load_games(self, steam_id: str) -> tuple[list[SteamGame], bool]:
        key = cache_keys.games_key(steam_id)
        cached = await self.cache.get(key)
        if cached:
            try:
                return _games_adapter.validate_python(cached), True
            except ValidationError:
                logger.warning("games.cache_entry_invalid", extra={"cache_key": key})

        games = await self.client.get_owned_games(steam_id)
        if games:
            await self.cache.set(
                key,
                _games_adapter.dump_python(games, mode="json"),
                cache_keys.GAMES_TTL_SECONDS,
            )
        return games, False

    async def get_games(self, steam_id: str) -> GamesResponse:
        games, cached = await self._load_games(steam_id)
        return GamesResponse(
            steamid=steam_id,
            game_count=len(games),
            games=[shape_game(game) for game in games],
            cached=cached,
            timestamp=datetime.now(timezone.utc),
        )

    async def get_achievements(self, steam_id: str, app_id: int) -> AchievementsResponse:
        key = cache_keys.achievements_key(steam_id, app_id)
        stats: PlayerStats | None = None
        cached = False

        raw = await self.cache.get(key)
        if raw:
            try:
                stats = PlayerStats.model_validate(raw)
                cached = True
            except ValidationError:
                logger.warning("achievements.cache_entry_invalid", extra={"cache_key": key})

        if stats is None:
            stats = await self.client.get_player_achievements(steam_id, app_id)
            if stats is not None and stats.achievements:
                await self.cache.set(
                    key,
                    stats.model_dump(mode="json"),
                    cache_keys.ACHIEVEMENTS_TTL_SECONDS,
                )

        if stats is None or not stats.achievements:
            return AchievementsResponse(
                steamid=steam_id,
                appid=app_id,
                achievements=None,
                error=ACHIEVEMENTS_UNAVAILABLE,
                cached=False,
                timestamp=datetime.now(timezone.utc),
            )

        return AchievementsResponse(
            steamid=steam_id,
            appid=app_id,
            game_name=stats.gameName,
            achievements=[AchievementItem.model_validate(a.model_dump()) for a in stats.achievements],
            cached=cached,
            timestamp=datetime.now(timezone.utc),
        )
