"""Pydantic schemas for owned games and achievements responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class GameItem(BaseModel):
    appid: int
    name: str
    playtime_forever: int
    playtime_2weeks: int = 0
    img_icon_url: str | None = Field(None, description="Absolute icon URL, if the game has one.")
    img_logo_url: str | None = Field(None, description="Absolute logo URL, if the game has one.")
    rtime_last_played: int | None = None


class GamesResponse(BaseModel):
    steamid: str
    game_count: int
    games: list[GameItem]
    cached: bool
    timestamp: datetime


class AchievementItem(BaseModel):
    apiname: str
    achieved: int
    unlocktime: int | None = None
    name: str | None = None
    description: str | None = None


class AchievementsResponse(BaseModel):
    """Achievements for one game; ``achievements`` is None when unavailable."""

    steamid: str
    appid: int
    game_name: str | None = None
    achievements: list[AchievementItem] | None = None
    error: str | None = Field(
        None,
        description="Why achievements are missing (private data or no achievements).",
    )
    cached: bool
    timestamp: datetime
