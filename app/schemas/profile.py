"""Pydantic schemas for profile responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ProfileData(BaseModel):
    """Public subset of a Steam profile returned to clients."""

    steamid: str
    personaname: str
    realname: str | None = None
    avatarfull: str | None = None
    avatarmedium: str | None = None
    avatar: str | None = None
    profileurl: str | None = None
    loccountrycode: str | None = None
    locstatecode: str | None = None
    timecreated: int | None = None
    communityvisibilitystate: int
    profilestate: int | None = None
    personastate: int | None = None


class ProfileResponse(ProfileData):
    cached: bool = Field(..., description="True when served from the cache.")
    timestamp: datetime


class ExportInfo(BaseModel):
    generated_at: datetime
    source: str = "SafeSteamTools"
    steam_id: str
    data_type: str = "public_profile"
    legal_notice: str = (
        "This data was obtained through official Steam Web APIs and contains "
        "only publicly available information."
    )


class ProfileExportResponse(BaseModel):
    """Downloadable JSON document with one public profile."""

    export_info: ExportInfo
    profile_data: ProfileData
