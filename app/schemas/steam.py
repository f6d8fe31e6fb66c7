"""Pydantic models for payloads returned by the Steam Web API.

Only the fields this service reads are declared; unknown fields are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# communityvisibilitystate value meaning "public"
PUBLIC_VISIBILITY = 3


class _SteamModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SteamProfile(_SteamModel):
    """Entry of ``GetPlayerSummaries`` ``response.players``."""

    steamid: str
    communityvisibilitystate: int
    personaname: str
    profilestate: int | None = None
    profileurl: str | None = None
    avatar: str | None = None
    avatarmedium: str | None = None
    avatarfull: str | None = None
    personastate: int | None = None
    realname: str | None = None
    primaryclanid: str | None = None
    timecreated: int | None = None
    personastateflags: int | None = None
    loccountrycode: str | None = None
    locstatecode: str | None = None
    loccityid: int | None = None

    @property
    def is_public(self) -> bool:
        return self.communityvisibilitystate == PUBLIC_VISIBILITY


class SteamGame(_SteamModel):
    """Entry of ``GetOwnedGames`` ``response.games``."""

    appid: int
    name: str = ""
    playtime_forever: int = 0
    playtime_2weeks: int | None = None
    img_icon_url: str | None = None
    img_logo_url: str | None = None
    playtime_windows_forever: int | None = None
    playtime_mac_forever: int | None = None
    playtime_linux_forever: int | None = None
    rtime_last_played: int | None = None


class Achievement(_SteamModel):
    apiname: str
    achieved: int
    unlocktime: int | None = None
    name: str | None = None
    description: str | None = None


class PlayerStats(_SteamModel):
    """``GetPlayerAchievements`` ``playerstats`` object."""

    steamID: str | None = None
    gameName: str | None = None
    success: bool | None = None
    achievements: list[Achievement] | None = None


class InventoryAsset(_SteamModel):
    assetid: str
    classid: str
    instanceid: str = "0"
    amount: str = "1"
    pos: int | None = None


class InventoryDescription(_SteamModel):
    classid: str
    instanceid: str = "0"
    appid: int | None = None
    name: str | None = None
    type: str | None = None
    market_name: str | None = None
    market_hash_name: str | None = None
    icon_url: str | None = None
    icon_url_large: str | None = None
    background_color: str | None = None
    name_color: str | None = None
    tradable: int = 0
    marketable: int = 0
    commodity: int = 0


class Inventory(_SteamModel):
    """Community inventory endpoint payload."""

    assets: list[InventoryAsset] = Field(default_factory=list)
    descriptions: list[InventoryDescription] = Field(default_factory=list)


class MarketPrice(_SteamModel):
    """Market ``priceoverview`` payload."""

    success: bool = False
    lowest_price: str | None = None
    volume: str | None = None
    median_price: str | None = None
