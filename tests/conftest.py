"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins the environment so settings never pick up a developer's .env file
or try to reach a real Redis.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"

# Set default env vars that all tests might need
os.environ.setdefault("STEAM_API_KEY", "0123456789ABCDEF0123456789ABCDEF")
os.environ.setdefault("STEAM_MIN_REQUEST_INTERVAL_MS", "0")
os.environ.setdefault("CACHE_REDIS_ENABLED", "false")
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Any  # noqa: E402

import pytest  # noqa: E402

from app.adapters.cache.in_memory import LocalTTLStore  # noqa: E402
from app.adapters.cache.tiered import CacheManager  # noqa: E402
from app.adapters.steam.base import AbstractSteamClient  # noqa: E402
from app.core.errors import NotFoundAppError  # noqa: E402
from app.schemas.steam import Inventory, MarketPrice, PlayerStats, SteamGame, SteamProfile  # noqa: E402


class FakeTime:
    """Deterministic clock used to test expiration and throttling logic."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start

    def time(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class FakeSteamClient(AbstractSteamClient):
    """In-memory Steam client recording every call.

    Set an attribute to an exception instance to make that lookup raise it.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.profiles: dict[str, SteamProfile] = {}
        self.profile_error: Exception | None = None
        self.games: list[SteamGame] = []
        self.stats: PlayerStats | None = None
        self.inventory = Inventory()
        self.prices: dict[str, MarketPrice] = {}

    async def get_profile(self, steam_id: str) -> SteamProfile:
        self.calls.append(("get_profile", (steam_id,)))
        if self.profile_error is not None:
            raise self.profile_error
        try:
            return self.profiles[steam_id]
        except KeyError:
            raise NotFoundAppError(code="profile_not_found", message="Profile not found") from None

    async def get_owned_games(self, steam_id: str) -> list[SteamGame]:
        self.calls.append(("get_owned_games", (steam_id,)))
        return list(self.games)

    async def get_player_achievements(self, steam_id: str, app_id: int) -> PlayerStats | None:
        self.calls.append(("get_player_achievements", (steam_id, app_id)))
        return self.stats

    async def get_inventory(self, steam_id: str, app_id: int, context_id: int = 2) -> Inventory:
        self.calls.append(("get_inventory", (steam_id, app_id, context_id)))
        return self.inventory

    async def get_market_price(self, app_id: int, market_hash_name: str) -> MarketPrice:
        self.calls.append(("get_market_price", (app_id, market_hash_name)))
        return self.prices.get(market_hash_name, MarketPrice(success=False))

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)


STEAM_ID = "76561197960287930"


def make_profile(**overrides: Any) -> SteamProfile:
    data: dict[str, Any] = {
        "steamid": STEAM_ID,
        "personaname": "Rabscuttle",
        "profileurl": "https://steamcommunity.com/id/rabscuttle/",
        "avatarfull": "https://avatars.example/full.jpg",
        "communityvisibilitystate": 3,
        "profilestate": 1,
        "personastate": 0,
        "timecreated": 1063407589,
        "loccountrycode": "US",
    }
    data.update(overrides)
    return SteamProfile.model_validate(data)


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def steam_client() -> FakeSteamClient:
    client = FakeSteamClient()
    client.profiles[STEAM_ID] = make_profile()
    return client


@pytest.fixture
def cache() -> CacheManager:
    return CacheManager(local_store=LocalTTLStore(check_period_seconds=0))
