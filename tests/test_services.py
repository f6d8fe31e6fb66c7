"""Tests for the request services: cache usage and response shaping."""

from __future__ import annotations

import time

import httpx
import pytest

from app.adapters.cache.tiered import CacheManager
from app.adapters.steam.client import SteamApiClient
from app.core.errors import NotFoundAppError, PrivateResourceAppError
from app.schemas.steam import (
    Achievement,
    Inventory,
    InventoryAsset,
    InventoryDescription,
    MarketPrice,
    PlayerStats,
    SteamGame,
)
from app.services.games_service import ACHIEVEMENTS_UNAVAILABLE, GamesService
from app.services.inventory_service import InventoryService, summarize_inventory
from app.services.profile_service import ProfileService
from tests.conftest import STEAM_ID, FakeSteamClient


def _inventory() -> Inventory:
    return Inventory(
        assets=[
            InventoryAsset(assetid="1", classid="100", instanceid="0"),
            InventoryAsset(assetid="2", classid="200", instanceid="5", amount="3"),
            InventoryAsset(assetid="3", classid="300", instanceid="0"),
        ],
        descriptions=[
            InventoryDescription(
                classid="100",
                instanceid="0",
                name="AK-47 | Redline",
                market_hash_name="AK-47 | Redline (Field-Tested)",
                icon_url="abc",
                marketable=1,
                tradable=1,
            ),
            InventoryDescription(
                classid="200",
                instanceid="5",
                name="Sticker",
                market_hash_name="Sticker | Team",
                marketable=1,
            ),
        ],
    )


class TestProfileService:
    @pytest.mark.asyncio
    async def test_miss_then_hit(self, steam_client: FakeSteamClient, cache: CacheManager) -> None:
        service = ProfileService(steam_client, cache)

        first = await service.get_profile(STEAM_ID)
        second = await service.get_profile(STEAM_ID)

        assert first.cached is False
        assert second.cached is True
        assert second.personaname == "Rabscuttle"
        assert steam_client.count("get_profile") == 1
        assert await cache.keys("profile:*") == [f"profile:{STEAM_ID}"]

    @pytest.mark.asyncio
    async def test_private_profile_is_never_cached(
        self, steam_client: FakeSteamClient, cache: CacheManager
    ) -> None:
        steam_client.profile_error = PrivateResourceAppError(code="private_profile", message="private")
        service = ProfileService(steam_client, cache)

        for _ in range(2):
            with pytest.raises(PrivateResourceAppError):
                await service.get_profile(STEAM_ID)

        assert steam_client.count("get_profile") == 2
        assert await cache.keys("*") == []

    @pytest.mark.asyncio
    async def test_missing_profile_propagates(self, cache: CacheManager) -> None:
        service = ProfileService(FakeSteamClient(), cache)

        with pytest.raises(NotFoundAppError):
            await service.get_profile(STEAM_ID)

    @pytest.mark.asyncio
    async def test_export_contains_public_fields_only(
        self, steam_client: FakeSteamClient, cache: CacheManager
    ) -> None:
        export = await ProfileService(steam_client, cache).export_profile(STEAM_ID)

        assert export.export_info.steam_id == STEAM_ID
        assert export.export_info.data_type == "public_profile"
        assert export.profile_data.personaname == "Rabscuttle"
        assert "primaryclanid" not in export.profile_data.model_dump()


class TestGamesService:
    @pytest.mark.asyncio
    async def test_games_are_shaped_and_cached(
        self, steam_client: FakeSteamClient, cache: CacheManager
    ) -> None:
        steam_client.games = [
            SteamGame(appid=730, name="CS2", playtime_forever=60, img_icon_url="icon"),
        ]
        service = GamesService(steam_client, cache)

        first = await service.get_games(STEAM_ID)
        second = await service.get_games(STEAM_ID)

        assert first.game_count == 1
        assert first.games[0].img_icon_url.endswith("/730/icon.jpg")
        assert first.games[0].img_logo_url is None
        assert first.games[0].playtime_2weeks == 0
        assert second.cached is True
        assert steam_client.count("get_owned_games") == 1

    @pytest.mark.asyncio
    async def test_empty_library_is_not_cached(
        self, steam_client: FakeSteamClient, cache: CacheManager
    ) -> None:
        service = GamesService(steam_client, cache)

        response = await service.get_games(STEAM_ID)
        await service.get_games(STEAM_ID)

        assert response.game_count == 0
        assert response.games == []
        assert steam_client.count("get_owned_games") == 2

    @pytest.mark.asyncio
    async def test_achievements_cached_when_present(
        self, steam_client: FakeSteamClient, cache: CacheManager
    ) -> None:
        steam_client.stats = PlayerStats(
            gameName="Portal",
            achievements=[Achievement(apiname="A", achieved=1, unlocktime=10)],
        )
        service = GamesService(steam_client, cache)

        first = await service.get_achievements(STEAM_ID, 400)
        second = await service.get_achievements(STEAM_ID, 400)

        assert first.game_name == "Portal"
        assert first.achievements[0].apiname == "A"
        assert second.cached is True
        assert steam_client.count("get_player_achievements") == 1

    @pytest.mark.asyncio
    async def test_unavailable_achievements_report_error(
        self, steam_client: FakeSteamClient, cache: CacheManager
    ) -> None:
        service = GamesService(steam_client, cache)

        response = await service.get_achievements(STEAM_ID, 400)

        assert response.achievements is None
        assert response.error == ACHIEVEMENTS_UNAVAILABLE
        assert await cache.keys("achievements:*") == []


class TestInventoryService:
    def test_summarize_joins_assets_with_descriptions(self) -> None:
        summary = summarize_inventory(_inventory())

        assert summary.item_count == 3
        assert summary.total_inventory_count == 3
        first, second, third = summary.items
        assert first.name == "AK-47 | Redline"
        assert first.tradable is True
        assert first.icon_url.endswith("/economy/image/abc")
        assert second.name == "Sticker"
        assert second.amount == "3"
        assert second.tradable is False
        # asset without a description keeps its ids only
        assert third.name is None
        assert third.marketable is False

    @pytest.mark.asyncio
    async def test_inventory_cached_when_not_empty(
        self, steam_client: FakeSteamClient, cache: CacheManager
    ) -> None:
        steam_client.inventory = _inventory()
        service = InventoryService(steam_client, cache)

        first = await service.get_inventory(STEAM_ID, 730, 2)
        second = await service.get_inventory(STEAM_ID, 730, 2)

        assert first.cached is False
        assert second.cached is True
        assert second.item_count == 3
        assert await cache.keys("inventory:*") == [f"inventory:{STEAM_ID}:730:2"]

    @pytest.mark.asyncio
    async def test_empty_inventory_is_not_cached(
        self, steam_client: FakeSteamClient, cache: CacheManager
    ) -> None:
        response = await InventoryService(steam_client, cache).get_inventory(STEAM_ID, 730, 2)

        assert response.item_count == 0
        assert await cache.keys("*") == []

    @pytest.mark.asyncio
    async def test_prices_limit_marketable_items(
        self, steam_client: FakeSteamClient, cache: CacheManager
    ) -> None:
        steam_client.inventory = _inventory()
        steam_client.prices["AK-47 | Redline (Field-Tested)"] = MarketPrice(
            success=True, lowest_price="$10.00", median_price="$11.00", volume="42"
        )
        service = InventoryService(steam_client, cache)

        response = await service.get_prices(STEAM_ID, 730, 2, limit=1)

        assert response.total_items == 3
        assert response.marketable_items == 1
        assert response.priced_items == 1
        item = response.items_with_prices[0]
        assert item.lowest_price == "$10.00"
        assert item.success is True
        assert steam_client.count("get_market_price") == 1

    @pytest.mark.asyncio
    async def test_prices_report_unavailable_items_and_reuse_inventory(
        self, steam_client: FakeSteamClient, cache: CacheManager
    ) -> None:
        steam_client.inventory = _inventory()
        service = InventoryService(steam_client, cache)

        await service.get_inventory(STEAM_ID, 730, 2)
        response = await service.get_prices(STEAM_ID, 730, 2, limit=20)
        again = await service.get_prices(STEAM_ID, 730, 2, limit=20)

        assert response.marketable_items == 2
        assert response.priced_items == 0
        assert all(item.error == "Price not available" for item in response.items_with_prices)
        assert all(item.lowest_price == "N/A" for item in response.items_with_prices)
        assert again.cached is True
        assert steam_client.count("get_inventory") == 1
        assert steam_client.count("get_market_price") == 2


@pytest.mark.asyncio
async def test_price_lookups_respect_the_outbound_interval(cache: CacheManager) -> None:
    stamps: list[float] = []

    def handler(request: httpx.Request) -> httpx.Response:
        stamps.append(time.monotonic())
        if request.url.path.startswith("/inventory/"):
            return httpx.Response(200, json=_inventory().model_dump())
        return httpx.Response(200, json={"success": True, "lowest_price": "$1.00"})

    client = SteamApiClient(
        "0123456789ABCDEF0123456789ABCDEF",
        min_interval_seconds=0.05,
        transport=httpx.MockTransport(handler),
    )
    service = InventoryService(client, cache)

    response = await service.get_prices(STEAM_ID, 730, 2, limit=4)
    await client.aclose()

    assert response.priced_items == 2
    # one inventory fetch plus one market call per marketable item
    assert len(stamps) == 3
    gaps = [b - a for a, b in zip(stamps, stamps[1:])]
    assert all(gap >= 0.045 for gap in gaps)
