"""Inventory and market price lookups.

The prices endpoint reuses the cached inventory summary, so both endpoints
share one ``inventory:`` entry shape. Empty inventories (often private ones)
are never cached. Price lookups go through the Steam client's throttle, so
pricing ``limit`` items takes roughly ``limit`` throttle intervals.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from pydantic import ValidationError

from app.adapters.cache.tiered import CacheManager
from app.adapters.steam.base import AbstractSteamClient
from app.schemas.inventory import (
    InventoryItem,
    InventoryResponse,
    InventorySummary,
    PricedItem,
    PriceSummary,
    PricesResponse,
)
from app.schemas.steam import Inventory, InventoryDescription
from app.services import cache_keys

logger = logging.getLogger(__name__)

ECONOMY_IMAGE_BASE_URL = "https://community.akamai.steamstatic.com/economy/image"


def summarize_inventory(inventory: Inventory) -> InventorySummary:
    """Join each asset with its description (matched on classid + instanceid)."""

    descriptions: dict[tuple[str, str], InventoryDescription] = {}
    for desc in inventory.descriptions:
        descriptions.setdefault((desc.classid, desc.instanceid), desc)

    items: list[InventoryItem] = []
    for asset in inventory.assets:
        desc = descriptions.get((asset.classid, asset.instanceid))
        items.append(
            InventoryItem(
                assetid=asset.assetid,
                classid=asset.classid,
                instanceid=asset.instanceid,
                amount=asset.amount,
                name=desc.name if desc else None,
                type=desc.type if desc else None,
                market_name=desc.market_name if desc else None,
                market_hash_name=desc.market_hash_name if desc else None,
                icon_url=f"{ECONOMY_IMAGE_BASE_URL}/{desc.icon_url}" if desc and desc.icon_url else None,
                tradable=bool(desc and desc.tradable == 1),
                marketable=bool(desc and desc.marketable == 1),
                commodity=bool(desc and desc.commodity == 1),
                background_color=desc.background_color if desc else None,
            )
        )

    return InventorySummary(
        item_count=len(items),
        items=items,
        total_inventory_count=len(inventory.assets),
    )


class InventoryService:
    def __init__(self, client: AbstractSteamClient, cache: CacheManager) -> None:
        self.client = client
        self.cache = cache

    async def _load_inventory(
        self, steam_id: str, app_id: int, context_id: int
    ) -> tuple[InventorySummary, bool]:
        key = cache_keys.inventory_key(steam_id, app_id, context_id)
        raw = await self.cache.get(key)
        if raw:
            try:
                return InventorySummary.model_validate(raw), True
            except ValidationError:
                logger.warning("inventory.cache_entry_invalid", extra={"cache_key": key})

        inventory = await self.client.get_inventory(steam_id, app_id, context_id)
        summary = summarize_inventory(inventory)
        if summary.items:
            await self.cache.set(key, summary.model_dump(mode="json"), cache_keys.INVENTORY_TTL_SECONDS)
        return summary, False

    async def get_inventory(self, steam_id: str, app_id: int, context_id: int = 2) -> InventoryResponse:
        summary, cached = await self._load_inventory(steam_id, app_id, context_id)
        return InventoryResponse(
            **summary.model_dump(),
            steamid=steam_id,
            appid=app_id,
            context_id=context_id,
            cached=cached,
            timestamp=datetime.now(timezone.utc),
        )

    async def _price_item(self, app_id: int, name: str | None, market_hash_name: str) -> PricedItem:
        price = await self.client.get_market_price(app_id, market_hash_name)
        if not price.success:
            return PricedItem(
                name=name,
                market_hash_name=market_hash_name,
                success=False,
                error="Price not available",
            )
        return PricedItem(
            name=name,
            market_hash_name=market_hash_name,
            lowest_price=price.lowest_price or "N/A",
            median_price=price.median_price or "N/A",
            volume=price.volume or "N/A",
            success=True,
        )

    async def get_prices(
        self, steam_id: str, app_id: int, context_id: int = 2, limit: int = 20
    ) -> PricesResponse:
        key = cache_keys.prices_key(steam_id, app_id, context_id, limit)
        summary: PriceSummary | None = None
        cached = False

        raw = await self.cache.get(key)
        if raw:
            try:
                summary = PriceSummary.model_validate(raw)
                cached = True
            except ValidationError:
                logger.warning("prices.cache_entry_invalid", extra={"cache_key": key})

        if summary is None:
            inventory, _ = await self._load_inventory(steam_id, app_id, context_id)
            marketable = [
                (item.name, item.market_hash_name)
                for item in inventory.items
                if item.marketable and item.market_hash_name
            ][:limit]
            # one lookup at a time; each waits on the client's throttle
            priced: list[PricedItem] = []
            for name, hash_name in marketable:
                priced.append(await self._price_item(app_id, name, hash_name))

            summary = PriceSummary(
                total_items=inventory.item_count,
                marketable_items=len(marketable),
                priced_items=sum(1 for item in priced if item.success),
                items_with_prices=priced,
            )
            await self.cache.set(key, summary.model_dump(mode="json"), cache_keys.PRICES_TTL_SECONDS)

        return PricesResponse(
            **summary.model_dump(),
            steamid=steam_id,
            appid=app_id,
            context_id=context_id,
            limit=limit,
            cached=cached,
            timestamp=datetime.now(timezone.utc),
        )
