"""Pydantic schemas for inventory and market price responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

PRICE_DISCLAIMER = (
    "Prices are estimates and may not reflect actual market values. "
    "Not guaranteed to be accurate."
)


class InventoryItem(BaseModel):
    """An inventory asset joined with its description."""

    assetid: str
    classid: str
    instanceid: str
    amount: str
    name: str | None = None
    type: str | None = None
    market_name: str | None = None
    market_hash_name: str | None = None
    icon_url: str | None = None
    tradable: bool = False
    marketable: bool = False
    commodity: bool = False
    background_color: str | None = None


class InventorySummary(BaseModel):
    """The cached part of an inventory response."""

    item_count: int
    items: list[InventoryItem]
    total_inventory_count: int


class InventoryResponse(InventorySummary):
    steamid: str
    appid: int
    context_id: int
    cached: bool
    timestamp: datetime


class PricedItem(BaseModel):
    name: str | None = None
    market_hash_name: str
    lowest_price: str = "N/A"
    median_price: str = "N/A"
    volume: str = "N/A"
    success: bool
    error: str | None = None


class PriceSummary(BaseModel):
    """The cached part of a prices response."""

    total_items: int
    marketable_items: int
    priced_items: int
    items_with_prices: list[PricedItem]
    disclaimer: str = Field(PRICE_DISCLAIMER)


class PricesResponse(PriceSummary):
    steamid: str
    appid: int
    context_id: int
    limit: int
    cached: bool
    timestamp: datetime
