from fastapi import APIRouter, Depends, Query

from app.core.config import settings
from app.core.dependencies import get_inventory_service
from app.core.rate_limit import enforce_rate_limit
from app.core.validation import validate_app_id, validate_positive_int, validate_steam_id
from app.schemas.inventory import InventoryResponse, PricesResponse
from app.services.inventory_service import InventoryService

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory"],
    dependencies=[Depends(enforce_rate_limit)],
)

DEFAULT_CONTEXT_ID = 2


@router.get("/{steamid}/{appid}", response_model=InventoryResponse)
async def get_inventory(
    steamid: str,
    appid: str,
    context_id: str | None = Query(None, description="Inventory context (2 for most games)."),
    service: InventoryService = Depends(get_inventory_service),
) -> InventoryResponse:
    """Inventory items joined with their descriptions."""
    return await service.get_inventory(
        validate_steam_id(steamid),
        validate_app_id(appid),
        validate_positive_int(context_id, field="context_id", default=DEFAULT_CONTEXT_ID),
    )


@router.get("/{steamid}/{appid}/prices", response_model=PricesResponse)
async def get_prices(
    steamid: str,
    appid: str,
    limit: str | None = Query(None, description="Number of marketable items to price."),
    context_id: str | None = Query(None, description="Inventory context (2 for most games)."),
    service: InventoryService = Depends(get_inventory_service),
) -> PricesResponse:
    """Market prices for the first ``limit`` marketable items.

    ``limit`` is capped by ``APP_PRICE_LIMIT_MAX`` to keep market lookups bounded.
    """
    return await service.get_prices(
        validate_steam_id(steamid),
        validate_app_id(appid),
        validate_positive_int(context_id, field="context_id", default=DEFAULT_CONTEXT_ID),
        validate_positive_int(
            limit,
            field="limit",
            default=settings.app.price_limit_default,
            maximum=settings.app.price_limit_max,
        ),
    )
