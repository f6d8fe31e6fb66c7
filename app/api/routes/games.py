from fastapi import APIRouter, Depends

from app.core.dependencies import get_games_service
from app.core.rate_limit import enforce_rate_limit
from app.core.validation import validate_app_id, validate_steam_id
from app.schemas.games import AchievementsResponse, GamesResponse
from app.services.games_service import GamesService

router = APIRouter(
    prefix="/games",
    tags=["Games"],
    dependencies=[Depends(enforce_rate_limit)],
)


@router.get("/{steamid}", response_model=GamesResponse)
async def get_games(
    steamid: str,
    service: GamesService = Depends(get_games_service),
) -> GamesResponse:
    """Owned games; an empty list when the library is private."""
    return await service.get_games(validate_steam_id(steamid))


@router.get("/{steamid}/{appid}/achievements", response_model=AchievementsResponse)
async def get_achievements(
    steamid: str,
    appid: str,
    service: GamesService = Depends(get_games_service),
) -> AchievementsResponse:
    return await service.get_achievements(validate_steam_id(steamid), validate_app_id(appid))
