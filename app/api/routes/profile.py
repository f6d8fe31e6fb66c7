from fastapi import APIRouter, Depends, Response

from app.core.dependencies import get_profile_service
from app.core.rate_limit import enforce_rate_limit
from app.core.validation import validate_steam_id
from app.schemas.profile import ProfileExportResponse, ProfileResponse
from app.services.profile_service import ProfileService

router = APIRouter(
    prefix="/profile",
    tags=["Profile"],
    dependencies=[Depends(enforce_rate_limit)],
)


@router.get("/{steamid}", response_model=ProfileResponse)
async def get_profile(
    steamid: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Public Steam profile for ``steamid``.

    Raises:
        400 invalid_steam_id, 403 private_profile, 404 profile_not_found,
        401 invalid_api_key, 502 steam_api_error.
    """
    return await service.get_profile(validate_steam_id(steamid))


@router.get("/{steamid}/export", response_model=ProfileExportResponse)
async def export_profile(
    steamid: str,
    response: Response,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileExportResponse:
    """Profile as a downloadable JSON document."""
    export = await service.export_profile(validate_steam_id(steamid))
    response.headers["Content-Disposition"] = f'attachment; filename="steam_profile_{steamid}.json"'
    return export
