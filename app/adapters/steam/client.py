"""Steam Web API client adapter.

Every outbound call first waits on the client's ``MinIntervalThrottle`` so
requests leave at least ``min_interval_seconds`` apart. HTTP outcomes are
translated into the application error taxonomy:

- 401 -> ``InvalidCredentialAppError`` (logged as critical, never absorbed)
- 403 -> ``PrivateResourceAppError``
- other non-2xx, timeouts, transport errors, bad JSON -> ``UpstreamAppError``

There are no retries.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from app.adapters.rate_limit.min_interval import MinIntervalThrottle
from app.adapters.steam.base import AbstractSteamClient
from app.core.errors import (
    AppError,
    InvalidCredentialAppError,
    NotFoundAppError,
    PrivateResourceAppError,
    UpstreamAppError,
)
from app.core.logging import redact_url
from app.schemas.steam import Inventory, MarketPrice, PlayerStats, SteamGame, SteamProfile

logger = logging.getLogger(__name__)

PLAYER_SUMMARIES_PATH = "/ISteamUser/GetPlayerSummaries/v0002/"
OWNED_GAMES_PATH = "/IPlayerService/GetOwnedGames/v0001/"
PLAYER_ACHIEVEMENTS_PATH = "/ISteamUserStats/GetPlayerAchievements/v0001/"
MARKET_PRICE_PATH = "/market/priceoverview/"


class SteamApiClient(AbstractSteamClient):
    """Typed client for the Steam Web API and Steam Community endpoints."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.steampowered.com",
        community_base_url: str = "https://steamcommunity.com",
        min_interval_seconds: float = 1.0,
        timeout_seconds: float = 10.0,
        market_timeout_seconds: float = 5.0,
        user_agent: str = "SafeSteamTools/1.0.0 (Legal Steam Data Viewer)",
        market_currency: int = 1,
        language: str = "english",
        transport: httpx.AsyncBaseTransport | None = None,
        throttle: MinIntervalThrottle | None = None,
    ) -> None:
        """Initialize the HTTP client and its throttle.

        Args:
            api_key: Steam Web API key, sent as the ``key`` query parameter.
            base_url: Web API root.
            community_base_url: Community root used for inventory and market.
            min_interval_seconds: Minimum gap between outbound requests.
            timeout_seconds: Default per-request timeout.
            market_timeout_seconds: Timeout for market price lookups.
            user_agent: User-Agent header value.
            market_currency: Market currency id.
            language: Language for achievement names.
            transport: Optional httpx transport (tests use ``MockTransport``).
            throttle: Optional pre-built throttle; one is created otherwise.
        """
        self._api_key = api_key
        self._community_base_url = community_base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._market_timeout = market_timeout_seconds
        self._market_currency = market_currency
        self._language = language
        self.throttle = throttle or MinIntervalThrottle(min_interval_seconds)
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            headers={"User-Agent": user_agent},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get_json(
        self,
        url: str,
        *,
        resource: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Throttled GET returning the decoded JSON body.

        Raises:
            InvalidCredentialAppError, PrivateResourceAppError, UpstreamAppError
        """
        await self.throttle.wait()

        try:
            response = await self._http.get(url, params=params, timeout=timeout or self._timeout)
        except httpx.TimeoutException as exc:
            logger.error("steam.request_timeout", extra={"resource": resource, "error_msg": str(exc)})
            raise UpstreamAppError(
                code="steam_api_timeout",
                message="Steam API request timed out",
                details={"status": None, "message": str(exc)},
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("steam.request_failed", extra={"resource": resource, "error_msg": str(exc)})
            raise UpstreamAppError(
                code="steam_api_error",
                message="Steam API request failed",
                details={"status": None, "message": str(exc)},
            ) from exc

        logger.info(
            "steam.request",
            extra={
                "resource": resource,
                "url": redact_url(str(response.request.url)),
                "status_code": response.status_code,
            },
        )

        if response.is_error:
            self._raise_for_status(response, resource)

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamAppError(
                code="steam_api_invalid_response",
                message="Steam API returned an invalid response",
                details={"status": response.status_code, "message": str(exc)},
            ) from exc

    def _raise_for_status(self, response: httpx.Response, resource: str) -> None:
        status = response.status_code
        if status == 401:
            logger.critical("steam.invalid_credential", extra={"resource": resource, "status_code": status})
            raise InvalidCredentialAppError(
                code="invalid_api_key",
                message="Invalid Steam API key",
            )

        logger.error(
            "steam.request_rejected",
            extra={"resource": resource, "status_code": status, "reason": response.reason_phrase},
        )
        if status == 403:
            raise PrivateResourceAppError(
                code=f"private_{resource}",
                message=f"Steam {resource} is private or does not exist",
                details={"status": status},
            )
        raise UpstreamAppError(
            code="steam_api_error",
            message="Steam API request failed",
            details={"status": status, "message": response.reason_phrase},
        )

    async def get_profile(self, steam_id: str) -> SteamProfile:
        data = await self._get_json(
            PLAYER_SUMMARIES_PATH,
            resource="profile",
            params={"key": self._api_key, "steamids": steam_id},
        )

        players = _dig(data, "response", "players") or []
        if not players:
            raise NotFoundAppError(
                code="profile_not_found",
                message="Steam profile not found",
                details={"steam_id": steam_id},
            )

        try:
            profile = SteamProfile.model_validate(players[0])
        except ValidationError as exc:
            raise UpstreamAppError(
                code="steam_api_invalid_response",
                message="Steam API returned an invalid profile",
                details={"message": str(exc)},
            ) from exc

        if not profile.is_public:
            raise PrivateResourceAppError(
                code="private_profile",
                message="Steam profile is private",
                details={"steam_id": steam_id},
            )
        return profile

    async def get_owned_games(self, steam_id: str) -> list[SteamGame]:
        try:
            data = await self._get_json(
                OWNED_GAMES_PATH,
                resource="games",
                params={
                    "key": self._api_key,
                    "steamid": steam_id,
                    "format": "json",
                    "include_appinfo": "true",
                    "include_played_free_games": "true",
                },
            )
            # A private library answers 200 with an empty "response"
            games = _dig(data, "response", "games") or []
            return [SteamGame.model_validate(game) for game in games]
        except InvalidCredentialAppError:
            raise
        except (AppError, ValidationError) as exc:
            _log_absorbed("games", exc, steam_id=steam_id)
            return []

    async def get_player_achievements(self, steam_id: str, app_id: int) -> PlayerStats | None:
        try:
            data = await self._get_json(
                PLAYER_ACHIEVEMENTS_PATH,
                resource="achievements",
                params={
                    "key": self._api_key,
                    "steamid": steam_id,
                    "appid": app_id,
                    "l": self._language,
                },
            )
            stats = _dig(data, "playerstats")
            return PlayerStats.model_validate(stats) if stats else None
        except InvalidCredentialAppError:
            raise
        except (AppError, ValidationError) as exc:
            _log_absorbed("achievements", exc, steam_id=steam_id, app_id=app_id)
            return None

    async def get_inventory(self, steam_id: str, app_id: int, context_id: int = 2) -> Inventory:
        url = f"{self._community_base_url}/inventory/{steam_id}/{app_id}/{context_id}"
        try:
            data = await self._get_json(url, resource="inventory")
            return Inventory.model_validate(data or {})
        except InvalidCredentialAppError:
            raise
        except (AppError, ValidationError) as exc:
            _log_absorbed("inventory", exc, steam_id=steam_id, app_id=app_id)
            return Inventory()

    async def get_market_price(self, app_id: int, market_hash_name: str) -> MarketPrice:
        try:
            data = await self._get_json(
                f"{self._community_base_url}{MARKET_PRICE_PATH}",
                resource="market_price",
                params={
                    "appid": app_id,
                    "currency": self._market_currency,
                    "market_hash_name": market_hash_name,
                },
                timeout=self._market_timeout,
            )
            return MarketPrice.model_validate(data or {})
        except InvalidCredentialAppError:
            raise
        except (AppError, ValidationError) as exc:
            _log_absorbed("market_price", exc, app_id=app_id)
            return MarketPrice(success=False)


def _dig(data: Any, *path: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""

    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _log_absorbed(resource: str, exc: Exception, **fields: Any) -> None:
    logger.debug(
        "steam.optional_resource_unavailable",
        extra={
            "resource": resource,
            "error_type": type(exc).__name__,
            "error_code": getattr(exc, "code", None),
            **fields,
        },
    )
