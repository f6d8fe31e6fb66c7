"""Factory for the process-wide Steam client."""

import logging
import re

from app.adapters.steam.base import AbstractSteamClient
from app.adapters.steam.client import SteamApiClient
from app.core.config import SteamSettings, settings
from app.core.errors import ValidationAppError

logger = logging.getLogger(__name__)

_API_KEY_FORMAT = re.compile(r"^[A-F0-9]{32}$")


def create_steam_client(steam_settings: SteamSettings | None = None) -> AbstractSteamClient:
    """Instantiate the Steam client from configuration.

    Args:
        steam_settings: Optional settings; defaults to the global ones.

    Returns:
        AbstractSteamClient: Client owning its own throttle and HTTP pool.

    Raises:
        ValidationAppError: If no API key is configured.
    """
    cfg = steam_settings or settings.steam

    api_key = cfg.api_key.strip()
    if not api_key:
        raise ValidationAppError(
            code="steam_missing_api_key",
            message="Steam client requires the STEAM_API_KEY environment variable",
        )
    if not _API_KEY_FORMAT.match(api_key):
        logger.warning(
            "steam.api_key_format_suspicious",
            extra={"hint": "Steam API keys are 32 uppercase hex characters"},
        )

    return SteamApiClient(
        api_key,
        base_url=cfg.base_url,
        community_base_url=cfg.community_base_url,
        min_interval_seconds=cfg.min_request_interval_ms / 1000,
        timeout_seconds=cfg.timeout_seconds,
        market_timeout_seconds=cfg.market_timeout_seconds,
        user_agent=cfg.user_agent,
        market_currency=cfg.market_currency,
        language=cfg.language,
    )
