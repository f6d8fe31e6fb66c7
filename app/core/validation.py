"""Path and query parameter validation.

Raises ``ValidationAppError`` so malformed ids get the standard 400 error
body instead of FastAPI's 422.
"""

from __future__ import annotations

import re

from app.core.errors import ValidationAppError

STEAM_ID_PATTERN = re.compile(r"^\d{17}$")
APP_ID_PATTERN = re.compile(r"^\d+$")


def validate_steam_id(steam_id: str) -> str:
    """Return ``steam_id`` if it is a 17-digit SteamID64."""

    if not STEAM_ID_PATTERN.match(steam_id):
        raise ValidationAppError(
            code="invalid_steam_id",
            message="Invalid Steam ID format",
            details={"field": "steamid", "hint": "Steam IDs are 17 digits"},
        )
    return steam_id


def validate_app_id(app_id: str) -> int:
    """Parse a numeric app id."""

    if not APP_ID_PATTERN.match(app_id):
        raise ValidationAppError(
            code="invalid_app_id",
            message="Invalid App ID format",
            details={"field": "appid"},
        )
    return int(app_id)


def validate_positive_int(value: str | None, *, field: str, default: int, maximum: int | None = None) -> int:
    """Parse an optional positive integer query parameter, clamped to ``maximum``."""

    if value is None or value == "":
        return default
    if not APP_ID_PATTERN.match(value) or int(value) < 1:
        raise ValidationAppError(
            code=f"invalid_{field}",
            message=f"Invalid {field}: expected a positive integer",
            details={"field": field},
        )
    parsed = int(value)
    if maximum is not None:
        parsed = min(parsed, maximum)
    return parsed
