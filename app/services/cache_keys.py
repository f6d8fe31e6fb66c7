"""Cache key layout and TTLs shared by every handler.

Other processes reading the same Redis rely on these exact shapes.
"""

from __future__ import annotations

PROFILE_TTL_SECONDS = 300
GAMES_TTL_SECONDS = 300
ACHIEVEMENTS_TTL_SECONDS = 600
INVENTORY_TTL_SECONDS = 600
PRICES_TTL_SECONDS = 1800


def profile_key(steam_id: str) -> str:
    return f"profile:{steam_id}"


def games_key(steam_id: str) -> str:
    return f"games:{steam_id}"


def achievements_key(steam_id: str, app_id: int) -> str:
    return f"achievements:{steam_id}:{app_id}"


def inventory_key(steam_id: str, app_id: int, context_id: int) -> str:
    return f"inventory:{steam_id}:{app_id}:{context_id}"


def prices_key(steam_id: str, app_id: int, context_id: int, limit: int) -> str:
    return f"prices:{steam_id}:{app_id}:{context_id}:{limit}"
