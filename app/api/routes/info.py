from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["Info"])

API_VERSION = "1.0.0"


@router.get("/api")
def api_info() -> dict:
    """Describe the API, its endpoints and its legal notice."""

    return {
        "name": "SafeSteamTools API",
        "version": API_VERSION,
        "description": "Legal, secure Steam data viewer API",
        "endpoints": {
            "profile": "/api/profile/:steamid",
            "games": "/api/games/:steamid",
            "inventory": "/api/inventory/:steamid/:appid",
        },
        "legal": {
            "notice": "This API uses only official Steam Web APIs",
            "privacy": "Only public Steam data is accessed",
            "security": "No passwords or credentials are collected",
            "disclaimer": "Not affiliated with Valve Corporation",
        },
    }
