"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_ENV = os.getenv("APP_ENV", "development")

PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ first
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_steam_settings() -> "SteamSettings":
    """Build Steam settings from environment.

    BaseSettings reads required fields from the environment; the type ignore
    keeps static checkers from treating them as constructor arguments.
    """

    return SteamSettings()  # type: ignore[call-arg]


class SteamSettings(BaseSettings):
    """Upstream Steam Web API configuration."""

    api_key: str = Field(
        ...,
        description="Steam Web API key (32 hex characters)",
    )
    base_url: str = Field(
        "https://api.steampowered.com",
        description="Steam Web API base URL",
    )
    community_base_url: str = Field(
        "https://steamcommunity.com",
        description="Steam Community base URL (inventory and market endpoints)",
    )
    min_request_interval_ms: int = Field(
        1000,
        description="Minimum gap between two outbound requests in milliseconds",
        ge=0,
    )
    timeout_seconds: float = Field(
        10.0,
        description="Timeout for Web API and inventory requests",
        gt=0,
    )
    market_timeout_seconds: float = Field(
        5.0,
        description="Timeout for market price lookups",
        gt=0,
    )
    user_agent: str = Field(
        "SafeSteamTools/1.0.0 (Legal Steam Data Viewer)",
        description="User-Agent header sent upstream",
    )
    market_currency: int = Field(
        1,
        description="Steam market currency id (1 = USD)",
    )
    language: str = Field(
        "english",
        description="Language used for achievement names",
    )

    model_config = SettingsConfigDict(
        env_prefix="STEAM_",
        case_sensitive=False,
    )


class CacheSettings(BaseSettings):
    """Tiered cache configuration (Redis with in-process fallback)."""

    redis_enabled: bool = Field(
        True,
        description="Try Redis on startup; when false the local store is always used",
    )
    redis_url: str = Field(
        "redis://localhost:6379/0",
        description="Redis connection URL",
    )
    connect_timeout_seconds: float = Field(
        5.0,
        description="Redis connect timeout",
        gt=0,
    )
    socket_timeout_seconds: float = Field(
        5.0,
        description="Redis per-command socket timeout",
        gt=0,
    )
    default_ttl_seconds: int = Field(
        300,
        description="TTL applied when a caller does not pass one",
        ge=1,
    )
    check_period_seconds: float = Field(
        60.0,
        description="How often the local store sweeps expired entries",
        ge=0,
    )
    health_check_interval_seconds: float = Field(
        30.0,
        description="Redis liveness ping period; 0 disables the watcher",
        ge=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode (error details in responses)",
    )
    host: str = Field(
        "0.0.0.0",
        description="Bind address for the HTTP server",
    )
    port: int = Field(
        3001,
        description="Bind port for the HTTP server",
    )
    cors_origins: str = Field(
        "http://localhost:3000",
        description="Comma-separated list of allowed CORS origins",
    )
    max_request_bytes: int = Field(
        1024 * 1024,
        description="Largest accepted request body (Content-Length)",
        ge=1,
    )
    price_limit_default: int = Field(
        20,
        description="Default number of items priced per request",
        ge=1,
    )
    price_limit_max: int = Field(
        50,
        description="Upper bound on the number of items priced per request",
        ge=1,
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable inbound rate limiting per client IP",
    )
    rate_limit_requests: int = Field(
        100,
        description="Maximum number of requests allowed per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: int = Field(
        900,
        description="Rate limit window size in seconds",
        ge=1,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="json or plain")
    output: str = Field("stdout", description="stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(10 * 1024 * 1024, description="Rotate after this many bytes (0 = never)")
    backup_count: int = Field(5, description="Rotated files to keep")
    request_id_header: str = Field("X-Request-ID", description="Correlation header name")

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if required settings are missing
    (STEAM_API_KEY).
    """

    app_env: str = APP_ENV
    steam: SteamSettings = Field(default_factory=_build_steam_settings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    app: AppSettings = Field(default_factory=AppSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


settings = Settings()
