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


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ up front.
if _env_file and os.getenv("TESTING") != "true":
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_market_settings() -> "MarketSettings":
    """Build market data settings from environment."""

    return MarketSettings()


def _build_app_settings() -> "AppSettings":
    return AppSettings()


def _build_log_settings() -> "LogSettings":
    return LogSettings()


class MarketSettings(BaseSettings):
    """Market data provider configuration (CoinGecko v3 compatible)."""

    base_url: str = Field(
        "https://api.coingecko.com/api/v3",
        description="Base URL of the market data API",
    )
    timeout_seconds: float = Field(
        10.0,
        description="Request timeout in seconds",
    )
    vs_currency: str = Field(
        "usd",
        description="Quote currency used when none is requested",
    )
    default_ids: str = Field(
        "bitcoin,ethereum,binancecoin",
        description="Comma-separated asset ids returned when no ids are requested",
    )
    trending_limit: int = Field(
        10,
        description="Number of trending assets to resolve into market quotes",
        ge=1,
    )
    cache_ttl_seconds: int = Field(
        30,
        description="How long market responses are cached; 0 disables caching",
        ge=0,
    )
    cache_max_entries: int = Field(
        256,
        description="Maximum number of cached market responses",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="MARKET_",
        case_sensitive=False,
    )

    @property
    def default_id_list(self) -> list[str]:
        return [part.strip() for part in self.default_ids.split(",") if part.strip()]


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client rate limiting on data routes",
    )
    rate_limit_requests: int = Field(
        100,
        description="Maximum number of requests admitted per window (per client key)",
        ge=0,
    )
    rate_limit_window_ms: int = Field(
        60_000,
        description="Sliding window length in milliseconds",
        ge=1,
    )
    rate_limit_max_keys: int | None = Field(
        None,
        description="Upper bound on tracked client keys (least recently admitted evicted, which resets its quota); unset = unbounded",
        ge=1,
    )
    frame_base_url: str = Field(
        "https://cryptotrend-profx.vercel.app",
        description="Public base URL used to build social frame image and post links",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log output: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate the log file after this many bytes (0 disables rotation)",
    )
    backup_count: int = Field(5, description="Rotated log files to keep")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to receive and echo the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are malformed.
    """

    app_env: str = APP_ENV
    market: MarketSettings = Field(default_factory=_build_market_settings)
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
