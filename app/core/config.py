"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

# Select the .env file for the current environment
_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


SearchProvider = Literal["duckduckgo", "google"]


class SearchSettings(BaseSettings):
    """Upstream search provider configuration.

    ``duckduckgo`` needs no credentials. ``google`` needs an API key and a
    search-engine id; when either is missing the service still starts and
    rejects search requests with HTTP 500.
    """

    provider: SearchProvider = Field(
        "duckduckgo",
        description="Upstream search API to proxy (duckduckgo or google)",
    )
    timeout_seconds: float = Field(
        8.0,
        description="Upstream request timeout in seconds",
        gt=0,
    )
    duckduckgo_url: str = Field(
        "https://api.duckduckgo.com/",
        description="DuckDuckGo Instant Answer API endpoint",
    )
    google_url: str = Field(
        "https://www.googleapis.com/customsearch/v1",
        description="Google Custom Search JSON API endpoint",
    )
    google_api_key: str | None = Field(
        None,
        validation_alias=AliasChoices("GOOGLE_API_KEY", "google_api_key"),
        description="Google Custom Search API key",
    )
    google_cx: str | None = Field(
        None,
        validation_alias=AliasChoices("GOOGLE_CX", "google_cx"),
        description="Google Programmable Search Engine id",
    )

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_",
        case_sensitive=False,
        populate_by_name=True,
    )

    @property
    def google_configured(self) -> bool:
        return bool(self.google_api_key and self.google_cx)


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    port: int = Field(
        3000,
        validation_alias=AliasChoices("PORT", "APP_PORT", "port"),
        description="TCP port the HTTP server binds",
    )
    host: str = Field(
        "0.0.0.0",
        description="Interface the HTTP server binds",
    )

    cache_ttl_seconds: float = Field(
        60,
        description="Time-to-live of cached search results in seconds",
        gt=0,
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client rate limiting on the duckduckgo search route",
    )
    rate_limit_requests: int = Field(
        60,
        description="Maximum number of requests allowed per window (per client)",
        ge=1,
    )
    rate_limit_window_seconds: int = Field(
        60,
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
        populate_by_name=True,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: Literal["json", "plain"] = Field(
        "json",
        description="Log line format",
    )
    output: Literal["stdout", "file"] = Field(
        "stdout",
        description="Where log records are written",
    )
    file_path: str | None = Field(
        None,
        description="Log file path when output is 'file' (default logs/app.log)",
    )
    max_bytes: int = Field(
        0,
        description="Rotate the log file at this size; 0 disables rotation",
        ge=0,
    )
    backup_count: int = Field(
        5,
        description="Number of rotated log files to keep",
        ge=0,
    )
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and propagate the request correlation id",
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
    search: SearchSettings = Field(default_factory=SearchSettings)
    app: AppSettings = Field(default_factory=AppSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
