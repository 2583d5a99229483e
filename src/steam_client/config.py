"""
Client configuration using Pydantic Settings.

Loads configuration from environment variables with validation,
type coercion, and sensible defaults. Every value can also be passed
explicitly at construction time.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from steam_client import __version__


class SteamClientConfig(BaseSettings):
    """Steam client configuration: credentials, caching, rate limits and matching."""

    model_config = SettingsConfigDict(env_prefix="STEAM_")

    api_key: SecretStr = Field(
        default=...,
        description="Steam Web API key from https://steamcommunity.com/dev/apikey",
    )
    api_url: str = Field(
        default="https://api.steampowered.com",
        description="Base URL for Steam Web API",
    )
    store_url: str = Field(
        default="https://store.steampowered.com/api",
        description="Base URL for Steam Store API",
    )
    store_page_url: str = Field(
        default="https://store.steampowered.com",
        description="Base URL for Steam store pages and the reviews endpoint",
    )

    # Details cache
    cache_ttl_ms: int = Field(
        default=3_600_000,
        ge=1,
        description="Time to live for cached game details in milliseconds",
    )
    cache_size: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of cached game details",
    )

    # Token bucket
    rate_limit_capacity: int = Field(
        default=200,
        ge=1,
        description="Maximum number of requests per rate limit window",
    )
    rate_limit_window_ms: int = Field(
        default=300_000,
        ge=1,
        description="Time in milliseconds to refill the bucket from empty",
    )

    # Matching
    default_fuzzy_threshold: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Maximum fuzzy distance accepted (0 = exact, 1 = anything)",
    )

    # Transport
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="HTTP request timeout in seconds",
    )
    user_agent: str = Field(
        default=f"steam-client/{__version__}",
        description="User-Agent header sent with every request",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )
    include_timestamp: bool = Field(
        default=True,
        description="Include timestamp in log entries",
    )


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections and provides
    a single entry point for configuration access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )

    steam: SteamClientConfig = Field(default_factory=SteamClientConfig)  # type: ignore[arg-type]
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
