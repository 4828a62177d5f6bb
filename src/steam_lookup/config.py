"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation,
type coercion, and sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from steam_lookup.errors import ConfigurationError


class SteamAPIConfig(BaseSettings):
    """
    Steam endpoints and credentials.

    An instance is handed to each resolver at construction time. The
    Web API key may be left unset for game lookups; user lookups
    require it.
    """

    model_config = SettingsConfigDict(env_prefix="STEAM_", validate_assignment=True)

    api_key: SecretStr | None = Field(
        default=None,
        description="Steam Web API key from https://steamcommunity.com/dev/apikey",
    )
    base_url: str = Field(
        default="https://api.steampowered.com",
        description="Base URL for Steam Web API",
    )
    store_url: str = Field(
        default="https://store.steampowered.com/api",
        description="Base URL for Steam Store API",
    )
    search_url: str = Field(
        default="https://store.steampowered.com/search/",
        description="Steam Store search page",
    )
    lookup_url: str = Field(
        default="https://steamid.io/lookup",
        description="Profile lookup page used to resolve steamID64",
    )
    user_agent: str = Field(
        default="Mozilla/5.0",
        description="User-Agent sent with every request",
    )
    country_code: str = Field(
        default="US",
        min_length=2,
        max_length=2,
        description="Country used for store pricing",
    )
    language: str = Field(
        default="english",
        description="Language for store descriptions",
    )
    timeout_seconds: float = Field(
        default=30,
        ge=1,
        le=120,
        description="HTTP request timeout in seconds",
    )

    @field_validator("base_url", "store_url", "lookup_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so paths can be appended with '/'."""
        return v.rstrip("/")

    def set_api_key(self, key: str) -> None:
        """Set the Web API key."""
        self.api_key = SecretStr(key)

    def get_api_key(self) -> str:
        """Return the Web API key, or an empty string if it was never set."""
        if self.api_key is None:
            return ""
        return self.api_key.get_secret_value()

    def require_api_key(self) -> str:
        """
        Return the Web API key.

        Raises:
            ConfigurationError: If the key is unset or empty
        """
        key = self.get_api_key()
        if not key:
            raise ConfigurationError(
                "Steam Web API key is not configured (set STEAM_API_KEY)",
                source="config",
            )
        return key


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    format: Literal["json", "console"] = Field(
        default="console",
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

    steam: SteamAPIConfig = Field(default_factory=SteamAPIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Resolvers fall back to these settings only when no explicit
    SteamAPIConfig is passed to them.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
