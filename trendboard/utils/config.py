"""Type-safe environment configuration using Pydantic Settings."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Every field has a default so the scraper and dashboard run without a
    .env file. Values are validated on load.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
        env_ignore_empty=True,
    )

    APP_NAME: str = Field(
        default="trendboard",
        description="Application name"
    )

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    LOG_FORMAT: Literal["text", "json"] = Field(
        default="text",
        description="Log line format: plain text or one JSON object per line"
    )

    DEBUG: bool = Field(
        default=False,
        description="Debug mode flag"
    )

    # HTTP server
    HOST: str = Field(
        default="127.0.0.1",
        description="Interface the API server binds to"
    )

    PORT: int = Field(
        default=8000,
        description="Port the API server listens on",
        gt=0
    )

    RESPONSE_CACHE_MAX_AGE: int = Field(
        default=300,
        description="max-age advertised in the Cache-Control header, in seconds",
        ge=0
    )

    # Upstream scraping
    GITHUB_BASE_URL: str = Field(
        default="https://github.com",
        description="Origin used to resolve relative repository and user links"
    )

    GITHUB_TRENDING_URL: str = Field(
        default="https://github.com/trending",
        description="Trending listing path template root"
    )

    REQUEST_TIMEOUT: float | None = Field(
        default=None,
        description="Outbound request timeout in seconds (None keeps the transport default)",
        gt=0
    )

    DEFAULT_LANGUAGE: str = Field(
        default="python",
        description="Language used when a request omits one"
    )

    DEFAULT_SINCE: Literal["daily", "weekly", "monthly"] = Field(
        default="daily",
        description="Time window used when a request omits one"
    )

    CONTRIBUTOR_LIMIT: int = Field(
        default=5,
        description="Maximum contributors kept per repository",
        ge=0,
        le=5
    )

    # Dashboard client
    BACKEND_URL: str = Field(
        default="http://127.0.0.1:8000",
        description="Base URL of the trending API consumed by the dashboard client"
    )

    CACHE_TTL_SECONDS: int = Field(
        default=900,
        description="Freshness window of the dashboard cache in seconds",
        gt=0
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {valid_levels}, got '{v}'"
            )
        return v_upper

    @field_validator("GITHUB_BASE_URL", "GITHUB_TRENDING_URL", "BACKEND_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize URLs so path joins never produce a double slash."""
        return v.rstrip("/")


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Loads settings from environment variables and .env file on first call.
    Subsequent calls return the cached instance.

    Returns:
        Settings: The application settings instance

    Raises:
        ValidationError: If an environment variable holds an invalid value
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton. Useful for testing."""
    global _settings
    _settings = None
