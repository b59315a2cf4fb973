"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OMDb Catalog Configuration
    omdb_api_key: str | None = Field(None, description="OMDb API key for catalog lookups")
    omdb_base_url: str = Field(
        default="https://www.omdbapi.com", description="Base URL of the OMDb API"
    )
    omdb_timeout: float = Field(default=10.0, description="Timeout in seconds for OMDb requests")

    # Catalog Rate Limiting Configuration
    catalog_rate_limit: int = Field(
        default=60, description="Max OMDb API requests per minute"
    )
    catalog_max_concurrent: int = Field(
        default=10, description="Max concurrent OMDb API requests"
    )
    catalog_max_retries: int = Field(
        default=2, description="Max retry attempts on 429 rate limit errors"
    )

    # Presentation Configuration
    placeholder_poster_url: str = Field(
        default="https://via.placeholder.com/300x450?text=No+Image",
        description="Poster shown when the catalog has no poster for a title",
    )
    dismiss_key: str = Field(default="Escape", description="Key that closes the detail overlay")

    # Application Configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to run the server on")
    log_level: str = Field(default="INFO", description="Logging level")

    # Feature Flags
    enable_telemetry: bool = Field(default=True, description="Enable PostHog telemetry")

    # PostHog Configuration
    posthog_api_key: str | None = Field(None, description="PostHog API key for telemetry")
    posthog_host: str = Field(default="https://us.i.posthog.com", description="PostHog host URL")

    # Sentry Configuration
    sentry_dsn: str | None = Field(None, description="Sentry DSN for error tracking")

    # Application Metadata
    app_name: str = Field(default="Movie-Search", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
