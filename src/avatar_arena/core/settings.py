"""Application settings and configuration.

This module defines all configuration options for the Avatar Arena service.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

AggregationSetting = Literal["auto", "aggregate", "fallback"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    Leaving ``DATABASE_URL`` unset runs the service in demo mode, backed by
    an in-memory avatar list and vote tally.
    """

    # Application metadata
    app_name: str = Field(default="Avatar Arena", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Leaderboard aggregation path; "auto" probes the database once at startup.
    leaderboard_aggregation: AggregationSetting = Field(
        default="auto",
        alias="LEADERBOARD_AGGREGATION",
    )
    leaderboard_default_limit: int = Field(default=20, alias="LEADERBOARD_DEFAULT_LIMIT")
    avatars_default_limit: int = Field(default=10, alias="AVATARS_DEFAULT_LIMIT")
    max_page_size: int = Field(default=100, alias="MAX_PAGE_SIZE")

    # Video generation API
    heygen_api_url: str = Field(default="https://api.heygen.com/v2", alias="HEYGEN_API_URL")
    heygen_timeout_seconds: float = Field(default=30.0, alias="HEYGEN_TIMEOUT_SECONDS")

    # Script generation via an OpenAI-compatible chat completions API
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_api_url: str = Field(
        default="https://api.openai.com/v1/chat/completions",
        alias="OPENAI_API_URL",
    )
    openai_model: str = Field(default="gpt-3.5-turbo", alias="OPENAI_MODEL")
    openai_timeout_seconds: float = Field(default=15.0, alias="OPENAI_TIMEOUT_SECONDS")

    # Submissions are anonymous; every submission is attributed to this id.
    default_submitter_id: str = Field(
        default="550e8400-e29b-41d4-a716-446655440000",
        alias="DEFAULT_SUBMITTER_ID",
    )
    placeholder_image_url: str = Field(
        default="https://images.unsplash.com/photo-1535713875002-d1d0cf377fde?w=400&h=400&fit=crop&crop=face",
        alias="PLACEHOLDER_IMAGE_URL",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def demo_mode(self) -> bool:
        """Return True when no database is configured."""
        return not self.database_url

    @property
    def database_url_sync(self) -> str | None:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.database_url
        if url and url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url


settings = Settings()
