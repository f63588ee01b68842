"""Application settings and configuration.

This module defines all configuration options for the Inkwell service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Inkwell Social", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./inkwell.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    create_tables: bool = Field(default=False, alias="CREATE_TABLES")

    # Caller identity is resolved by the gateway and forwarded in this header.
    identity_header: str = Field(default="X-Forwarded-User", alias="IDENTITY_HEADER")

    # Trending and search
    trending_window_days: int = Field(default=30, ge=1, alias="TRENDING_WINDOW_DAYS")
    match_context_chars: int = Field(default=50, ge=0, alias="MATCH_CONTEXT_CHARS")
    document_max_depth: int = Field(default=32, ge=1, alias="DOCUMENT_MAX_DEPTH")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
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
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
        url = self.database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        if url.startswith("postgresql+psycopg_async"):
            return url.replace("postgresql+psycopg_async", "postgresql+psycopg", 1)
        return url


settings = Settings()
