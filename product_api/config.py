"""Application configuration using Pydantic Settings.

Reads configuration from environment variables with sensible defaults.
Secrets such as the database password should be provided via environment variables.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    environment: Literal["prod", "staging", "dev"] = Field(
        default="dev",
        description="Environment name",
    )
    project_name: str = Field(
        default="Product Catalog API",
        description="Service title shown in the OpenAPI docs",
    )
    api_prefix: str = Field(
        default="/api",
        description="Path prefix for the product and ping routes",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # =========================================================================
    # Database
    # =========================================================================
    db_user: str = Field(
        default="catalog_app",
        description="Database user",
    )
    db_password: str = Field(
        default="",
        description="Database password",
    )
    db_name: str = Field(
        default="catalog",
        description="Database name",
    )
    db_host: str = Field(
        default="localhost",
        description="Database host",
    )
    db_port: int = Field(
        default=5432,
        description="Database port",
    )
    db_url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL, overrides the db_* parts when set",
    )
    db_pool_size: int = Field(
        default=5,
        description="Database connection pool size",
    )
    db_pool_max_overflow: int = Field(
        default=10,
        description="Max overflow connections beyond pool size",
    )
    db_create_schema: bool = Field(
        default=True,
        description="Create missing tables on startup",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Build the async database URL.

        An explicit ``db_url`` wins; otherwise a PostgreSQL URL is
        assembled for the asyncpg driver.
        """
        if self.db_url:
            return self.db_url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Output logs as JSON outside of dev",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for convenience
settings = get_settings()
