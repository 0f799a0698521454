# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Configuration management using Pydantic Settings."""

from beartype import beartype
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Environments in which the seed generator may replace the dataset
SEEDING_ENVIRONMENTS = frozenset({"development", "local"})


class Settings(BaseSettings):
    """Application settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_file=None,  # .env is loaded explicitly by entry points
        env_file_encoding="utf-8",
        frozen=True,
        validate_default=True,
        extra="forbid",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./policy_admin.db",
        description="SQLAlchemy async database URL",
        min_length=1,
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL statements to the log",
    )
    database_pool_size: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Connection pool size (ignored for SQLite)",
    )
    database_max_overflow: int = Field(
        default=10,
        ge=0,
        le=100,
        description="Connections allowed above the pool size (ignored for SQLite)",
    )

    # API Configuration
    app_name: str = Field(
        default="Policy Admin API",
        description="Application name",
        min_length=1,
    )
    api_host: str = Field(
        default="0.0.0.0",  # nosec B104 - Binding to all interfaces is needed for containerized deployment
        description="API host to bind to",
    )
    api_port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="API port to bind to",
    )
    api_env: str = Field(
        default="development",
        pattern="^(development|local|staging|production)$",
        description="API environment",
    )
    api_cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root log level",
    )

    # Seed data
    seed_on_startup: bool = Field(
        default=False,
        description="Replace the dataset with deterministic seed data at startup",
    )

    @field_validator("api_cors_origins")
    @classmethod
    def validate_cors_origins(cls: type["Settings"], v: list[str]) -> list[str]:
        """Validate CORS origins are proper URLs."""
        for origin in v:
            if not origin.startswith(("http://", "https://")):
                raise ValueError(f"Invalid CORS origin: {origin}")
        return v

    @field_validator("database_url")
    @classmethod
    def normalize_database_url(cls: type["Settings"], v: str) -> str:
        """Route plain PostgreSQL URLs through the asyncpg driver."""
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("seed_on_startup")
    @classmethod
    def validate_seed_on_startup(
        cls: type["Settings"], v: bool, info: ValidationInfo
    ) -> bool:
        """Refuse startup seeding outside development environments."""
        api_env = info.data.get("api_env")
        if v and api_env is not None and api_env not in SEEDING_ENVIRONMENTS:
            raise ValueError(
                f"seed_on_startup cannot be enabled in the {api_env} environment"
            )
        return v

    @property
    @beartype
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.api_env == "production"

    @property
    @beartype
    def is_development(self) -> bool:
        """Check if running in a development mode."""
        return self.api_env in SEEDING_ENVIRONMENTS

    @property
    @beartype
    def seeding_allowed(self) -> bool:
        """Check if the seed generator may run in this environment."""
        return self.api_env in SEEDING_ENVIRONMENTS

    @property
    @beartype
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


_settings: Settings | None = None


@beartype
def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    global _settings
    _settings = None
