"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from policy_admin.core.config import Settings, clear_settings_cache, get_settings


class TestSettings:
    """Test Settings validation and derived properties."""

    def test_defaults(self) -> None:
        """Defaults target a local SQLite file in development."""
        settings = Settings()

        assert settings.database_url == "sqlite+aiosqlite:///./policy_admin.db"
        assert settings.api_env == "development"
        assert settings.api_port == 8080
        assert settings.is_development
        assert settings.seeding_allowed
        assert settings.is_sqlite
        assert not settings.is_production
        assert not settings.seed_on_startup

    @pytest.mark.parametrize(
        "url",
        [
            "postgresql://user:pw@db:5432/policies",
            "postgres://user:pw@db:5432/policies",
        ],
    )
    def test_postgres_urls_use_asyncpg(self, url: str) -> None:
        """Plain PostgreSQL URLs are routed through asyncpg."""
        settings = Settings(database_url=url)

        assert settings.database_url == "postgresql+asyncpg://user:pw@db:5432/policies"
        assert not settings.is_sqlite

    def test_production_disallows_seeding(self) -> None:
        """Seeding is a development-only operation."""
        settings = Settings(api_env="production")

        assert settings.is_production
        assert not settings.seeding_allowed

    def test_seed_on_startup_refused_outside_development(self) -> None:
        """Startup seeding cannot be switched on in staging or production."""
        with pytest.raises(ValidationError, match="seed_on_startup"):
            Settings(api_env="staging", seed_on_startup=True)

    def test_seed_on_startup_allowed_locally(self) -> None:
        """Local environments may seed at startup."""
        assert Settings(api_env="local", seed_on_startup=True).seed_on_startup

    @pytest.mark.parametrize(
        ("field_name", "value"),
        [
            ("api_env", "qa"),
            ("log_level", "VERBOSE"),
            ("api_port", 0),
            ("api_cors_origins", ["localhost:3000"]),
        ],
    )
    def test_invalid_values(self, field_name: str, value: object) -> None:
        """Out-of-range or malformed values are rejected."""
        with pytest.raises(ValidationError):
            Settings(**{field_name: value})

    def test_settings_are_frozen(self) -> None:
        """Settings cannot be mutated after creation."""
        settings = Settings()

        with pytest.raises(ValidationError):
            settings.api_port = 9000  # type: ignore[misc]

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Values come from environment variables."""
        monkeypatch.setenv("API_ENV", "staging")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings()

        assert settings.api_env == "staging"
        assert settings.log_level == "DEBUG"


class TestSettingsCache:
    """Test the cached settings accessor."""

    def test_cached_until_cleared(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_settings() returns one instance until the cache is cleared."""
        first = get_settings()
        assert get_settings() is first

        monkeypatch.setenv("API_PORT", "9090")
        assert get_settings().api_port == first.api_port

        clear_settings_cache()
        assert get_settings().api_port == 9090
