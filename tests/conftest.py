"""Test configuration and fixtures.

Every test gets its own in-memory SQLite database (aiosqlite, one shared
connection) with the schema created from the ORM metadata. API tests talk to
the ASGI app through httpx without starting the lifespan, so the database is
injected through a dependency override.
"""

from collections.abc import AsyncGenerator, Generator
from typing import TYPE_CHECKING

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from policy_admin.core.config import clear_settings_cache
from policy_admin.core.database import Database, DatabaseConfig, get_database
from policy_admin.services.seed_service import SeedDataset, seed_database

if TYPE_CHECKING:
    from fastapi import FastAPI

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def reset_settings() -> Generator[None, None, None]:
    """Drop cached settings so environment tweaks never leak between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Connected in-memory database with an empty schema."""
    db = Database(DatabaseConfig(url=TEST_DATABASE_URL))
    await db.connect()
    await db.create_all()

    yield db

    await db.disconnect()


@pytest_asyncio.fixture
async def seeded(database: Database) -> SeedDataset:
    """The default deterministic dataset, loaded into the test database."""
    return await seed_database(database)


@pytest.fixture
def test_app(database: Database) -> "FastAPI":
    """Application wired to the test database."""
    from policy_admin.main import create_app

    app = create_app()
    app.dependency_overrides[get_database] = lambda: database
    return app


@pytest_asyncio.fixture
async def client(test_app: "FastAPI") -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the ASGI app."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
