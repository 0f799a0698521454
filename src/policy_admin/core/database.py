# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Database connection management with SQLAlchemy's async engine.

PostgreSQL is reached through the asyncpg driver; SQLite (aiosqlite) is used
for local runs and the test-suite.
"""

import contextlib
import logging
from collections.abc import AsyncIterator
from typing import Any

from attrs import field, frozen
from beartype import beartype
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ..models.base import Base
from .config import Settings, get_settings

logger = logging.getLogger(__name__)


@frozen
class DatabaseConfig:
    """Immutable engine configuration derived from settings."""

    url: str = field()
    echo: bool = field(default=False)
    pool_size: int = field(default=5)
    max_overflow: int = field(default=10)

    @classmethod
    @beartype
    def from_settings(cls, settings: Settings) -> "DatabaseConfig":
        """Build the engine configuration from application settings."""
        return cls(
            url=settings.database_url,
            echo=settings.database_echo,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )

    @property
    def is_sqlite(self) -> bool:
        """Check if the URL targets SQLite."""
        return self.url.startswith("sqlite")

    @property
    def is_memory(self) -> bool:
        """Check if the URL targets an in-memory SQLite database."""
        return self.is_sqlite and (":memory:" in self.url or self.url.endswith("://"))


class Database:
    """Async engine and session factory owner.

    ``connect`` creates the engine, ``disconnect`` disposes it. Sessions are
    handed out per unit of work through :meth:`session`; seeding and other
    all-or-nothing writes go through :meth:`transaction`.
    """

    def __init__(self, config: DatabaseConfig | None = None) -> None:
        """Create the manager without opening any connection."""
        self._config = config or DatabaseConfig.from_settings(get_settings())
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def config(self) -> DatabaseConfig:
        """Engine configuration."""
        return self._config

    @property
    def engine(self) -> AsyncEngine:
        """Return the engine, failing fast if connect() was not called."""
        if self._engine is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._engine

    @beartype
    def _engine_options(self) -> dict[str, Any]:
        """Driver-specific engine options."""
        if self._config.is_memory:
            # One shared connection so every session sees the same database
            return {
                "connect_args": {"check_same_thread": False},
                "poolclass": StaticPool,
            }
        if self._config.is_sqlite:
            return {"connect_args": {"check_same_thread": False}}
        return {
            "pool_size": self._config.pool_size,
            "max_overflow": self._config.max_overflow,
            "pool_pre_ping": True,
        }

    @beartype
    async def connect(self) -> None:
        """Create the async engine and session factory."""
        if self._engine is not None:
            return

        self._engine = create_async_engine(
            self._config.url,
            echo=self._config.echo,
            **self._engine_options(),
        )
        self._session_factory = async_sessionmaker(
            self._engine,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(
            "Database engine created (dialect=%s)", self._engine.dialect.name
        )

    @beartype
    async def disconnect(self) -> None:
        """Dispose the engine and its pooled connections."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    @beartype
    async def create_all(self) -> None:
        """Create every table known to the ORM metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @beartype
    async def drop_all(self) -> None:
        """Drop every table known to the ORM metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    @contextlib.asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session for a single unit of work."""
        if self._session_factory is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        async with self._session_factory() as session:
            yield session

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Yield a session inside a transaction.

        The transaction commits when the block exits normally and rolls back
        entirely when it raises.
        """
        async with self.session() as session:
            async with session.begin():
                yield session


_database: Database | None = None


@beartype
def get_database() -> Database:
    """Get the process-wide database manager."""
    global _database
    if _database is None:
        _database = Database()
    return _database

