# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Declarative base and timestamp bookkeeping for all ORM entities.

Timestamps are not maintained by database triggers or ORM events. Every
constructor stamps ``created_at``/``updated_at`` itself and every mutation
path calls :meth:`TimestampMixin.touch`.
"""

from datetime import datetime, timezone

from beartype import beartype
from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Constraint naming convention shared with the alembic migrations
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for all tables."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


@beartype
def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


@beartype
def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops the offset on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TimestampMixin:
    """Adds ``created_at``/``updated_at`` columns and explicit stamping."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def _stamp(
        self,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        """Set both timestamps at construction time.

        Missing values default to now; a missing ``updated_at`` follows
        ``created_at``.
        """
        created = as_utc(created_at) if created_at is not None else utcnow()
        updated = as_utc(updated_at) if updated_at is not None else created
        if updated < created:
            raise ValueError("updated_at cannot be earlier than created_at")
        self.created_at = created
        self.updated_at = updated

    @beartype
    def touch(self, at: datetime | None = None) -> datetime:
        """Record a mutation by refreshing ``updated_at``."""
        stamp = as_utc(at) if at is not None else utcnow()
        created = as_utc(self.created_at)
        if stamp < created:
            raise ValueError("updated_at cannot be earlier than created_at")
        self.updated_at = stamp
        return stamp
