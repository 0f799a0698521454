# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Policy and policy term entities.

A policy owns one renewal term per coverage year. Terms are never shared
between policies and both entities are read-only through the API.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class TermStatus(str, Enum):
    """Lifecycle labels written for policy terms.

    The column itself is a free string; this is the vocabulary the system
    writes.
    """

    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"
    NON_RENEWED = "NON_RENEWED"


class Policy(TimestampMixin, Base):
    """An insurance contract identified by a unique policy number."""

    __tablename__ = "policy"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    policy_number: Mapped[str] = mapped_column(
        String(32), unique=True, nullable=False
    )
    insured_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    terms: Mapped[list["PolicyTerm"]] = relationship(
        "PolicyTerm",
        back_populates="policy",
        cascade="all, delete-orphan",
        order_by="PolicyTerm.term_number",
    )

    def __init__(
        self,
        *,
        policy_number: str,
        insured_name: str,
        id: uuid.UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        if not policy_number.strip():
            raise ValueError("policy_number must not be blank")
        if not insured_name.strip():
            raise ValueError("insured_name must not be blank")
        super().__init__(
            id=id or uuid.uuid4(),
            policy_number=policy_number,
            insured_name=insured_name,
        )
        self._stamp(created_at, updated_at)

    def __repr__(self) -> str:
        return f"<Policy {self.policy_number}: {self.insured_name}>"


class PolicyTerm(TimestampMixin, Base):
    """A one-year renewal period of a policy with its own balance and due dates."""

    __tablename__ = "policy_term"
    __table_args__ = (
        UniqueConstraint("policy_id", "term_number", name="uq_policy_term_policy_id_term_number"),
        CheckConstraint("term_number > 0", name="term_number_positive"),
        CheckConstraint(
            "effective_from_date < effective_to_date", name="effective_window"
        ),
        CheckConstraint("balance_due >= 0", name="balance_due_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    policy_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("policy.id"), nullable=False, index=True
    )
    term_number: Mapped[int] = mapped_column(Integer, nullable=False)
    state: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    effective_from_date: Mapped[date] = mapped_column(Date, nullable=False)
    effective_to_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    balance_due: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    next_due_date: Mapped[date | None] = mapped_column(Date)
    last_payment_date: Mapped[date | None] = mapped_column(Date)

    # Relationships
    policy: Mapped["Policy"] = relationship("Policy", back_populates="terms")

    def __init__(
        self,
        *,
        policy: Policy,
        term_number: int,
        state: str,
        status: str,
        effective_from_date: date,
        effective_to_date: date,
        balance_due: Decimal,
        next_due_date: date | None = None,
        last_payment_date: date | None = None,
        id: uuid.UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        if term_number < 1:
            raise ValueError("term_number must be positive")
        if effective_from_date >= effective_to_date:
            raise ValueError("effective_from_date must be before effective_to_date")
        if balance_due < 0:
            raise ValueError("balance_due cannot be negative")
        if (
            next_due_date is not None
            and last_payment_date is not None
            and last_payment_date >= next_due_date
        ):
            raise ValueError("last_payment_date must be before next_due_date")
        super().__init__(
            id=id or uuid.uuid4(),
            policy=policy,
            policy_id=policy.id,
            term_number=term_number,
            state=state,
            status=status,
            effective_from_date=effective_from_date,
            effective_to_date=effective_to_date,
            balance_due=balance_due.quantize(Decimal("0.01")),
            next_due_date=next_due_date,
            last_payment_date=last_payment_date,
        )
        self._stamp(created_at, updated_at)

    def __repr__(self) -> str:
        return f"<PolicyTerm {self.term_number} of {self.policy_id}: {self.status}>"
