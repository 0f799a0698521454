# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Response shapes for policy terms.

Summary rows are what the search endpoint lists; the detail shape adds the
bookkeeping timestamps.
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from beartype import beartype
from pydantic import Field

from ..models.base import as_utc
from ..models.policy import PolicyTerm
from ..services.policy_term_service import PageResult
from .common import FrozenSchema

_CENTS = Decimal("0.01")


class PolicyTermSummary(FrozenSchema):
    """A term joined with its parent policy's identifying fields."""

    id: UUID = Field(..., description="Term identifier")
    policy_number: str = Field(..., min_length=1, description="Parent policy number")
    insured_name: str = Field(..., min_length=1, description="Parent policy insured name")
    term_number: int = Field(..., ge=1, description="Sequential term number within the policy")
    state: str = Field(..., description="Jurisdiction code")
    status: str = Field(..., description="Term lifecycle label")
    effective_from_date: date = Field(..., description="Coverage start")
    effective_to_date: date = Field(..., description="Coverage end")
    balance_due: Decimal = Field(
        ..., ge=Decimal("0.00"), decimal_places=2, description="Outstanding balance"
    )
    next_due_date: date | None = Field(default=None, description="Next installment due")
    last_payment_date: date | None = Field(default=None, description="Last payment received")

    @classmethod
    @beartype
    def from_entity(cls, term: PolicyTerm) -> "PolicyTermSummary":
        """Shape a loaded term (with its policy) as a summary row."""
        return cls(**_summary_fields(term))


class PolicyTermDetail(PolicyTermSummary):
    """Summary fields plus creation and update timestamps."""

    created_at: datetime = Field(..., description="Timestamp when the term was created")
    updated_at: datetime = Field(..., description="Timestamp when the term was last updated")

    @classmethod
    @beartype
    def from_entity(cls, term: PolicyTerm) -> "PolicyTermDetail":
        """Shape a loaded term (with its policy) as a detail payload."""
        return cls(
            **_summary_fields(term),
            created_at=as_utc(term.created_at),
            updated_at=as_utc(term.updated_at),
        )


class PolicyTermPage(FrozenSchema):
    """One page of search results."""

    items: list[PolicyTermSummary] = Field(..., description="Terms on this page")
    page: int = Field(..., ge=0, description="Zero-based page number")
    size: int = Field(..., ge=1, le=200, description="Requested page size")
    total_elements: int = Field(..., ge=0, description="Matches across all pages")
    total_pages: int = Field(..., ge=0, description="Number of pages")

    @classmethod
    @beartype
    def from_result(cls, result: PageResult[PolicyTerm]) -> "PolicyTermPage":
        """Shape a search result page."""
        return cls(
            items=[PolicyTermSummary.from_entity(term) for term in result.items],
            page=result.page,
            size=result.size,
            total_elements=result.total_elements,
            total_pages=result.total_pages,
        )


def _summary_fields(term: PolicyTerm) -> dict[str, object]:
    policy = term.policy
    return {
        "id": term.id,
        "policy_number": policy.policy_number,
        "insured_name": policy.insured_name,
        "term_number": term.term_number,
        "state": term.state,
        "status": term.status,
        "effective_from_date": term.effective_from_date,
        "effective_to_date": term.effective_to_date,
        "balance_due": Decimal(term.balance_due).quantize(_CENTS),
        "next_due_date": term.next_due_date,
        "last_payment_date": term.last_payment_date,
    }
