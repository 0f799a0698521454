# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Policy term search and lookup.

Every optional filter contributes one predicate builder. Builders return
``None`` when their filter is absent, the remaining clauses are ANDed and
applied to an inner join from term to policy. The total is counted over the
same filtered join before offset/limit pagination.
"""

import logging
import math
from collections.abc import Callable, Sequence
from datetime import date
from typing import Generic, TypeVar
from uuid import UUID

from attrs import field, frozen, validators
from beartype import beartype
from sqlalchemy import ColumnElement, distinct, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager, joinedload

from ..core.result_types import Err, Ok, Result, ServiceError
from ..models.policy import Policy, PolicyTerm
from .sorting import DEFAULT_SORT, SortSpec

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_PAGE_SIZE = 200
DEFAULT_PAGE_SIZE = 20
TERM_NOT_FOUND = "Policy term not found"


@frozen
class PolicyTermSearch:
    """Optional search filters, as received from the caller."""

    query: str | None = field(default=None)
    state: str | None = field(default=None)
    status: str | None = field(default=None)
    exp_from: date | None = field(default=None)
    exp_to: date | None = field(default=None)


@frozen
class PageRequest:
    """Zero-based page, bounded size and a validated ordering."""

    page: int = field(default=0, validator=validators.ge(0))
    size: int = field(
        default=DEFAULT_PAGE_SIZE,
        validator=[validators.ge(1), validators.le(MAX_PAGE_SIZE)],
    )
    sort: SortSpec = field(default=DEFAULT_SORT)

    @property
    def offset(self) -> int:
        """Rows skipped before this page."""
        return self.page * self.size


@frozen
class PageResult(Generic[T]):
    """A page of entities plus the total across all pages."""

    items: Sequence[T] = field()
    page: int = field()
    size: int = field()
    total_elements: int = field()

    @property
    def total_pages(self) -> int:
        """ceil(total / size), 0 when nothing matched."""
        return math.ceil(self.total_elements / self.size) if self.total_elements else 0


Predicate = Callable[[PolicyTermSearch], ColumnElement[bool] | None]


def _clean(value: str | None) -> str | None:
    """Trim text filters; blank means absent."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _query_predicate(criteria: PolicyTermSearch) -> ColumnElement[bool] | None:
    value = _clean(criteria.query)
    if value is None:
        return None
    pattern = f"%{_escape_like(value.lower())}%"
    return or_(
        func.lower(Policy.policy_number).like(pattern, escape="\\"),
        func.lower(Policy.insured_name).like(pattern, escape="\\"),
    )


def _state_predicate(criteria: PolicyTermSearch) -> ColumnElement[bool] | None:
    value = _clean(criteria.state)
    if value is None:
        return None
    return func.lower(PolicyTerm.state) == value.lower()


def _status_predicate(criteria: PolicyTermSearch) -> ColumnElement[bool] | None:
    value = _clean(criteria.status)
    if value is None:
        return None
    return func.lower(PolicyTerm.status) == value.lower()


def _exp_from_predicate(criteria: PolicyTermSearch) -> ColumnElement[bool] | None:
    if criteria.exp_from is None:
        return None
    return PolicyTerm.effective_to_date >= criteria.exp_from


def _exp_to_predicate(criteria: PolicyTermSearch) -> ColumnElement[bool] | None:
    if criteria.exp_to is None:
        return None
    return PolicyTerm.effective_to_date <= criteria.exp_to


PREDICATES: tuple[Predicate, ...] = (
    _query_predicate,
    _state_predicate,
    _status_predicate,
    _exp_from_predicate,
    _exp_to_predicate,
)


@beartype
def build_predicates(criteria: PolicyTermSearch) -> list[ColumnElement[bool]]:
    """Return one clause per supplied filter, skipping absent ones."""
    clauses = (predicate(criteria) for predicate in PREDICATES)
    return [clause for clause in clauses if clause is not None]


class PolicyTermService:
    """Read-only access to policy terms joined with their policies."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with a request-scoped session."""
        self._session = session

    @beartype
    async def search(
        self,
        criteria: PolicyTermSearch,
        page_request: PageRequest,
    ) -> Result[PageResult[PolicyTerm], ServiceError]:
        """Filter, sort and paginate policy terms."""
        conditions = build_predicates(criteria)

        count_stmt = (
            select(func.count(distinct(PolicyTerm.id)))
            .select_from(PolicyTerm)
            .join(PolicyTerm.policy)
            .where(*conditions)
        )

        order_column = page_request.sort.column
        ordering = order_column.desc() if page_request.sort.descending else order_column.asc()
        page_stmt = (
            select(PolicyTerm)
            .join(PolicyTerm.policy)
            .options(contains_eager(PolicyTerm.policy))
            .where(*conditions)
            .distinct()
            # id breaks ties so consecutive pages never overlap
            .order_by(ordering, PolicyTerm.id.asc())
            .offset(page_request.offset)
            .limit(page_request.size)
        )

        try:
            total = (await self._session.execute(count_stmt)).scalar_one()
            if total > page_request.offset:
                items = list((await self._session.execute(page_stmt)).scalars().unique())
            else:
                items = []
        except SQLAlchemyError as e:
            logger.error("Policy term search failed: %s", e, exc_info=True)
            return Err(ServiceError.storage(f"Database error: {e.__class__.__name__}"))

        logger.debug(
            "Policy term search matched %d rows (page=%d size=%d sort=%s filters=%d)",
            total,
            page_request.page,
            page_request.size,
            page_request.sort,
            len(conditions),
        )
        return Ok(
            PageResult(
                items=items,
                page=page_request.page,
                size=page_request.size,
                total_elements=total,
            )
        )

    @beartype
    async def get(self, term_id: UUID) -> Result[PolicyTerm, ServiceError]:
        """Get a term with its policy loaded, or a not-found error."""
        stmt = (
            select(PolicyTerm)
            .options(joinedload(PolicyTerm.policy))
            .where(PolicyTerm.id == term_id)
        )
        try:
            term = (await self._session.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Policy term lookup failed: %s", e, exc_info=True)
            return Err(ServiceError.storage(f"Database error: {e.__class__.__name__}"))

        if term is None:
            return Err(ServiceError.not_found(TERM_NOT_FOUND))
        return Ok(term)
