# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""FastAPI dependencies for database sessions, services and search parameters.

All request validation happens here, before any query is issued.
"""

from collections.abc import AsyncGenerator
from datetime import date
from typing import Annotated

from beartype import beartype
from fastapi import Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import Database, get_database
from ..core.result_types import Err
from ..services.policy_term_service import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PageRequest,
    PolicyTermSearch,
    PolicyTermService,
)
from ..services.sorting import parse_sort

DEFAULT_SORT_PARAM = "effective_to_date,asc"


async def get_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide a request-scoped database session.

    Yields:
        AsyncSession: Session closed after the response is sent
    """
    async with database.session() as session:
        yield session


@beartype
def get_policy_term_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PolicyTermService:
    """Provide the policy term service bound to the request session."""
    return PolicyTermService(session)


@beartype
class PolicyTermQueryParams:
    """Search, pagination and sort parameters for the policy term listing."""

    def __init__(
        self,
        q: Annotated[
            str | None, Query(description="Substring of policy number or insured name")
        ] = None,
        state: Annotated[str | None, Query(description="Jurisdiction code")] = None,
        status_: Annotated[
            str | None, Query(alias="status", description="Term status")
        ] = None,
        exp_from: Annotated[
            date | None, Query(description="Earliest effective_to_date (ISO date)")
        ] = None,
        exp_to: Annotated[
            date | None, Query(description="Latest effective_to_date (ISO date)")
        ] = None,
        page: Annotated[int, Query(description="Zero-based page number")] = 0,
        size: Annotated[int, Query(description="Page size (1-200)")] = DEFAULT_PAGE_SIZE,
        sort: Annotated[str, Query(description="<field>,<asc|desc>")] = DEFAULT_SORT_PARAM,
    ) -> None:
        """Validate parameters and build the search criteria.

        Raises:
            HTTPException: If page, size or sort are invalid
        """
        if page < 0:
            # NOTE: This is a dependency class, not an endpoint
            # We need to keep raising HTTPException here as FastAPI expects it
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Page parameter cannot be negative",
            )

        if size < 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Size must be at least 1",
            )

        if size > MAX_PAGE_SIZE:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Size cannot exceed {MAX_PAGE_SIZE}",
            )

        sort_result = parse_sort(sort)
        if isinstance(sort_result, Err):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=sort_result.unwrap_err().message,
            )

        self.criteria = PolicyTermSearch(
            query=q,
            state=state,
            status=status_,
            exp_from=exp_from,
            exp_to=exp_to,
        )
        self.page_request = PageRequest(page=page, size=size, sort=sort_result.unwrap())
