# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Policy term search and detail endpoints.

Parameters are validated by :class:`PolicyTermQueryParams` before the
service is called, so a rejected request never reaches the database.
"""

from typing import Annotated, Union
from uuid import UUID

from beartype import beartype
from fastapi import APIRouter, Depends, Response

from ...schemas.common import ErrorResponse
from ...schemas.policy_term import PolicyTermDetail, PolicyTermPage
from ...services.policy_term_service import PolicyTermService
from ..dependencies import PolicyTermQueryParams, get_policy_term_service
from ..response_patterns import handle_result

router = APIRouter()


@router.get("")
@beartype
async def search_policy_terms(
    response: Response,
    params: Annotated[PolicyTermQueryParams, Depends()],
    service: Annotated[PolicyTermService, Depends(get_policy_term_service)],
) -> Union[PolicyTermPage, ErrorResponse]:
    """Search policy terms with optional filters, sorting and pagination.

    Args:
        response: FastAPI response object for status code
        params: Validated filters, page request and sort
        service: Policy term service bound to the request session

    Returns:
        PolicyTermPage: One page of matching terms with totals
    """
    result = await service.search(params.criteria, params.page_request)
    if result.is_err():
        return handle_result(result, response)
    return PolicyTermPage.from_result(result.unwrap())


@router.get("/{term_id}")
@beartype
async def get_policy_term(
    term_id: UUID,
    response: Response,
    service: Annotated[PolicyTermService, Depends(get_policy_term_service)],
) -> Union[PolicyTermDetail, ErrorResponse]:
    """Get a single policy term by id.

    Args:
        term_id: Term UUID
        response: FastAPI response object for status code
        service: Policy term service bound to the request session

    Returns:
        PolicyTermDetail: The term with its policy fields and timestamps
    """
    result = await service.get(term_id)
    if result.is_err():
        return handle_result(result, response)
    return PolicyTermDetail.from_entity(result.unwrap())
