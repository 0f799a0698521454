# PolicyAdmin - Policy Term Administration Backend
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Liveness and readiness probes."""

from beartype import beartype
from fastapi import APIRouter

from ...schemas.common import StatusResponse

router = APIRouter()


@router.get("/health")
@beartype
async def health() -> StatusResponse:
    """Liveness probe."""
    return StatusResponse(status="ok")


@router.get("/ready")
@beartype
async def ready() -> StatusResponse:
    """Readiness probe."""
    return StatusResponse(status="ready")
