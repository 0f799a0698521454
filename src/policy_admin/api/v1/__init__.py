"""API v1 router aggregation.

Health probes sit at the root; policy term routes are mounted under ``/api``.
"""

from fastapi import APIRouter

from .health import router as health_router
from .policy_terms import router as policy_terms_router

router = APIRouter()

router.include_router(health_router, tags=["health"])
router.include_router(
    policy_terms_router, prefix="/api/policy-terms", tags=["policy-terms"]
)


__all__ = ["router"]
