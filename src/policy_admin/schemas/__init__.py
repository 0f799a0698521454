"""API request/response schemas."""

from .common import APIInfo, ErrorResponse, FrozenSchema, StatusResponse
from .policy_term import PolicyTermDetail, PolicyTermPage, PolicyTermSummary

__all__ = [
    "APIInfo",
    "ErrorResponse",
    "FrozenSchema",
    "PolicyTermDetail",
    "PolicyTermPage",
    "PolicyTermSummary",
    "StatusResponse",
]
