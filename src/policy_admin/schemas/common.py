"""Common schemas used across the API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FrozenSchema(BaseModel):
    """Base for request/response schemas.

    Immutable, strict about unknown fields, serialized with camelCase keys
    (the web client contract) while still accepting snake_case names.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class StatusResponse(BaseModel):
    """Liveness/readiness payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: str = Field(..., pattern=r"^(ok|ready)$", description="Probe status")


class APIInfo(BaseModel):
    """API information response."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="API name")
    version: str = Field(..., min_length=1, description="API version")
    status: str = Field(..., description="API status")
    environment: str = Field(..., description="Deployment environment")


class ErrorResponse(BaseModel):
    """Standardized error response for rejected requests."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    success: bool = Field(default=False, description="Always false for error responses")
    error: str = Field(..., description="Human-readable error message")
    error_code: str | None = Field(default=None, description="Machine-readable error code")
    details: list[dict[str, Any]] | None = Field(
        default=None, description="Additional error context"
    )
