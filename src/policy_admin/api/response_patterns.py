"""API response patterns following Result[T, E] + HTTP semantics."""

import logging
from typing import Any, TypeVar, Union

from beartype import beartype
from fastapi import Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.result_types import ErrorKind, Result, ServiceError
from ..schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

STATUS_ERROR_CODES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: ErrorKind.VALIDATION.value,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND.value,
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_500_INTERNAL_SERVER_ERROR: ErrorKind.STORAGE.value,
}


class APIResponseHandler:
    """Maps service results and framework errors onto HTTP responses."""

    @staticmethod
    @beartype
    def status_for(error: ServiceError) -> int:
        """HTTP status code for a classified service error."""
        return ERROR_STATUS[error.kind]

    @staticmethod
    @beartype
    def error_body(error: ServiceError) -> ErrorResponse:
        """Standard error payload for a service error."""
        return ErrorResponse(error=error.message, error_code=error.kind.value)

    @staticmethod
    @beartype
    def from_result(
        result: Result[T, ServiceError],
        response: Response,
        success_status: int = status.HTTP_200_OK,
    ) -> Union[T, ErrorResponse]:
        """Convert Result[T, ServiceError] to a payload and set the status code.

        Args:
            result: Service layer Result
            response: FastAPI Response object to set status code
            success_status: HTTP status for successful operations (default 200)

        Returns:
            Either the unwrapped success value or ErrorResponse
        """
        if result.is_err():
            error = result.unwrap_err()
            response.status_code = APIResponseHandler.status_for(error)
            return APIResponseHandler.error_body(error)

        response.status_code = success_status
        return result.unwrap()


@beartype
def handle_result(
    result: Result[T, ServiceError],
    response: Response,
    success_status: int = status.HTTP_200_OK,
) -> Union[T, ErrorResponse]:
    """Convenience function for standard result handling."""
    return APIResponseHandler.from_result(result, response, success_status)


def _error_json(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reject malformed parameters with a 400 in the standard error shape."""
    details: list[dict[str, Any]] = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": str(error.get("msg", "")),
            "type": str(error.get("type", "")),
        }
        for error in exc.errors()
    ]
    logger.info("Rejected %s %s: %s", request.method, request.url.path, details)
    body = ErrorResponse(
        error="Request validation failed",
        error_code=ErrorKind.VALIDATION.value,
        details=details,
    )
    return _error_json(status.HTTP_400_BAD_REQUEST, body)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors raised by dependencies in the standard error shape."""
    body = ErrorResponse(
        error=str(exc.detail),
        error_code=STATUS_ERROR_CODES.get(exc.status_code, f"HTTP_{exc.status_code}"),
    )
    response = _error_json(exc.status_code, body)
    if exc.headers:
        response.headers.update(exc.headers)
    return response
