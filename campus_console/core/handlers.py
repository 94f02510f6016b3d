"""
Exception handlers for FastAPI application.

This module provides:
- Application exception handler (ApplicationError)
- Domain exception handler (DomainException)
- Pydantic validation error handler (RequestValidationError)
- General unhandled exception handler (Exception)
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from campus_console.application.exceptions import (
    ApplicationError,
    ConflictError,
    ExternalServiceError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    WorkflowStepError,
)
from campus_console.core.config import settings
from campus_console.domain.exceptions import (
    DomainException,
    InvalidApplicationTransitionError,
)

logger = logging.getLogger(__name__)

# Checked in order; the first matching class wins.
STATUS_BY_EXCEPTION: list[tuple[type[ApplicationError], int]] = [
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY),
]


def status_code_for(exc: Exception) -> int:
    """
    HTTP status for an application or domain exception.

    A workflow step failure answers with the status of its cause, or 502
    when the cause is not an application error.
    """
    if isinstance(exc, WorkflowStepError):
        cause = exc.cause
        if isinstance(cause, (ApplicationError, DomainException)):
            return status_code_for(cause)
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, InvalidApplicationTransitionError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, DomainException):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    for exc_class, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_response(
    request: Request, status_code: int, code: str, message: str, details: Any
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details,
            },
            "meta": {
                "request_id": getattr(request.state, "request_id", None),
            },
        },
    )


async def application_exception_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """
    Handle application exceptions.

    The message is passed through verbatim, so backend authorization
    failures reach the operator exactly as the backend phrased them.
    """
    status_code = status_code_for(exc)
    logger.warning(
        f"Application exception: {exc.error_code} - {exc.message} "
        f"(status={status_code}, request_id={getattr(request.state, 'request_id', 'unknown')})"
    )
    return error_response(request, status_code, exc.error_code, exc.message, exc.details)


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Handle domain rule violations raised outside a workflow."""
    status_code = status_code_for(exc)
    logger.warning(
        f"Domain exception: {exc.code} - {exc.message} "
        f"(request_id={getattr(request.state, 'request_id', 'unknown')})"
    )
    return error_response(request, status_code, exc.code, exc.message, {})


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert validation errors to the common error response format."""
    logger.warning(
        f"Validation error: {exc.errors()} "
        f"(request_id={getattr(request.state, 'request_id', 'unknown')})"
    )

    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        errors,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Logs the full error and returns a generic error response to the client.
    """
    logger.error(
        f"Unexpected error: {str(exc)} "
        f"(request_id={getattr(request.state, 'request_id', 'unknown')})",
        exc_info=True,
    )
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred." if not settings.debug else str(exc),
        {},
    )
