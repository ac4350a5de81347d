"""Custom exceptions and exception handlers.

This module defines the application's exception hierarchy and registers
global exception handlers for FastAPI. Every error leaves the API in the
same envelope as successful responses, with ``success`` set to false.
"""

import logging
from enum import StrEnum
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorCode(StrEnum):
    """Machine-readable error codes for API consumers."""

    # Resource errors
    IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"
    COLLECTION_NOT_FOUND = "COLLECTION_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
    INVALID_UPLOAD = "INVALID_UPLOAD"

    # Authentication errors
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    TOKEN_INVALID = "TOKEN_INVALID"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Server errors
    HTTP_ERROR = "HTTP_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Structured error envelope."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    error: str
    code: str
    errors: list[ErrorDetail] | None = None
    request_id: str | None = Field(default=None, serialization_alias="requestId")


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable error message.
        status_code: HTTP status code.
        details: Additional error details.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        code: ErrorCode | None = None,
        details: list[dict[str, str]] | None = None,
    ) -> None:
        self.message = message
        if code is not None:
            self.code = code
        self.details = details
        super().__init__(message)

    def to_response(self, request_id: str | None = None) -> dict[str, Any]:
        """Convert exception to the error envelope."""
        error_details = None
        if self.details:
            error_details = [ErrorDetail(**d) for d in self.details]

        return ErrorResponse(
            error=self.message,
            code=self.code,
            errors=error_details,
            request_id=request_id,
        ).model_dump(by_alias=True, exclude_none=True)


class NotFoundError(AppException):
    """Resource not found error.

    Also used when the resource exists but belongs to someone else, so
    callers cannot probe for other users' ids.
    """

    status_code = status.HTTP_404_NOT_FOUND
    code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Any = None,
        *,
        code: ErrorCode | None = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message, code=code)


class ValidationError(AppException):
    """Validation error for invalid input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = ErrorCode.VALIDATION_ERROR


class ConflictError(AppException):
    """Conflict error for duplicate resources."""

    status_code = status.HTTP_409_CONFLICT
    code = ErrorCode.DUPLICATE_RESOURCE

    def __init__(
        self,
        resource: str = "Resource",
        field: str | None = None,
        value: Any = None,
        *,
        message: str | None = None,
    ) -> None:
        if message is None:
            if field and value:
                message = f"{resource} with {field} '{value}' already exists"
            else:
                message = f"{resource} already exists"
        super().__init__(message)


class AuthenticationError(AppException):
    """Authentication error for invalid credentials or tokens."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = ErrorCode.INVALID_CREDENTIALS


class AuthorizationError(AppException):
    """Authorization error for forbidden access."""

    status_code = status.HTTP_403_FORBIDDEN
    code = ErrorCode.FORBIDDEN


def get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def pydantic_error_details(errors: Any, *, skip_location: bool = True) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into field/message pairs.

    Args:
        errors: Output of ``exc.errors()``.
        skip_location: Drop the leading location segment ("body", "query").

    Returns:
        List of detail dicts.
    """
    details = []
    for error in errors:
        loc = error.get("loc", ())
        if skip_location and len(loc) > 1:
            loc = loc[1:]
        field = ".".join(str(x) for x in loc) if loc else "__root__"
        details.append({"field": field, "message": error.get("msg", "Invalid value")})
    return details


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application-specific exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response(get_request_id(request)),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors as 400s."""
    validation_error = ValidationError(
        message="Request validation failed",
        details=pydantic_error_details(exc.errors()),
    )

    return JSONResponse(
        status_code=validation_error.status_code,
        content=validation_error.to_response(get_request_id(request)),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, bad method) in the envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        error = AppException("Endpoint not found", code=ErrorCode.RESOURCE_NOT_FOUND)
    else:
        error = AppException(str(exc.detail), code=ErrorCode.HTTP_ERROR)

    return JSONResponse(
        status_code=exc.status_code,
        content=error.to_response(get_request_id(request)),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)

    error = AppException(
        message="An unexpected error occurred",
        code=ErrorCode.INTERNAL_ERROR,
    )

    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response(get_request_id(request)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
