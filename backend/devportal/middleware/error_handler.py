"""Exception types and handlers producing uniform JSON error bodies.

Routes raise a ``PortalException`` subclass; the handlers registered in
``devportal.main`` turn it into an ``ErrorResponse``. Validation failures
and anything unexpected are rendered the same way.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ErrorResponse(BaseModel):
    """Body of every non-2xx response.

    Attributes:
        error: Machine-readable error code
        message: Human-readable description
        details: Extra context (offending field, resource id, ...)
        path: Request path
        timestamp: ISO 8601 time the error was produced
        request_id: Echo of the caller's X-Request-ID header
    """

    error: str
    message: str
    details: Optional[Dict[str, Any]] = None
    path: Optional[str] = None
    timestamp: str = Field(default_factory=_utc_timestamp)
    request_id: Optional[str] = None


class PortalException(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "internal_error"

    def __init__(
        self,
        message: str = "An internal error occurred",
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.details = details
        self.headers = headers
        super().__init__(message)


class NotFoundException(PortalException):
    """404: the addressed record does not exist (or is not the caller's)."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        super().__init__(message, details or None)


class UnauthorizedException(PortalException):
    """401: no valid session."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "unauthorized"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenException(PortalException):
    """403: authenticated but lacking the required role."""

    status_code = status.HTTP_403_FORBIDDEN
    error = "forbidden"

    def __init__(self, message: str = "Access denied", required_role: Optional[str] = None):
        super().__init__(message, {"required_role": required_role} if required_role else None)


class BadRequestException(PortalException):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "bad_request"

    def __init__(self, message: str = "Bad request", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ConflictException(PortalException):
    """409: a unique field is already taken."""

    status_code = status.HTTP_409_CONFLICT
    error = "conflict"

    def __init__(self, message: str = "Resource already exists", conflicting_field: Optional[str] = None):
        super().__init__(message, {"conflicting_field": conflicting_field} if conflicting_field else None)


class ServiceUnavailableException(PortalException):
    """503: a dependency (database, upstream API) cannot be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error = "service_unavailable"

    def __init__(self, message: str = "Service temporarily unavailable", service: Optional[str] = None):
        super().__init__(message, {"service": service} if service else None)


def _error_body(request: Request, error: str, message: str, details=None) -> dict:
    return ErrorResponse(
        error=error,
        message=message,
        details=details,
        path=request.url.path,
        request_id=request.headers.get(REQUEST_ID_HEADER),
    ).model_dump(exclude_none=True)


async def portal_exception_handler(request: Request, exc: PortalException) -> JSONResponse:
    """Render a ``PortalException``."""
    logger.warning(
        f"HTTP {exc.status_code}: {exc.error} - {exc.message}",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.error, exc.message, exc.details),
        headers=exc.headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as a flat list of field errors."""
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}: {len(errors)} errors")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(
            request,
            "validation_error",
            "Request validation failed",
            {"validation_errors": errors},
        ),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, return an opaque 500."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"method": request.method, "exception_type": type(exc).__name__},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(request, "internal_error", "An internal server error occurred"),
    )
