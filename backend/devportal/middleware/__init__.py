"""Middleware module for DevPortal.

Exception types and the handlers that render them as JSON.
"""

from devportal.middleware.error_handler import (
    BadRequestException,
    ConflictException,
    ErrorResponse,
    ForbiddenException,
    NotFoundException,
    PortalException,
    ServiceUnavailableException,
    UnauthorizedException,
    general_exception_handler,
    portal_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "ErrorResponse",
    "PortalException",
    "NotFoundException",
    "UnauthorizedException",
    "ForbiddenException",
    "BadRequestException",
    "ConflictException",
    "ServiceUnavailableException",
    "portal_exception_handler",
    "validation_exception_handler",
    "general_exception_handler",
]
