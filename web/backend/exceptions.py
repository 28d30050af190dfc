#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import (
    ServiceException,
    UserNotFoundException,
    RepositoryUnavailableException
)

logger = logging.getLogger(__name__)


class MatchNotFoundException(ServiceException):
    """Raised when a match is not found or the caller is not part of it."""
    pass


class SessionNotFoundException(ServiceException):
    """Raised when a match session is not found."""
    pass


class SkillNotFoundException(ServiceException):
    """Raised when a catalog skill is not found."""
    pass


class CommunityNotFoundException(ServiceException):
    """Raised when a community is not found."""
    pass


class ChatNotFoundException(ServiceException):
    """Raised when a chat is not found or the caller is not a participant."""
    pass


class DuplicateMatchException(ServiceException):
    """Raised when two users already have a match."""
    pass


class InvalidMatchOperationException(ServiceException):
    """Raised when a match transition is not allowed for the caller."""
    pass


class MembershipException(ServiceException):
    """Raised on duplicate joins or leaving a community the user is not in."""
    pass


class DuplicateSkillException(ServiceException):
    """Raised when a catalog skill name is already taken."""
    pass


NOT_FOUND_EXCEPTIONS = (
    UserNotFoundException,
    MatchNotFoundException,
    SessionNotFoundException,
    SkillNotFoundException,
    CommunityNotFoundException,
    ChatNotFoundException,
)

BAD_REQUEST_EXCEPTIONS = (
    DuplicateMatchException,
    InvalidMatchOperationException,
    MembershipException,
    DuplicateSkillException,
)


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = 500
    if isinstance(exc, NOT_FOUND_EXCEPTIONS):
        status_code = 404
    elif isinstance(exc, BAD_REQUEST_EXCEPTIONS):
        status_code = 400
    elif isinstance(exc, RepositoryUnavailableException):
        status_code = 503

    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.warning(f"Service error in {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.

    Args:
        request: The FastAPI request.
        exc: The HTTP exception.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Args:
        request: The FastAPI request.
        exc: The exception.

    Returns:
        JSONResponse with error details.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
