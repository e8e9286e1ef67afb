# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API. Every error the media layer
# raises is an ApplicationError carrying its own status code, so one handler
# covers them all.
# =============================================================================

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.utils import ApplicationError
from media.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


# =============================================================================
# API Exceptions
# =============================================================================

class MediaNotFoundError(ApplicationError):
    """Raised when a placeholder resolves to nothing (NotFound)."""

    def __init__(self, placeholder_id: str):
        super().__init__(
            message=f"No media for placeholder: {placeholder_id}",
            code="MEDIA_NOT_FOUND",
            status_code=404,
            suggestion="Link an asset to this placeholder with PUT /api/v1/admin/links/{placeholder_id}",
            details={"placeholder_id": placeholder_id},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def application_exception_handler(
    request: Request,
    exc: ApplicationError
) -> JSONResponse:
    """
    Convert ApplicationError to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    if isinstance(exc, StoreUnavailableError):
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Return request validation failures in the same shape as other errors."""
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": exc.errors(),
        }
    )
