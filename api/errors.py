"""
API Error Handling

Standardized error handling for the API.

Domain failures (VaultException) keep their stable code in the response
body; the HTTP status only groups them:

    403  access control
    404  unknown vault, token or contract
    409  window, time and state conflicts
    422  invalid input
    502  asset transfer failures
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import ErrorCodes, VaultException


logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=422,
            details=details,
        )


class NotFoundError(APIError):
    """Unknown vault or token."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
            details=details,
        )


CONFLICT_CODES = frozenset({
    ErrorCodes.ALREADY_ACTIVE,
    ErrorCodes.VAULT_ALREADY_EXISTS,
    ErrorCodes.INVALID_TIME,
    ErrorCodes.START_NOT_SET,
    ErrorCodes.TOO_EARLY,
    ErrorCodes.TOO_LATE,
    ErrorCodes.NO_ROOT,
    ErrorCodes.NO_TOKENS,
    ErrorCodes.REENTRANT_CALL,
    ErrorCodes.INSUFFICIENT_BALANCE,
    ErrorCodes.INSUFFICIENT_ALLOWANCE,
})


def status_for(exc: VaultException) -> int:
    """HTTP status for a domain failure."""
    if exc.category == "access":
        return 403
    if exc.code == ErrorCodes.UNKNOWN_CONTRACT:
        return 404
    if exc.category == "transfer":
        return 502
    if exc.code in CONFLICT_CODES:
        return 409
    return 422


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def vault_error_handler(request: Request, exc: VaultException) -> JSONResponse:
    """Handle domain failures raised by the ledger, vaults and factory."""
    status = status_for(exc)
    logger.info(f"{request.method} {request.url.path} failed: {exc.code} ({status})")
    return JSONResponse(
        status_code=status,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
        ).model_dump(mode="json"),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
