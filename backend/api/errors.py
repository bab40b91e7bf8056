"""
Exception handlers.

Maps the shared exception taxonomy onto HTTP status codes and renders
every error in the response envelope.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.exceptions import (
    AccountLockedError,
    AccountsError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    InconsistentStateError,
    NotFoundError,
    TooManyAttemptsError,
    ValidationError,
)

from .models.responses import ApiResponse, FieldError

logger = logging.getLogger(__name__)

# First match wins, so subclasses must come before their parents.
_STATUS_BY_ERROR: list[tuple[type[AccountsError], int]] = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (AccountLockedError, 423),
    (TooManyAttemptsError, 429),
    (InconsistentStateError, 500),
    (ExternalServiceError, 503),
]

_BODY_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def status_for(exc: AccountsError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def error_response(
    status_code: int,
    message: str,
    code: Optional[str] = None,
    errors: Optional[list[FieldError]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    body = ApiResponse(success=False, message=message, code=code, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def _log(request: Request, status_code: int, code: Optional[str], message: str) -> None:
    log = logger.error if status_code >= 500 else logger.warning
    log(f"{request.method} {request.url.path} -> {status_code} {code}: {message}")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-producing exception handlers on an app."""

    @app.exception_handler(AccountsError)
    async def handle_accounts_error(request: Request, exc: AccountsError):
        status_code = status_for(exc)
        _log(request, status_code, exc.code, exc.message)

        errors = None
        if isinstance(exc, ValidationError) and exc.field:
            errors = [FieldError(field=exc.field, message=exc.message)]
        headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
        return error_response(status_code, exc.message, exc.code, errors, headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            FieldError(
                field=".".join(
                    str(part) for part in err.get("loc", ()) if part not in _BODY_LOCATIONS
                ),
                message=err.get("msg", "Invalid value"),
            )
            for err in exc.errors()
        ]
        _log(request, 400, "VALIDATION_ERROR", f"{len(errors)} invalid field(s)")
        return error_response(400, "Validation failed", "VALIDATION_ERROR", errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        _log(request, exc.status_code, None, str(exc.detail))
        return error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_uncaught(request: Request, exc: Exception):
        logger.exception(
            f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}"
        )
        return error_response(500, "Internal server error", "INTERNAL_ERROR")
