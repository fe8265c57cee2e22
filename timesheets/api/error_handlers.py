"""Error Handlers — global exception handlers for the timesheets API.

Invariants:
    - TimecardRuleError -> 409 with exactly {errorCode, message}
    - Other TimesheetsError -> structured envelope at exc.http_status (404, 503)
    - RequestValidationError -> field-level error details
    - Exception (catch-all) -> never leaks internal details

Design Decisions:
    - Three-layer handler: domain (TimesheetsError), validation (Pydantic), catch-all (Exception)
    - Rule errors logged at WARNING: they are expected, caller-recoverable outcomes
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from timesheets.core.errors import ErrorSeverity, TimecardRuleError, TimesheetsError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_timesheets_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_timesheets_error_handler(app: FastAPI) -> None:
    """Register timesheet domain/infrastructure error handler."""

    @app.exception_handler(TimesheetsError)
    async def timesheets_error_handler(request: Request, exc: TimesheetsError):
        """Handle all timesheet domain/infrastructure errors."""
        level = logging.WARNING if isinstance(exc, TimecardRuleError) else logging.ERROR
        logger.log(
            level,
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": getattr(exc, "error_code", exc.code),
                "path": request.url.path,
                "timecard_id": exc.context.timecard_id,
                "line_id": exc.context.line_id,
                "operation": exc.context.operation,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
