"""Error Handlers — global exception handlers for the Conduit API.

Invariants:
    - ConduitError -> structured JSON with error code, message, severity
    - RequestValidationError -> 422 with a field-keyed message map
    - Exception (catch-all) -> never leaks internal details

Design Decisions:
    - Three-layer handler: domain (ConduitError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import ConduitError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_conduit_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_conduit_error_handler(app: FastAPI) -> None:
    """Register Conduit domain/infrastructure error handler."""

    @app.exception_handler(ConduitError)
    async def conduit_error_handler(request: Request, exc: ConduitError):
        """Handle all Conduit domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"ConduitError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
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
            status_code=422,
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


def _field_name(loc: tuple) -> str:
    # ("body", "user", "email") -> "email"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return parts[-1] if parts else "body"


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response keyed by field."""
    fields: dict[str, list[str]] = {}
    for e in exc.errors():
        fields.setdefault(_field_name(e["loc"]), []).append(e["msg"])
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.WARNING.value,
            "fields": fields,
        },
    }
