"""Error Handlers — global exception handlers for the tracker API.

Invariants:
    - TrackerError → its own http_status and structured JSON envelope
    - Status chosen by error class (category), never by message text
    - RequestValidationError (malformed body) → 400 with field-level details
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (TrackerError), validation (Pydantic), catch-all (Exception)
    - 4xx logged at WARNING, 5xx at ERROR with the internal message
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from shiptrack.core.errors import (
    INTERNAL_ERROR_MESSAGE, TrackerError, ErrorSeverity,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_tracker_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_tracker_error_handler(app: FastAPI) -> None:

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError):
        """Handle all tracker domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "job_id": exc.context.job_id,
            "shipment_id": exc.context.shipment_id,
        }
        if exc.http_status >= 500:
            logger.error(f"TrackerError: {exc.message}", extra=extra)
        else:
            logger.warning(f"TrackerError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

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
                    "message": INTERNAL_ERROR_MESSAGE,
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Validation failed",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
                for e in exc.errors()
            ],
        },
    }
