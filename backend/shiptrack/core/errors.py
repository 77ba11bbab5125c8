"""Error Hierarchy — typed, categorized exceptions for all tracker failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - The category decides the HTTP status; message text never does
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - InternalError.to_response() never exposes the internal message

Design Decisions:
    - Single hierarchy with TrackerError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - DuplicateKeyError sits outside the hierarchy: it is a storage signal the
      service translates, never a response
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


INTERNAL_ERROR_MESSAGE = "Internal server error"


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    job_id: str | None = None
    shipment_id: str | None = None
    debug_info: dict[str, Any] | None = None


class TrackerError(Exception):
    """Base exception for all shipment tracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class PayloadValidationError(TrackerError):
    """Payload failed one or more field rules. Raised before any storage access."""

    def __init__(
        self,
        details: list[str],
        message: str = "Validation failed",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.details = details

    def to_response(self) -> dict:
        response = super().to_response()
        if self.details:
            response["error"]["details"] = list(self.details)
        return response


class ResourceNotFoundError(TrackerError):
    """Referenced entity does not exist."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class ShipmentNotFoundError(ResourceNotFoundError):
    """Location update for a shipment no job was created for."""

    def __init__(self, shipment_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.shipment_id = shipment_id
        super().__init__(
            f"Shipment {shipment_id} not found. A job must be created first.",
            ctx,
        )
        self.shipment_id = shipment_id


class JobNotFoundError(ResourceNotFoundError):
    """Query for a job that does not exist."""

    def __init__(self, job_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.job_id = job_id
        super().__init__(f"Job {job_id} not found", ctx)
        self.job_id = job_id


class ShipmentConflictError(TrackerError):
    """Uniqueness or status-transition rule violated."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InternalError(TrackerError):
    """Storage or infrastructure failure, including post-check races."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.CRITICAL, context, 500,
        )

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["message"] = INTERNAL_ERROR_MESSAGE
        return response


class DatabaseError(InternalError):
    """Database operation failed."""

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, context,
        )
        self.operation = operation


# ─── Storage Signals ────────────────────────────────────────────

class DuplicateKeyError(Exception):
    """A unique index rejected an insert."""

    def __init__(self, message: str = "Duplicate key"):
        super().__init__(message)
        self.message = message
