"""Error Hierarchy — typed, categorized exceptions for every ledger failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - retryable is True only for transient storage failures (timeouts, connection loss)
    - Validation and reference errors are raised before any write is attempted
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with ZakatLedgerError base: FastAPI global handler catches all
    - ValidationFailedError carries every violation, joined into one message only at the boundary
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Stable categories a client can branch on."""
    VALIDATION = "validation"
    REFERENCE = "reference"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logging and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    entity_id: str | None = None
    debug_info: dict[str, Any] | None = None


class ZakatLedgerError(Exception):
    """Base exception for all ledger errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        retryable: bool = False,
        details: list[dict] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.retryable = retryable
        self.details = details or []

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.details:
            body["details"] = self.details
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(ZakatLedgerError):
    """Input broke one or more field rules. Never reaches storage."""
    def __init__(self, violations: list, context: ErrorContext | None = None):
        fields = ", ".join(v.field for v in violations)
        super().__init__(
            f"Invalid input: {fields}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
            details=[v.to_dict() for v in violations],
        )
        self.violations = list(violations)


class ReferenceNotFoundError(ZakatLedgerError):
    """A foreign id named by the input does not exist."""
    def __init__(
        self, reference: str, reference_id: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{reference} '{reference_id}' not found" if reference_id
            else f"{reference} not found",
            "REFERENCE_NOT_FOUND", ErrorCategory.REFERENCE,
            ErrorSeverity.WARNING, context, 422,
            details=[{"reference": reference, "id": reference_id}],
        )
        self.reference = reference
        self.reference_id = reference_id


class ConflictError(ZakatLedgerError):
    """Uniqueness violation, or delete of a row that is still referenced."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class ResourceNotFoundError(ZakatLedgerError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AuthenticationError(ZakatLedgerError):
    """Missing, malformed or expired bearer token."""
    def __init__(self, message: str = "Authentication required", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(ZakatLedgerError):
    """Caller role may not perform the operation."""
    def __init__(self, role: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Role '{role}' is not allowed to {operation}",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.role = role
        self.operation = operation


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ZakatLedgerError):
    """Database operation failed. Safe to resubmit."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503, retryable=True,
        )
        self.operation = operation


class StorageTimeoutError(ZakatLedgerError):
    """A storage call exceeded its time budget."""
    def __init__(self, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"Database did not respond within {timeout_seconds:g}s",
            "DATABASE_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.CRITICAL, context, 504, retryable=True,
        )
        self.timeout_seconds = timeout_seconds
