"""Error Hierarchy — typed, categorized exceptions for all Launchpad failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with LaunchpadError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Store failures subclass DatabaseError so callers can catch one type and still
      tell a missing table or a key violation apart
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    launch_id: int | None = None
    operation: str | None = None


class LaunchpadError(Exception):
    """Base exception for all Launchpad errors."""

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
                "context": {
                    "user_id": self.context.user_id,
                    "launch_id": self.context.launch_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class EmailValidationError(LaunchpadError):
    """Email address missing or structurally invalid."""
    def __init__(self, email: str | None, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid email address: {email!r}" if email else "Email address is required",
            "INVALID_EMAIL", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.email = email


class AuthenticationRequiredError(LaunchpadError):
    """Operation needs a user in the request context and none was resolved."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"{operation} requires an authenticated user",
            "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, ctx, 401,
        )


class InvalidRequestError(LaunchpadError):
    """Request body, path or query failed schema validation."""
    def __init__(self, details: list[dict], context: ErrorContext | None = None):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.details = details

    def to_response(self) -> dict:
        body = super().to_response()
        body["error"]["details"] = self.details
        return body


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(LaunchpadError):
    """Database operation failed."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        code: str = "DATABASE_ERROR",
        category: ErrorCategory = ErrorCategory.DATABASE,
        http_status: int = 503,
    ):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Database {operation} failed: {message}",
            code, category, ErrorSeverity.CRITICAL, ctx, http_status,
        )
        self.operation = operation


class ConstraintViolationError(DatabaseError):
    """Unique or primary key constraint rejected an insert."""
    def __init__(self, table: str, keys: dict, context: ErrorContext | None = None):
        super().__init__(
            f"duplicate key {keys} in {table}", "insert", context,
            code="CONSTRAINT_VIOLATION", category=ErrorCategory.CONFLICT,
            http_status=409,
        )
        self.table = table
        self.keys = keys


class TableNotFoundError(DatabaseError):
    """DDL or query referenced a table that does not exist."""
    def __init__(self, table: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"table '{table}' does not exist", operation, context,
            code="TABLE_NOT_FOUND",
        )
        self.table = table
