"""Error Hierarchy — typed, categorized exceptions for all timesheet failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Timecard rule errors carry a fixed numeric error_code (100-104) and fixed message
    - Rule errors serialize to exactly {"errorCode": int, "message": str}
    - "Not found" (unknown timecard id) is separate from the rule taxonomy
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TimesheetsError base: FastAPI global handler catches all
    - TimecardRuleError overrides to_response(): external callers depend on the
      {errorCode, message} payload, the generic envelope stays for everything else
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    timecard_id: str | None = None
    line_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class TimesheetsError(Exception):
    """Base exception for all timesheet service errors."""

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
                    "timecard_id": self.context.timecard_id,
                    "line_id": self.context.line_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Timecard Rule Errors (409) ─────────────────────────────────

class TimecardRuleError(TimesheetsError):
    """A command was rejected by the timecard state machine.

    Subclasses pin ``error_code`` and ``MESSAGE``; both are part of the
    wire contract and never vary per instance.
    """
    error_code: int = 0
    MESSAGE: str = ""

    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            self.MESSAGE, type(self).__name__, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )

    def to_response(self) -> dict:
        return {"errorCode": self.error_code, "message": self.message}


class InvalidStateError(TimecardRuleError):
    """Requested transition or line mutation not legal for the current status."""
    error_code = 100
    MESSAGE = "Transition not valid for current state"


class EmptyTimecardError(TimecardRuleError):
    """Submit attempted with zero lines."""
    error_code = 101
    MESSAGE = "Unable to submit timecard with no lines"


class MissingTransitionError(TimecardRuleError):
    """Current status was not produced by the requested transition type."""
    error_code = 102
    MESSAGE = "No state transition of requested type present in timecard"


class InvalidSubmitterError(TimecardRuleError):
    """Approver is the timecard's own employee."""
    error_code = 103
    MESSAGE = "Submitter cannot approve their own timecard"


class LineNotFoundError(TimecardRuleError):
    """Referenced line id does not exist on the timecard."""
    error_code = 104
    MESSAGE = "Unable to find the specified lineId"


RULE_ERRORS: tuple[type[TimecardRuleError], ...] = (
    InvalidStateError,
    EmptyTimecardError,
    MissingTransitionError,
    InvalidSubmitterError,
    LineNotFoundError,
)


# ─── Lookup Errors (404) ─────────────────────────────────────────

class ResourceNotFoundError(TimesheetsError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TimesheetsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
