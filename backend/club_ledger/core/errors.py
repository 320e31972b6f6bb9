"""Error Hierarchy — typed, categorized exceptions for all ledger failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - Unauthorized mutations are NOT errors: they are rejected no-ops (see core/mutations.py)

Design Decisions:
    - Single hierarchy with LedgerError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Invalid slots and counts raise instead of clamping; clamping hides slot-identity bugs
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
    track: str | None = None
    date_key: str | None = None
    member_id: str | None = None
    mutation: str | None = None
    debug_info: dict[str, Any] | None = None


class LedgerError(Exception):
    """Base exception for all ledger errors."""

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
                    "track": self.context.track,
                    "date_key": self.context.date_key,
                    "member_id": self.context.member_id,
                    "mutation": self.context.mutation,
                },
            }
        }


# ─── Input Errors (400-level) ───────────────────────────────────

class InvalidSlotError(LedgerError):
    """Session slot index outside 0..3, or outside the day's active sessions."""
    def __init__(self, slot: int, message: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message or f"Session slot {slot} is out of range (0-3)",
            "INVALID_SLOT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.slot = slot


class InvalidSessionCountError(LedgerError):
    """Active session count outside 1..4."""
    def __init__(self, count: int, context: ErrorContext | None = None):
        super().__init__(
            f"Active session count {count} is out of range (1-4)",
            "INVALID_SESSION_COUNT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.count = count


class InvalidDateKeyError(LedgerError):
    """Date key is not a real YYYY-MM-DD calendar date."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{value}' is not a valid YYYY-MM-DD date",
            "INVALID_DATE_KEY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.value = value


class InvalidMetadataError(LedgerError):
    """Daily metadata carries more names or hosts than there are slots."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_METADATA", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class BannedNameError(LedgerError):
    """Member name matches an entry on the banned list."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{name}' is on the banned list and cannot be added",
            "BANNED_NAME", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.name = name


class DuplicateMemberError(LedgerError):
    """Member id already present in the roster."""
    def __init__(self, member_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Member '{member_id}' already exists",
            "DUPLICATE_MEMBER", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.member_id = member_id


class InvalidSnapshotError(LedgerError):
    """A record snapshot does not have the stored layout."""
    def __init__(self, key: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid '{key}' snapshot: {message}",
            "INVALID_SNAPSHOT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.key = key


class ResourceNotFoundError(LedgerError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class UnknownRecordError(LedgerError):
    """Record key is not one of the persisted club records."""
    def __init__(self, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown record '{key}'",
            "UNKNOWN_RECORD", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.key = key


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(LedgerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
