"""Error Hierarchy - typed exceptions for the few failures that are raised, not returned.

Invariants:
    - Parse and business-rule failures are NEVER raised: they travel as Rejection values
    - Every raised error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces the REST error envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with PaymentInstructionError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    account_id: str | None = None
    field_name: str | None = None
    debug_info: dict[str, Any] | None = None


class PaymentInstructionError(Exception):
    """Base exception for all raised payment-instruction errors."""

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
                    "account_id": self.context.account_id,
                    "field": self.context.field_name,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidRequestError(PaymentInstructionError):
    """Request envelope is unusable (e.g. wrong Content-Type)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidPayloadError(PaymentInstructionError):
    """Top-level payload is not an object; the only shape failure that is raised."""
    def __init__(self, message: str = "Invalid payload", context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_PAYLOAD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Internal Errors (500-level) ────────────────────────────────

class LedgerInvariantError(PaymentInstructionError):
    """A ledger write would break an invariant (negative balance, unknown account)."""
    def __init__(self, message: str, account_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.account_id = account_id
        super().__init__(
            message, "LEDGER_INVARIANT_VIOLATED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.account_id = account_id
