"""Error Hierarchy - typed, categorized exceptions for every roulette failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400/409) are recoverable; infrastructure errors (503) are not
    - to_response() produces the REST envelope
    - user_message (localized) is what a front end shows; message is for logs

Design Decisions:
    - Single hierarchy with RouletteError base: one FastAPI handler catches all
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
    PERSISTENCE = "persistence"
    EXTERNAL_API = "external_api"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    catalog_type: str | None = None
    store_key: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class RouletteError(Exception):
    """Base exception for all roulette errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "catalog_type": self.context.catalog_type,
                    "store_key": self.context.store_key,
                },
            }
        }


# ─── Domain Errors (400/409) ────────────────────────────────────

class EmptyPoolError(RouletteError):
    """A draw was requested with zero eligible items."""
    def __init__(self, catalog_type: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.catalog_type = catalog_type
        super().__init__(
            f"No eligible items to draw for {catalog_type}",
            "EMPTY_POOL", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.catalog_type = catalog_type


class InvalidMemberCountError(RouletteError):
    """Pending member count outside the allowed range."""
    def __init__(self, count: int, maximum: int, context: ErrorContext | None = None):
        super().__init__(
            f"Member count must be between 1 and {maximum}, got {count}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.count = count
        self.maximum = maximum


class InvalidMemberIndexError(RouletteError):
    """Name edit for a member index that cannot exist."""
    def __init__(self, index: int, maximum: int, context: ErrorContext | None = None):
        super().__init__(
            f"Member index must be between 1 and {maximum}, got {index}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.index = index


class TeamDivisionDisabledError(RouletteError):
    """Team reshuffle requested while team division is off."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Team division is disabled. Enable it and confirm the roster first.",
            "TEAM_DIVISION_DISABLED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )


class RefreshInProgressError(RouletteError):
    """A catalog refresh is already running."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "A catalog refresh is already in progress",
            "REFRESH_IN_PROGRESS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (503) ────────────────────────────────

class FetchError(RouletteError):
    """Remote catalog resource unreachable or returned a non-success status."""
    def __init__(
        self,
        resource: str,
        status: int | None,
        detail: str | None = None,
        context: ErrorContext | None = None,
    ):
        status_text = str(status) if status is not None else "no response"
        message = f"Fetching {resource} failed ({status_text})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(
            message, "FETCH_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.resource = resource
        self.status = status


class PersistenceError(RouletteError):
    """Key-value store operation failed."""
    def __init__(
        self, message: str, operation: str, key: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.store_key = key
        super().__init__(
            f"Store {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorCategory.PERSISTENCE,
            ErrorSeverity.WARNING, ctx, 503,
        )
        self.operation = operation
        self.key = key
