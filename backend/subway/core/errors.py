"""Error Hierarchy — typed, categorized exceptions for all subway failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Chain errors are caller misuse: 400-level, never retried
    - Infrastructure errors are 500-level and critical
    - to_response() produces the REST envelope

Design Decisions:
    - Single hierarchy with SubwayError base: FastAPI global handler catches all
    - DuplicateSegmentError subclasses StationsAlreadyExistError: an exact duplicate
      is the narrowest case of a redundant segment
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
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    line_id: str | None = None
    station_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class SubwayError(Exception):
    """Base exception for all subway errors."""

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
                    "line_id": self.context.line_id,
                    "station_id": self.context.station_id,
                },
            }
        }


# ─── Chain Errors (400-level) ───────────────────────────────────

class ChainEmptyError(SubwayError):
    """Ordered stations requested from a chain with no segments."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Line has no sections.",
            "CHAIN_EMPTY", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class SegmentNotFoundError(SubwayError):
    """No path on the chain covers both requested stations."""
    def __init__(self, up_name: str, down_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"No section connects '{up_name}' and '{down_name}' on this line.",
            "SEGMENT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.up_name = up_name
        self.down_name = down_name


class StationsAlreadyExistError(SubwayError):
    """Both endpoints of the new segment are already on the line."""
    def __init__(
        self,
        message: str = "Both stations are already registered on this line.",
        code: str = "STATIONS_ALREADY_EXIST",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class DuplicateSegmentError(StationsAlreadyExistError):
    """The exact (up, down) segment is already registered."""
    def __init__(self, up_name: str, down_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Section '{up_name}' -> '{down_name}' is already registered.",
            "DUPLICATE_SEGMENT", context,
        )


class StationsNoExistError(SubwayError):
    """Neither endpoint of the new segment is on the line."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Neither the up station nor the down station is on this line.",
            "STATIONS_NO_EXIST", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidDistanceError(SubwayError):
    """A segment would end up with a non-positive distance."""
    def __init__(self, distance: int, context: ErrorContext | None = None):
        super().__init__(
            f"Section distance must be greater than 0 (got {distance}).",
            "INVALID_DISTANCE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.distance = distance


class InvalidSectionError(SubwayError):
    """Segment endpoints are malformed (e.g. up and down are the same station)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_SECTION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class NotPossibleRemoveError(SubwayError):
    """Removal would empty the line or targets a station not on it."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "NOT_POSSIBLE_REMOVE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Resource Errors (404/409) ──────────────────────────────────

class ResourceNotFoundError(SubwayError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class DuplicateNameError(SubwayError):
    """A line or station with the same name already exists."""
    def __init__(self, resource_type: str, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} name '{name}' already exists",
            "DUPLICATE_NAME", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.name = name


class StationInUseError(SubwayError):
    """Station is still referenced by a line section."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Station '{name}' is still part of a line",
            "STATION_IN_USE", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SubwayError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
