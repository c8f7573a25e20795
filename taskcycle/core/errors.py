"""Engine exceptions and error classification utilities."""

from datetime import date
from enum import Enum

from pydantic import BaseModel


class TaskCycleError(Exception):
    """Base class for all errors raised by the engine."""


class InvalidSpecError(TaskCycleError, ValueError):
    """A recurrence spec field violates its range or non-emptiness invariant."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid recurrence pattern: {field} {reason}")


class DueDateUnresolvableError(TaskCycleError):
    """A forward scan found no occurrence within the bounded horizon."""

    def __init__(self, after: date, horizon_days: int) -> None:
        self.after = after
        self.horizon_days = horizon_days
        super().__init__(f"No occurrence found within {horizon_days} days after {after.isoformat()}")


class InvalidTransitionError(TaskCycleError, ValueError):
    """A completion record cannot move to the requested approval state."""


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Schedule errors
    ERR_INVALID_RECURRENCE_PATTERN = "ERR_INVALID_RECURRENCE_PATTERN"
    ERR_DUE_DATE_UNRESOLVABLE = "ERR_DUE_DATE_UNRESOLVABLE"

    # Completion errors
    ERR_INVALID_STATE_TRANSITION = "ERR_INVALID_STATE_TRANSITION"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity
    field: str | None = None


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an engine error and return a structured response with recovery suggestions.

    Invalid specs surface as form-validation errors, unresolvable due dates as
    schedule-health errors.

    Args:
        exception: The exception raised by the engine

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, InvalidSpecError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_RECURRENCE_PATTERN,
            message=f"Invalid recurrence pattern: {exception.field} {exception.reason}.",
            suggestion="Check the repeat settings for this task and try again.",
            severity=ErrorSeverity.LOW,
            field=exception.field,
        )

    if isinstance(exception, DueDateUnresolvableError):
        return ErrorResponse(
            code=ErrorCode.ERR_DUE_DATE_UNRESOLVABLE,
            message="This schedule has no upcoming due date.",
            suggestion="Edit the task's repeat settings or mark it as one-time.",
            severity=ErrorSeverity.MEDIUM,
        )

    if isinstance(exception, InvalidTransitionError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_STATE_TRANSITION,
            message="This completion has already been reviewed.",
            suggestion="Refresh the task to see its current status.",
            severity=ErrorSeverity.LOW,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
