"""Unit tests for engine errors and error classification."""

from datetime import date

import pytest

from taskcycle.core.errors import (
    DueDateUnresolvableError,
    ErrorCode,
    ErrorSeverity,
    InvalidSpecError,
    InvalidTransitionError,
    TaskCycleError,
    classify_error_with_response,
)


@pytest.mark.unit
class TestExceptions:
    """Tests for exception types."""

    def test_invalid_spec_carries_field(self):
        """InvalidSpecError keeps the offending field and reason."""
        error = InvalidSpecError("interval", "must be between 1 and 365, got 0")

        assert error.field == "interval"
        assert str(error) == "Invalid recurrence pattern: interval must be between 1 and 365, got 0"
        assert isinstance(error, ValueError)
        assert isinstance(error, TaskCycleError)

    def test_due_date_unresolvable_message(self):
        """DueDateUnresolvableError names the scan start and horizon."""
        error = DueDateUnresolvableError(date(2024, 1, 1), 366)

        assert error.after == date(2024, 1, 1)
        assert "366 days after 2024-01-01" in str(error)


@pytest.mark.unit
class TestClassifyErrorWithResponse:
    """Tests for classify_error_with_response function."""

    def test_invalid_spec_is_form_validation_error(self):
        """Invalid specs surface as low-severity validation errors naming the field."""
        response = classify_error_with_response(InvalidSpecError("dayOfWeek", "is required for weekly schedules"))

        assert response.code == ErrorCode.ERR_INVALID_RECURRENCE_PATTERN
        assert response.severity == ErrorSeverity.LOW
        assert response.field == "dayOfWeek"
        assert "dayOfWeek" in response.message

    def test_unresolvable_is_schedule_health_error(self):
        """Unresolvable due dates surface as schedule-health errors."""
        response = classify_error_with_response(DueDateUnresolvableError(date(2024, 1, 1), 366))

        assert response.code == ErrorCode.ERR_DUE_DATE_UNRESOLVABLE
        assert response.severity == ErrorSeverity.MEDIUM
        assert response.field is None

    def test_invalid_transition(self):
        """Reviewing a reviewed completion maps to an invalid state transition."""
        response = classify_error_with_response(InvalidTransitionError("already approved"))

        assert response.code == ErrorCode.ERR_INVALID_STATE_TRANSITION

    def test_unknown_error(self):
        """Anything else is unknown."""
        response = classify_error_with_response(RuntimeError("boom"))

        assert response.code == ErrorCode.ERR_UNKNOWN
        assert "try again later" in response.suggestion.lower()
