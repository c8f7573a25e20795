"""Recurrence engine: validates schedules and answers occurrence queries.

This module provides functions for:
- Turning a loosely-typed RecurrenceSpec into a validated RecurrencePattern
- Testing whether a schedule is due on a calendar date
- Finding the next/previous occurrence with a bounded scan
- Describing a schedule in plain English

Key Concepts:
- Occurrence: a calendar date on which a schedule's pattern is due.
- Interval counting is anchored on the schedule's ``created_on`` date; dates
  before it are never due.
- Scans are bounded by ``settings.scan_horizon_days``. Exhausting the horizon
  raises DueDateUnresolvableError rather than looping.
"""

import logging
from collections.abc import Mapping
from datetime import date, time, timedelta
from typing import Any, assert_never

from pydantic import TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from taskcycle.core.calendar_math import (
    day_of_week,
    days_between,
    is_last_weekday_of_month,
    last_day_of_month,
    months_between,
    week_of_month,
    weeks_between,
)
from taskcycle.core.config import Constants, settings
from taskcycle.core.errors import DueDateUnresolvableError, InvalidSpecError
from taskcycle.core.logging import log_with_context, span
from taskcycle.domain.recurrence import (
    Custom,
    CustomPattern,
    Daily,
    DayOfMonth,
    Frequency,
    Monthly,
    NthWeekday,
    OneTime,
    RecurrencePattern,
    RecurrenceSpec,
    SpecificDays,
    Weekdays,
    Weekends,
    Weekly,
)
from taskcycle.domain.schedule import TaskSchedule


logger = logging.getLogger(__name__)

_pattern_adapter: TypeAdapter[RecurrencePattern] = TypeAdapter(RecurrencePattern)

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
WEEK_OF_MONTH_NAMES = {1: "First", 2: "Second", 3: "Third", 4: "Fourth", 5: "Last"}
MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
_ORDINAL_SUFFIXES = {1: "st", 2: "nd", 3: "rd"}


# Validation


def _require(value: int | None, field: str, frequency: Frequency) -> int:
    if value is None:
        raise InvalidSpecError(field, f"is required for {frequency} schedules")
    return value


def _check_range(value: int, field: str, low: int, high: int) -> None:
    if not low <= value <= high:
        raise InvalidSpecError(field, f"must be between {low} and {high}, got {value}")


def _check_interval(value: int | None, high: int) -> int:
    interval = Constants.MIN_INTERVAL if value is None else value
    _check_range(interval, "interval", Constants.MIN_INTERVAL, high)
    return interval


def _pattern_fields(spec: RecurrenceSpec) -> dict[str, Any]:  # noqa: C901, PLR0912
    """Build the raw pattern payload for a spec, enforcing per-field invariants."""
    frequency = spec.frequency

    if frequency == Frequency.ONE_TIME:
        return {"kind": "one-time"}

    if frequency == Frequency.DAILY:
        return {"kind": "daily", "interval": _check_interval(spec.interval, Constants.MAX_DAILY_INTERVAL)}

    if frequency == Frequency.WEEKLY:
        interval = _check_interval(spec.interval, Constants.MAX_WEEKLY_INTERVAL)
        dow = _require(spec.day_of_week, "dayOfWeek", frequency)
        _check_range(dow, "dayOfWeek", Constants.SUNDAY, Constants.SATURDAY)
        return {"kind": "weekly", "interval": interval, "day_of_week": dow}

    if frequency == Frequency.MONTHLY:
        interval = _check_interval(spec.interval, Constants.MAX_MONTHLY_INTERVAL)
        # Day-of-month takes precedence when both anchors are supplied
        if spec.day_of_month is not None:
            _check_range(spec.day_of_month, "dayOfMonth", 1, Constants.MAX_DAY_OF_MONTH)
            anchor: dict[str, Any] = {"kind": "day_of_month", "day": spec.day_of_month}
        elif spec.week_of_month is not None:
            _check_range(
                spec.week_of_month, "weekOfMonth", Constants.FIRST_WEEK_OF_MONTH, Constants.LAST_WEEK_OF_MONTH
            )
            dow = _require(spec.day_of_week, "dayOfWeek", frequency)
            _check_range(dow, "dayOfWeek", Constants.SUNDAY, Constants.SATURDAY)
            _check_range(interval, "interval", Constants.MIN_INTERVAL, Constants.MAX_NTH_WEEKDAY_INTERVAL)
            anchor = {"kind": "nth_weekday", "week": spec.week_of_month, "day_of_week": dow}
        else:
            raise InvalidSpecError("dayOfMonth", "or weekOfMonth is required for monthly schedules")
        return {"kind": "monthly", "interval": interval, "anchor": anchor}

    if frequency == Frequency.CUSTOM:
        if spec.custom_pattern is None:
            raise InvalidSpecError("customPattern", "is required for custom schedules")
        if spec.custom_pattern == CustomPattern.WEEKDAYS:
            return {"kind": "custom", "rule": {"kind": "weekdays"}}
        if spec.custom_pattern == CustomPattern.WEEKENDS:
            return {"kind": "custom", "rule": {"kind": "weekends"}}
        if not spec.specific_days:
            raise InvalidSpecError("specificDays", "must contain at least one day")
        for day in spec.specific_days:
            _check_range(day, "specificDays", Constants.SUNDAY, Constants.SATURDAY)
        return {"kind": "custom", "rule": {"kind": "specific_days", "days": sorted(set(spec.specific_days))}}

    assert_never(frequency)


def _first_error(exc: ValidationError) -> InvalidSpecError:
    error = exc.errors()[0]
    loc = [part for part in error["loc"] if isinstance(part, str)]
    name = loc[-1] if loc else "spec"
    field = to_camel(name) if "_" in name else name
    return InvalidSpecError(field, error["msg"].lower())


def validate(spec: RecurrenceSpec | Mapping[str, Any]) -> RecurrencePattern:
    """Validate a recurrence spec and build the matching pattern.

    This is the only place pattern invariants are enforced; every other
    function assumes a validated pattern.

    Args:
        spec: RecurrenceSpec or a mapping in the wire shape (camelCase keys)

    Returns:
        The validated RecurrencePattern variant

    Raises:
        InvalidSpecError: If a field is missing, out of range, or empty
    """
    try:
        parsed = spec if isinstance(spec, RecurrenceSpec) else RecurrenceSpec.model_validate(spec)
        return _pattern_adapter.validate_python(_pattern_fields(parsed))
    except ValidationError as e:
        error = _first_error(e)
        log_with_context(logger, "warning", "Rejected recurrence spec", field=error.field, reason=error.reason)
        raise error from e
    except InvalidSpecError as e:
        log_with_context(logger, "warning", "Rejected recurrence spec", field=e.field, reason=e.reason)
        raise


def to_spec(pattern: RecurrencePattern) -> RecurrenceSpec:
    """Convert a pattern back to its wire spec (e.g. to prefill an edit form)."""
    match pattern:
        case OneTime():
            return RecurrenceSpec(frequency=Frequency.ONE_TIME)
        case Daily(interval=interval):
            return RecurrenceSpec(frequency=Frequency.DAILY, interval=interval)
        case Weekly(interval=interval, day_of_week=dow):
            return RecurrenceSpec(frequency=Frequency.WEEKLY, interval=interval, day_of_week=dow)
        case Monthly(interval=interval, anchor=DayOfMonth(day=day)):
            return RecurrenceSpec(frequency=Frequency.MONTHLY, interval=interval, day_of_month=day)
        case Monthly(interval=interval, anchor=NthWeekday(week=week, day_of_week=dow)):
            return RecurrenceSpec(
                frequency=Frequency.MONTHLY, interval=interval, week_of_month=week, day_of_week=dow
            )
        case Custom(rule=Weekdays()):
            return RecurrenceSpec(frequency=Frequency.CUSTOM, custom_pattern=CustomPattern.WEEKDAYS)
        case Custom(rule=Weekends()):
            return RecurrenceSpec(frequency=Frequency.CUSTOM, custom_pattern=CustomPattern.WEEKENDS)
        case Custom(rule=SpecificDays(days=days)):
            return RecurrenceSpec(
                frequency=Frequency.CUSTOM,
                custom_pattern=CustomPattern.SPECIFIC_DAYS,
                specific_days=sorted(days),
            )
        case _:
            assert_never(pattern)


# Occurrence queries


def custom_days(pattern: Custom) -> frozenset[int]:
    """Days of week (0=Sunday) a custom pattern is due on."""
    match pattern.rule:
        case Weekdays():
            return Constants.WEEKDAYS
        case Weekends():
            return Constants.WEEKEND_DAYS
        case SpecificDays(days=days):
            return days
        case _:
            assert_never(pattern.rule)


def _matches_monthly_anchor(anchor: DayOfMonth | NthWeekday, day: date) -> bool:
    match anchor:
        case DayOfMonth(day=anchor_day):
            return day.day == min(anchor_day, last_day_of_month(day.year, day.month))
        case NthWeekday(week=week, day_of_week=dow):
            if day_of_week(day) != dow:
                return False
            if week == Constants.LAST_WEEK_OF_MONTH:
                return is_last_weekday_of_month(day)
            return week_of_month(day) == week
        case _:
            assert_never(anchor)


def is_due_on(schedule: TaskSchedule, day: date) -> bool:
    """Return True if the schedule has an occurrence on ``day``.

    Pure and total: no clock reads, no errors for any validated schedule.
    """
    created_on = schedule.created_on
    if day < created_on:
        return False

    pattern = schedule.pattern
    match pattern:
        case OneTime():
            return day == created_on
        case Daily(interval=interval):
            return days_between(created_on, day) % interval == 0
        case Weekly(interval=interval, day_of_week=dow):
            return day_of_week(day) == dow and weeks_between(created_on, day) % interval == 0
        case Monthly(interval=interval, anchor=anchor):
            return months_between(created_on, day) % interval == 0 and _matches_monthly_anchor(anchor, day)
        case Custom():
            return day_of_week(day) in custom_days(pattern)
        case _:
            assert_never(pattern)


def find_next(schedule: TaskSchedule, after: date, horizon_days: int | None = None) -> date | None:
    """Scan forward from ``after + 1 day``; return None if the horizon is exhausted."""
    horizon = settings.scan_horizon_days if horizon_days is None else horizon_days
    for offset in range(1, horizon + 1):
        candidate = after + timedelta(days=offset)
        if is_due_on(schedule, candidate):
            return candidate
    return None


def next_occurrence(schedule: TaskSchedule, after: date) -> date:
    """Return the smallest occurrence strictly after ``after``.

    Args:
        schedule: Validated task schedule
        after: Date to search from (exclusive)

    Returns:
        The next due date

    Raises:
        DueDateUnresolvableError: If nothing is due within the scan horizon,
            including one-time schedules whose date has passed
    """
    with span("recurrence_engine.next_occurrence", after=after.isoformat(), kind=schedule.pattern.kind):
        found = find_next(schedule, after)
        if found is None:
            horizon = settings.scan_horizon_days
            log_with_context(
                logger,
                "warning",
                "No occurrence within scan horizon",
                after=after.isoformat(),
                horizon=horizon,
                kind=schedule.pattern.kind,
            )
            raise DueDateUnresolvableError(after, horizon)
        return found


def previous_occurrence(schedule: TaskSchedule, on_or_before: date) -> date | None:
    """Return the most recent occurrence on or before ``on_or_before``, or None.

    The scan stops at the horizon or at ``created_on``, whichever comes first.
    """
    horizon = settings.scan_horizon_days
    for offset in range(horizon + 1):
        candidate = on_or_before - timedelta(days=offset)
        if candidate < schedule.created_on:
            return None
        if is_due_on(schedule, candidate):
            return candidate
    return None


def occurrences_between(schedule: TaskSchedule, start: date, end: date) -> list[date]:
    """List every occurrence in the inclusive range ``[start, end]``."""
    if end < start:
        return []
    span_days = days_between(start, end)
    return [
        start + timedelta(days=offset)
        for offset in range(span_days + 1)
        if is_due_on(schedule, start + timedelta(days=offset))
    ]


# Descriptions


def ordinal(n: int) -> str:
    """Return ``n`` with its English ordinal suffix (1st, 2nd, 3rd, 11th, 22nd)."""
    suffix = "th" if 11 <= n % 100 <= 13 else _ORDINAL_SUFFIXES.get(n % 10, "th")  # noqa: PLR2004
    return f"{n}{suffix}"


def _format_time(value: time) -> str:
    """Format a due time the way reminders display it (e.g. '5:30 PM')."""
    h, m = value.hour, value.minute
    if h == 0 and m == 0:
        return "midnight"
    if h == 12 and m == 0:  # noqa: PLR2004
        return "noon"
    period = "AM" if h < 12 else "PM"  # noqa: PLR2004
    display_hour = h if h <= 12 else h - 12  # noqa: PLR2004
    if display_hour == 0:
        display_hour = 12
    return f"{display_hour}:{m:02d} {period}"


def _every(interval: int, unit: str) -> str:
    return f"Every {unit}" if interval == 1 else f"Every {interval} {unit}s"


def describe_pattern(pattern: RecurrencePattern, created_on: date | None = None) -> str:
    """Describe a pattern without its due time."""
    match pattern:
        case OneTime():
            if created_on is None:
                return "One time only"
            weekday = DAY_NAMES[day_of_week(created_on)]
            month = MONTH_NAMES[created_on.month - 1]
            return f"One time only ({weekday}, {month} {created_on.day}, {created_on.year})"
        case Daily(interval=interval):
            return _every(interval, "day")
        case Weekly(interval=interval, day_of_week=dow):
            return f"{_every(interval, 'week')} on {DAY_NAMES[dow]}"
        case Monthly(interval=interval, anchor=DayOfMonth(day=day)):
            return f"{_every(interval, 'month')} on the {ordinal(day)}"
        case Monthly(interval=interval, anchor=NthWeekday(week=week, day_of_week=dow)):
            return f"{_every(interval, 'month')} on the {WEEK_OF_MONTH_NAMES[week]} {DAY_NAMES[dow]}"
        case Custom(rule=Weekdays()):
            return "Every weekday (Mon–Fri)"
        case Custom(rule=Weekends()):
            return "Every weekend (Sat–Sun)"
        case Custom(rule=SpecificDays(days=days)):
            return "Every " + ", ".join(DAY_NAMES[d] for d in sorted(days))
        case _:
            assert_never(pattern)


def describe(schedule: TaskSchedule) -> str:
    """Describe a schedule in plain English, e.g. 'Every 2 weeks on Monday at 5:00 PM'."""
    text = describe_pattern(schedule.pattern, schedule.created_on)
    if schedule.due_time is not None:
        text = f"{text} at {_format_time(schedule.due_time)}"
    return text
