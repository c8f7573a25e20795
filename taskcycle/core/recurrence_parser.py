"""CRON export for task schedules.

Schedules that fit a single CRON expression can be handed to external
schedulers. Intervals above one and one-time schedules cannot, and neither can
clamped days of month past the 28th or "last weekday" anchors.
"""

import logging
from typing import assert_never

from croniter import croniter

from taskcycle.domain.recurrence import (
    Custom,
    Daily,
    DayOfMonth,
    Monthly,
    NthWeekday,
    OneTime,
    RecurrencePattern,
    SpecificDays,
    Weekdays,
    Weekends,
    Weekly,
)
from taskcycle.domain.schedule import TaskSchedule


logger = logging.getLogger(__name__)

# Highest day of month that exists in every month
_SAFE_DAY_OF_MONTH = 28
_MAX_NTH_WEEKDAY = 4


def _fields(pattern: RecurrencePattern) -> tuple[str, str] | None:  # noqa: PLR0911
    """Return the (day_of_month, day_of_week) CRON fields, or None if not expressible."""
    match pattern:
        case OneTime():
            return None
        case Daily(interval=interval):
            return ("*", "*") if interval == 1 else None
        case Weekly(interval=interval, day_of_week=dow):
            return ("*", str(dow)) if interval == 1 else None
        case Monthly(interval=interval, anchor=DayOfMonth(day=day)):
            if interval != 1 or day > _SAFE_DAY_OF_MONTH:
                return None
            return (str(day), "*")
        case Monthly(interval=interval, anchor=NthWeekday(week=week, day_of_week=dow)):
            if interval != 1 or week > _MAX_NTH_WEEKDAY:
                return None
            return ("*", f"{dow}#{week}")
        case Custom(rule=Weekdays()):
            return ("*", "1-5")
        case Custom(rule=Weekends()):
            return ("*", "0,6")
        case Custom(rule=SpecificDays(days=days)):
            return ("*", ",".join(str(d) for d in sorted(days)))
        case _:
            assert_never(pattern)


def schedule_to_cron(schedule: TaskSchedule) -> str | None:
    """Convert a schedule to a CRON expression (e.g. "0 17 * * 1").

    The due time becomes the minute/hour fields; schedules without one fire at
    midnight. Note that CRON ignores ``created_on``, so the expression only
    matches the schedule on or after the creation date.

    Args:
        schedule: Validated task schedule

    Returns:
        CRON expression, or None if the schedule has no single-expression form
    """
    fields = _fields(schedule.pattern)
    if fields is None:
        return None

    minute, hour = (schedule.due_time.minute, schedule.due_time.hour) if schedule.due_time else (0, 0)
    day_of_month, day_of_week = fields
    expression = f"{minute} {hour} {day_of_month} * {day_of_week}"

    if not croniter.is_valid(expression):
        logger.warning("Generated invalid CRON expression %s for %s schedule", expression, schedule.pattern.kind)
        return None
    return expression
