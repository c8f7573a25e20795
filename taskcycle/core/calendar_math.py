"""Calendar arithmetic shared by the recurrence engine and streak tracker.

Day-of-week indices follow the Sunday-first convention used throughout the
engine: 0=Sunday, 1=Monday, ..., 6=Saturday.
"""

import calendar
from datetime import date, timedelta

from taskcycle.core.config import Constants


def day_of_week(day: date) -> int:
    """Return the Sunday-first weekday index (0=Sunday) of a date."""
    return day.isoweekday() % Constants.DAYS_IN_WEEK


def week_start(day: date) -> date:
    """Return the Sunday that starts the week containing ``day``."""
    return day - timedelta(days=day_of_week(day))


def days_between(start: date, end: date) -> int:
    """Signed number of days from ``start`` to ``end``."""
    return (end - start).days


def weeks_between(start: date, end: date) -> int:
    """Whole weeks between the Sunday-aligned weeks containing ``start`` and ``end``."""
    return days_between(week_start(start), week_start(end)) // Constants.DAYS_IN_WEEK


def months_between(start: date, end: date) -> int:
    """Calendar months between two dates, ignoring the day of month."""
    return (end.year - start.year) * Constants.MONTHS_IN_YEAR + (end.month - start.month)


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def week_of_month(day: date) -> int:
    """1-based index of this weekday's occurrence within its month (1st, 2nd, ...)."""
    return (day.day - 1) // Constants.DAYS_IN_WEEK + 1


def is_last_weekday_of_month(day: date) -> bool:
    """True when no later date in the same month shares this weekday."""
    return day.day + Constants.DAYS_IN_WEEK > last_day_of_month(day.year, day.month)
