"""Unit tests for calendar arithmetic helpers."""

from datetime import date

import pytest

from taskcycle.core import calendar_math


@pytest.mark.unit
class TestCalendarMath:
    """Tests for calendar_math helpers."""

    @pytest.mark.parametrize(
        ("day", "expected"),
        [(date(2024, 1, 7), 0), (date(2024, 1, 8), 1), (date(2024, 1, 13), 6)],
    )
    def test_day_of_week_is_sunday_first(self, day, expected):
        """Sunday is 0 and Saturday is 6."""
        assert calendar_math.day_of_week(day) == expected

    def test_week_start(self):
        """Weeks start on Sunday."""
        assert calendar_math.week_start(date(2024, 1, 10)) == date(2024, 1, 7)
        assert calendar_math.week_start(date(2024, 1, 7)) == date(2024, 1, 7)

    def test_weeks_between_uses_week_starts(self):
        """Saturday to the next Sunday is one week apart."""
        assert calendar_math.weeks_between(date(2024, 1, 13), date(2024, 1, 14)) == 1
        assert calendar_math.weeks_between(date(2024, 1, 7), date(2024, 1, 13)) == 0

    def test_months_between_across_years(self):
        """Month counting spans year boundaries."""
        assert calendar_math.months_between(date(2023, 11, 30), date(2024, 2, 1)) == 3

    def test_last_day_of_month(self):
        """February length depends on leap years."""
        assert calendar_math.last_day_of_month(2023, 2) == 28
        assert calendar_math.last_day_of_month(2024, 2) == 29

    def test_week_of_month(self):
        """Days 1-7 are week 1, 15-21 are week 3."""
        assert calendar_math.week_of_month(date(2024, 1, 7)) == 1
        assert calendar_math.week_of_month(date(2024, 1, 19)) == 3

    def test_last_weekday_of_month(self):
        """The final seven days of a month hold each weekday's last occurrence."""
        assert calendar_math.is_last_weekday_of_month(date(2024, 2, 23))
        assert not calendar_math.is_last_weekday_of_month(date(2024, 2, 22))
