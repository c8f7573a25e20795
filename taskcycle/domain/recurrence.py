"""Recurrence pattern domain models.

A pattern is a closed set of variants discriminated on ``kind``. Instances are
built through ``recurrence_engine.validate`` and are immutable afterwards.
"""

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from taskcycle.core.config import Constants


DayIndex = Annotated[int, Field(ge=0, le=6, description="Day of week (0=Sunday, 6=Saturday)")]


class Frequency(StrEnum):
    """Frequency values accepted on the wire."""

    ONE_TIME = "one-time"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class CustomPattern(StrEnum):
    """Custom pattern values accepted on the wire."""

    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"
    SPECIFIC_DAYS = "specific_days"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class OneTime(_Frozen):
    """Due once, on the day the schedule was created."""

    kind: Literal["one-time"] = "one-time"


class Daily(_Frozen):
    """Due every ``interval`` days counted from the creation date."""

    kind: Literal["daily"] = "daily"
    interval: int = Field(default=1, ge=Constants.MIN_INTERVAL, le=Constants.MAX_DAILY_INTERVAL)


class Weekly(_Frozen):
    """Due on ``day_of_week`` every ``interval`` weeks."""

    kind: Literal["weekly"] = "weekly"
    interval: int = Field(default=1, ge=Constants.MIN_INTERVAL, le=Constants.MAX_WEEKLY_INTERVAL)
    day_of_week: DayIndex


class DayOfMonth(_Frozen):
    """Monthly anchor on a fixed day, clamped to the month's last day."""

    kind: Literal["day_of_month"] = "day_of_month"
    day: int = Field(..., ge=1, le=Constants.MAX_DAY_OF_MONTH)


class NthWeekday(_Frozen):
    """Monthly anchor on the nth weekday of the month (week 5 means the last one)."""

    kind: Literal["nth_weekday"] = "nth_weekday"
    week: int = Field(..., ge=Constants.FIRST_WEEK_OF_MONTH, le=Constants.LAST_WEEK_OF_MONTH)
    day_of_week: DayIndex


MonthlyAnchor = Annotated[DayOfMonth | NthWeekday, Field(discriminator="kind")]


class Monthly(_Frozen):
    """Due on ``anchor`` every ``interval`` months."""

    kind: Literal["monthly"] = "monthly"
    interval: int = Field(default=1, ge=Constants.MIN_INTERVAL, le=Constants.MAX_MONTHLY_INTERVAL)
    anchor: MonthlyAnchor

    @model_validator(mode="after")
    def _nth_weekday_interval(self) -> "Monthly":
        if isinstance(self.anchor, NthWeekday) and self.interval > Constants.MAX_NTH_WEEKDAY_INTERVAL:
            msg = f"interval must be at most {Constants.MAX_NTH_WEEKDAY_INTERVAL} for nth-weekday anchors"
            raise ValueError(msg)
        return self


class Weekdays(_Frozen):
    kind: Literal["weekdays"] = "weekdays"


class Weekends(_Frozen):
    kind: Literal["weekends"] = "weekends"


class SpecificDays(_Frozen):
    kind: Literal["specific_days"] = "specific_days"
    days: frozenset[DayIndex] = Field(..., min_length=1)


CustomRule = Annotated[Weekdays | Weekends | SpecificDays, Field(discriminator="kind")]


class Custom(_Frozen):
    """Due on a fixed set of weekdays, every week."""

    kind: Literal["custom"] = "custom"
    rule: CustomRule


RecurrencePattern = Annotated[OneTime | Daily | Weekly | Monthly | Custom, Field(discriminator="kind")]


class RecurrenceSpec(BaseModel):
    """Loosely-typed recurrence input as submitted by task forms.

    Fields are optional and mutually exclusive by frequency; no range checks
    happen here. ``recurrence_engine.validate`` turns a spec into a pattern.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    frequency: Frequency = Field(..., description="one-time, daily, weekly, monthly or custom")
    interval: int | None = Field(default=None, description="Every X days/weeks/months")
    day_of_week: int | None = Field(default=None, description="0=Sunday, 1=Monday, etc.")
    week_of_month: int | None = Field(default=None, description="1-5 (1st, 2nd, 3rd, 4th, last)")
    day_of_month: int | None = Field(default=None, description="1-31")
    custom_pattern: CustomPattern | None = Field(default=None, description="Custom pattern kind")
    specific_days: list[int] | None = Field(default=None, description="Days of week for specific_days")
