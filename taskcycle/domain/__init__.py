"""Domain models and DTOs."""

from taskcycle.domain.completion import CompletionRecord, CycleWindow, StreakState, TaskInstanceState
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


__all__ = [
    "CompletionRecord",
    "Custom",
    "CustomPattern",
    "CycleWindow",
    "Daily",
    "DayOfMonth",
    "Frequency",
    "Monthly",
    "NthWeekday",
    "OneTime",
    "RecurrencePattern",
    "RecurrenceSpec",
    "SpecificDays",
    "StreakState",
    "TaskInstanceState",
    "TaskSchedule",
    "Weekdays",
    "Weekends",
    "Weekly",
]
