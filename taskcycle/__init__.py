"""Task recurrence and cycle-state engine.

Pure functions over immutable inputs: callers pass ``now`` and
``reference_date`` explicitly, and nothing reads the clock.
"""

from taskcycle.core.errors import (
    DueDateUnresolvableError,
    InvalidSpecError,
    InvalidTransitionError,
    TaskCycleError,
)
from taskcycle.domain import (
    CompletionRecord,
    CycleWindow,
    RecurrencePattern,
    RecurrenceSpec,
    StreakState,
    TaskInstanceState,
    TaskSchedule,
)
from taskcycle.services.recurrence_engine import describe, is_due_on, next_occurrence, validate
from taskcycle.services.streak_tracker import compute_streak, compute_streak_state
from taskcycle.services.task_state_machine import compute_state, cycle_window


__all__ = [
    "CompletionRecord",
    "CycleWindow",
    "DueDateUnresolvableError",
    "InvalidSpecError",
    "InvalidTransitionError",
    "RecurrencePattern",
    "RecurrenceSpec",
    "StreakState",
    "TaskCycleError",
    "TaskInstanceState",
    "TaskSchedule",
    "compute_state",
    "compute_streak",
    "compute_streak_state",
    "cycle_window",
    "describe",
    "is_due_on",
    "next_occurrence",
    "validate",
]
