"""Pure state derivation for a task's active cycle.

There is no stored state and no reset step: every call recomputes the state
from the schedule, the completion snapshot and the caller-supplied ``now``, so
a new cycle yields PENDING on its own.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from taskcycle.core.config import Constants
from taskcycle.core.logging import span
from taskcycle.domain.completion import CompletionRecord, CycleWindow, TaskInstanceState
from taskcycle.domain.recurrence import Custom, Daily, OneTime, RecurrencePattern
from taskcycle.domain.schedule import TaskSchedule
from taskcycle.services import recurrence_engine


logger = logging.getLogger(__name__)


# Allowed transitions within a single cycle
TRANSITIONS: dict[TaskInstanceState, set[TaskInstanceState]] = {
    TaskInstanceState.PENDING: {TaskInstanceState.PENDING_APPROVAL, TaskInstanceState.COMPLETED},
    TaskInstanceState.OVERDUE: {TaskInstanceState.PENDING_APPROVAL, TaskInstanceState.COMPLETED},
    TaskInstanceState.PENDING_APPROVAL: {TaskInstanceState.COMPLETED, TaskInstanceState.PENDING},
    TaskInstanceState.COMPLETED: set(),  # Next cycle starts fresh
}


def can_transition(current: TaskInstanceState, target: TaskInstanceState) -> bool:
    """Return True if ``target`` is reachable from ``current`` within a cycle."""
    return target in TRANSITIONS[current]


def cycle_window(schedule: TaskSchedule, now: datetime) -> CycleWindow | None:
    """Return the active cycle window at ``now``, or None before the first occurrence.

    ``start`` is the most recent occurrence on or before today and ``end`` is
    the occurrence after it. One-time schedules never roll over, so their
    window stays open from ``created_on``.
    """
    with span("task_state_machine.cycle_window", kind=schedule.pattern.kind):
        today = now.date()
        if isinstance(schedule.pattern, OneTime):
            if today < schedule.created_on:
                return None
            return CycleWindow(start=schedule.created_on, end=None)

        start = recurrence_engine.previous_occurrence(schedule, today)
        if start is None:
            return None
        end = recurrence_engine.find_next(schedule, start)
        if end is None:
            logger.warning("Cycle starting %s has no end within the scan horizon", start.isoformat())
        return CycleWindow(start=start, end=end)


def completions_in_window(
    completions: Iterable[CompletionRecord], window: CycleWindow | None
) -> list[CompletionRecord]:
    """Filter completions whose calendar date falls inside the window."""
    if window is None:
        return []
    return [c for c in completions if window.contains(c.completed_on)]


def is_daily_cadence(pattern: RecurrencePattern) -> bool:
    """True for patterns that repeat on a day-based cadence."""
    if isinstance(pattern, Daily):
        return True
    if isinstance(pattern, Custom):
        return recurrence_engine.custom_days(pattern) == Constants.ALL_DAYS
    return False


def _is_overdue(schedule: TaskSchedule, window: CycleWindow | None, now: datetime) -> bool:
    # Only daily cadences with a due time can become overdue
    if window is None or schedule.due_time is None or not is_daily_cadence(schedule.pattern):
        return False
    due_at = datetime.combine(window.start, schedule.due_time, tzinfo=now.tzinfo)
    return now > due_at


def compute_state(
    schedule: TaskSchedule,
    completions: Iterable[CompletionRecord],
    now: datetime,
) -> TaskInstanceState:
    """Derive the task's state for the cycle active at ``now``.

    The latest completion inside the window decides the state: awaiting
    approval, approved, or denied (which reopens the cycle). With no
    completion the task is pending, or overdue once a daily task's due time
    has passed.

    Args:
        schedule: Validated task schedule
        completions: Completion snapshot; records outside the window are ignored
        now: Current local time supplied by the caller

    Returns:
        TaskInstanceState for the active cycle
    """
    with span("task_state_machine.compute_state", kind=schedule.pattern.kind):
        window = cycle_window(schedule, now)
        in_window = completions_in_window(completions, window)

        if not in_window:
            if _is_overdue(schedule, window, now):
                return TaskInstanceState.OVERDUE
            return TaskInstanceState.PENDING

        latest = max(in_window, key=lambda c: c.completed_at)
        if latest.approved is None:
            return TaskInstanceState.PENDING_APPROVAL
        if latest.approved:
            return TaskInstanceState.COMPLETED
        return TaskInstanceState.PENDING


def is_satisfied(schedule: TaskSchedule, completions: Iterable[CompletionRecord], now: datetime) -> bool:
    """True if any completion in the active window has not been denied."""
    window = cycle_window(schedule, now)
    return any(c.approved is not False for c in completions_in_window(completions, window))
