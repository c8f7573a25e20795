"""Streak tracking over completion history.

Key Concepts:
- Streak: consecutive calendar days, ending on the reference date, with at
  least one approved completion of anything. It is not cadence-aware, so a
  weekly task's owner sees the streak break on non-scheduled days.
- At risk: a streak of ``settings.streak_at_risk_threshold`` or more days
  through yesterday, with nothing approved yet on the reference date.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta

from taskcycle.core.calendar_math import days_between
from taskcycle.core.config import settings
from taskcycle.core.logging import span
from taskcycle.domain.completion import CompletionRecord, StreakState


logger = logging.getLogger(__name__)


def approved_dates(completions: Iterable[CompletionRecord]) -> list[date]:
    """Distinct calendar dates with an approved completion, most recent first."""
    return sorted({c.completed_on for c in completions if c.approved is True}, reverse=True)


def compute_streak(completions: Iterable[CompletionRecord], *, reference_date: date) -> int:
    """Count consecutive days with an approved completion, ending on ``reference_date``.

    A streak requires a completion on the reference date itself; pass
    yesterday as ``reference_date`` to count a streak that is still alive.
    Completions after the reference date are ignored.
    """
    streak = 0
    for day in approved_dates(completions):
        gap = days_between(day, reference_date)
        if gap == streak:
            streak += 1
        elif gap > streak:
            break
    return streak


def compute_streak_state(
    completions: Iterable[CompletionRecord],
    *,
    reference_date: date,
    at_risk_threshold: int | None = None,
) -> StreakState:
    """Compute the streak plus whether it is about to break.

    Args:
        completions: Completion history (any order, any approval status)
        reference_date: The caller's "today"
        at_risk_threshold: Minimum streak to flag; defaults to settings

    Returns:
        StreakState for the reference date
    """
    threshold = settings.streak_at_risk_threshold if at_risk_threshold is None else at_risk_threshold
    records = list(completions)
    with span("streak_tracker.compute_streak_state", reference_date=reference_date.isoformat()):
        current = compute_streak(records, reference_date=reference_date)
        previous = compute_streak(records, reference_date=reference_date - timedelta(days=1))
        completed_today = current > 0
        at_risk = not completed_today and previous >= threshold
        if at_risk:
            logger.info("Streak of %d days at risk on %s", previous, reference_date.isoformat())
        return StreakState(
            current_streak=current,
            completed_on_reference_date=completed_today,
            streak_through_previous_day=previous,
            at_risk=at_risk,
        )


def member_streaks(completions: Iterable[CompletionRecord], *, reference_date: date) -> dict[str, int]:
    """Current streak per completing member; records without a user_id are skipped."""
    by_member: dict[str, list[CompletionRecord]] = defaultdict(list)
    for completion in completions:
        if completion.user_id is not None:
            by_member[completion.user_id].append(completion)
    return {
        user_id: compute_streak(records, reference_date=reference_date) for user_id, records in by_member.items()
    }


def longest_streak(completions: Iterable[CompletionRecord], *, reference_date: date) -> int:
    """Longest current streak across all members (0 when nobody has one)."""
    return max(member_streaks(completions, reference_date=reference_date).values(), default=0)
