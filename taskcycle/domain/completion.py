"""Completion, task state and streak domain models."""

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taskcycle.core.errors import InvalidTransitionError


class TaskInstanceState(StrEnum):
    """State of a task within its active cycle."""

    PENDING = "pending"
    OVERDUE = "overdue"
    PENDING_APPROVAL = "pending_approval"
    COMPLETED = "completed"


class CompletionRecord(BaseModel):
    """A single completion of a task by a household member.

    ``approved`` is None while awaiting approval. Records are append-only; a
    denial keeps the record but no longer satisfies the cycle.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    task_id: str = Field(..., description="ID of the completed task")
    completed_at: datetime = Field(..., description="When the task was completed (already localized)")
    approved: bool | None = Field(default=None, description="True/False once reviewed, None while awaiting approval")
    user_id: str | None = Field(default=None, description="ID of the member who completed the task")

    @property
    def completed_on(self) -> date:
        """Calendar date of the completion."""
        return self.completed_at.date()

    def with_approval(self, approved: bool) -> "CompletionRecord":
        """Return a copy with the approval decision recorded."""
        if self.approved is not None:
            status = "approved" if self.approved else "denied"
            msg = f"Cannot review: completion of task {self.task_id} is already {status}"
            raise InvalidTransitionError(msg)
        return self.model_copy(update={"approved": approved})


class CycleWindow(BaseModel):
    """Half-open date range ``[start, end)``; ``end`` None means open-ended."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date | None = None

    def contains(self, day: date) -> bool:
        if day < self.start:
            return False
        return self.end is None or day < self.end


class StreakState(BaseModel):
    """Derived streak values; recomputed from completions on every call."""

    model_config = ConfigDict(frozen=True)

    current_streak: int = Field(default=0, ge=0, description="Consecutive days ending on the reference date")
    completed_on_reference_date: bool = Field(default=False, description="Approved completion on the reference date")
    streak_through_previous_day: int = Field(default=0, ge=0, description="Consecutive days ending the day before")
    at_risk: bool = Field(default=False, description="A running streak will break unless something is completed today")
