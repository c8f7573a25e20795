"""Task schedule domain model."""

from datetime import date, time

from pydantic import BaseModel, ConfigDict, Field

from taskcycle.core.config import settings
from taskcycle.domain.recurrence import RecurrencePattern


class TaskSchedule(BaseModel):
    """Immutable schedule attached to a task.

    Editing a task builds a new schedule; instances are never mutated.
    """

    model_config = ConfigDict(frozen=True)

    pattern: RecurrencePattern = Field(..., description="Validated recurrence pattern")
    due_time: time | None = Field(default=None, description="Local time-of-day the task is due (e.g. '17:00')")
    created_on: date = Field(..., description="Date the task was authored; anchors interval counting")
    timezone: str = Field(
        default_factory=lambda: settings.default_timezone,
        min_length=1,
        description="Timezone identifier the caller localizes dates in",
    )

    def replace_pattern(self, pattern: RecurrencePattern) -> "TaskSchedule":
        """Return a new schedule with the pattern swapped out."""
        return TaskSchedule(
            pattern=pattern,
            due_time=self.due_time,
            created_on=self.created_on,
            timezone=self.timezone,
        )
