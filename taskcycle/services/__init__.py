from taskcycle.services import (
    recurrence_engine,
    streak_tracker,
    task_state_machine,
)


__all__ = [
    "recurrence_engine",
    "streak_tracker",
    "task_state_machine",
]
