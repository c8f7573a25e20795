"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from datetime import date, datetime, time

import logfire
import pytest

from taskcycle.domain.completion import CompletionRecord
from taskcycle.domain.schedule import TaskSchedule
from taskcycle.services import recurrence_engine


@pytest.fixture(scope="session", autouse=True)
def _quiet_logfire():
    """Configure Logfire so nothing is exported or printed during tests."""
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def make_schedule() -> Callable[..., TaskSchedule]:
    """Factory building a schedule from a wire-shaped spec."""

    def _make(spec: dict, *, created_on: date = date(2024, 1, 1), due_time: time | str | None = None) -> TaskSchedule:
        return TaskSchedule(pattern=recurrence_engine.validate(spec), created_on=created_on, due_time=due_time)

    return _make


@pytest.fixture
def make_completion() -> Callable[..., CompletionRecord]:
    """Factory building a completion record (approved by default)."""

    def _make(
        completed_at: datetime,
        approved: bool | None = True,
        *,
        task_id: str = "task_1",
        user_id: str | None = "user_1",
    ) -> CompletionRecord:
        return CompletionRecord(task_id=task_id, completed_at=completed_at, approved=approved, user_id=user_id)

    return _make
