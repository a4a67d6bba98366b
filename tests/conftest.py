"""Pytest configuration and shared fixtures."""

import uuid
from collections.abc import Callable

import pytest

from src.core.task_store import TaskStore
from src.domain.task import EnergyLevel, Task


TaskFactory = Callable[..., Task]


@pytest.fixture
def make_task() -> TaskFactory:
    """Factory for task rows with sensible defaults."""

    def _make_task(
        date: str = "2024-05-06",
        *,
        energy: EnergyLevel = EnergyLevel.MEDIUM,
        duration: int = 25,
        completed: bool = False,
        actual: int | None = None,
        rescheduled_to: str | None = None,
        title: str | None = None,
        notes: str | None = None,
    ) -> Task:
        task_id = uuid.uuid4().hex
        return Task(
            id=task_id,
            title=title or f"Task {task_id[:6]}",
            energy=energy,
            duration_minutes=duration,
            completed=completed,
            scheduled_date=date,
            actual_duration_minutes=actual,
            rescheduled_to=rescheduled_to,
            notes=notes,
        )

    return _make_task


@pytest.fixture
def store() -> TaskStore:
    """Provides a fresh, empty TaskStore for each test."""
    return TaskStore()
