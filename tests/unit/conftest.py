"""Pytest configuration and fixtures for unit tests."""

import pytest

from src.core.task_store import TaskStore
from src.domain.task import EnergyLevel


@pytest.fixture
def two_day_store(store: TaskStore, make_task) -> TaskStore:
    """Store with two days of mixed history.

    2024-05-06: high done (40m), high open, low done (20m)
    2024-05-07: low done (20m), medium open
    """
    store.put(
        "2024-05-06",
        [
            make_task("2024-05-06", energy=EnergyLevel.HIGH, duration=40, completed=True),
            make_task("2024-05-06", energy=EnergyLevel.HIGH, duration=40),
            make_task("2024-05-06", energy=EnergyLevel.LOW, duration=20, completed=True),
        ],
    )
    store.put(
        "2024-05-07",
        [
            make_task("2024-05-07", energy=EnergyLevel.LOW, duration=20, completed=True),
            make_task("2024-05-07", energy=EnergyLevel.MEDIUM, duration=40),
        ],
    )
    return store
