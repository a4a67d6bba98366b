"""Focus workflow: one task at a time, matched to the user's energy.

The queue for a day is its bucket in insertion order, minus completed rows and
rows left behind by a reschedule. Skipping sends a task to the back of the
bucket so the next matching task comes up.
"""

import logging
from datetime import UTC, datetime

from src.core.dates import validate_date_key
from src.core.logging import log_with_task_context, span
from src.core.task_store import InvalidTaskStateError, TaskStore, new_task
from src.domain.create_models import TaskCreate
from src.domain.task import EnergyLevel, Task


logger = logging.getLogger(__name__)


def pending_queue(store: TaskStore, date: str) -> list[Task]:
    """Incomplete, not rescheduled tasks for a date, in queue order."""
    return [task for task in store.get(date) if task.is_pending]


def current_task(store: TaskStore, date: str, energy: EnergyLevel | None) -> Task | None:
    """Pick the task to focus on now.

    Prefers the first pending task matching the selected energy, then falls
    back to the first pending task of any energy.

    Returns:
        The task, or None if no energy is selected or nothing is pending
    """
    if energy is None:
        return None

    queue = pending_queue(store, date)
    for task in queue:
        if task.energy is energy:
            return task
    return queue[0] if queue else None


def completed_count(store: TaskStore, date: str) -> int:
    return sum(1 for task in store.get(date) if task.completed)


def complete_task(
    store: TaskStore,
    date: str,
    task_id: str,
    *,
    notes: str | None = None,
    actual_minutes: int | None = None,
) -> Task:
    """Mark a task completed.

    Notes replace the existing ones only when given. Actual minutes default to
    the planned duration.

    Raises:
        TaskNotFoundError: If the task is not in the date's bucket
        InvalidTaskStateError: If the task is already completed or was rescheduled
    """
    with span("focus_service.complete_task", date=date, task_id=task_id):
        _, task = store.find(task_id, date)
        if task.completed:
            raise InvalidTaskStateError(f"Task {task_id} is already completed")
        if task.rescheduled_to is not None:
            raise InvalidTaskStateError(f"Task {task_id} was rescheduled to {task.rescheduled_to}")

        completed = task.model_copy(
            update={
                "completed": True,
                "completed_at": datetime.now(UTC),
                "notes": notes or task.notes,
                "actual_duration_minutes": actual_minutes or task.duration_minutes,
            }
        )
        store.update(date, completed)
        log_with_task_context(
            logger,
            "info",
            "Task completed",
            task_id=task_id,
            date=date,
            actual_minutes=completed.actual_duration_minutes,
        )
        return completed


def skip_task(store: TaskStore, date: str, task_id: str) -> Task:
    """Send a task to the back of its day's queue."""
    task = store.send_to_back(date, task_id)
    log_with_task_context(logger, "info", "Task skipped", task_id=task_id, date=date)
    return task


def quick_add(store: TaskStore, date: str, entry: TaskCreate) -> Task:
    """Append a single task to a date's bucket."""
    validate_date_key(date)
    task = new_task(date=date, title=entry.title, energy=entry.energy, duration_minutes=entry.duration_minutes)
    (created,) = store.add(date, [task])
    return created


def reschedule_task(store: TaskStore, task_id: str, to_date: str, notes: str | None = None) -> Task:
    """Move a task from whichever bucket owns it to another date.

    Returns:
        The successor task created in the target bucket
    """
    from_date, _ = store.find(task_id)
    return store.move(task_id, from_date, to_date, notes=notes)
