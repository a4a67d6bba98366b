"""Thread-safe in-memory day-bucket task store.

Tasks live in buckets keyed by ``YYYY-MM-DD``. Each bucket keeps insertion
order, and task IDs are unique across the whole store. The store is the only
mutable state in the service; analytics and the classifier only read
snapshots of it.

Rescheduling never deletes: the source row stays in its bucket tagged with
``rescheduled_to`` and a fresh row is appended to the target bucket.
"""

import json
import logging
import threading
import uuid
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from src.core.dates import validate_date_key
from src.core.logging import log_with_task_context, span
from src.domain.task import EnergyLevel, Task


logger = logging.getLogger(__name__)


class TaskStoreError(Exception):
    """Base error for task store operations."""


class TaskNotFoundError(TaskStoreError):
    """Raised when a task ID is not present in the expected bucket."""


class DuplicateTaskError(TaskStoreError):
    """Raised when a write would give two rows the same task ID."""


class InvalidTaskStateError(TaskStoreError):
    """Raised when a mutation is not allowed for the task's current state."""


def new_task_id() -> str:
    """Generate an opaque, store-wide unique task ID."""
    return uuid.uuid4().hex


def new_task(*, date: str, title: str, energy: EnergyLevel, duration_minutes: int) -> Task:
    """Build a fresh, incomplete task row for a bucket."""
    return Task(
        id=new_task_id(),
        title=title,
        energy=energy,
        duration_minutes=duration_minutes,
        scheduled_date=date,
    )


class TaskStore:
    """Day-bucket mapping from date key to an ordered list of tasks."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._buckets: dict[str, list[Task]] = {}
        self._index: dict[str, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._index)

    def _check_rows(self, date: str, tasks: list[Task], *, replacing: bool) -> None:
        seen: set[str] = set()
        for task in tasks:
            if task.scheduled_date != date:
                raise InvalidTaskStateError(
                    f"Task {task.id} is scheduled for {task.scheduled_date}, not {date}"
                )
            if task.id in seen:
                raise DuplicateTaskError(f"Task ID {task.id} appears twice for {date}")
            seen.add(task.id)

            owner = self._index.get(task.id)
            if owner is not None and not (replacing and owner == date):
                raise DuplicateTaskError(f"Task ID {task.id} already exists in {owner}")

    def get(self, date: str) -> list[Task]:
        """Return a copy of the bucket for a date (empty when missing)."""
        validate_date_key(date)
        with self._lock:
            return [task.model_copy(deep=True) for task in self._buckets.get(date, [])]

    def put(self, date: str, tasks: Iterable[Task]) -> None:
        """Replace the bucket for a date.

        Raises:
            InvalidTaskStateError: If a task's scheduled_date differs from the bucket
            DuplicateTaskError: If IDs collide within the list or with another bucket
        """
        validate_date_key(date)
        rows = [task.model_copy(deep=True) for task in tasks]
        with self._lock:
            self._check_rows(date, rows, replacing=True)
            for task in self._buckets.get(date, []):
                self._index.pop(task.id, None)
            self._buckets[date] = rows
            for task in rows:
                self._index[task.id] = date
        logger.debug("Bucket replaced", extra={"date": date, "count": len(rows)})

    def add(self, date: str, tasks: Iterable[Task]) -> list[Task]:
        """Append new rows to the bucket for a date.

        Returns:
            Copies of the appended rows
        """
        validate_date_key(date)
        rows = [task.model_copy(deep=True) for task in tasks]
        with self._lock:
            self._check_rows(date, rows, replacing=False)
            self._buckets.setdefault(date, []).extend(rows)
            for task in rows:
                self._index[task.id] = date
        logger.info("Tasks added", extra={"date": date, "count": len(rows)})
        return [task.model_copy(deep=True) for task in rows]

    def update(self, date: str, task: Task) -> Task:
        """Replace the row with the same ID in place, keeping its position.

        Raises:
            TaskNotFoundError: If the task is not in the bucket
        """
        validate_date_key(date)
        if task.scheduled_date != date:
            raise InvalidTaskStateError(f"Task {task.id} is scheduled for {task.scheduled_date}, not {date}")
        with self._lock:
            bucket = self._buckets.get(date, [])
            position = self._position(bucket, task.id, date)
            bucket[position] = task.model_copy(deep=True)
        return task.model_copy(deep=True)

    def find(self, task_id: str, date: str | None = None) -> tuple[str, Task]:
        """Locate a task by ID, optionally only within one bucket.

        Returns:
            Tuple of (owning date key, task copy)

        Raises:
            TaskNotFoundError: If the task is not found
        """
        if date is not None:
            validate_date_key(date)
        with self._lock:
            owner = self._index.get(task_id)
            if owner is None or (date is not None and owner != date):
                where = f" in {date}" if date is not None else ""
                raise TaskNotFoundError(f"Task {task_id} not found{where}")
            bucket = self._buckets[owner]
            return owner, bucket[self._position(bucket, task_id, owner)].model_copy(deep=True)

    def send_to_back(self, date: str, task_id: str) -> Task:
        """Move a row to the end of its bucket."""
        validate_date_key(date)
        with self._lock:
            bucket = self._buckets.get(date, [])
            task = bucket.pop(self._position(bucket, task_id, date))
            bucket.append(task)
            return task.model_copy(deep=True)

    def move(self, task_id: str, from_date: str, to_date: str, notes: str | None = None) -> Task:
        """Reschedule a task to another day bucket.

        The source row is kept and tagged with ``rescheduled_to``; its notes are
        replaced only when ``notes`` is given. A successor row with a fresh ID,
        no notes and no ``rescheduled_to`` is appended to the target bucket.

        Returns:
            The successor task

        Raises:
            TaskNotFoundError: If the task is not in the source bucket
            InvalidTaskStateError: If the task is completed, already rescheduled,
                or the target date equals the source date
        """
        validate_date_key(from_date)
        validate_date_key(to_date)
        with span("task_store.move", task_id=task_id, from_date=from_date, to_date=to_date), self._lock:
            source_bucket = self._buckets.get(from_date, [])
            position = self._position(source_bucket, task_id, from_date)
            source = source_bucket[position]

            if to_date == from_date:
                raise InvalidTaskStateError(f"Task {task_id} is already scheduled for {to_date}")
            if source.completed:
                raise InvalidTaskStateError(f"Cannot reschedule completed task {task_id}")
            if source.rescheduled_to is not None:
                raise InvalidTaskStateError(f"Task {task_id} was already rescheduled to {source.rescheduled_to}")

            successor = source.model_copy(
                update={
                    "id": new_task_id(),
                    "scheduled_date": to_date,
                    "notes": None,
                    "rescheduled_to": None,
                    "completed": False,
                    "completed_at": None,
                    "actual_duration_minutes": None,
                }
            )
            source_bucket[position] = source.model_copy(
                update={"rescheduled_to": to_date, "notes": notes or source.notes}
            )
            self._buckets.setdefault(to_date, []).append(successor)
            self._index[successor.id] = to_date

        log_with_task_context(
            logger,
            "info",
            "Task rescheduled",
            task_id=task_id,
            from_date=from_date,
            to_date=to_date,
            successor_id=successor.id,
        )
        return successor.model_copy(deep=True)

    def dates(self) -> list[str]:
        """Date keys present in the store, ascending."""
        with self._lock:
            return sorted(self._buckets)

    def as_mapping(self) -> dict[str, list[Task]]:
        """Copy of the whole store as ``{date: [Task, ...]}``."""
        with self._lock:
            return {date: [task.model_copy(deep=True) for task in tasks] for date, tasks in self._buckets.items()}

    def to_snapshot(self) -> dict[str, list[dict[str, Any]]]:
        """JSON-able ``{dateKey: [Task, ...]}`` with camelCase task fields."""
        with self._lock:
            return {
                date: [task.model_dump(mode="json", by_alias=True, exclude_none=True) for task in tasks]
                for date, tasks in sorted(self._buckets.items())
            }

    @classmethod
    def from_snapshot(cls, data: Mapping[str, Iterable[Mapping[str, Any]]]) -> "TaskStore":
        """Build a store from the layout produced by to_snapshot.

        Raises:
            pydantic.ValidationError: If a task record is malformed
            TaskStoreError: If records violate store invariants
        """
        store = cls()
        for date, records in data.items():
            store.put(date, [Task.model_validate(record) for record in records])
        return store

    def save(self, path: Path) -> None:
        """Write the snapshot to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_snapshot(), indent=2), encoding="utf-8")
        logger.info("Task store saved", extra={"path": str(path), "tasks": len(self)})

    @classmethod
    def load(cls, path: Path) -> "TaskStore":
        """Read a snapshot JSON file, returning an empty store if it does not exist."""
        if not path.exists():
            logger.info("No task store snapshot found, starting empty", extra={"path": str(path)})
            return cls()
        store = cls.from_snapshot(json.loads(path.read_text(encoding="utf-8")))
        logger.info("Task store loaded", extra={"path": str(path), "tasks": len(store)})
        return store

    @staticmethod
    def _position(bucket: list[Task], task_id: str, date: str) -> int:
        for i, task in enumerate(bucket):
            if task.id == task_id:
                return i
        raise TaskNotFoundError(f"Task {task_id} not found in {date}")
