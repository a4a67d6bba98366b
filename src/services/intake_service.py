"""Intake workflow: brain dump to reviewed tasks in a day bucket."""

import logging
import uuid
from collections.abc import Iterable

from src.core.dates import validate_date_key
from src.core.logging import span
from src.core.task_store import TaskStore, new_task
from src.domain.classification import DraftTask
from src.domain.create_models import TaskCreate
from src.domain.task import Task
from src.services import classifier_service


logger = logging.getLogger(__name__)


def split_brain_dump(raw: str) -> list[str]:
    """Split raw text into trimmed, non-empty lines."""
    return [line.strip() for line in raw.splitlines() if line.strip()]


def analyze_brain_dump(raw: str) -> list[DraftTask]:
    """Classify every line of a brain dump for review.

    Each draft gets an ID so the client can edit or drop it before confirming.
    Returns an empty list when the text has no non-blank lines.
    """
    titles = split_brain_dump(raw)
    if not titles:
        return []

    batch = uuid.uuid4().hex[:8]
    drafts = [
        DraftTask(id=f"draft-{batch}-{index}", **analyzed.model_dump())
        for index, analyzed in enumerate(classifier_service.analyze_bulk_tasks(titles))
    ]
    logger.info("Brain dump analyzed", extra={"drafts": len(drafts)})
    return drafts


def confirm_intake(store: TaskStore, date: str, entries: Iterable[TaskCreate]) -> list[Task]:
    """Materialize confirmed entries as new tasks appended to a date's bucket.

    Args:
        store: Task store to write to
        date: Target day bucket (YYYY-MM-DD)
        entries: Reviewed titles with their confirmed energy and duration

    Returns:
        The created tasks, in entry order
    """
    validate_date_key(date)
    with span("intake_service.confirm_intake", date=date):
        tasks = [
            new_task(
                date=date,
                title=entry.title,
                energy=entry.energy,
                duration_minutes=entry.duration_minutes,
            )
            for entry in entries
        ]
        if not tasks:
            logger.debug("Intake confirmed with no tasks", extra={"date": date})
            return []
        return store.add(date, tasks)
