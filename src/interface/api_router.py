"""JSON endpoints for the intake, focus and reflection workflows."""

from fastapi import APIRouter, Depends, Query, Request

from src.core.config import settings
from src.core.task_store import TaskStore
from src.domain.classification import DraftTask
from src.domain.create_models import BrainDump, IntakeConfirm, TaskCreate
from src.domain.task import EnergyLevel, Task
from src.domain.update_models import RescheduleRequest, TaskCompletion
from src.models.service_models import FocusState, ReflectionSummary
from src.services import focus_service, intake_service, reflection_service


router = APIRouter(tags=["tasks"])


def get_store(request: Request) -> TaskStore:
    """Task store shared by all requests of the running app."""
    return request.app.state.task_store


@router.post("/intake/analyze")
def analyze_intake(payload: BrainDump) -> list[DraftTask]:
    """Classify a brain dump, one task per line."""
    return intake_service.analyze_brain_dump(payload.text)


@router.post("/intake/confirm", status_code=201)
def confirm_intake(payload: IntakeConfirm, store: TaskStore = Depends(get_store)) -> list[Task]:
    """Create the reviewed tasks in the target day bucket."""
    return intake_service.confirm_intake(store, payload.date, payload.tasks)


@router.get("/days/{date}")
def get_day(date: str, store: TaskStore = Depends(get_store)) -> list[Task]:
    """All rows of a day bucket, including completed and rescheduled ones."""
    return store.get(date)


@router.post("/days/{date}/tasks", status_code=201)
def add_task(date: str, payload: TaskCreate, store: TaskStore = Depends(get_store)) -> Task:
    """Quick-add a task to a day."""
    return focus_service.quick_add(store, date, payload)


@router.get("/days/{date}/focus")
def get_focus(
    date: str,
    energy: EnergyLevel | None = Query(default=None),
    store: TaskStore = Depends(get_store),
) -> FocusState:
    """Task to work on now for the selected energy level."""
    return FocusState(
        task=focus_service.current_task(store, date, energy),
        completed_today=focus_service.completed_count(store, date),
    )


@router.post("/days/{date}/tasks/{task_id}/complete")
def complete_task(
    date: str,
    task_id: str,
    payload: TaskCompletion,
    store: TaskStore = Depends(get_store),
) -> Task:
    """Complete a task, optionally recording notes and actual minutes."""
    return focus_service.complete_task(
        store,
        date,
        task_id,
        notes=payload.notes,
        actual_minutes=payload.actual_duration_minutes,
    )


@router.post("/days/{date}/tasks/{task_id}/skip")
def skip_task(date: str, task_id: str, store: TaskStore = Depends(get_store)) -> Task:
    """Send a task to the back of the day's queue."""
    return focus_service.skip_task(store, date, task_id)


@router.post("/tasks/{task_id}/reschedule", status_code=201)
def reschedule_task(task_id: str, payload: RescheduleRequest, store: TaskStore = Depends(get_store)) -> Task:
    """Move a task to another day; returns the new row."""
    return focus_service.reschedule_task(store, task_id, payload.to_date, notes=payload.notes)


@router.get("/reflection/{date}")
def get_reflection(
    date: str,
    days: int = Query(default=settings.reflection_window_days, ge=1),
    store: TaskStore = Depends(get_store),
) -> ReflectionSummary:
    """Reflection panel data for a day."""
    return reflection_service.build_reflection(store, date, days)


@router.get("/store/snapshot")
def get_snapshot(store: TaskStore = Depends(get_store)) -> dict[str, list[dict]]:
    """Whole store in the ``{dateKey: [Task, ...]}`` snapshot layout."""
    return store.to_snapshot()
