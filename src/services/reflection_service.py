"""Reflection workflow: today's summary plus recent trends."""

import logging

from src.core import message_templates
from src.core.config import settings
from src.core.logging import span
from src.core.task_store import TaskStore
from src.domain.task import EnergyLevel
from src.models.service_models import ReflectionSummary
from src.services import analytics_service


logger = logging.getLogger(__name__)


def build_reflection(store: TaskStore, date: str, window_days: int | None = None) -> ReflectionSummary:
    """Assemble the reflection panel for a date.

    Args:
        store: Task store to read
        date: Day being reflected on (YYYY-MM-DD)
        window_days: Recent day buckets for trends (defaults to settings.reflection_window_days)
    """
    window = window_days if window_days is not None else settings.reflection_window_days
    with span("reflection_service.build_reflection", date=date, window_days=window):
        tasks = store.get(date)
        snapshot = store.as_mapping()
        today = analytics_service.daily_stats(tasks)

        summary = ReflectionSummary(
            date=date,
            today=today,
            focus_hours=message_templates.focus_hours(today.total_focus_minutes),
            completed_by_energy={energy: today.by_energy.for_energy(energy).completed for energy in EnergyLevel},
            rescheduled_today=[task for task in tasks if task.rescheduled_to is not None],
            insights=analytics_service.generate_insights(snapshot, window),
            timer=analytics_service.timer_series(snapshot, window),
        )
        logger.info(
            "Reflection built",
            extra={"date": date, "completed": today.completed, "window_days": window},
        )
        return summary
