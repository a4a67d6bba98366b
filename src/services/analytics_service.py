"""Analytics service for reflection statistics.

This module provides functions for:
- Calculating per-day task statistics (completions, reschedules, focus time)
- Generating trend insights and actionable suggestions over recent days
- Building planned vs actual focus time series for charts

Key Concepts:
- Recent window: the last N date keys present in the store, sorted ascending.
  Empty buckets count as days.
- Focus minutes: actual duration when recorded, otherwise the planned duration.
- Rescheduled: a row that was moved to another day and never completed.
- Ties between energy levels resolve to the first in high, medium, low order.

All functions are read-only and never raise on empty input.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from src.core import message_templates
from src.core.config import constants
from src.core.dates import most_recent_keys, weekday_label
from src.core.logging import span
from src.core.task_store import TaskStore
from src.domain.task import EnergyLevel, Task
from src.models.service_models import (
    DailyStats,
    EnergyBreakdown,
    EnergyTally,
    InsightMetrics,
    InsightReport,
    Suggestion,
    SuggestionType,
    TimerPoint,
)


logger = logging.getLogger(__name__)

TaskSource = TaskStore | Mapping[str, Sequence[Task]]


def _buckets(source: TaskSource) -> Mapping[str, Sequence[Task]]:
    if isinstance(source, TaskStore):
        return source.as_mapping()
    return source


def _recent_window(source: TaskSource, most_recent_days: int) -> tuple[list[str], Mapping[str, Sequence[Task]]]:
    buckets = _buckets(source)
    return most_recent_keys(buckets.keys(), most_recent_days), buckets


def _rate(completed: int, total: int) -> float:
    return completed / total if total > 0 else 0.0


def _first_max(values: Mapping[EnergyLevel, float]) -> EnergyLevel:
    """Energy level with the highest value; high, medium, low order wins ties."""
    best = EnergyLevel.HIGH
    for energy in EnergyLevel:
        if values[energy] > values[best]:
            best = energy
    return best


def daily_stats(tasks: Iterable[Task]) -> DailyStats:
    """Aggregate counts for one day's tasks.

    Args:
        tasks: Tasks of a single day bucket (may be empty)

    Returns:
        DailyStats; avg_duration is 0 when nothing was completed
    """
    tasks = list(tasks)
    completed = [t for t in tasks if t.completed]
    rescheduled = [t for t in tasks if t.is_rescheduled]

    by_energy = EnergyBreakdown(
        **{
            energy.value: EnergyTally(
                total=sum(1 for t in tasks if t.energy is energy),
                completed=sum(1 for t in completed if t.energy is energy),
            )
            for energy in EnergyLevel
        }
    )

    total_focus = sum(t.focus_minutes for t in completed)
    avg_duration = total_focus / len(completed) if completed else 0.0

    return DailyStats(
        date=tasks[0].scheduled_date if tasks else "",
        total_tasks=len(tasks),
        completed=len(completed),
        rescheduled=len(rescheduled),
        avg_duration=avg_duration,
        by_energy=by_energy,
        total_focus_minutes=total_focus,
    )


def generate_insights(source: TaskSource, most_recent_days: int = 7) -> InsightReport:
    """Generate insights and suggestions from the most recent day buckets.

    Args:
        source: Task store or ``{date: [Task, ...]}`` mapping
        most_recent_days: Number of most recent date keys to consider

    Returns:
        InsightReport with rendered insights/suggestions and the raw metrics
    """
    with span("analytics_service.generate_insights", most_recent_days=most_recent_days):
        dates, buckets = _recent_window(source, most_recent_days)
        recent_stats = [daily_stats(buckets.get(date, [])) for date in dates]
        all_tasks = [task for date in dates for task in buckets.get(date, [])]
        completed_tasks = [t for t in all_tasks if t.completed]

        completion_rates = {
            energy: _rate(
                sum(1 for t in completed_tasks if t.energy is energy),
                sum(1 for t in all_tasks if t.energy is energy),
            )
            for energy in EnergyLevel
        }
        best_energy = _first_max(completion_rates)
        best_rate = completion_rates[best_energy]

        days = len(recent_stats)
        avg_completed = sum(s.completed for s in recent_stats) / days if days else 0.0
        avg_focus = sum(s.total_focus_minutes for s in recent_stats) / days if days else 0.0

        rescheduled_counts = {
            energy: sum(1 for t in all_tasks if t.is_rescheduled and t.energy is energy) for energy in EnergyLevel
        }
        most_rescheduled = _first_max(rescheduled_counts) if any(rescheduled_counts.values()) else None
        most_rescheduled_count = rescheduled_counts[most_rescheduled] if most_rescheduled is not None else 0

        overall_rate = _rate(len(completed_tasks), len(all_tasks))

        insights: list[str] = []
        if best_rate > 0:
            insights.append(message_templates.best_energy_insight(energy=best_energy.value, rate=best_rate))
        if avg_completed > 0:
            insights.append(message_templates.average_completed_insight(avg_per_day=avg_completed))

        suggestions: list[Suggestion] = []
        if most_rescheduled is not None and most_rescheduled_count > constants.RESCHEDULE_WARNING_MIN_COUNT:
            suggestions.append(
                Suggestion(
                    type=SuggestionType.WARNING,
                    message=message_templates.reschedule_warning(energy=most_rescheduled.value),
                )
            )
        if 0 < avg_focus < constants.FOCUS_TIP_MAX_MINUTES:
            suggestions.append(
                Suggestion(
                    type=SuggestionType.TIP,
                    message=message_templates.focus_time_tip(avg_focus_minutes=avg_focus),
                )
            )
        if best_rate > constants.EXCEL_COMPLETION_RATE:
            suggestions.append(
                Suggestion(
                    type=SuggestionType.SUCCESS,
                    message=message_templates.prioritize_energy_success(energy=best_energy.value),
                )
            )
        if overall_rate < constants.LOW_COMPLETION_RATE and len(all_tasks) > constants.LOW_COMPLETION_MIN_TASKS:
            suggestions.append(
                Suggestion(
                    type=SuggestionType.WARNING,
                    message=message_templates.low_completion_warning(rate=overall_rate),
                )
            )

        metrics = InsightMetrics(
            dates=dates,
            total_tasks=len(all_tasks),
            completed_tasks=len(completed_tasks),
            completion_rates=completion_rates,
            best_energy=best_energy,
            best_rate=best_rate,
            avg_completed_per_day=avg_completed,
            avg_focus_minutes_per_day=avg_focus,
            most_rescheduled_energy=most_rescheduled,
            most_rescheduled_count=most_rescheduled_count,
            overall_rate=overall_rate,
        )
        logger.debug(
            "Insights generated",
            extra={"days": days, "insights": len(insights), "suggestions": len(suggestions)},
        )
        return InsightReport(insights=insights, suggestions=suggestions, metrics=metrics)


def timer_series(source: TaskSource, most_recent_days: int = 7) -> list[TimerPoint]:
    """Planned vs actual focus minutes of completed tasks per recent day.

    Returns:
        One TimerPoint per selected date key, chronological, labelled by weekday
    """
    dates, buckets = _recent_window(source, most_recent_days)
    points = []
    for date in dates:
        completed = [t for t in buckets.get(date, []) if t.completed]
        points.append(
            TimerPoint(
                date=weekday_label(date),
                planned_minutes=sum(t.duration_minutes for t in completed),
                actual_minutes=sum(t.focus_minutes for t in completed),
            )
        )
    return points
