"""Pydantic models for service layer return types.

These models provide type safety at service boundaries. They carry raw
numbers; rounding and sentence rendering happen in src.core.message_templates.
"""

from enum import StrEnum

from pydantic import Field

from src.domain.base import CamelModel
from src.domain.task import EnergyLevel, Task


class EnergyTally(CamelModel):
    """Total and completed task counts for one energy level."""

    total: int = 0
    completed: int = 0


class EnergyBreakdown(CamelModel):
    """Per-energy tallies keyed high, medium, low."""

    high: EnergyTally = Field(default_factory=EnergyTally)
    medium: EnergyTally = Field(default_factory=EnergyTally)
    low: EnergyTally = Field(default_factory=EnergyTally)

    def for_energy(self, energy: EnergyLevel) -> EnergyTally:
        return getattr(self, energy.value)


class DailyStats(CamelModel):
    """Aggregate counts for a single day's tasks."""

    date: str
    total_tasks: int
    completed: int
    rescheduled: int
    avg_duration: float
    by_energy: EnergyBreakdown
    total_focus_minutes: int


class SuggestionType(StrEnum):
    """Tone of an actionable suggestion."""

    WARNING = "warning"
    TIP = "tip"
    SUCCESS = "success"


class Suggestion(CamelModel):
    """Actionable suggestion shown in the reflection panel."""

    type: SuggestionType
    message: str


class InsightMetrics(CamelModel):
    """Raw numbers behind the generated insights and suggestions."""

    dates: list[str]
    total_tasks: int
    completed_tasks: int
    completion_rates: dict[EnergyLevel, float]
    best_energy: EnergyLevel
    best_rate: float
    avg_completed_per_day: float
    avg_focus_minutes_per_day: float
    most_rescheduled_energy: EnergyLevel | None
    most_rescheduled_count: int
    overall_rate: float


class InsightReport(CamelModel):
    """Trend insights and suggestions over the most recent day buckets."""

    insights: list[str]
    suggestions: list[Suggestion]
    metrics: InsightMetrics


class TimerPoint(CamelModel):
    """Planned vs actual focus minutes for one day."""

    date: str = Field(..., description="Short weekday label")
    planned_minutes: int
    actual_minutes: int


class ReflectionSummary(CamelModel):
    """Everything the reflection panel renders for a date."""

    date: str
    today: DailyStats
    focus_hours: float
    completed_by_energy: dict[EnergyLevel, int]
    rescheduled_today: list[Task]
    insights: InsightReport
    timer: list[TimerPoint]


class FocusState(CamelModel):
    """Task in focus for a day and energy, with the day's completion count."""

    task: Task | None
    completed_today: int
