"""Classification result models produced by the task classifier."""

from pydantic import Field

from src.domain.base import CamelModel
from src.domain.task import EnergyLevel, Priority


class ClassificationResult(CamelModel):
    """Energy, priority and duration derived from a task title."""

    energy: EnergyLevel
    priority: Priority
    estimated_duration_minutes: int
    reasoning: str = Field(..., description="Human-readable explanation of the energy decision")


class AnalyzedTask(ClassificationResult):
    """Classification result paired with the title it was computed from."""

    title: str


class DraftTask(AnalyzedTask):
    """Analyzed task awaiting review during intake."""

    id: str = Field(..., description="Draft ID, only meaningful until the intake is confirmed")
