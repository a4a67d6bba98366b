"""Task domain models and enums."""

from datetime import datetime
from enum import StrEnum

from pydantic import Field, field_validator

from src.core.dates import validate_date_key
from src.domain.base import CamelModel


class EnergyLevel(StrEnum):
    """Mental energy a task requires.

    Member order (high, medium, low) is the tie-break order used by analytics.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Priority(StrEnum):
    """Task priority derived from title keywords."""

    URGENT = "urgent"
    IMPORTANT = "important"
    NORMAL = "normal"


class Task(CamelModel):
    """Task row owned by exactly one day bucket."""

    id: str = Field(..., description="Unique task ID, opaque and store-wide unique")
    title: str = Field(..., description="Task title")
    energy: EnergyLevel = Field(..., description="Energy level the task requires")
    duration_minutes: int = Field(..., ge=0, description="Planned focus duration in minutes")
    completed: bool = Field(default=False, description="Whether the task has been completed")
    completed_at: datetime | None = Field(default=None, description="Completion timestamp")
    scheduled_date: str = Field(..., description="Owning day bucket (YYYY-MM-DD)")
    notes: str | None = Field(default=None, description="Free-form notes from completion or reschedule")
    actual_duration_minutes: int | None = Field(default=None, ge=0, description="Minutes actually spent")
    rescheduled_to: str | None = Field(default=None, description="Target bucket if this row was rescheduled")

    @field_validator("scheduled_date")
    @classmethod
    def validate_scheduled_date(cls, v: str) -> str:
        """Validate scheduled date is a YYYY-MM-DD key."""
        return validate_date_key(v)

    @field_validator("rescheduled_to")
    @classmethod
    def validate_rescheduled_to(cls, v: str | None) -> str | None:
        """Validate reschedule target is a YYYY-MM-DD key when set."""
        return validate_date_key(v) if v is not None else v

    @property
    def is_pending(self) -> bool:
        """True while the task still waits in its bucket's queue."""
        return not self.completed and self.rescheduled_to is None

    @property
    def is_rescheduled(self) -> bool:
        """True for rows left behind by a reschedule and never completed."""
        return not self.completed and self.rescheduled_to is not None

    @property
    def focus_minutes(self) -> int:
        """Actual minutes spent, falling back to the planned duration."""
        if self.actual_duration_minutes is not None:
            return self.actual_duration_minutes
        return self.duration_minutes
