"""Pydantic models for creating task rows."""

from pydantic import Field, field_validator

from src.core.config import constants
from src.core.dates import validate_date_key
from src.domain.base import CamelModel
from src.domain.task import EnergyLevel


class TaskCreate(CamelModel):
    """Payload for a task confirmed at intake or added from the queue."""

    title: str = Field(..., description="Task title")
    energy: EnergyLevel = Field(..., description="Energy level chosen or confirmed by the user")
    duration_minutes: int = Field(
        default=constants.DEFAULT_QUICK_ADD_DURATION,
        ge=1,
        description="Planned focus duration in minutes",
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Strip the title and reject blank ones."""
        title = v.strip()
        if not title:
            msg = "Task title must not be blank"
            raise ValueError(msg)
        return title


class IntakeConfirm(CamelModel):
    """Reviewed intake drafts to materialize for a date."""

    date: str = Field(..., description="Target day bucket (YYYY-MM-DD)")
    tasks: list[TaskCreate] = Field(default_factory=list, description="Confirmed entries in display order")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        """Validate the target date key."""
        return validate_date_key(v)


class BrainDump(CamelModel):
    """Raw newline-separated task text submitted for analysis."""

    text: str = Field(default="", description="One task per line")
