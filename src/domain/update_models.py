"""Update models for task mutations."""

from pydantic import Field, field_validator

from src.core.dates import validate_date_key
from src.domain.base import CamelModel


class TaskCompletion(CamelModel):
    """Completion details for the task in focus."""

    notes: str | None = None
    actual_duration_minutes: int | None = Field(default=None, ge=1)


class RescheduleRequest(CamelModel):
    """Move a task to another day bucket."""

    to_date: str
    notes: str | None = None

    @field_validator("to_date")
    @classmethod
    def validate_to_date(cls, v: str) -> str:
        """Validate the target date key."""
        return validate_date_key(v)
