"""Domain models and DTOs."""

from src.domain.classification import AnalyzedTask, ClassificationResult, DraftTask
from src.domain.create_models import BrainDump, IntakeConfirm, TaskCreate
from src.domain.task import EnergyLevel, Priority, Task
from src.domain.update_models import RescheduleRequest, TaskCompletion


__all__ = [
    "AnalyzedTask",
    "BrainDump",
    "ClassificationResult",
    "DraftTask",
    "EnergyLevel",
    "IntakeConfirm",
    "Priority",
    "RescheduleRequest",
    "Task",
    "TaskCompletion",
    "TaskCreate",
]
