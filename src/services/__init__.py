from src.services import (
    analytics_service,
    classifier_service,
    focus_service,
    intake_service,
    reflection_service,
)


__all__ = [
    "analytics_service",
    "classifier_service",
    "focus_service",
    "intake_service",
    "reflection_service",
]
