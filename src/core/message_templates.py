"""Centralized message templates and display formatting.

All user-facing strings for the reflection panel are defined here so the
analytics can stay purely numeric. Rounding follows the web client: halves
round up, not to even.
"""

import math


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_percent(rate: float) -> int:
    """Completion rate (0..1) as a whole percent."""
    return round_half_up(rate * 100)


def focus_hours(minutes: float) -> float:
    """Minutes as hours rounded to one decimal place."""
    return round_half_up(minutes / 60 * 10) / 10


def format_duration(minutes: int) -> str:
    """Human label for a focus block length."""
    if minutes < 60:  # noqa: PLR2004
        return f"{minutes} min"
    if minutes == 60:  # noqa: PLR2004
        return "1 hour"
    if minutes == 90:  # noqa: PLR2004
        return "1.5 hours"
    if minutes == 120:  # noqa: PLR2004
        return "2 hours"
    return f"{minutes // 60}h {minutes % 60}m"


def best_energy_insight(*, energy: str, rate: float) -> str:
    return f"You complete {format_percent(rate)}% of {energy} energy tasks — your sweet spot!"


def average_completed_insight(*, avg_per_day: float) -> str:
    return f"You average {avg_per_day:.1f} completed tasks per day"


def reschedule_warning(*, energy: str) -> str:
    return (
        f"You often reschedule {energy} energy tasks. "
        f"Consider scheduling fewer of these or breaking them down."
    )


def focus_time_tip(*, avg_focus_minutes: float) -> str:
    return (
        f"Your average daily focus time is {round_half_up(avg_focus_minutes)} mins. "
        f"Try adding one more 20-min task tomorrow."
    )


def prioritize_energy_success(*, energy: str) -> str:
    return f"For tomorrow, prioritize {energy} energy tasks — you excel at these!"


def low_completion_warning(*, rate: float) -> str:
    return (
        f"Your completion rate is {format_percent(rate)}%. "
        f"Try planning fewer tasks or extending time estimates."
    )
