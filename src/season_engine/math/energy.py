"""Energy expenditure estimate for activities without provider calories."""

from __future__ import annotations

from season_engine.math.rounding import round_half_up
from season_engine.models.enums import (
    ENERGY_INTENSITY_MULTIPLIER,
    KCAL_PER_HOUR,
    Discipline,
    IntensityClass,
)


def estimate_energy_kcal(
    duration_hours: float,
    discipline: Discipline,
    intensity: IntensityClass,
    provider_calories: float | None = None,
) -> int:
    """Provider calories when positive, else kcal/h by discipline x intensity x hours."""
    if provider_calories is not None and provider_calories > 0:
        return round_half_up(provider_calories)
    base = KCAL_PER_HOUR.get(discipline, KCAL_PER_HOUR[Discipline.OTHER])
    return round_half_up(base * duration_hours * ENERGY_INTENSITY_MULTIPLIER[intensity])
