"""Fueling requirements derived from session duration, intensity and load.

Carbohydrate during exercise follows the 30-90 g/h guidance scaled by
intensity; recovery carbohydrate scales with stress score; protein is
capped at 40 g per session since more is not absorbed efficiently.

Reference:
    Jeukendrup (2011). Nutrition for endurance sports: marathon, triathlon,
    and road cycling. J Sports Sci 29(sup1):S91-S99.
"""

from __future__ import annotations

from season_engine.math.rounding import round_half_up
from season_engine.models.enums import (
    CARB_RATE_G_PER_HOUR,
    CARB_THRESHOLD_MINUTES,
    DEFAULT_AMBIENT_TEMP_C,
    HYDRATION_BASE_ML_PER_HOUR,
    HYDRATION_COLD_MULTIPLIER,
    HYDRATION_COLD_TEMP_C,
    HYDRATION_HOT_MULTIPLIER,
    HYDRATION_HOT_TEMP_C,
    HYDRATION_WARM_MULTIPLIER,
    HYDRATION_WARM_TEMP_C,
    ML_TO_OZ,
    PROTEIN_CAP_G,
    PROTEIN_G_PER_HOUR_OTHER,
    PROTEIN_G_PER_HOUR_STRENGTH,
    RECOVERY_CARBS_PER_STRESS_BIKE,
    RECOVERY_CARBS_PER_STRESS_OTHER,
    Discipline,
    IntensityClass,
)
from season_engine.models.metrics import HydrationNeeds


def carbs_during_activity(duration_min: float, intensity: IntensityClass) -> int:
    """Grams of carbohydrate to take in during the session.

    Zero below 45 minutes, otherwise the hourly rate for the intensity
    class (low 0, moderate 30, high 60, very_high 90) times duration.
    """
    if duration_min < CARB_THRESHOLD_MINUTES:
        return 0
    return round_half_up(CARB_RATE_G_PER_HOUR[intensity] * duration_min / 60.0)


def recovery_carbs(stress_score: float, discipline: Discipline) -> int:
    """Post-session carbohydrate: 0.7 g per stress point cycling, 0.5 otherwise."""
    per_point = (
        RECOVERY_CARBS_PER_STRESS_BIKE
        if discipline == Discipline.BIKE
        else RECOVERY_CARBS_PER_STRESS_OTHER
    )
    return round_half_up(stress_score * per_point)


def recovery_protein(duration_hours: float, discipline: Discipline) -> int:
    """Post-session protein: 15 g/h strength, 10 g/h otherwise, capped at 40 g."""
    per_hour = (
        PROTEIN_G_PER_HOUR_STRENGTH
        if discipline == Discipline.STRENGTH
        else PROTEIN_G_PER_HOUR_OTHER
    )
    return round_half_up(min(duration_hours * per_hour, PROTEIN_CAP_G))


def temperature_multiplier(temperature_c: float | None) -> float:
    """Sweat-rate multiplier for ambient temperature (None = 20 °C)."""
    temp = DEFAULT_AMBIENT_TEMP_C if temperature_c is None else temperature_c
    if temp > HYDRATION_HOT_TEMP_C:
        return HYDRATION_HOT_MULTIPLIER
    if temp > HYDRATION_WARM_TEMP_C:
        return HYDRATION_WARM_MULTIPLIER
    if temp < HYDRATION_COLD_TEMP_C:
        return HYDRATION_COLD_MULTIPLIER
    return 1.0


def hydration_needs(duration_hours: float, temperature_c: float | None = None) -> HydrationNeeds:
    """Fluid need: 500 mL/h scaled by temperature, as total and hourly rate."""
    total_ml = round_half_up(
        HYDRATION_BASE_ML_PER_HOUR * duration_hours * temperature_multiplier(temperature_c)
    )
    if duration_hours > 0:
        per_hour_ml = round_half_up(total_ml / duration_hours)
        per_hour_oz = round_half_up(total_ml / duration_hours * ML_TO_OZ)
    else:
        per_hour_ml = 0
        per_hour_oz = 0
    return HydrationNeeds(
        total_ml=total_ml,
        per_hour_ml=per_hour_ml,
        total_oz=round_half_up(total_ml * ML_TO_OZ),
        per_hour_oz=per_hour_oz,
    )
