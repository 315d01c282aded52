"""Metric derivation — one canonical activity in, one ActivityMetrics out.

Missing telemetry never raises: each metric falls back to its next-best
estimation path (power → provider score → HR/duration estimate for stress;
HR → power → pace → workout flag → moderate for intensity).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from season_engine.math.energy import estimate_energy_kcal
from season_engine.math.fueling import (
    carbs_during_activity,
    hydration_needs,
    recovery_carbs,
    recovery_protein,
)
from season_engine.math.intensity import classify_intensity
from season_engine.math.stress_score import calculate_stress_score, intensity_factor
from season_engine.models.activity import CanonicalActivity
from season_engine.models.athlete import AthleteProfile
from season_engine.models.metrics import ActivityMetrics


_DEFAULT_PROFILE = AthleteProfile()


def derive_metrics(
    activity: CanonicalActivity, athlete: AthleteProfile | None = None
) -> ActivityMetrics:
    """Derive stress, intensity, energy and fueling needs for one activity.

    Args:
        activity: Reconciled activity.
        athlete: Optional thresholds (FTP, max HR, default temperature)
            used when the activity does not carry its own.

    Returns:
        A fresh ActivityMetrics; identical inputs give identical output.
    """
    profile = athlete or _DEFAULT_PROFILE
    duration_hours = activity.duration_s / 3600.0
    discipline = activity.discipline

    ftp = activity.ftp_watts or profile.ftp_watts
    normalized_power = activity.weighted_average_watts
    factor = activity.intensity_factor or intensity_factor(normalized_power, ftp)

    stress, stress_source = calculate_stress_score(
        duration_hours,
        normalized_power=normalized_power,
        ftp_watts=ftp,
        provider_score=activity.stress_score,
        mean_hr=activity.average_heartrate,
    )

    intensity, intensity_source = classify_intensity(
        discipline,
        mean_hr=activity.average_heartrate,
        max_hr=activity.max_heartrate or profile.max_hr,
        factor=factor,
        speed_m_per_s=activity.average_speed,
        workout_type=activity.workout_type,
    )

    temperature = (
        activity.average_temp_c
        if activity.average_temp_c is not None
        else profile.default_temp_c
    )

    return ActivityMetrics(
        activity_id=activity.activity_id,
        discipline=discipline,
        duration_hours=duration_hours,
        distance_km=(activity.distance_m or 0.0) / 1000.0,
        stress_score=stress,
        stress_source=stress_source,
        intensity=intensity,
        intensity_source=intensity_source,
        energy_kcal=estimate_energy_kcal(
            duration_hours, discipline, intensity, activity.calories
        ),
        carbs_during_g=carbs_during_activity(activity.duration_s / 60.0, intensity),
        recovery_carbs_g=recovery_carbs(stress, discipline),
        recovery_protein_g=recovery_protein(duration_hours, discipline),
        hydration=hydration_needs(duration_hours, temperature),
        intensity_factor=round(factor, 3) if factor else None,
        normalized_power=normalized_power,
    )


@dataclass(frozen=True)
class DataQualitySummary:
    """How much of a set of activities carries measured rather than estimated load."""

    quality: str  # "high", "medium", "low", "no_data"
    message: str
    percent_measured: int = 0
    measured_count: int = 0
    total_count: int = 0


def data_quality_summary(
    activities: Iterable[CanonicalActivity], athlete: AthleteProfile | None = None
) -> DataQualitySummary:
    """Share of activities with measured (power or provider) stress scores."""
    items = list(activities)
    if not items:
        return DataQualitySummary(quality="no_data", message="No activities to analyze")

    measured = sum(1 for a in items if derive_metrics(a, athlete).is_measured)
    percent = round(100 * measured / len(items))

    if percent >= 80:
        quality, message = "high", "Most training data carries measured stress scores."
    elif percent >= 50:
        quality, message = "medium", "Good mix of measured and estimated data."
    else:
        quality, message = (
            "low",
            "Most data is estimated. Connect the precision provider for better accuracy.",
        )

    return DataQualitySummary(
        quality=quality,
        message=message,
        percent_measured=percent,
        measured_count=measured,
        total_count=len(items),
    )
