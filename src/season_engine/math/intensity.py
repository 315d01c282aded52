"""Intensity classification: heart rate, power, pace/speed, workout flag.

HR bands follow the %HRmax zone model (Z3 tempo from 70 %, Z4 threshold
from 80 %, Z5 from 90 %). Power bands use intensity factor (NP / FTP).
"""

from __future__ import annotations

from season_engine.models.enums import (
    BIKE_SPEED_BANDS,
    HR_RATIO_HIGH,
    HR_RATIO_MODERATE,
    HR_RATIO_VERY_HIGH,
    IF_HIGH,
    IF_MODERATE,
    IF_VERY_HIGH,
    RUN_PACE_BANDS,
    SWIM_SPEED_BANDS,
    WORKOUT_TYPE_INTENSITY,
    Discipline,
    IntensityClass,
    IntensitySource,
)


def classify_hr_ratio(mean_hr: float | None, max_hr: float | None) -> IntensityClass | None:
    """Classify mean HR / max HR, or None without both values."""
    if not mean_hr or not max_hr or max_hr <= 0:
        return None
    ratio = mean_hr / max_hr
    if ratio >= HR_RATIO_VERY_HIGH:
        return IntensityClass.VERY_HIGH
    if ratio >= HR_RATIO_HIGH:
        return IntensityClass.HIGH
    if ratio >= HR_RATIO_MODERATE:
        return IntensityClass.MODERATE
    return IntensityClass.LOW


def classify_intensity_factor(factor: float | None) -> IntensityClass | None:
    if not factor or factor <= 0:
        return None
    if factor >= IF_VERY_HIGH:
        return IntensityClass.VERY_HIGH
    if factor >= IF_HIGH:
        return IntensityClass.HIGH
    if factor >= IF_MODERATE:
        return IntensityClass.MODERATE
    return IntensityClass.LOW


def run_pace_min_per_km(speed_m_per_s: float) -> float:
    return 1000.0 / (speed_m_per_s * 60.0)


def classify_speed(discipline: Discipline, speed_m_per_s: float | None) -> IntensityClass | None:
    """Discipline-specific pace/speed tables; None for other disciplines or no speed."""
    if not speed_m_per_s or speed_m_per_s <= 0:
        return None

    if discipline == Discipline.RUN:
        pace = run_pace_min_per_km(speed_m_per_s)
        for upper_bound, intensity in RUN_PACE_BANDS:
            if pace < upper_bound:
                return intensity
        return IntensityClass.LOW

    if discipline == Discipline.BIKE:
        speed_kmh = speed_m_per_s * 3.6
        for lower_bound, intensity in BIKE_SPEED_BANDS:
            if speed_kmh > lower_bound:
                return intensity
        return IntensityClass.LOW

    if discipline == Discipline.SWIM:
        for lower_bound, intensity in SWIM_SPEED_BANDS:
            if speed_m_per_s > lower_bound:
                return intensity
        return IntensityClass.LOW

    return None


def classify_workout_type(flag: int | None) -> IntensityClass | None:
    if flag is None:
        return None
    return WORKOUT_TYPE_INTENSITY.get(flag)


def classify_intensity(
    discipline: Discipline,
    mean_hr: float | None = None,
    max_hr: float | None = None,
    factor: float | None = None,
    speed_m_per_s: float | None = None,
    workout_type: int | None = None,
) -> tuple[IntensityClass, IntensitySource]:
    """Walk the classification paths in priority order; first hit wins."""
    by_hr = classify_hr_ratio(mean_hr, max_hr)
    if by_hr is not None:
        return by_hr, IntensitySource.HEART_RATE

    by_power = classify_intensity_factor(factor)
    if by_power is not None:
        return by_power, IntensitySource.POWER

    by_speed = classify_speed(discipline, speed_m_per_s)
    if by_speed is not None:
        return by_speed, IntensitySource.PACE

    by_flag = classify_workout_type(workout_type)
    if by_flag is not None:
        return by_flag, IntensitySource.WORKOUT_TYPE

    return IntensityClass.MODERATE, IntensitySource.DEFAULT
