"""Fatigue adapter: adjust a prescribed workout to today's stress balance.

Rules are checked in order and the first match wins:
    1. TSB < -30: any workout becomes easy, duration x0.7, stress x0.6.
    2. TSB < -15 and the workout is hard: becomes moderate, stress x0.85.
    3. TSB > +15 and the workout is easy: unchanged, with an advisory note.

The transform is pure. A workout that was already modified is returned
as-is, so applying it twice gives the same result as applying it once.
"""

from __future__ import annotations

import dataclasses

from season_engine.models.athlete import FitnessState
from season_engine.models.enums import (
    FATIGUE_MODERATE_STRESS_MOD,
    FATIGUE_MODERATE_TSB,
    FATIGUE_SEVERE_DURATION_MOD,
    FATIGUE_SEVERE_STRESS_MOD,
    FATIGUE_SEVERE_TSB,
    FRESH_TSB,
    WorkoutIntensity,
)
from season_engine.models.plan import DayWorkout


def adjust_for_fatigue(workout: DayWorkout, fitness: FitnessState | None) -> DayWorkout:
    """Return *workout* adjusted for the athlete's stress balance."""
    if fitness is None or workout.is_rest or workout.modified:
        return workout

    tsb = fitness.stress_balance

    if tsb < FATIGUE_SEVERE_TSB:
        return dataclasses.replace(
            workout,
            intensity=WorkoutIntensity.EASY,
            duration_min=round(workout.duration_min * FATIGUE_SEVERE_DURATION_MOD),
            stress_score=round(workout.stress_score * FATIGUE_SEVERE_STRESS_MOD),
            modified=True,
            original_intensity=workout.intensity,
            reason=f"High fatigue (TSB: {tsb:.0f}). Reduced to easy effort.",
        )

    if tsb < FATIGUE_MODERATE_TSB and workout.intensity == WorkoutIntensity.HARD:
        return dataclasses.replace(
            workout,
            intensity=WorkoutIntensity.MODERATE,
            stress_score=round(workout.stress_score * FATIGUE_MODERATE_STRESS_MOD),
            modified=True,
            original_intensity=workout.intensity,
            reason=f"Moderate fatigue (TSB: {tsb:.0f}). Reduced intensity.",
        )

    if tsb > FRESH_TSB and workout.intensity == WorkoutIntensity.EASY and not workout.suggestion:
        return dataclasses.replace(
            workout,
            suggestion=f"You're fresh (TSB: +{tsb:.0f}). Consider adding some intensity.",
        )

    return workout
