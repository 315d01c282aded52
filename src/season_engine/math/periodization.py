"""Periodization math: phase table, plan-length templates, phase ladders.

A season is split into Base, Build, Peak and Taper phases of fixed length.
The plan template is chosen from the weeks available before the race and
its ladder is aligned so that the last week of the ladder is the race week.

References:
    Friel (2016), The Triathlete's Training Bible, 4th ed.
    Mujika & Padilla (2003), Scientific bases for precompetition tapering.
"""

from __future__ import annotations

from datetime import date, timedelta

from season_engine.models.athlete import FitnessState
from season_engine.models.enums import (
    CTL_MULTIPLIER_MAX,
    CTL_MULTIPLIER_MIN,
    CTL_REFERENCE,
    TSB_FATIGUED_BELOW,
    TSB_FATIGUED_MODIFIER,
    TSB_FRESH_ABOVE,
    TSB_FRESH_MODIFIER,
    PhaseName,
    WorkoutIntensity,
)
from season_engine.models.plan import IntensityDistribution, Phase, PhaseBlock

PHASES: dict[PhaseName, Phase] = {
    PhaseName.BASE_1: Phase(
        name=PhaseName.BASE_1,
        label="Base 1",
        duration_weeks=4,
        stress_target=250.0,
        distribution=IntensityDistribution(easy=0.7, moderate=0.2, hard=0.1),
        intensity="low",
        focus="Aerobic foundation and technique",
    ),
    PhaseName.BASE_2: Phase(
        name=PhaseName.BASE_2,
        label="Base 2",
        duration_weeks=4,
        stress_target=350.0,
        distribution=IntensityDistribution(easy=0.6, moderate=0.3, hard=0.1),
        intensity="low-moderate",
        focus="Aerobic volume and muscular endurance",
    ),
    PhaseName.BUILD_1: Phase(
        name=PhaseName.BUILD_1,
        label="Build 1",
        duration_weeks=4,
        stress_target=400.0,
        distribution=IntensityDistribution(easy=0.5, moderate=0.3, hard=0.2),
        intensity="moderate",
        focus="Threshold development",
    ),
    PhaseName.BUILD_2: Phase(
        name=PhaseName.BUILD_2,
        label="Build 2",
        duration_weeks=4,
        stress_target=450.0,
        distribution=IntensityDistribution(easy=0.4, moderate=0.3, hard=0.3),
        intensity="moderate-high",
        focus="Race-specific intensity",
    ),
    PhaseName.PEAK: Phase(
        name=PhaseName.PEAK,
        label="Peak",
        duration_weeks=2,
        stress_target=350.0,
        distribution=IntensityDistribution(easy=0.3, moderate=0.3, hard=0.4),
        intensity="high",
        focus="Race sharpening",
    ),
    PhaseName.TAPER: Phase(
        name=PhaseName.TAPER,
        label="Taper",
        duration_weeks=2,
        stress_target=150.0,
        distribution=IntensityDistribution(easy=0.7, moderate=0.2, hard=0.1),
        intensity="low",
        focus="Freshen up while keeping intensity touches",
    ),
}

# Plan length (weeks) -> ladder of (phase, weeks), in chronological order.
PLAN_TEMPLATES: dict[int, tuple[tuple[PhaseName, int], ...]] = {
    20: (
        (PhaseName.BASE_1, 4),
        (PhaseName.BASE_2, 4),
        (PhaseName.BUILD_1, 4),
        (PhaseName.BUILD_2, 4),
        (PhaseName.PEAK, 2),
        (PhaseName.TAPER, 2),
    ),
    16: (
        (PhaseName.BASE_1, 6),
        (PhaseName.BUILD_1, 6),
        (PhaseName.PEAK, 2),
        (PhaseName.TAPER, 2),
    ),
    12: (
        (PhaseName.BASE_1, 6),
        (PhaseName.BUILD_1, 4),
        (PhaseName.TAPER, 2),
    ),
    8: (
        (PhaseName.BASE_1, 2),
        (PhaseName.BUILD_1, 4),
        (PhaseName.TAPER, 2),
    ),
}


def week_start(day: date) -> date:
    """Monday of the week containing *day*."""
    return day - timedelta(days=day.weekday())


def weeks_between(start: date, race_date: date) -> int:
    """Number of Monday-aligned weeks from *start*'s week through the race week."""
    return (week_start(race_date) - week_start(start)).days // 7 + 1


def select_plan_length(weeks_available: int) -> int:
    """Pick the template: >= 20 weeks -> 20, >= 16 -> 16, >= 12 -> 12, else 8."""
    for length in sorted(PLAN_TEMPLATES, reverse=True):
        if weeks_available >= length:
            return length
    return min(PLAN_TEMPLATES)


def build_phase_ladder(plan_length: int, total_weeks: int) -> tuple[PhaseBlock, ...]:
    """Lay the template ladder over *total_weeks*, ending on the last week.

    Surplus leading weeks repeat the first phase; when the calendar is
    shorter than the template, weeks are dropped from the front.

    Raises:
        ValueError: If *plan_length* has no template or *total_weeks* < 1.
    """
    if plan_length not in PLAN_TEMPLATES:
        raise ValueError(f"No plan template for {plan_length} weeks")
    if total_weeks < 1:
        raise ValueError(f"A plan needs at least one week, got {total_weeks}")

    durations = [[name, weeks] for name, weeks in PLAN_TEMPLATES[plan_length]]
    surplus = total_weeks - sum(weeks for _, weeks in durations)
    if surplus > 0:
        durations[0][1] += surplus
    else:
        to_drop = -surplus
        while to_drop > 0:
            taken = min(durations[0][1], to_drop)
            durations[0][1] -= taken
            to_drop -= taken
            if durations[0][1] == 0:
                durations.pop(0)

    ladder: list[PhaseBlock] = []
    current = 1
    for name, weeks in durations:
        ladder.append(PhaseBlock(phase=PHASES[name], start_week=current, end_week=current + weeks - 1))
        current += weeks
    return tuple(ladder)


def phase_for_week(week: int, ladder: tuple[PhaseBlock, ...]) -> Phase:
    """Phase covering the 1-indexed *week*.

    Raises:
        ValueError: If the week is outside the ladder.
    """
    for block in ladder:
        if block.start_week <= week <= block.end_week:
            return block.phase
    raise ValueError(
        f"Week {week} is outside plan range (1-{ladder[-1].end_week if ladder else 0})"
    )


def fitness_multiplier(fitness: FitnessState | None) -> float:
    """Scale weekly targets to the athlete's fitness and freshness.

    ``clamp(CTL / 50, 0.8, 1.3)``, then x0.8 when TSB < -20 or x1.1 when
    TSB > 10. No fitness data (or zero CTL) is neutral.
    """
    if fitness is None or not fitness.chronic_load:
        return 1.0
    multiplier = min(
        CTL_MULTIPLIER_MAX, max(CTL_MULTIPLIER_MIN, fitness.chronic_load / CTL_REFERENCE)
    )
    if fitness.stress_balance < TSB_FATIGUED_BELOW:
        multiplier *= TSB_FATIGUED_MODIFIER
    elif fitness.stress_balance > TSB_FRESH_ABOVE:
        multiplier *= TSB_FRESH_MODIFIER
    return multiplier


def weekly_target(phase: Phase, fitness: FitnessState | None) -> float:
    return float(round(phase.stress_target * fitness_multiplier(fitness)))


def intensity_from_distribution(week_number: int, distribution: IntensityDistribution) -> WorkoutIntensity:
    """Deterministic draw from the phase's easy/moderate/hard split.

    Uses ``(week * 7) % 100 / 100`` as the draw so the same week always
    gets the same intensity.
    """
    draw = (week_number * 7) % 100 / 100
    if draw < distribution.easy:
        return WorkoutIntensity.EASY
    if draw < distribution.easy + distribution.moderate:
        return WorkoutIntensity.MODERATE
    return WorkoutIntensity.HARD
