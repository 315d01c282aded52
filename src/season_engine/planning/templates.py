"""Workout template bank indexed by discipline and intensity.

Within a cell, templates are kept in declaration order; selection picks
the template whose stress score is closest to the slot target, ties going
to the earliest declared.
"""

from __future__ import annotations

from season_engine.models.enums import Discipline, WorkoutIntensity
from season_engine.models.plan import WorkoutTemplate

_E = WorkoutIntensity.EASY
_M = WorkoutIntensity.MODERATE
_H = WorkoutIntensity.HARD

CUSTOM_DURATION_MIN = 60.0

TEMPLATE_BANK: dict[Discipline, dict[WorkoutIntensity, tuple[WorkoutTemplate, ...]]] = {
    Discipline.SWIM: {
        _E: (
            WorkoutTemplate(
                "Aerobic Swim", Discipline.SWIM, _E, 45, 45,
                "Easy aerobic swim - 2000m continuous",
                "Warmup 400m, Main 1200m Z2, Cooldown 400m",
                "Water only",
            ),
            WorkoutTemplate(
                "Technique Focus", Discipline.SWIM, _E, 50, 50,
                "Drill-focused session - 2200m",
                "Warmup 300m, 6x200m drills, Cooldown 400m",
                "Water only",
            ),
        ),
        _M: (
            WorkoutTemplate(
                "Threshold Intervals", Discipline.SWIM, _M, 60, 70,
                "CSS intervals - 2800m",
                "Warmup 400m, 6x300m @ CSS (30s rest), Cooldown 400m",
                "Sports drink post-workout",
            ),
        ),
        _H: (
            WorkoutTemplate(
                "VO2 Max Swim", Discipline.SWIM, _H, 50, 85,
                "High intensity intervals - 2400m",
                "Warmup 500m, 10x100m @ 95% (20s rest), Cooldown 400m",
                "Recovery shake within 30min",
            ),
        ),
    },
    Discipline.BIKE: {
        _E: (
            WorkoutTemplate(
                "Zone 2 Endurance", Discipline.BIKE, _E, 90, 80,
                "Steady aerobic endurance ride",
                "90min @ 65-75% FTP, flat terrain",
                "Liquid only - 200cal/hour",
            ),
            WorkoutTemplate(
                "Recovery Spin", Discipline.BIKE, _E, 60, 40,
                "Active recovery",
                "60min @ 55-65% FTP, easy spinning",
                "Water + electrolytes",
            ),
        ),
        _M: (
            WorkoutTemplate(
                "Tempo Ride", Discipline.BIKE, _M, 75, 90,
                "Sweet spot intervals",
                "Warmup 15min, 3x15min @ 85-90% FTP (5min rest), Cooldown 15min",
                "Liquid nutrition - 250cal/hour",
            ),
            WorkoutTemplate(
                "Hilly Endurance", Discipline.BIKE, _M, 120, 110,
                "Rolling terrain endurance",
                "2 hours rolling terrain, 70-85% FTP on climbs",
                "Liquid + 1 gel/hour",
            ),
        ),
        _H: (
            WorkoutTemplate(
                "VO2 Max Intervals", Discipline.BIKE, _H, 60, 95,
                "High intensity power intervals",
                "Warmup 15min, 5x5min @ 105% FTP (5min rest), Cooldown 10min",
                "Pre-load carbs, recovery within 30min",
            ),
            WorkoutTemplate(
                "Race Simulation", Discipline.BIKE, _H, 90, 115,
                "Race-pace effort",
                "15min warmup, 60min @ race pace, 15min cooldown",
                "Race day nutrition practice",
            ),
        ),
    },
    Discipline.RUN: {
        _E: (
            WorkoutTemplate(
                "Easy Aerobic Run", Discipline.RUN, _E, 45, 40,
                "Conversational pace",
                "45min @ Z2 heart rate, flat terrain",
                "Water only",
            ),
            WorkoutTemplate(
                "Long Run", Discipline.RUN, _E, 90, 70,
                "Weekly long run",
                "90min @ easy pace, include strides",
                "Liquid nutrition if >60min",
            ),
        ),
        _M: (
            WorkoutTemplate(
                "Tempo Run", Discipline.RUN, _M, 50, 65,
                "Lactate threshold work",
                "Warmup 15min, 20min @ threshold, Cooldown 15min",
                "Gel at 30min if needed",
            ),
            WorkoutTemplate(
                "Progression Run", Discipline.RUN, _M, 60, 70,
                "Building pace run",
                "60min starting easy, finishing at tempo",
                "Sports drink post-run",
            ),
        ),
        _H: (
            WorkoutTemplate(
                "Interval Run", Discipline.RUN, _H, 50, 80,
                "VO2 max intervals",
                "Warmup 15min, 6x800m @ 5K pace (2min rest), Cooldown 10min",
                "Pre-load carbs, recovery shake",
            ),
            WorkoutTemplate(
                "Race Pace Run", Discipline.RUN, _H, 60, 85,
                "Race simulation",
                "Warmup 10min, 40min @ race pace, Cooldown 10min",
                "Practice race nutrition",
            ),
        ),
    },
    Discipline.BRICK: {
        _M: (
            WorkoutTemplate(
                "Standard Brick", Discipline.BRICK, _M, 90, 85,
                "Bike-to-run transition practice",
                "60min bike @ 75% FTP, then 30min run @ easy-moderate pace",
                "Liquid on bike, practice T2 fueling",
            ),
        ),
        _H: (
            WorkoutTemplate(
                "Race Simulation Brick", Discipline.BRICK, _H, 120, 125,
                "Full race intensity",
                "90min bike @ race pace, then 30min run @ race pace",
                "Full race day nutrition practice",
            ),
        ),
    },
    Discipline.STRENGTH: {
        _M: (
            WorkoutTemplate(
                "Functional Strength", Discipline.STRENGTH, _M, 45, 35,
                "Tri-specific strength training",
                "3 sets: squats, lunges, planks, pull-ups, core work",
                "Protein within 30min",
            ),
        ),
    },
}


def templates_for(discipline: Discipline, intensity: WorkoutIntensity) -> tuple[WorkoutTemplate, ...]:
    return TEMPLATE_BANK.get(discipline, {}).get(intensity, ())


def select_template(
    discipline: Discipline, intensity: WorkoutIntensity, target_stress: float
) -> WorkoutTemplate:
    """Pick the template closest to *target_stress* for the cell.

    An empty cell yields a 60-minute custom session carrying the target.
    """
    candidates = templates_for(discipline, intensity)
    if not candidates:
        return WorkoutTemplate(
            name="Custom Workout",
            discipline=discipline,
            intensity=intensity,
            duration_min=CUSTOM_DURATION_MIN,
            stress_score=round(target_stress, 1),
            description=f"{intensity.name.lower()} {discipline.value} session",
        )

    best = candidates[0]
    for template in candidates[1:]:
        if abs(template.stress_score - target_stress) < abs(best.stress_score - target_stress):
            best = template
    return best
