"""Single-race periodization planner.

Builds a Monday-aligned season from the current week through the race
week: template ladder, fitness-adjusted weekly targets and seven day
slots per week filled from the template bank.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, timedelta
from typing import Any, Mapping

from season_engine.exceptions import PlanGenerationError
from season_engine.math.periodization import (
    build_phase_ladder,
    intensity_from_distribution,
    phase_for_week,
    select_plan_length,
    week_start,
    weekly_target,
    weeks_between,
)
from season_engine.models.athlete import FitnessState
from season_engine.models.enums import (
    BRICK_WEEKS_TO_RACE,
    Discipline,
    EventPriority,
    WorkoutIntensity,
)
from season_engine.models.event import Event
from season_engine.models.plan import (
    DayWorkout,
    Phase,
    SeasonPlan,
    TodaysWorkout,
    WeekPlan,
)
from season_engine.planning.fatigue import adjust_for_fatigue
from season_engine.planning.templates import select_template

logger = logging.getLogger(__name__)


def _slot(
    day: int,
    start: date,
    discipline: Discipline,
    intensity: WorkoutIntensity,
    target: float,
    is_key: bool = False,
) -> DayWorkout:
    template = select_template(discipline, intensity, target)
    return DayWorkout(
        day=day,
        workout_date=start + timedelta(days=day),
        discipline=discipline,
        name=template.name,
        intensity=template.intensity,
        duration_min=template.duration_min,
        stress_score=template.stress_score,
        description=template.description,
        structure=template.structure,
        nutrition=template.nutrition,
        is_key=is_key,
    )


def _rest(day: int, start: date) -> DayWorkout:
    return DayWorkout(
        day=day,
        workout_date=start + timedelta(days=day),
        discipline=None,
        name="Active Recovery",
        intensity=WorkoutIntensity.REST,
        duration_min=0,
        stress_score=0,
        description="Complete rest or very light activity",
    )


def generate_week(
    phase: Phase,
    week_number: int,
    start_date: date,
    target_stress: float,
    weeks_to_race: int,
    event: Event | None = None,
    race_week: bool = False,
) -> WeekPlan:
    """Fill the seven day slots of one week from its stress target.

    Args:
        phase: Phase the week belongs to.
        week_number: 1-indexed position in the season.
        start_date: Monday of the week.
        target_stress: Realized weekly stress target.
        weeks_to_race: Whole weeks until the goal race (0 in race week).
        event: Event falling in this week, if any; its day is flagged.
        race_week: Whether the target was reduced for a race.
    """
    bike_intensity = intensity_from_distribution(week_number, phase.distribution)
    sunday_intensity = (
        WorkoutIntensity.MODERATE if phase.intensity == "high" else WorkoutIntensity.EASY
    )

    if weeks_to_race > BRICK_WEEKS_TO_RACE:
        saturday = _slot(5, start_date, Discipline.BIKE, WorkoutIntensity.MODERATE, target_stress * 0.30, is_key=True)
    else:
        saturday = _slot(5, start_date, Discipline.BRICK, WorkoutIntensity.MODERATE, target_stress * 0.35, is_key=True)

    if week_number % 2 == 0:
        friday = _slot(4, start_date, Discipline.STRENGTH, WorkoutIntensity.MODERATE, target_stress * 0.10)
    else:
        friday = _rest(4, start_date)

    days = [
        _slot(0, start_date, Discipline.SWIM, WorkoutIntensity.EASY, target_stress * 0.15),
        _slot(1, start_date, Discipline.BIKE, bike_intensity, target_stress * 0.25),
        _slot(2, start_date, Discipline.RUN, WorkoutIntensity.EASY, target_stress * 0.15),
        _slot(3, start_date, Discipline.SWIM, WorkoutIntensity.MODERATE, target_stress * 0.20),
        friday,
        saturday,
        _slot(6, start_date, Discipline.RUN, sunday_intensity, target_stress * 0.25, is_key=phase.intensity != "low"),
    ]

    if event is not None:
        index = (event.event_date - start_date).days
        if 0 <= index < 7:
            days[index] = _flag_event_day(days[index], event)

    return WeekPlan(
        week_number=week_number,
        start_date=start_date,
        phase=phase,
        days=tuple(days),
        target_stress_score=target_stress,
        event=event,
        race_week=race_week,
    )


def _flag_event_day(workout: DayWorkout, event: Event) -> DayWorkout:
    return dataclasses.replace(workout, is_event_day=True, description=f"Race day: {event.name}")


def _goal_event(race_date: date, race_details: Mapping[str, Any] | None) -> Event:
    details = race_details or {}
    return Event(
        event_id=str(details.get("event_id", "goal")),
        name=str(details.get("name", "Goal race")),
        event_date=race_date,
        priority=EventPriority.A,
        discipline=details.get("discipline", Discipline.OTHER),
        distance_km=details.get("distance_km"),
        event_type=str(details.get("event_type", details.get("type", ""))),
    )


def generate_season_plan(
    race_date: date,
    current_fitness: FitnessState | None = None,
    race_details: Mapping[str, Any] | Event | None = None,
    today: date | None = None,
) -> SeasonPlan:
    """Generate a single-race season plan ending in the race week.

    Args:
        race_date: Date of the goal race.
        current_fitness: Latest CTL/ATL/TSB, or None to plan neutrally.
        race_details: The goal Event, or a mapping with name/type/distance.
        today: Planning date; defaults to ``date.today()``.

    Raises:
        PlanGenerationError: If the race date is before *today*.
    """
    today = today or date.today()
    if race_date < today:
        raise PlanGenerationError(
            f"Race date {race_date.isoformat()} is before {today.isoformat()}"
        )

    goal = race_details if isinstance(race_details, Event) else _goal_event(race_date, race_details)
    weeks_available = (race_date - today).days // 7
    plan_length = select_plan_length(weeks_available)
    total_weeks = weeks_between(today, race_date)
    ladder = build_phase_ladder(plan_length, total_weeks)
    first_monday = week_start(today)

    logger.info(
        "Generating %d-week plan (%d-week template) for %s on %s",
        total_weeks,
        plan_length,
        goal.name,
        race_date.isoformat(),
    )

    weeks = []
    for week_number in range(1, total_weeks + 1):
        phase = phase_for_week(week_number, ladder)
        start = first_monday + timedelta(weeks=week_number - 1)
        in_week = goal if start <= race_date <= start + timedelta(days=6) else None
        weeks.append(
            generate_week(
                phase,
                week_number,
                start,
                weekly_target(phase, current_fitness),
                weeks_to_race=total_weeks - week_number,
                event=in_week,
            )
        )

    return SeasonPlan(
        start_date=first_monday,
        end_date=first_monday + timedelta(weeks=total_weeks, days=-1),
        goal_event=goal,
        plan_length_weeks=plan_length,
        phase_ladder=ladder,
        weeks=tuple(weeks),
        events=(goal,),
    )


def todays_workout(
    plan: SeasonPlan, today: date, fitness: FitnessState | None = None
) -> TodaysWorkout | None:
    """Today's slot, adjusted for fatigue, with its week's progress.

    Returns None when *today* is outside the plan.
    """
    week = plan.week_for(today)
    if week is None:
        return None
    workout = week.day_for(today)
    return TodaysWorkout(
        workout=adjust_for_fatigue(workout, fitness),  # type: ignore[arg-type]
        week_number=week.week_number,
        phase=week.phase,
        target_stress_score=week.target_stress_score,
        prescribed_stress_score=week.prescribed_stress_score,
    )
