"""Multi-event season orchestration with A/B/C priorities.

The phase of every week is driven by the nearest upcoming event on or
after that week's Monday and by the event's priority:

    A (goal race):     full Base -> Build -> Peak -> Taper progression.
    B (tune-up):       stays in Base 2 / Build, one-week mini-taper.
    C (training race): no taper, trained through.

Weeks containing an A or B event are race weeks with a reduced target.

Reference:
    Mujika (2010). Intense training: the key to optimal performance
    before and during the taper. Scand J Med Sci Sports 20(s2):24-31.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from season_engine.exceptions import PlanGenerationError
from season_engine.math.periodization import PHASES, week_start, weekly_target, weeks_between
from season_engine.models.athlete import FitnessState
from season_engine.models.enums import (
    B_EVENT_MINI_TAPER_TARGET,
    RACE_WEEK_STRESS_FRACTION,
    EventPriority,
    PhaseName,
)
from season_engine.models.event import Event, EventCalendar
from season_engine.models.plan import EventAnnotation, Phase, PhaseBlock, SeasonPlan
from season_engine.planning.planner import generate_week

logger = logging.getLogger(__name__)

MINI_TAPER = dataclasses.replace(
    PHASES[PhaseName.TAPER],
    label="Mini-taper",
    duration_weeks=1,
    stress_target=B_EVENT_MINI_TAPER_TARGET,
    focus="Freshen up for a tune-up race",
)

# (taper weeks, recovery weeks after, role, description)
_ANNOTATIONS: dict[EventPriority, tuple[int, int, str, str]] = {
    EventPriority.A: (2, 1, "peak", "Goal race: full taper and a recovery week after"),
    EventPriority.B: (1, 1, "tune-up", "Tune-up race: mini-taper and a recovery week after"),
    EventPriority.C: (0, 0, "training-race", "Training race: no taper, train through"),
}


def _a_event_phase(weeks_to_event: int) -> Phase:
    if weeks_to_event <= 2:
        return PHASES[PhaseName.TAPER]
    if weeks_to_event <= 4:
        return PHASES[PhaseName.PEAK]
    if weeks_to_event <= 8:
        return PHASES[PhaseName.BUILD_2]
    if weeks_to_event <= 12:
        return PHASES[PhaseName.BUILD_1]
    if weeks_to_event <= 16:
        return PHASES[PhaseName.BASE_2]
    return PHASES[PhaseName.BASE_1]


def _b_event_phase(weeks_to_event: int) -> Phase:
    if weeks_to_event <= 1:
        return MINI_TAPER
    if weeks_to_event <= 6:
        return PHASES[PhaseName.BUILD_2]
    if weeks_to_event <= 10:
        return PHASES[PhaseName.BUILD_1]
    return PHASES[PhaseName.BASE_2]


def _c_event_phase(weeks_to_event: int) -> Phase:
    if weeks_to_event <= 8:
        return PHASES[PhaseName.BUILD_1]
    return PHASES[PhaseName.BASE_2]


_PHASE_RULES = {
    EventPriority.A: _a_event_phase,
    EventPriority.B: _b_event_phase,
    EventPriority.C: _c_event_phase,
}


def phase_for_week(week_monday: date, calendar: EventCalendar) -> tuple[Phase, Event | None]:
    """Phase for the week starting *week_monday*, driven by the next event.

    Returns the phase and the event that decided it (None when no event
    is left, in which case the week is Base 1).
    """
    upcoming = calendar.next_event(week_monday)
    if upcoming is None:
        return PHASES[PhaseName.BASE_1], None
    weeks_to_event = (upcoming.event_date - week_monday).days // 7
    return _PHASE_RULES[upcoming.priority](weeks_to_event), upcoming


def annotate_event(event: Event) -> EventAnnotation:
    taper, recovery, role, description = _ANNOTATIONS[event.priority]
    return EventAnnotation(
        event=event,
        role=role,
        taper_weeks=taper,
        recovery_weeks_after=recovery,
        description=description,
    )


def _ladder_from_weeks(phases: list[Phase]) -> tuple[PhaseBlock, ...]:
    blocks: list[PhaseBlock] = []
    for week_number, phase in enumerate(phases, start=1):
        if blocks and blocks[-1].phase == phase and blocks[-1].end_week == week_number - 1:
            blocks[-1] = dataclasses.replace(blocks[-1], end_week=week_number)
        else:
            blocks.append(PhaseBlock(phase=phase, start_week=week_number, end_week=week_number))
    return tuple(blocks)


def generate_multi_event_plan(
    events: Iterable[Event] | EventCalendar,
    current_fitness: FitnessState | None = None,
    today: date | None = None,
) -> SeasonPlan:
    """Plan a season around several prioritized events.

    Args:
        events: Events in any order.
        current_fitness: Latest CTL/ATL/TSB, or None to plan neutrally.
        today: Planning date; defaults to ``date.today()``.

    Raises:
        PlanGenerationError: If no events are given or none is on or
            after *today*.
    """
    today = today or date.today()
    given = tuple(events.events if isinstance(events, EventCalendar) else events)
    if not given:
        raise PlanGenerationError("At least one event is required to plan a season")

    future = []
    for event in given:
        if event.event_date < today:
            logger.warning(
                "Ignoring past event %r dated %s", event.name, event.event_date.isoformat()
            )
            continue
        future.append(event)
    if not future:
        raise PlanGenerationError("Every event is dated before today")

    calendar = EventCalendar.from_events(*future)
    goal = calendar.main_event()
    # Events after the goal race are outside the season
    calendar = calendar.until(week_start(goal.event_date) + timedelta(days=6))  # type: ignore[union-attr]
    first_monday = week_start(today)
    total_weeks = weeks_between(today, goal.event_date)  # type: ignore[union-attr]

    logger.info(
        "Generating %d-week season for %d events, goal %s on %s",
        total_weeks,
        len(calendar),
        goal.name,  # type: ignore[union-attr]
        goal.event_date.isoformat(),  # type: ignore[union-attr]
    )

    weeks = []
    week_phases: list[Phase] = []
    for week_number in range(1, total_weeks + 1):
        start = first_monday + timedelta(weeks=week_number - 1)
        phase, _ = phase_for_week(start, calendar)
        week_phases.append(phase)

        in_week = calendar.events_in_range(start, start + timedelta(days=6))
        # Highest priority wins when several events share a week
        event = min(in_week, key=lambda e: e.priority) if in_week else None
        race_week = event is not None and event.priority in (EventPriority.A, EventPriority.B)

        target = weekly_target(phase, current_fitness)
        if race_week:
            target = float(round(target * RACE_WEEK_STRESS_FRACTION))

        weeks.append(
            generate_week(
                phase,
                week_number,
                start,
                target,
                weeks_to_race=total_weeks - week_number,
                event=event,
                race_week=race_week,
            )
        )

    return SeasonPlan(
        start_date=first_monday,
        end_date=first_monday + timedelta(weeks=total_weeks, days=-1),
        goal_event=goal,  # type: ignore[arg-type]
        plan_length_weeks=total_weeks,
        phase_ladder=_ladder_from_weeks(week_phases),
        weeks=tuple(weeks),
        annotations=tuple(annotate_event(e) for e in calendar.events),
        events=calendar.events,
    )


@dataclass(frozen=True)
class PriorityRecommendation:
    """Suggested priority for one event, with the reason."""

    event: Event
    current_priority: EventPriority
    recommended_priority: EventPriority
    reason: str


def recommend_event_priorities(events: Iterable[Event]) -> list[PriorityRecommendation]:
    """Suggest A/B/C priorities from the events' position in the season.

    The last event is the goal (A), the first two are training races (C),
    ironman and marathon events are A, anything else is a tune-up (B).
    """
    ordered = EventCalendar.from_events(*events).events
    recommendations = []
    for index, event in enumerate(ordered):
        event_type = event.event_type.lower()
        if index == len(ordered) - 1:
            priority, reason = EventPriority.A, "Goal race - peak fitness target"
        elif index < 2:
            priority, reason = EventPriority.C, "Early season - use as training race"
        elif "ironman" in event_type or "marathon" in event_type:
            priority, reason = EventPriority.A, "Major distance - requires full taper"
        else:
            priority, reason = EventPriority.B, "Mid-season tune-up race"
        recommendations.append(
            PriorityRecommendation(
                event=event,
                current_priority=event.priority,
                recommended_priority=priority,
                reason=reason,
            )
        )
    return recommendations
