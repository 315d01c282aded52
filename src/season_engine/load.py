"""Load aggregation over the seven days ending at a given date."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from types import MappingProxyType
from typing import Iterable

from season_engine.math.training_load import (
    calculate_monotony,
    classify_load_phase,
    daily_stress_series,
    window_start,
)
from season_engine.metrics import derive_metrics
from season_engine.models.activity import CanonicalActivity
from season_engine.models.athlete import AthleteProfile
from season_engine.models.enums import Discipline, LoadPhase
from season_engine.models.load import WeeklyLoad

logger = logging.getLogger(__name__)


def aggregate(
    activities: Iterable[CanonicalActivity],
    as_of: date,
    athlete: AthleteProfile | None = None,
) -> WeeklyLoad:
    """Roll up stress, duration and energy for the window ``as_of - 6 .. as_of``.

    Activities outside the window are ignored. An activity whose metrics
    cannot be derived is skipped with a warning; it never aborts the
    aggregation.
    """
    first_day = window_start(as_of)

    stress = 0.0
    hours = 0.0
    energy = 0
    count = measured = estimated = 0
    per_discipline: dict[Discipline, float] = defaultdict(float)
    daily: list[tuple[date, float]] = []

    for activity in activities:
        day = activity.start_time.date()
        if not first_day <= day <= as_of:
            continue
        try:
            metrics = derive_metrics(activity, athlete)
        except (TypeError, ValueError, ArithmeticError) as exc:
            logger.warning("Skipping activity %s in load aggregation: %s", activity.activity_id, exc)
            continue

        count += 1
        stress += metrics.stress_score
        hours += metrics.duration_hours
        energy += metrics.energy_kcal
        if metrics.is_measured:
            measured += 1
        else:
            estimated += 1
        per_discipline[metrics.discipline] += metrics.stress_score
        daily.append((day, metrics.stress_score))

    if count == 0:
        return WeeklyLoad(
            as_of=as_of,
            phase=LoadPhase.REST,
            daily_stress=daily_stress_series([], as_of),
        )

    stress = round(stress, 1)
    series = daily_stress_series(daily, as_of)
    logger.debug("Weekly load to %s: %.1f over %d activities", as_of, stress, count)
    return WeeklyLoad(
        as_of=as_of,
        stress_score=stress,
        duration_hours=round(hours, 2),
        energy_kcal=energy,
        phase=classify_load_phase(stress),
        activity_count=count,
        measured_count=measured,
        estimated_count=estimated,
        daily_stress=series,
        monotony=calculate_monotony(series),
        per_discipline=MappingProxyType({d: round(v, 1) for d, v in per_discipline.items()}),
    )
