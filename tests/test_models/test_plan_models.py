"""Tests for week and season plan models."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from season_engine.math.periodization import PHASES
from season_engine.models.enums import Discipline, PhaseName, WorkoutIntensity
from season_engine.models.plan import DayWorkout, TodaysWorkout, WeekPlan

MONDAY = date(2025, 3, 3)


def _day(i: int, stress: float = 50.0) -> DayWorkout:
    return DayWorkout(
        day=i,
        workout_date=MONDAY + timedelta(days=i),
        discipline=Discipline.RUN,
        name="Easy Aerobic Run",
        intensity=WorkoutIntensity.EASY,
        duration_min=45,
        stress_score=stress,
    )


class TestWeekPlan:
    def test_needs_seven_days(self) -> None:
        with pytest.raises(ValueError, match="7 day slots"):
            WeekPlan(1, MONDAY, PHASES[PhaseName.BASE_1], tuple(_day(i) for i in range(6)), 250)

    def test_derived_totals(self) -> None:
        week = WeekPlan(1, MONDAY, PHASES[PhaseName.BASE_1], tuple(_day(i) for i in range(7)), 250)
        assert week.prescribed_stress_score == 350
        assert week.total_duration_min == 315
        assert week.end_date == date(2025, 3, 9)

    def test_day_for(self) -> None:
        week = WeekPlan(1, MONDAY, PHASES[PhaseName.BASE_1], tuple(_day(i) for i in range(7)), 250)
        assert week.day_for(date(2025, 3, 5)).day_name == "Wednesday"
        assert week.day_for(date(2025, 3, 10)) is None


class TestTodaysWorkout:
    def test_remaining_never_negative(self) -> None:
        today = TodaysWorkout(_day(0), 1, PHASES[PhaseName.BASE_1], 250, 300)
        assert today.remaining_stress_score == 0.0
