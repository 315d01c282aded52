"""Tests for plan templates, phase ladders and fitness multipliers."""

from __future__ import annotations

from datetime import date

import pytest

from season_engine.math.periodization import (
    PHASES,
    build_phase_ladder,
    fitness_multiplier,
    intensity_from_distribution,
    phase_for_week,
    select_plan_length,
    week_start,
    weekly_target,
    weeks_between,
)
from season_engine.models.athlete import FitnessState
from season_engine.models.enums import PhaseName, WorkoutIntensity
from season_engine.models.plan import IntensityDistribution

AS_OF = date(2025, 3, 5)


class TestSelectPlanLength:
    @pytest.mark.parametrize(
        "weeks, expected",
        [(30, 20), (20, 20), (19, 16), (16, 16), (15, 12), (12, 12), (11, 8), (3, 8), (0, 8)],
    )
    def test_thresholds(self, weeks, expected) -> None:
        assert select_plan_length(weeks) == expected


class TestWeeks:
    def test_week_start_is_monday(self) -> None:
        assert week_start(date(2025, 3, 9)) == date(2025, 3, 3)
        assert week_start(date(2025, 3, 3)) == date(2025, 3, 3)

    def test_same_week_is_one_week(self) -> None:
        assert weeks_between(date(2025, 3, 5), date(2025, 3, 9)) == 1

    def test_next_week(self) -> None:
        assert weeks_between(date(2025, 3, 5), date(2025, 3, 10)) == 2


class TestPhaseLadder:
    def test_exact_template(self) -> None:
        ladder = build_phase_ladder(20, 20)
        assert [b.phase.name for b in ladder] == [
            PhaseName.BASE_1,
            PhaseName.BASE_2,
            PhaseName.BUILD_1,
            PhaseName.BUILD_2,
            PhaseName.PEAK,
            PhaseName.TAPER,
        ]
        assert ladder[-1].end_week == 20

    def test_surplus_weeks_extend_first_phase(self) -> None:
        ladder = build_phase_ladder(12, 14)
        assert ladder[0].phase.name == PhaseName.BASE_1
        assert ladder[0].duration_weeks == 8
        assert ladder[-1].end_week == 14
        assert ladder[-1].phase.name == PhaseName.TAPER

    def test_short_calendar_drops_from_front(self) -> None:
        ladder = build_phase_ladder(8, 3)
        assert [b.phase.name for b in ladder] == [PhaseName.BUILD_1, PhaseName.TAPER]
        assert ladder[0].duration_weeks == 1
        assert ladder[-1].end_week == 3

    def test_single_week(self) -> None:
        ladder = build_phase_ladder(8, 1)
        assert phase_for_week(1, ladder).name == PhaseName.TAPER

    def test_unknown_template(self) -> None:
        with pytest.raises(ValueError):
            build_phase_ladder(10, 10)

    def test_week_outside_ladder(self) -> None:
        with pytest.raises(ValueError, match="outside plan range"):
            phase_for_week(9, build_phase_ladder(8, 8))


class TestFitnessMultiplier:
    def test_none_is_neutral(self) -> None:
        assert fitness_multiplier(None) == 1.0

    def test_zero_ctl_is_neutral(self) -> None:
        assert fitness_multiplier(FitnessState.from_loads(AS_OF, 0.0, 0.0)) == 1.0

    def test_clamped_low(self) -> None:
        assert fitness_multiplier(FitnessState.from_loads(AS_OF, 20.0, 20.0)) == 0.8

    def test_clamped_high(self) -> None:
        assert fitness_multiplier(FitnessState.from_loads(AS_OF, 100.0, 100.0)) == 1.3

    def test_fatigued(self) -> None:
        state = FitnessState.from_loads(AS_OF, 50.0, 75.0)
        assert fitness_multiplier(state) == pytest.approx(0.8)

    def test_fresh(self) -> None:
        state = FitnessState.from_loads(AS_OF, 50.0, 35.0)
        assert fitness_multiplier(state) == pytest.approx(1.1)

    def test_weekly_target_rounds(self) -> None:
        state = FitnessState.from_loads(AS_OF, 60.0, 60.0)
        assert weekly_target(PHASES[PhaseName.BUILD_1], state) == 480.0


class TestIntensityFromDistribution:
    def test_deterministic_draw(self) -> None:
        dist = IntensityDistribution(easy=0.5, moderate=0.3, hard=0.2)
        # week 1 -> 0.07, week 10 -> 0.70, week 13 -> 0.91
        assert intensity_from_distribution(1, dist) == WorkoutIntensity.EASY
        assert intensity_from_distribution(10, dist) == WorkoutIntensity.MODERATE
        assert intensity_from_distribution(13, dist) == WorkoutIntensity.HARD
