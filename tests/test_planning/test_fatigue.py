"""Tests for the fatigue adapter."""

from datetime import date

import pytest

from season_engine.models.athlete import FitnessState
from season_engine.models.enums import Discipline, WorkoutIntensity
from season_engine.models.plan import DayWorkout
from season_engine.planning.fatigue import adjust_for_fatigue

DAY = date(2025, 3, 4)


def _workout(intensity: WorkoutIntensity, duration: float = 60, stress: float = 95) -> DayWorkout:
    return DayWorkout(
        day=1,
        workout_date=DAY,
        discipline=Discipline.BIKE,
        name="VO2 Max Intervals",
        intensity=intensity,
        duration_min=duration,
        stress_score=stress,
    )


def _fitness(ctl: float, atl: float) -> FitnessState:
    return FitnessState.from_loads(DAY, chronic_load=ctl, acute_load=atl)


@pytest.fixture
def hard_bike() -> DayWorkout:
    return _workout(WorkoutIntensity.HARD)


class TestSevereFatigue:
    def test_hard_becomes_easy(self, hard_bike, fatigued_fitness):
        adjusted = adjust_for_fatigue(hard_bike, fatigued_fitness)
        assert adjusted.intensity == WorkoutIntensity.EASY
        assert adjusted.duration_min == 42
        assert adjusted.stress_score == 57
        assert adjusted.modified
        assert adjusted.original_intensity == WorkoutIntensity.HARD
        assert "TSB: -35" in adjusted.reason

    def test_only_first_rule_applies(self, hard_bike, fatigued_fitness):
        # The moderate rule would have produced stress 81 had it run too
        assert adjust_for_fatigue(hard_bike, fatigued_fitness).stress_score != 81

    def test_applying_twice_is_same_as_once(self, hard_bike, fatigued_fitness):
        once = adjust_for_fatigue(hard_bike, fatigued_fitness)
        assert adjust_for_fatigue(once, fatigued_fitness) == once

    def test_input_not_mutated(self, hard_bike, fatigued_fitness):
        adjust_for_fatigue(hard_bike, fatigued_fitness)
        assert hard_bike.intensity == WorkoutIntensity.HARD
        assert not hard_bike.modified


class TestModerateFatigue:
    def test_hard_becomes_moderate(self, hard_bike):
        adjusted = adjust_for_fatigue(hard_bike, _fitness(60, 80))
        assert adjusted.intensity == WorkoutIntensity.MODERATE
        assert adjusted.stress_score == 81
        assert adjusted.duration_min == 60
        assert adjusted.modified

    def test_easy_untouched(self):
        easy = _workout(WorkoutIntensity.EASY, stress=40)
        assert adjust_for_fatigue(easy, _fitness(60, 80)) == easy


class TestFresh:
    def test_easy_gets_suggestion(self):
        adjusted = adjust_for_fatigue(_workout(WorkoutIntensity.EASY, stress=40), _fitness(60, 40))
        assert "+20" in adjusted.suggestion
        assert adjusted.intensity == WorkoutIntensity.EASY
        assert not adjusted.modified

    def test_suggestion_added_once(self):
        fitness = _fitness(60, 40)
        once = adjust_for_fatigue(_workout(WorkoutIntensity.EASY, stress=40), fitness)
        assert adjust_for_fatigue(once, fitness) == once

    def test_hard_untouched(self, hard_bike):
        assert adjust_for_fatigue(hard_bike, _fitness(60, 40)) == hard_bike


class TestPassThrough:
    def test_no_fitness_is_neutral(self, hard_bike):
        assert adjust_for_fatigue(hard_bike, None) is hard_bike

    def test_rest_day_untouched(self, fatigued_fitness):
        rest = DayWorkout(4, DAY, None, "Active Recovery", WorkoutIntensity.REST, 0, 0)
        assert adjust_for_fatigue(rest, fatigued_fitness) is rest

    def test_balanced_athlete(self, hard_bike, neutral_fitness):
        assert adjust_for_fatigue(hard_bike, neutral_fitness) is hard_bike
