"""Tests for the single-race planner and today's workout lookup."""

from datetime import date

import pytest

from season_engine.exceptions import PlanGenerationError
from season_engine.math.periodization import PHASES
from season_engine.models.athlete import FitnessState
from season_engine.models.enums import Discipline, PhaseName, WorkoutIntensity
from season_engine.planning.planner import generate_season_plan, generate_week, todays_workout

RACE = date(2025, 7, 20)  # a Sunday, 20 calendar weeks out from the fixture's today


@pytest.fixture
def plan(today):
    return generate_season_plan(RACE, race_details={"name": "Lake Placid 70.3"}, today=today)


class TestGenerateWeek:
    def test_seven_slots_in_order(self):
        week = generate_week(PHASES[PhaseName.BASE_1], 1, date(2025, 3, 3), 250.0, weeks_to_race=10)
        assert [d.day for d in week.days] == list(range(7))
        assert week.days[0].workout_date == date(2025, 3, 3)
        assert week.days[6].day_name == "Sunday"

    def test_odd_week_friday_rest(self):
        week = generate_week(PHASES[PhaseName.BASE_1], 1, date(2025, 3, 3), 250.0, weeks_to_race=10)
        assert week.days[4].is_rest
        assert week.days[4].name == "Active Recovery"

    def test_even_week_friday_strength(self):
        week = generate_week(PHASES[PhaseName.BASE_1], 2, date(2025, 3, 10), 250.0, weeks_to_race=10)
        assert week.days[4].discipline == Discipline.STRENGTH

    def test_saturday_bike_far_from_race(self):
        week = generate_week(PHASES[PhaseName.BUILD_1], 3, date(2025, 3, 17), 400.0, weeks_to_race=4)
        assert week.days[5].discipline == Discipline.BIKE
        assert week.days[5].is_key

    def test_saturday_brick_near_race(self):
        week = generate_week(PHASES[PhaseName.PEAK], 3, date(2025, 3, 17), 350.0, weeks_to_race=3)
        assert week.days[5].discipline == Discipline.BRICK

    def test_high_intensity_phase_moderate_sunday(self):
        week = generate_week(PHASES[PhaseName.PEAK], 1, date(2025, 3, 3), 350.0, weeks_to_race=5)
        assert week.days[6].intensity == WorkoutIntensity.MODERATE
        assert week.days[6].is_key

    def test_low_phase_sunday_easy_and_not_key(self):
        week = generate_week(PHASES[PhaseName.BASE_1], 1, date(2025, 3, 3), 250.0, weeks_to_race=10)
        assert week.days[6].intensity == WorkoutIntensity.EASY
        assert not week.days[6].is_key


class TestGenerateSeasonPlan:
    def test_calendar_span(self, plan):
        assert plan.total_weeks == 20
        assert plan.start_date == date(2025, 3, 3)
        assert plan.end_date == RACE
        assert plan.plan_length_weeks == 16

    def test_ladder_covers_every_week(self, plan):
        assert plan.phase_ladder[0].start_week == 1
        assert plan.phase_ladder[-1].end_week == 20
        assert sum(b.duration_weeks for b in plan.phase_ladder) == 20

    def test_surplus_weeks_extend_base(self, plan):
        assert plan.phase_ladder[0].phase.name == PhaseName.BASE_1
        assert plan.phase_ladder[0].duration_weeks == 10

    def test_final_week_contains_race(self, plan):
        last = plan.weeks[-1]
        assert last.contains(RACE)
        assert last.phase.name == PhaseName.TAPER
        assert last.event == plan.goal_event
        assert last.days[6].is_event_day
        assert last.days[6].description == "Race day: Lake Placid 70.3"

    def test_only_race_week_has_event(self, plan):
        assert [w.week_number for w in plan.weeks if w.event is not None] == [20]

    def test_neutral_targets(self, plan):
        assert plan.weeks[0].target_stress_score == 250.0

    def test_fitness_scales_targets(self, today):
        strong = FitnessState.from_loads(today, chronic_load=65.0, acute_load=65.0)
        plan = generate_season_plan(RACE, current_fitness=strong, today=today)
        assert plan.weeks[0].target_stress_score == 325.0

    def test_brick_in_last_weeks(self, plan):
        assert plan.weeks[0].days[5].discipline == Discipline.BIKE
        assert plan.weeks[-1].days[5].discipline == Discipline.BRICK

    def test_past_race_raises(self, today):
        with pytest.raises(PlanGenerationError):
            generate_season_plan(date(2025, 3, 1), today=today)

    def test_race_this_week(self, today):
        plan = generate_season_plan(date(2025, 3, 9), today=today)
        assert plan.total_weeks == 1
        assert plan.weeks[0].phase.name == PhaseName.TAPER


class TestTodaysWorkout:
    def test_wednesday_slot(self, plan, today):
        result = todays_workout(plan, today)
        assert result.week_number == 1
        assert result.workout.workout_date == today
        assert result.workout.discipline == Discipline.RUN
        assert result.target_stress_score == 250.0

    def test_fatigue_applied(self, plan, today, fatigued_fitness):
        result = todays_workout(plan, today, fatigued_fitness)
        assert result.workout.modified
        assert result.workout.stress_score == 24

    def test_outside_plan(self, plan):
        assert todays_workout(plan, date(2025, 8, 1)) is None
