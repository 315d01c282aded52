"""Planning models: phases, workout templates, week and season plans.

Plans are derived artifacts. They are regenerated whenever the event set
changes or a refresh is requested, never edited in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from season_engine.models.enums import Discipline, PhaseName, WorkoutIntensity
from season_engine.models.event import Event

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass(frozen=True)
class IntensityDistribution:
    """Fraction of a week's load meant to be easy / moderate / hard."""

    easy: float
    moderate: float
    hard: float


@dataclass(frozen=True)
class Phase:
    """A named periodization stage with a weekly stress target."""

    name: PhaseName
    label: str
    duration_weeks: int
    stress_target: float
    distribution: IntensityDistribution
    intensity: str  # "low", "low-moderate", "moderate", "moderate-high", "high"
    focus: str = ""


@dataclass(frozen=True)
class PhaseBlock:
    """A contiguous run of weeks in one phase (1-indexed, inclusive)."""

    phase: Phase
    start_week: int
    end_week: int

    @property
    def duration_weeks(self) -> int:
        return self.end_week - self.start_week + 1


@dataclass(frozen=True)
class WorkoutTemplate:
    """One entry of the workout template bank."""

    name: str
    discipline: Discipline
    intensity: WorkoutIntensity
    duration_min: float
    stress_score: float
    description: str
    structure: str = ""
    nutrition: str = ""


@dataclass(frozen=True)
class DayWorkout:
    """A single day slot: either a rest day or a prescribed workout.

    The last four fields are only set by the fatigue adapter.
    """

    day: int  # 0 = Monday ... 6 = Sunday
    workout_date: date
    discipline: Discipline | None
    name: str
    intensity: WorkoutIntensity
    duration_min: float
    stress_score: float
    description: str = ""
    structure: str = ""
    nutrition: str = ""
    is_key: bool = False
    is_event_day: bool = False

    modified: bool = False
    original_intensity: WorkoutIntensity | None = None
    reason: str = ""
    suggestion: str = ""

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day]

    @property
    def is_rest(self) -> bool:
        return self.intensity == WorkoutIntensity.REST


@dataclass(frozen=True)
class WeekPlan:
    """Seven day slots plus the week's targets and phase back-reference."""

    week_number: int
    start_date: date
    phase: Phase
    days: tuple[DayWorkout, ...]
    target_stress_score: float
    event: Event | None = None
    race_week: bool = False

    def __post_init__(self) -> None:
        if len(self.days) != 7:
            raise ValueError(f"A week plan needs 7 day slots, got {len(self.days)}")

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(days=6)

    @property
    def prescribed_stress_score(self) -> float:
        """Aggregate stress of the prescribed slots (the week's actual load)."""
        return round(sum(d.stress_score for d in self.days), 1)

    @property
    def total_duration_min(self) -> float:
        return sum(d.duration_min for d in self.days)

    @property
    def key_workouts(self) -> tuple[DayWorkout, ...]:
        return tuple(d for d in self.days if d.is_key)

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def day_for(self, day: date) -> DayWorkout | None:
        if not self.contains(day):
            return None
        return self.days[(day - self.start_date).days]


@dataclass(frozen=True)
class EventAnnotation:
    """How the season treats one event: taper length and recovery after."""

    event: Event
    role: str  # "peak", "tune-up", "training-race"
    taper_weeks: int
    recovery_weeks_after: int
    description: str = ""


@dataclass(frozen=True)
class SeasonPlan:
    """Ordered week plans from the start week through the goal event's week."""

    start_date: date
    end_date: date
    goal_event: Event
    plan_length_weeks: int
    phase_ladder: tuple[PhaseBlock, ...]
    weeks: tuple[WeekPlan, ...]
    annotations: tuple[EventAnnotation, ...] = field(default_factory=tuple)
    events: tuple[Event, ...] = field(default_factory=tuple)

    @property
    def total_weeks(self) -> int:
        return len(self.weeks)

    def week_for(self, day: date) -> WeekPlan | None:
        """Return the week containing *day*, or None if outside the plan."""
        for week in self.weeks:
            if week.contains(day):
                return week
        return None


@dataclass(frozen=True)
class TodaysWorkout:
    """Today's (fatigue-adjusted) slot with its week context."""

    workout: DayWorkout
    week_number: int
    phase: Phase
    target_stress_score: float
    prescribed_stress_score: float

    @property
    def remaining_stress_score(self) -> float:
        return max(0.0, self.target_stress_score - self.prescribed_stress_score)
