"""Data models for the season engine."""

from season_engine.models.activity import CanonicalActivity, RawActivity, discipline_for
from season_engine.models.athlete import AthleteProfile, FitnessState
from season_engine.models.enums import (
    ActivitySource,
    Discipline,
    EventPriority,
    IntensityClass,
    IntensitySource,
    LoadPhase,
    PhaseName,
    Provenance,
    StressSource,
    WorkoutIntensity,
)
from season_engine.models.event import Event, EventCalendar
from season_engine.models.load import WeeklyLoad
from season_engine.models.metrics import ActivityMetrics, HydrationNeeds
from season_engine.models.plan import (
    DayWorkout,
    EventAnnotation,
    IntensityDistribution,
    Phase,
    PhaseBlock,
    SeasonPlan,
    TodaysWorkout,
    WeekPlan,
    WorkoutTemplate,
)

__all__ = [
    "ActivityMetrics",
    "ActivitySource",
    "AthleteProfile",
    "CanonicalActivity",
    "DayWorkout",
    "Discipline",
    "Event",
    "EventAnnotation",
    "EventCalendar",
    "EventPriority",
    "FitnessState",
    "HydrationNeeds",
    "IntensityClass",
    "IntensityDistribution",
    "IntensitySource",
    "LoadPhase",
    "Phase",
    "PhaseBlock",
    "PhaseName",
    "Provenance",
    "RawActivity",
    "SeasonPlan",
    "StressSource",
    "TodaysWorkout",
    "WeekPlan",
    "WeeklyLoad",
    "WorkoutIntensity",
    "WorkoutTemplate",
    "discipline_for",
]
