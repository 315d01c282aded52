"""Season planning: periodization, multi-event orchestration, fatigue adaptation."""

from season_engine.planning.fatigue import adjust_for_fatigue
from season_engine.planning.planner import generate_season_plan, generate_week, todays_workout
from season_engine.planning.season import (
    PriorityRecommendation,
    generate_multi_event_plan,
    recommend_event_priorities,
)
from season_engine.planning.templates import TEMPLATE_BANK, select_template

__all__ = [
    "PriorityRecommendation",
    "TEMPLATE_BANK",
    "adjust_for_fatigue",
    "generate_multi_event_plan",
    "generate_season_plan",
    "generate_week",
    "recommend_event_priorities",
    "select_template",
    "todays_workout",
]
