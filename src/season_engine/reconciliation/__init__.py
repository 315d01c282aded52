"""Activity reconciliation across the two telemetry sources."""

from season_engine.reconciliation.merger import (
    MergeStats,
    activities_on,
    activity_key,
    filter_by_date_range,
    merge,
    merge_pair,
    merge_stats,
    recent_activities,
)

__all__ = [
    "MergeStats",
    "activities_on",
    "activity_key",
    "filter_by_date_range",
    "merge",
    "merge_pair",
    "merge_stats",
    "recent_activities",
]
