"""Telemetry provider clients — all Strava and Intervals.icu network I/O lives here."""

from telemetry_client.activity_mapper import (
    map_activities,
    map_fitness_state,
    map_intervals_activity,
    map_strava_activity,
)
from telemetry_client.cache import ResponseCache, TTLCache
from telemetry_client.exceptions import (
    FitnessUnavailableError,
    TelemetryAPIError,
    TelemetryAuthError,
    TelemetryClientError,
    TelemetryRateLimitError,
)
from telemetry_client.fetch import FetchTimeouts, TelemetrySnapshot, fetch_snapshot
from telemetry_client.intervals import IntervalsClient
from telemetry_client.strava import StravaClient

__all__ = [
    "FetchTimeouts",
    "FitnessUnavailableError",
    "IntervalsClient",
    "ResponseCache",
    "StravaClient",
    "TTLCache",
    "TelemetryAPIError",
    "TelemetryAuthError",
    "TelemetryClientError",
    "TelemetryRateLimitError",
    "TelemetrySnapshot",
    "fetch_snapshot",
    "map_activities",
    "map_fitness_state",
    "map_intervals_activity",
    "map_strava_activity",
]
