"""Pure functions mapping provider response dicts to season_engine models.

No I/O. A payload that cannot be mapped (missing id, unparseable start
time, negative duration) maps to None and is dropped by
``map_activities`` with a warning.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Callable, Iterable, Optional

from season_engine.models.activity import RawActivity
from season_engine.models.athlete import FitnessState
from season_engine.models.enums import ActivitySource

logger = logging.getLogger(__name__)

_SOCIAL_FIELDS = {
    "kudos_count": "kudos",
    "comment_count": "comments",
    "achievement_count": "achievements",
    "trainer": "trainer",
    "commute": "commute",
    "manual": "manual",
    "private": "private",
    "flagged": "flagged",
}


def map_strava_activity(data: dict[str, Any]) -> Optional[RawActivity]:
    """Map one Strava ``/athlete/activities`` entry to a source-A RawActivity."""
    if not isinstance(data, dict) or data.get("id") is None:
        return None
    start = _parse_timestamp(data.get("start_date") or data.get("start_date_local"))
    if start is None:
        return None

    social = {
        name: data[field] for field, name in _SOCIAL_FIELDS.items() if data.get(field) is not None
    }
    raw = RawActivity(
        source=ActivitySource.SOURCE_A,
        activity_id=str(data["id"]),
        start_time=start,
        activity_type=str(data.get("sport_type") or data.get("type") or ""),
        moving_time_s=_float(data.get("moving_time")),
        elapsed_time_s=_float(data.get("elapsed_time")),
        distance_m=_float(data.get("distance")),
        name=str(data.get("name") or ""),
        average_speed=_float(data.get("average_speed")),
        max_speed=_float(data.get("max_speed")),
        average_heartrate=_float(data.get("average_heartrate")),
        max_heartrate=_float(data.get("max_heartrate")),
        average_watts=_float(data.get("average_watts")),
        weighted_average_watts=_float(data.get("weighted_average_watts")),
        max_watts=_float(data.get("max_watts")),
        stress_score=_float(data.get("suffer_score")),
        calories=_float(data.get("calories")),
        average_temp_c=_float(data.get("average_temp")),
        workout_type=_int(data.get("workout_type")),
        social=MappingProxyType(social),
    )
    return raw if raw.is_valid else None


def map_intervals_activity(data: dict[str, Any]) -> Optional[RawActivity]:
    """Map one Intervals.icu activity to a source-B RawActivity.

    Reads the ``icu_*`` fields, falling back to the short aliases
    (``tss``, ``np``, ``intensity``, ``average_hr``) some exports use.
    ``icu_intensity`` is a percentage and is converted to a factor.
    """
    if not isinstance(data, dict) or data.get("id") is None:
        return None
    start = _parse_timestamp(data.get("start_date") or data.get("start_date_local"))
    if start is None:
        return None

    factor = _float(_first(data, "icu_intensity", "intensity"))
    if factor is not None and factor > 3:
        factor = factor / 100.0

    raw = RawActivity(
        source=ActivitySource.SOURCE_B,
        activity_id=str(data["id"]),
        start_time=start,
        activity_type=str(data.get("type") or ""),
        moving_time_s=_float(data.get("moving_time")),
        elapsed_time_s=_float(data.get("elapsed_time")),
        distance_m=_float(data.get("distance")),
        name=str(data.get("name") or ""),
        average_speed=_float(data.get("average_speed")),
        max_speed=_float(data.get("max_speed")),
        average_heartrate=_float(_first(data, "average_heartrate", "average_hr")),
        max_heartrate=_float(_first(data, "max_heartrate", "max_hr")),
        average_watts=_float(_first(data, "icu_average_watts", "average_watts")),
        weighted_average_watts=_float(_first(data, "icu_weighted_avg_watts", "np")),
        max_watts=_float(data.get("max_watts")),
        ftp_watts=_float(data.get("icu_ftp")),
        intensity_factor=factor,
        stress_score=_float(_first(data, "icu_training_load", "tss")),
        calories=_float(data.get("calories")),
        average_temp_c=_float(data.get("average_temp")),
    )
    return raw if raw.is_valid else None


def map_activities(
    payloads: Iterable[Any], mapper: Callable[[dict[str, Any]], Optional[RawActivity]]
) -> list[RawActivity]:
    """Map a list of payloads, dropping (and logging) the ones that fail."""
    activities: list[RawActivity] = []
    for payload in payloads or ():
        activity = mapper(payload)
        if activity is None:
            ident = payload.get("id") if isinstance(payload, dict) else payload
            logger.warning("Dropping malformed activity payload id=%r", ident)
            continue
        activities.append(activity)
    return activities


def map_fitness_state(record: dict[str, Any]) -> Optional[FitnessState]:
    """Map one Intervals.icu wellness record to a FitnessState.

    The record's ``id`` is its date. Returns None when the record carries
    no CTL value.
    """
    if not isinstance(record, dict):
        return None
    ctl = _float(record.get("ctl"))
    if ctl is None:
        return None
    try:
        as_of = date.fromisoformat(str(record.get("id"))[:10])
    except ValueError:
        return None
    atl = _float(record.get("atl")) or 0.0
    return FitnessState.from_loads(as_of, chronic_load=ctl, acute_load=atl)


# ---------------------------------------------------------------------------
# Internal helpers: None and junk input map to None
# ---------------------------------------------------------------------------


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def _int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None
