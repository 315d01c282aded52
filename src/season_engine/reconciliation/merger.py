"""Cross-source activity reconciliation.

Merges the social provider's activities (source A, Strava) with the
precision provider's (source B, Intervals.icu) into one canonical list.
Measurement fields prefer source B, which carries power-meter based stress
scores; identity and social metadata always come from source A.

Two records are the same workout when their activity type (case-insensitive)
and start time rounded to the nearest 5-minute boundary agree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, Sequence, Union

from season_engine.models.activity import CanonicalActivity, RawActivity
from season_engine.models.enums import MATCH_BUCKET_MINUTES, Provenance

logger = logging.getLogger(__name__)

ActivityLike = Union[RawActivity, CanonicalActivity]

_EPOCH = datetime(1970, 1, 1)
_BUCKET_S = MATCH_BUCKET_MINUTES * 60

# Measurement fields resolved "source B when present, else source A"
_MEASUREMENT_FIELDS = (
    "moving_time_s",
    "elapsed_time_s",
    "distance_m",
    "average_speed",
    "max_speed",
    "average_heartrate",
    "max_heartrate",
    "average_watts",
    "weighted_average_watts",
    "max_watts",
    "ftp_watts",
    "intensity_factor",
    "calories",
    "average_temp_c",
)


def _naive_utc(moment: datetime) -> datetime:
    """Drop tzinfo after converting aware datetimes to UTC."""
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def round_to_bucket(moment: datetime) -> datetime:
    """Round *moment* to the nearest 5-minute boundary (half-way rounds up)."""
    naive = _naive_utc(moment)
    seconds = (naive - _EPOCH).total_seconds()
    bucket = int(seconds // _BUCKET_S)
    if seconds - bucket * _BUCKET_S >= _BUCKET_S / 2:
        bucket += 1
    return _EPOCH + timedelta(seconds=bucket * _BUCKET_S)


def activity_key(activity: ActivityLike) -> str | None:
    """Matching key: ``<type>_<start rounded to 5 min>``, or None if unkeyable."""
    if not isinstance(activity.start_time, datetime):
        return None
    activity_type = (activity.activity_type or "").lower()
    return f"{activity_type}_{round_to_bucket(activity.start_time).isoformat()}"


def _prefer(primary: Any, fallback: Any) -> Any:
    """*primary* when present (not None), else *fallback*. Zero is a real value."""
    if primary is None:
        return fallback
    return primary


def _measurements(raw: RawActivity) -> dict[str, Any]:
    return {name: getattr(raw, name) for name in _MEASUREMENT_FIELDS}


def from_source_a(raw: RawActivity) -> CanonicalActivity:
    """Pass an unmatched source-A record through as a single-source canonical."""
    return CanonicalActivity(
        provenance=Provenance.SOURCE_A_ONLY,
        activity_id=raw.activity_id,
        start_time=raw.start_time,  # type: ignore[arg-type]
        activity_type=raw.activity_type,
        name=raw.name,
        source_a=raw,
        workout_type=raw.workout_type,
        stress_score=raw.stress_score,
        stress_score_a=raw.stress_score,
        social=raw.social,
        **_measurements(raw),
    )


def from_source_b(raw: RawActivity) -> CanonicalActivity:
    """Pass an unmatched source-B record through as a single-source canonical."""
    return CanonicalActivity(
        provenance=Provenance.SOURCE_B_ONLY,
        activity_id=raw.activity_id,
        start_time=raw.start_time,  # type: ignore[arg-type]
        activity_type=raw.activity_type,
        name=raw.name,
        source_b=raw,
        workout_type=raw.workout_type,
        stress_score=raw.stress_score,
        stress_score_b=raw.stress_score,
        social=raw.social,
        **_measurements(raw),
    )


def merge_pair(raw_a: RawActivity, raw_b: RawActivity) -> CanonicalActivity:
    """Merge one matched pair: B's measurements, A's identity and social data."""
    measurements = {
        name: _prefer(getattr(raw_b, name), getattr(raw_a, name))
        for name in _MEASUREMENT_FIELDS
    }
    logger.debug(
        "Merging %s: A stress=%s, B stress=%s",
        raw_a.name or raw_a.activity_id,
        raw_a.stress_score,
        raw_b.stress_score,
    )
    return CanonicalActivity(
        provenance=Provenance.MERGED,
        activity_id=raw_a.activity_id,
        start_time=raw_a.start_time,  # type: ignore[arg-type]
        activity_type=raw_a.activity_type,
        name=raw_a.name or raw_b.name,
        source_a=raw_a,
        source_b=raw_b,
        workout_type=_prefer(raw_a.workout_type, raw_b.workout_type),
        stress_score=_prefer(raw_b.stress_score, raw_a.stress_score),
        stress_score_a=raw_a.stress_score,
        stress_score_b=raw_b.stress_score,
        social=raw_a.social,
        **measurements,
    )


def _usable(item: Any) -> bool:
    if isinstance(item, CanonicalActivity):
        return activity_key(item) is not None
    if isinstance(item, RawActivity):
        return item.is_valid and activity_key(item) is not None
    return False


def _reconcile(item: ActivityLike, partner: RawActivity | None) -> CanonicalActivity:
    if isinstance(item, CanonicalActivity):
        # Re-merging a canonical list: only an A-only record can gain a partner
        if partner is not None and item.provenance == Provenance.SOURCE_A_ONLY:
            return merge_pair(item.source_a, partner)  # type: ignore[arg-type]
        return item
    if partner is None:
        return from_source_a(item)
    return merge_pair(item, partner)


def _sort_key(activity: CanonicalActivity) -> datetime:
    return _naive_utc(activity.start_time)


def merge(
    source_a: Sequence[ActivityLike] | None,
    source_b: Sequence[RawActivity] | None,
) -> list[CanonicalActivity]:
    """Reconcile two activity lists into canonical activities, newest first.

    *source_a* may also hold CanonicalActivity items (the output of a
    previous merge); they are carried through unchanged unless an A-only
    record finds its source-B partner.

    Records that fail validation (no start time, negative duration) are
    dropped with a warning. Within one source, a second record with an
    already-seen key is treated as the same workout. Never raises.
    """
    a_items: list[ActivityLike] = []
    for item in source_a or ():
        if _usable(item):
            a_items.append(item)
        else:
            logger.warning("Dropping malformed source-A activity: %r", _describe(item))

    b_by_key: dict[str, RawActivity] = {}
    for raw in source_b or ():
        if not _usable(raw):
            logger.warning("Dropping malformed source-B activity: %r", _describe(raw))
            continue
        key = activity_key(raw)
        if key in b_by_key:
            logger.debug("Duplicate source-B activity for key %s ignored", key)
            continue
        b_by_key[key] = raw  # type: ignore[index]

    merged: list[CanonicalActivity] = []
    seen: set[str] = set()
    for item in a_items:
        key = activity_key(item)
        if key in seen:
            logger.debug("Duplicate source-A activity for key %s ignored", key)
            continue
        seen.add(key)  # type: ignore[arg-type]
        merged.append(_reconcile(item, b_by_key.get(key)))  # type: ignore[arg-type]

    for key, raw in b_by_key.items():
        if key not in seen:
            merged.append(from_source_b(raw))

    merged.sort(key=_sort_key, reverse=True)

    stats = merge_stats(merged)
    logger.info(
        "Merged %d + %d activities into %d (merged=%d, A-only=%d, B-only=%d)",
        len(a_items),
        len(b_by_key),
        stats.total,
        stats.merged,
        stats.source_a_only,
        stats.source_b_only,
    )
    return merged


def _describe(item: Any) -> str:
    return str(getattr(item, "activity_id", item))


# ---------------------------------------------------------------------------
# Diagnostics and filters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MergeStats:
    """Summary of a reconciled list."""

    total: int = 0
    merged: int = 0
    source_a_only: int = 0
    source_b_only: int = 0
    with_provider_stress: int = 0
    with_power: int = 0
    mean_stress_difference: float = 0.0


def merge_stats(activities: Iterable[CanonicalActivity]) -> MergeStats:
    """Count provenance variants and compare A/B stress scores where both exist."""
    total = merged = a_only = b_only = with_stress = with_power = 0
    diffs: list[float] = []
    for activity in activities:
        total += 1
        if activity.provenance == Provenance.MERGED:
            merged += 1
            if activity.stress_score_a is not None and activity.stress_score_b is not None:
                diffs.append(abs(activity.stress_score_b - activity.stress_score_a))
        elif activity.provenance == Provenance.SOURCE_A_ONLY:
            a_only += 1
        elif activity.provenance == Provenance.SOURCE_B_ONLY:
            b_only += 1
        if activity.has_provider_stress_b:
            with_stress += 1
        if activity.weighted_average_watts:
            with_power += 1
    mean_diff = round(sum(diffs) / len(diffs), 1) if diffs else 0.0
    return MergeStats(
        total=total,
        merged=merged,
        source_a_only=a_only,
        source_b_only=b_only,
        with_provider_stress=with_stress,
        with_power=with_power,
        mean_stress_difference=mean_diff,
    )


def filter_by_date_range(
    activities: Iterable[CanonicalActivity], start: date, end: date
) -> list[CanonicalActivity]:
    """Activities whose start date falls in [start, end] inclusive."""
    return [a for a in activities if start <= a.start_time.date() <= end]


def activities_on(
    activities: Iterable[CanonicalActivity], day: date
) -> list[CanonicalActivity]:
    return filter_by_date_range(activities, day, day)


def recent_activities(
    activities: Iterable[CanonicalActivity], as_of: date, days: int = 7
) -> list[CanonicalActivity]:
    """Activities in the *days* calendar days ending at *as_of* inclusive."""
    return filter_by_date_range(activities, as_of - timedelta(days=days - 1), as_of)
