"""Activity records: raw per-provider telemetry and the reconciled canonical form."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

from season_engine.models.enums import (
    ACTIVITY_TYPE_DISCIPLINES,
    ActivitySource,
    Discipline,
    Provenance,
)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def discipline_for(activity_type: str | None) -> Discipline:
    """Map a provider activity type string (``Ride``, ``TrailRun`` ...) to a Discipline."""
    key = (activity_type or "").replace(" ", "").lower()
    if key in ACTIVITY_TYPE_DISCIPLINES:
        return ACTIVITY_TYPE_DISCIPLINES[key]
    # Loose fallbacks for provider types we have not enumerated
    if "ride" in key:
        return Discipline.BIKE
    if "run" in key:
        return Discipline.RUN
    if "swim" in key:
        return Discipline.SWIM
    return Discipline.OTHER


@dataclass(frozen=True)
class RawActivity:
    """One activity as reported by a single telemetry source.

    Times are in seconds, distance in metres, speed in m/s and power in
    watts. ``stress_score`` is the provider-computed score (Intervals.icu
    TSS or Strava suffer score) when the provider supplies one.
    """

    source: ActivitySource
    activity_id: str
    start_time: datetime | None
    activity_type: str
    moving_time_s: float | None = None
    elapsed_time_s: float | None = None
    distance_m: float | None = None
    name: str = ""

    average_speed: float | None = None
    max_speed: float | None = None
    average_heartrate: float | None = None
    max_heartrate: float | None = None
    average_watts: float | None = None
    weighted_average_watts: float | None = None  # normalized power
    max_watts: float | None = None
    ftp_watts: float | None = None
    intensity_factor: float | None = None
    stress_score: float | None = None
    calories: float | None = None
    average_temp_c: float | None = None
    workout_type: int | None = None

    social: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @property
    def duration_s(self) -> float:
        """Moving time when known, else elapsed time, else 0."""
        if self.moving_time_s:
            return float(self.moving_time_s)
        if self.elapsed_time_s:
            return float(self.elapsed_time_s)
        return 0.0

    @property
    def discipline(self) -> Discipline:
        return discipline_for(self.activity_type)

    @property
    def is_valid(self) -> bool:
        """False for records that must not enter reconciliation or aggregation."""
        if self.start_time is None:
            return False
        for value in (self.moving_time_s, self.elapsed_time_s, self.distance_m):
            if value is not None and value < 0:
                return False
        return True


@dataclass(frozen=True)
class CanonicalActivity:
    """The single reconciled record of one real-world workout.

    ``provenance`` is the variant tag: ``SOURCE_A_ONLY`` carries only
    ``source_a``, ``SOURCE_B_ONLY`` only ``source_b``, ``MERGED`` both. The
    resolved fields below are fixed at reconciliation time so consumers
    never need to know which source won.
    """

    provenance: Provenance
    activity_id: str
    start_time: datetime
    activity_type: str
    name: str = ""
    source_a: RawActivity | None = None
    source_b: RawActivity | None = None

    moving_time_s: float | None = None
    elapsed_time_s: float | None = None
    distance_m: float | None = None
    average_speed: float | None = None
    max_speed: float | None = None
    average_heartrate: float | None = None
    max_heartrate: float | None = None
    average_watts: float | None = None
    weighted_average_watts: float | None = None
    max_watts: float | None = None
    ftp_watts: float | None = None
    intensity_factor: float | None = None
    calories: float | None = None
    average_temp_c: float | None = None
    workout_type: int | None = None

    stress_score: float | None = None
    stress_score_a: float | None = None
    stress_score_b: float | None = None

    social: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @property
    def duration_s(self) -> float:
        if self.moving_time_s:
            return float(self.moving_time_s)
        if self.elapsed_time_s:
            return float(self.elapsed_time_s)
        return 0.0

    @property
    def discipline(self) -> Discipline:
        return discipline_for(self.activity_type)

    @property
    def is_merged(self) -> bool:
        return self.provenance == Provenance.MERGED

    @property
    def source_ids(self) -> tuple[str, ...]:
        """Ids of every raw record behind this activity (A first)."""
        ids = []
        if self.source_a is not None:
            ids.append(self.source_a.activity_id)
        if self.source_b is not None:
            ids.append(self.source_b.activity_id)
        return tuple(ids)

    @property
    def has_provider_stress_b(self) -> bool:
        """True when the precision provider supplied the stress score."""
        return self.stress_score_b is not None

    @property
    def has_power(self) -> bool:
        return bool(self.weighted_average_watts or self.average_watts)
