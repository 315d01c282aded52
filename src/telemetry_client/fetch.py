"""Concurrent snapshot of both activity sources and the fitness state.

The three fetches run in parallel, each under its own timeout. A failed or
timed-out activity fetch degrades to an empty list and a failed fitness
fetch to None; the snapshot records what went wrong instead of raising.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeout
from dataclasses import dataclass, field
from datetime import date, datetime, time as dt_time, timedelta, timezone
from typing import Any, Callable

from season_engine.models.activity import RawActivity
from season_engine.models.athlete import FitnessState
from telemetry_client.activity_mapper import (
    map_activities,
    map_intervals_activity,
    map_strava_activity,
)
from telemetry_client.intervals import IntervalsClient
from telemetry_client.strava import StravaClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchTimeouts:
    """Per-call timeouts in seconds."""

    source_a_s: float = 20.0
    source_b_s: float = 20.0
    fitness_s: float = 10.0


@dataclass(frozen=True)
class TelemetrySnapshot:
    """Raw activities from both sources plus the latest fitness state."""

    requested_at: datetime
    source_a: list[RawActivity] = field(default_factory=list)
    source_b: list[RawActivity] = field(default_factory=list)
    fitness: FitnessState | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def degraded(self) -> bool:
        return bool(self.errors)


def _fetch_source_a(client: StravaClient, start: date, end: date) -> list[RawActivity]:
    after = datetime.combine(start, dt_time.min, tzinfo=timezone.utc)
    before = datetime.combine(end + timedelta(days=1), dt_time.min, tzinfo=timezone.utc)
    return map_activities(client.get_activities(after=after, before=before), map_strava_activity)


def _fetch_source_b(client: IntervalsClient, start: date, end: date) -> list[RawActivity]:
    return map_activities(client.get_activities(start, end), map_intervals_activity)


def fetch_snapshot(
    source_a: StravaClient | None,
    source_b: IntervalsClient | None,
    start: date,
    end: date,
    as_of: date | None = None,
    timeouts: FetchTimeouts | None = None,
    requested_at: datetime | None = None,
) -> TelemetrySnapshot:
    """Fetch activities in [start, end] from both sources and today's fitness.

    Args:
        source_a: Social-provider client, or None when not connected.
        source_b: Precision-provider client, or None when not connected.
            It also serves the fitness state.
        start: First day of the activity window.
        end: Last day of the activity window.
        as_of: Date of the fitness state (defaults to *end*).
        timeouts: Per-call timeouts.
        requested_at: Request timestamp recorded on the snapshot.
    """
    timeouts = timeouts or FetchTimeouts()
    as_of = as_of or end
    requested_at = requested_at or datetime.now(timezone.utc)

    calls: dict[str, tuple[Callable[[], Any], float]] = {}
    if source_a is not None:
        calls["source_a"] = (lambda: _fetch_source_a(source_a, start, end), timeouts.source_a_s)
    if source_b is not None:
        calls["source_b"] = (lambda: _fetch_source_b(source_b, start, end), timeouts.source_b_s)
        calls["fitness"] = (lambda: source_b.get_fitness(as_of), timeouts.fitness_s)

    results: dict[str, Any] = {}
    errors: dict[str, str] = {}
    pool = ThreadPoolExecutor(max_workers=max(1, len(calls)))
    try:
        submitted = time.monotonic()
        futures = {name: (pool.submit(fn), timeout) for name, (fn, timeout) in calls.items()}
        for name, (future, timeout) in futures.items():
            remaining = max(0.0, timeout - (time.monotonic() - submitted))
            try:
                results[name] = future.result(timeout=remaining)
            except FuturesTimeout:
                logger.warning("Fetch of %s timed out after %ss", name, timeout)
                future.cancel()
                errors[name] = "timeout"
            except Exception as exc:
                logger.warning("Fetch of %s failed: %s", name, exc)
                errors[name] = str(exc) or type(exc).__name__
    finally:
        pool.shutdown(wait=False)

    snapshot = TelemetrySnapshot(
        requested_at=requested_at,
        source_a=results.get("source_a", []),
        source_b=results.get("source_b", []),
        fitness=results.get("fitness"),
        errors=errors,
    )
    logger.info(
        "Snapshot %s..%s: %d source-A, %d source-B activities, fitness=%s",
        start,
        end,
        len(snapshot.source_a),
        len(snapshot.source_b),
        "yes" if snapshot.fitness else "no",
    )
    return snapshot
