"""Refresh scheduler — pulls telemetry and regenerates the season plan.

Usage:
    python -m scheduler.refresh --once      # single run (for cron)
    python -m scheduler.refresh --daemon    # APScheduler loop
"""

from __future__ import annotations

import argparse
import json
import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Iterable

from season_engine.exceptions import PlanGenerationError
from season_engine.load import aggregate
from season_engine.models.athlete import AthleteProfile
from season_engine.models.enums import Discipline
from season_engine.models.event import Event
from season_engine.planning import generate_multi_event_plan, todays_workout
from season_engine.reconciliation import merge
from telemetry_client import (
    FetchTimeouts,
    IntervalsClient,
    StravaClient,
    TelemetryClientError,
    TTLCache,
    fetch_snapshot,
)

from scheduler.config import (
    ATHLETE_FTP,
    ATHLETE_MAX_HR,
    CACHE_TTL_S,
    EVENTS_PATH,
    FITNESS_TIMEOUT_S,
    INTERVALS_API_KEY,
    INTERVALS_ATHLETE_ID,
    NIGHTLY_HOUR,
    NIGHTLY_MINUTE,
    REFRESH_INTERVAL_MIN,
    REFRESH_LOOKBACK_DAYS,
    SOURCE_A_TIMEOUT_S,
    SOURCE_B_TIMEOUT_S,
    STRAVA_ACCESS_TOKEN,
)
from scheduler.state import AthleteStateStore, RefreshResult

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_STORE = AthleteStateStore()
_CACHE = TTLCache(ttl_s=CACHE_TTL_S)


def parse_events(entries: Iterable[dict[str, Any]], today: date) -> list[Event]:
    """Validate raw event dicts; invalid entries are logged and skipped."""
    events: list[Event] = []
    for index, entry in enumerate(entries):
        try:
            events.append(
                Event.create(
                    event_id=str(entry.get("id", index)),
                    name=str(entry["name"]),
                    event_date=date.fromisoformat(str(entry["date"])),
                    priority=entry.get("priority", "B"),
                    today=today,
                    discipline=Discipline(entry.get("discipline", Discipline.OTHER.value)),
                    distance_km=entry.get("distance_km"),
                    event_type=str(entry.get("type", "")),
                )
            )
        except (KeyError, ValueError, TypeError, AttributeError) as exc:
            # InvalidEventError is a ValueError
            logger.warning("Skipping invalid event #%d %r: %s", index, entry, exc)
    return events


def load_events(path: Path, today: date) -> list[Event]:
    """Load events from a JSON list on disk; a missing file means no events."""
    try:
        with open(path) as f:
            entries = json.load(f)
    except FileNotFoundError:
        logger.info("No events file at %s", path)
        return []
    if not isinstance(entries, list):
        logger.warning("Events file %s does not hold a list, ignoring it", path)
        return []
    return parse_events(entries, today)


def run_refresh(
    store: AthleteStateStore,
    source_a: StravaClient | None,
    source_b: IntervalsClient | None,
    events: list[Event],
    today: date | None = None,
    athlete: AthleteProfile | None = None,
    requested_at: datetime | None = None,
    lookback_days: int = REFRESH_LOOKBACK_DAYS,
    timeouts: FetchTimeouts | None = None,
) -> RefreshResult:
    """One refresh cycle: fetch, merge, aggregate, plan, pick today's workout.

    The result is offered to *store*; it is returned either way so the
    caller can inspect it even if a newer request already won.
    """
    today = today or date.today()
    requested_at = requested_at or datetime.now(timezone.utc)
    logger.info("Starting refresh requested at %s", requested_at.isoformat())

    snapshot = fetch_snapshot(
        source_a,
        source_b,
        start=today - timedelta(days=lookback_days),
        end=today,
        as_of=today,
        timeouts=timeouts,
        requested_at=requested_at,
    )
    activities = merge(snapshot.source_a, snapshot.source_b)
    weekly_load = aggregate(activities, today, athlete)
    logger.info(
        "Weekly load %.1f (%s) from %d activities",
        weekly_load.stress_score,
        weekly_load.phase.value,
        weekly_load.activity_count,
    )

    errors = dict(snapshot.errors)
    plan = None
    workout = None
    if events:
        try:
            plan = store.regenerate(
                lambda: generate_multi_event_plan(events, snapshot.fitness, today)
            )
        except PlanGenerationError as exc:
            logger.warning("Plan not regenerated: %s", exc)
            errors["plan"] = str(exc)
        if plan is not None:
            workout = todays_workout(plan, today, snapshot.fitness)

    result = RefreshResult(
        requested_at=requested_at,
        activities=tuple(activities),
        weekly_load=weekly_load,
        fitness=snapshot.fitness,
        plan=plan,
        todays_workout=workout,
        errors=errors,
    )
    accepted = store.offer(result)
    logger.info("Refresh complete (accepted=%s, degraded=%s)", accepted, bool(errors))
    return result


def _build_clients(cache: TTLCache = _CACHE) -> tuple[StravaClient | None, IntervalsClient | None]:
    strava = None
    intervals = None
    try:
        if STRAVA_ACCESS_TOKEN:
            strava = StravaClient(STRAVA_ACCESS_TOKEN, cache=cache)
        if INTERVALS_API_KEY and INTERVALS_ATHLETE_ID:
            intervals = IntervalsClient(INTERVALS_ATHLETE_ID, INTERVALS_API_KEY, cache=cache)
    except TelemetryClientError as exc:
        logger.error("Failed to configure telemetry clients: %s", exc)
    return strava, intervals


def refresh_job() -> None:
    """Execute one refresh using environment configuration."""
    strava, intervals = _build_clients()
    if strava is None and intervals is None:
        logger.warning("No telemetry source configured, refreshing the plan only")

    today = date.today()
    athlete = AthleteProfile(
        ftp_watts=ATHLETE_FTP,
        max_hr=int(ATHLETE_MAX_HR) if ATHLETE_MAX_HR else None,
    )
    run_refresh(
        _STORE,
        strava,
        intervals,
        load_events(EVENTS_PATH, today),
        today=today,
        athlete=athlete,
        timeouts=FetchTimeouts(
            source_a_s=SOURCE_A_TIMEOUT_S,
            source_b_s=SOURCE_B_TIMEOUT_S,
            fitness_s=FITNESS_TIMEOUT_S,
        ),
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Season engine refresh scheduler")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    args = parser.parse_args()

    if args.once:
        refresh_job()
    else:
        from apscheduler.schedulers.blocking import BlockingScheduler

        scheduler = BlockingScheduler()
        scheduler.add_job(
            refresh_job,
            "interval",
            minutes=REFRESH_INTERVAL_MIN,
            id="refresh_job",
            max_instances=1,
            coalesce=True,
        )
        scheduler.add_job(
            refresh_job,
            "cron",
            hour=NIGHTLY_HOUR,
            minute=NIGHTLY_MINUTE,
            id="nightly_refresh",
        )
        logger.info(
            "Scheduler started — refresh every %d min, full refresh at %02d:%02d",
            REFRESH_INTERVAL_MIN,
            NIGHTLY_HOUR,
            NIGHTLY_MINUTE,
        )
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
