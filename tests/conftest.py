"""Shared test fixtures: raw activities from both sources, fitness states, events."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable

import pytest

from season_engine.models.activity import RawActivity
from season_engine.models.athlete import AthleteProfile, FitnessState
from season_engine.models.enums import ActivitySource, EventPriority
from season_engine.models.event import Event

TODAY = date(2025, 3, 5)  # a Wednesday


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_raw() -> Callable[..., RawActivity]:
    """Factory for RawActivity with sensible defaults (60-min ride, source A)."""

    def _make(
        activity_id: str = "a1",
        start: datetime = datetime(2025, 3, 4, 8, 0),
        activity_type: str = "Ride",
        source: ActivitySource = ActivitySource.SOURCE_A,
        moving_time_s: float | None = 3600,
        **overrides,
    ) -> RawActivity:
        return RawActivity(
            source=source,
            activity_id=activity_id,
            start_time=start,
            activity_type=activity_type,
            moving_time_s=moving_time_s,
            **overrides,
        )

    return _make


@pytest.fixture
def strava_ride(make_raw) -> RawActivity:
    """Morning ride as seen by the social provider: HR, suffer score, kudos."""
    return make_raw(
        activity_id="s-100",
        start=datetime(2025, 3, 4, 8, 0),
        name="Morning Ride",
        distance_m=36000,
        average_speed=10.0,
        average_heartrate=142,
        max_heartrate=181,
        stress_score=55,
        social={"kudos": 4, "comments": 1},
    )


@pytest.fixture
def intervals_ride(make_raw) -> RawActivity:
    """The same ride from the precision provider: power, real TSS."""
    return make_raw(
        activity_id="i-200",
        start=datetime(2025, 3, 4, 8, 2),
        source=ActivitySource.SOURCE_B,
        distance_m=36100,
        average_heartrate=143,
        average_watts=190,
        weighted_average_watts=205,
        ftp_watts=250,
        stress_score=72,
    )


@pytest.fixture
def athlete() -> AthleteProfile:
    return AthleteProfile(ftp_watts=250, max_hr=185)


@pytest.fixture
def neutral_fitness() -> FitnessState:
    """CTL 50, TSB 0: multiplier exactly 1.0."""
    return FitnessState.from_loads(TODAY, chronic_load=50.0, acute_load=50.0)


@pytest.fixture
def fatigued_fitness() -> FitnessState:
    """TSB -35: deep in the red."""
    return FitnessState.from_loads(TODAY, chronic_load=60.0, acute_load=95.0)


@pytest.fixture
def make_event() -> Callable[..., Event]:
    def _make(
        name: str,
        event_date: date,
        priority: EventPriority | str = EventPriority.A,
        event_type: str = "",
    ) -> Event:
        return Event.create(
            event_id=name.lower().replace(" ", "-"),
            name=name,
            event_date=event_date,
            priority=priority,
            today=TODAY,
            event_type=event_type,
        )

    return _make
