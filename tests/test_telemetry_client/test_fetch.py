"""Tests for telemetry_client.fetch — concurrent snapshot with degradation."""

from __future__ import annotations

import threading
from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from season_engine.models.athlete import FitnessState
from telemetry_client.exceptions import FitnessUnavailableError, TelemetryAPIError
from telemetry_client.fetch import FetchTimeouts, fetch_snapshot

START = date(2025, 2, 5)
END = date(2025, 3, 5)


@pytest.fixture
def strava(strava_activity_data):
    client = MagicMock()
    client.get_activities.return_value = [strava_activity_data]
    return client


@pytest.fixture
def intervals(intervals_activity_data):
    client = MagicMock()
    client.get_activities.return_value = [intervals_activity_data]
    client.get_fitness.return_value = FitnessState.from_loads(END, 60.0, 70.0)
    return client


class TestFetchSnapshot:
    def test_all_sources(self, strava, intervals):
        snapshot = fetch_snapshot(strava, intervals, START, END)
        assert [a.activity_id for a in snapshot.source_a] == ["11873400512"]
        assert [a.activity_id for a in snapshot.source_b] == ["i48213377"]
        assert snapshot.fitness.stress_balance == -10.0
        assert not snapshot.degraded

    def test_source_a_window(self, strava, intervals):
        fetch_snapshot(strava, intervals, START, END)
        kwargs = strava.get_activities.call_args.kwargs
        assert kwargs["after"] == datetime(2025, 2, 5, tzinfo=timezone.utc)
        assert kwargs["before"] == datetime(2025, 3, 6, tzinfo=timezone.utc)
        intervals.get_activities.assert_called_once_with(START, END)
        intervals.get_fitness.assert_called_once_with(END)

    def test_fitness_date_override(self, strava, intervals):
        fetch_snapshot(strava, intervals, START, END, as_of=date(2025, 3, 4))
        intervals.get_fitness.assert_called_once_with(date(2025, 3, 4))

    def test_source_failure_degrades_to_empty(self, strava, intervals):
        strava.get_activities.side_effect = TelemetryAPIError("HTTP 500", status_code=500)
        snapshot = fetch_snapshot(strava, intervals, START, END)
        assert snapshot.source_a == []
        assert len(snapshot.source_b) == 1
        assert snapshot.errors == {"source_a": "HTTP 500"}
        assert snapshot.degraded

    def test_fitness_failure_degrades_to_none(self, strava, intervals):
        intervals.get_fitness.side_effect = FitnessUnavailableError("no CTL")
        snapshot = fetch_snapshot(strava, intervals, START, END)
        assert snapshot.fitness is None
        assert len(snapshot.source_b) == 1
        assert "fitness" in snapshot.errors

    def test_unconfigured_sources(self):
        snapshot = fetch_snapshot(None, None, START, END)
        assert snapshot.source_a == []
        assert snapshot.source_b == []
        assert snapshot.fitness is None
        assert not snapshot.degraded

    def test_timeout(self, strava, intervals):
        release = threading.Event()

        def slow(*args, **kwargs):
            release.wait(5)
            return []

        strava.get_activities.side_effect = slow
        try:
            snapshot = fetch_snapshot(
                strava, intervals, START, END, timeouts=FetchTimeouts(source_a_s=0.05)
            )
        finally:
            release.set()
        assert snapshot.source_a == []
        assert snapshot.errors["source_a"] == "timeout"
        assert len(snapshot.source_b) == 1

    def test_requested_at_recorded(self, strava, intervals):
        stamp = datetime(2025, 3, 5, 6, 0, tzinfo=timezone.utc)
        assert fetch_snapshot(strava, intervals, START, END, requested_at=stamp).requested_at == stamp
