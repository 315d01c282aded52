"""Fixtures with realistic Strava and Intervals.icu response dicts for testing."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def strava_activity_data() -> dict:
    """Realistic Strava /athlete/activities entry (summary representation)."""
    return {
        "resource_state": 2,
        "athlete": {"id": 134815, "resource_state": 1},
        "name": "Morning Ride",
        "distance": 36012.4,
        "moving_time": 3602,
        "elapsed_time": 3815,
        "total_elevation_gain": 312.0,
        "type": "Ride",
        "sport_type": "Ride",
        "workout_type": None,
        "id": 11873400512,
        "start_date": "2025-03-04T08:00:11Z",
        "start_date_local": "2025-03-04T09:00:11Z",
        "timezone": "(GMT+01:00) Europe/Amsterdam",
        "achievement_count": 3,
        "kudos_count": 4,
        "comment_count": 1,
        "trainer": False,
        "commute": False,
        "manual": False,
        "private": False,
        "flagged": False,
        "average_speed": 9.998,
        "max_speed": 15.2,
        "average_watts": 185.3,
        "weighted_average_watts": 201,
        "device_watts": False,
        "has_heartrate": True,
        "average_heartrate": 142.3,
        "max_heartrate": 181.0,
        "suffer_score": 55.0,
        "calories": 812.0,
        "average_temp": 9,
    }


@pytest.fixture
def intervals_activity_data() -> dict:
    """Realistic Intervals.icu activity entry."""
    return {
        "id": "i48213377",
        "start_date_local": "2025-03-04T09:02:00",
        "start_date": "2025-03-04T08:02:00Z",
        "type": "Ride",
        "name": "Morning Ride",
        "moving_time": 3590,
        "elapsed_time": 3800,
        "distance": 36100.0,
        "average_speed": 10.05,
        "max_speed": 15.0,
        "average_heartrate": 143,
        "max_heartrate": 180,
        "icu_average_watts": 190,
        "icu_weighted_avg_watts": 205,
        "icu_ftp": 250,
        "icu_intensity": 82.0,
        "icu_training_load": 72,
        "calories": 820,
        "icu_atl": 58.2,
        "icu_ctl": 61.4,
    }


@pytest.fixture
def wellness_data() -> list:
    """Intervals.icu wellness records, newest last, latest day missing CTL."""
    return [
        {"id": "2025-03-03", "ctl": 60.1, "atl": 71.0, "restingHR": 48, "hrv": 62.0},
        {"id": "2025-03-04", "ctl": 60.6, "atl": 74.3, "restingHR": 49, "hrv": 58.5},
        {"id": "2025-03-05", "ctl": None, "atl": None, "restingHR": 50, "hrv": None},
    ]


@pytest.fixture
def make_response():
    """Factory for mocked requests.Response objects."""

    def _make(status: int = 200, payload=None, text: str = ""):
        response = MagicMock()
        response.status_code = status
        response.text = text
        if isinstance(payload, Exception):
            response.json.side_effect = payload
        else:
            response.json.return_value = payload
        return response

    return _make


@pytest.fixture
def session():
    """A mocked requests.Session."""
    return MagicMock()
