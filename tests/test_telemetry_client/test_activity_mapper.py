"""Tests for telemetry_client.activity_mapper — pure payload mapping."""

from __future__ import annotations

from datetime import date, datetime, timezone

from season_engine.models.enums import ActivitySource, Discipline
from telemetry_client.activity_mapper import (
    map_activities,
    map_fitness_state,
    map_intervals_activity,
    map_strava_activity,
)


class TestMapStravaActivity:
    def test_core_fields(self, strava_activity_data):
        raw = map_strava_activity(strava_activity_data)
        assert raw.source == ActivitySource.SOURCE_A
        assert raw.activity_id == "11873400512"
        assert raw.start_time == datetime(2025, 3, 4, 8, 0, 11, tzinfo=timezone.utc)
        assert raw.discipline == Discipline.BIKE
        assert raw.moving_time_s == 3602
        assert raw.distance_m == 36012.4

    def test_suffer_score_is_stress(self, strava_activity_data):
        assert map_strava_activity(strava_activity_data).stress_score == 55.0

    def test_social_fields(self, strava_activity_data):
        social = map_strava_activity(strava_activity_data).social
        assert social["kudos"] == 4
        assert social["comments"] == 1
        assert social["achievements"] == 3
        assert social["trainer"] is False

    def test_null_workout_type(self, strava_activity_data):
        assert map_strava_activity(strava_activity_data).workout_type is None

    def test_falls_back_to_local_start(self, strava_activity_data):
        del strava_activity_data["start_date"]
        raw = map_strava_activity(strava_activity_data)
        assert raw.start_time.hour == 9

    def test_missing_id(self, strava_activity_data):
        del strava_activity_data["id"]
        assert map_strava_activity(strava_activity_data) is None

    def test_bad_timestamp(self, strava_activity_data):
        strava_activity_data["start_date"] = "yesterday"
        strava_activity_data["start_date_local"] = None
        assert map_strava_activity(strava_activity_data) is None

    def test_negative_duration(self, strava_activity_data):
        strava_activity_data["moving_time"] = -10
        assert map_strava_activity(strava_activity_data) is None

    def test_junk_numeric_becomes_none(self, strava_activity_data):
        strava_activity_data["average_heartrate"] = "n/a"
        assert map_strava_activity(strava_activity_data).average_heartrate is None


class TestMapIntervalsActivity:
    def test_core_fields(self, intervals_activity_data):
        raw = map_intervals_activity(intervals_activity_data)
        assert raw.source == ActivitySource.SOURCE_B
        assert raw.activity_id == "i48213377"
        assert raw.start_time == datetime(2025, 3, 4, 8, 2, tzinfo=timezone.utc)
        assert raw.average_watts == 190
        assert raw.weighted_average_watts == 205
        assert raw.ftp_watts == 250
        assert raw.stress_score == 72

    def test_intensity_percent_converted(self, intervals_activity_data):
        assert map_intervals_activity(intervals_activity_data).intensity_factor == 0.82

    def test_intensity_factor_kept(self, intervals_activity_data):
        del intervals_activity_data["icu_intensity"]
        intervals_activity_data["intensity"] = 0.9
        assert map_intervals_activity(intervals_activity_data).intensity_factor == 0.9

    def test_short_aliases(self, intervals_activity_data):
        for key in ("icu_training_load", "icu_weighted_avg_watts", "average_heartrate"):
            del intervals_activity_data[key]
        intervals_activity_data.update({"tss": 64, "np": 199, "average_hr": 139})
        raw = map_intervals_activity(intervals_activity_data)
        assert raw.stress_score == 64
        assert raw.weighted_average_watts == 199
        assert raw.average_heartrate == 139

    def test_no_social_data(self, intervals_activity_data):
        assert dict(map_intervals_activity(intervals_activity_data).social) == {}


class TestMapActivities:
    def test_drops_malformed(self, strava_activity_data, caplog):
        payloads = [strava_activity_data, {"id": 9, "start_date": None}, "garbage"]
        activities = map_activities(payloads, map_strava_activity)
        assert [a.activity_id for a in activities] == ["11873400512"]
        assert "Dropping malformed activity payload" in caplog.text

    def test_none_payload(self):
        assert map_activities(None, map_strava_activity) == []


class TestMapFitnessState:
    def test_maps_ctl_atl(self, wellness_data):
        state = map_fitness_state(wellness_data[1])
        assert state.as_of == date(2025, 3, 4)
        assert state.chronic_load == 60.6
        assert state.acute_load == 74.3
        assert round(state.stress_balance, 1) == -13.7

    def test_missing_ctl(self, wellness_data):
        assert map_fitness_state(wellness_data[2]) is None

    def test_bad_date(self):
        assert map_fitness_state({"id": "soon", "ctl": 50}) is None

    def test_missing_atl_defaults_to_zero(self):
        state = map_fitness_state({"id": "2025-03-04", "ctl": 50})
        assert state.stress_balance == 50
