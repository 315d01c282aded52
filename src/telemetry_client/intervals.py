"""Precision-provider (Intervals.icu) activity and wellness client."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any

import requests

from season_engine.models.athlete import FitnessState
from telemetry_client.activity_mapper import map_fitness_state
from telemetry_client.cache import ResponseCache
from telemetry_client.exceptions import FitnessUnavailableError, TelemetryAuthError
from telemetry_client.transport import DEFAULT_TIMEOUT_S, request_json

logger = logging.getLogger(__name__)

INTERVALS_API_BASE = "https://intervals.icu/api/v1"
FITNESS_LOOKBACK_DAYS = 7


class IntervalsClient:
    """Read-only access to an athlete's Intervals.icu data.

    Authenticates with HTTP Basic auth, user ``API_KEY`` and the athlete's
    API key as password.
    """

    def __init__(
        self,
        athlete_id: str,
        api_key: str,
        session: requests.Session | None = None,
        cache: ResponseCache | None = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        base_url: str = INTERVALS_API_BASE,
    ) -> None:
        if not athlete_id or not api_key:
            raise TelemetryAuthError("An Intervals.icu athlete id and API key are required")
        self._athlete_id = athlete_id
        self._session = session or requests.Session()
        self._auth = ("API_KEY", api_key)
        self._cache = cache
        self._timeout = timeout
        self._base_url = base_url.rstrip("/")

    def get_activities(self, oldest: date, newest: date) -> list[dict[str, Any]]:
        """Activities between *oldest* and *newest* inclusive."""
        activities = self._get(
            "activities", {"oldest": oldest.isoformat(), "newest": newest.isoformat()}
        )
        logger.info("Fetched %d Intervals.icu activities", len(activities or []))
        return list(activities or [])

    def get_wellness(self, oldest: date, newest: date) -> list[dict[str, Any]]:
        """Daily wellness records (CTL, ATL, HRV, sleep ...) in the range."""
        records = self._get(
            "wellness", {"oldest": oldest.isoformat(), "newest": newest.isoformat()}
        )
        return list(records or [])

    def get_fitness(self, as_of: date) -> FitnessState:
        """Latest fitness state on or before *as_of*.

        Raises:
            FitnessUnavailableError: If no recent wellness record carries CTL.
        """
        records = self.get_wellness(as_of - timedelta(days=FITNESS_LOOKBACK_DAYS), as_of)
        for record in sorted(records, key=lambda r: str(r.get("id", "")), reverse=True):
            state = map_fitness_state(record)
            if state is not None:
                return state
        raise FitnessUnavailableError(f"No fitness data in wellness records up to {as_of.isoformat()}")

    def _get(self, endpoint: str, params: dict[str, Any]) -> Any:
        return request_json(
            self._session,
            f"{self._base_url}/athlete/{self._athlete_id}/{endpoint}",
            params=params,
            headers={"Accept": "application/json"},
            auth=self._auth,
            timeout=self._timeout,
            cache=self._cache,
        )
