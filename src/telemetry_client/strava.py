"""Social-provider (Strava) activity client."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import requests

from telemetry_client.cache import ResponseCache
from telemetry_client.exceptions import TelemetryAuthError
from telemetry_client.transport import DEFAULT_TIMEOUT_S, request_json

logger = logging.getLogger(__name__)

STRAVA_API_BASE = "https://www.strava.com/api/v3"
_MAX_PER_PAGE = 200
_MAX_PAGES = 20


class StravaClient:
    """Read-only access to the athlete's Strava activities.

    Takes an already-issued access token; the OAuth exchange happens
    elsewhere.
    """

    def __init__(
        self,
        access_token: str,
        session: requests.Session | None = None,
        cache: ResponseCache | None = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        base_url: str = STRAVA_API_BASE,
    ) -> None:
        if not access_token:
            raise TelemetryAuthError("A Strava access token is required")
        self._session = session or requests.Session()
        self._headers = {"Authorization": f"Bearer {access_token}"}
        self._cache = cache
        self._timeout = timeout
        self._base_url = base_url.rstrip("/")

    def get_activities(
        self,
        after: datetime | None = None,
        before: datetime | None = None,
        per_page: int = 100,
    ) -> list[dict[str, Any]]:
        """All activities in (after, before), following pagination.

        Returns raw activity dicts as the API sends them.
        """
        per_page = max(1, min(per_page, _MAX_PER_PAGE))
        params: dict[str, Any] = {"per_page": per_page}
        if after is not None:
            params["after"] = int(after.timestamp())
        if before is not None:
            params["before"] = int(before.timestamp())

        activities: list[dict[str, Any]] = []
        for page in range(1, _MAX_PAGES + 1):
            batch = self._get("/athlete/activities", {**params, "page": page})
            if not batch:
                break
            activities.extend(batch)
            if len(batch) < per_page:
                break
        logger.info("Fetched %d Strava activities", len(activities))
        return activities

    def _get(self, path: str, params: dict[str, Any]) -> Any:
        return request_json(
            self._session,
            f"{self._base_url}{path}",
            params=params,
            headers=self._headers,
            timeout=self._timeout,
            cache=self._cache,
        )
