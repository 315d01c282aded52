"""Shared HTTP helper: JSON GET with retry on rate limiting.

Only HTTP 429 is retried (exponential backoff, 2 s base, 3 attempts).
Every other failure is mapped onto the telemetry_client exception
hierarchy and raised immediately.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import requests

from telemetry_client.cache import ResponseCache, cache_key
from telemetry_client.exceptions import (
    TelemetryAPIError,
    TelemetryAuthError,
    TelemetryRateLimitError,
)

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
BASE_BACKOFF_S = 2
DEFAULT_TIMEOUT_S = 30.0


def request_json(
    session: requests.Session,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    auth: Any = None,
    timeout: float = DEFAULT_TIMEOUT_S,
    cache: ResponseCache | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Any:
    """GET *url* and decode the JSON body.

    Raises:
        TelemetryAuthError: On HTTP 401/403.
        TelemetryRateLimitError: When still rate limited after all retries.
        TelemetryAPIError: On any other HTTP error, transport failure or
            undecodable body.
    """
    key = cache_key(url, params)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached

    for attempt in range(MAX_RETRIES):
        try:
            response = session.get(url, params=params, headers=headers, auth=auth, timeout=timeout)
        except requests.RequestException as exc:
            raise TelemetryAPIError(f"Request to {url} failed: {exc}") from exc

        status = response.status_code
        if status == 429:
            wait = BASE_BACKOFF_S * (2 ** attempt)
            logger.warning(
                "Rate limited (attempt %d/%d), retrying in %ds",
                attempt + 1,
                MAX_RETRIES,
                wait,
            )
            sleep(wait)
            continue
        if status in (401, 403):
            raise TelemetryAuthError(f"Authentication rejected by {url} (HTTP {status})")
        if status >= 400:
            raise TelemetryAPIError(f"HTTP {status} from {url}: {response.text[:200]}", status_code=status)

        try:
            payload = response.json()
        except ValueError as exc:
            raise TelemetryAPIError(f"Undecodable response from {url}", status_code=status) from exc

        if cache is not None:
            cache.set(key, payload)
        return payload

    raise TelemetryRateLimitError(f"Rate limited after {MAX_RETRIES} retries: {url}")
