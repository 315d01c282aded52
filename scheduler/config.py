"""Environment-variable-based configuration for the refresh scheduler."""

from __future__ import annotations

import os
from pathlib import Path


def _optional_float(name: str) -> float | None:
    value = os.environ.get(name, "").strip()
    return float(value) if value else None


STRAVA_ACCESS_TOKEN: str = os.environ.get("STRAVA_ACCESS_TOKEN", "")
INTERVALS_API_KEY: str = os.environ.get("INTERVALS_API_KEY", "")
INTERVALS_ATHLETE_ID: str = os.environ.get("INTERVALS_ATHLETE_ID", "")

REFRESH_LOOKBACK_DAYS: int = int(os.environ.get("REFRESH_LOOKBACK_DAYS", "28"))
SOURCE_A_TIMEOUT_S: float = float(os.environ.get("SOURCE_A_TIMEOUT_S", "20"))
SOURCE_B_TIMEOUT_S: float = float(os.environ.get("SOURCE_B_TIMEOUT_S", "20"))
FITNESS_TIMEOUT_S: float = float(os.environ.get("FITNESS_TIMEOUT_S", "10"))
CACHE_TTL_S: float = float(os.environ.get("CACHE_TTL_S", "300"))

NIGHTLY_HOUR: int = int(os.environ.get("SCHEDULER_HOUR", "4"))
NIGHTLY_MINUTE: int = int(os.environ.get("SCHEDULER_MINUTE", "0"))
REFRESH_INTERVAL_MIN: int = int(os.environ.get("REFRESH_INTERVAL_MIN", "60"))

EVENTS_PATH: Path = Path(os.environ.get("EVENTS_PATH", "events.json")).expanduser()
ATHLETE_FTP: float | None = _optional_float("ATHLETE_FTP")
ATHLETE_MAX_HR: float | None = _optional_float("ATHLETE_MAX_HR")
