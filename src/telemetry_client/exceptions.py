"""Custom exception hierarchy for the telemetry provider clients."""

from __future__ import annotations


class TelemetryClientError(Exception):
    """Base exception for all telemetry_client errors."""


class TelemetryAuthError(TelemetryClientError):
    """Credentials were rejected (missing, expired or revoked token or API key)."""


class TelemetryAPIError(TelemetryClientError):
    """A provider API call returned an error response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TelemetryRateLimitError(TelemetryAPIError):
    """HTTP 429 — too many requests."""

    def __init__(self, message: str = "Rate limited by telemetry provider") -> None:
        super().__init__(message, status_code=429)


class FitnessUnavailableError(TelemetryClientError):
    """No wellness record in the requested range carries fitness (CTL/ATL) values."""
