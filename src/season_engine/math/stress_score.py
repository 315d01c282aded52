"""Training stress score (TSS-like) calculations.

Three estimation paths, best first:
    1. Power: TSS = hours x IF^2 x 100, IF = NP / FTP (Coggan & Allen 2010).
    2. Provider-computed score (Intervals.icu TSS, Strava suffer score).
    3. Duration x effort estimate from mean heart rate.

Every path is linear in duration, so for a fixed intensity a longer
session never scores lower.

Reference:
    Coggan & Allen (2010). Training and Racing with a Power Meter, 2nd ed.
"""

from __future__ import annotations

from season_engine.models.enums import (
    EFFORT_HR_BANDS,
    EFFORT_MULTIPLIER_EASY,
    EFFORT_MULTIPLIER_NO_HR,
    StressSource,
)


def intensity_factor(normalized_power: float | None, ftp_watts: float | None) -> float | None:
    """NP / FTP, or None when either value is missing or non-positive."""
    if not normalized_power or not ftp_watts or normalized_power <= 0 or ftp_watts <= 0:
        return None
    return normalized_power / ftp_watts


def power_stress_score(duration_hours: float, normalized_power: float, ftp_watts: float) -> float:
    """Power-based TSS: ``(s x NP x IF) / (FTP x 3600) x 100`` = hours x IF^2 x 100."""
    factor = normalized_power / ftp_watts
    return duration_hours * factor * factor * 100.0


def effort_multiplier(mean_hr: float | None) -> float:
    """Effort multiplier from mean heart rate; 0.7 when no HR was recorded.

    Fixed bands: >170 bpm 1.2, >150 bpm 1.0, >130 bpm 0.8, else 0.6.
    """
    if not mean_hr:
        return EFFORT_MULTIPLIER_NO_HR
    for lower_bound, multiplier in EFFORT_HR_BANDS:
        if mean_hr > lower_bound:
            return multiplier
    return EFFORT_MULTIPLIER_EASY


def estimated_stress_score(duration_hours: float, mean_hr: float | None) -> float:
    """Fallback estimate: hours x 100 x effort multiplier."""
    return duration_hours * 100.0 * effort_multiplier(mean_hr)


def calculate_stress_score(
    duration_hours: float,
    normalized_power: float | None = None,
    ftp_watts: float | None = None,
    provider_score: float | None = None,
    mean_hr: float | None = None,
) -> tuple[float, StressSource]:
    """Pick the best available stress score path.

    Args:
        duration_hours: Session duration in hours.
        normalized_power: Weighted average / normalized power in watts.
        ftp_watts: Functional threshold power in watts.
        provider_score: Score computed by the telemetry provider.
        mean_hr: Mean heart rate in bpm.

    Returns:
        (score rounded to 0.1, path used).
    """
    if intensity_factor(normalized_power, ftp_watts) is not None:
        score = power_stress_score(duration_hours, normalized_power, ftp_watts)  # type: ignore[arg-type]
        return round(score, 1), StressSource.POWER

    if provider_score is not None and provider_score > 0:
        return round(float(provider_score), 1), StressSource.PROVIDER

    return round(estimated_stress_score(duration_hours, mean_hr), 1), StressSource.ESTIMATED
