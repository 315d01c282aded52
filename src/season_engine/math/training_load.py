"""Weekly training load: coarse load phase, daily stress series, monotony.

References:
    - Foster (1998): Monotony and strain
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

import numpy as np
import pandas as pd

from season_engine.models.enums import (
    LOAD_PHASE_BASE_MIN,
    LOAD_PHASE_BUILD_MIN,
    LOAD_PHASE_PEAK_ABOVE,
    LOAD_WINDOW_DAYS,
    LoadPhase,
)


def classify_load_phase(weekly_stress: float) -> LoadPhase:
    """Map a week's total stress score onto a coarse LoadPhase.

    0 is rest, below 300 recovery, 300-449 base, 450-600 build and
    above 600 peak. The boundaries are empirical.
    """
    if weekly_stress <= 0:
        return LoadPhase.REST
    if weekly_stress > LOAD_PHASE_PEAK_ABOVE:
        return LoadPhase.PEAK
    if weekly_stress >= LOAD_PHASE_BUILD_MIN:
        return LoadPhase.BUILD
    if weekly_stress >= LOAD_PHASE_BASE_MIN:
        return LoadPhase.BASE
    return LoadPhase.RECOVERY


def window_start(as_of: date, days: int = LOAD_WINDOW_DAYS) -> date:
    """First day of the *days*-long window ending at *as_of* inclusive."""
    return as_of - timedelta(days=days - 1)


def daily_stress_series(
    entries: Iterable[tuple[date, float]],
    as_of: date,
    days: int = LOAD_WINDOW_DAYS,
) -> tuple[float, ...]:
    """Sum stress per calendar day over the window ending at *as_of*.

    Args:
        entries: (day, stress score) pairs; days outside the window are ignored.
        as_of: Last day of the window.
        days: Window length.

    Returns:
        One value per day, oldest first, zero-filled for days without
        activities.
    """
    index = pd.date_range(end=pd.Timestamp(as_of), periods=days, freq="D")
    frame = pd.DataFrame(list(entries), columns=["day", "stress"])
    if frame.empty:
        return tuple(0.0 for _ in range(days))

    frame["day"] = pd.to_datetime(frame["day"])
    per_day = frame.groupby("day")["stress"].sum()
    per_day = per_day.reindex(index, fill_value=0.0)
    return tuple(round(float(v), 1) for v in per_day.to_numpy(dtype=np.float64))


def calculate_monotony(daily_loads: list[float] | tuple[float, ...]) -> float:
    """Calculate training monotony over the most recent 7 days.

    Monotony = mean(daily_load) / std(daily_load)
    High monotony (>2.0) indicates insufficient variation.

    Returns:
        Monotony value. Returns 0.0 if insufficient data or no variation.

    Reference:
        Foster (1998). Monitoring training in athletes with reference to
        overtraining syndrome. Med Sci Sports Exerc 30(7):1164-1168.
    """
    if len(daily_loads) < 7:
        return 0.0
    recent = np.array(daily_loads[-7:], dtype=np.float64)
    std = float(np.std(recent, ddof=0))
    if std < 1e-6:
        return 0.0
    return round(float(np.mean(recent)) / std, 2)
