"""Rounding helpers shared by the nutrition and energy math."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's built-in ``round`` uses banker's rounding (22.5 -> 22); gram
    and millilitre targets round 22.5 up to 23.
    """
    return int(math.floor(value + 0.5))
