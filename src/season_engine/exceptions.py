"""Errors raised by the season engine.

Only invalid configuration (a bad event) and the two plan-aborting
conditions raise. Bad activity records and unavailable upstream data are
degraded around, never raised.
"""

from __future__ import annotations


class SeasonEngineError(Exception):
    """Base exception for all season_engine errors."""


class InvalidEventError(SeasonEngineError, ValueError):
    """An event failed validation at creation or edit (past date, bad priority)."""


class PlanGenerationError(SeasonEngineError, ValueError):
    """Plan generation cannot proceed (no events, or a race date in the past)."""
