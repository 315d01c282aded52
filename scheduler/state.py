"""In-process athlete state shared between refresh runs.

Refreshes may overlap (a manual refresh while the scheduled one is still
fetching). The store keeps whichever result was *requested* last, not the
one that happened to finish last, and lets only one plan regeneration run
at a time.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, TypeVar

from season_engine.models.activity import CanonicalActivity
from season_engine.models.athlete import FitnessState
from season_engine.models.load import WeeklyLoad
from season_engine.models.plan import SeasonPlan, TodaysWorkout

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RefreshResult:
    """Everything one refresh produced, stamped with its request time."""

    requested_at: datetime
    activities: tuple[CanonicalActivity, ...] = field(default_factory=tuple)
    weekly_load: WeeklyLoad | None = None
    fitness: FitnessState | None = None
    plan: SeasonPlan | None = None
    todays_workout: TodaysWorkout | None = None
    errors: dict[str, str] = field(default_factory=dict)


class AthleteStateStore:
    """Latest accepted RefreshResult for one athlete."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._plan_lock = threading.Lock()
        self._latest: RefreshResult | None = None

    @property
    def latest(self) -> RefreshResult | None:
        with self._lock:
            return self._latest

    def offer(self, result: RefreshResult) -> bool:
        """Store *result* unless a later-requested one is already stored.

        Returns True when the result was accepted.
        """
        with self._lock:
            current = self._latest
            if current is not None and result.requested_at <= current.requested_at:
                logger.info(
                    "Discarding stale refresh requested at %s (have %s)",
                    result.requested_at.isoformat(),
                    current.requested_at.isoformat(),
                )
                return False
            self._latest = result
            return True

    def regenerate(self, build: Callable[[], T]) -> T:
        """Run a plan regeneration; concurrent callers wait their turn."""
        with self._plan_lock:
            return build()

    def clear(self) -> None:
        with self._lock:
            self._latest = None
