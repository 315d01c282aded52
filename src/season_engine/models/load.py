"""Weekly training load roll-up."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping
from datetime import date

from season_engine.models.enums import Discipline, LoadPhase


@dataclass(frozen=True)
class WeeklyLoad:
    """Totals over the seven days ending at ``as_of``.

    ``daily_stress`` holds one value per day, oldest first.
    """

    as_of: date
    stress_score: float = 0.0
    duration_hours: float = 0.0
    energy_kcal: int = 0
    phase: LoadPhase = LoadPhase.REST
    activity_count: int = 0
    measured_count: int = 0
    estimated_count: int = 0
    daily_stress: tuple[float, ...] = field(default_factory=tuple)
    monotony: float = 0.0
    per_discipline: Mapping[Discipline, float] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def percent_measured(self) -> int:
        if self.activity_count == 0:
            return 0
        return round(100 * self.measured_count / self.activity_count)
