"""Per-activity derived metrics. Computed on demand, never stored or mutated."""

from __future__ import annotations

from dataclasses import dataclass

from season_engine.models.enums import (
    Discipline,
    IntensityClass,
    IntensitySource,
    StressSource,
)


@dataclass(frozen=True)
class HydrationNeeds:
    """Fluid requirement for one session, as volume and hourly rate."""

    total_ml: int
    per_hour_ml: int
    total_oz: int
    per_hour_oz: int

    @property
    def guideline(self) -> str:
        return f"{self.total_oz}oz total ({self.per_hour_oz}oz/hour)"


@dataclass(frozen=True)
class ActivityMetrics:
    """Normalized metrics for one CanonicalActivity.

    Produced by ``season_engine.metrics.derive_metrics``. Identical inputs
    always yield an identical record.
    """

    activity_id: str
    discipline: Discipline
    duration_hours: float
    distance_km: float
    stress_score: float
    stress_source: StressSource
    intensity: IntensityClass
    intensity_source: IntensitySource
    energy_kcal: int
    carbs_during_g: int
    recovery_carbs_g: int
    recovery_protein_g: int
    hydration: HydrationNeeds
    intensity_factor: float | None = None
    normalized_power: float | None = None

    @property
    def data_quality(self) -> str:
        """"high" when measured (power or precision provider), else "medium"."""
        if self.stress_source == StressSource.ESTIMATED:
            return "medium"
        return "high"

    @property
    def is_measured(self) -> bool:
        return self.stress_source != StressSource.ESTIMATED
