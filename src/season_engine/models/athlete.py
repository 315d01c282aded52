"""Athlete-level inputs to metric derivation and planning."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from season_engine.models.enums import DEFAULT_AMBIENT_TEMP_C


@dataclass(frozen=True)
class AthleteProfile:
    """Static thresholds used when an activity does not carry its own.

    All fields are optional; missing values push metric derivation down to
    its next estimation path rather than failing.
    """

    ftp_watts: float | None = None
    max_hr: int | None = None
    default_temp_c: float = DEFAULT_AMBIENT_TEMP_C


@dataclass(frozen=True)
class FitnessState:
    """Chronic load (CTL), acute load (ATL) and stress balance (TSB) on a date.

    Supplied by the precision provider's wellness endpoint. Consumers must
    treat an absent FitnessState (``None``) as neutral.
    """

    as_of: date
    chronic_load: float
    acute_load: float
    stress_balance: float

    @classmethod
    def from_loads(cls, as_of: date, chronic_load: float, acute_load: float) -> FitnessState:
        """Build a state deriving the stress balance as CTL - ATL."""
        return cls(
            as_of=as_of,
            chronic_load=chronic_load,
            acute_load=acute_load,
            stress_balance=chronic_load - acute_load,
        )
