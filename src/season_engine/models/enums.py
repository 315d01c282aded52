"""Enumerations and tunable constants for the season engine.

Thresholds marked as empirical (fatigue gates, weekly load phase boundaries)
are coaching heuristics, not physiologically derived values. They are kept
here so they can be tuned in one place.
"""

from enum import Enum, IntEnum, auto


class ActivitySource(Enum):
    """Telemetry provider that produced a raw activity."""

    SOURCE_A = "strava"          # social-oriented provider
    SOURCE_B = "intervals.icu"   # precision provider (power, real TSS)


class Provenance(Enum):
    """Which sources a canonical activity was reconciled from."""

    SOURCE_A_ONLY = "single-source-A"
    SOURCE_B_ONLY = "single-source-B"
    MERGED = "merged"


class Discipline(Enum):
    """Sport discipline of an activity or prescribed workout."""

    SWIM = "swim"
    BIKE = "bike"
    RUN = "run"
    STRENGTH = "strength"
    BRICK = "brick"
    OTHER = "other"


class IntensityClass(Enum):
    """Discretized effort bucket derived from HR, power or pace."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


class StressSource(Enum):
    """Which estimation path produced an activity's stress score."""

    POWER = "power"
    PROVIDER = "provider"
    ESTIMATED = "estimated"


class IntensitySource(Enum):
    """Which classification path produced an activity's intensity class."""

    HEART_RATE = "heart_rate"
    POWER = "power"
    PACE = "pace"
    WORKOUT_TYPE = "workout_type"
    DEFAULT = "default"


class LoadPhase(Enum):
    """Coarse phase from a single week's stress score (display/nutrition)."""

    REST = "rest"
    RECOVERY = "recovery"
    BASE = "base"
    BUILD = "build"
    PEAK = "peak"


class PhaseName(IntEnum):
    """Multi-week periodization phases in ladder order."""

    BASE_1 = auto()
    BASE_2 = auto()
    BUILD_1 = auto()
    BUILD_2 = auto()
    PEAK = auto()
    TAPER = auto()


class WorkoutIntensity(IntEnum):
    """Intensity of a prescribed workout slot, ordered easiest first."""

    REST = 0
    EASY = 1
    MODERATE = 2
    HARD = 3


class EventPriority(IntEnum):
    """Event priority classification for multi-event seasons.

    A = goal race (full taper), B = important tune-up (mini-taper),
    C = training race (no taper).
    """

    A = 1
    B = 2
    C = 3


# Provider activity type → discipline. Lookups are case-insensitive.
ACTIVITY_TYPE_DISCIPLINES: dict[str, Discipline] = {
    "ride": Discipline.BIKE,
    "virtualride": Discipline.BIKE,
    "gravelride": Discipline.BIKE,
    "mountainbikeride": Discipline.BIKE,
    "ebikeride": Discipline.BIKE,
    "run": Discipline.RUN,
    "trailrun": Discipline.RUN,
    "virtualrun": Discipline.RUN,
    "swim": Discipline.SWIM,
    "openwaterswim": Discipline.SWIM,
    "weighttraining": Discipline.STRENGTH,
    "strength": Discipline.STRENGTH,
}

# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------
MATCH_BUCKET_MINUTES = 5

# ---------------------------------------------------------------------------
# Stress score estimation
# ---------------------------------------------------------------------------
# (mean HR lower bound exclusive, effort multiplier), checked top-down
EFFORT_HR_BANDS: tuple[tuple[float, float], ...] = (
    (170.0, 1.2),
    (150.0, 1.0),
    (130.0, 0.8),
)
EFFORT_MULTIPLIER_EASY = 0.6
EFFORT_MULTIPLIER_NO_HR = 0.7

# ---------------------------------------------------------------------------
# Intensity classification
# ---------------------------------------------------------------------------
# mean HR / max HR lower bounds (inclusive)
HR_RATIO_VERY_HIGH = 0.90
HR_RATIO_HIGH = 0.80
HR_RATIO_MODERATE = 0.70

# Intensity factor (NP / FTP) lower bounds (inclusive)
IF_VERY_HIGH = 1.05
IF_HIGH = 0.95
IF_MODERATE = 0.85

# Run pace upper bounds in min/km (exclusive), fastest first
RUN_PACE_BANDS: tuple[tuple[float, IntensityClass], ...] = (
    (4.5, IntensityClass.VERY_HIGH),
    (5.0, IntensityClass.HIGH),
    (6.0, IntensityClass.MODERATE),
)
# Bike speed lower bounds in km/h (exclusive), fastest first
BIKE_SPEED_BANDS: tuple[tuple[float, IntensityClass], ...] = (
    (35.0, IntensityClass.VERY_HIGH),
    (30.0, IntensityClass.HIGH),
    (25.0, IntensityClass.MODERATE),
)
# Swim speed lower bounds in m/s (exclusive)
SWIM_SPEED_BANDS: tuple[tuple[float, IntensityClass], ...] = (
    (1.4, IntensityClass.HIGH),
    (1.2, IntensityClass.MODERATE),
)

# Provider workout-type flag: 1 = race, 2 = long, 3 = intervals
WORKOUT_TYPE_INTENSITY: dict[int, IntensityClass] = {
    1: IntensityClass.VERY_HIGH,
    2: IntensityClass.MODERATE,
    3: IntensityClass.HIGH,
}

# ---------------------------------------------------------------------------
# Fueling: Jeukendrup (2011), 30-90 g/h carbohydrate guidance
# ---------------------------------------------------------------------------
CARB_THRESHOLD_MINUTES = 45
CARB_RATE_G_PER_HOUR: dict[IntensityClass, float] = {
    IntensityClass.LOW: 0.0,
    IntensityClass.MODERATE: 30.0,
    IntensityClass.HIGH: 60.0,
    IntensityClass.VERY_HIGH: 90.0,
}
RECOVERY_CARBS_PER_STRESS_BIKE = 0.7
RECOVERY_CARBS_PER_STRESS_OTHER = 0.5
PROTEIN_G_PER_HOUR_STRENGTH = 15.0
PROTEIN_G_PER_HOUR_OTHER = 10.0
PROTEIN_CAP_G = 40.0

HYDRATION_BASE_ML_PER_HOUR = 500.0
DEFAULT_AMBIENT_TEMP_C = 20.0
ML_TO_OZ = 0.033814
# (temperature bound, multiplier): hot/warm bounds are exclusive lower bounds
HYDRATION_HOT_TEMP_C = 25.0
HYDRATION_HOT_MULTIPLIER = 1.3
HYDRATION_WARM_TEMP_C = 20.0
HYDRATION_WARM_MULTIPLIER = 1.15
HYDRATION_COLD_TEMP_C = 10.0
HYDRATION_COLD_MULTIPLIER = 0.9

# ---------------------------------------------------------------------------
# Energy expenditure fallback (kcal per hour at moderate effort)
# ---------------------------------------------------------------------------
KCAL_PER_HOUR: dict[Discipline, float] = {
    Discipline.RUN: 600.0,
    Discipline.BIKE: 500.0,
    Discipline.SWIM: 550.0,
    Discipline.STRENGTH: 350.0,
    Discipline.BRICK: 550.0,
    Discipline.OTHER: 400.0,
}
ENERGY_INTENSITY_MULTIPLIER: dict[IntensityClass, float] = {
    IntensityClass.VERY_HIGH: 1.3,
    IntensityClass.HIGH: 1.15,
    IntensityClass.MODERATE: 1.0,
    IntensityClass.LOW: 0.85,
}

# ---------------------------------------------------------------------------
# Weekly load phase boundaries (empirical, TSS per week)
# ---------------------------------------------------------------------------
LOAD_PHASE_BASE_MIN = 300.0   # >= 300 is base, below is recovery
LOAD_PHASE_BUILD_MIN = 450.0  # >= 450 is build
LOAD_PHASE_PEAK_ABOVE = 600.0  # > 600 is peak
LOAD_WINDOW_DAYS = 7

# ---------------------------------------------------------------------------
# Fitness adjustment of weekly targets
# ---------------------------------------------------------------------------
CTL_REFERENCE = 50.0
CTL_MULTIPLIER_MIN = 0.8
CTL_MULTIPLIER_MAX = 1.3
TSB_FATIGUED_BELOW = -20.0
TSB_FATIGUED_MODIFIER = 0.8
TSB_FRESH_ABOVE = 10.0
TSB_FRESH_MODIFIER = 1.1

# ---------------------------------------------------------------------------
# Fatigue adapter gates (empirical)
# ---------------------------------------------------------------------------
FATIGUE_SEVERE_TSB = -30.0
FATIGUE_SEVERE_DURATION_MOD = 0.7
FATIGUE_SEVERE_STRESS_MOD = 0.6
FATIGUE_MODERATE_TSB = -15.0
FATIGUE_MODERATE_STRESS_MOD = 0.85
FRESH_TSB = 15.0

# ---------------------------------------------------------------------------
# Season orchestration
# ---------------------------------------------------------------------------
RACE_WEEK_STRESS_FRACTION = 0.70
B_EVENT_MINI_TAPER_TARGET = 200.0
BRICK_WEEKS_TO_RACE = 3
