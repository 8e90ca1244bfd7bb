"""Value objects for the lifespan-impact engine.

Every type here is immutable: calculations build fresh instances and never
mutate an existing one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from types import MappingProxyType
from typing import Literal, Mapping


class MetricKind(str, Enum):
    """Closed set of metrics the engine can score."""

    STRESS = "stress"
    ANXIETY = "anxiety"
    NUTRITION = "nutrition"
    SMOKING = "smoking"
    ALCOHOL = "alcohol"
    SOCIAL_CONNECTION = "social_connection"
    BLOOD_PRESSURE = "blood_pressure"
    SLEEP = "sleep"
    ACTIVITY = "activity"
    RESTING_HEART_RATE = "resting_heart_rate"
    EXERCISE_MINUTES = "exercise_minutes"
    HEART_RATE_VARIABILITY = "heart_rate_variability"
    VO2_MAX = "vo2_max"
    BODY_MASS = "body_mass"
    ACTIVE_ENERGY = "active_energy"
    OXYGEN_SATURATION = "oxygen_saturation"


class ScaleKind(str, Enum):
    """Native unit family of a metric."""

    WELLNESS = "wellness"            # 1-10, higher is always better
    SYSTOLIC_MMHG = "systolic_mmhg"
    HOURS = "hours"
    STEPS = "steps"
    BPM = "bpm"
    MINUTES = "minutes"
    MILLISECONDS = "milliseconds"
    ML_PER_KG_MIN = "ml_per_kg_min"
    KILOGRAMS = "kilograms"
    KILOCALORIES = "kilocalories"
    PERCENT = "percent"


class Level(str, Enum):
    """Coarse risk bucket: ``low`` is always the healthiest."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class ReadingSource(str, Enum):
    USER_INPUT = "user_input"
    DEVICE = "device"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


Comparison = Literal["better", "same", "worse"]


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken as UTC so every moment is comparable."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


# ---------------------------------------------------------------------------
# Readings and impacts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MetricReading:
    """One numeric observation of a metric, in the metric's native unit.

    ``metric_catalog.make_reading`` is the constructor to use: it clamps the
    value into the catalog range. Readings built directly may hold an
    out-of-range value; the impact calculator clamps again before scoring,
    so such a reading is never scored outside its range.
    """

    kind: MetricKind
    value: float
    timestamp: datetime
    source: ReadingSource = ReadingSource.USER_INPUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", as_utc(self.timestamp))


@dataclass(frozen=True)
class StudyReference:
    """Citation shown next to an impact figure."""

    title: str
    authors: str
    journal: str
    year: int
    doi: str

    @property
    def citation_tag(self) -> str:
        first_author = self.authors.split(",")[0].split(" ")[0]
        return f"{first_author} et al., {self.journal} ({self.year})"


@dataclass(frozen=True)
class ImpactResult:
    """Lifespan impact of a single reading.

    Positive ``minutes_per_day`` is a gain, negative a loss.
    """

    kind: MetricKind
    value: float
    minutes_per_day: float
    confidence_label: str
    recommendation_text: str
    scientific_basis_text: str
    comparison: Comparison = "same"
    study: StudyReference | None = None


# ---------------------------------------------------------------------------
# Periods and aggregates
# ---------------------------------------------------------------------------

PeriodType = Literal["day", "month", "year"]

PERIOD_DAYS: dict[str, int] = {"day": 1, "month": 30, "year": 365}


@dataclass(frozen=True)
class ImpactPeriod:
    """Time window readings are drawn from, ending at ``end`` (inclusive)."""

    period_type: PeriodType
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "end", as_utc(self.end))

    @property
    def start(self) -> datetime:
        return self.end - timedelta(days=PERIOD_DAYS[self.period_type])

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class AggregateImpact:
    """Additive roll-up of per-metric impacts.

    ``total_minutes_per_day`` is always the plain sum of the breakdown.
    """

    total_minutes_per_day: float
    breakdown: Mapping[MetricKind, ImpactResult] = field(
        default_factory=lambda: MappingProxyType({})
    )
    period: ImpactPeriod | None = None

    def scaled_total(self) -> float:
        """Total scaled to the period length (day x1, month x30, year x365)."""
        if self.period is None:
            return self.total_minutes_per_day
        return self.total_minutes_per_day * PERIOD_DAYS[self.period.period_type]

    @property
    def kinds(self) -> list[MetricKind]:
        return list(self.breakdown)


# ---------------------------------------------------------------------------
# Profile and projection
# ---------------------------------------------------------------------------

DEFAULT_AGE = 30


@dataclass(frozen=True)
class UserProfile:
    """Externally supplied demographics. Never mutated by the engine."""

    birth_year: int | None = None
    gender: Gender | None = None
    height_cm: float | None = None
    weight_kg: float | None = None

    def age(self, as_of_year: int) -> int:
        """Age in whole years; defaults to 30 when the birth year is unknown."""
        if self.birth_year is None:
            return DEFAULT_AGE
        return max(0, as_of_year - self.birth_year)


@dataclass(frozen=True)
class LifeProjection:
    """Remaining-years projection driving the battery visual."""

    current_age: float
    baseline_years_remaining: float
    adjusted_years_remaining: float
    projection_percentage: float

    @property
    def net_impact_years(self) -> float:
        return self.adjusted_years_remaining - self.baseline_years_remaining

    @property
    def projected_lifespan_years(self) -> float:
        return self.current_age + self.adjusted_years_remaining

    @property
    def interpretation(self) -> str:
        net = self.net_impact_years
        if net > 5.0:
            return "Significantly extending life expectancy"
        if net > 2.0:
            return "Moderately extending life expectancy"
        if net > 0.5:
            return "Slightly extending life expectancy"
        if net > -0.5:
            return "Maintaining baseline life expectancy"
        if net > -2.0:
            return "Slightly reducing life expectancy"
        if net > -5.0:
            return "Moderately reducing life expectancy"
        return "Significantly reducing life expectancy"
