"""Static metric registry: valid ranges, baselines and units.

This table is the single source of truth for ranges. The level resolver,
the impact calculator and the optimal-metrics provider all read it instead
of hardcoding bounds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType

from amped.domains.longevity.domain_logic.metric_models import (
    MetricKind,
    MetricReading,
    ReadingSource,
    ScaleKind,
)


@dataclass(frozen=True)
class MetricSpec:
    """Catalog entry for one metric kind."""

    kind: MetricKind
    display_name: str
    scale_kind: ScaleKind
    valid_range: tuple[float, float]
    baseline_value: float          # value assumed when nothing is known
    optimal_value: float           # healthiest value in range
    unit: str


_SPECS = (
    MetricSpec(MetricKind.STRESS, "Stress", ScaleKind.WELLNESS, (1.0, 10.0), 5.0, 10.0, "score"),
    MetricSpec(MetricKind.ANXIETY, "Anxiety", ScaleKind.WELLNESS, (1.0, 10.0), 5.0, 10.0, "score"),
    MetricSpec(MetricKind.NUTRITION, "Nutrition", ScaleKind.WELLNESS, (1.0, 10.0), 5.0, 10.0, "score"),
    MetricSpec(MetricKind.SMOKING, "Smoking", ScaleKind.WELLNESS, (1.0, 10.0), 10.0, 10.0, "score"),
    MetricSpec(MetricKind.ALCOHOL, "Alcohol", ScaleKind.WELLNESS, (1.0, 10.0), 5.0, 10.0, "score"),
    MetricSpec(
        MetricKind.SOCIAL_CONNECTION, "Social Connections", ScaleKind.WELLNESS,
        (1.0, 10.0), 5.0, 10.0, "score",
    ),
    MetricSpec(
        MetricKind.BLOOD_PRESSURE, "Blood Pressure", ScaleKind.SYSTOLIC_MMHG,
        (90.0, 180.0), 130.0, 115.0, "mmHg",
    ),
    MetricSpec(MetricKind.SLEEP, "Sleep", ScaleKind.HOURS, (3.0, 12.0), 7.0, 7.5, "hours"),
    MetricSpec(MetricKind.ACTIVITY, "Steps", ScaleKind.STEPS, (0.0, 15000.0), 7500.0, 15000.0, "steps"),
    MetricSpec(
        MetricKind.RESTING_HEART_RATE, "Resting Heart Rate", ScaleKind.BPM,
        (45.0, 120.0), 70.0, 45.0, "bpm",
    ),
    # 150 min/week of moderate exercise is the reference point.
    MetricSpec(
        MetricKind.EXERCISE_MINUTES, "Exercise", ScaleKind.MINUTES,
        (0.0, 120.0), 21.4, 85.7, "min",
    ),
    MetricSpec(
        MetricKind.HEART_RATE_VARIABILITY, "Heart Rate Variability", ScaleKind.MILLISECONDS,
        (5.0, 150.0), 40.0, 110.0, "ms",
    ),
    MetricSpec(
        MetricKind.VO2_MAX, "VO2 Max", ScaleKind.ML_PER_KG_MIN,
        (15.0, 80.0), 40.0, 60.0, "mL/kg/min",
    ),
    MetricSpec(
        MetricKind.BODY_MASS, "Body Mass", ScaleKind.KILOGRAMS,
        (36.3, 181.4), 72.6, 72.6, "kg",
    ),
    MetricSpec(
        MetricKind.ACTIVE_ENERGY, "Active Energy", ScaleKind.KILOCALORIES,
        (0.0, 1300.0), 400.0, 1300.0, "kcal",
    ),
    MetricSpec(
        MetricKind.OXYGEN_SATURATION, "Oxygen Saturation", ScaleKind.PERCENT,
        (80.0, 100.0), 98.0, 100.0, "%",
    ),
)

CATALOG: MappingProxyType[MetricKind, MetricSpec] = MappingProxyType(
    {spec.kind: spec for spec in _SPECS}
)

WELLNESS_KINDS = tuple(
    spec.kind for spec in _SPECS if spec.scale_kind is ScaleKind.WELLNESS
)


def spec_of(kind: MetricKind) -> MetricSpec:
    return CATALOG[kind]


def range_of(kind: MetricKind) -> tuple[float, float]:
    """Return ``(min, max)`` in the metric's native unit."""
    return CATALOG[kind].valid_range


def baseline_of(kind: MetricKind) -> float:
    return CATALOG[kind].baseline_value


def optimal_of(kind: MetricKind) -> float:
    return CATALOG[kind].optimal_value


def clamp_value(kind: MetricKind, value: float) -> float:
    """Clamp a raw value into the kind's valid range (never raises).

    NaN carries no information and maps to the kind's baseline.
    """
    spec = CATALOG[kind]
    value = float(value)
    if math.isnan(value):
        return spec.baseline_value
    lo, hi = spec.valid_range
    return max(lo, min(hi, value))


def make_reading(
    kind: MetricKind,
    value: float,
    timestamp: datetime,
    source: ReadingSource = ReadingSource.USER_INPUT,
) -> MetricReading:
    """Build a reading with its value clamped into range and its timestamp in UTC."""
    return MetricReading(
        kind=kind,
        value=clamp_value(kind, value),
        timestamp=timestamp,
        source=source,
    )
