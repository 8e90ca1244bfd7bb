"""Categorical answers -> calibrated numeric values.

Two steps, both pure:

* ``parse_level`` classifies a free-text onboarding label into a ``Level``
  using an ordered rule table per metric kind. The first matching rule wins,
  so rule order is part of the behaviour and is pinned by tests.
* ``resolve_value`` maps ``(kind, level)`` to a value on the metric's native
  scale. It is total over the catalog.

An unmatched label yields ``None``. Callers treat that as absent data, never
as a default level.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Callable

from amped.domains.longevity.domain_logic.metric_catalog import baseline_of, make_reading
from amped.domains.longevity.domain_logic.metric_models import (
    Level,
    MetricKind,
    MetricReading,
    ReadingSource,
)

logger = logging.getLogger(__name__)

SYSTOLIC_NORMAL_LIMIT = 120.0


# ---------------------------------------------------------------------------
# Level -> value table
# ---------------------------------------------------------------------------

LEVEL_VALUES: MappingProxyType[MetricKind, MappingProxyType[Level, float]] = MappingProxyType({
    MetricKind.STRESS: MappingProxyType({Level.LOW: 10.0, Level.MODERATE: 6.0, Level.HIGH: 2.0}),
    MetricKind.ANXIETY: MappingProxyType({Level.LOW: 10.0, Level.MODERATE: 6.0, Level.HIGH: 2.0}),
    MetricKind.NUTRITION: MappingProxyType({Level.LOW: 10.0, Level.MODERATE: 7.0, Level.HIGH: 1.0}),
    # 10 = never, 6 = former, 1 = daily
    MetricKind.SMOKING: MappingProxyType({Level.LOW: 10.0, Level.MODERATE: 6.0, Level.HIGH: 1.0}),
    # 10 = never, 7 = occasionally, 1.5 = daily or heavy
    MetricKind.ALCOHOL: MappingProxyType({Level.LOW: 10.0, Level.MODERATE: 7.0, Level.HIGH: 1.5}),
    MetricKind.SOCIAL_CONNECTION: MappingProxyType(
        {Level.LOW: 10.0, Level.MODERATE: 6.0, Level.HIGH: 1.0}
    ),
    # "high" on the blood pressure screen means "I don't know": use the baseline.
    MetricKind.BLOOD_PRESSURE: MappingProxyType({
        Level.LOW: 115.0,
        Level.MODERATE: 125.0,
        Level.HIGH: baseline_of(MetricKind.BLOOD_PRESSURE),
    }),
    MetricKind.SLEEP: MappingProxyType({Level.LOW: 7.5, Level.MODERATE: 6.5, Level.HIGH: 5.0}),
    MetricKind.ACTIVITY: MappingProxyType(
        {Level.LOW: 10000.0, Level.MODERATE: 6000.0, Level.HIGH: 2500.0}
    ),
    MetricKind.RESTING_HEART_RATE: MappingProxyType(
        {Level.LOW: 58.0, Level.MODERATE: 70.0, Level.HIGH: 85.0}
    ),
    # minutes per day: 300+, about 150 and under 75 minutes per week
    MetricKind.EXERCISE_MINUTES: MappingProxyType(
        {Level.LOW: 45.0, Level.MODERATE: 21.4, Level.HIGH: 5.0}
    ),
    MetricKind.HEART_RATE_VARIABILITY: MappingProxyType(
        {Level.LOW: 60.0, Level.MODERATE: 40.0, Level.HIGH: 20.0}
    ),
    MetricKind.VO2_MAX: MappingProxyType({Level.LOW: 50.0, Level.MODERATE: 40.0, Level.HIGH: 28.0}),
    # healthy weight, overweight, obese (kg at average adult height)
    MetricKind.BODY_MASS: MappingProxyType({Level.LOW: 72.6, Level.MODERATE: 90.0, Level.HIGH: 110.0}),
    MetricKind.ACTIVE_ENERGY: MappingProxyType(
        {Level.LOW: 600.0, Level.MODERATE: 400.0, Level.HIGH: 150.0}
    ),
    MetricKind.OXYGEN_SATURATION: MappingProxyType(
        {Level.LOW: 98.0, Level.MODERATE: 95.0, Level.HIGH: 90.0}
    ),
})


def resolve_value(kind: MetricKind, level: Level) -> float:
    """Numeric value for a level on the kind's native scale."""
    return LEVEL_VALUES[kind][level]


# ---------------------------------------------------------------------------
# Label -> level rules
# ---------------------------------------------------------------------------

Predicate = Callable[[str], bool]


@dataclass(frozen=True)
class LevelRule:
    """One ``(predicate, level)`` entry of an ordered rule table."""

    description: str
    predicate: Predicate
    level: Level

    def matches(self, label: str) -> bool:
        return self.predicate(label)


def _contains(*needles: str) -> Predicate:
    return lambda s: any(n in s for n in needles)


def _equals(*words: str) -> Predicate:
    return lambda s: s in words


def _either(*predicates: Predicate) -> Predicate:
    return lambda s: any(p(s) for p in predicates)


# A systolic reading such as "119", "121/80", "120-129/80" or "118 mmhg".
# "80+" is a diastolic band and must fall through to the keyword rules.
_LEADING_NUMBER = re.compile(r"^(\d{2,3}(?:\.\d+)?)(?=\s*(?:/|-|mmhg\b|$))")


def _leading_number(label: str) -> float | None:
    match = _LEADING_NUMBER.match(label)
    return float(match.group(1)) if match else None


def _systolic_below(limit: float) -> Predicate:
    def _check(s: str) -> bool:
        value = _leading_number(s)
        return value is not None and value < limit
    return _check


def _systolic_at_least(limit: float) -> Predicate:
    def _check(s: str) -> bool:
        value = _leading_number(s)
        return value is not None and value >= limit
    return _check


def _rule(description: str, predicate: Predicate, level: Level) -> LevelRule:
    return LevelRule(description=description, predicate=predicate, level=level)


LEVEL_RULES: MappingProxyType[MetricKind, tuple[LevelRule, ...]] = MappingProxyType({
    # "Low", "Moderate", "High"
    MetricKind.STRESS: (
        _rule("very low / low", _either(_contains("very low"), _equals("low")), Level.LOW),
        _rule("moderate", _contains("moderate"), Level.MODERATE),
        _rule("very high / high", _either(_contains("very high"), _equals("high")), Level.HIGH),
    ),
    # "Mild", "Moderate", "Severe" ("mild to moderate" must not read as mild)
    MetricKind.ANXIETY: (
        _rule("minimal / mild / low", _either(_contains("minimal"), _equals("mild", "low")), Level.LOW),
        _rule(
            "moderate / mild to moderate",
            _either(_equals("moderate"), _contains("mild to moderate")),
            Level.MODERATE,
        ),
        _rule("severe / high", _either(_contains("severe"), _equals("high")), Level.HIGH),
    ),
    # "Very Healthy", "Mostly healthy", "Mixed", "Very unhealthy"
    MetricKind.NUTRITION: (
        _rule("very healthy", _contains("very healthy"), Level.LOW),
        _rule("mixed / mostly", _contains("mixed", "mostly"), Level.MODERATE),
        _rule("unhealthy", _contains("unhealthy"), Level.HIGH),
    ),
    # "Never", "Former smoker", "Occasionally", "Daily"
    MetricKind.SMOKING: (
        _rule("never", _contains("never"), Level.LOW),
        _rule("former", _contains("former"), Level.MODERATE),
        _rule("daily / current / occasional", _contains("daily", "current", "occasion"), Level.HIGH),
    ),
    # "Never", "Occasionally", "Several times a week", "Daily or Heavy"
    MetricKind.ALCOHOL: (
        _rule("never", _contains("never"), Level.LOW),
        _rule("occasionally / weekly", _contains("occasion", "weekly", "several"), Level.MODERATE),
        _rule("daily / heavy", _contains("daily", "heavy"), Level.HIGH),
    ),
    # "Very Strong", "Moderate to good", "Limited", "Isolated"
    MetricKind.SOCIAL_CONNECTION: (
        _rule("very strong", _contains("very strong"), Level.LOW),
        _rule("moderate / good", _contains("moderate", "good"), Level.MODERATE),
        _rule("isolated / limited", _contains("isolated", "limited"), Level.HIGH),
    ),
    # "Below 120/80", "120-129/80", "130/80+", "I don't know"
    MetricKind.BLOOD_PRESSURE: (
        _rule("below 120 / normal", _contains("below 120", "normal"), Level.LOW),
        _rule("systolic < 120", _systolic_below(SYSTOLIC_NORMAL_LIMIT), Level.LOW),
        _rule("systolic >= 120", _systolic_at_least(SYSTOLIC_NORMAL_LIMIT), Level.MODERATE),
        _rule(
            "130 / 80+ / elevated / stage",
            _contains("130", "80+", "elevated", "stage"),
            Level.MODERATE,
        ),
        _rule("don't know / unknown", _contains("don", "know", "unknown"), Level.HIGH),
    ),
    # "7-8 hours", "6-7 hours", "Less than 6 hours", "More than 9 hours"
    MetricKind.SLEEP: (
        _rule("poor", _contains("poor"), Level.HIGH),
        _rule("7-8 hours / good", _contains("7-8", "good", "great"), Level.LOW),
        _rule("6-7 / 8-9 hours / fair", _contains("6-7", "8-9", "fair", "okay"), Level.MODERATE),
        _rule("less than / more than", _contains("less than", "under", "more than", "over"), Level.HIGH),
    ),
    # "Very active", "Moderately active", "Sedentary"
    MetricKind.ACTIVITY: (
        _rule("not very / sedentary / inactive", _contains("not very", "sedentary", "inactive", "rarely"), Level.HIGH),
        _rule("very active / 10,000+", _contains("very active", "10,000", "10000"), Level.LOW),
        _rule("moderately / somewhat", _contains("moderate", "somewhat"), Level.MODERATE),
    ),
    # "Below 60 bpm", "60-80 bpm", "Above 80 bpm"
    MetricKind.RESTING_HEART_RATE: (
        _rule("below 60 / athlete", _contains("below 60", "under 60", "athlete"), Level.LOW),
        _rule("60-80 / average / normal", _contains("60-80", "average", "normal"), Level.MODERATE),
        _rule("above 80 / high", _contains("above 80", "over 80", "high"), Level.HIGH),
    ),
    # "150+ minutes a week", "Some", "Rarely or never"
    MetricKind.EXERCISE_MINUTES: (
        _rule("rarely / none / sedentary", _contains("rarely", "never", "none", "sedentary"), Level.HIGH),
        _rule("150+ / daily / very active", _contains("150", "300", "daily", "very active"), Level.LOW),
        _rule("some / occasional / moderate", _contains("some", "occasion", "moderate", "weekly"), Level.MODERATE),
    ),
    # "High", "Average", "Low"
    MetricKind.HEART_RATE_VARIABILITY: (
        _rule("high / excellent", _contains("high", "excellent", "above average"), Level.LOW),
        _rule("below average / low / poor", _contains("below average", "low", "poor"), Level.HIGH),
        _rule("average / normal", _contains("average", "normal"), Level.MODERATE),
    ),
    # "Excellent", "Good", "Fair", "Poor"
    MetricKind.VO2_MAX: (
        _rule("excellent / superior / good", _contains("excellent", "superior", "good"), Level.LOW),
        _rule("fair / average", _contains("fair", "average"), Level.MODERATE),
        _rule("poor / low", _contains("poor", "low"), Level.HIGH),
    ),
    # "Healthy weight", "Overweight", "Obese", "Underweight"
    MetricKind.BODY_MASS: (
        _rule("healthy / normal", _contains("healthy", "normal"), Level.LOW),
        _rule("obese / underweight", _contains("obese", "underweight"), Level.HIGH),
        _rule("overweight", _contains("overweight"), Level.MODERATE),
    ),
    # "Very active", "Moderately active", "Sedentary"
    MetricKind.ACTIVE_ENERGY: (
        _rule("not very / sedentary / inactive", _contains("not very", "sedentary", "inactive", "low"), Level.HIGH),
        _rule("very active / high", _contains("very active", "high"), Level.LOW),
        _rule("moderately / somewhat", _contains("moderate", "somewhat", "average"), Level.MODERATE),
    ),
    # "95-100%", "90-94%", "Below 90%"
    MetricKind.OXYGEN_SATURATION: (
        _rule("below 90 / low", _contains("below 90", "under 90", "low"), Level.HIGH),
        _rule("95-100 / normal", _contains("95-100", "normal"), Level.LOW),
        _rule("90-94 / borderline", _contains("90-94", "borderline"), Level.MODERATE),
    ),
})

_CHAR_FOLDS = str.maketrans({"–": "-", "—": "-", "’": "'", "‘": "'"})


def normalize_label(raw_label: str) -> str:
    """Trim, lowercase and fold typographic dashes/quotes."""
    return raw_label.strip().lower().translate(_CHAR_FOLDS)


def parse_level(kind: MetricKind, raw_label: str) -> Level | None:
    """Classify an onboarding label; ``None`` means unknown (no data)."""
    label = normalize_label(raw_label or "")
    if not label:
        return None
    for rule in LEVEL_RULES[kind]:
        if rule.matches(label):
            return rule.level
    logger.debug("No %s rule matched label %r", kind.value, raw_label)
    return None


def classify_systolic(systolic: float) -> Level:
    """Numeric systolic reading -> level (``<120`` is low, otherwise moderate)."""
    return Level.LOW if systolic < SYSTOLIC_NORMAL_LIMIT else Level.MODERATE


def reading_from_answer(
    kind: MetricKind,
    raw_label: str,
    timestamp: datetime,
) -> MetricReading | None:
    """Parse and resolve an answer into a clamped reading, or ``None``."""
    level = parse_level(kind, raw_label)
    if level is None:
        return None
    return make_reading(kind, resolve_value(kind, level), timestamp, ReadingSource.USER_INPUT)
