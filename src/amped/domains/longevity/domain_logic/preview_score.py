"""Onboarding preview figures: preliminary battery score and teaser text.

The preliminary score is a coarse, answer-only estimate shown before any
device data exists. It is independent of the calibrated impact curves.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping

from amped.domains.longevity.domain_logic.metric_models import MetricKind

logger = logging.getLogger(__name__)

BASELINE_SCORE = 50
SCORE_RANGE = (0, 100)

OPTION_BONUSES: dict[MetricKind, dict[str, int]] = {
    MetricKind.STRESS: {
        "very_low": 15,
        "low": 10,
        "moderate_to_high": -5,
        "very_high": -15,
    },
    MetricKind.NUTRITION: {
        "very_healthy": 15,
        "mostly_healthy": 10,
        "mixed_to_unhealthy": -5,
        "very_unhealthy": -15,
    },
    MetricKind.SMOKING: {
        "never": 15,
        "former": 5,
        "occasionally": -10,
        "daily": -20,
    },
    MetricKind.ALCOHOL: {
        "never": 5,
        "occasionally": 0,
        "several_times_week": -5,
        "daily_or_heavy": -15,
    },
    MetricKind.SOCIAL_CONNECTION: {
        "very_strong": 10,
        "moderate_to_good": 5,
        "limited": -5,
        "isolated": -10,
    },
}

_OPTION_ALIASES = {
    "former_smoker": "former",
    "occasional": "occasionally",
    "several_times_a_week": "several_times_week",
    "several_times_per_week": "several_times_week",
    "daily_heavy": "daily_or_heavy",
    "heavy": "daily_or_heavy",
    "mixed": "mixed_to_unhealthy",
    "moderate": "moderate_to_good",
}

_ANSWER_KEY_ALIASES = {"social": MetricKind.SOCIAL_CONNECTION.value}


def normalize_option(option: str) -> str:
    """``'veryHealthy'``, ``'Very Healthy'`` and ``'very-healthy'`` -> ``'very_healthy'``."""
    text = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", option.strip())
    text = re.sub(r"[\s\-/]+", "_", text.lower())
    text = text.strip("_")
    return _OPTION_ALIASES.get(text, text)


def _answer_kind(key: str) -> MetricKind | None:
    normalized = normalize_option(key)
    normalized = _ANSWER_KEY_ALIASES.get(normalized, normalized)
    try:
        return MetricKind(normalized)
    except ValueError:
        return None


def score_breakdown(answers: Mapping[str, str]) -> dict[MetricKind, int]:
    """Per-kind bonus for every recognised answer; unknown ones are skipped."""
    bonuses: dict[MetricKind, int] = {}
    for key, option in answers.items():
        kind = _answer_kind(key)
        table = OPTION_BONUSES.get(kind) if kind is not None else None
        if table is None:
            logger.warning("Preview score ignores answer for %r", key)
            continue
        normalized = normalize_option(option)
        if normalized not in table:
            logger.warning("Unknown %s option %r ignored", kind.value, option)
            continue
        bonuses[kind] = table[normalized]
    return bonuses


def preliminary_score(answers: Mapping[str, str]) -> int:
    """Baseline 50 plus per-answer bonuses, clamped to 0-100."""
    score = BASELINE_SCORE + sum(score_breakdown(answers).values())
    low, high = SCORE_RANGE
    return max(low, min(high, score))


def impact_summary_text(minutes_per_day: float | None) -> str:
    """One-line teaser for the daily impact computed from answers."""
    if minutes_per_day is None:
        return "Analyzing your answers so far…"
    direction = "gaining" if minutes_per_day >= 0 else "losing"
    magnitude = abs(minutes_per_day)
    monthly_hours = magnitude * 30.0 / 60.0
    return (
        f"Based on your answers so far, you're {direction} {round(magnitude)} min/day "
        f"(≈ {monthly_hours:.1f} hours/month)."
    )


_DURATION_UNITS = (
    ("year", 525_600.0),
    ("month", 43_200.0),
    ("week", 10_080.0),
    ("day", 1_440.0),
    ("hour", 60.0),
)


def format_impact_duration(minutes: float) -> str:
    """Render minutes in the largest fitting unit, e.g. ``'3 hours gained'``.

    Below two units one decimal is kept (``'1.5 hours gained'``); the plural
    is chosen from the rounded figure that is shown.
    """
    direction = "gained" if minutes >= 0 else "lost"
    magnitude = abs(minutes)
    for unit, size in _DURATION_UNITS:
        if magnitude >= size:
            amount = round(magnitude / size, 1)
            if amount >= 2:
                return f"{amount:.0f} {unit}s {direction}"
            if amount == 1:
                return f"1 {unit} {direction}"
            return f"{amount:.1f} {unit}s {direction}"
    whole = int(magnitude)
    return f"{whole} minute{'' if whole == 1 else 's'} {direction}"
