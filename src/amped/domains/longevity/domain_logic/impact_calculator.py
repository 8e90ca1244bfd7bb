"""Single-reading lifespan impact.

Converts one ``MetricReading`` into signed minutes of life expectancy per
day using the calibrated dose-response curve for its kind, then attaches the
per-kind evidence and a value-specific recommendation.

Impact is always evaluated on the clamped value, so curves saturate at the
range extremes and no reading is ever rejected.
"""

from __future__ import annotations

import logging
from typing import Callable

from amped.domains.longevity.domain_logic.calibration import Calibration
from amped.domains.longevity.domain_logic.metric_catalog import baseline_of, clamp_value
from amped.domains.longevity.domain_logic.metric_models import (
    Comparison,
    ImpactResult,
    MetricKind,
    MetricReading,
)
from amped.domains.longevity.domain_logic.study_references import evidence_for

logger = logging.getLogger(__name__)

# Impacts within this many minutes of the baseline impact compare as "same".
COMPARISON_TOLERANCE_MINUTES = 1.0


# ---------------------------------------------------------------------------
# Recommendation text
# ---------------------------------------------------------------------------

def _stress_recommendation(score: float) -> str:
    if score >= 8:
        return "Good stress management! Maintain your current stress reduction practices."
    if score >= 5:
        return (
            "Consider stress reduction techniques: meditation, exercise, adequate "
            "sleep, and social support."
        )
    if score >= 3:
        return (
            "High stress levels may impact health. Consider professional stress "
            "management counseling or therapy."
        )
    return (
        "Severe stress requires attention. Consider professional help and "
        "comprehensive stress management strategies."
    )


def _anxiety_recommendation(score: float) -> str:
    if score >= 8:
        return "Anxiety appears well managed. Keep up the routines that support it."
    if score >= 5:
        return (
            "Mild anxiety is common. Regular exercise, breathing practice and "
            "consistent sleep can help keep it in check."
        )
    return (
        "Persistent anxiety can affect long-term health. Consider talking to a "
        "mental health professional."
    )


def _nutrition_recommendation(score: float) -> str:
    if score >= 8:
        return (
            "Excellent nutrition! Maintain your healthy dietary patterns for optimal "
            "longevity benefits."
        )
    if score >= 6:
        return (
            "Good nutrition foundation. Consider adding more vegetables, fruits, "
            "whole grains, and healthy fats."
        )
    if score >= 4:
        return (
            "Moderate nutrition quality. Focus on reducing processed foods and "
            "increasing whole food consumption."
        )
    return (
        "Poor nutrition significantly impacts health. Consider consulting a "
        "nutritionist for a comprehensive dietary overhaul."
    )


def _smoking_recommendation(score: float) -> str:
    if score >= 9:
        return "Excellent! Never smoking is the optimal choice for longevity."
    if score >= 5:
        return (
            "Great job quitting! Former smokers still have elevated risk but much "
            "lower than current smokers."
        )
    return (
        "Quitting smoking is the single most impactful change for your health. "
        "Even light smoking significantly increases mortality risk."
    )


def _alcohol_recommendation(score: float) -> str:
    if score >= 9:
        return "Excellent! No alcohol consumption supports optimal longevity."
    if score >= 6:
        return (
            "Consider reducing to minimize health risks. Even light drinking "
            "carries some mortality risk according to research."
        )
    if score >= 3:
        return (
            "Moderate drinking increases mortality risk. Consider reducing to 1 "
            "drink/day or less for better health outcomes."
        )
    return (
        "Heavy drinking significantly increases mortality risk. Consider seeking "
        "support to reduce consumption for optimal health."
    )


def _social_recommendation(score: float) -> str:
    if score >= 8:
        return (
            "Excellent social connections! Continue nurturing these important "
            "relationships for optimal health benefits."
        )
    if score >= 6:
        return (
            "Good social connections. Consider joining community groups or "
            "scheduling regular social activities to strengthen bonds."
        )
    if score >= 3:
        return (
            "Limited social connections. Prioritize building meaningful "
            "relationships through shared activities or interests."
        )
    return (
        "Social isolation significantly impacts health. Consider reaching out to "
        "friends, joining clubs, or seeking support groups."
    )


def _blood_pressure_recommendation(systolic: float) -> str:
    if systolic < 120:
        return "Your blood pressure is in the normal range. Keep up your current habits."
    if systolic < 130:
        return (
            "Your blood pressure is elevated. Less salt, regular exercise and "
            "limiting alcohol can bring it back under 120 mmHg."
        )
    if systolic < 140:
        return (
            "Stage 1 hypertension range. Lifestyle changes help; discuss "
            "monitoring with your doctor."
        )
    return (
        "Your blood pressure is in the hypertension range. Please consult your "
        "doctor about treatment options."
    )


def _sleep_recommendation(hours: float) -> str:
    if 7.0 <= hours <= 8.0:
        return (
            "Perfect! You're getting optimal sleep duration. Maintain good sleep "
            "hygiene for best quality."
        )
    if hours < 7.0:
        return (
            f"Try to get {7.0 - hours:.1f} more hours of sleep. Aim for 7 to 8 "
            "hours nightly for optimal health."
        )
    return (
        "You're sleeping longer than optimal. If you feel refreshed, this may be "
        "normal. Consider sleep quality factors."
    )


def _activity_recommendation(steps: float) -> str:
    if steps >= 12000:
        return (
            "Excellent! You're at optimal step levels. Maintain this activity level "
            "for maximum health benefits."
        )
    if steps >= 8000:
        return "Great job! You're in a healthy range. Try to reach 10,000 steps for maximum benefits."
    if steps >= 4000:
        return (
            f"Good progress! Aim for {int(10000 - steps):,} more steps daily to reach "
            "the optimal 10,000 steps."
        )
    return (
        "Start small with short 5-10 minute walks. Gradually build towards 4,000 "
        "steps daily, then work up to 10,000 steps."
    )


def _resting_heart_rate_recommendation(bpm: float) -> str:
    if 50 <= bpm <= 70:
        return (
            "Great! Your resting heart rate is in the healthy range. Maintain your "
            "current fitness level."
        )
    if bpm > 70:
        return (
            f"Your RHR is elevated. Regular cardio exercise can help lower it by "
            f"{int(bpm - 70)}+ bpm. Consult your doctor if consistently above 90 bpm."
        )
    return (
        "Your RHR is quite low. If you're an athlete, this is normal. Otherwise, "
        "consult your doctor if you experience symptoms."
    )


def _exercise_recommendation(daily_minutes: float) -> str:
    weekly = daily_minutes * 7
    if weekly >= 300:
        return "Outstanding! You exceed WHO guidelines. Maintain this excellent exercise routine."
    if weekly >= 149.5:
        return (
            "You meet WHO guidelines for physical activity. Consider gradually "
            "increasing for additional benefits."
        )
    if weekly >= 75:
        return (
            f"Good progress! Aim for {int(150 - weekly)} more minutes weekly to meet "
            "WHO guidelines."
        )
    return (
        "Start gradually with 10-15 minutes daily. Build towards 150 minutes of "
        "moderate exercise per week."
    )


def _hrv_recommendation(ms: float) -> str:
    ratio = ms / 40.0
    if ratio > 1.2:
        return "Excellent HRV! Your autonomic nervous system shows good balance and recovery capacity."
    if ratio >= 0.8:
        return (
            "Your HRV is in a typical range. Maintain stress management and "
            "recovery practices."
        )
    return (
        "Consider stress reduction, better sleep, and adequate recovery between "
        "workouts to improve HRV."
    )


def _vo2_max_recommendation(vo2_max: float) -> str:
    if vo2_max >= 50:
        return "Excellent cardiovascular fitness! Maintain with regular high-intensity exercise."
    if vo2_max >= 40:
        return "Good cardiovascular fitness. Consider adding interval training to improve further."
    return (
        "Focus on improving cardiovascular fitness through regular aerobic "
        "exercise and interval training."
    )


def _body_mass_recommendation(kg: float) -> str:
    if 63.5 <= kg <= 81.6:
        return (
            "Your body mass is in a healthy range. Maintain through balanced "
            "nutrition and regular exercise."
        )
    if kg > 81.6:
        return (
            "Consider gradual weight loss through caloric reduction and increased "
            "physical activity. Consult a healthcare provider for personalized guidance."
        )
    return (
        "Consider gradual weight gain through increased caloric intake and "
        "strength training. Consult a healthcare provider if underweight concerns persist."
    )


def _active_energy_recommendation(kcal: float) -> str:
    if kcal >= 600:
        return "Excellent active energy burn! Maintain this level for optimal health benefits."
    if kcal >= 400:
        return (
            "Good active energy level. Consider increasing intensity or duration of "
            "activities for additional benefits."
        )
    return f"Aim to burn {int(400 - kcal)} more calories daily through increased physical activity."


def _oxygen_saturation_recommendation(percent: float) -> str:
    if percent >= 98:
        return "Excellent oxygen saturation. Continue maintaining good respiratory health."
    if percent >= 95:
        return (
            "Good oxygen saturation. Practice deep breathing exercises to optimize "
            "respiratory function."
        )
    return (
        "Low oxygen saturation detected. Consider consulting a healthcare "
        "provider, especially if persistent."
    )


_RECOMMENDERS: dict[MetricKind, Callable[[float], str]] = {
    MetricKind.STRESS: _stress_recommendation,
    MetricKind.ANXIETY: _anxiety_recommendation,
    MetricKind.NUTRITION: _nutrition_recommendation,
    MetricKind.SMOKING: _smoking_recommendation,
    MetricKind.ALCOHOL: _alcohol_recommendation,
    MetricKind.SOCIAL_CONNECTION: _social_recommendation,
    MetricKind.BLOOD_PRESSURE: _blood_pressure_recommendation,
    MetricKind.SLEEP: _sleep_recommendation,
    MetricKind.ACTIVITY: _activity_recommendation,
    MetricKind.RESTING_HEART_RATE: _resting_heart_rate_recommendation,
    MetricKind.EXERCISE_MINUTES: _exercise_recommendation,
    MetricKind.HEART_RATE_VARIABILITY: _hrv_recommendation,
    MetricKind.VO2_MAX: _vo2_max_recommendation,
    MetricKind.BODY_MASS: _body_mass_recommendation,
    MetricKind.ACTIVE_ENERGY: _active_energy_recommendation,
    MetricKind.OXYGEN_SATURATION: _oxygen_saturation_recommendation,
}


def recommendation_for(kind: MetricKind, value: float) -> str:
    return _RECOMMENDERS[kind](clamp_value(kind, value))


# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------

class MetricImpactCalculator:
    """Scores one reading against the calibrated curve for its kind."""

    def __init__(self, calibration: Calibration) -> None:
        self._calibration = calibration

    @property
    def calibration(self) -> Calibration:
        return self._calibration

    def minutes_per_day(self, kind: MetricKind, value: float) -> float:
        """Signed minutes/day for ``value`` after clamping into range."""
        curve = self._calibration.curve_for(kind)
        return curve.minutes_at(clamp_value(kind, value))

    def compare_to_baseline(self, kind: MetricKind, value: float) -> Comparison:
        delta = self.minutes_per_day(kind, value) - self.minutes_per_day(kind, baseline_of(kind))
        if delta > COMPARISON_TOLERANCE_MINUTES:
            return "better"
        if delta < -COMPARISON_TOLERANCE_MINUTES:
            return "worse"
        return "same"

    def impact_of(self, reading: MetricReading) -> ImpactResult:
        kind = reading.kind
        value = clamp_value(kind, reading.value)
        if value != reading.value:
            logger.debug("Clamped %s reading %.2f to %.2f", kind.value, reading.value, value)

        evidence = evidence_for(kind)
        return ImpactResult(
            kind=kind,
            value=value,
            minutes_per_day=self.minutes_per_day(kind, value),
            confidence_label=evidence.confidence_label,
            recommendation_text=recommendation_for(kind, value),
            scientific_basis_text=evidence.scientific_basis_text,
            comparison=self.compare_to_baseline(kind, value),
            study=evidence.study,
        )
