"""MCP tools exposing the lifespan-impact engine.

Every tool returns a JSON string. The engine itself is synchronous and pure;
only gathering readings from the injected reading source is awaited.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable

from fastmcp import Context, FastMCP

from amped.domains.longevity.domain_logic.level_resolver import parse_level, resolve_value
from amped.domains.longevity.domain_logic.metric_catalog import make_reading, spec_of
from amped.domains.longevity.domain_logic.metric_models import (
    PERIOD_DAYS,
    AggregateImpact,
    Gender,
    ImpactPeriod,
    ImpactResult,
    Level,
    LifeProjection,
    MetricKind,
    UserProfile,
)
from amped.domains.longevity.domain_logic.preview_score import (
    format_impact_duration,
    impact_summary_text,
    preliminary_score as compute_preliminary_score,
    score_breakdown,
)

if TYPE_CHECKING:
    from amped.domains.longevity.connectors.composite import ReadingProvider
    from amped.domains.longevity.domain_logic.aggregate_engine import AggregateImpactEngine
    from amped.domains.longevity.domain_logic.impact_calculator import MetricImpactCalculator
    from amped.domains.longevity.domain_logic.life_projection import LifeProjectionEngine

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument validation
# ---------------------------------------------------------------------------

def _validate_metric(value: str) -> MetricKind:
    try:
        return MetricKind(value.strip().lower())
    except ValueError:
        raise ValueError(
            "metric must be one of: " + " | ".join(k.value for k in MetricKind)
        ) from None


def _validate_level(value: str) -> Level:
    try:
        return Level(value.strip().lower())
    except ValueError:
        raise ValueError("level must be one of: low | moderate | high") from None


def _validate_period(value: str | None, default: str) -> str:
    if value in (None, ""):
        return default
    if value not in PERIOD_DAYS:
        raise ValueError("period must be one of: " + " | ".join(PERIOD_DAYS))
    return value


def _validate_gender(value: str | None) -> Gender | None:
    if value in (None, ""):
        return None
    try:
        return Gender(value.strip().lower())
    except ValueError:
        raise ValueError(
            "gender must be one of: " + " | ".join(g.value for g in Gender)
        ) from None


# ---------------------------------------------------------------------------
# Serialisation
# ---------------------------------------------------------------------------

def impact_to_dict(result: ImpactResult) -> dict[str, Any]:
    spec = spec_of(result.kind)
    return {
        "metric": result.kind.value,
        "display_name": spec.display_name,
        "value": result.value,
        "unit": spec.unit,
        "minutes_per_day": round(result.minutes_per_day, 2),
        "formatted_impact": format_impact_duration(result.minutes_per_day),
        "comparison": result.comparison,
        "confidence": result.confidence_label,
        "recommendation": result.recommendation_text,
        "scientific_basis": result.scientific_basis_text,
        "study": asdict(result.study) if result.study is not None else None,
    }


def aggregate_to_dict(aggregate: AggregateImpact) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "total_minutes_per_day": round(aggregate.total_minutes_per_day, 2),
        "metrics_counted": len(aggregate.breakdown),
        "breakdown": [impact_to_dict(r) for r in aggregate.breakdown.values()],
        "summary": impact_summary_text(aggregate.total_minutes_per_day),
    }
    if aggregate.period is not None:
        payload["period"] = aggregate.period.period_type
        payload["period_total_minutes"] = round(aggregate.scaled_total(), 2)
        payload["formatted_period_total"] = format_impact_duration(aggregate.scaled_total())
    return payload


def projection_to_dict(projection: LifeProjection) -> dict[str, Any]:
    return {
        "current_age": projection.current_age,
        "baseline_years_remaining": round(projection.baseline_years_remaining, 2),
        "adjusted_years_remaining": round(projection.adjusted_years_remaining, 2),
        "net_impact_years": round(projection.net_impact_years, 2),
        "projected_lifespan_years": round(projection.projected_lifespan_years, 1),
        "projection_percentage": round(projection.projection_percentage, 4),
        "interpretation": projection.interpretation,
    }


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

def register_lifespan_impact_tools(
    mcp: FastMCP,
    *,
    calculator: MetricImpactCalculator,
    aggregate_engine: AggregateImpactEngine,
    projection_engine: LifeProjectionEngine,
    reading_source: ReadingProvider,
    default_period: str = "day",
    clock: Callable[[], datetime] = _utc_now,
) -> None:
    """Register lifespan-impact tools on the MCP server."""

    async def _aggregate(period: str) -> AggregateImpact:
        readings = await reading_source.get_readings(period)
        window = ImpactPeriod(period_type=period, end=clock())  # type: ignore[arg-type]
        return aggregate_engine.total_impact(readings, window)

    @mcp.tool
    def parse_answer(metric: str, label: str) -> str:
        """Classify an onboarding answer and resolve it to a numeric value.

        Args:
            metric: Metric kind (e.g. 'smoking', 'blood_pressure').
            label: The answer text as shown to the user (e.g. 'Former smoker').
        """
        kind = _validate_metric(metric)
        level = parse_level(kind, label)
        if level is None:
            return json.dumps({
                "status": "unknown",
                "metric": kind.value,
                "label": label,
                "level": None,
                "value": None,
            })
        return json.dumps({
            "status": "ok",
            "metric": kind.value,
            "label": label,
            "level": level.value,
            "value": resolve_value(kind, level),
        })

    @mcp.tool
    def metric_impact(metric: str, value: float | None = None, level: str | None = None) -> str:
        """Lifespan impact of a single metric value, in minutes per day.

        Provide either a numeric value in the metric's native unit or a level.
        Out-of-range values are clamped.

        Args:
            metric: Metric kind (e.g. 'sleep', 'activity').
            value: Value in native units (score 1-10, mmHg, hours, steps, bpm,
                minutes, ms, mL/kg/min, kg, kcal or percent).
            level: Alternatively, 'low' | 'moderate' | 'high' (low is healthiest).
        """
        kind = _validate_metric(metric)
        if value is None:
            if level is None:
                raise ValueError("metric_impact needs either value or level")
            value = resolve_value(kind, _validate_level(level))
        reading = make_reading(kind, value, clock())
        return json.dumps(impact_to_dict(calculator.impact_of(reading)))

    @mcp.tool
    async def daily_lifespan_impact(ctx: Context, period: str | None = None) -> str:
        """Total lifespan impact across all known metrics.

        Uses the most recent reading per metric within the period; metrics
        with no data are left out.

        Args:
            period: 'day' | 'month' | 'year'. Defaults to the server setting.
        """
        window = _validate_period(period, default_period)
        aggregate = await _aggregate(window)
        payload = aggregate_to_dict(aggregate)
        payload["data_source"] = reading_source.data_source
        logger.info(
            "daily_lifespan_impact(%s): %d metrics, %.1f min/day",
            window, len(aggregate.breakdown), aggregate.total_minutes_per_day,
        )
        return json.dumps(payload)

    @mcp.tool
    async def life_projection(
        ctx: Context,
        birth_year: int | None = None,
        gender: str | None = None,
        period: str | None = None,
    ) -> str:
        """Projected remaining years and battery fill for the current habits.

        Args:
            birth_year: Birth year; age 30 is assumed when omitted.
            gender: 'male' | 'female' | 'prefer_not_to_say'.
            period: Reading window, 'day' | 'month' | 'year'.
        """
        profile = UserProfile(birth_year=birth_year, gender=_validate_gender(gender))
        aggregate = await _aggregate(_validate_period(period, default_period))
        year = clock().year
        projection = projection_engine.project(aggregate, profile, as_of_year=year)
        payload = projection_to_dict(projection)
        payload["total_minutes_per_day"] = round(aggregate.total_minutes_per_day, 2)
        payload["potential_gain_percent"] = round(
            projection_engine.potential_gain(aggregate, profile, as_of_year=year) * 100, 1
        )
        return json.dumps(payload)

    @mcp.tool
    def preliminary_score(answers: dict[str, str]) -> str:
        """Preview battery score (0-100) from onboarding answers alone.

        Args:
            answers: Option per question, e.g. {"smoking": "never",
                "nutrition": "veryHealthy"}.
        """
        bonuses = score_breakdown(answers)
        return json.dumps({
            "score": compute_preliminary_score(answers),
            "answers_counted": len(bonuses),
            "bonuses": {kind.value: bonus for kind, bonus in bonuses.items()},
        })
