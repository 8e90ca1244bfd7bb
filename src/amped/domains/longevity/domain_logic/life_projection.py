"""Remaining-years projection driving the battery visual.

The aggregate daily impact is converted to a yearly rate and added linearly
to the actuarial baseline. The projection percentage is the adjusted figure
relative to the same profile's optimal-case projection.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable

from amped.domains.longevity.domain_logic.metric_models import (
    AggregateImpact,
    LifeProjection,
    MetricReading,
    UserProfile,
)
from amped.domains.longevity.domain_logic.optimal_metrics import optimal_readings_for

if TYPE_CHECKING:
    from amped.domains.longevity.connectors import LifeTable
    from amped.domains.longevity.domain_logic.aggregate_engine import AggregateImpactEngine

logger = logging.getLogger(__name__)

MINUTES_PER_YEAR = 525_960.0  # 365.25 * 24 * 60
DAYS_PER_YEAR = 365.25
MIN_DENOMINATOR = 0.1

OptimalReadingsFn = Callable[[UserProfile, datetime], list[MetricReading]]


def _floored(value: float) -> float:
    return max(value, MIN_DENOMINATOR)


def gain_percent(current_years: float, optimal_years: float) -> float:
    """Relative potential improvement, never negative and never infinite."""
    return max(0.0, (optimal_years - current_years) / _floored(current_years))


class LifeProjectionEngine:
    """Projects remaining years from an aggregate impact and a profile.

    Args:
        life_table: Actuarial collaborator for the baseline.
        aggregate_engine: Used to score the optimal reading set.
        optimal_readings: Source of best-case readings for the reference
            maximum.
        behavior_decay_rate: Optional annual decay of a behaviour's effect;
            ``0`` keeps the projection linear.
        as_of_year: Year ages are computed against. Defaults to the current
            year at call time.
    """

    def __init__(
        self,
        life_table: LifeTable,
        aggregate_engine: AggregateImpactEngine,
        optimal_readings: OptimalReadingsFn = optimal_readings_for,
        behavior_decay_rate: float = 0.0,
        as_of_year: int | None = None,
    ) -> None:
        if behavior_decay_rate < 0:
            raise ValueError("behavior_decay_rate must be >= 0")
        self._life_table = life_table
        self._aggregate_engine = aggregate_engine
        self._optimal_readings = optimal_readings
        self._decay = behavior_decay_rate
        self._as_of_year = as_of_year

    def _year(self, as_of_year: int | None) -> int:
        if as_of_year is not None:
            return as_of_year
        if self._as_of_year is not None:
            return self._as_of_year
        return datetime.now(timezone.utc).year

    def baseline_years_remaining(self, profile: UserProfile, as_of_year: int | None = None) -> float:
        age = profile.age(self._year(as_of_year))
        return self._life_table.years_remaining(age, profile.gender)

    def impact_years(self, minutes_per_day: float, baseline_years: float) -> float:
        """Years gained or lost if today's daily impact holds for the baseline horizon."""
        yearly_rate = minutes_per_day * DAYS_PER_YEAR / MINUTES_PER_YEAR
        years = yearly_rate * baseline_years
        if self._decay > 0:
            years *= math.exp(-self._decay * baseline_years / 2.0)
        return years

    def adjusted_years_remaining(self, minutes_per_day: float, baseline_years: float) -> float:
        return max(0.0, baseline_years + self.impact_years(minutes_per_day, baseline_years))

    def optimal_years_remaining(self, profile: UserProfile, as_of_year: int | None = None) -> float:
        year = self._year(as_of_year)
        readings = self._optimal_readings(profile, datetime(year, 1, 1, tzinfo=timezone.utc))
        optimal = self._aggregate_engine.total_impact(readings)
        return self.adjusted_years_remaining(
            optimal.total_minutes_per_day, self.baseline_years_remaining(profile, year)
        )

    def project(
        self,
        aggregate: AggregateImpact,
        profile: UserProfile,
        as_of_year: int | None = None,
    ) -> LifeProjection:
        year = self._year(as_of_year)
        baseline = self.baseline_years_remaining(profile, year)
        adjusted = self.adjusted_years_remaining(aggregate.total_minutes_per_day, baseline)
        optimal = self.optimal_years_remaining(profile, year)
        percentage = min(1.0, max(0.0, adjusted / _floored(optimal)))

        logger.debug(
            "Projection for age %d: baseline=%.2f adjusted=%.2f optimal=%.2f (%.0f%%)",
            profile.age(year), baseline, adjusted, optimal, percentage * 100,
        )
        return LifeProjection(
            current_age=float(profile.age(year)),
            baseline_years_remaining=baseline,
            adjusted_years_remaining=adjusted,
            projection_percentage=percentage,
        )

    def potential_gain(
        self,
        aggregate: AggregateImpact,
        profile: UserProfile,
        as_of_year: int | None = None,
    ) -> float:
        """``gain_percent`` between this aggregate and the optimal case."""
        year = self._year(as_of_year)
        current = self.project(aggregate, profile, year).adjusted_years_remaining
        return gain_percent(current, self.optimal_years_remaining(profile, year))
