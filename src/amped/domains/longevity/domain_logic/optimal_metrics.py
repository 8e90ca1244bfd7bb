"""Best-case reading set used as the upper bound for projections."""

from __future__ import annotations

from datetime import datetime

from amped.domains.longevity.domain_logic.metric_catalog import CATALOG, make_reading
from amped.domains.longevity.domain_logic.metric_models import MetricReading, UserProfile


def optimal_readings_for(
    profile: UserProfile,
    timestamp: datetime,
) -> list[MetricReading]:
    """One reading per catalog kind at its healthiest value.

    The profile is accepted so callers can pass it through uniformly; the
    optimal values themselves do not vary by demographics.
    """
    return [make_reading(kind, spec.optimal_value, timestamp) for kind, spec in CATALOG.items()]


class OptimalMetricsProvider:
    """Callable wrapper so the projection engine can take any reading source."""

    def __call__(self, profile: UserProfile, timestamp: datetime) -> list[MetricReading]:
        return optimal_readings_for(profile, timestamp)
