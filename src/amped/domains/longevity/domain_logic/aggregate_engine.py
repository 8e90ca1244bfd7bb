"""Additive roll-up of per-metric lifespan impacts.

One representative reading is chosen per metric kind (the most recent inside
the period), each is scored in isolation and the results are summed. There
is no weighting across metrics and no interaction between them.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable

from amped.domains.longevity.domain_logic.impact_calculator import MetricImpactCalculator
from amped.domains.longevity.domain_logic.metric_catalog import CATALOG
from amped.domains.longevity.domain_logic.metric_models import (
    AggregateImpact,
    ImpactPeriod,
    MetricKind,
    MetricReading,
    ReadingSource,
)

logger = logging.getLogger(__name__)


def _recency_key(reading: MetricReading) -> tuple:
    # Newest first; on equal timestamps a device sample beats a self-report,
    # then the larger value wins so the choice never depends on input order.
    return (reading.timestamp, reading.source is ReadingSource.DEVICE, reading.value)


def select_representatives(
    readings: Iterable[MetricReading],
    period: ImpactPeriod | None = None,
) -> dict[MetricKind, MetricReading]:
    """Pick the most recent reading per kind, in catalog order.

    Readings outside ``period`` are ignored. Kinds with no reading are absent
    from the result rather than defaulted.
    """
    chosen: dict[MetricKind, MetricReading] = {}
    for reading in readings:
        if period is not None and not period.contains(reading.timestamp):
            continue
        current = chosen.get(reading.kind)
        if current is None or _recency_key(reading) > _recency_key(current):
            chosen[reading.kind] = reading
    return {kind: chosen[kind] for kind in CATALOG if kind in chosen}


class AggregateImpactEngine:
    """Sums independent per-metric impacts into a daily total."""

    def __init__(self, calculator: MetricImpactCalculator) -> None:
        self._calculator = calculator

    @property
    def calculator(self) -> MetricImpactCalculator:
        return self._calculator

    def total_impact(
        self,
        readings: Iterable[MetricReading],
        period: ImpactPeriod | None = None,
    ) -> AggregateImpact:
        representatives = select_representatives(readings, period)
        breakdown = {
            kind: self._calculator.impact_of(reading)
            for kind, reading in representatives.items()
        }
        total = sum((result.minutes_per_day for result in breakdown.values()), 0.0)
        logger.debug(
            "Aggregated %d metrics: %.2f min/day", len(breakdown), total,
        )
        return AggregateImpact(
            total_minutes_per_day=total,
            breakdown=MappingProxyType(breakdown),
            period=period,
        )
