"""Composite reading source: gathers readings from several sources.

Unlike a priority fallback, every source contributes. Choosing one reading
per metric is the aggregate engine's job (most recent wins).
"""

from __future__ import annotations

import logging
from typing import Protocol

from amped.domains.longevity.domain_logic.metric_models import MetricReading

logger = logging.getLogger(__name__)


class ReadingProvider(Protocol):
    @property
    def data_source(self) -> str: ...

    async def get_readings(self, period: str = "day") -> list[MetricReading]: ...


class CompositeReadingSource:
    """Concatenates readings from sources in the given order.

    Usage::

        composite = CompositeReadingSource([
            DeviceReadingSource(device_provider),
            QuestionnaireReadingSource(answer_store),
        ])
        readings = await composite.get_readings("month")
    """

    def __init__(self, sources: list[ReadingProvider]) -> None:
        if not sources:
            raise ValueError("At least one reading source is required")
        self._sources = sources

    @property
    def data_source(self) -> str:
        return "composite"

    async def get_readings(self, period: str = "day") -> list[MetricReading]:
        readings: list[MetricReading] = []
        for source in self._sources:
            batch = await source.get_readings(period)
            logger.debug("Source %s contributed %d readings", source.data_source, len(batch))
            readings.extend(batch)
        return readings

    def get_provenance(self) -> dict[str, str]:
        return {
            "data_source": self.data_source,
            "sources": ", ".join(s.data_source for s in self._sources),
        }
