"""Device samples as a reading source.

Samples arrive as dicts (``type``, ``value``, ``timestamp``) and are
normalised into clamped device readings. Unknown sample types and malformed
samples are dropped.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any

from amped.domains.longevity.connectors import DeviceHealthProvider
from amped.domains.longevity.domain_logic.metric_catalog import make_reading
from amped.domains.longevity.domain_logic.metric_models import (
    MetricKind,
    MetricReading,
    ReadingSource,
    as_utc,
)

logger = logging.getLogger(__name__)

SAMPLE_TYPES: dict[str, MetricKind] = {
    "steps": MetricKind.ACTIVITY,
    "step_count": MetricKind.ACTIVITY,
    "sleep_hours": MetricKind.SLEEP,
    "sleep_duration": MetricKind.SLEEP,
    "resting_heart_rate": MetricKind.RESTING_HEART_RATE,
    "systolic_bp": MetricKind.BLOOD_PRESSURE,
    "blood_pressure_systolic": MetricKind.BLOOD_PRESSURE,
    "exercise_time": MetricKind.EXERCISE_MINUTES,
    "hrv": MetricKind.HEART_RATE_VARIABILITY,
    "hrv_sdnn": MetricKind.HEART_RATE_VARIABILITY,
    "vo2max": MetricKind.VO2_MAX,
    "body_mass_kg": MetricKind.BODY_MASS,
    "weight_kg": MetricKind.BODY_MASS,
    "active_energy_kcal": MetricKind.ACTIVE_ENERGY,
    "active_energy_burned": MetricKind.ACTIVE_ENERGY,
    "spo2": MetricKind.OXYGEN_SATURATION,
}


def parse_timestamp(raw: str) -> datetime:
    """ISO 8601 with ``Z`` accepted; naive times are taken as UTC."""
    return as_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))


def reading_from_sample(sample: dict[str, Any]) -> MetricReading | None:
    sample_type = str(sample.get("type", ""))
    kind = SAMPLE_TYPES.get(sample_type)
    if kind is None:
        try:
            kind = MetricKind(sample_type)
        except ValueError:
            logger.debug("Ignoring device sample of type %r", sample_type)
            return None
    try:
        value = float(sample["value"])
        timestamp = parse_timestamp(str(sample["timestamp"]))
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("Dropping malformed %s sample: %s", sample_type, exc)
        return None
    if not math.isfinite(value):
        logger.warning("Dropping %s sample with non-finite value %r", sample_type, value)
        return None
    return make_reading(kind, value, timestamp, source=ReadingSource.DEVICE)


class DeviceReadingSource:
    """Wraps a DeviceHealthProvider and yields device readings."""

    def __init__(self, provider: DeviceHealthProvider) -> None:
        self._provider = provider

    @property
    def data_source(self) -> str:
        return self._provider.data_source

    async def get_readings(self, period: str = "day") -> list[MetricReading]:
        samples = await self._provider.get_samples(period)
        readings = [r for r in (reading_from_sample(s) for s in samples) if r is not None]
        logger.debug(
            "Device source %s: %d/%d samples usable",
            self.data_source, len(readings), len(samples),
        )
        return readings
