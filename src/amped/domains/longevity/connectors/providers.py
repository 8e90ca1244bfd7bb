"""Concrete DeviceHealthProvider implementations."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

from amped.domains.longevity.connectors.mock_data import get_mock_device_samples


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MockDeviceProvider:
    """Uses mock sample generators. Always available."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock

    async def get_samples(self, period: str = "day") -> list[dict[str, Any]]:
        return get_mock_device_samples(period, self._clock())

    @property
    def data_source(self) -> str:
        return "mock"


class StaticDeviceProvider:
    """Serves a fixed list of samples, e.g. from an imported export."""

    def __init__(self, samples: list[dict[str, Any]], source: str = "import") -> None:
        self._samples = list(samples)
        self._source = source

    async def get_samples(self, period: str = "day") -> list[dict[str, Any]]:
        return list(self._samples)

    @property
    def data_source(self) -> str:
        return self._source
