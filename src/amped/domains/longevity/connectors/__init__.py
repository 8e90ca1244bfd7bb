"""Lifespan engine connectors: boundaries to the data the engine consumes."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from amped.domains.longevity.domain_logic.metric_models import Gender


@runtime_checkable
class AnswerStore(Protocol):
    """Persisted onboarding answers, keyed by metric kind value.

    Values are the raw labels the user picked (e.g. ``"Former smoker"``).
    """

    def get_answers(self) -> dict[str, str]:
        ...


@runtime_checkable
class DeviceHealthProvider(Protocol):
    """Synced device samples (wearables, phone health stores).

    Each sample is a dict with ``type``, ``value`` and ``timestamp``
    (ISO 8601) keys.
    """

    async def get_samples(self, period: str = "day") -> list[dict[str, Any]]:
        ...

    @property
    def data_source(self) -> str:
        """Label for the active data source, e.g. ``'mock'``."""
        ...


@runtime_checkable
class LifeTable(Protocol):
    """Actuarial baseline: remaining life expectancy by age and gender."""

    def years_remaining(self, age: float, gender: Gender | None) -> float:
        ...
