"""Shared test fixtures for the Amped lifespan engine."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

_SETTINGS_ENV = (
    "AMPED_HOST",
    "AMPED_PORT",
    "AMPED_LOG_LEVEL",
    "AMPED_ALLOW_INSECURE_BIND",
    "CALIBRATION_PATH",
    "LIFE_TABLE",
    "BEHAVIOR_DECAY_RATE",
    "DEFAULT_PERIOD",
)


@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from amped.domains.longevity.connectors.life_tables import get_life_table  # noqa: E402
from amped.domains.longevity.connectors.questionnaire import InMemoryAnswerStore  # noqa: E402
from amped.domains.longevity.domain_logic.aggregate_engine import (  # noqa: E402
    AggregateImpactEngine,
)
from amped.domains.longevity.domain_logic.calibration import (  # noqa: E402
    Calibration,
    load_calibration,
)
from amped.domains.longevity.domain_logic.impact_calculator import (  # noqa: E402
    MetricImpactCalculator,
)
from amped.domains.longevity.domain_logic.life_projection import (  # noqa: E402
    LifeProjectionEngine,
)

AS_OF_YEAR = 2026


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def calibration() -> Calibration:
    """The bundled default calibration."""
    return load_calibration()


@pytest.fixture
def calculator(calibration: Calibration) -> MetricImpactCalculator:
    return MetricImpactCalculator(calibration)


@pytest.fixture
def aggregate_engine(calculator: MetricImpactCalculator) -> AggregateImpactEngine:
    return AggregateImpactEngine(calculator)


@pytest.fixture
def life_table():
    return get_life_table("who_2023")


@pytest.fixture
def projection_engine(life_table, aggregate_engine) -> LifeProjectionEngine:
    return LifeProjectionEngine(life_table, aggregate_engine, as_of_year=AS_OF_YEAR)


@pytest.fixture
def answer_store() -> InMemoryAnswerStore:
    return InMemoryAnswerStore()
