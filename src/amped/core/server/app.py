"""Amped lifespan MCP server: application factory.

This module provides:
- create_app() for testability (tests build fresh servers with injected collaborators)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from fastmcp import FastMCP

from amped.core.config.settings import get_settings
from amped.domains.longevity.connectors import AnswerStore, DeviceHealthProvider, LifeTable
from amped.domains.longevity.connectors.composite import CompositeReadingSource
from amped.domains.longevity.connectors.device import DeviceReadingSource
from amped.domains.longevity.connectors.life_tables import get_life_table
from amped.domains.longevity.connectors.providers import MockDeviceProvider
from amped.domains.longevity.connectors.questionnaire import (
    InMemoryAnswerStore,
    QuestionnaireReadingSource,
)
from amped.domains.longevity.domain_logic.aggregate_engine import AggregateImpactEngine
from amped.domains.longevity.domain_logic.calibration import Calibration, load_calibration
from amped.domains.longevity.domain_logic.impact_calculator import MetricImpactCalculator
from amped.domains.longevity.domain_logic.life_projection import LifeProjectionEngine
from amped.domains.longevity.tools.lifespan_impact_tools import register_lifespan_impact_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Amped Lifespan"
SERVER_VERSION = "0.1.0"


def create_app(
    *,
    calibration_override: Calibration | None = None,
    answer_store_override: AnswerStore | None = None,
    device_provider_override: DeviceHealthProvider | None = None,
    life_table_override: LifeTable | None = None,
    clock_override: Callable[[], datetime] | None = None,
) -> FastMCP:
    """Create and configure the Amped lifespan MCP server.

    Builds every collaborator explicitly: calibration, answer store, device
    provider and life table, then the engine on top of them.
    """
    settings = get_settings()

    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Amped lifespan-impact server. Converts lifestyle answers and device "
            "health samples into minutes of life expectancy gained or lost per "
            "day, and projects remaining years for the battery view."
        ),
    )

    # --- Engine ---
    calibration = calibration_override or load_calibration(settings.calibration_path or None)
    calculator = MetricImpactCalculator(calibration)
    aggregate_engine = AggregateImpactEngine(calculator)

    life_table = life_table_override or get_life_table(settings.life_table)
    projection_engine = LifeProjectionEngine(
        life_table,
        aggregate_engine,
        behavior_decay_rate=settings.behavior_decay_rate,
    )

    # --- Reading sources ---
    answer_store = answer_store_override
    if answer_store is None:
        answer_store = InMemoryAnswerStore()
        logger.info("Using in-memory answer store")

    extra = {} if clock_override is None else {"clock": clock_override}
    device_provider = device_provider_override
    if device_provider is None:
        device_provider = MockDeviceProvider(**extra)
        logger.info("Using mock device provider")

    reading_source = CompositeReadingSource([
        DeviceReadingSource(device_provider),
        QuestionnaireReadingSource(answer_store, **extra),
    ])

    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "calibration_version": calibration.version,
            "metrics_calibrated": len(calibration.curves),
            "device_source": device_provider.data_source,
            "default_period": settings.default_period,
        }

    register_lifespan_impact_tools(
        server,
        calculator=calculator,
        aggregate_engine=aggregate_engine,
        projection_engine=projection_engine,
        reading_source=reading_source,
        default_period=settings.default_period,
        **extra,
    )
    logger.info("Lifespan impact tools registered")

    return server


# Module-level instance for FastMCP discovery ("server": "...app.py:mcp").
# Lazy: only created on first access, not when tests import create_app.
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
