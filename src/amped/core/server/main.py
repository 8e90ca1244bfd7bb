"""Amped server entry point: ``python -m amped.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from amped.core.config.settings import Settings, get_settings
from amped.core.server.app import create_app

logger = logging.getLogger(__name__)

_LOCAL_NAMES = frozenset({"localhost", "localhost.localdomain"})


def _is_loopback_host(host: str) -> bool:
    host = host.strip().strip("[]")
    if host.lower() in _LOCAL_NAMES:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def _check_bind(settings: Settings) -> None:
    """Raise unless the host is loopback or insecure binds are explicitly allowed."""
    if _is_loopback_host(settings.amped_host):
        return
    if not settings.amped_allow_insecure_bind:
        raise RuntimeError(
            f"Amped would expose health answers on {settings.amped_host}, which is not "
            "a loopback address. Bind to 127.0.0.1 or set AMPED_ALLOW_INSECURE_BIND=true."
        )
    logger.warning(
        "AMPED_ALLOW_INSECURE_BIND is set: serving unauthenticated tools on %s",
        settings.amped_host,
    )


def run() -> None:
    """Start the Amped MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.amped_log_level.upper(), logging.INFO))
    _check_bind(settings)

    logger.info(
        "Amped lifespan engine listening on %s:%d (life table %s, default period %s)",
        settings.amped_host, settings.amped_port, settings.life_table, settings.default_period,
    )
    mcp = create_app()
    mcp.run(
        transport="streamable-http",
        host=settings.amped_host,
        port=settings.amped_port,
    )


if __name__ == "__main__":
    run()
