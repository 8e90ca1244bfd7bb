"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Amped lifespan server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default; there is no auth layer in front of the tools.
    amped_host: str = "127.0.0.1"
    amped_port: int = 8011
    amped_log_level: str = "info"
    amped_allow_insecure_bind: bool = False

    # Engine
    # Empty means the bundled calibration/default.yaml.
    calibration_path: str = ""
    life_table: str = "who_2023"
    # Annual decay of projected behaviour effects; 0 keeps projections linear.
    behavior_decay_rate: float = 0.0
    default_period: Literal["day", "month", "year"] = "day"


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
