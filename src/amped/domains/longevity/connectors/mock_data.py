"""Mock device samples for development and testing.

The samples describe a median adult: a little under-slept, moderately
active, blood pressure just into the elevated band and a little short of
the weekly exercise guideline.
"""

from __future__ import annotations

from datetime import datetime, timedelta

_DAILY_PROFILE = (
    ("steps", 6800.0),
    ("sleep_hours", 6.6),
    ("resting_heart_rate", 68.0),
    ("systolic_bp", 122.0),
    ("exercise_minutes", 18.0),
    ("hrv_sdnn", 42.0),
    ("vo2_max", 38.0),
    ("body_mass_kg", 78.0),
    ("active_energy_kcal", 380.0),
    ("spo2", 97.0),
)

_HISTORY_DAYS = {"day": (0,), "month": (0, 7, 14, 21), "year": (0, 30, 90, 180, 270)}


def get_mock_device_samples(period: str, now: datetime) -> list[dict]:
    """Return mock samples for ``period`` ending at ``now``.

    Older samples drift slightly so the most-recent selection is visible.
    """
    samples = []
    for days_ago in _HISTORY_DAYS.get(period, (0,)):
        moment = now - timedelta(days=days_ago, hours=1)
        drift = 1.0 - days_ago / 1000.0
        for sample_type, value in _DAILY_PROFILE:
            samples.append({
                "type": sample_type,
                "value": round(value * drift, 1),
                "timestamp": moment.isoformat(),
            })
    return samples
