"""Unit tests for questionnaire, device and composite reading sources."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from amped.domains.longevity.connectors import AnswerStore, DeviceHealthProvider
from amped.domains.longevity.connectors.composite import CompositeReadingSource
from amped.domains.longevity.connectors.device import (
    DeviceReadingSource,
    parse_timestamp,
    reading_from_sample,
)
from amped.domains.longevity.connectors.providers import MockDeviceProvider, StaticDeviceProvider
from amped.domains.longevity.connectors.questionnaire import (
    InMemoryAnswerStore,
    QuestionnaireReadingSource,
)
from amped.domains.longevity.domain_logic.metric_models import MetricKind, ReadingSource

_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _clock():
    return _NOW


# ---------------------------------------------------------------------------
# Questionnaire
# ---------------------------------------------------------------------------

class TestAnswerStore:
    def test_set_and_get(self, answer_store):
        answer_store.set_answer(MetricKind.SMOKING, "Never")
        answer_store.set_answer("stress", "Low")
        assert answer_store.get_answers() == {"smoking": "Never", "stress": "Low"}

    def test_returns_copy(self, answer_store):
        answer_store.get_answers()["smoking"] = "Daily"
        assert answer_store.get_answers() == {}

    def test_clear(self):
        store = InMemoryAnswerStore({"smoking": "Never"})
        store.clear()
        assert store.get_answers() == {}

    def test_satisfies_protocol(self, answer_store):
        assert isinstance(answer_store, AnswerStore)


class TestQuestionnaireReadingSource:
    def test_answers_become_user_readings(self):
        store = InMemoryAnswerStore({"smoking": "Daily", "stress": "Low"})
        readings = _run(QuestionnaireReadingSource(store, clock=_clock).get_readings())
        by_kind = {r.kind: r for r in readings}
        assert by_kind[MetricKind.SMOKING].value == 1.0
        assert by_kind[MetricKind.STRESS].value == 10.0
        assert all(r.source is ReadingSource.USER_INPUT for r in readings)
        assert all(r.timestamp == _NOW for r in readings)

    def test_unknown_labels_and_metrics_are_dropped(self, caplog):
        store = InMemoryAnswerStore({
            "smoking": "Never",
            "nutrition": "no idea",
            "banana": "Low",
        })
        with caplog.at_level("WARNING"):
            readings = _run(QuestionnaireReadingSource(store, clock=_clock).get_readings())
        assert [r.kind for r in readings] == [MetricKind.SMOKING]
        assert "banana" in caplog.text
        assert "no idea" in caplog.text


# ---------------------------------------------------------------------------
# Device
# ---------------------------------------------------------------------------

class TestDeviceSamples:
    def test_sample_types_are_mapped_and_clamped(self):
        reading = reading_from_sample(
            {"type": "steps", "value": 20000, "timestamp": "2026-03-01T08:00:00Z"}
        )
        assert reading is not None
        assert reading.kind is MetricKind.ACTIVITY
        assert reading.value == 15000.0
        assert reading.source is ReadingSource.DEVICE
        assert reading.timestamp == datetime(2026, 3, 1, 8, tzinfo=timezone.utc)

    def test_kind_value_accepted_as_type(self):
        reading = reading_from_sample(
            {"type": "blood_pressure", "value": "121", "timestamp": "2026-03-01T08:00:00"}
        )
        assert reading.kind is MetricKind.BLOOD_PRESSURE
        assert reading.value == 121.0

    @pytest.mark.parametrize(
        "sample",
        [
            {"type": "blood_glucose", "value": 90, "timestamp": "2026-03-01T08:00:00Z"},
            {"type": "steps", "value": "lots", "timestamp": "2026-03-01T08:00:00Z"},
            {"type": "steps", "value": 100},
            {"type": "sleep_hours", "value": 7, "timestamp": "yesterday"},
            {"type": "resting_heart_rate", "value": "nan", "timestamp": "2026-03-01T08:00:00Z"},
            {"type": "smoking", "value": float("nan"), "timestamp": "2026-03-01T08:00:00Z"},
            {"type": "steps", "value": float("inf"), "timestamp": "2026-03-01T08:00:00Z"},
        ],
    )
    def test_unusable_samples_are_dropped(self, sample):
        assert reading_from_sample(sample) is None

    @pytest.mark.parametrize(
        "sample_type, kind",
        [
            ("exercise_minutes", MetricKind.EXERCISE_MINUTES),
            ("hrv_sdnn", MetricKind.HEART_RATE_VARIABILITY),
            ("vo2max", MetricKind.VO2_MAX),
            ("weight_kg", MetricKind.BODY_MASS),
            ("active_energy_burned", MetricKind.ACTIVE_ENERGY),
            ("spo2", MetricKind.OXYGEN_SATURATION),
        ],
    )
    def test_fitness_and_body_sample_types(self, sample_type, kind):
        reading = reading_from_sample(
            {"type": sample_type, "value": 50, "timestamp": "2026-03-01T08:00:00Z"}
        )
        assert reading is not None
        assert reading.kind is kind

    def test_non_finite_sample_is_logged(self, caplog):
        with caplog.at_level("WARNING"):
            assert reading_from_sample(
                {"type": "steps", "value": "NaN", "timestamp": "2026-03-01T08:00:00Z"}
            ) is None
        assert "non-finite" in caplog.text

    def test_naive_timestamp_is_utc(self):
        assert parse_timestamp("2026-03-01T08:00:00").tzinfo is timezone.utc

    def test_device_reading_source(self):
        provider = StaticDeviceProvider([
            {"type": "sleep_hours", "value": 6.5, "timestamp": "2026-03-01T07:00:00Z"},
            {"type": "unknown", "value": 1, "timestamp": "2026-03-01T07:00:00Z"},
        ])
        source = DeviceReadingSource(provider)
        readings = _run(source.get_readings("day"))
        assert [r.kind for r in readings] == [MetricKind.SLEEP]
        assert source.data_source == "import"


class TestMockDeviceProvider:
    def test_day_has_one_sample_per_type(self):
        samples = _run(MockDeviceProvider(clock=_clock).get_samples("day"))
        assert {s["type"] for s in samples} == {
            "steps", "sleep_hours", "resting_heart_rate", "systolic_bp",
            "exercise_minutes", "hrv_sdnn", "vo2_max", "body_mass_kg",
            "active_energy_kcal", "spo2",
        }
        assert len(samples) == 10

    def test_month_has_history(self):
        samples = _run(MockDeviceProvider(clock=_clock).get_samples("month"))
        assert len(samples) == 40
        oldest = min(parse_timestamp(s["timestamp"]) for s in samples)
        assert _NOW - oldest < timedelta(days=30)

    def test_satisfies_protocol(self):
        provider = MockDeviceProvider()
        assert isinstance(provider, DeviceHealthProvider)
        assert provider.data_source == "mock"


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------

class TestCompositeReadingSource:
    def test_every_source_contributes(self):
        device = DeviceReadingSource(MockDeviceProvider(clock=_clock))
        answers = QuestionnaireReadingSource(
            InMemoryAnswerStore({"smoking": "Never", "sleep": "7-8 hours"}), clock=_clock,
        )
        composite = CompositeReadingSource([device, answers])
        readings = _run(composite.get_readings("day"))
        assert len(readings) == 12
        sleep_sources = {r.source for r in readings if r.kind is MetricKind.SLEEP}
        assert sleep_sources == {ReadingSource.DEVICE, ReadingSource.USER_INPUT}
        assert composite.get_provenance()["sources"] == "mock, questionnaire"

    def test_requires_a_source(self):
        with pytest.raises(ValueError):
            CompositeReadingSource([])
