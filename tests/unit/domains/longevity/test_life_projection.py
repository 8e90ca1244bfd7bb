"""Unit tests for life projection, optimal metrics and life tables."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from amped.domains.longevity.connectors import LifeTable
from amped.domains.longevity.connectors.life_tables import (
    InterpolatedLifeTable,
    get_life_table,
)
from amped.domains.longevity.domain_logic.life_projection import (
    LifeProjectionEngine,
    gain_percent,
)
from amped.domains.longevity.domain_logic.metric_catalog import CATALOG, make_reading, range_of
from amped.domains.longevity.domain_logic.metric_models import (
    Gender,
    LifeProjection,
    MetricKind,
    UserProfile,
)
from amped.domains.longevity.domain_logic.optimal_metrics import (
    OptimalMetricsProvider,
    optimal_readings_for,
)

_TS = datetime(2026, 3, 1, tzinfo=timezone.utc)
_MALE_30 = UserProfile(birth_year=1996, gender=Gender.MALE)


class _FlatTable:
    def __init__(self, years: float) -> None:
        self.years = years

    def years_remaining(self, age, gender):
        return self.years


# ---------------------------------------------------------------------------
# gain_percent
# ---------------------------------------------------------------------------

class TestGainPercent:
    def test_doubling_is_full_gain(self):
        assert gain_percent(2.0, 4.0) == 1.0

    def test_zero_current_is_floored_not_infinite(self):
        assert gain_percent(0.0, 4.0) == pytest.approx(40.0)

    def test_never_negative(self):
        assert gain_percent(5.0, 4.0) == 0.0


# ---------------------------------------------------------------------------
# Life tables
# ---------------------------------------------------------------------------

class TestLifeTable:
    def test_tabulated_ages(self, life_table):
        assert life_table.years_remaining(30, Gender.MALE) == 42.8
        assert life_table.years_remaining(30, Gender.FEMALE) == 47.7

    def test_linear_interpolation(self, life_table):
        assert life_table.years_remaining(35, Gender.MALE) == pytest.approx(38.15)

    def test_unknown_gender_uses_mean(self, life_table):
        mean = (42.8 + 47.7) / 2
        assert life_table.years_remaining(30, None) == pytest.approx(mean)
        assert life_table.years_remaining(30, Gender.PREFER_NOT_TO_SAY) == pytest.approx(mean)

    def test_clamped_beyond_table(self, life_table):
        assert life_table.years_remaining(105, Gender.MALE) == 3.0
        assert life_table.years_remaining(-2, Gender.FEMALE) == 76.8

    def test_satisfies_protocol(self, life_table):
        assert isinstance(life_table, LifeTable)

    def test_unknown_table_name(self):
        with pytest.raises(ValueError, match="who_2023"):
            get_life_table("nope")

    def test_empty_table_rejected(self):
        with pytest.raises(ValueError):
            InterpolatedLifeTable({}, {0: 80.0})


# ---------------------------------------------------------------------------
# Optimal metrics
# ---------------------------------------------------------------------------

class TestOptimalMetrics:
    def test_one_reading_per_kind_at_optimum(self):
        readings = optimal_readings_for(_MALE_30, _TS)
        assert [r.kind for r in readings] == list(CATALOG)
        for reading in readings:
            assert reading.value == CATALOG[reading.kind].optimal_value
            lo, hi = range_of(reading.kind)
            assert lo <= reading.value <= hi

    def test_optimal_set_beats_baseline(self, aggregate_engine):
        optimal = aggregate_engine.total_impact(optimal_readings_for(UserProfile(), _TS))
        baseline = aggregate_engine.total_impact(
            [make_reading(k, s.baseline_value, _TS) for k, s in CATALOG.items()]
        )
        assert optimal.total_minutes_per_day > baseline.total_minutes_per_day

    def test_provider_is_callable_source(self):
        assert OptimalMetricsProvider()(_MALE_30, _TS) == optimal_readings_for(_MALE_30, _TS)


# ---------------------------------------------------------------------------
# Projection engine
# ---------------------------------------------------------------------------

class TestProjection:
    def test_neutral_aggregate_keeps_baseline(self, projection_engine, aggregate_engine):
        projection = projection_engine.project(aggregate_engine.total_impact([]), _MALE_30)
        assert projection.current_age == 30
        assert projection.baseline_years_remaining == 42.8
        assert projection.adjusted_years_remaining == 42.8
        assert 0.0 < projection.projection_percentage < 1.0

    def test_daily_minutes_convert_linearly(self, projection_engine, aggregate_engine):
        aggregate = aggregate_engine.total_impact([make_reading(MetricKind.SMOKING, 1.0, _TS)])
        projection = projection_engine.project(aggregate, _MALE_30)
        # minutes/day * 365.25 / minutes-per-year == minutes/day / 1440
        expected = 42.8 + (-348.3 / 1440.0) * 42.8
        assert projection.adjusted_years_remaining == pytest.approx(expected)
        assert projection.net_impact_years < 0
        assert "reducing" in projection.interpretation

    def test_optimal_profile_fills_battery(self, projection_engine, aggregate_engine):
        aggregate = aggregate_engine.total_impact(optimal_readings_for(_MALE_30, _TS))
        projection = projection_engine.project(aggregate, _MALE_30)
        assert projection.projection_percentage == pytest.approx(1.0)

    def test_percentage_clamped_to_one(self, aggregate_engine):
        engine = LifeProjectionEngine(
            _FlatTable(40.0), aggregate_engine,
            optimal_readings=lambda profile, ts: [],
            as_of_year=2026,
        )
        aggregate = aggregate_engine.total_impact([make_reading(MetricKind.NUTRITION, 10.0, _TS)])
        assert engine.project(aggregate, UserProfile()).projection_percentage == 1.0

    def test_adjusted_years_floored_at_zero(self, aggregate_engine):
        engine = LifeProjectionEngine(_FlatTable(40.0), aggregate_engine, as_of_year=2026)
        assert engine.adjusted_years_remaining(-10_000.0, 40.0) == 0.0

    def test_zero_baseline_does_not_divide_by_zero(self, aggregate_engine):
        engine = LifeProjectionEngine(_FlatTable(0.0), aggregate_engine, as_of_year=2026)
        projection = engine.project(aggregate_engine.total_impact([]), UserProfile())
        assert projection.projection_percentage == 0.0
        assert projection.adjusted_years_remaining == 0.0

    def test_missing_birth_year_assumes_thirty(self, projection_engine, aggregate_engine):
        projection = projection_engine.project(aggregate_engine.total_impact([]), UserProfile())
        assert projection.current_age == 30

    def test_explicit_year_overrides_engine_year(self, projection_engine, aggregate_engine):
        projection = projection_engine.project(
            aggregate_engine.total_impact([]), _MALE_30, as_of_year=2036,
        )
        assert projection.current_age == 40
        assert projection.baseline_years_remaining == 33.5

    def test_project_is_referentially_transparent(self, projection_engine, aggregate_engine):
        aggregate = aggregate_engine.total_impact([make_reading(MetricKind.SLEEP, 6.0, _TS)])
        assert projection_engine.project(aggregate, _MALE_30) == projection_engine.project(
            aggregate, _MALE_30
        )

    def test_potential_gain_matches_gain_percent(self, projection_engine, aggregate_engine):
        aggregate = aggregate_engine.total_impact([make_reading(MetricKind.SMOKING, 1.0, _TS)])
        current = projection_engine.project(aggregate, _MALE_30).adjusted_years_remaining
        optimal = projection_engine.optimal_years_remaining(_MALE_30)
        assert projection_engine.potential_gain(aggregate, _MALE_30) == gain_percent(current, optimal)
        assert projection_engine.potential_gain(aggregate, _MALE_30) > 0


class TestBehaviorDecay:
    def test_decay_shrinks_projected_effect(self, life_table, aggregate_engine):
        linear = LifeProjectionEngine(life_table, aggregate_engine, as_of_year=2026)
        decayed = LifeProjectionEngine(
            life_table, aggregate_engine, behavior_decay_rate=0.05, as_of_year=2026,
        )
        assert abs(decayed.impact_years(-100.0, 40.0)) < abs(linear.impact_years(-100.0, 40.0))

    def test_negative_decay_rejected(self, life_table, aggregate_engine):
        with pytest.raises(ValueError):
            LifeProjectionEngine(life_table, aggregate_engine, behavior_decay_rate=-1.0)


class TestInterpretation:
    @pytest.mark.parametrize(
        "net, expected",
        [
            (6.0, "Significantly extending"),
            (3.0, "Moderately extending"),
            (1.0, "Slightly extending"),
            (0.0, "Maintaining"),
            (-1.0, "Slightly reducing"),
            (-3.0, "Moderately reducing"),
            (-6.0, "Significantly reducing"),
        ],
    )
    def test_bands(self, net, expected):
        projection = LifeProjection(
            current_age=40.0,
            baseline_years_remaining=30.0,
            adjusted_years_remaining=30.0 + net,
            projection_percentage=0.5,
        )
        assert projection.interpretation.startswith(expected)
        assert projection.projected_lifespan_years == pytest.approx(70.0 + net)
