"""Dose-response calibration loaded from YAML.

Curves map a clamped metric value to minutes of life expectancy per day.
Only loading can fail (``CalibrationError``); evaluating a curve never does.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Protocol

import yaml

from amped.domains.longevity.domain_logic.metric_catalog import WELLNESS_KINDS
from amped.domains.longevity.domain_logic.metric_models import MetricKind

logger = logging.getLogger(__name__)

DEFAULT_CALIBRATION_PATH = (
    Path(__file__).resolve().parent.parent / "calibration" / "default.yaml"
)


class CalibrationError(ValueError):
    """Raised when a calibration file is missing, malformed or inconsistent."""


class ImpactCurve(Protocol):
    def minutes_at(self, value: float) -> float: ...


@dataclass(frozen=True)
class PiecewiseLinearCurve:
    """Linear interpolation between anchors, flat beyond the outer anchors."""

    anchors: tuple[tuple[float, float], ...]

    def minutes_at(self, value: float) -> float:
        xs = [x for x, _ in self.anchors]
        if value <= xs[0]:
            return self.anchors[0][1]
        if value >= xs[-1]:
            return self.anchors[-1][1]
        i = bisect.bisect_right(xs, value)
        (x0, y0), (x1, y1) = self.anchors[i - 1], self.anchors[i]
        return y0 + (y1 - y0) * (value - x0) / (x1 - x0)

    def is_non_decreasing(self) -> bool:
        ys = [y for _, y in self.anchors]
        return all(b >= a for a, b in zip(ys, ys[1:]))


@dataclass(frozen=True)
class ExponentialRiskCurve:
    """Risk doubling every ``doubling_mmhg`` above ``optimal``; no gain below it."""

    optimal: float
    doubling_mmhg: float
    minutes_per_excess_risk: float

    def minutes_at(self, value: float) -> float:
        if value <= self.optimal:
            return 0.0
        relative_risk = 2.0 ** ((value - self.optimal) / self.doubling_mmhg)
        return -self.minutes_per_excess_risk * (relative_risk - 1.0)


@dataclass(frozen=True)
class Calibration:
    """Immutable set of curves, one per metric kind."""

    version: str
    curves: Mapping[MetricKind, ImpactCurve]

    def curve_for(self, kind: MetricKind) -> ImpactCurve:
        return self.curves[kind]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _parse_piecewise(kind: MetricKind, data: dict[str, Any]) -> PiecewiseLinearCurve:
    raw = data.get("anchors") or []
    try:
        anchors = tuple((float(x), float(y)) for x, y in raw)
    except (TypeError, ValueError) as exc:
        raise CalibrationError(f"{kind.value}: anchors must be [value, minutes] pairs") from exc
    if len(anchors) < 2:
        raise CalibrationError(f"{kind.value}: at least two anchors are required")
    xs = [x for x, _ in anchors]
    if any(b <= a for a, b in zip(xs, xs[1:])):
        raise CalibrationError(f"{kind.value}: anchor values must be strictly increasing")
    curve = PiecewiseLinearCurve(anchors=anchors)
    if kind in WELLNESS_KINDS and not curve.is_non_decreasing():
        raise CalibrationError(
            f"{kind.value}: wellness-scale curves must not decrease as the score improves"
        )
    return curve


def _parse_exponential(kind: MetricKind, data: dict[str, Any]) -> ExponentialRiskCurve:
    try:
        curve = ExponentialRiskCurve(
            optimal=float(data["optimal"]),
            doubling_mmhg=float(data["doubling_mmhg"]),
            minutes_per_excess_risk=float(data["minutes_per_excess_risk"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise CalibrationError(f"{kind.value}: incomplete exponential_risk curve") from exc
    if curve.doubling_mmhg <= 0:
        raise CalibrationError(f"{kind.value}: doubling_mmhg must be positive")
    return curve


_PARSERS = {
    "piecewise_linear": _parse_piecewise,
    "exponential_risk": _parse_exponential,
}


def parse_calibration(data: dict[str, Any]) -> Calibration:
    """Build a ``Calibration`` from an already-decoded mapping."""
    if not isinstance(data, dict) or not isinstance(data.get("curves"), dict):
        raise CalibrationError("calibration must contain a 'curves' mapping")

    raw_curves: dict[str, Any] = data["curves"]
    curves: dict[MetricKind, ImpactCurve] = {}
    for kind in MetricKind:
        entry = raw_curves.get(kind.value)
        if not isinstance(entry, dict):
            raise CalibrationError(f"missing curve for metric '{kind.value}'")
        parser = _PARSERS.get(entry.get("type", ""))
        if parser is None:
            raise CalibrationError(
                f"{kind.value}: unknown curve type {entry.get('type')!r} "
                f"(expected one of: {', '.join(_PARSERS)})"
            )
        curves[kind] = parser(kind, entry)

    unknown = sorted(set(raw_curves) - {k.value for k in MetricKind})
    if unknown:
        logger.warning("Ignoring calibration curves for unknown metrics: %s", unknown)

    return Calibration(version=str(data.get("version", "")), curves=MappingProxyType(curves))


def load_calibration(path: str | Path | None = None) -> Calibration:
    """Load a calibration YAML file (the bundled default when ``path`` is empty)."""
    path = Path(path).expanduser() if path else DEFAULT_CALIBRATION_PATH
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise CalibrationError(f"cannot read calibration file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CalibrationError(f"invalid YAML in {path}: {exc}") from exc

    calibration = parse_calibration(data)
    logger.info("Loaded calibration v%s from %s", calibration.version, path)
    return calibration
