"""Parametric easing curves used to drive palette channels.

Every curve maps a normalized shade position ``x`` in [0, 1] to a value that is
clamped to [0, 1]. Functions accept Python floats or numpy arrays.

    >>> evaluate(CurveKind.LINEAR, 0.5)
    0.47
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

import numpy as np

from okpalette.ranges import parse_number
from okpalette.types import CurveKind

Array = Any  # float or numpy.ndarray


# === Curve implementations ===

def _linear(x, p):
    return p["m"] * x + p["c"]


def _normal(x, p):
    u = p["k"] * x - p["d"]
    return p["a"] * np.exp(-(u * u)) + p["c"]


def _quadratic(x, p):
    u = p["k"] * x - p["d"]
    return p["a"] * (u * u) + p["c"]


def _arctangent(x, p):
    return p["b"] * np.arctan(p["k"] * x - p["d"]) + p["c"]


def _sine(x, p):
    return p["a"] * np.sin(p["k"] * x - p["d"]) + p["c"]


def _exponential(x, p):
    return p["a"] * np.exp(p["k"] * x - p["d"]) + p["c"]


@dataclass(frozen=True)
class CurveSpec:
    """Implementation, ordered parameter defaults and display string of a curve."""
    fn: Callable[[Array, Mapping[str, float]], Array]
    defaults: tuple[tuple[str, float], ...]
    formula: str
    initial: str


CURVES: dict[CurveKind, CurveSpec] = {
    CurveKind.LINEAR: CurveSpec(
        _linear, (("m", 0.94), ("c", 0.00)),
        "y = mx + c", "L",
    ),
    CurveKind.NORMAL: CurveSpec(
        _normal, (("a", 0.18), ("k", 0.60), ("d", 0.00), ("c", 0.18)),
        "y = ae^(-(kx-d)²) + c", "N",
    ),
    CurveKind.QUADRATIC: CurveSpec(
        _quadratic, (("a", 0.07), ("k", 0.38), ("d", 1.40), ("c", 0.07)),
        "y = a(kx - d)² + c", "Q",
    ),
    CurveKind.ARCTANGENT: CurveSpec(
        _arctangent, (("b", 0.16), ("k", 0.40), ("d", 1.68), ("c", 0.18)),
        "y = btan⁻¹(kx - d) + c", "A",
    ),
    CurveKind.SINE: CurveSpec(
        _sine, (("a", 0.18), ("k", 0.60), ("d", 0.00), ("c", 0.18)),
        "y = asin(kx - d) + c", "S",
    ),
    CurveKind.EXPONENTIAL: CurveSpec(
        _exponential, (("a", 0.18), ("k", 0.35), ("d", 2.50), ("c", 0.00)),
        "y = ae^(kx - d) + c", "E",
    ),
}


def default_parameters(curve: Optional[CurveKind]) -> dict[str, float]:
    """Full default parameter map for a curve (empty for no curve)."""
    if curve is None:
        return {}
    return dict(CURVES[curve].defaults)


def parameter_names(curve: Optional[CurveKind]) -> list[str]:
    """Ordered parameter names; the order maps onto fixed slider slots."""
    if curve is None:
        return []
    return [name for name, _ in CURVES[curve].defaults]


def display_formula(curve: Optional[CurveKind]) -> str:
    if curve is None:
        return ""
    return CURVES[curve].formula


def curve_initial(curve: Optional[CurveKind]) -> str:
    """Single-letter tag shown next to a channel tab with an active curve."""
    if curve is None:
        return ""
    return CURVES[curve].initial


def resolve_parameters(
    curve: CurveKind,
    params: Optional[Mapping[str, float]] = None,
) -> dict[str, float]:
    """Merge ``params`` over the curve defaults, dropping unknown names.

    Values that are not finite numbers keep the default.
    """
    resolved = default_parameters(curve)
    if params:
        for name in resolved:
            value = parse_number(params.get(name))
            if value is not None:
                resolved[name] = value
    return resolved


def evaluate(
    curve: CurveKind,
    x: Array,
    params: Optional[Mapping[str, float]] = None,
) -> Array:
    """Evaluate ``curve`` at ``x`` and clamp the result to [0, 1].

    Parameters missing from ``params`` take their default value; an explicit
    zero is kept.
    """
    spec = CURVES[curve]
    y = spec.fn(x, resolve_parameters(curve, params))
    y = np.clip(y, 0.0, 1.0)
    if np.ndim(y) == 0:
        return float(y)
    return y


def normalized_positions(steps: int) -> np.ndarray:
    """Shade positions ``i / (steps - 1)``; a single shade sits at x = 0."""
    if steps <= 1:
        return np.zeros(max(steps, 0), dtype=np.float64)
    return np.arange(steps, dtype=np.float64) / (steps - 1)


def sample_curve(
    curve: CurveKind,
    steps: int,
    params: Optional[Mapping[str, float]] = None,
) -> np.ndarray:
    """Evaluate ``curve`` at every shade position of a ``steps``-shade palette."""
    return np.atleast_1d(evaluate(curve, normalized_positions(steps), params))
