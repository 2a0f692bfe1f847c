"""Easing curves for tweens.

Each curve maps progress t in [0, 1] to eased progress. Only the
"in" curves are written out; "out" and "in_out" variants are mirrored
from them.
"""

from enum import Enum
from typing import Callable
import math

EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    return t


def quad_in(t: float) -> float:
    return t * t


def cubic_in(t: float) -> float:
    return t * t * t


def sine_in(t: float) -> float:
    return 1 - math.cos(t * math.pi / 2)


def back_out(t: float) -> float:
    """Overshoots the end slightly before settling."""
    s = 1.70158
    u = t - 1
    return 1 + (s + 1) * u ** 3 + s * u ** 2


def mirror(curve: EasingFunc) -> EasingFunc:
    """Turn an ease-in curve into the matching ease-out."""
    return lambda t: 1 - curve(1 - t)


def symmetric(curve: EasingFunc) -> EasingFunc:
    """Ease in over the first half and out over the second."""
    def eased(t: float) -> float:
        if t < 0.5:
            return curve(2 * t) / 2
        return 1 - curve(2 - 2 * t) / 2
    return eased


class Easing(Enum):
    """Named easing curves; the value is the curve's name."""

    LINEAR = "linear"
    EASE_IN_QUAD = "ease_in_quad"
    EASE_OUT_QUAD = "ease_out_quad"
    EASE_IN_OUT_QUAD = "ease_in_out_quad"
    EASE_IN_CUBIC = "ease_in_cubic"
    EASE_OUT_CUBIC = "ease_out_cubic"
    EASE_IN_OUT_CUBIC = "ease_in_out_cubic"
    EASE_IN_SINE = "ease_in_sine"
    EASE_OUT_SINE = "ease_out_sine"
    EASE_IN_OUT_SINE = "ease_in_out_sine"
    EASE_OUT_BACK = "ease_out_back"


_CURVES: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_OUT_BACK: back_out,
}

for _family, _curve in (("QUAD", quad_in), ("CUBIC", cubic_in), ("SINE", sine_in)):
    _CURVES[Easing[f"EASE_IN_{_family}"]] = _curve
    _CURVES[Easing[f"EASE_OUT_{_family}"]] = mirror(_curve)
    _CURVES[Easing[f"EASE_IN_OUT_{_family}"]] = symmetric(_curve)


def get_easing(easing: Easing | str) -> EasingFunc:
    """Look up a curve by enum member or name ("ease_out_cubic").

    Raises:
        ValueError: If the name is unknown
    """
    if isinstance(easing, str):
        try:
            easing = Easing(easing.lower())
        except ValueError:
            raise ValueError(f"Unknown easing function: {easing}") from None
    return _CURVES[easing]
