from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def clamp_inset(value: float, inset: float, extent: float) -> float:
    """Clamp `value` into `[inset, extent - inset]`.

    Used to keep a circle of radius `inset` inside a `[0, extent]` axis. When the
    circle is wider than the axis the midpoint wins.
    """

    low = float(inset)
    high = float(extent) - float(inset)
    if high < low:
        return float(extent) * 0.5
    return clamp(float(value), low, high)


def is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(float(value))
