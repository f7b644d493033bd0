from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def angle_diff(curr: float, next_: float) -> float:
    """Signed shortest difference in degrees going from `curr` to `next_`.

    `asin(sin(x))` folds the raw difference into [-90, 90], so 179 -> -179 is +2
    rather than -358.
    """

    delta = math.radians(float(next_)) - math.radians(float(curr))
    return math.degrees(math.asin(math.sin(delta)))


def lerp_angle(a: float, b: float, t: float) -> float:
    # Not normalized: the result may leave [-180, 180] when crossing the seam.
    return lerp(a, a + angle_diff(a, b), t)
