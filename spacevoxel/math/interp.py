"""Scalar interpolation helpers."""
from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation with ``t`` clamped to [0, 1]."""

    t = clamp01(t)
    return a + (b - a) * t


def smoothstep(x: float) -> float:
    x = clamp01(x)
    return x * x * (3.0 - 2.0 * x)


def repeat(value: float, length: float) -> float:
    """Wrap ``value`` into [0, length)."""

    return clamp(value - math.floor(value / length) * length, 0.0, length)


__all__ = ["clamp", "clamp01", "lerp", "repeat", "smoothstep"]
