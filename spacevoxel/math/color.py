"""Linear float colour used by the visual profiles."""
from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import Tuple

from .interp import clamp01, lerp


@dataclass(frozen=True)
class Color:
    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_hsv(cls, h: float, s: float, v: float) -> "Color":
        r, g, b = colorsys.hsv_to_rgb(h, s, v)
        return cls(r, g, b, 1.0)

    def to_hsv(self) -> Tuple[float, float, float]:
        return colorsys.rgb_to_hsv(self.r, self.g, self.b)

    def lerp(self, other: "Color", t: float) -> "Color":
        return Color(
            lerp(self.r, other.r, t),
            lerp(self.g, other.g, t),
            lerp(self.b, other.b, t),
            lerp(self.a, other.a, t),
        )

    def scaled(self, factor: float) -> "Color":
        """Scale RGB, leaving alpha untouched."""

        return Color(self.r * factor, self.g * factor, self.b * factor, self.a)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def to_rgb255(self) -> Tuple[int, int, int]:
        return tuple(int(round(clamp01(c) * 255.0)) for c in (self.r, self.g, self.b))

    def to_hex(self) -> str:
        r, g, b = self.to_rgb255()
        return f"#{r:02X}{g:02X}{b:02X}"


WHITE = Color(1.0, 1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0, 1.0)


__all__ = ["Color", "WHITE", "BLACK"]
