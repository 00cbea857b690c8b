"""Curated Tier 0 base-colour palettes per category and subtype."""
from __future__ import annotations

from typing import Dict, Tuple

from spacevoxel.math.color import Color
from spacevoxel.math.interp import clamp01, repeat
from spacevoxel.math.rng import DeterministicRng

from .enums import MaterialCategory, MaterialSubtype

Palette = Tuple[Color, ...]

METAL_PALETTE: Palette = (
    Color(0.60, 0.60, 0.62),  # steel gray
    Color(0.55, 0.58, 0.62),  # cool gray
    Color(0.55, 0.52, 0.48),  # bronze-ish
    Color(0.45, 0.48, 0.50),  # dark gray
)

METAL_OXIDE_PALETTE: Palette = (
    Color(0.52, 0.25, 0.18),  # rust
    Color(0.45, 0.30, 0.15),  # ochre brown
    Color(0.20, 0.20, 0.20),  # black oxide
    Color(0.35, 0.22, 0.18),  # dark rust
)

STONE_PALETTE: Palette = (
    Color(0.55, 0.52, 0.48),  # granite tan
    Color(0.42, 0.42, 0.44),  # gray
    Color(0.18, 0.18, 0.20),  # basalt
    Color(0.60, 0.58, 0.54),  # light stone
)

CARBON_PALETTE: Palette = (
    Color(0.12, 0.12, 0.12),  # charcoal
    Color(0.20, 0.17, 0.14),  # dark brown
    Color(0.08, 0.08, 0.09),  # near black
    Color(0.18, 0.18, 0.20),  # graphite
)

LIQUID_PALETTE: Palette = (
    Color(0.20, 0.35, 0.45),  # bluish
    Color(0.30, 0.25, 0.18),  # amber
    Color(0.20, 0.30, 0.22),  # greenish
    Color(0.35, 0.35, 0.35),  # murky
)

GAS_PALETTE: Palette = (
    Color(0.60, 0.70, 0.80),  # pale blue
    Color(0.75, 0.75, 0.75),  # light gray
    Color(0.80, 0.65, 0.55),  # pale orange
    Color(0.70, 0.80, 0.70),  # pale green
)

_CATEGORY_PALETTES: Dict[MaterialCategory, Palette] = {
    MaterialCategory.Metal: METAL_PALETTE,
    MaterialCategory.StoneSilicate: STONE_PALETTE,
    MaterialCategory.SedimentaryCarbon: CARBON_PALETTE,
    MaterialCategory.Liquid: LIQUID_PALETTE,
    MaterialCategory.Gas: GAS_PALETTE,
}

HUE_JITTER = 0.04
SATURATION_JITTER = 0.06
VALUE_JITTER = 0.06


def palette_for(category: MaterialCategory, subtype: MaterialSubtype) -> Palette:
    if category is MaterialCategory.Metal and subtype is MaterialSubtype.MetalOxide:
        return METAL_OXIDE_PALETTE
    return _CATEGORY_PALETTES.get(category, STONE_PALETTE)


def pick_base_color(category: MaterialCategory, subtype: MaterialSubtype, rng: DeterministicRng) -> Color:
    """Pick a palette entry and perturb it slightly in HSV so repeats differ."""

    palette = palette_for(category, subtype)
    color = palette[rng.next_int(0, len(palette))]

    dh = (rng.next01() - 0.5) * HUE_JITTER
    ds = (rng.next01() - 0.5) * SATURATION_JITTER
    dv = (rng.next01() - 0.5) * VALUE_JITTER

    h, s, v = color.to_hsv()
    h = repeat(h + dh, 1.0)
    s = clamp01(s + ds)
    v = clamp01(v + dv)
    return Color.from_hsv(h, s, v)


__all__ = [
    "CARBON_PALETTE",
    "GAS_PALETTE",
    "LIQUID_PALETTE",
    "METAL_OXIDE_PALETTE",
    "METAL_PALETTE",
    "STONE_PALETTE",
    "palette_for",
    "pick_base_color",
]
