"""Deterministic visual profiles derived from a material and a processing state.

Only render parameters are produced here; applying them to a renderer is the
caller's job.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from spacevoxel.engine.logger import VISUALS, ProcgenLogger, channel_of
from spacevoxel.errors import InvalidArgumentError
from spacevoxel.math.color import WHITE, Color
from spacevoxel.math.interp import clamp01, lerp
from spacevoxel.math.rng import DeterministicRng, hash_combine

from .enums import MaterialCategory, MaterialProperty, MaterialSubtype, PlanetAtmoChem, VisualState
from .generator import MaterialInstance
from .palettes import pick_base_color
from .planet import PlanetProfile

RUST_COLOR = Color(0.45, 0.22, 0.18)
HEAT_TINT_COLOR = Color(0.95, 0.55, 0.20)
PAINT_METALLIC_CEILING = 0.35

_SMOOTHNESS_BASE = {
    VisualState.RawOre: 0.10,
    VisualState.ConcentratedOre: 0.18,
    VisualState.RefinedStock: 0.35,
    VisualState.ManufacturedPart: 0.55,
    VisualState.PaintedPart: 0.60,
}

_SMOOTHNESS_CATEGORY_BIAS = {
    MaterialCategory.Metal: 0.10,
    MaterialCategory.StoneSilicate: -0.08,
    MaterialCategory.SedimentaryCarbon: -0.05,
}

_NOISE_BASE = {
    VisualState.RawOre: 0.85,
    VisualState.ConcentratedOre: 0.65,
    VisualState.RefinedStock: 0.35,
    VisualState.ManufacturedPart: 0.20,
    VisualState.PaintedPart: 0.10,
}

_DIRT_BASE = {
    VisualState.RawOre: 0.70,
    VisualState.ConcentratedOre: 0.45,
    VisualState.RefinedStock: 0.15,
    VisualState.ManufacturedPart: 0.05,
    VisualState.PaintedPart: 0.03,
}

_OXIDATION_BASE = {
    VisualState.RawOre: 0.60,
    VisualState.ConcentratedOre: 0.45,
    VisualState.RefinedStock: 0.20,
    VisualState.ManufacturedPart: 0.10,
    VisualState.PaintedPart: 0.05,
}


@dataclass(frozen=True)
class VisualProfile:
    visual_state: VisualState
    base_color: Color
    metallic: float
    smoothness: float
    normal_strength: float
    noise_scale: float
    noise_strength: float
    dirt_strength: float
    oxidation_strength: float
    heat_tint_strength: float
    heat_tint_color: Color
    use_paint: bool
    paint_color: Color
    paint_strength: float

    @property
    def roughness(self) -> float:
        return 1.0 - self.smoothness

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visual_state": self.visual_state.name,
            "base_color": self.base_color.to_tuple(),
            "metallic": self.metallic,
            "smoothness": self.smoothness,
            "roughness": self.roughness,
            "normal_strength": self.normal_strength,
            "noise_scale": self.noise_scale,
            "noise_strength": self.noise_strength,
            "dirt_strength": self.dirt_strength,
            "oxidation_strength": self.oxidation_strength,
            "heat_tint_strength": self.heat_tint_strength,
            "heat_tint_color": self.heat_tint_color.to_tuple(),
            "use_paint": self.use_paint,
            "paint_color": self.paint_color.to_tuple(),
            "paint_strength": self.paint_strength,
        }


def compute_metallic(category: MaterialCategory, subtype: MaterialSubtype, electrical: float) -> float:
    if category is MaterialCategory.Metal:
        # Oxides should read less metallic.
        base = 0.10 if subtype is MaterialSubtype.MetalOxide else 0.80
        return clamp01(base + 0.15 * (electrical - 0.5))
    if category is MaterialCategory.StoneSilicate:
        return 0.02
    if category is MaterialCategory.SedimentaryCarbon:
        return 0.05
    return 0.0


def compute_smoothness(
    state: VisualState,
    manufacturability: float,
    corrosion: float,
    category: MaterialCategory,
) -> float:
    base = _SMOOTHNESS_BASE.get(state, 0.35)
    bias = _SMOOTHNESS_CATEGORY_BIAS.get(category, 0.0)
    corrosion_penalty = 0.10 * (1.0 - corrosion)
    return clamp01(base + bias + 0.20 * (manufacturability - 0.5) - corrosion_penalty)


def compute_noise_strength(state: VisualState, manufacturability: float, category: MaterialCategory) -> float:
    noise = _NOISE_BASE.get(state, 0.35)
    noise *= lerp(1.15, 0.75, manufacturability)
    # Stone keeps some texture even once refined.
    if category is MaterialCategory.StoneSilicate and state >= VisualState.RefinedStock:
        noise = max(noise, 0.22)
    return clamp01(noise)


def compute_dirt_strength(state: VisualState, category: MaterialCategory) -> float:
    dirt = _DIRT_BASE.get(state, 0.15)
    if category in (MaterialCategory.SedimentaryCarbon, MaterialCategory.StoneSilicate):
        dirt = clamp01(dirt + 0.10)
    return dirt


def compute_oxidation_strength(state: VisualState, category: MaterialCategory, corrosion: float) -> float:
    if category is not MaterialCategory.Metal:
        return 0.0
    oxidation = _OXIDATION_BASE.get(state, 0.20)
    oxidation *= lerp(1.20, 0.60, corrosion)
    return clamp01(oxidation)


def compute_heat_tint_strength(
    state: VisualState,
    max_temperature: float,
    erosion: float,
    category: MaterialCategory,
) -> float:
    if state < VisualState.ManufacturedPart:
        return 0.0
    if category is not MaterialCategory.Metal:
        return 0.05 * (1.0 - max_temperature)
    vulnerability = 0.60 * (1.0 - max_temperature) + 0.40 * (1.0 - erosion)
    return clamp01(0.15 + 0.50 * vulnerability)


def visual_seed(material: MaterialInstance, state: VisualState) -> int:
    seed = hash_combine(material.planet_seed, material.node_seed)
    return hash_combine(seed, int(state) + 1)


def generate_visual_profile(
    planet: Optional[PlanetProfile],
    material: Optional[MaterialInstance],
    state: VisualState,
    paint_override: bool = False,
    paint_color: Color = WHITE,
    paint_strength: float = 0.0,
    logger: Optional[ProcgenLogger] = None,
) -> VisualProfile:
    """Derive render parameters for ``material`` in ``state``.

    The stream is seeded per (material, state) pair, so visuals never shift
    when the material generator's own stream changes order.
    """

    if material is None:
        raise InvalidArgumentError("material instance is required")
    state = VisualState(state)
    rng = DeterministicRng(visual_seed(material, state))

    props = material.properties
    max_temp = props[MaterialProperty.MaxTemperature]
    electrical = props[MaterialProperty.ElectricalConductivity]
    erosion = props[MaterialProperty.ErosionResistance]
    corrosion = props[MaterialProperty.CorrosionResistance]
    density = props[MaterialProperty.Density]
    manufacturability = props[MaterialProperty.Manufacturability]

    base_color = pick_base_color(material.category, material.subtype, rng)
    if (
        planet is not None
        and planet.atmo_chem is PlanetAtmoChem.Oxidizing
        and material.category is MaterialCategory.Metal
    ):
        base_color = base_color.lerp(RUST_COLOR, 0.15 * (1.0 - corrosion))

    metallic = compute_metallic(material.category, material.subtype, electrical)
    smoothness = compute_smoothness(state, manufacturability, corrosion, material.category)
    normal_strength = lerp(1.2, 0.6, manufacturability)
    noise_scale = lerp(0.9, 2.8, rng.next01())

    base_color = base_color.lerp(base_color.scaled(lerp(0.85, 1.05, density)), 0.10)

    paint_strength = clamp01(paint_strength)
    visual_state = state
    if paint_override:
        visual_state = VisualState.PaintedPart
        # Paint dulls the metallic response without erasing it.
        metallic = lerp(metallic, min(metallic, PAINT_METALLIC_CEILING), 0.65 * paint_strength)
        smoothness = lerp(smoothness, clamp01(smoothness + 0.15), 0.30 * paint_strength)

    profile = VisualProfile(
        visual_state=visual_state,
        base_color=base_color,
        metallic=metallic,
        smoothness=smoothness,
        normal_strength=normal_strength,
        noise_scale=noise_scale,
        noise_strength=compute_noise_strength(state, manufacturability, material.category),
        dirt_strength=compute_dirt_strength(state, material.category),
        oxidation_strength=compute_oxidation_strength(state, material.category, corrosion),
        heat_tint_strength=compute_heat_tint_strength(state, max_temp, erosion, material.category),
        heat_tint_color=HEAT_TINT_COLOR,
        use_paint=bool(paint_override),
        paint_color=paint_color,
        paint_strength=paint_strength,
    )
    log = channel_of(logger, VISUALS)
    if log and log.enabled:
        log.debug(
            "Visual %s/%s: metallic=%.2f smoothness=%.2f color=%s",
            material.display_name,
            visual_state.name,
            profile.metallic,
            profile.smoothness,
            base_color.to_hex(),
        )
    return profile


__all__ = [
    "HEAT_TINT_COLOR",
    "RUST_COLOR",
    "VisualProfile",
    "compute_dirt_strength",
    "compute_heat_tint_strength",
    "compute_metallic",
    "compute_noise_strength",
    "compute_oxidation_strength",
    "compute_smoothness",
    "generate_visual_profile",
    "visual_seed",
]
