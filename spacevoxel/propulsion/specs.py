"""Authoritative nozzle input specs.

Specs are frozen. Callers clamp them explicitly with ``clamped()`` after
loading; the generators clamp again on their own inputs regardless.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Mapping

from spacevoxel.materials.enums import parse_enum
from spacevoxel.math.interp import clamp, clamp01


class NozzleType(Enum):
    Conical = 0
    BellRao = 1


class PropellantClass(Enum):
    Solid = 0
    LoxRp1 = 1
    LoxLh2 = 2
    Methalox = 3
    Hypergolic = 4
    Exotic = 5


def _to_i32(value: int) -> int:
    value = int(value) & 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _quantize(value: float) -> int:
    # Rounded so tiny authoring noise does not churn the hash.
    return int(round(value * 10000.0))


@dataclass(frozen=True)
class NozzlePerformanceSpec:
    """Performance-defining inputs; sizes are derived from these."""

    display_name: str = "Nozzle"
    propellant: PropellantClass = PropellantClass.LoxRp1
    design_thrust_kn: float = 100.0
    chamber_pressure_mpa: float = 5.0
    expansion_ratio: float = 20.0
    design_ambient_pressure_kpa: float = 101.3
    nozzle_type: NozzleType = NozzleType.Conical
    length_factor: float = 0.80
    divergence_half_angle_deg: float = 15.0
    throat_radius_curvature_factor: float = 1.0
    wall_thickness_mm: float = 8.0
    deterministic_seed: int = 0
    profile_samples: int = 64
    radial_segments: int = 48
    generate_inner_surface: bool = True
    generate_outer_surface: bool = True
    open_ends: bool = True

    def clamped(self) -> "NozzlePerformanceSpec":
        """Return a copy with every field pulled into its safe range."""

        return replace(
            self,
            design_thrust_kn=max(0.1, self.design_thrust_kn),
            chamber_pressure_mpa=max(0.1, self.chamber_pressure_mpa),
            expansion_ratio=max(1.01, self.expansion_ratio),
            profile_samples=int(clamp(self.profile_samples, 8, 256)),
            radial_segments=int(clamp(self.radial_segments, 8, 256)),
            wall_thickness_mm=clamp(self.wall_thickness_mm, 1.0, 200.0),
            length_factor=clamp(self.length_factor, 0.2, 1.5),
            divergence_half_angle_deg=clamp(self.divergence_half_angle_deg, 5.0, 35.0),
            throat_radius_curvature_factor=clamp(self.throat_radius_curvature_factor, 0.2, 3.0),
            design_ambient_pressure_kpa=max(0.0, self.design_ambient_pressure_kpa),
        )

    @classmethod
    def from_dict(cls, data: Mapping) -> "NozzlePerformanceSpec":
        return cls(
            display_name=data.get("displayName", "Nozzle"),
            propellant=parse_enum(PropellantClass, data.get("propellant", "LoxRp1")),
            design_thrust_kn=float(data.get("designThrust_kN", 100.0)),
            chamber_pressure_mpa=float(data.get("chamberPressure_MPa", 5.0)),
            expansion_ratio=float(data.get("expansionRatio", 20.0)),
            design_ambient_pressure_kpa=float(data.get("designAmbientPressure_kPa", 101.3)),
            nozzle_type=parse_enum(NozzleType, data.get("type", "Conical")),
            length_factor=float(data.get("lengthFactor", 0.80)),
            divergence_half_angle_deg=float(data.get("divergenceHalfAngle_deg", 15.0)),
            throat_radius_curvature_factor=float(data.get("throatRadiusCurvatureFactor", 1.0)),
            wall_thickness_mm=float(data.get("wallThickness_mm", 8.0)),
            deterministic_seed=int(data.get("deterministicSeed", 0)),
            profile_samples=int(data.get("profileSamples", 64)),
            radial_segments=int(data.get("radialSegments", 48)),
            generate_inner_surface=bool(data.get("generateInnerSurface", True)),
            generate_outer_surface=bool(data.get("generateOuterSurface", True)),
            open_ends=bool(data.get("openEnds", True)),
        )


@dataclass(frozen=True)
class GeometricNozzleSpec:
    """Direct geometric inputs for the profile sampler and revolve mesher."""

    seed: int = 0
    thrust: float = 100.0
    length: float = 1.0
    throat_radius: float = 0.1
    exit_radius: float = 0.3
    radial_segments: int = 32
    flare_jitter: float = 0.0
    axial_profile_samples: int = 48
    throat_curvature_factor: float = 0.5

    def __post_init__(self) -> None:
        object.__setattr__(self, "seed", _to_i32(self.seed))

    def clamped(self) -> "GeometricNozzleSpec":
        return replace(
            self,
            thrust=max(0.0, self.thrust),
            length=max(0.01, self.length),
            throat_radius=max(0.01, self.throat_radius),
            exit_radius=max(0.01, self.exit_radius),
            radial_segments=int(clamp(self.radial_segments, 3, 128)),
            flare_jitter=clamp01(self.flare_jitter),
            axial_profile_samples=int(clamp(self.axial_profile_samples, 4, 256)),
            throat_curvature_factor=clamp01(self.throat_curvature_factor),
        )

    def spec_hash(self) -> str:
        """Stable hash of the numeric fields, used to detect stale baked meshes."""

        parts = (
            self.seed,
            _quantize(self.thrust),
            _quantize(self.length),
            _quantize(self.throat_radius),
            _quantize(self.exit_radius),
            self.radial_segments,
            self.axial_profile_samples,
            _quantize(self.throat_curvature_factor),
            _quantize(self.flare_jitter),
        )
        h = 17
        for part in parts:
            h = (h * 31 + part) & 0xFFFFFFFF
        return f"{h:08X}"

    def to_dict(self) -> Dict[str, float]:
        return {
            "seed": self.seed,
            "thrust": self.thrust,
            "length": self.length,
            "throatRadius": self.throat_radius,
            "exitRadius": self.exit_radius,
            "radialSegments": self.radial_segments,
            "flareJitter": self.flare_jitter,
            "axialProfileSamples": self.axial_profile_samples,
            "throatCurvatureFactor": self.throat_curvature_factor,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "GeometricNozzleSpec":
        return cls(
            seed=int(data.get("seed", 0)),
            thrust=float(data.get("thrust", 100.0)),
            length=float(data.get("length", 1.0)),
            throat_radius=float(data.get("throatRadius", 0.1)),
            exit_radius=float(data.get("exitRadius", 0.3)),
            radial_segments=int(data.get("radialSegments", 32)),
            flare_jitter=float(data.get("flareJitter", 0.0)),
            axial_profile_samples=int(data.get("axialProfileSamples", 48)),
            throat_curvature_factor=float(data.get("throatCurvatureFactor", 0.5)),
        )


__all__ = [
    "GeometricNozzleSpec",
    "NozzlePerformanceSpec",
    "NozzleType",
    "PropellantClass",
]
