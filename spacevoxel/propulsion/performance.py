"""Derived nozzle quantities from a performance spec.

This is a simple, stable v0 model meant for shape and gameplay consistency.
The thrust coefficient and Isp values are placeholders, not rocket physics.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional

from spacevoxel.engine.logger import PROPULSION, ProcgenLogger, channel_of
from spacevoxel.errors import InvalidArgumentError
from spacevoxel.math.interp import clamp, clamp01, lerp

from .specs import NozzlePerformanceSpec, NozzleType, PropellantClass

KN_TO_N = 1000.0
MPA_TO_PA = 1_000_000.0
SEA_LEVEL_KPA = 101.3

CF_MIN = 0.8
CF_MAX = 2.2
MIN_NOZZLE_LENGTH = 0.02

BASE_CF: Dict[PropellantClass, float] = {
    PropellantClass.Solid: 1.35,
    PropellantClass.LoxRp1: 1.45,
    PropellantClass.LoxLh2: 1.55,
    PropellantClass.Methalox: 1.50,
    PropellantClass.Hypergolic: 1.42,
    PropellantClass.Exotic: 1.65,
}


@dataclass(frozen=True)
class NozzleDerived:
    throat_area_m2: float
    exit_area_m2: float
    throat_radius_m: float
    exit_radius_m: float
    nozzle_length_m: float
    thrust_coefficient: float
    effective_isp_sl_s: float
    effective_isp_vac_s: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "throatArea_m2": self.throat_area_m2,
            "exitArea_m2": self.exit_area_m2,
            "throatRadius_m": self.throat_radius_m,
            "exitRadius_m": self.exit_radius_m,
            "nozzleLength_m": self.nozzle_length_m,
            "thrustCoefficient": self.thrust_coefficient,
            "effectiveIspSeaLevel_s": self.effective_isp_sl_s,
            "effectiveIspVacuum_s": self.effective_isp_vac_s,
        }

    def __str__(self) -> str:
        return (
            f"At={self.throat_area_m2:.4f} m^2, Ae={self.exit_area_m2:.4f} m^2, "
            f"rt={self.throat_radius_m:.3f} m, re={self.exit_radius_m:.3f} m, "
            f"L={self.nozzle_length_m:.3f} m, Cf={self.thrust_coefficient:.3f}"
        )


def base_cf(propellant: PropellantClass) -> float:
    return BASE_CF.get(propellant, 1.45)


def ambient_cf_factor(design_ambient_pressure_kpa: float) -> float:
    """Vacuum gives 1.0, sea level and above 0.92."""

    pa = clamp(design_ambient_pressure_kpa, 0.0, 200.0)
    return lerp(1.00, 0.92, pa / SEA_LEVEL_KPA)


def epsilon_cf_factor(expansion_ratio: float) -> float:
    """Modest log growth with expansion ratio over [1.01, 200]."""

    e = clamp(expansion_ratio, 1.01, 200.0)
    t = math.log(e) / math.log(200.0)
    return lerp(0.92, 1.06, t)


def derive_nozzle_performance(
    spec: Optional[NozzlePerformanceSpec],
    logger: Optional[ProcgenLogger] = None,
) -> NozzleDerived:
    if spec is None:
        raise InvalidArgumentError("nozzle performance spec is required")
    spec = spec.clamped()

    thrust_n = spec.design_thrust_kn * KN_TO_N
    chamber_pa = spec.chamber_pressure_mpa * MPA_TO_PA
    epsilon = spec.expansion_ratio

    cf = base_cf(spec.propellant) * ambient_cf_factor(spec.design_ambient_pressure_kpa) * epsilon_cf_factor(epsilon)
    cf = clamp(cf, CF_MIN, CF_MAX)

    # F = Cf * Pc * At
    throat_area = thrust_n / (cf * chamber_pa)
    exit_area = epsilon * throat_area

    throat_radius = math.sqrt(throat_area / math.pi)
    exit_radius = math.sqrt(exit_area / math.pi)

    theta = math.radians(clamp(spec.divergence_half_angle_deg, 5.0, 35.0))
    conical_length = (exit_radius - throat_radius) / max(0.05, math.tan(theta))
    base_length = conical_length if spec.nozzle_type is NozzleType.Conical else 0.8 * conical_length
    length = max(MIN_NOZZLE_LENGTH, spec.length_factor * base_length)

    isp_vac = 240.0 + 120.0 * clamp01((cf - 1.0) / 0.8)
    isp_sl = isp_vac * ambient_cf_factor(SEA_LEVEL_KPA)

    derived = NozzleDerived(
        throat_area_m2=throat_area,
        exit_area_m2=exit_area,
        throat_radius_m=throat_radius,
        exit_radius_m=exit_radius,
        nozzle_length_m=length,
        thrust_coefficient=cf,
        effective_isp_sl_s=isp_sl,
        effective_isp_vac_s=isp_vac,
    )
    log = channel_of(logger, PROPULSION)
    if log and log.enabled:
        log.debug("Derived %s: %s", spec.display_name, derived)
    return derived


__all__ = [
    "BASE_CF",
    "NozzleDerived",
    "ambient_cf_factor",
    "base_cf",
    "derive_nozzle_performance",
    "epsilon_cf_factor",
]
