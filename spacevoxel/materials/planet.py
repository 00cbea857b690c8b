"""Planet profiles and their Tier 0 environmental modifiers."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional

from spacevoxel.engine.logger import MATERIALS, ChannelLogger
from spacevoxel.math.rng import to_u32

from .enums import (
    HydrosphereType,
    MaterialCategory,
    MaterialProperty,
    MaterialSubtype,
    PlanetAtmoChem,
    PlanetPressureBand,
    PlanetTempBand,
    parse_enum,
)
from .properties import PropertyVector


@dataclass(frozen=True)
class PlanetProfile:
    """Environmental bands, category weights and the stable planet seed."""

    id: str = "planet"
    name: str = "Planet"
    temp_band: PlanetTempBand = PlanetTempBand.Temperate
    pressure_band: PlanetPressureBand = PlanetPressureBand.Normal
    atmo_chem: PlanetAtmoChem = PlanetAtmoChem.Neutral
    hydrosphere: HydrosphereType = HydrosphereType.Water
    weight_metal: float = 1.0
    weight_stone_silicate: float = 2.0
    weight_sedimentary_carbon: float = 1.0
    weight_liquid: float = 1.0
    weight_gas: float = 1.0
    planet_seed: int = 12345

    def __post_init__(self) -> None:
        object.__setattr__(self, "planet_seed", to_u32(self.planet_seed))

    def weight_for(self, category: MaterialCategory) -> float:
        raw = {
            MaterialCategory.Metal: self.weight_metal,
            MaterialCategory.StoneSilicate: self.weight_stone_silicate,
            MaterialCategory.SedimentaryCarbon: self.weight_sedimentary_carbon,
            MaterialCategory.Liquid: self.weight_liquid,
            MaterialCategory.Gas: self.weight_gas,
        }[category]
        return max(0.0, raw)

    @classmethod
    def from_dict(cls, data: Dict) -> "PlanetProfile":
        weights = data.get("weights", {})
        return cls(
            id=data["id"],
            name=data.get("name", data["id"].replace("_", " ").title()),
            temp_band=parse_enum(PlanetTempBand, data.get("tempBand", "Temperate")),
            pressure_band=parse_enum(PlanetPressureBand, data.get("pressureBand", "Normal")),
            atmo_chem=parse_enum(PlanetAtmoChem, data.get("atmoChem", "Neutral")),
            hydrosphere=parse_enum(HydrosphereType, data.get("hydrosphere", "Water")),
            weight_metal=float(weights.get("metal", data.get("weightMetal", 1.0))),
            weight_stone_silicate=float(weights.get("stoneSilicate", data.get("weightStoneSilicate", 2.0))),
            weight_sedimentary_carbon=float(
                weights.get("sedimentaryCarbon", data.get("weightSedimentaryCarbon", 1.0))
            ),
            weight_liquid=float(weights.get("liquid", data.get("weightLiquid", 1.0))),
            weight_gas=float(weights.get("gas", data.get("weightGas", 1.0))),
            planet_seed=int(data.get("planetSeed", 12345)),
        )


def compute_planet_modifiers(
    planet: PlanetProfile,
    category: MaterialCategory,
    subtype: MaterialSubtype,
) -> PropertyVector:
    """Additive bias vector for a material of ``category``/``subtype`` on ``planet``.

    Magnitudes stay small so they bias the category templates without
    dominating them.
    """

    v = PropertyVector.zero()

    if planet.temp_band is PlanetTempBand.Cryo:
        v[MaterialProperty.MaxTemperature] -= 0.03
        v[MaterialProperty.Manufacturability] -= 0.02
    elif planet.temp_band is PlanetTempBand.Hot:
        v[MaterialProperty.MaxTemperature] += 0.08
        v[MaterialProperty.Manufacturability] -= 0.03
    elif planet.temp_band is PlanetTempBand.Extreme:
        v[MaterialProperty.MaxTemperature] += 0.10
        v[MaterialProperty.Manufacturability] -= 0.05
        v[MaterialProperty.ErosionResistance] += 0.03

    if planet.pressure_band is PlanetPressureBand.Low:
        v[MaterialProperty.Density] -= 0.02
    elif planet.pressure_band is PlanetPressureBand.High:
        v[MaterialProperty.Strength] += 0.05
        v[MaterialProperty.Density] += 0.03

    if planet.atmo_chem is PlanetAtmoChem.Reducing:
        v[MaterialProperty.CorrosionResistance] += 0.02
    elif planet.atmo_chem is PlanetAtmoChem.Oxidizing:
        # Metals suffer more than silicates in oxidizing environments.
        if (
            category is MaterialCategory.Metal
            or subtype is MaterialSubtype.SulfideOre
            or subtype is MaterialSubtype.NativeMetal
        ):
            v[MaterialProperty.CorrosionResistance] -= 0.08
        else:
            v[MaterialProperty.CorrosionResistance] -= 0.03

    if planet.hydrosphere is HydrosphereType.Water:
        if category is MaterialCategory.Metal:
            v[MaterialProperty.CorrosionResistance] -= 0.08
        if category is MaterialCategory.StoneSilicate:
            v[MaterialProperty.CorrosionResistance] += 0.05
    elif planet.hydrosphere is HydrosphereType.Acidic:
        if category is MaterialCategory.Metal:
            v[MaterialProperty.CorrosionResistance] -= 0.12
        else:
            v[MaterialProperty.CorrosionResistance] -= 0.06
    elif planet.hydrosphere is HydrosphereType.Hydrocarbon:
        if category is MaterialCategory.Metal:
            v[MaterialProperty.CorrosionResistance] += 0.02

    return v


class PlanetDatabase:
    """Planet profiles read from disk."""

    def __init__(self, log: Optional[ChannelLogger] = None) -> None:
        self.log = log or ChannelLogger(MATERIALS)
        self._planets: Dict[str, PlanetProfile] = {}

    def load(self, path: Path) -> None:
        if not path.exists():
            return
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            self.log.warning("Skipping malformed planet file %s", path)
            return
        if isinstance(data, dict):
            data = data.get("planets", [data])
        for entry in data:
            try:
                planet = PlanetProfile.from_dict(entry)
            except (KeyError, TypeError, ValueError) as exc:
                self.log.warning("Skipping planet entry in %s: %s", path, exc)
                continue
            self._planets[planet.id] = planet

    def load_directory(self, directory: Path) -> None:
        if not directory.exists():
            return
        for path in sorted(directory.glob("*.json")):
            self.load(path)

    def add(self, planet: PlanetProfile) -> None:
        self._planets[planet.id] = planet

    def get(self, planet_id: str) -> PlanetProfile:
        return self._planets[planet_id]

    def find(self, planet_id: str) -> Optional[PlanetProfile]:
        return self._planets.get(planet_id)

    def all(self) -> Iterable[PlanetProfile]:
        return list(self._planets.values())

    def __len__(self) -> int:
        return len(self._planets)


__all__ = ["PlanetDatabase", "PlanetProfile", "compute_planet_modifiers"]
