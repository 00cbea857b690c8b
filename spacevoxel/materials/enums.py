"""Closed enumerations for Tier 0 material generation."""
from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, Tuple, Type, TypeVar


class MaterialCategory(Enum):
    Metal = 0
    StoneSilicate = 1
    SedimentaryCarbon = 2
    Liquid = 3
    Gas = 4


class MaterialSubtype(Enum):
    # Metal family
    NativeMetal = 0
    MetalOxide = 1
    SulfideOre = 2
    # Stone family
    SilicateRock = 3
    VolcanicGlass = 4
    CeramicMineral = 5
    # Sedimentary family
    CarbonRich = 6
    OrganicSediment = 7
    # Liquid family
    WaterBrine = 8
    HydrocarbonLiquid = 9
    ReactiveSolvent = 10
    # Gas family
    InertGas = 11
    ReactiveGas = 12


class PlanetTempBand(Enum):
    Cryo = 0
    Temperate = 1
    Hot = 2
    Extreme = 3


class PlanetPressureBand(Enum):
    Low = 0
    Normal = 1
    High = 2


class PlanetAtmoChem(Enum):
    Reducing = 0
    Neutral = 1
    Oxidizing = 2


class HydrosphereType(Enum):
    # Authored as "None"; parse_enum maps that name here.
    NoHydrosphere = 0
    Water = 1
    Acidic = 2
    Hydrocarbon = 3


class MaterialProperty(Enum):
    Strength = 0
    MaxTemperature = 1
    ThermalConductivity = 2
    ElectricalConductivity = 3
    EnergyPotential = 4
    ErosionResistance = 5
    CorrosionResistance = 6
    Density = 7
    Manufacturability = 8


class VisualState(IntEnum):
    """Processing state, ordered from raw ore to painted part."""

    RawOre = 0
    ConcentratedOre = 1
    RefinedStock = 2
    ManufacturedPart = 3
    PaintedPart = 4


CATEGORY_ORDER: Tuple[MaterialCategory, ...] = (
    MaterialCategory.Metal,
    MaterialCategory.StoneSilicate,
    MaterialCategory.SedimentaryCarbon,
    MaterialCategory.Liquid,
    MaterialCategory.Gas,
)


SUBTYPES_BY_CATEGORY: Dict[MaterialCategory, Tuple[MaterialSubtype, ...]] = {
    MaterialCategory.Metal: (
        MaterialSubtype.NativeMetal,
        MaterialSubtype.MetalOxide,
        MaterialSubtype.SulfideOre,
    ),
    MaterialCategory.StoneSilicate: (
        MaterialSubtype.SilicateRock,
        MaterialSubtype.VolcanicGlass,
        MaterialSubtype.CeramicMineral,
    ),
    MaterialCategory.SedimentaryCarbon: (
        MaterialSubtype.CarbonRich,
        MaterialSubtype.OrganicSediment,
    ),
    MaterialCategory.Liquid: (
        MaterialSubtype.WaterBrine,
        MaterialSubtype.HydrocarbonLiquid,
        MaterialSubtype.ReactiveSolvent,
    ),
    MaterialCategory.Gas: (
        MaterialSubtype.InertGas,
        MaterialSubtype.ReactiveGas,
    ),
}


_ALIASES: Dict[str, str] = {"none": "NoHydrosphere", "dry": "NoHydrosphere"}


E = TypeVar("E", bound=Enum)


def parse_enum(enum_type: Type[E], value: object) -> E:
    """Resolve an authored name (case-insensitive) or ordinal into ``enum_type``."""

    if isinstance(value, enum_type):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return enum_type(value)
    if value is None:
        raise ValueError(f"Missing {enum_type.__name__} value")
    key = str(value).strip()
    lowered = key.lower()
    for member in enum_type:
        if member.name.lower() == lowered:
            return member
    alias = _ALIASES.get(lowered)
    if alias is not None and alias in enum_type.__members__:
        return enum_type[alias]
    raise ValueError(f"Unknown {enum_type.__name__} '{key}'")


def subtypes_for(category: MaterialCategory) -> Tuple[MaterialSubtype, ...]:
    return SUBTYPES_BY_CATEGORY[category]


__all__ = [
    "CATEGORY_ORDER",
    "HydrosphereType",
    "MaterialCategory",
    "MaterialProperty",
    "MaterialSubtype",
    "PlanetAtmoChem",
    "PlanetPressureBand",
    "PlanetTempBand",
    "SUBTYPES_BY_CATEGORY",
    "VisualState",
    "parse_enum",
    "subtypes_for",
]
