"""Tier 0 material generator, deterministic from planet seed and node seed."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from spacevoxel.engine.logger import MATERIALS, ProcgenLogger, channel_of
from spacevoxel.errors import ConfigurationMissingError, InvalidArgumentError
from spacevoxel.math.interp import clamp01
from spacevoxel.math.rng import DeterministicRng, hash_combine, to_u32

from . import tier_rules
from .enums import CATEGORY_ORDER, MaterialCategory, MaterialProperty, MaterialSubtype, subtypes_for
from .planet import PlanetProfile, compute_planet_modifiers
from .properties import PropertyVector
from .templates import CategoryTemplate, TemplateDatabase

ABUNDANCE_BASE: Dict[MaterialCategory, float] = {
    MaterialCategory.Metal: 0.35,
    MaterialCategory.StoneSilicate: 0.65,
    MaterialCategory.SedimentaryCarbon: 0.45,
    MaterialCategory.Liquid: 0.50,
    MaterialCategory.Gas: 0.55,
}
ABUNDANCE_SPREAD = 0.25


@dataclass(frozen=True)
class MaterialInstance:
    """Generated material. Never mutated after creation."""

    display_name: str
    category: MaterialCategory
    subtype: MaterialSubtype
    planet_seed: int
    node_seed: int
    abundance: float
    dominant_property: MaterialProperty
    weakness_property: MaterialProperty
    values: Tuple[float, ...]

    @property
    def properties(self) -> PropertyVector:
        """A fresh copy of the final property vector."""

        return PropertyVector(self.values)

    def value(self, prop: MaterialProperty) -> float:
        return self.properties[prop]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "display_name": self.display_name,
            "category": self.category.name,
            "subtype": self.subtype.name,
            "planet_seed": self.planet_seed,
            "node_seed": self.node_seed,
            "abundance": self.abundance,
            "dominant": self.dominant_property.name,
            "weakness": self.weakness_property.name,
            "properties": self.properties.to_dict(),
        }

    def __str__(self) -> str:
        return (
            f"{self.display_name} [{self.category.name}/{self.subtype.name}] "
            f"Dom={self.dominant_property.name} Weak={self.weakness_property.name} "
            f"Props=({self.properties})"
        )


TemplateSource = Union[TemplateDatabase, Mapping[MaterialCategory, CategoryTemplate]]


def choose_category(planet: PlanetProfile, rng: DeterministicRng) -> MaterialCategory:
    weights = [planet.weight_for(category) for category in CATEGORY_ORDER]
    total = sum(weights)
    if total <= 0.0:
        return MaterialCategory.StoneSilicate
    r = rng.next01() * total
    for category, weight in zip(CATEGORY_ORDER[:-1], weights[:-1]):
        r -= weight
        if r < 0.0:
            return category
    return MaterialCategory.Gas


def choose_subtype(category: MaterialCategory, rng: DeterministicRng) -> MaterialSubtype:
    options = subtypes_for(category)
    return options[rng.next_int(0, len(options))]


def sample_from_template(template: CategoryTemplate, rng: DeterministicRng) -> PropertyVector:
    means = template.mean_vector()
    spreads = template.spread_vector()
    vector = PropertyVector.zero()
    for index in range(len(vector)):
        centered = 2.0 * rng.tri01() - 1.0
        vector[index] = means[index] + spreads[index] * centered
    vector.clamp01()
    return vector


def choose_dominant(template: CategoryTemplate, vector: PropertyVector) -> MaterialProperty:
    candidates = template.dominant_candidates
    if not candidates:
        return MaterialProperty.Strength
    best = candidates[0]
    for prop in candidates[1:]:
        if vector[prop] > vector[best]:
            best = prop
    return best


def choose_weakness(template: CategoryTemplate, vector: PropertyVector) -> MaterialProperty:
    candidates = template.weakness_candidates
    if not candidates:
        return MaterialProperty.Manufacturability
    worst = candidates[0]
    for prop in candidates[1:]:
        if vector[prop] < vector[worst]:
            worst = prop
    return worst


def estimate_abundance(category: MaterialCategory, rng: DeterministicRng) -> float:
    base = ABUNDANCE_BASE.get(category, 0.50)
    return clamp01(base + ABUNDANCE_SPREAD * (2.0 * rng.tri01() - 1.0))


def make_display_name(
    base_name: Optional[str],
    category: MaterialCategory,
    subtype: MaterialSubtype,
    node_seed: int,
) -> str:
    suffix = f"{to_u32(node_seed) % 10000:04d}"
    return f"{base_name or ''} ({category.name}:{subtype.name}) #{suffix}"


class MaterialGenerator:
    """Builds material instances from category templates.

    The templates are only read. The same planet, node seed, base name and
    template contents always produce an identical instance.
    """

    def __init__(self, templates: TemplateSource, logger: Optional[ProcgenLogger] = None) -> None:
        self._templates = templates
        self.log = channel_of(logger, MATERIALS)

    def template_for(self, category: MaterialCategory) -> CategoryTemplate:
        template = self._templates.get(category)
        if template is None:
            raise ConfigurationMissingError(f"Missing template for category {category.name}")
        return template

    def generate(
        self,
        planet: Optional[PlanetProfile],
        node_seed: int,
        base_name: Optional[str],
    ) -> MaterialInstance:
        if planet is None:
            raise InvalidArgumentError("planet profile is required")

        node_seed = to_u32(node_seed)
        rng = DeterministicRng(hash_combine(planet.planet_seed, node_seed))

        category = choose_category(planet, rng)
        subtype = choose_subtype(category, rng)
        template = self.template_for(category)

        props = sample_from_template(template, rng)

        adjustment = template.subtype_adjustment(subtype)
        if adjustment is not None:
            props.add(adjustment)

        props.add(compute_planet_modifiers(planet, category, subtype))

        # Traits are picked before caps so the boost and penalty land on the raw scores.
        dominant = choose_dominant(template, props)
        weakness = choose_weakness(template, props)
        props[dominant] += tier_rules.DOMINANT_BOOST
        props[weakness] -= tier_rules.WEAKNESS_PENALTY

        props.clamp01()
        tier_rules.apply_all(props)

        abundance = estimate_abundance(category, rng)

        instance = MaterialInstance(
            display_name=make_display_name(base_name, category, subtype, node_seed),
            category=category,
            subtype=subtype,
            planet_seed=planet.planet_seed,
            node_seed=node_seed,
            abundance=abundance,
            dominant_property=dominant,
            weakness_property=weakness,
            values=props.as_tuple(),
        )
        if self.log and self.log.enabled:
            self.log.debug("Generated %s (abundance %.2f)", instance, abundance)
        return instance


__all__ = [
    "ABUNDANCE_BASE",
    "MaterialGenerator",
    "MaterialInstance",
    "choose_category",
    "choose_dominant",
    "choose_subtype",
    "choose_weakness",
    "estimate_abundance",
    "make_display_name",
    "sample_from_template",
]
