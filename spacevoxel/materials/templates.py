"""Per-category sampling templates for Tier 0 materials."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Tuple

from spacevoxel.engine.logger import MATERIALS, ChannelLogger

from .enums import MaterialCategory, MaterialProperty, MaterialSubtype, parse_enum
from .properties import PROPERTY_COUNT, PROPERTY_SLOTS, PropertyVector, has_slot

@dataclass(frozen=True)
class PropertyTemplate:
    mean: float = 0.5
    spread: float = 0.1

    @classmethod
    def from_dict(cls, data: Mapping) -> "PropertyTemplate":
        return cls(mean=float(data.get("mean", 0.5)), spread=float(data.get("spread", 0.1)))


@dataclass(frozen=True)
class SubtypeAdjustment:
    """Additive score-space offsets applied to one subtype."""

    subtype: MaterialSubtype
    offsets: Tuple[float, ...] = field(default=(0.0,) * PROPERTY_COUNT)

    def to_vector(self) -> PropertyVector:
        return PropertyVector(self.offsets)

    @classmethod
    def from_dict(cls, data: Mapping, log: Optional[ChannelLogger] = None) -> "SubtypeAdjustment":
        subtype = parse_enum(MaterialSubtype, data["subtype"])
        offsets = _slot_values(data.get("offsets", data), default=0.0, log=log)
        return cls(subtype=subtype, offsets=offsets)


def _slot_values(data: Mapping, default: float, log: Optional[ChannelLogger] = None) -> Tuple[float, ...]:
    values = [default] * PROPERTY_COUNT
    for key, raw in data.items():
        try:
            prop = parse_enum(MaterialProperty, key)
        except ValueError:
            continue
        if not has_slot(prop):
            if log:
                log.debug("Ignoring %s: no Tier 0 slot", prop.name)
            continue
        values[PROPERTY_SLOTS.index(prop)] = float(raw)
    return tuple(values)


def _candidates(raw: Iterable) -> Tuple[MaterialProperty, ...]:
    result = []
    for entry in raw:
        prop = parse_enum(MaterialProperty, entry)
        if has_slot(prop):
            result.append(prop)
    return tuple(result)


@dataclass(frozen=True)
class CategoryTemplate:
    """Means, spreads, subtype adjustments and trait candidates for one category."""

    category: MaterialCategory
    properties: Tuple[PropertyTemplate, ...] = field(
        default=tuple(PropertyTemplate() for _ in range(PROPERTY_COUNT))
    )
    dominant_candidates: Tuple[MaterialProperty, ...] = ()
    weakness_candidates: Tuple[MaterialProperty, ...] = ()
    subtype_adjustments: Tuple[SubtypeAdjustment, ...] = ()

    def __post_init__(self) -> None:
        if len(self.properties) != PROPERTY_COUNT:
            raise ValueError(
                f"{self.category.name} template needs {PROPERTY_COUNT} property entries, got {len(self.properties)}"
            )

    def template_for(self, prop: MaterialProperty) -> PropertyTemplate:
        return self.properties[PROPERTY_SLOTS.index(prop)]

    def mean_vector(self) -> PropertyVector:
        return PropertyVector(entry.mean for entry in self.properties)

    def spread_vector(self) -> PropertyVector:
        return PropertyVector(entry.spread for entry in self.properties)

    def subtype_adjustment(self, subtype: MaterialSubtype) -> Optional[PropertyVector]:
        for adjustment in self.subtype_adjustments:
            if adjustment.subtype is subtype:
                return adjustment.to_vector()
        return None

    @classmethod
    def from_dict(cls, data: Mapping, log: Optional[ChannelLogger] = None) -> "CategoryTemplate":
        category = parse_enum(MaterialCategory, data["category"])
        authored = data.get("properties", {})
        properties = []
        for prop in PROPERTY_SLOTS:
            entry = authored.get(prop.name)
            properties.append(PropertyTemplate.from_dict(entry) if entry is not None else PropertyTemplate())
        return cls(
            category=category,
            properties=tuple(properties),
            dominant_candidates=_candidates(data.get("dominantCandidates", [])),
            weakness_candidates=_candidates(data.get("weaknessCandidates", [])),
            subtype_adjustments=tuple(
                SubtypeAdjustment.from_dict(entry, log) for entry in data.get("subtypeAdjustments", [])
            ),
        )


class TemplateDatabase:
    """Category templates read from disk, one per category."""

    def __init__(
        self,
        templates: Optional[Iterable[CategoryTemplate]] = None,
        log: Optional[ChannelLogger] = None,
    ) -> None:
        self.log = log or ChannelLogger(MATERIALS)
        self._templates: Dict[MaterialCategory, CategoryTemplate] = {}
        for template in templates or ():
            self.add(template)

    def load(self, path: Path) -> None:
        if not path.exists():
            return
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            self.log.warning("Skipping malformed template file %s", path)
            return
        if isinstance(data, dict):
            data = data.get("templates", [data])
        for entry in data:
            try:
                template = CategoryTemplate.from_dict(entry, self.log)
            except (KeyError, TypeError, ValueError) as exc:
                self.log.warning("Skipping template entry in %s: %s", path, exc)
                continue
            self.add(template)

    def load_directory(self, directory: Path) -> None:
        if not directory.exists():
            return
        for path in sorted(directory.glob("*.json")):
            self.load(path)

    def add(self, template: CategoryTemplate) -> None:
        self._templates[template.category] = template

    def get(self, category: MaterialCategory) -> Optional[CategoryTemplate]:
        return self._templates.get(category)

    def categories(self) -> Iterable[MaterialCategory]:
        return list(self._templates.keys())

    def __contains__(self, category: object) -> bool:
        return category in self._templates

    def __len__(self) -> int:
        return len(self._templates)


__all__ = [
    "CategoryTemplate",
    "PropertyTemplate",
    "SubtypeAdjustment",
    "TemplateDatabase",
]
