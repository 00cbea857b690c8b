"""Tier-agnostic normalized material property vector."""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from spacevoxel.math.interp import clamp01

from .enums import MaterialProperty

# EnergyPotential is a named property but has no slot in the Tier 0 vector.
PROPERTY_SLOTS: Tuple[MaterialProperty, ...] = (
    MaterialProperty.Strength,
    MaterialProperty.MaxTemperature,
    MaterialProperty.ThermalConductivity,
    MaterialProperty.ElectricalConductivity,
    MaterialProperty.ErosionResistance,
    MaterialProperty.CorrosionResistance,
    MaterialProperty.Density,
    MaterialProperty.Manufacturability,
)
PROPERTY_COUNT = len(PROPERTY_SLOTS)

_SLOT_INDEX: Dict[MaterialProperty, int] = {prop: index for index, prop in enumerate(PROPERTY_SLOTS)}

_SHORT_NAMES: Tuple[str, ...] = ("S", "Tm", "Kt", "Ke", "Er", "Cr", "D", "Mf")

Key = Union[MaterialProperty, int]


def slot_index(prop: MaterialProperty) -> int:
    """Return the vector slot for ``prop``; raises ``KeyError`` for unslotted properties."""

    try:
        return _SLOT_INDEX[prop]
    except KeyError:
        raise KeyError(f"{prop.name} has no slot in the Tier 0 property vector") from None


def has_slot(prop: MaterialProperty) -> bool:
    return prop in _SLOT_INDEX


class PropertyVector:
    """Fixed-size vector of property scores, zero initialised."""

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Iterable[float]] = None) -> None:
        if values is None:
            self._values = [0.0] * PROPERTY_COUNT
            return
        items = [float(v) for v in values]
        if len(items) != PROPERTY_COUNT:
            raise ValueError(f"Property vector needs {PROPERTY_COUNT} values, got {len(items)}")
        self._values = items

    @classmethod
    def zero(cls) -> "PropertyVector":
        return cls()

    def _index(self, key: Key) -> int:
        if isinstance(key, MaterialProperty):
            return slot_index(key)
        return int(key)

    def __getitem__(self, key: Key) -> float:
        return self._values[self._index(key)]

    def __setitem__(self, key: Key, value: float) -> None:
        self._values[self._index(key)] = float(value)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __len__(self) -> int:
        return PROPERTY_COUNT

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyVector):
            return NotImplemented
        return self._values == other._values

    def items(self) -> Iterator[Tuple[MaterialProperty, float]]:
        return zip(PROPERTY_SLOTS, self._values)

    def copy(self) -> "PropertyVector":
        return PropertyVector(self._values)

    def add(self, other: "PropertyVector") -> None:
        for index in range(PROPERTY_COUNT):
            self._values[index] += other._values[index]

    def clamp01(self) -> None:
        for index in range(PROPERTY_COUNT):
            self._values[index] = clamp01(self._values[index])

    def max_value(self) -> float:
        return max(self._values)

    def min_value(self) -> float:
        return min(self._values)

    def argmax(self) -> int:
        """Slot of the largest value, lowest slot on ties."""

        best = 0
        for index in range(1, PROPERTY_COUNT):
            if self._values[index] > self._values[best]:
                best = index
        return best

    def argmin(self) -> int:
        """Slot of the smallest value, lowest slot on ties."""

        worst = 0
        for index in range(1, PROPERTY_COUNT):
            if self._values[index] < self._values[worst]:
                worst = index
        return worst

    def as_tuple(self) -> Tuple[float, ...]:
        return tuple(self._values)

    def to_dict(self) -> Dict[str, float]:
        return {prop.name: value for prop, value in self.items()}

    def __repr__(self) -> str:
        return f"PropertyVector({self._values!r})"

    def __str__(self) -> str:
        return ", ".join(f"{short}={value:.2f}" for short, value in zip(_SHORT_NAMES, self._values))


__all__ = [
    "PROPERTY_COUNT",
    "PROPERTY_SLOTS",
    "PropertyVector",
    "has_slot",
    "slot_index",
]
