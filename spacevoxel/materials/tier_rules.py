"""Tier 0 scoring constants and enforcement rules.

Kept small and explicit so later tiers can version their own copy. All passes
mutate the vector in place and are applied in the order of :func:`apply_all`.
"""
from __future__ import annotations

from spacevoxel.math.interp import clamp, clamp01

from .enums import MaterialProperty
from .properties import PROPERTY_COUNT, PropertyVector, slot_index

HARD_CAP = 0.80

DOMINANT_BOOST = 0.10
WEAKNESS_PENALTY = 0.10

DOMINANT_THRESHOLD = 0.85
WEAKNESS_REQUIRED_MAX = 0.35

DENSITY_MIN = 0.10
DENSITY_MAX = 0.90

_DENSITY_SLOT = slot_index(MaterialProperty.Density)


def apply_hard_caps(vector: PropertyVector) -> None:
    for index in range(PROPERTY_COUNT):
        value = vector[index]
        if index == _DENSITY_SLOT:
            value = clamp(value, DENSITY_MIN, DENSITY_MAX)
        else:
            value = min(value, HARD_CAP)
        vector[index] = clamp01(value)


def enforce_one_dominant(vector: PropertyVector) -> None:
    """Squash every slot above the threshold except the maximum."""

    max_index = vector.argmax()
    above = sum(1 for value in vector if value > DOMINANT_THRESHOLD)
    if above <= 1:
        return
    for index in range(PROPERTY_COUNT):
        if index == max_index:
            continue
        if vector[index] > DOMINANT_THRESHOLD:
            vector[index] = DOMINANT_THRESHOLD


def ensure_a_weakness(vector: PropertyVector) -> None:
    if vector.min_value() <= WEAKNESS_REQUIRED_MAX:
        return
    # Nothing is weak enough: lower the global minimum to the ceiling.
    vector[vector.argmin()] = max(0.0, WEAKNESS_REQUIRED_MAX)


def apply_all(vector: PropertyVector) -> None:
    apply_hard_caps(vector)
    enforce_one_dominant(vector)
    ensure_a_weakness(vector)


__all__ = [
    "DENSITY_MAX",
    "DENSITY_MIN",
    "DOMINANT_BOOST",
    "DOMINANT_THRESHOLD",
    "HARD_CAP",
    "WEAKNESS_PENALTY",
    "WEAKNESS_REQUIRED_MAX",
    "apply_all",
    "apply_hard_caps",
    "enforce_one_dominant",
    "ensure_a_weakness",
]
