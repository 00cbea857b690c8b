"""Generated-asset wrapper with provenance for cache invalidation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from pygame.math import Vector3

from .revolve import Bounds, Mesh, Triple


@dataclass(frozen=True)
class ProcArtifact:
    """Immutable result of one generator run.

    Anchor points are stored as float triples; ``inlet``, ``outlet`` and
    ``thrust_axis`` return fresh vectors.
    """

    mesh: Optional[Mesh] = None
    bounds: Bounds = field(default_factory=Bounds)
    spec_hash: str = ""
    generator_version: str = ""
    spec_guid: Optional[str] = None
    inlet_point: Triple = (0.0, 0.0, 0.0)
    outlet_point: Triple = (0.0, 0.0, 0.0)
    thrust_direction: Triple = (0.0, 0.0, -1.0)
    tags: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("inlet_point", "outlet_point", "thrust_direction"):
            value = getattr(self, name)
            object.__setattr__(self, name, (float(value[0]), float(value[1]), float(value[2])))
        object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def inlet(self) -> Vector3:
        return Vector3(self.inlet_point)

    @property
    def outlet(self) -> Vector3:
        return Vector3(self.outlet_point)

    @property
    def thrust_axis(self) -> Vector3:
        return Vector3(self.thrust_direction)

    def is_valid_mesh(self) -> bool:
        return self.mesh is not None and self.mesh.vertex_count > 0

    def is_stale(self, spec_hash: str, generator_version: str) -> bool:
        """True when the artifact was built from different inputs or code."""

        return self.spec_hash != spec_hash or self.generator_version != generator_version

    def to_dict(self) -> Dict[str, Any]:
        return {
            "specHash": self.spec_hash,
            "generatorVersion": self.generator_version,
            "specGuid": self.spec_guid,
            "vertexCount": self.mesh.vertex_count if self.mesh else 0,
            "triangleCount": self.mesh.triangle_count if self.mesh else 0,
            "boundsMin": self.bounds.low,
            "boundsMax": self.bounds.high,
            "inlet": self.inlet_point,
            "outlet": self.outlet_point,
            "thrustAxis": self.thrust_direction,
            "tags": list(self.tags),
        }


__all__ = ["ProcArtifact"]
