"""Surface-of-revolution mesh builder.

Profiles are (z, r) pairs revolved around +Z. Side triangles wind
counter-clockwise seen from outside, so face normals point away from the axis.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from pygame.math import Vector2, Vector3

from spacevoxel.engine.logger import ChannelLogger
from spacevoxel.errors import InvalidArgumentError

from .profile import Profile2D

MIN_RADIAL_SEGMENTS = 3
CAP_MIN_RADIUS = 1e-6
UV_MIN_SPAN = 1e-6

ProfileInput = Union[Profile2D, Sequence[Sequence[float]]]
Triple = Tuple[float, float, float]


def _triple(vector: Sequence[float]) -> Triple:
    return (float(vector[0]), float(vector[1]), float(vector[2]))


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box stored as float triples; vector accessors return copies."""

    low: Triple = (0.0, 0.0, 0.0)
    high: Triple = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "low", _triple(self.low))
        object.__setattr__(self, "high", _triple(self.high))

    @property
    def min(self) -> Vector3:
        return Vector3(self.low)

    @property
    def max(self) -> Vector3:
        return Vector3(self.high)

    @property
    def center(self) -> Vector3:
        return (Vector3(self.low) + Vector3(self.high)) * 0.5

    @property
    def size(self) -> Vector3:
        return Vector3(self.high) - Vector3(self.low)

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "Bounds":
        points = [_triple(point) for point in points]
        if not points:
            return cls()
        xs, ys, zs = zip(*points)
        return cls((min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs)))


@dataclass(frozen=True)
class Mesh:
    """Triangle mesh held as float tuples.

    ``vertices``, ``normals`` and ``uvs`` build new pygame vectors on every
    access; editing them never changes the mesh or its bounds.
    """

    name: str
    positions: Tuple[Triple, ...]
    triangles: Tuple[int, ...]
    bounds: Bounds
    normal_data: Optional[Tuple[Triple, ...]] = None
    uv_data: Optional[Tuple[Tuple[float, float], ...]] = None

    @property
    def vertices(self) -> Tuple[Vector3, ...]:
        return tuple(Vector3(position) for position in self.positions)

    @property
    def normals(self) -> Optional[Tuple[Vector3, ...]]:
        if self.normal_data is None:
            return None
        return tuple(Vector3(normal) for normal in self.normal_data)

    @property
    def uvs(self) -> Optional[Tuple[Vector2, ...]]:
        if self.uv_data is None:
            return None
        return tuple(Vector2(uv) for uv in self.uv_data)

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles) // 3

    def vertex(self, index: int) -> Vector3:
        return Vector3(self.positions[index])

    def triangle(self, index: int) -> Tuple[int, int, int]:
        base = index * 3
        return self.triangles[base], self.triangles[base + 1], self.triangles[base + 2]

    def face_normal(self, index: int) -> Vector3:
        """Unnormalised face normal of triangle ``index`` (length is twice its area)."""

        a, b, c = self.triangle(index)
        v0 = self.vertex(a)
        return (self.vertex(b) - v0).cross(self.vertex(c) - v0)


def _profile_pairs(profile: ProfileInput) -> List[Tuple[float, float]]:
    if profile is None:
        raise InvalidArgumentError("profile is required")
    if isinstance(profile, Profile2D):
        return profile.pairs()
    return [(float(point[0]), float(point[1])) for point in profile]


def compute_normals(vertices: Sequence[Vector3], triangles: Sequence[int]) -> List[Vector3]:
    """Area-weighted vertex normals accumulated from triangle faces."""

    normals = [Vector3() for _ in vertices]
    for base in range(0, len(triangles) - 2, 3):
        a, b, c = triangles[base], triangles[base + 1], triangles[base + 2]
        v0 = vertices[a]
        face = (vertices[b] - v0).cross(vertices[c] - v0)
        normals[a] += face
        normals[b] += face
        normals[c] += face
    # Vertices with no area contribution keep a zero normal.
    return [normal.normalize() if normal.length_squared() > 0.0 else normal for normal in normals]


def build_revolve_mesh(
    profile: ProfileInput,
    radial_segments: int,
    cap_start: bool = False,
    cap_end: bool = False,
    want_normals: bool = True,
    want_uvs: bool = True,
    name: str = "RevolvedMesh_V0",
    logger: Optional[ChannelLogger] = None,
) -> Mesh:
    """Revolve ``profile`` around +Z into a triangle mesh.

    Each profile sample becomes a ring of ``radial_segments + 1`` vertices; the
    last vertex repeats the first so the UV seam stays continuous. Caps are
    triangle fans over a duplicated ring and are skipped on degenerate radii.
    """

    pairs = _profile_pairs(profile)
    if len(pairs) < 2:
        raise InvalidArgumentError("profile needs at least 2 points")

    segments = max(MIN_RADIAL_SEGMENTS, int(radial_segments))
    ring_size = segments + 1
    z_first = pairs[0][0]
    z_span = max(UV_MIN_SPAN, pairs[-1][0] - z_first)

    angles = [2.0 * math.pi * j / segments for j in range(ring_size)]
    cosines = [math.cos(theta) for theta in angles]
    sines = [math.sin(theta) for theta in angles]

    vertices: List[Vector3] = []
    uvs: List[Vector2] = []
    triangles: List[int] = []

    for z, r in pairs:
        r = max(0.0, r)
        v = (z - z_first) / z_span
        for j in range(ring_size):
            vertices.append(Vector3(r * cosines[j], r * sines[j], z))
            uvs.append(Vector2(j / segments, v))

    for ring in range(len(pairs) - 1):
        a0 = ring * ring_size
        b0 = (ring + 1) * ring_size
        for j in range(segments):
            a = a0 + j
            b = b0 + j
            triangles.extend((a, a + 1, b))
            triangles.extend((a + 1, b + 1, b))

    def add_cap(z: float, r: float, facing_forward: bool) -> None:
        if r <= CAP_MIN_RADIUS:
            return
        center = len(vertices)
        vertices.append(Vector3(0.0, 0.0, z))
        uvs.append(Vector2(0.5, 0.5))
        for j in range(ring_size):
            vertices.append(Vector3(r * cosines[j], r * sines[j], z))
            uvs.append(Vector2(0.5 + 0.5 * cosines[j], 0.5 + 0.5 * sines[j]))
        for j in range(segments):
            current = center + 1 + j
            if facing_forward:
                triangles.extend((center, current, current + 1))
            else:
                triangles.extend((center, current + 1, current))

    if cap_start:
        add_cap(pairs[0][0], max(0.0, pairs[0][1]), facing_forward=False)
    if cap_end:
        add_cap(pairs[-1][0], max(0.0, pairs[-1][1]), facing_forward=True)

    normals = compute_normals(vertices, triangles) if want_normals else None

    mesh = Mesh(
        name=name,
        positions=tuple(_triple(vertex) for vertex in vertices),
        triangles=tuple(triangles),
        bounds=Bounds.from_points(vertices),
        normal_data=tuple(_triple(normal) for normal in normals) if normals is not None else None,
        uv_data=tuple((uv.x, uv.y) for uv in uvs) if want_uvs else None,
    )
    if logger and logger.enabled:
        logger.debug(
            "Revolved %s: %d vertices, %d triangles",
            name,
            mesh.vertex_count,
            mesh.triangle_count,
        )
    return mesh


__all__ = ["Bounds", "Mesh", "build_revolve_mesh", "compute_normals"]
