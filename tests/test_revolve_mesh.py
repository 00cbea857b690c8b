import math

import pytest
from pygame.math import Vector3

from spacevoxel.errors import InvalidArgumentError
from spacevoxel.propulsion.profile import Profile2D
from spacevoxel.propulsion.revolve import build_revolve_mesh, compute_normals

CYLINDER = [(0.0, 1.0), (1.0, 1.0)]
CONE = [(0.0, 0.2), (0.5, 0.4), (1.0, 0.8)]


def test_counts_without_caps():
    mesh = build_revolve_mesh(CONE, 16)
    assert mesh.vertex_count == 3 * 17
    assert mesh.triangle_count == 2 * 16 * 2
    assert len(mesh.normals) == mesh.vertex_count
    assert len(mesh.uvs) == mesh.vertex_count
    assert mesh.name == "RevolvedMesh_V0"


def test_caps_add_fans():
    mesh = build_revolve_mesh(CONE, 16, cap_start=True, cap_end=True)
    assert mesh.vertex_count == 3 * 17 + 2 * 18
    assert mesh.triangle_count == 2 * 16 * 2 + 2 * 16


def test_degenerate_cap_is_skipped():
    mesh = build_revolve_mesh([(0.0, 0.0), (1.0, 0.5)], 8, cap_start=True)
    assert mesh.vertex_count == 2 * 9


def test_radial_segments_floor():
    mesh = build_revolve_mesh(CYLINDER, 1)
    assert mesh.vertex_count == 2 * 4
    assert mesh.triangle_count == 6


def test_side_faces_point_outward():
    mesh = build_revolve_mesh(CONE, 24)
    vertices = mesh.vertices
    for index in range(mesh.triangle_count):
        a, b, c = mesh.triangle(index)
        centroid = (vertices[a] + vertices[b] + vertices[c]) / 3.0
        radial = Vector3(centroid.x, centroid.y, 0.0)
        assert mesh.face_normal(index).dot(radial) > 0.0


def test_cap_faces_point_along_axis():
    side_only = build_revolve_mesh(CYLINDER, 12)
    mesh = build_revolve_mesh(CYLINDER, 12, cap_start=True, cap_end=True)
    side_count = side_only.triangle_count
    start = range(side_count, side_count + 12)
    end = range(side_count + 12, side_count + 24)
    assert all(mesh.face_normal(index).z < 0.0 for index in start)
    assert all(mesh.face_normal(index).z > 0.0 for index in end)


def test_normals_are_unit_and_radial_on_cylinder():
    mesh = build_revolve_mesh(CYLINDER, 32)
    for vertex, normal in zip(mesh.vertices, mesh.normals):
        assert normal.length() == pytest.approx(1.0)
        radial = Vector3(vertex.x, vertex.y, 0.0).normalize()
        assert normal.dot(radial) > 0.99
        assert abs(normal.z) < 1e-9


def test_uvs_cover_unit_square():
    mesh = build_revolve_mesh(CONE, 8)
    assert mesh.uvs[0].x == pytest.approx(0.0)
    assert mesh.uvs[0].y == pytest.approx(0.0)
    assert mesh.uvs[8].x == pytest.approx(1.0)
    assert mesh.uvs[-1].y == pytest.approx(1.0)
    assert mesh.uvs[9].y == pytest.approx(0.5)


def test_seam_vertex_repeats_first():
    mesh = build_revolve_mesh(CYLINDER, 6)
    first = mesh.vertices[0]
    seam = mesh.vertices[6]
    assert (seam - first).length() < 1e-9


def test_bounds_follow_vertices():
    mesh = build_revolve_mesh(CYLINDER, 4)
    assert tuple(mesh.bounds.min) == pytest.approx((-1.0, -1.0, 0.0))
    assert tuple(mesh.bounds.max) == pytest.approx((1.0, 1.0, 1.0))
    assert tuple(mesh.bounds.center) == pytest.approx((0.0, 0.0, 0.5))
    assert tuple(mesh.bounds.size) == pytest.approx((2.0, 2.0, 1.0))


def test_accepts_profile_and_optional_channels():
    profile = Profile2D.from_pairs(CONE)
    mesh = build_revolve_mesh(profile, 5, want_normals=False, want_uvs=False, name="Bare")
    assert mesh.normals is None
    assert mesh.uvs is None
    assert mesh.name == "Bare"


def test_negative_radius_is_floored():
    mesh = build_revolve_mesh([(0.0, -1.0), (1.0, 1.0)], 4)
    for vertex in mesh.vertices[:5]:
        assert math.hypot(vertex.x, vertex.y) == pytest.approx(0.0)


def test_too_few_points_raise():
    with pytest.raises(InvalidArgumentError):
        build_revolve_mesh([(0.0, 1.0)], 8)
    with pytest.raises(InvalidArgumentError):
        build_revolve_mesh(None, 8)


def test_isolated_vertex_keeps_zero_normal():
    vertices = [Vector3(0, 0, 0), Vector3(1, 0, 0), Vector3(0, 1, 0), Vector3(5, 5, 5)]
    normals = compute_normals(vertices, [0, 1, 2])
    assert normals[0] == Vector3(0, 0, 1)
    assert normals[3].length() == 0.0
