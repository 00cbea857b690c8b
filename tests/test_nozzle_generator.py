import dataclasses

import pytest
from pygame.math import Vector3

from spacevoxel.propulsion.generator import GENERATOR_VERSION, NULL_SPEC_TAG, generate_nozzle
from spacevoxel.propulsion.specs import GeometricNozzleSpec


def test_spec_hash_reference_values():
    assert GeometricNozzleSpec().spec_hash() == "90DC0E37"
    assert GeometricNozzleSpec(seed=7).spec_hash() == "9EBB173E"


def test_spec_hash_ignores_tiny_noise_but_tracks_changes():
    base = GeometricNozzleSpec()
    assert GeometricNozzleSpec(length=1.0 + 1e-7).spec_hash() == base.spec_hash()
    assert GeometricNozzleSpec(length=1.01).spec_hash() != base.spec_hash()
    assert GeometricNozzleSpec(radial_segments=33).spec_hash() != base.spec_hash()


def test_seed_wraps_to_signed_32_bit():
    assert GeometricNozzleSpec(seed=0xFFFFFFFF).seed == -1


def test_clamped_spec_bounds():
    spec = GeometricNozzleSpec(radial_segments=1, axial_profile_samples=1000, flare_jitter=4.0).clamped()
    assert spec.radial_segments == 3
    assert spec.axial_profile_samples == 256
    assert spec.flare_jitter == 1.0


def test_generate_nozzle_default_artifact():
    spec = GeometricNozzleSpec()
    artifact = generate_nozzle(spec)
    assert artifact.is_valid_mesh()
    assert artifact.generator_version == GENERATOR_VERSION == "NozzleGeneratorV0_0001"
    assert artifact.spec_hash == "90DC0E37"
    assert artifact.tags == ("nozzle", "v0")
    assert artifact.inlet == Vector3(0.0, 0.0, 0.0)
    assert artifact.outlet == Vector3(0.0, 0.0, 1.0)
    assert artifact.thrust_axis == Vector3(0.0, 0.0, -1.0)

    mesh = artifact.mesh
    assert mesh.name == "Nozzle_90DC0E37"
    assert mesh.vertex_count == 48 * 33
    assert mesh.triangle_count == 2 * 32 * 47
    assert artifact.bounds.min.z == pytest.approx(0.0)
    assert artifact.bounds.max.z == pytest.approx(1.0)
    assert artifact.bounds.max.x == pytest.approx(0.3)


def test_generate_nozzle_is_deterministic():
    spec = GeometricNozzleSpec(seed=99, flare_jitter=0.8)
    first = generate_nozzle(spec, name="A")
    second = generate_nozzle(spec, name="A")
    assert first.mesh.vertices == second.mesh.vertices
    assert first.mesh.triangles == second.mesh.triangles
    assert first.mesh.name == "A"


def test_null_spec_yields_tagged_failure():
    artifact = generate_nozzle(None)
    assert not artifact.is_valid_mesh()
    assert artifact.mesh is None
    assert artifact.tags == (NULL_SPEC_TAG,)
    assert artifact.generator_version == GENERATOR_VERSION


def test_staleness_check():
    artifact = generate_nozzle(GeometricNozzleSpec())
    assert not artifact.is_stale("90DC0E37", GENERATOR_VERSION)
    assert artifact.is_stale("00000000", GENERATOR_VERSION)
    assert artifact.is_stale("90DC0E37", "NozzleGeneratorV0_0002")
    data = artifact.to_dict()
    assert data["vertexCount"] == artifact.mesh.vertex_count
    assert data["tags"] == ["nozzle", "v0"]


def test_artifact_cannot_be_edited_after_generation():
    artifact = generate_nozzle(GeometricNozzleSpec())
    with pytest.raises(dataclasses.FrozenInstanceError):
        artifact.spec_hash = "00000000"
    with pytest.raises(dataclasses.FrozenInstanceError):
        artifact.tags = ()

    outlet = artifact.outlet
    outlet.z = 50.0
    assert artifact.outlet == Vector3(0.0, 0.0, 1.0)

    corner = artifact.bounds.max
    corner.x = -7.0
    assert artifact.bounds.max.x == pytest.approx(0.3)
    assert artifact.to_dict()["boundsMax"][0] == pytest.approx(0.3)


def test_mesh_vertices_are_copies():
    mesh = generate_nozzle(GeometricNozzleSpec()).mesh
    before = mesh.positions[0]
    vertices = mesh.vertices
    vertices[0].x = 99.0
    mesh.normals[0].z = 5.0
    assert mesh.positions[0] == before
    assert mesh.vertex(0) == Vector3(before)
    assert mesh.normals[0].z != 5.0
    assert mesh.bounds.max.x == pytest.approx(0.3)
