"""Geometric nozzle generator: spec → profile → revolved mesh → artifact."""
from __future__ import annotations

from typing import Optional

from spacevoxel.engine.logger import MESH, PROPULSION, ProcgenLogger, channel_of

from .artifact import ProcArtifact
from .profile import sample_nozzle_profile
from .revolve import build_revolve_mesh
from .specs import GeometricNozzleSpec

GENERATOR_VERSION = "NozzleGeneratorV0_0001"
NULL_SPEC_TAG = "error:null-spec"
NOZZLE_TAGS = ("nozzle", "v0")


def generate_nozzle(
    spec: Optional[GeometricNozzleSpec],
    name: Optional[str] = None,
    logger: Optional[ProcgenLogger] = None,
) -> ProcArtifact:
    """Build an open-ended nozzle mesh along +Z with the throat at the origin.

    A missing spec yields a mesh-less artifact tagged ``error:null-spec``
    instead of raising, so bake pipelines can record the failure.
    """

    log = channel_of(logger, PROPULSION)
    mesh_log = channel_of(logger, MESH)

    if spec is None:
        if log:
            log.warning("Nozzle generation skipped: no spec")
        return ProcArtifact(generator_version=GENERATOR_VERSION, tags=(NULL_SPEC_TAG,))

    spec = spec.clamped()
    spec_hash = spec.spec_hash()
    profile = sample_nozzle_profile(
        spec.seed,
        spec.length,
        spec.throat_radius,
        spec.exit_radius,
        spec.axial_profile_samples,
        spec.throat_curvature_factor,
        spec.flare_jitter,
        logger=mesh_log,
    )
    mesh = build_revolve_mesh(
        profile,
        spec.radial_segments,
        cap_start=False,
        cap_end=False,
        want_normals=True,
        want_uvs=True,
        name=name or f"Nozzle_{spec_hash}",
        logger=mesh_log,
    )

    artifact = ProcArtifact(
        mesh=mesh,
        bounds=mesh.bounds,
        spec_hash=spec_hash,
        generator_version=GENERATOR_VERSION,
        inlet_point=(0.0, 0.0, 0.0),
        outlet_point=(0.0, 0.0, spec.length),
        thrust_direction=(0.0, 0.0, -1.0),
        tags=NOZZLE_TAGS,
    )
    if log and log.enabled:
        log.info("Generated nozzle %s (hash %s)", mesh.name, spec_hash)
    return artifact


__all__ = ["GENERATOR_VERSION", "NOZZLE_TAGS", "NULL_SPEC_TAG", "generate_nozzle"]
