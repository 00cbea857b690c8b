"""2D axial nozzle profile sampler.

The profile is a list of (z, r) points along +Z: a rounded throat blend,
a conical diverging section, and optional deterministic jitter on the exit
flare. Inputs are geometric, not physics-correct.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from pygame.math import Vector2

from spacevoxel.engine.logger import ChannelLogger
from spacevoxel.math.interp import clamp01, lerp, smoothstep
from spacevoxel.math.rng import DeterministicRng

EXIT_BAND_START = 0.8
MAX_JITTER_FRACTION = 0.03
MIN_JITTERED_RADIUS = 0.0001


@dataclass(frozen=True)
class Profile2D:
    """Ordered (z, r) samples; z is non-decreasing and r non-negative.

    Samples are stored as plain float pairs. Every ``Vector2`` handed out is
    a fresh copy, so callers cannot reorder the profile in place.
    """

    samples: Tuple[Tuple[float, float], ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "samples",
            tuple((float(z), float(r)) for z, r in self.samples),
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[float]]) -> "Profile2D":
        return cls(tuple((point[0], point[1]) for point in pairs))

    @property
    def points(self) -> Tuple[Vector2, ...]:
        return tuple(Vector2(z, r) for z, r in self.samples)

    @property
    def length(self) -> float:
        if not self.samples:
            return 0.0
        return self.samples[-1][0]

    def min_radius(self) -> float:
        if not self.samples:
            return 0.0
        return min(r for _, r in self.samples)

    def max_radius(self) -> float:
        if not self.samples:
            return 0.0
        return max(0.0, max(r for _, r in self.samples))

    def pairs(self) -> List[Tuple[float, float]]:
        return list(self.samples)

    def __iter__(self) -> Iterator[Vector2]:
        for z, r in self.samples:
            yield Vector2(z, r)

    def __len__(self) -> int:
        return len(self.samples)

    def __getitem__(self, index: int) -> Vector2:
        z, r = self.samples[index]
        return Vector2(z, r)


def _pre_diverge_radius(throat_radius: float, exit_radius: float, curvature: float) -> float:
    # Radius where the throat blend hands over to the diverging section.
    return lerp(throat_radius, min(exit_radius, throat_radius * 1.25), clamp01(curvature))


def sample_nozzle_profile(
    seed: int,
    length: float,
    throat_radius: float,
    exit_radius: float,
    axial_samples: int,
    throat_curvature_factor: float,
    flare_jitter: float,
    logger: Optional[ChannelLogger] = None,
) -> Profile2D:
    """Sample ``axial_samples`` (z, r) points from the throat (z=0) to the exit.

    Out-of-range inputs are clamped rather than rejected.
    """

    length = max(0.01, length)
    throat_radius = max(0.001, throat_radius)
    exit_radius = max(throat_radius, exit_radius)
    axial_samples = max(2, int(axial_samples))
    throat_curvature_factor = clamp01(throat_curvature_factor)
    flare_jitter = clamp01(flare_jitter)

    blend_fraction = lerp(0.05, 0.25, throat_curvature_factor)
    z_blend = length * blend_fraction
    target = _pre_diverge_radius(throat_radius, exit_radius, throat_curvature_factor)

    rng = DeterministicRng(seed)
    samples: List[Tuple[float, float]] = []

    for index in range(axial_samples):
        t = index / (axial_samples - 1)
        z = t * length

        if z <= z_blend:
            eased = smoothstep(z / z_blend)
            r = lerp(throat_radius, target, eased)
        else:
            u = (z - z_blend) / (length - z_blend)
            r = lerp(target, exit_radius, u)

            if flare_jitter > 0.0 and u >= EXIT_BAND_START:
                v = (u - EXIT_BAND_START) / (1.0 - EXIT_BAND_START)
                amplitude = flare_jitter * MAX_JITTER_FRACTION * exit_radius
                noise = rng.next01() * 2.0 - 1.0
                r += amplitude * smoothstep(v) * noise
                r = max(MIN_JITTERED_RADIUS, r)

        samples.append((z, r))

    previous_z = samples[0][0]
    for index, (z, r) in enumerate(samples):
        z = max(previous_z, z)
        samples[index] = (z, max(0.0, r))
        previous_z = z

    if logger and logger.enabled:
        logger.debug(
            "Profile seed=%d samples=%d length=%.3f rt=%.4f re=%.4f",
            seed,
            axial_samples,
            length,
            throat_radius,
            exit_radius,
        )
    return Profile2D(tuple(samples))


__all__ = ["Profile2D", "sample_nozzle_profile"]
