"""Procedural spiral galaxy point-cloud generator."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from galaxy_gen.params import GalaxyParameters


# Uniform draws per point: radius, then (magnitude, sign) for x, y and z
DRAWS_PER_POINT = 7


@dataclass(frozen=True, eq=False)
class PointCloud:
    """Immutable set of colored points.

    Attributes:
        positions: Point positions (count, 3), arms lie in the XZ plane
        colors: RGB colors in [0, 1] (count, 3), index-aligned with positions
        radii: Sampled distance of each point from the center (count,)
        size: Point render size
    """
    positions: np.ndarray
    colors: np.ndarray
    radii: np.ndarray
    size: float = 0.04

    def __post_init__(self):
        if not (len(self.positions) == len(self.colors) == len(self.radii)):
            raise ValueError(
                f"Length mismatch: {len(self.positions)} positions, "
                f"{len(self.colors)} colors, {len(self.radii)} radii"
            )
        for array in (self.positions, self.colors, self.radii):
            array.flags.writeable = False

    @property
    def count(self) -> int:
        return len(self.positions)

    def __len__(self) -> int:
        return self.count

    def rotated(self, angle: float) -> np.ndarray:
        """Return positions rotated by ``angle`` radians about the y axis."""
        c, s = np.cos(angle), np.sin(angle)
        x = self.positions[:, 0]
        z = self.positions[:, 2]
        out = np.empty_like(self.positions)
        out[:, 0] = c * x + s * z
        out[:, 1] = self.positions[:, 1]
        out[:, 2] = -s * x + c * z
        return out


def branch_angles(count: int, branches: int) -> np.ndarray:
    """Angle of the arm each point index belongs to (round-robin by index)."""
    return (np.arange(count) % branches) * (2 * np.pi / branches)


def generate(params: GalaxyParameters, rng) -> PointCloud:
    """Generate a spiral galaxy point cloud.

    Args:
        params: Galaxy parameters (not modified)
        rng: Random source with a ``random(size)`` method returning
            uniform floats in [0, 1), e.g. ``numpy.random.Generator``

    Returns:
        New PointCloud with ``params.count`` points

    Raises:
        ValueError: If count is negative or branches is below one
    """
    params.validate()
    count = int(params.count)
    branches = int(params.branches)

    draws = np.asarray(rng.random((count, DRAWS_PER_POINT)), dtype=np.float64)
    draws = draws.reshape(count, DRAWS_PER_POINT)

    # Uniform in radius, not in area: the core ends up denser
    radii = draws[:, 0] * params.radius
    angles = branch_angles(count, branches) + radii * params.spin

    magnitudes = draws[:, 1::2] ** params.randomness_power
    signs = np.where(draws[:, 2::2] < 0.5, 1.0, -1.0)
    offsets = magnitudes * signs * params.randomness * radii[:, np.newaxis]

    positions = np.empty((count, 3), dtype=np.float64)
    positions[:, 0] = np.sin(angles) * radii
    positions[:, 1] = 0.0
    positions[:, 2] = np.cos(angles) * radii
    positions += offsets

    inside = params.inside_rgb
    outside = params.outside_rgb
    t = radii / params.radius if params.radius else np.zeros(count)
    colors = np.clip(inside + t[:, np.newaxis] * (outside - inside), 0.0, 1.0)

    return PointCloud(
        positions=positions.astype(np.float32),
        colors=colors.astype(np.float32),
        radii=radii.astype(np.float32),
        size=float(params.size),
    )


class GalaxyGenerator:
    """Generator bound to a random source."""

    def __init__(self, rng=None, seed: Optional[int] = None):
        """Initialize generator.

        Args:
            rng: Random source (default: numpy Generator seeded with ``seed``)
            seed: Seed used when ``rng`` is not given
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def generate(self, params: GalaxyParameters) -> PointCloud:
        return generate(params, self.rng)
