"""Tests for the galaxy point-cloud generator."""

import numpy as np
import pytest
from dataclasses import replace
from matplotlib.colors import to_rgb
from galaxy_gen.generator import GalaxyGenerator, PointCloud, branch_angles, generate, DRAWS_PER_POINT
from galaxy_gen.params import GalaxyParameters


class ScriptedRandom:
    """Random source returning the same scripted draws for every point."""

    def __init__(self, row):
        self.row = np.asarray(row, dtype=float)

    def random(self, size):
        count = size[0]
        return np.tile(self.row, (count, 1))


class RecordingRandom:
    """Seeded random source that keeps the last block of draws."""

    def __init__(self, seed):
        self.rng = np.random.default_rng(seed)
        self.last = None

    def random(self, size):
        self.last = self.rng.random(size)
        return self.last


def small_params(**kwargs):
    return replace(GalaxyParameters(count=500), **kwargs)


def test_generate_counts():
    """Test that every output array has one entry per point."""
    params = small_params(count=1234)
    cloud = generate(params, np.random.default_rng(0))

    assert isinstance(cloud, PointCloud)
    assert cloud.positions.shape == (1234, 3)
    assert cloud.colors.shape == (1234, 3)
    assert cloud.radii.shape == (1234,)
    assert len(cloud) == 1234
    assert cloud.size == params.size


def test_colors_in_unit_range():
    """Test that every color channel lies in [0, 1]."""
    params = small_params(count=2000, inside_color="#ffffff", outside_color="#000000")
    cloud = generate(params, np.random.default_rng(1))

    assert cloud.colors.min() >= 0.0
    assert cloud.colors.max() <= 1.0


def test_zero_randomness_lies_on_arms():
    """Test that without randomness points sit exactly on their arm."""
    params = small_params(count=300, randomness=0.0, branches=4, spin=-2.5)
    rng = RecordingRandom(7)
    cloud = generate(params, rng)

    r = rng.last[:, 0] * params.radius
    angle = branch_angles(params.count, params.branches) + r * params.spin

    assert np.all(cloud.positions[:, 1] == 0.0)
    assert np.allclose(cloud.positions[:, 0], np.sin(angle) * r, atol=1e-5)
    assert np.allclose(cloud.positions[:, 2], np.cos(angle) * r, atol=1e-5)
    assert np.allclose(np.hypot(cloud.positions[:, 0], cloud.positions[:, 2]), r, atol=1e-5)


def test_arm_assignment_by_index():
    """Test that arm assignment depends only on i mod branches."""
    angles = branch_angles(12, 3)
    assert angles[0] == angles[3] == angles[6] == angles[9] == 0.0
    assert angles[1] == angles[4] == angles[7] == angles[10]
    assert angles[2] == angles[5]
    assert np.isclose(angles[1], 2 * np.pi / 3)

    # Same radius for every point: points on the same arm coincide
    params = small_params(count=10, branches=5, randomness=0.0, spin=1.0)
    cloud = generate(params, ScriptedRandom([0.8, 0.5, 0.5, 0.5, 0.5, 0.5, 0.5]))
    for i in range(5):
        assert np.allclose(cloud.positions[i], cloud.positions[i + 5])
    assert not np.allclose(cloud.positions[0], cloud.positions[1])


def test_inside_and_outside_colors():
    """Test that the color is insideColor at the center and outsideColor at the rim."""
    params = small_params(count=3, inside_color="#ff6030", outside_color="#1b3984")
    inside = np.array(to_rgb(params.inside_color), dtype=np.float32)
    outside = np.array(to_rgb(params.outside_color), dtype=np.float32)

    center = generate(params, ScriptedRandom([0.0] * DRAWS_PER_POINT))
    rim = generate(params, ScriptedRandom([1.0] + [0.0] * (DRAWS_PER_POINT - 1)))

    assert np.array_equal(center.colors, np.tile(inside, (3, 1)))
    assert np.allclose(rim.colors, np.tile(outside, (3, 1)), atol=1e-6)


def test_reproducible_with_seed():
    """Test that identical seeds give identical clouds."""
    params = small_params(count=1000)
    cloud1 = generate(params, np.random.default_rng(42))
    cloud2 = generate(params, np.random.default_rng(42))
    cloud3 = generate(params, np.random.default_rng(43))

    assert np.array_equal(cloud1.positions, cloud2.positions)
    assert np.array_equal(cloud1.colors, cloud2.colors)
    assert not np.array_equal(cloud1.positions, cloud3.positions)


def test_single_point_scenario():
    """Test one point at half radius on a single straight arm."""
    params = GalaxyParameters(count=1, branches=1, spin=0.0, randomness=0.0, radius=1.0,
                              inside_color="#ff0000", outside_color="#0000ff")
    cloud = generate(params, ScriptedRandom([0.5, 0.3, 0.1, 0.3, 0.9, 0.3, 0.1]))

    assert np.allclose(cloud.positions[0], [0.0, 0.0, 0.5])
    assert np.allclose(cloud.colors[0], [0.5, 0.0, 0.5])


def test_offset_signs():
    """Test that sign draws below 0.5 push positive and the rest negative."""
    params = GalaxyParameters(count=1, branches=1, spin=0.0, randomness=1.0,
                              randomness_power=1.0, radius=1.0)
    cloud = generate(params, ScriptedRandom([0.5, 1.0, 0.0, 1.0, 0.9, 1.0, 0.2]))

    assert np.allclose(cloud.positions[0], [0.5, -0.5, 1.0])


def test_randomness_power_concentrates_offsets():
    """Test that a higher randomness power gives smaller offsets."""
    draws = [1.0, 0.5, 0.0, 0.5, 0.0, 0.5, 0.0]
    low = generate(GalaxyParameters(count=1, randomness=1.0, randomness_power=1.0, spin=0.0),
                   ScriptedRandom(draws))
    high = generate(GalaxyParameters(count=1, randomness=1.0, randomness_power=4.0, spin=0.0),
                    ScriptedRandom(draws))

    assert np.isclose(low.positions[0, 1], 0.5 * 5.0)
    assert np.isclose(high.positions[0, 1], 0.5 ** 4 * 5.0)


def test_empty_cloud():
    """Test that count=0 returns empty buffers."""
    cloud = generate(small_params(count=0), np.random.default_rng(0))

    assert cloud.positions.shape == (0, 3)
    assert cloud.colors.shape == (0, 3)
    assert cloud.count == 0


def test_invalid_parameters():
    """Test that negative count and branches below one are rejected."""
    with pytest.raises(ValueError):
        generate(small_params(count=-1), np.random.default_rng(0))
    with pytest.raises(ValueError):
        generate(small_params(branches=0), np.random.default_rng(0))


def test_params_not_mutated():
    """Test that generation leaves the parameters untouched."""
    params = small_params(count=100)
    before = replace(params)
    generate(params, np.random.default_rng(0))
    assert params == before


def test_cloud_is_read_only():
    """Test that a generated cloud cannot be modified in place."""
    cloud = generate(small_params(count=10), np.random.default_rng(0))
    with pytest.raises(ValueError):
        cloud.positions[0, 0] = 1.0
    with pytest.raises(ValueError):
        cloud.colors[0, 0] = 1.0


def test_rotated_about_vertical_axis():
    """Test rotation of positions about the y axis."""
    params = GalaxyParameters(count=1, branches=1, spin=0.0, randomness=0.0, radius=1.0)
    cloud = generate(params, ScriptedRandom([1.0] + [0.0] * 6))

    assert np.allclose(cloud.positions[0], [0.0, 0.0, 1.0])
    assert np.allclose(cloud.rotated(np.pi / 2)[0], [1.0, 0.0, 0.0], atol=1e-6)
    assert np.allclose(cloud.rotated(0.0), cloud.positions)


def test_generator_class():
    """Test the generator bound to a seeded source."""
    params = small_params(count=50)
    cloud1 = GalaxyGenerator(seed=3).generate(params)
    cloud2 = GalaxyGenerator(rng=np.random.default_rng(3)).generate(params)

    assert np.array_equal(cloud1.positions, cloud2.positions)
