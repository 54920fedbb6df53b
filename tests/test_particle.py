"""Unit tests for particle state initialization."""

import numpy as np
import pytest

from particle import ParticleSystem, random_directions
from vector import length


class TestParticleSystem:
    """Tests for ParticleSystem initialization."""

    def test_shapes_and_dtypes(self, particles):
        """State arrays are (N, 2) float64."""
        assert particles.positions.shape == (50, 2)
        assert particles.directions.shape == (50, 2)
        assert particles.positions.dtype == np.float64
        assert particles.directions.dtype == np.float64
        assert len(particles) == 50

    def test_positions_are_whole_pixels_inside_screen(self, particles):
        """Positions are integer coordinates within the screen."""
        pos = particles.positions
        assert np.all(pos == np.floor(pos))
        assert np.all(pos[:, 0] >= 0) and np.all(pos[:, 0] < 200)
        assert np.all(pos[:, 1] >= 0) and np.all(pos[:, 1] < 100)

    def test_directions_are_unit(self, particles):
        """Every heading has length 1."""
        np.testing.assert_allclose(length(particles.directions), np.ones(50))

    def test_seed_reproduces_state(self):
        """The same seed gives the same particles."""
        a = ParticleSystem({"particle_count": 10, "seed": 99}, 300, 300)
        b = ParticleSystem({"particle_count": 10, "seed": 99}, 300, 300)
        np.testing.assert_array_equal(a.positions, b.positions)
        np.testing.assert_array_equal(a.directions, b.directions)

    def test_default_count(self):
        """Without a count the default of 200 particles is used."""
        assert ParticleSystem({"seed": 1}, 1600, 900).particle_count == 200

    def test_empty_system(self):
        """Zero particles is a valid, empty state."""
        system = ParticleSystem({"particle_count": 0}, 100, 100)
        assert system.positions.shape == (0, 2)
        assert system.directions.shape == (0, 2)

    def test_negative_count_rejected(self):
        """A negative particle count is a configuration error."""
        with pytest.raises(ValueError):
            ParticleSystem({"particle_count": -1}, 100, 100)

    @pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (-5, 10)])
    def test_invalid_screen_rejected(self, width, height):
        """The screen rectangle must have a positive size."""
        with pytest.raises(ValueError):
            ParticleSystem({"particle_count": 5}, width, height)

    @pytest.mark.parametrize("count", [10.5, "10", True])
    def test_non_integer_count_rejected(self, count):
        """Fractional, string or boolean counts are configuration errors."""
        with pytest.raises(ValueError):
            ParticleSystem({"particle_count": count}, 100, 100)

    def test_whole_float_count_accepted(self):
        """A JSON float such as 10.0 is read as 10 particles."""
        assert ParticleSystem({"particle_count": 10.0, "seed": 2}, 100, 100).particle_count == 10


class TestFromArrays:
    """Tests for ParticleSystem.from_arrays."""

    def test_holds_given_state(self):
        """Positions and directions are stored as given."""
        system = ParticleSystem.from_arrays([[1, 2], [3, 4]], [[1, 0], [0, -1]])
        np.testing.assert_array_equal(system.positions, [[1.0, 2.0], [3.0, 4.0]])
        np.testing.assert_array_equal(system.directions, [[1.0, 0.0], [0.0, -1.0]])
        assert system.particle_count == 2

    def test_mismatched_shapes_rejected(self):
        """Positions and directions must line up."""
        with pytest.raises(ValueError):
            ParticleSystem.from_arrays([[1, 2], [3, 4]], [[1, 0]])


def test_random_directions_cover_all_quadrants():
    """Square sampling still produces headings in every quadrant."""
    dirs = random_directions(np.random.default_rng(3), 400)
    signs = {(bool(x > 0), bool(y > 0)) for x, y in dirs}
    assert len(signs) == 4
