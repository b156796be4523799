"""Tests for 2D -> 3D Hilbert pixel trajectories.

Tests cover:
- Fractional 2D curve positions of raster pixels
- Interpolated sampling along the 3D curve
- Batch trajectories against the arbitrary-precision point form
- Argument validation
"""

import numpy as np
import pytest

from brimstone.curve import (
    hilbert_inverse,
    hilbert_trajectory,
    hilbert_trajectory_point,
    raster_curve_positions,
    sample_curve,
    size_bits,
)


class TestSizeBits:
    """Test size_bits."""

    @pytest.mark.parametrize("size, bits", [(1, 0), (2, 1), (8, 3), (1024, 10)])
    def test_powers_of_two(self, size, bits):
        """Test log2 of powers of two."""
        assert size_bits(size) == bits

    @pytest.mark.parametrize("size", [0, 3, 6, 100, -4])
    def test_rejects_other_sizes(self, size):
        """Test non powers of two raise ValueError."""
        with pytest.raises(ValueError, match="power of two"):
            size_bits(size)


class TestRasterPositions:
    """Test raster_curve_positions."""

    def test_positions_are_permutation(self):
        """Test positions are a permutation of k / (n - 1)."""
        size = 8
        positions = raster_curve_positions(size)
        n = size * size
        assert positions.shape == (n,)
        np.testing.assert_allclose(np.sort(positions), np.arange(n) / (n - 1), atol=1e-15)

    def test_origin_is_first(self):
        """Test pixel (0, 0) is at position 0."""
        assert raster_curve_positions(16)[0] == 0.0

    def test_single_pixel(self):
        """Test a 1x1 image has the single position 0."""
        np.testing.assert_array_equal(raster_curve_positions(1), [0.0])


class TestSampleCurve:
    """Test sample_curve."""

    def test_endpoints(self):
        """Test t=0 and t=1 hit the first and last lattice points."""
        bits = 3
        points = sample_curve([0.0, 1.0], bits)
        last = hilbert_inverse((1 << (3 * bits)) - 1, bits, 3)
        np.testing.assert_array_equal(points[0], [0.0, 0.0, 0.0])
        np.testing.assert_allclose(points[1], np.array(last) / 8.0)

    def test_interpolates_between_lattice_points(self):
        """Test a midpoint lies halfway between neighbouring lattice points."""
        bits = 2
        max_index = (1 << (3 * bits)) - 1
        t = 2.5 / max_index
        point = sample_curve([t], bits)[0]
        lower = np.array(hilbert_inverse(2, bits, 3), dtype=np.float64)
        upper = np.array(hilbert_inverse(3, bits, 3), dtype=np.float64)
        np.testing.assert_allclose(point, (lower + upper) / 2.0 / 4.0, atol=1e-12)

    def test_two_dimensional_curve(self):
        """Test sampling a 2D curve returns two coordinates."""
        assert sample_curve(np.linspace(0, 1, 10), 4, dims=2).shape == (10, 2)

    def test_out_of_range_raises(self):
        """Test positions outside [0, 1] raise ValueError."""
        with pytest.raises(ValueError):
            sample_curve([1.5], 3)
        with pytest.raises(ValueError):
            sample_curve([-0.1], 3)


class TestHilbertTrajectory:
    """Test hilbert_trajectory and hilbert_trajectory_point."""

    def test_shape_and_range(self):
        """Test one 3D point per pixel, all inside [0, 1)."""
        points = hilbert_trajectory(16, levels=3)
        assert points.shape == (256, 3)
        assert points.min() >= 0.0
        assert points.max() < 1.0

    def test_matches_point_form(self):
        """Test the batch form matches the exact rational point form."""
        size, levels = 8, 2
        points = hilbert_trajectory(size, levels)
        for y in range(size):
            for x in range(size):
                expected = hilbert_trajectory_point(x, y, size_bits(size), levels + 1)
                np.testing.assert_allclose(points[y * size + x], expected, atol=1e-9)

    def test_single_pixel(self):
        """Test a 1x1 image maps to the origin."""
        np.testing.assert_array_equal(hilbert_trajectory(1, 3), [[0.0, 0.0, 0.0]])
        assert hilbert_trajectory_point(0, 0, 0, 4) == (0.0, 0.0, 0.0)

    @pytest.mark.parametrize("levels", [0, 10])
    def test_levels_out_of_range(self, levels):
        """Test levels outside [1, 9] raise ValueError."""
        with pytest.raises(ValueError, match="outside valid range"):
            hilbert_trajectory(8, levels)

    def test_size_not_power_of_two(self):
        """Test non power-of-two sizes raise ValueError."""
        with pytest.raises(ValueError):
            hilbert_trajectory(12, 3)

    def test_point_form_high_precision(self):
        """Test the point form handles curves beyond the int64 kernels."""
        point = hilbert_trajectory_point(5, 3, 3, 30)
        assert len(point) == 3
        assert all(0.0 <= v < 1.0 for v in point)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
