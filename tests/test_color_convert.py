"""Tests for Oklab <-> linear sRGB conversion and the sRGB transfer function.

Tests cover:
- Reference Oklab values of the sRGB primaries
- Scalar/array equivalence and shape handling
- Round trips, including colors outside [0, 1]
- Output buffer validation
"""

import math

import numpy as np
import pytest

from brimstone.color import (
    NEUTRAL,
    LinearColor,
    PerceptualColor,
    linear_to_perceptual,
    linear_to_perceptual_array,
    linear_to_srgb,
    perceptual_to_linear,
    perceptual_to_linear_array,
    srgb_to_linear,
)


class TestReferenceValues:
    """Test conversion against published Oklab values."""

    @pytest.mark.parametrize(
        "rgb, lab",
        [
            ((1.0, 0.0, 0.0), (0.627955, 0.224863, 0.125846)),
            ((0.0, 1.0, 0.0), (0.866440, -0.233888, 0.179498)),
            ((0.0, 0.0, 1.0), (0.452014, -0.032457, -0.311528)),
        ],
    )
    def test_primaries(self, rgb, lab):
        """Test sRGB primaries map to their reference Oklab coordinates."""
        result = linear_to_perceptual(LinearColor(*rgb))
        np.testing.assert_allclose(tuple(result), lab, atol=1e-5)

    def test_white(self):
        """Test white maps to L=1 on the neutral axis."""
        result = linear_to_perceptual(LinearColor(1.0, 1.0, 1.0))
        assert abs(result.l - 1.0) < 1e-6
        assert result.chroma < 1e-6

    def test_black(self):
        """Test black maps to the origin."""
        result = linear_to_perceptual(LinearColor(0.0, 0.0, 0.0))
        np.testing.assert_allclose(tuple(result), (0.0, 0.0, 0.0), atol=1e-12)

    def test_gray_is_achromatic(self):
        """Test grays have (near) zero chroma and L = cbrt(v)."""
        for v in (0.01, 0.2, 0.5, 0.9):
            result = linear_to_perceptual(LinearColor(v, v, v))
            assert result.chroma < 1e-6
            assert abs(result.l - v ** (1.0 / 3.0)) < 1e-6


class TestRoundTrip:
    """Test perceptual_to_linear inverts linear_to_perceptual."""

    def test_scalar_round_trip(self):
        """Test round trip for colors inside and outside the unit cube."""
        rng = np.random.default_rng(0)
        for rgb in rng.uniform(-0.5, 1.5, size=(50, 3)):
            color = LinearColor(*rgb)
            back = perceptual_to_linear(linear_to_perceptual(color))
            np.testing.assert_allclose(tuple(back), rgb, atol=1e-6)

    def test_array_round_trip(self):
        """Test round trip through the array kernels."""
        rng = np.random.default_rng(1)
        colors = rng.uniform(-0.2, 1.2, size=(1000, 3))
        back = perceptual_to_linear_array(linear_to_perceptual_array(colors))
        np.testing.assert_allclose(back, colors, atol=1e-6)

    def test_neutral_is_mid_gray(self):
        """Test NEUTRAL converts to the gray 0.5^3."""
        color = perceptual_to_linear(NEUTRAL)
        np.testing.assert_allclose(tuple(color), (0.125, 0.125, 0.125), atol=1e-6)


class TestArrayForms:
    """Test array conversion shapes and equivalence with the scalar API."""

    def test_matches_scalar(self):
        """Test array kernel matches scalar conversion per color."""
        rng = np.random.default_rng(2)
        colors = rng.uniform(0.0, 1.0, size=(20, 3))
        result = linear_to_perceptual_array(colors)
        for rgb, lab in zip(colors, result):
            expected = linear_to_perceptual(LinearColor(*rgb))
            np.testing.assert_allclose(lab, tuple(expected), atol=1e-12)

    def test_preserves_shape(self):
        """Test (H, W, 3) input gives (H, W, 3) output."""
        colors = np.full((4, 5, 3), 0.25)
        assert linear_to_perceptual_array(colors).shape == (4, 5, 3)
        assert linear_to_srgb(colors).shape == (4, 5, 3)

    def test_accepts_lists_and_float32(self):
        """Test array-likes are coerced to float64."""
        result = linear_to_perceptual_array([[1.0, 0.0, 0.0]])
        assert result.dtype == np.float64
        result32 = linear_to_perceptual_array(np.array([[1.0, 0.0, 0.0]], dtype=np.float32))
        np.testing.assert_allclose(result32, result, atol=1e-7)

    def test_wrong_trailing_dimension_raises(self):
        """Test non-3-channel input raises ValueError."""
        with pytest.raises(ValueError, match="trailing dimension 3"):
            linear_to_perceptual_array(np.zeros((10, 4)))

    def test_out_parameter(self):
        """Test results are written into a provided buffer."""
        colors = np.random.default_rng(3).uniform(0, 1, size=(8, 3))
        out = np.empty((8, 3))
        result = linear_to_perceptual_array(colors, out=out)
        assert result is out
        np.testing.assert_allclose(out, linear_to_perceptual_array(colors))

    def test_bad_out_raises(self):
        """Test mismatched or non-float64 output buffers raise ValueError."""
        colors = np.zeros((8, 3))
        with pytest.raises(ValueError):
            linear_to_perceptual_array(colors, out=np.empty((7, 3)))
        with pytest.raises(ValueError):
            linear_to_perceptual_array(colors, out=np.empty((8, 3), dtype=np.float32))
        with pytest.raises(ValueError):
            linear_to_perceptual_array(colors, out=np.empty((3, 8)).T)


class TestSrgbTransfer:
    """Test the sRGB transfer function."""

    def test_known_values(self):
        """Test encode at 0, 0.5 and 1."""
        result = linear_to_srgb(np.array([[0.0, 0.5, 1.0]]))
        np.testing.assert_allclose(result[0], [0.0, 0.7353569830524495, 1.0], atol=1e-9)

    def test_linear_segment(self):
        """Test the linear segment below the threshold."""
        result = linear_to_srgb(np.array([[0.001, 0.002, 0.003]]))
        np.testing.assert_allclose(result[0], [0.01292, 0.02584, 0.03876], atol=1e-12)

    def test_continuous_at_threshold(self):
        """Test both branches agree at the threshold."""
        below, above = linear_to_srgb(np.array([[0.0031308, 0.0031308 + 1e-12, 0.0]]))[0][:2]
        assert abs(below - above) < 1e-6

    def test_round_trip(self):
        """Test decode inverts encode."""
        values = np.linspace(0.0, 1.0, 300).reshape(-1, 3)
        np.testing.assert_allclose(srgb_to_linear(linear_to_srgb(values)), values, atol=1e-12)


class TestColorValues:
    """Test LinearColor and PerceptualColor helpers."""

    def test_gamut_is_open_interval(self):
        """Test channels at 0 or 1 are not strictly in gamut."""
        assert LinearColor(0.5, 0.5, 0.5).is_in_gamut()
        assert not LinearColor(0.0, 0.5, 0.5).is_in_gamut()
        assert not LinearColor(0.5, 1.0, 0.5).is_in_gamut()
        assert not LinearColor(0.5, 0.5, -0.01).is_in_gamut()

    def test_chroma_and_hue(self):
        """Test polar accessors."""
        color = PerceptualColor(0.7, 0.0, 0.2)
        assert abs(color.chroma - 0.2) < 1e-12
        assert abs(color.hue - math.pi / 2) < 1e-12

    def test_from_lch(self):
        """Test polar construction matches the accessors."""
        color = PerceptualColor.from_lch(0.6, 0.15, 1.0)
        assert abs(color.chroma - 0.15) < 1e-12
        assert abs(color.hue - 1.0) < 1e-12

    def test_array_helpers(self):
        """Test to_array / from_array."""
        color = LinearColor(0.1, 0.2, 0.3)
        np.testing.assert_array_equal(color.to_array(), [0.1, 0.2, 0.3])
        assert LinearColor.from_array(color.to_array()) == color
        assert PerceptualColor.from_array([0.5, 0.0, 0.0]) == NEUTRAL


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
