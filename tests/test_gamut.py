"""Tests for gamut mapping.

Tests cover:
- sgn and the in-gamut predicate
- Maximum saturation and cusp geometry
- Gamut intersection, including degenerate lines
- The five clip policies and their relationships
- Array and display-buffer conversions
"""

import math

import numpy as np
import pytest

from brimstone.color import (
    LinearColor,
    PerceptualColor,
    linear_to_perceptual,
    perceptual_to_linear,
)
from brimstone.gamut import (
    CuspPoint,
    GamutClipPolicy,
    clip,
    clip_array,
    find_cusp,
    find_gamut_intersection,
    gamut_clip_adaptive_cusp,
    gamut_clip_adaptive_mid,
    gamut_clip_preserve_chroma,
    gamut_clip_project_to_cusp,
    gamut_clip_project_to_mid,
    in_gamut_mask,
    is_in_gamut,
    max_saturation_for_hue,
    perceptual_to_display,
    perceptual_to_display_unclamped,
    sgn,
)

ALL_POLICIES = list(GamutClipPolicy)
TOL = 1e-3


def hues(n: int = 36):
    """Unit hue vectors evenly spaced around the circle."""
    for k in range(n):
        h = 2.0 * math.pi * (k + 0.5) / n
        yield math.cos(h), math.sin(h)


def out_of_gamut_colors(n: int = 200, seed: int = 7) -> np.ndarray:
    rng = np.random.default_rng(seed)
    colors = rng.uniform(-0.4, 1.4, size=(n, 3))
    inside = np.all((colors > 0.0) & (colors < 1.0), axis=1)
    return colors[~inside]


class TestPrimitives:
    """Test sgn and in-gamut checks."""

    def test_sgn(self):
        """Test sign of positive, negative, zero and NaN."""
        assert sgn(2.5) == 1.0
        assert sgn(-0.1) == -1.0
        assert sgn(0.0) == 0.0
        assert sgn(-0.0) == 0.0
        assert sgn(float("nan")) == 0.0

    def test_is_in_gamut(self):
        """Test the strict open-interval predicate."""
        assert is_in_gamut(LinearColor(0.2, 0.5, 0.9))
        assert not is_in_gamut(LinearColor(0.0, 0.5, 0.9))
        assert not is_in_gamut(LinearColor(0.2, 1.0, 0.9))

    def test_in_gamut_mask(self):
        """Test array predicate keeps leading shape."""
        colors = np.array([[[0.5, 0.5, 0.5], [1.0, 0.5, 0.5]], [[0.1, 0.2, 0.3], [-1, 0, 0]]])
        mask = in_gamut_mask(colors)
        assert mask.shape == (2, 2)
        np.testing.assert_array_equal(mask, [[True, False], [True, False]])


class TestMaxSaturation:
    """Test max_saturation_for_hue and find_cusp."""

    def test_rejects_unnormalized_hue(self):
        """Test a non-unit hue raises ValueError."""
        with pytest.raises(ValueError, match="normalized"):
            max_saturation_for_hue(0.5, 0.5)
        with pytest.raises(ValueError, match="normalized"):
            find_cusp(2.0, 0.0)

    def test_clipping_channel_reaches_zero(self):
        """Test at L=1 and C=S the smallest channel is zero."""
        for a, b in hues():
            s = max_saturation_for_hue(a, b)
            assert s > 0.0
            rgb = perceptual_to_linear(PerceptualColor(1.0, s * a, s * b))
            assert abs(min(rgb)) < 1e-3, (a, b, tuple(rgb))

    def test_cusp_touches_cube(self):
        """Test the cusp has max channel 1 and min channel 0."""
        for a, b in hues():
            cusp = find_cusp(a, b)
            assert 0.0 < cusp.l < 1.0
            assert cusp.c > 0.0
            rgb = perceptual_to_linear(PerceptualColor(cusp.l, cusp.c * a, cusp.c * b))
            assert abs(max(rgb) - 1.0) < 1e-6
            assert abs(min(rgb)) < 1e-3

    def test_cusp_saturation(self):
        """Test CuspPoint.saturation equals max_saturation_for_hue."""
        a, b = math.cos(0.3), math.sin(0.3)
        cusp = find_cusp(a, b)
        assert isinstance(cusp, CuspPoint)
        assert abs(cusp.saturation - max_saturation_for_hue(a, b)) < 1e-9

    def test_red_cusp_matches_primary(self):
        """Test the cusp at the hue of sRGB red is red itself."""
        red = linear_to_perceptual(LinearColor(1.0, 0.0, 0.0))
        cusp = find_cusp(red.a / red.chroma, red.b / red.chroma)
        assert abs(cusp.l - red.l) < 2e-3
        assert abs(cusp.c - red.chroma) < 2e-3


class TestGamutIntersection:
    """Test find_gamut_intersection."""

    def test_anchor_at_black(self):
        """Test t == 0 when the line starts and ends at L=0."""
        for a, b in hues(8):
            assert find_gamut_intersection(a, b, 0.0, 0.2, 0.0) == 0.0

    def test_anchor_at_white(self):
        """Test t ~ 0 when the line starts and ends at L=1."""
        for a, b in hues(8):
            assert abs(find_gamut_intersection(a, b, 1.0, 0.2, 1.0)) < 1e-6

    def test_horizontal_line_hits_boundary(self):
        """Test the intersection point lies on the gamut boundary."""
        for a, b in hues():
            for lightness in (0.2, 0.5, 0.8):
                t = find_gamut_intersection(a, b, lightness, 1.0, lightness)
                assert t > 0.0
                point = PerceptualColor(lightness, t * a, t * b)
                rgb = np.array(tuple(perceptual_to_linear(point)))
                assert rgb.min() > -1e-3
                assert rgb.max() < 1.0 + 1e-3
                assert min(abs(rgb.min()), abs(rgb.max() - 1.0)) < 1e-3

    def test_scales_with_target_chroma(self):
        """Test doubling the target chroma halves t on a horizontal line."""
        a, b = math.cos(2.0), math.sin(2.0)
        t1 = find_gamut_intersection(a, b, 0.4, 0.5, 0.4)
        t2 = find_gamut_intersection(a, b, 0.4, 1.0, 0.4)
        assert abs(t1 - 2.0 * t2) < 1e-6

    def test_rejects_unnormalized_hue(self):
        """Test a non-unit hue raises ValueError."""
        with pytest.raises(ValueError):
            find_gamut_intersection(1.0, 1.0, 0.5, 0.1, 0.5)


class TestClipPolicies:
    """Test the clip operations."""

    @pytest.mark.parametrize("policy", ALL_POLICIES)
    def test_output_in_unit_cube(self, policy):
        """Test every clipped color lies in [0, 1]^3."""
        for rgb in out_of_gamut_colors():
            result = np.array(tuple(clip(LinearColor(*rgb), policy)))
            assert result.min() > -TOL, (policy, rgb, result)
            assert result.max() < 1.0 + TOL, (policy, rgb, result)

    @pytest.mark.parametrize("policy", ALL_POLICIES)
    def test_in_gamut_unchanged(self, policy):
        """Test in-gamut colors are returned exactly."""
        color = LinearColor(0.3, 0.6, 0.2)
        assert clip(color, policy) == color

    @pytest.mark.parametrize("policy", ALL_POLICIES)
    def test_hue_preserved(self, policy):
        """Test clipping keeps the Oklab hue."""
        for rgb in out_of_gamut_colors(60, seed=11):
            before = linear_to_perceptual(LinearColor(*rgb))
            after = linear_to_perceptual(clip(LinearColor(*rgb), policy))
            if before.chroma < 1e-3 or after.chroma < 1e-3:
                continue
            diff = math.remainder(after.hue - before.hue, 2.0 * math.pi)
            assert abs(diff) < 1e-3, (policy, rgb)

    @pytest.mark.parametrize("policy", ALL_POLICIES)
    def test_achromatic_clamps_lightness(self, policy):
        """Test near-gray colors only get their lightness clamped."""
        bright = clip(LinearColor(1.5, 1.5, 1.5), policy)
        np.testing.assert_allclose(tuple(bright), (1.0, 1.0, 1.0), atol=1e-6)
        dark = clip(LinearColor(-0.2, -0.2, -0.2), policy)
        np.testing.assert_allclose(tuple(dark), (0.0, 0.0, 0.0), atol=1e-9)

    def test_black_adaptive_mid(self):
        """Test Oklab black survives adaptive_mid clipping as black."""
        black = perceptual_to_linear(PerceptualColor(0.0, 0.0, 0.0))
        clipped = gamut_clip_adaptive_mid(black)
        for channel in clipped:
            assert abs(channel) < 1e-4

    def test_preserve_chroma_keeps_lightness(self):
        """Test preserve-chroma keeps L when it is inside [0, 1]."""
        for rgb in out_of_gamut_colors(80, seed=3):
            before = linear_to_perceptual(LinearColor(*rgb))
            if not 0.0 <= before.l <= 1.0:
                continue
            after = linear_to_perceptual(gamut_clip_preserve_chroma(LinearColor(*rgb)))
            assert abs(after.l - before.l) < 1e-6

    def test_project_to_mid_line(self):
        """Test the result lies on the line through (0.5, 0) and the input."""
        color = LinearColor(1.4, 0.3, -0.2)
        before = linear_to_perceptual(color)
        after = linear_to_perceptual(gamut_clip_project_to_mid(color))
        slope_before = (before.l - 0.5) / before.chroma
        slope_after = (after.l - 0.5) / after.chroma
        assert abs(slope_before - slope_after) < 1e-4

    def test_project_to_cusp_line(self):
        """Test the result lies on the line through (L_cusp, 0) and the input."""
        color = LinearColor(-0.1, 1.3, 0.4)
        before = linear_to_perceptual(color)
        cusp = find_cusp(before.a / before.chroma, before.b / before.chroma)
        after = linear_to_perceptual(gamut_clip_project_to_cusp(color))
        slope_before = (before.l - cusp.l) / before.chroma
        slope_after = (after.l - cusp.l) / after.chroma
        assert abs(slope_before - slope_after) < 1e-4

    def test_adaptive_limits(self):
        """Test alpha=0 behaves like preserve-chroma and huge alpha like fixed anchors."""
        color = LinearColor(1.3, 0.5, -0.1)
        assert 0.0 < linear_to_perceptual(color).l < 1.0
        np.testing.assert_allclose(
            tuple(gamut_clip_adaptive_mid(color, alpha=0.0)),
            tuple(gamut_clip_preserve_chroma(color)),
            atol=1e-6,
        )
        np.testing.assert_allclose(
            tuple(gamut_clip_adaptive_cusp(color, alpha=0.0)),
            tuple(gamut_clip_preserve_chroma(color)),
            atol=1e-6,
        )
        np.testing.assert_allclose(
            tuple(gamut_clip_adaptive_mid(color, alpha=1e9)),
            tuple(gamut_clip_project_to_mid(color)),
            atol=1e-4,
        )
        np.testing.assert_allclose(
            tuple(gamut_clip_adaptive_cusp(color, alpha=1e9)),
            tuple(gamut_clip_project_to_cusp(color)),
            atol=1e-4,
        )

    def test_policies_distinct(self):
        """Test the five policies give five different results for a saturated color."""
        color = LinearColor(1.4, 0.3, -0.2)
        results = [np.array(tuple(clip(color, p))) for p in ALL_POLICIES]
        for i in range(len(results)):
            for j in range(i + 1, len(results)):
                assert np.abs(results[i] - results[j]).max() > 1e-5, (
                    ALL_POLICIES[i],
                    ALL_POLICIES[j],
                )

    def test_default_policy_is_adaptive_mid(self):
        """Test clip() defaults to adaptive-mid with alpha 0.05."""
        color = LinearColor(1.2, -0.1, 0.6)
        assert clip(color) == gamut_clip_adaptive_mid(color, 0.05)

    def test_policy_by_name(self):
        """Test policies may be given as strings."""
        color = LinearColor(1.2, -0.1, 0.6)
        assert clip(color, "project-to-cusp") == gamut_clip_project_to_cusp(color)

    def test_unknown_policy_raises(self):
        """Test unknown policy names raise ValueError."""
        with pytest.raises(ValueError, match="not valid"):
            clip(LinearColor(1.2, 0.0, 0.0), "nearest")

    def test_negative_alpha_raises(self):
        """Test negative alpha raises ValueError."""
        with pytest.raises(ValueError, match="alpha"):
            gamut_clip_adaptive_mid(LinearColor(1.2, 0.0, 0.0), alpha=-0.1)


class TestGamutClipPolicy:
    """Test the policy enum."""

    def test_codes_unique(self):
        """Test every policy has its own kernel code."""
        assert sorted(p.code for p in GamutClipPolicy) == [0, 1, 2, 3, 4]

    def test_is_adaptive(self):
        """Test only the adaptive policies report is_adaptive."""
        adaptive = {p for p in GamutClipPolicy if p.is_adaptive}
        assert adaptive == {GamutClipPolicy.ADAPTIVE_MID, GamutClipPolicy.ADAPTIVE_CUSP}

    def test_coerce(self):
        """Test coercion from enum and strings."""
        policy = GamutClipPolicy.PROJECT_TO_MID
        assert GamutClipPolicy.coerce(policy) is policy
        assert GamutClipPolicy.coerce("Adaptive_Cusp") is GamutClipPolicy.ADAPTIVE_CUSP
        with pytest.raises(ValueError):
            GamutClipPolicy.coerce(3)


class TestArrayForms:
    """Test clip_array and the display conversions."""

    @pytest.mark.parametrize("policy", ALL_POLICIES)
    def test_clip_array_matches_scalar(self, policy):
        """Test the parallel kernel matches the scalar clip."""
        colors = out_of_gamut_colors(50, seed=5)
        result = clip_array(colors, policy)
        for rgb, clipped in zip(colors, result):
            np.testing.assert_allclose(clipped, tuple(clip(LinearColor(*rgb), policy)), atol=1e-9)

    def test_clip_array_in_place(self):
        """Test clip_array may write into its input."""
        colors = out_of_gamut_colors(30, seed=6)
        expected = clip_array(colors)
        clip_array(colors, out=colors)
        np.testing.assert_allclose(colors, expected, atol=1e-12)

    def test_perceptual_to_display_range(self):
        """Test display output is clamped to [0, 1] for wild inputs."""
        rng = np.random.default_rng(9)
        lab = np.column_stack(
            [rng.uniform(-0.2, 1.2, 500), rng.uniform(-0.6, 0.6, 500), rng.uniform(-0.6, 0.6, 500)]
        )
        display = perceptual_to_display(lab, "adaptive_cusp")
        assert display.shape == lab.shape
        assert display.min() >= 0.0
        assert display.max() <= 1.0

    def test_perceptual_to_display_in_gamut(self):
        """Test in-gamut colors are only sRGB-encoded."""
        lab = np.array([[0.5, 0.0, 0.0]])
        display = perceptual_to_display(lab)
        expected = 1.055 * 0.125 ** (1.0 / 2.4) - 0.055
        np.testing.assert_allclose(display[0], [expected] * 3, atol=1e-6)

    def test_unclamped_blacks_out_of_gamut(self):
        """Test the unclamped conversion writes black outside the gamut."""
        lab = np.array([[0.5, 0.0, 0.0], [0.5, 0.5, 0.0]])
        display = perceptual_to_display_unclamped(lab)
        assert display[0].min() > 0.3
        np.testing.assert_array_equal(display[1], [0.0, 0.0, 0.0])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
