"""Gamut mapping API: cusp and intersection queries plus the five clip policies.

Single colors call the scalar kernels directly; buffers go through the
parallel kernels in :mod:`brimstone.gamut.kernels`.

Example:
    >>> from brimstone.color import LinearColor
    >>> from brimstone.gamut import clip, GamutClipPolicy
    >>> clip(LinearColor(1.2, 0.3, -0.1), GamutClipPolicy.PROJECT_TO_CUSP)
    LinearColor(r=..., g=..., b=...)
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from brimstone.color.convert import as_color_array, prepare_output
from brimstone.color.values import LinearColor
from brimstone.constants import DEFAULT_ALPHA, HUE_NORM_TOLERANCE
from brimstone.gamut.kernels import (
    compute_max_saturation,
    find_cusp_scalar,
    find_gamut_intersection_scalar,
    gamut_clip_numba,
    gamut_clip_scalar,
    in_gamut_numba,
    oklab_to_srgb_bounded_numba,
    oklab_to_srgb_clipped_numba,
)
from brimstone.gamut.kernels import sgn as _sgn
from brimstone.gamut.policy import GamutClipPolicy
from brimstone.validators import validate_range


@dataclass(frozen=True)
class CuspPoint:
    """Point of maximum chroma on the gamut boundary for one hue."""

    l: float  # noqa: E741
    c: float

    @property
    def saturation(self) -> float:
        """S = C / L, the slope of the black-cusp edge."""
        return self.c / self.l


def _check_hue(a: float, b: float) -> tuple[float, float]:
    a = float(a)
    b = float(b)
    norm = a * a + b * b
    if not abs(norm - 1.0) < HUE_NORM_TOLERANCE:
        raise ValueError(f"hue ({a}, {b}) must be normalized: a^2 + b^2 = {norm}, expected 1")
    return a, b


# =============================================================================
# Primitives
# =============================================================================


def is_in_gamut(color: LinearColor) -> bool:
    """True iff every channel lies strictly inside (0, 1)."""
    return color.is_in_gamut()


def in_gamut_mask(colors) -> np.ndarray:
    """Boolean mask of colors [..., 3] strictly inside the gamut.

    :returns: bool array with the input's leading shape
    """
    shape = np.shape(colors)[:-1]
    flat = as_color_array(colors)
    mask = np.empty(len(flat), dtype=np.bool_)
    in_gamut_numba(flat, mask)
    return mask.reshape(shape)


def sgn(x: float) -> float:
    """Sign of ``x``: -1.0, 0.0 or 1.0 (NaN gives 0.0)."""
    return _sgn(float(x))


def max_saturation_for_hue(a: float, b: float) -> float:
    """Maximum saturation S = C / L reachable at hue (a, b).

    :param a: Normalized hue a
    :param b: Normalized hue b
    :returns: Saturation at which the first RGB channel reaches zero
    :raises ValueError: If (a, b) is not a unit vector
    """
    a, b = _check_hue(a, b)
    return compute_max_saturation(a, b)


def find_cusp(a: float, b: float) -> CuspPoint:
    """Cusp of the gamut triangle at hue (a, b).

    :raises ValueError: If (a, b) is not a unit vector
    """
    a, b = _check_hue(a, b)
    cusp_l, cusp_c = find_cusp_scalar(a, b)
    return CuspPoint(cusp_l, cusp_c)


def find_gamut_intersection(a: float, b: float, l1: float, c1: float, l0: float) -> float:
    """Where the line from (l0, 0) to (l1, c1) meets the gamut boundary.

    Points on the line are ``L = l0 * (1 - t) + t * l1``, ``C = t * c1``.

    :param a: Normalized hue a
    :param b: Normalized hue b
    :param l1: Lightness of the target color
    :param c1: Chroma of the target color
    :param l0: Anchor lightness
    :returns: Intersection parameter t
    :raises ValueError: If (a, b) is not a unit vector
    """
    a, b = _check_hue(a, b)
    return find_gamut_intersection_scalar(a, b, float(l1), float(c1), float(l0))


# =============================================================================
# Clipping
# =============================================================================


def _clip(color: LinearColor, policy: GamutClipPolicy, alpha: float) -> LinearColor:
    r, g, b = gamut_clip_scalar(
        float(color.r), float(color.g), float(color.b), policy.code, float(alpha)
    )
    return LinearColor(r, g, b)


def gamut_clip_preserve_chroma(color: LinearColor) -> LinearColor:
    """Clip keeping lightness (clamped to [0, 1]) and reducing chroma."""
    return _clip(color, GamutClipPolicy.PRESERVE_CHROMA, DEFAULT_ALPHA)


def gamut_clip_project_to_mid(color: LinearColor) -> LinearColor:
    """Clip by projecting toward mid gray (L=0.5, C=0)."""
    return _clip(color, GamutClipPolicy.PROJECT_TO_MID, DEFAULT_ALPHA)


def gamut_clip_project_to_cusp(color: LinearColor) -> LinearColor:
    """Clip by projecting toward the gray of the cusp lightness."""
    return _clip(color, GamutClipPolicy.PROJECT_TO_CUSP, DEFAULT_ALPHA)


@validate_range(0.0, float("inf"), "alpha", param_index=1)
def gamut_clip_adaptive_mid(color: LinearColor, alpha: float = DEFAULT_ALPHA) -> LinearColor:
    """Clip toward an anchor that moves from L to 0.5 as chroma grows.

    :param color: Linear color
    :param alpha: Adaptation strength; larger keeps lightness longer
    """
    return _clip(color, GamutClipPolicy.ADAPTIVE_MID, alpha)


@validate_range(0.0, float("inf"), "alpha", param_index=1)
def gamut_clip_adaptive_cusp(color: LinearColor, alpha: float = DEFAULT_ALPHA) -> LinearColor:
    """Clip toward an anchor that moves from L to L_cusp as chroma grows."""
    return _clip(color, GamutClipPolicy.ADAPTIVE_CUSP, alpha)


@validate_range(0.0, float("inf"), "alpha", param_index=2)
def clip(
    color: LinearColor,
    policy: GamutClipPolicy | str = GamutClipPolicy.ADAPTIVE_MID,
    alpha: float = DEFAULT_ALPHA,
) -> LinearColor:
    """Clip one color with the given policy.

    :param color: Linear color, returned unchanged if already in gamut
    :param policy: Clip policy or its name
    :param alpha: Adaptation strength (adaptive policies only)
    :returns: Linear color with channels in [0, 1]
    """
    return _clip(color, GamutClipPolicy.coerce(policy), alpha)


@validate_range(0.0, float("inf"), "alpha", param_index=2)
def clip_array(
    colors,
    policy: GamutClipPolicy | str = GamutClipPolicy.ADAPTIVE_MID,
    alpha: float = DEFAULT_ALPHA,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """Clip linear colors [..., 3] in parallel.

    :param colors: Linear colors
    :param policy: Clip policy or its name
    :param alpha: Adaptation strength
    :param out: Optional float64 output (may be ``colors`` itself)
    :returns: Clipped colors with the input's shape
    """
    code = GamutClipPolicy.coerce(policy).code
    flat, result = prepare_output(colors, out)
    gamut_clip_numba(flat, code, float(alpha), result)
    return out if out is not None else result.reshape(np.shape(colors))


@validate_range(0.0, float("inf"), "alpha", param_index=2)
def perceptual_to_display(
    lab,
    policy: GamutClipPolicy | str = GamutClipPolicy.ADAPTIVE_MID,
    alpha: float = DEFAULT_ALPHA,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """Convert Oklab colors [..., 3] to display sRGB, clipping out-of-gamut colors.

    :returns: Display colors in [0, 1] with the input's shape
    """
    code = GamutClipPolicy.coerce(policy).code
    flat, result = prepare_output(lab, out)
    oklab_to_srgb_clipped_numba(flat, code, float(alpha), result)
    return out if out is not None else result.reshape(np.shape(lab))


def perceptual_to_display_unclamped(lab, out: np.ndarray | None = None) -> np.ndarray:
    """Convert Oklab colors [..., 3] to display sRGB without gamut mapping.

    Colors outside the gamut are written as black.
    """
    flat, result = prepare_output(lab, out)
    oklab_to_srgb_bounded_numba(flat, result)
    return out if out is not None else result.reshape(np.shape(lab))


__all__ = [
    "CuspPoint",
    "is_in_gamut",
    "in_gamut_mask",
    "sgn",
    "max_saturation_for_hue",
    "find_cusp",
    "find_gamut_intersection",
    "gamut_clip_preserve_chroma",
    "gamut_clip_project_to_mid",
    "gamut_clip_project_to_cusp",
    "gamut_clip_adaptive_mid",
    "gamut_clip_adaptive_cusp",
    "clip",
    "clip_array",
    "perceptual_to_display",
    "perceptual_to_display_unclamped",
]
