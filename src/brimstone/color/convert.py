"""Conversions between linear sRGB, display sRGB and Oklab.

Single colors go through the scalar kernels; arrays of any leading shape
``[..., 3]`` go through the parallel array kernels. Nothing here clamps:
gamut handling lives in :mod:`brimstone.gamut`.
"""

from __future__ import annotations

import numpy as np

from brimstone.color.kernels import (
    linear_to_oklab_numba,
    linear_to_oklab_scalar,
    linear_to_srgb_numba,
    oklab_to_linear_numba,
    oklab_to_linear_scalar,
    srgb_to_linear_numba,
)
from brimstone.color.values import LinearColor, PerceptualColor


def linear_to_perceptual(color: LinearColor) -> PerceptualColor:
    """Convert a linear sRGB color to Oklab.

    :param color: Linear color (any range)
    :returns: Perceptual color
    """
    return PerceptualColor(*linear_to_oklab_scalar(float(color.r), float(color.g), float(color.b)))


def perceptual_to_linear(color: PerceptualColor) -> LinearColor:
    """Convert an Oklab color to linear sRGB.

    :param color: Perceptual color
    :returns: Linear color, possibly outside [0, 1]
    """
    return LinearColor(*oklab_to_linear_scalar(float(color.l), float(color.a), float(color.b)))


def as_color_array(colors) -> np.ndarray:
    """Return a C-contiguous float64 ``[N, 3]`` view or copy of ``colors``.

    :param colors: Array-like with trailing dimension 3
    :raises ValueError: If the trailing dimension is not 3
    """
    arr = np.ascontiguousarray(colors, dtype=np.float64)
    if arr.ndim == 0 or arr.shape[-1] != 3:
        raise ValueError(f"Expected colors with trailing dimension 3, got shape {arr.shape}")
    return arr.reshape(-1, 3)


def check_output(out: np.ndarray, n_colors: int) -> None:
    """Validate a caller-provided output buffer for ``n_colors`` colors.

    :raises ValueError: If the buffer cannot be written through a flat view
    """
    if out.dtype != np.float64 or not out.flags["C_CONTIGUOUS"] or not out.flags["WRITEABLE"]:
        raise ValueError("out must be a writable C-contiguous float64 array")
    if out.size != n_colors * 3:
        raise ValueError(f"out holds {out.size // 3} colors, expected {n_colors}")


def prepare_output(colors, out: np.ndarray | None) -> tuple[np.ndarray, np.ndarray]:
    """Flatten ``colors`` and pair it with a flat ``[N, 3]`` output buffer.

    :returns: Tuple of (flat input, flat output)
    """
    flat = as_color_array(colors)
    if out is None:
        return flat, np.empty_like(flat)
    check_output(out, len(flat))
    return flat, out.reshape(-1, 3)


def _apply(kernel, colors, out: np.ndarray | None) -> np.ndarray:
    flat, result = prepare_output(colors, out)
    kernel(flat, result)
    return out if out is not None else result.reshape(np.shape(colors))


def linear_to_perceptual_array(colors, out: np.ndarray | None = None) -> np.ndarray:
    """Convert linear sRGB colors [..., 3] to Oklab.

    :param colors: Linear colors
    :param out: Optional float64 output with the same number of colors
    :returns: Oklab colors with the input's shape
    """
    return _apply(linear_to_oklab_numba, colors, out)


def perceptual_to_linear_array(colors, out: np.ndarray | None = None) -> np.ndarray:
    """Convert Oklab colors [..., 3] to linear sRGB (unclamped)."""
    return _apply(oklab_to_linear_numba, colors, out)


def linear_to_srgb(colors, out: np.ndarray | None = None) -> np.ndarray:
    """Apply the sRGB transfer function to linear colors [..., 3]."""
    return _apply(linear_to_srgb_numba, colors, out)


def srgb_to_linear(colors, out: np.ndarray | None = None) -> np.ndarray:
    """Invert the sRGB transfer function on display colors [..., 3]."""
    return _apply(srgb_to_linear_numba, colors, out)
