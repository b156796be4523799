"""Numba kernels for Oklab and sRGB conversions.

Scalar kernels return tuples and are shared by the gamut kernels; array
kernels take ``[N, 3]`` float64 inputs and write into preallocated outputs.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

from brimstone.constants import (
    LINEAR_TO_LMS,
    LMS_TO_LINEAR,
    LMS_TO_OKLAB,
    OKLAB_TO_LMS,
    SRGB_ENCODED_THRESHOLD,
    SRGB_GAMMA,
    SRGB_LINEAR_THRESHOLD,
    SRGB_OFFSET,
    SRGB_SLOPE,
)

# =============================================================================
# Scalar kernels
# =============================================================================


@njit(cache=True, nogil=True)
def cbrt(x: float) -> float:
    """Real cube root, defined for negative input."""
    return math.copysign(abs(x) ** (1.0 / 3.0), x)


@njit(cache=True, nogil=True)
def linear_to_oklab_scalar(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert one linear sRGB color to Oklab.

    :param r: Red channel (unbounded)
    :param g: Green channel (unbounded)
    :param b: Blue channel (unbounded)
    :returns: Tuple of (L, a, b)
    """
    l = LINEAR_TO_LMS[0, 0] * r + LINEAR_TO_LMS[0, 1] * g + LINEAR_TO_LMS[0, 2] * b
    m = LINEAR_TO_LMS[1, 0] * r + LINEAR_TO_LMS[1, 1] * g + LINEAR_TO_LMS[1, 2] * b
    s = LINEAR_TO_LMS[2, 0] * r + LINEAR_TO_LMS[2, 1] * g + LINEAR_TO_LMS[2, 2] * b

    l_ = cbrt(l)
    m_ = cbrt(m)
    s_ = cbrt(s)

    return (
        LMS_TO_OKLAB[0, 0] * l_ + LMS_TO_OKLAB[0, 1] * m_ + LMS_TO_OKLAB[0, 2] * s_,
        LMS_TO_OKLAB[1, 0] * l_ + LMS_TO_OKLAB[1, 1] * m_ + LMS_TO_OKLAB[1, 2] * s_,
        LMS_TO_OKLAB[2, 0] * l_ + LMS_TO_OKLAB[2, 1] * m_ + LMS_TO_OKLAB[2, 2] * s_,
    )


@njit(cache=True, nogil=True)
def oklab_to_linear_scalar(L: float, a: float, b: float) -> tuple[float, float, float]:
    """Convert one Oklab color to linear sRGB (no clamping).

    :param L: Lightness
    :param a: Green/red chroma axis
    :param b: Blue/yellow chroma axis
    :returns: Tuple of (r, g, b)
    """
    l_ = OKLAB_TO_LMS[0, 0] * L + OKLAB_TO_LMS[0, 1] * a + OKLAB_TO_LMS[0, 2] * b
    m_ = OKLAB_TO_LMS[1, 0] * L + OKLAB_TO_LMS[1, 1] * a + OKLAB_TO_LMS[1, 2] * b
    s_ = OKLAB_TO_LMS[2, 0] * L + OKLAB_TO_LMS[2, 1] * a + OKLAB_TO_LMS[2, 2] * b

    l = l_ * l_ * l_
    m = m_ * m_ * m_
    s = s_ * s_ * s_

    return (
        LMS_TO_LINEAR[0, 0] * l + LMS_TO_LINEAR[0, 1] * m + LMS_TO_LINEAR[0, 2] * s,
        LMS_TO_LINEAR[1, 0] * l + LMS_TO_LINEAR[1, 1] * m + LMS_TO_LINEAR[1, 2] * s,
        LMS_TO_LINEAR[2, 0] * l + LMS_TO_LINEAR[2, 1] * m + LMS_TO_LINEAR[2, 2] * s,
    )


@njit(cache=True, nogil=True)
def srgb_encode(v: float) -> float:
    """sRGB OETF for one channel."""
    if v <= SRGB_LINEAR_THRESHOLD:
        return SRGB_SLOPE * v
    return (1.0 + SRGB_OFFSET) * v ** (1.0 / SRGB_GAMMA) - SRGB_OFFSET


@njit(cache=True, nogil=True)
def srgb_decode(v: float) -> float:
    """sRGB EOTF for one channel."""
    if v <= SRGB_ENCODED_THRESHOLD:
        return v / SRGB_SLOPE
    return ((v + SRGB_OFFSET) / (1.0 + SRGB_OFFSET)) ** SRGB_GAMMA


# =============================================================================
# Array kernels
# =============================================================================


@njit(parallel=True, cache=True, nogil=True)
def linear_to_oklab_numba(colors: NDArray[np.float64], out: NDArray[np.float64]) -> None:
    """Convert linear sRGB colors [N, 3] to Oklab (out modified in-place)."""
    for i in prange(colors.shape[0]):
        L, a, b = linear_to_oklab_scalar(colors[i, 0], colors[i, 1], colors[i, 2])
        out[i, 0] = L
        out[i, 1] = a
        out[i, 2] = b


@njit(parallel=True, cache=True, nogil=True)
def oklab_to_linear_numba(colors: NDArray[np.float64], out: NDArray[np.float64]) -> None:
    """Convert Oklab colors [N, 3] to linear sRGB (out modified in-place)."""
    for i in prange(colors.shape[0]):
        r, g, b = oklab_to_linear_scalar(colors[i, 0], colors[i, 1], colors[i, 2])
        out[i, 0] = r
        out[i, 1] = g
        out[i, 2] = b


@njit(parallel=True, cache=True, nogil=True)
def linear_to_srgb_numba(colors: NDArray[np.float64], out: NDArray[np.float64]) -> None:
    """Encode linear sRGB [N, 3] to display sRGB."""
    for i in prange(colors.shape[0]):
        for c in range(3):
            out[i, c] = srgb_encode(colors[i, c])


@njit(parallel=True, cache=True, nogil=True)
def srgb_to_linear_numba(colors: NDArray[np.float64], out: NDArray[np.float64]) -> None:
    """Decode display sRGB [N, 3] to linear sRGB."""
    for i in prange(colors.shape[0]):
        for c in range(3):
            out[i, c] = srgb_decode(colors[i, c])


@njit(parallel=True, cache=True, nogil=True)
def srgb_to_oklab_numba(colors: NDArray[np.float64], out: NDArray[np.float64]) -> None:
    """Decode display sRGB [N, 3] straight to Oklab (fused, used before blurring)."""
    for i in prange(colors.shape[0]):
        L, a, b = linear_to_oklab_scalar(
            srgb_decode(colors[i, 0]), srgb_decode(colors[i, 1]), srgb_decode(colors[i, 2])
        )
        out[i, 0] = L
        out[i, 1] = a
        out[i, 2] = b
