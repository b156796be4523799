"""Gaussian blur approximated by repeated box filters.

Three box passes per axis approximate a Gaussian (Kovesi, "Fast Almost-Gaussian
Filtering", 2010). The vertical passes reuse the horizontal kernel by
transposing the buffer, so only square buffers are supported.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from brimstone.constants import GAUSS_BOX_PASSES
from brimstone.filter.kernels import box_filter_rows_numba, transpose_square_numba

logger = logging.getLogger(__name__)


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def box_widths_for_gauss(sigma: float, passes: int = GAUSS_BOX_PASSES) -> list[int]:
    """Odd box widths whose ``passes``-fold convolution approximates a Gaussian.

    :param sigma: Standard deviation in pixels
    :param passes: Number of box passes
    :returns: Non-decreasing list of odd widths, ``len == passes``
    :raises ValueError: If sigma is negative or passes < 1

    Example:
        >>> box_widths_for_gauss(2.0)
        [3, 3, 5]
    """
    if not sigma >= 0:
        raise ValueError(f"sigma={sigma} must be non-negative")
    if passes < 1:
        raise ValueError(f"passes={passes} must be positive")

    n = passes
    ideal = math.sqrt(12.0 * sigma * sigma / n + 1.0)
    wl = int(ideal)
    if wl % 2 == 0:
        wl -= 1
    wu = wl + 2

    m = _round_half_away(
        (12.0 * sigma * sigma - n * wl * wl - 4.0 * n * wl - 3.0 * n) / (-4.0 * wl - 4.0)
    )
    return [wl if i < m else wu for i in range(n)]


def _as_square_view(buffer: np.ndarray, size: int) -> np.ndarray:
    if not isinstance(buffer, np.ndarray) or buffer.dtype.kind != "f":
        raise ValueError("buffer must be a float numpy array")
    if not buffer.flags["C_CONTIGUOUS"] or not buffer.flags["WRITEABLE"]:
        raise ValueError("buffer must be writable and C-contiguous")
    if buffer.ndim == 3:
        if buffer.shape[:2] != (size, size):
            raise ValueError(f"buffer shape {buffer.shape} does not match {size}x{size}")
        return buffer
    if len(buffer) != size * size:
        raise ValueError(f"buffer holds {len(buffer)} pixels, expected {size * size}")
    if buffer.ndim == 1:
        return buffer.reshape(size, size, 1)
    if buffer.ndim == 2:
        return buffer.reshape(size, size, buffer.shape[1])
    raise ValueError(f"buffer must have 1 to 3 dimensions, got {buffer.ndim}")


def box_filter_x(buffer: np.ndarray, width: int) -> np.ndarray:
    """Box-filter each row of an ``[H, W, C]`` buffer in-place.

    :param buffer: Float buffer [H, W, C]
    :param width: Odd filter width; 1 leaves the buffer unchanged
    :returns: The same buffer
    :raises ValueError: If width is even or not positive
    """
    if width < 1 or width % 2 != 1:
        raise ValueError(f"width={width} must be a positive odd integer")
    if buffer.ndim != 3:
        raise ValueError(f"buffer must be [H, W, C], got shape {buffer.shape}")
    if width == 1:
        return buffer
    src = buffer.copy()
    box_filter_rows_numba(src, buffer, width)
    return buffer


def transpose_square(buffer: np.ndarray) -> np.ndarray:
    """Transpose a square ``[S, S, C]`` buffer in-place.

    :raises ValueError: If the first two axes differ
    """
    if buffer.ndim != 3 or buffer.shape[0] != buffer.shape[1]:
        raise ValueError(f"buffer must be [S, S, C], got shape {buffer.shape}")
    transpose_square_numba(buffer)
    return buffer


def gaussian_blur(buffer: np.ndarray, width: int, height: int, sigma: float) -> np.ndarray:
    """Blur a square image buffer in-place.

    :param buffer: Float array of ``width * height`` pixels, shaped ``(N,)``,
        ``(N, C)`` or ``(H, W, C)``, row-major
    :param width: Image width
    :param height: Image height, must equal width
    :param sigma: Gaussian standard deviation in pixels
    :returns: The same buffer
    :raises ValueError: If the image is not square or the buffer size mismatches
    """
    if width != height:
        raise ValueError(f"only square buffers can be blurred, got {width}x{height}")
    widths = box_widths_for_gauss(sigma)
    view = _as_square_view(buffer, width)
    logger.debug("[Blur] sigma=%.3f size=%d widths=%s", sigma, width, widths)

    if all(w == 1 for w in widths):
        return buffer

    for w in widths:
        box_filter_x(view, w)
    transpose_square(view)
    for w in widths:
        box_filter_x(view, w)
    transpose_square(view)
    return buffer
