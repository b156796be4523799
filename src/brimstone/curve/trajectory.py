"""Map image pixels onto a path through a 3D lattice via two Hilbert curves.

A pixel's position along the 2D Hilbert curve of the image, as a fraction of
the curve's length, selects the point at the same fraction along a coarser
3D Hilbert curve. Neighbouring pixels therefore land close together in 3D,
which makes the trajectory usable as a smooth color ramp.
"""

from __future__ import annotations

import logging
import math
from fractions import Fraction

import numpy as np

from brimstone.constants import MAX_LEVELS, MIN_LEVELS
from brimstone.curve.hilbert import (
    hilbert_forward,
    hilbert_forward_array,
    hilbert_inverse,
    hilbert_inverse_array,
)

logger = logging.getLogger(__name__)


def size_bits(size: int) -> int:
    """log2 of a power-of-two image side.

    :raises ValueError: If size is not a positive power of two
    """
    if size < 1 or size & (size - 1):
        raise ValueError(f"size={size} must be a positive power of two")
    return size.bit_length() - 1


def raster_curve_positions(size: int) -> np.ndarray:
    """Fractional 2D Hilbert position of every pixel, in raster order.

    :param size: Side of a square power-of-two image
    :returns: float64 array [size * size], ``hilbert_index / max_index`` in [0, 1]
    """
    bits = size_bits(size)
    if bits == 0:
        return np.zeros(1, dtype=np.float64)

    ys, xs = np.divmod(np.arange(size * size, dtype=np.int64), size)
    coords = np.stack([xs, ys], axis=1)
    indices = hilbert_forward_array(coords, bits)
    return indices / float(size * size - 1)


def sample_curve(positions, bits: int, dims: int = 3) -> np.ndarray:
    """Points at fractional positions along a Hilbert curve.

    Each position ``t`` in [0, 1] is scaled to ``t * max_index`` and the two
    bracketing lattice points are linearly interpolated.

    :param positions: Fractions along the curve [N]
    :param bits: Bits per axis of the sampled curve
    :param dims: Dimensions of the sampled curve
    :returns: float64 array [N, dims] of coordinates divided by ``2**bits``
    :raises ValueError: If a position is outside [0, 1]
    """
    t = np.asarray(positions, dtype=np.float64).reshape(-1)
    if t.size and not (t.min() >= 0.0 and t.max() <= 1.0):
        raise ValueError("positions must lie in [0, 1]")

    max_index = (1 << (bits * dims)) - 1
    scaled = t * max_index
    lower = np.minimum(np.floor(scaled).astype(np.int64), max_index)
    upper = np.minimum(lower + 1, max_index)
    frac = (scaled - lower)[:, None]

    p_lower = hilbert_inverse_array(lower, bits, dims).astype(np.float64)
    p_upper = hilbert_inverse_array(upper, bits, dims).astype(np.float64)
    return (p_lower + (p_upper - p_lower) * frac) / float(1 << bits)


def hilbert_trajectory(size: int, levels: int) -> np.ndarray:
    """3D trajectory point of every pixel of a square image.

    :param size: Side of a square power-of-two image
    :param levels: Curve refinement; the 3D curve has ``levels + 1`` bits per axis
    :returns: float64 array [size * size, 3], coordinates in [0, 1)
    :raises ValueError: If size is not a power of two or levels is out of range
    """
    if not MIN_LEVELS <= levels <= MAX_LEVELS:
        raise ValueError(f"levels={levels} is outside valid range [{MIN_LEVELS}, {MAX_LEVELS}]")
    logger.debug("[Trajectory] size=%d levels=%d", size, levels)
    return sample_curve(raster_curve_positions(size), levels + 1, 3)


def hilbert_trajectory_point(x: int, y: int, size_bits: int, bits: int) -> tuple[float, ...]:
    """Arbitrary-precision trajectory point of one pixel.

    :param x: Pixel column in [0, 2**size_bits)
    :param y: Pixel row in [0, 2**size_bits)
    :param size_bits: log2 of the image side
    :param bits: Bits per axis of the 3D curve
    :returns: (x, y, z) coordinates divided by ``2**bits``
    """
    if size_bits == 0:
        t = Fraction(0)
    else:
        t = Fraction(hilbert_forward((x, y), size_bits), (1 << (2 * size_bits)) - 1)

    max_index = (1 << (3 * bits)) - 1
    scaled = t * max_index
    lower = min(math.floor(scaled), max_index)
    upper = min(lower + 1, max_index)
    frac = float(scaled - lower)

    scale = float(1 << bits)
    p_lower = hilbert_inverse(lower, bits, 3)
    p_upper = hilbert_inverse(upper, bits, 3)
    return tuple((lo + (hi - lo) * frac) / scale for lo, hi in zip(p_lower, p_upper))
