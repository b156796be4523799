"""
Numba-optimized kernels for the separable box blur.

Buffers are ``[H, W, C]`` float arrays; rows are processed in parallel.
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray


@njit(parallel=True, cache=True, nogil=True)
def box_filter_rows_numba(
    src: NDArray[np.float64],
    dst: NDArray[np.float64],
    filter_width: int,
) -> None:
    """
    Sliding-window mean along axis 1 with edge-replicate boundaries.

    Args:
        src: Input buffer [H, W, C] (not modified)
        dst: Output buffer [H, W, C], must not alias src
        filter_width: Odd window width
    """
    h = src.shape[0]
    w = src.shape[1]
    n_channels = src.shape[2]
    rd = (filter_width - 1) // 2
    inv = 1.0 / filter_width
    last = w - 1

    for y in prange(h):
        for c in range(n_channels):
            acc = 0.0
            for k in range(-rd, rd + 1):
                acc += src[y, min(max(k, 0), last), c]

            for x in range(w):
                dst[y, x, c] = acc * inv
                acc += src[y, min(x + rd + 1, last), c]
                acc -= src[y, max(x - rd, 0), c]


@njit(parallel=True, cache=True, nogil=True)
def transpose_square_numba(buf: NDArray[np.float64]) -> None:
    """
    Swap axes 0 and 1 of a square [S, S, C] buffer in-place.

    Each row y owns the pairs (y, x) with x > y, so rows never race.
    """
    size = buf.shape[0]
    n_channels = buf.shape[2]

    for y in prange(size):
        for x in range(y + 1, size):
            for c in range(n_channels):
                tmp = buf[y, x, c]
                buf[y, x, c] = buf[x, y, c]
                buf[x, y, c] = tmp
