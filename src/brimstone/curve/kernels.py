"""
Numba-optimized int64 Hilbert kernels.

Same algorithm as :mod:`brimstone.curve.hilbert`, restricted to
``bits * dims <= 62`` so indices and intermediate shifts fit a signed int64.
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray


@njit(cache=True, nogil=True)
def _axes_to_transpose(x: NDArray[np.int64], bits: int) -> None:
    n = x.shape[0]
    m = np.int64(1) << (bits - 1)

    q = m
    while q > 1:
        p = q - 1
        for i in range(n):
            if x[i] & q:
                x[0] ^= p
            else:
                t = (x[0] ^ x[i]) & p
                x[0] ^= t
                x[i] ^= t
        q >>= 1

    for i in range(1, n):
        x[i] ^= x[i - 1]
    t = np.int64(0)
    q = m
    while q > 1:
        if x[n - 1] & q:
            t ^= q - 1
        q >>= 1
    for i in range(n):
        x[i] ^= t


@njit(cache=True, nogil=True)
def _transpose_to_axes(x: NDArray[np.int64], bits: int) -> None:
    n = x.shape[0]
    top = np.int64(2) << (bits - 1)

    t = x[n - 1] >> 1
    for i in range(n - 1, 0, -1):
        x[i] ^= x[i - 1]
    x[0] ^= t

    q = np.int64(2)
    while q != top:
        p = q - 1
        for i in range(n - 1, -1, -1):
            if x[i] & q:
                x[0] ^= p
            else:
                t = (x[0] ^ x[i]) & p
                x[0] ^= t
                x[i] ^= t
        q <<= 1


@njit(parallel=True, cache=True, nogil=True)
def hilbert_forward_numba(
    coords: NDArray[np.int64], bits: int, out: NDArray[np.int64]
) -> None:
    """
    Hilbert indices of lattice points.

    Args:
        coords: Coordinates [N, D], each in [0, 2**bits)
        bits: Bits per axis
        out: Output indices [N] (modified in-place)
    """
    n_points = coords.shape[0]
    dims = coords.shape[1]

    for k in prange(n_points):
        x = coords[k].copy()
        _axes_to_transpose(x, bits)

        index = np.int64(0)
        for j in range(bits - 1, -1, -1):
            for i in range(dims):
                index = (index << 1) | ((x[i] >> j) & 1)
        out[k] = index


@njit(parallel=True, cache=True, nogil=True)
def hilbert_inverse_numba(
    indices: NDArray[np.int64], bits: int, out: NDArray[np.int64]
) -> None:
    """
    Lattice points at Hilbert indices.

    Args:
        indices: Indices [N], each in [0, 2**(bits * D))
        bits: Bits per axis
        out: Output coordinates [N, D] (modified in-place)
    """
    n_points = indices.shape[0]
    dims = out.shape[1]

    for k in prange(n_points):
        index = indices[k]
        x = np.zeros(dims, dtype=np.int64)
        shift = bits * dims - 1
        for j in range(bits - 1, -1, -1):
            for i in range(dims):
                x[i] |= ((index >> shift) & 1) << j
                shift -= 1

        _transpose_to_axes(x, bits)
        for i in range(dims):
            out[k, i] = x[i]
