"""Hilbert curve indexing for any bit depth and dimension count.

Implements John Skilling's transpose algorithm ("Programming the Hilbert
curve", AIP Conf. Proc. 707, 2004). Indices are Python ints, so there is no
upper bound on ``bits * dims``. The ``*_array`` forms run the same algorithm
in int64 numba kernels and are limited to ``bits * dims <= 62``.

The index bits are interleaved from the transposed form with the most
significant bit of axis 0 first.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from brimstone.config.config import CURVE_CONFIG
from brimstone.curve.kernels import hilbert_forward_numba, hilbert_inverse_numba
from brimstone.validators import validate_positive


def _check_bits(bits: int) -> None:
    if bits < 1:
        raise ValueError(f"bits={bits} must be positive (a curve needs at least 1 bit per axis)")


def axes_to_transpose(coords: list[int], bits: int) -> list[int]:
    """Skilling's AxesToTranspose on a copy of ``coords``."""
    x = list(coords)
    n = len(x)
    m = 1 << (bits - 1)

    # Inverse undo
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

    # Gray encode
    for i in range(1, n):
        x[i] ^= x[i - 1]
    t = 0
    q = m
    while q > 1:
        if x[n - 1] & q:
            t ^= q - 1
        q >>= 1
    for i in range(n):
        x[i] ^= t
    return x


def transpose_to_axes(transpose: list[int], bits: int) -> list[int]:
    """Skilling's TransposeToAxes on a copy of ``transpose``."""
    x = list(transpose)
    n = len(x)
    top = 2 << (bits - 1)

    # Gray decode
    t = x[n - 1] >> 1
    for i in range(n - 1, 0, -1):
        x[i] ^= x[i - 1]
    x[0] ^= t

    # Undo excess work
    q = 2
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
    return x


def interleave(transpose: Sequence[int], bits: int) -> int:
    """Pack a transposed index into a single integer, axis 0 most significant."""
    index = 0
    for j in range(bits - 1, -1, -1):
        for value in transpose:
            index = (index << 1) | ((value >> j) & 1)
    return index


def deinterleave(index: int, bits: int, dims: int) -> list[int]:
    """Inverse of :func:`interleave`."""
    transpose = [0] * dims
    shift = bits * dims - 1
    for j in range(bits - 1, -1, -1):
        for i in range(dims):
            transpose[i] |= ((index >> shift) & 1) << j
            shift -= 1
    return transpose


@validate_positive("bits", param_index=1)
def hilbert_forward(coords: Sequence[int], bits: int) -> int:
    """Hilbert index of a lattice point.

    :param coords: One integer coordinate per axis, each in [0, 2**bits)
    :param bits: Bits per axis
    :returns: Index in [0, 2**(bits * len(coords)))
    :raises ValueError: If bits < 1, coords is empty, or a coordinate is out of range

    Example:
        >>> hilbert_forward((0, 0), 1), hilbert_forward((0, 1), 1)
        (0, 1)
    """
    if len(coords) < 1:
        raise ValueError("coords must have at least one axis")
    side = 1 << bits
    values = []
    for c in coords:
        c = int(c)
        if not 0 <= c < side:
            raise ValueError(f"coordinate {c} is outside [0, {side}) for bits={bits}")
        values.append(c)
    return interleave(axes_to_transpose(values, bits), bits)


@validate_positive("bits", param_index=1)
@validate_positive("dims", param_index=2)
def hilbert_inverse(index: int, bits: int, dims: int) -> tuple[int, ...]:
    """Lattice point at a Hilbert index.

    :param index: Index in [0, 2**(bits * dims))
    :param bits: Bits per axis
    :param dims: Number of axes
    :returns: Tuple of ``dims`` coordinates
    :raises ValueError: If bits < 1, dims < 1, or the index is out of range
    """
    index = int(index)
    length = 1 << (bits * dims)
    if not 0 <= index < length:
        raise ValueError(f"index {index} is outside [0, {length}) for bits={bits}, dims={dims}")
    return tuple(transpose_to_axes(deinterleave(index, bits, dims), bits))


@dataclass(frozen=True)
class HilbertCurve:
    """A Hilbert curve over a ``dims``-dimensional lattice with ``2**bits`` cells per axis.

    Example:
        >>> curve = HilbertCurve(bits=3, dims=3)
        >>> curve.max_index
        511
        >>> curve.inverse(curve.forward((1, 2, 3)))
        (1, 2, 3)
    """

    bits: int
    dims: int = 2

    def __post_init__(self) -> None:
        _check_bits(self.bits)
        if self.dims < 1:
            raise ValueError(f"dims={self.dims} must be positive")

    @property
    def side(self) -> int:
        """Cells per axis."""
        return 1 << self.bits

    @property
    def length(self) -> int:
        """Number of lattice points on the curve."""
        return 1 << (self.bits * self.dims)

    @property
    def max_index(self) -> int:
        return self.length - 1

    def contains(self, index: int) -> bool:
        """True if ``index`` is a valid index on this curve."""
        return 0 <= index < self.length

    def forward(self, coords: Sequence[int]) -> int:
        if len(coords) != self.dims:
            raise ValueError(f"expected {self.dims} coordinates, got {len(coords)}")
        return hilbert_forward(coords, self.bits)

    def inverse(self, index: int) -> tuple[int, ...]:
        return hilbert_inverse(index, self.bits, self.dims)


# =============================================================================
# Batch (int64)
# =============================================================================


def _check_kernel_bits(bits: int, dims: int) -> None:
    _check_bits(bits)
    if dims < 1:
        raise ValueError(f"dims={dims} must be positive")
    if not CURVE_CONFIG.kernel_supports(bits, dims):
        raise ValueError(
            f"bits * dims = {bits * dims} exceeds {CURVE_CONFIG.max_kernel_bits}; "
            "use hilbert_forward / hilbert_inverse for arbitrary precision"
        )


def hilbert_forward_array(coords, bits: int) -> np.ndarray:
    """Hilbert indices of many lattice points.

    :param coords: Integer array [N, D]
    :param bits: Bits per axis, with ``bits * D <= 62``
    :returns: int64 indices [N]
    :raises ValueError: If the index would overflow int64 or a coordinate is out of range
    """
    arr = np.ascontiguousarray(coords, dtype=np.int64)
    if arr.ndim != 2:
        raise ValueError(f"coords must be [N, D], got shape {arr.shape}")
    _check_kernel_bits(bits, arr.shape[1])
    if arr.size and (arr.min() < 0 or arr.max() >= 1 << bits):
        raise ValueError(f"coordinates must lie in [0, {1 << bits}) for bits={bits}")

    out = np.empty(arr.shape[0], dtype=np.int64)
    hilbert_forward_numba(arr, bits, out)
    return out


def hilbert_inverse_array(indices, bits: int, dims: int) -> np.ndarray:
    """Lattice points at many Hilbert indices.

    :param indices: Integer array [N]
    :param bits: Bits per axis, with ``bits * dims <= 62``
    :param dims: Number of axes
    :returns: int64 coordinates [N, dims]
    :raises ValueError: If the index would overflow int64 or an index is out of range
    """
    _check_kernel_bits(bits, dims)
    arr = np.ascontiguousarray(indices, dtype=np.int64).reshape(-1)
    if arr.size and (arr.min() < 0 or arr.max() >= 1 << (bits * dims)):
        raise ValueError(f"indices must lie in [0, {1 << (bits * dims)})")

    out = np.empty((arr.shape[0], dims), dtype=np.int64)
    hilbert_inverse_numba(arr, bits, out)
    return out
