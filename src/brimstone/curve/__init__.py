"""
Space-filling curve module - Hilbert indexing and pixel trajectories.

Example:
    >>> from brimstone.curve import HilbertCurve, hilbert_trajectory
    >>> HilbertCurve(bits=2, dims=2).inverse(5)
    >>> points = hilbert_trajectory(256, levels=3)  # [65536, 3] in [0, 1)
"""

from brimstone.curve.hilbert import (
    HilbertCurve,
    hilbert_forward,
    hilbert_forward_array,
    hilbert_inverse,
    hilbert_inverse_array,
)
from brimstone.curve.trajectory import (
    hilbert_trajectory,
    hilbert_trajectory_point,
    raster_curve_positions,
    sample_curve,
    size_bits,
)

__all__ = [
    "HilbertCurve",
    # Integer (arbitrary precision)
    "hilbert_forward",
    "hilbert_inverse",
    # Batch (int64)
    "hilbert_forward_array",
    "hilbert_inverse_array",
    # Trajectories
    "size_bits",
    "raster_curve_positions",
    "sample_curve",
    "hilbert_trajectory",
    "hilbert_trajectory_point",
]
