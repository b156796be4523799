"""Render and curve configuration.

This module defines the standardized parameter specifications for the
render pipeline and the limits of the curve kernels.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from brimstone.config.operations import ParameterSpec
from brimstone.constants import (
    DEFAULT_ALPHA,
    DEFAULT_LEVELS,
    MAX_KERNEL_INDEX_BITS,
    MAX_LEVELS,
    MAX_SMOOTH,
    MAX_WORKERS,
    MIN_LEVELS,
)

DEFAULT_WORKERS = max(1, min(os.cpu_count() or 1, MAX_WORKERS))


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for all render pipeline parameters."""

    alpha: ParameterSpec = ParameterSpec(
        name="alpha",
        min_value=0.0,
        max_value=1.0,
        default=DEFAULT_ALPHA,
        neutral=0.0,
        description="Adaptive clip strength: 0=project straight to the anchor gray",
    )

    smooth: ParameterSpec = ParameterSpec(
        name="smooth",
        min_value=0.0,
        max_value=MAX_SMOOTH,
        default=0.0,
        neutral=0.0,
        description="Gaussian smoothing sigma in pixels: 0=off",
    )

    levels: ParameterSpec = ParameterSpec(
        name="levels",
        min_value=MIN_LEVELS,
        max_value=MAX_LEVELS,
        default=DEFAULT_LEVELS,
        neutral=DEFAULT_LEVELS,
        description="Hilbert trajectory refinement: the 3D curve has levels + 1 bits",
    )

    workers: ParameterSpec = ParameterSpec(
        name="workers",
        min_value=1,
        max_value=MAX_WORKERS,
        default=DEFAULT_WORKERS,
        neutral=DEFAULT_WORKERS,
        description="Threads evaluating row partitions",
    )

    def get_spec(self, name: str) -> ParameterSpec:
        """Get specification for a parameter by name.

        :param name: Parameter name
        :return: ParameterSpec for the parameter
        """
        return getattr(self, name)

    def get_all_specs(self) -> dict[str, ParameterSpec]:
        """Get all parameter specs as a dictionary.

        :return: Dictionary mapping parameter names to specs
        """
        return {
            "alpha": self.alpha,
            "smooth": self.smooth,
            "levels": self.levels,
            "workers": self.workers,
        }


@dataclass(frozen=True)
class CurveConfig:
    """Limits of the space-filling curve implementation.

    Attributes:
        max_kernel_bits: Largest ``bits * dims`` the int64 kernels accept
    """

    max_kernel_bits: int = MAX_KERNEL_INDEX_BITS

    def kernel_supports(self, bits: int, dims: int) -> bool:
        """True if a curve with ``bits`` per axis in ``dims`` dimensions fits the int64 kernels."""
        return bits * dims <= self.max_kernel_bits
