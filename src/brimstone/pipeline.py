"""
RenderPipeline: fluent builder for render settings.

Example:
    >>> pipeline = (RenderPipeline()
    ...     .policy("adaptive_cusp")
    ...     .alpha(0.1)
    ...     .coordinates("hilbert")
    ...     .smooth(1.5)
    ... )
    >>> pipeline((256, 256), buffer, evaluate)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from numbers import Integral
from typing import Self

from brimstone.config import RENDER_CONFIG, RenderValues
from brimstone.constants import COORDINATE_MODES, MAX_LEVELS, MAX_SMOOTH, MAX_WORKERS, MIN_LEVELS
from brimstone.gamut.policy import GamutClipPolicy
from brimstone.protocols import ColorFunction
from brimstone.render import render
from brimstone.types import PixelBuffer, Size
from brimstone.validators import validate_choices, validate_range, validate_type

logger = logging.getLogger(__name__)


class RenderPipeline:
    """
    Chainable render settings around :func:`brimstone.render.render`.

    Each setter validates its argument, updates the settings and returns the
    pipeline, so settings can be chained. Calling the pipeline renders.
    """

    __slots__ = ("_values",)

    def __init__(self, values: RenderValues | None = None):
        """
        Initialize the pipeline.

        :param values: Starting settings (copied); defaults to ``RenderValues()``
        """
        self._values = replace(values) if values is not None else RenderValues()
        logger.info(
            "[RenderPipeline] Initialized with policy=%s alpha=%.3f",
            self._values.policy.value,
            self._values.alpha,
        )

    @property
    def values(self) -> RenderValues:
        """Copy of the current settings."""
        return replace(self._values)

    def policy(self, policy: GamutClipPolicy | str) -> Self:
        """
        Set the gamut clip policy.

        :param policy: GamutClipPolicy or its name
        :raises ValueError: If the name is not a policy
        """
        self._values.policy = GamutClipPolicy.coerce(policy)
        return self

    @validate_range(RENDER_CONFIG.alpha.min_value, RENDER_CONFIG.alpha.max_value, "alpha")
    def alpha(self, alpha: float) -> Self:
        """Set the adaptive clip strength in [0, 1]."""
        self._values.alpha = float(alpha)
        return self

    @validate_type(bool, "extend")
    def extend(self, extend: bool = True) -> Self:
        """Gamut-map out-of-range colors (True) or black them out (False)."""
        self._values.extend = extend
        return self

    @validate_range(0.0, MAX_SMOOTH, "smooth")
    def smooth(self, smooth: float) -> Self:
        """
        Set the Gaussian smoothing sigma in pixels.

        :param smooth: Sigma in [0, 100]; 0 disables smoothing
        """
        self._values.smooth = float(smooth)
        return self

    @validate_choices(COORDINATE_MODES, "coordinates")
    def coordinates(self, coordinates: str, levels: int | None = None) -> Self:
        """
        Set the coordinate mode passed to color functions.

        :param coordinates: "normalized", "pixel" or "hilbert"
        :param levels: Hilbert trajectory refinement in [1, 9], kept if None
        """
        if levels is not None:
            self.levels(levels)
        self._values.coordinates = coordinates
        return self

    @validate_type(Integral, "levels")
    @validate_range(MIN_LEVELS, MAX_LEVELS, "levels")
    def levels(self, levels: int) -> Self:
        """Set the Hilbert trajectory refinement."""
        self._values.levels = int(levels)
        return self

    @validate_type(Integral, "workers")
    @validate_range(1, MAX_WORKERS, "workers")
    def workers(self, workers: int) -> Self:
        """Set the number of threads evaluating row partitions."""
        self._values.workers = int(workers)
        return self

    def reset(self) -> Self:
        """Restore default settings."""
        self._values = RenderValues()
        return self

    def __call__(
        self,
        size: Size,
        buffer: PixelBuffer,
        evaluate: ColorFunction,
        smoothing_sigma: float | None = None,
    ) -> PixelBuffer:
        """
        Render with the current settings.

        :param size: (width, height)
        :param buffer: Writable float array [width * height, 3]
        :param evaluate: Color function
        :param smoothing_sigma: Overrides the configured smoothing if given
        :returns: ``buffer``
        """
        return render(size, buffer, evaluate, smoothing_sigma=smoothing_sigma, values=self._values)

    def __repr__(self) -> str:
        v = self._values
        return (
            f"RenderPipeline(policy={v.policy.value}, alpha={v.alpha}, extend={v.extend}, "
            f"smooth={v.smooth}, coordinates={v.coordinates}, levels={v.levels}, "
            f"workers={v.workers})"
        )
