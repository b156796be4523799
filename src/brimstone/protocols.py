"""
Protocol definitions for brimstone render interfaces.

Defines the callable a render evaluates per partition and the interface
shared by render pipelines.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from brimstone.types import PixelBuffer, Size


@runtime_checkable
class ColorFunction(Protocol):
    """
    Protocol for color functions evaluated by ``render``.

    The function is called once per row partition, possibly from several
    threads at once, and must not mutate shared state.
    """

    def __call__(self, coords: np.ndarray) -> np.ndarray:
        """
        Evaluate colors for one partition.

        :param coords: Coordinates [n, k] of the partition's pixels, in raster order
        :returns: Oklab colors [n, 3]
        """
        ...


@runtime_checkable
class Renderer(Protocol):
    """Protocol for objects that fill a pixel buffer."""

    def __call__(
        self, size: Size, buffer: PixelBuffer, evaluate: ColorFunction
    ) -> PixelBuffer:
        """Render ``evaluate`` into ``buffer`` and return it."""
        ...

    def reset(self) -> None:
        """Reset settings to defaults."""
        ...
