"""Color value types.

LinearColor and PerceptualColor are immutable per-pixel values; buffers of
many colors are plain ``[N, 3]`` float64 arrays instead.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class LinearColor:
    """Linear-light sRGB color with unbounded channels.

    Example:
        >>> LinearColor(0.2, 0.4, 0.6).is_in_gamut()
        True
        >>> LinearColor(1.2, 0.4, -0.1).is_in_gamut()
        False
    """

    r: float
    g: float
    b: float

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b

    def is_in_gamut(self) -> bool:
        """True iff every channel lies strictly inside (0, 1)."""
        return 0.0 < self.r < 1.0 and 0.0 < self.g < 1.0 and 0.0 < self.b < 1.0

    def to_array(self) -> np.ndarray:
        """:returns: float64 array [3]"""
        return np.array([self.r, self.g, self.b], dtype=np.float64)

    @classmethod
    def from_array(cls, values) -> LinearColor:
        r, g, b = (float(v) for v in values)
        return cls(r, g, b)


@dataclass(frozen=True)
class PerceptualColor:
    """Oklab color: lightness plus two chroma axes.

    Lightness is nominally in [0, 1]; ``a`` and ``b`` are unbounded.
    """

    l: float  # noqa: E741
    a: float
    b: float

    def __iter__(self) -> Iterator[float]:
        yield self.l
        yield self.a
        yield self.b

    @property
    def chroma(self) -> float:
        """Distance from the neutral axis."""
        return math.hypot(self.a, self.b)

    @property
    def hue(self) -> float:
        """Hue angle in radians, in (-pi, pi]."""
        return math.atan2(self.b, self.a)

    def to_array(self) -> np.ndarray:
        """:returns: float64 array [3]"""
        return np.array([self.l, self.a, self.b], dtype=np.float64)

    @classmethod
    def from_array(cls, values) -> PerceptualColor:
        l, a, b = (float(v) for v in values)  # noqa: E741
        return cls(l, a, b)

    @classmethod
    def from_lch(cls, lightness: float, chroma: float, hue: float) -> PerceptualColor:
        """Build from polar form (hue in radians)."""
        return cls(lightness, chroma * math.cos(hue), chroma * math.sin(hue))


NEUTRAL = PerceptualColor(0.5, 0.0, 0.0)
