"""
Color space module - exact Oklab <-> linear sRGB conversion and sRGB transfer.

Example:
    >>> from brimstone.color import LinearColor, linear_to_perceptual
    >>> lab = linear_to_perceptual(LinearColor(1.0, 0.0, 0.0))
    >>> round(lab.l, 3)
    0.628

Arrays:
    >>> from brimstone.color import perceptual_to_linear_array, linear_to_srgb
    >>> display = linear_to_srgb(perceptual_to_linear_array(lab_buffer))
"""

from brimstone.color.convert import (
    linear_to_perceptual,
    linear_to_perceptual_array,
    linear_to_srgb,
    perceptual_to_linear,
    perceptual_to_linear_array,
    srgb_to_linear,
)
from brimstone.color.values import NEUTRAL, LinearColor, PerceptualColor

__all__ = [
    "LinearColor",
    "PerceptualColor",
    "NEUTRAL",
    # Single colors
    "linear_to_perceptual",
    "perceptual_to_linear",
    # Arrays
    "linear_to_perceptual_array",
    "perceptual_to_linear_array",
    "linear_to_srgb",
    "srgb_to_linear",
]
