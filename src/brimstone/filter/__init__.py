"""
Smoothing module - separable box-filter approximation of a Gaussian blur.

Example:
    >>> from brimstone.filter import gaussian_blur
    >>> gaussian_blur(lab_buffer, 256, 256, sigma=2.0)  # in-place
"""

from brimstone.filter.blur import (
    box_filter_x,
    box_widths_for_gauss,
    gaussian_blur,
    transpose_square,
)

__all__ = [
    "box_widths_for_gauss",
    "box_filter_x",
    "transpose_square",
    "gaussian_blur",
]
