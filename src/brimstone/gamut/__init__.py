"""
Gamut mapping module - bring out-of-range Oklab colors back into sRGB.

Five policies choose the line along which a color is moved:
  - preserve_chroma: constant lightness
  - project_to_mid / project_to_cusp: toward a fixed gray
  - adaptive_mid / adaptive_cusp: toward a gray that depends on chroma (alpha)

Example:
    >>> from brimstone.color import LinearColor
    >>> from brimstone.gamut import GamutClipPolicy, clip, find_cusp
    >>>
    >>> clip(LinearColor(1.4, 0.2, -0.3), GamutClipPolicy.ADAPTIVE_CUSP, alpha=0.05)
    >>> find_cusp(1.0, 0.0).l
"""

from brimstone.gamut.apply import (
    CuspPoint,
    clip,
    clip_array,
    find_cusp,
    find_gamut_intersection,
    gamut_clip_adaptive_cusp,
    gamut_clip_adaptive_mid,
    gamut_clip_preserve_chroma,
    gamut_clip_project_to_cusp,
    gamut_clip_project_to_mid,
    in_gamut_mask,
    is_in_gamut,
    max_saturation_for_hue,
    perceptual_to_display,
    perceptual_to_display_unclamped,
    sgn,
)
from brimstone.gamut.policy import GamutClipPolicy

__all__ = [
    "GamutClipPolicy",
    "CuspPoint",
    # Primitives
    "is_in_gamut",
    "in_gamut_mask",
    "sgn",
    "max_saturation_for_hue",
    "find_cusp",
    "find_gamut_intersection",
    # Clipping
    "gamut_clip_preserve_chroma",
    "gamut_clip_project_to_mid",
    "gamut_clip_project_to_cusp",
    "gamut_clip_adaptive_mid",
    "gamut_clip_adaptive_cusp",
    "clip",
    "clip_array",
    # Buffers
    "perceptual_to_display",
    "perceptual_to_display_unclamped",
]
