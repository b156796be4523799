"""
brimstone - Perceptual color gradients with gamut mapping

CPU-parallel rendering of color functions defined in Oklab.

Features:
- Exact Oklab <-> linear sRGB conversion and the sRGB transfer function
- Gamut mapping with five clip policies (Ottosson's cusp/triangle method)
- Separable box-filter Gaussian smoothing
- Arbitrary-precision Hilbert curves and 2D -> 3D pixel trajectories
- Thread-partitioned rendering into caller-owned pixel buffers

Example - Render:
    >>> import numpy as np
    >>> from brimstone import RenderPipeline
    >>>
    >>> def ramp(coords):
    ...     lab = np.empty((len(coords), 3))
    ...     lab[:, 0] = 0.3 + 0.5 * coords[:, 1]
    ...     lab[:, 1] = 0.4 * np.cos(6.283 * coords[:, 0])
    ...     lab[:, 2] = 0.4 * np.sin(6.283 * coords[:, 0])
    ...     return lab
    >>>
    >>> buffer = np.zeros((256 * 256, 3))
    >>> RenderPipeline().policy("adaptive_cusp").smooth(1.0)((256, 256), buffer, ramp)

Example - Single colors:
    >>> from brimstone import LinearColor, clip, linear_to_perceptual
    >>> clip(LinearColor(1.3, 0.2, -0.1), "project_to_mid")
    >>> linear_to_perceptual(LinearColor(0.5, 0.5, 0.5))
"""

__version__ = "0.1.0"

from brimstone.color import (
    NEUTRAL,
    LinearColor,
    PerceptualColor,
    linear_to_perceptual,
    linear_to_perceptual_array,
    linear_to_srgb,
    perceptual_to_linear,
    perceptual_to_linear_array,
    srgb_to_linear,
)
from brimstone.config import CONFIG, RENDER_CONFIG, ParameterSpec, RenderValues
from brimstone.curve import (
    HilbertCurve,
    hilbert_forward,
    hilbert_forward_array,
    hilbert_inverse,
    hilbert_inverse_array,
    hilbert_trajectory,
    hilbert_trajectory_point,
    raster_curve_positions,
    sample_curve,
)
from brimstone.filter import box_filter_x, box_widths_for_gauss, gaussian_blur, transpose_square
from brimstone.gamut import (
    CuspPoint,
    GamutClipPolicy,
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
from brimstone.pipeline import RenderPipeline
from brimstone.protocols import ColorFunction, Renderer
from brimstone.render import pixel_coordinates, pixelwise, render

__all__ = [
    "__version__",
    # Colors
    "LinearColor",
    "PerceptualColor",
    "NEUTRAL",
    "linear_to_perceptual",
    "perceptual_to_linear",
    "linear_to_perceptual_array",
    "perceptual_to_linear_array",
    "linear_to_srgb",
    "srgb_to_linear",
    # Gamut
    "GamutClipPolicy",
    "CuspPoint",
    "is_in_gamut",
    "in_gamut_mask",
    "sgn",
    "max_saturation_for_hue",
    "find_cusp",
    "find_gamut_intersection",
    "gamut_clip_preserve_chroma",
    "gamut_clip_project_to_mid",
    "gamut_clip_project_to_cusp",
    "gamut_clip_adaptive_mid",
    "gamut_clip_adaptive_cusp",
    "clip",
    "clip_array",
    "perceptual_to_display",
    "perceptual_to_display_unclamped",
    # Blur
    "box_widths_for_gauss",
    "box_filter_x",
    "transpose_square",
    "gaussian_blur",
    # Curves
    "HilbertCurve",
    "hilbert_forward",
    "hilbert_inverse",
    "hilbert_forward_array",
    "hilbert_inverse_array",
    "raster_curve_positions",
    "sample_curve",
    "hilbert_trajectory",
    "hilbert_trajectory_point",
    # Rendering
    "render",
    "pixelwise",
    "pixel_coordinates",
    "RenderPipeline",
    "ColorFunction",
    "Renderer",
    # Configuration
    "CONFIG",
    "RENDER_CONFIG",
    "ParameterSpec",
    "RenderValues",
]
