"""Numeric constants shared by the color, gamut, blur and curve kernels.

The Oklab matrices are the published values from Björn Ottosson's
"A perceptual color space for image processing" (2020). Numba kernels read
the module-level arrays as compile-time constants.
"""

from __future__ import annotations

import numpy as np

# =============================================================================
# Oklab
# =============================================================================

# Linear sRGB -> LMS
LINEAR_TO_LMS = np.array(
    [
        [0.4122214708, 0.5363325363, 0.0514459929],
        [0.2119034982, 0.6806995451, 0.1073969566],
        [0.0883024619, 0.2817188376, 0.6299787005],
    ],
    dtype=np.float64,
)

# Cube-rooted LMS -> (L, a, b)
LMS_TO_OKLAB = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ],
    dtype=np.float64,
)

# (L, a, b) -> cube-rooted LMS
OKLAB_TO_LMS = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ],
    dtype=np.float64,
)

# LMS -> linear sRGB. Row i is also the weight vector of channel i in the
# gamut boundary equations.
LMS_TO_LINEAR = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ],
    dtype=np.float64,
)

# =============================================================================
# Gamut mapping
# =============================================================================

# Polynomial estimate of the maximum saturation S = C / L, one row per
# channel that clips first (red, green, blue): k0 + k1*a + k2*b + k3*a^2 + k4*a*b
MAX_SATURATION_COEFFS = np.array(
    [
        [1.19086277, 1.76576728, 0.59662641, 0.75515197, 0.56771245],
        [0.73956515, -0.45954404, 0.08285427, 0.12541070, 0.14503204],
        [1.35733652, -0.00915799, -1.15130210, -0.50559606, 0.00692167],
    ],
    dtype=np.float64,
)

# Hue half-planes selecting the red and green coefficient rows:
# c0 * a + c1 * b > 1
RED_CLIP_PLANE = (-1.88170328, -0.80936493)
GREEN_CLIP_PLANE = (1.81444104, -1.19445276)

CHANNEL_RED = 0
CHANNEL_GREEN = 1
CHANNEL_BLUE = 2

# Chroma below this is treated as achromatic
CHROMA_EPSILON = 1e-5

# Normalized hue precondition: |a^2 + b^2 - 1| < HUE_NORM_TOLERANCE
HUE_NORM_TOLERANCE = 1e-4

DEFAULT_ALPHA = 0.05
NEUTRAL_LIGHTNESS = 0.5

SATURATION_HALLEY_STEPS = 1
INTERSECTION_HALLEY_STEPS = 3

# Sentinel for discarded Halley candidates (f32::MAX)
DISCARDED_ROOT = 3.4028234663852886e38

# Integer codes of GamutClipPolicy, used by the numba kernels
POLICY_PRESERVE_CHROMA = 0
POLICY_PROJECT_TO_MID = 1
POLICY_PROJECT_TO_CUSP = 2
POLICY_ADAPTIVE_MID = 3
POLICY_ADAPTIVE_CUSP = 4

# =============================================================================
# sRGB transfer (IEC 61966-2-1)
# =============================================================================

SRGB_LINEAR_THRESHOLD = 0.0031308
SRGB_ENCODED_THRESHOLD = 0.04045
SRGB_SLOPE = 12.92
SRGB_GAMMA = 2.4
SRGB_OFFSET = 0.055

# =============================================================================
# Blur / curve / render
# =============================================================================

GAUSS_BOX_PASSES = 3

# Largest bits * dims the int64 curve kernels accept
MAX_KERNEL_INDEX_BITS = 62

MIN_LEVELS = 1
MAX_LEVELS = 9
DEFAULT_LEVELS = 3

MAX_SMOOTH = 100.0
MAX_WORKERS = 256

COORDINATE_MODES = ("normalized", "pixel", "hilbert")
