"""Numba kernels for sRGB gamut intersection and clipping in Oklab.

Based on Björn Ottosson's gamut clipping derivation
(https://bottosson.github.io/posts/gamutclipping/), MIT licensed.

The gamut in a fixed-hue Oklab slice is approximated by the triangle
black / cusp / white. Below the cusp that edge is exact (scaling linear RGB
scales L and C together); above it the true boundary is curved and is found
with Halley's method on the cubic channel equations.

Kernels compile with ``error_model="numpy"``: a vanishing Halley denominator
must produce inf/NaN (rejected by the ``u >= 0`` test) rather than raise.
No ``fastmath`` here, the branch and discard tests depend on IEEE semantics.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

from brimstone.color.kernels import (
    linear_to_oklab_scalar,
    oklab_to_linear_scalar,
    srgb_encode,
)
from brimstone.constants import (
    CHANNEL_BLUE,
    CHANNEL_GREEN,
    CHANNEL_RED,
    CHROMA_EPSILON,
    DISCARDED_ROOT,
    GREEN_CLIP_PLANE,
    INTERSECTION_HALLEY_STEPS,
    LMS_TO_LINEAR,
    MAX_SATURATION_COEFFS,
    NEUTRAL_LIGHTNESS,
    OKLAB_TO_LMS,
    POLICY_ADAPTIVE_CUSP,
    POLICY_ADAPTIVE_MID,
    POLICY_PRESERVE_CHROMA,
    POLICY_PROJECT_TO_CUSP,
    POLICY_PROJECT_TO_MID,
    RED_CLIP_PLANE,
    SATURATION_HALLEY_STEPS,
)

# =============================================================================
# Scalar kernels
# =============================================================================


@njit(cache=True, nogil=True)
def sgn(x: float) -> float:
    """Sign of x as -1.0, 0.0 or 1.0; zero and NaN give 0.0."""
    if x > 0.0:
        return 1.0
    if x < 0.0:
        return -1.0
    return 0.0


@njit(cache=True, nogil=True)
def clip_channel(a: float, b: float) -> int:
    """Index of the channel (0=r, 1=g, 2=b) that leaves the gamut first along hue (a, b)."""
    if RED_CLIP_PLANE[0] * a + RED_CLIP_PLANE[1] * b > 1.0:
        return CHANNEL_RED
    if GREEN_CLIP_PLANE[0] * a + GREEN_CLIP_PLANE[1] * b > 1.0:
        return CHANNEL_GREEN
    return CHANNEL_BLUE


@njit(cache=True, nogil=True, error_model="numpy")
def compute_max_saturation(a: float, b: float) -> float:
    """Maximum saturation S = C / L inside the gamut for normalized hue (a, b).

    :param a: Hue direction a component, with a^2 + b^2 == 1
    :param b: Hue direction b component
    :returns: Saturation at which the first channel reaches zero at L=1
    """
    ch = clip_channel(a, b)
    k0 = MAX_SATURATION_COEFFS[ch, 0]
    k1 = MAX_SATURATION_COEFFS[ch, 1]
    k2 = MAX_SATURATION_COEFFS[ch, 2]
    k3 = MAX_SATURATION_COEFFS[ch, 3]
    k4 = MAX_SATURATION_COEFFS[ch, 4]
    wl = LMS_TO_LINEAR[ch, 0]
    wm = LMS_TO_LINEAR[ch, 1]
    ws = LMS_TO_LINEAR[ch, 2]

    s = k0 + k1 * a + k2 * b + k3 * a * a + k4 * a * b

    k_l = OKLAB_TO_LMS[0, 1] * a + OKLAB_TO_LMS[0, 2] * b
    k_m = OKLAB_TO_LMS[1, 1] * a + OKLAB_TO_LMS[1, 2] * b
    k_s = OKLAB_TO_LMS[2, 1] * a + OKLAB_TO_LMS[2, 2] * b

    for _ in range(SATURATION_HALLEY_STEPS):
        l_ = 1.0 + s * k_l
        m_ = 1.0 + s * k_m
        s_ = 1.0 + s * k_s

        l = l_ * l_ * l_
        m = m_ * m_ * m_
        sc = s_ * s_ * s_

        l_ds = 3.0 * k_l * l_ * l_
        m_ds = 3.0 * k_m * m_ * m_
        s_ds = 3.0 * k_s * s_ * s_

        l_ds2 = 6.0 * k_l * k_l * l_
        m_ds2 = 6.0 * k_m * k_m * m_
        s_ds2 = 6.0 * k_s * k_s * s_

        f = wl * l + wm * m + ws * sc
        f1 = wl * l_ds + wm * m_ds + ws * s_ds
        f2 = wl * l_ds2 + wm * m_ds2 + ws * s_ds2

        s = s - f * f1 / (f1 * f1 - 0.5 * f * f2)

    return s


@njit(cache=True, nogil=True, error_model="numpy")
def find_cusp_scalar(a: float, b: float) -> tuple[float, float]:
    """Cusp (L, C) of the gamut slice for normalized hue (a, b)."""
    s_cusp = compute_max_saturation(a, b)

    r, g, bl = oklab_to_linear_scalar(1.0, s_cusp * a, s_cusp * b)
    l_cusp = (1.0 / max(r, max(g, bl))) ** (1.0 / 3.0)
    return l_cusp, l_cusp * s_cusp


@njit(cache=True, nogil=True, error_model="numpy")
def find_gamut_intersection_cusp(
    a: float,
    b: float,
    l1: float,
    c1: float,
    l0: float,
    cusp_l: float,
    cusp_c: float,
) -> float:
    """Parameter t where L = l0 * (1 - t) + t * l1, C = t * c1 crosses the gamut boundary.

    :param a: Normalized hue a
    :param b: Normalized hue b
    :param l1: Target lightness
    :param c1: Target chroma
    :param l0: Anchor lightness (at zero chroma)
    :param cusp_l: Cusp lightness for this hue
    :param cusp_c: Cusp chroma for this hue
    :returns: t, 0 at the anchor and 1 at the target
    """
    if (l1 - l0) * cusp_c - (cusp_l - l0) * c1 <= 0.0:
        # Lower half: the black-cusp edge is a straight line
        return cusp_c * l0 / (c1 * cusp_l + cusp_c * (l0 - l1))

    # Upper half: start from the white-cusp triangle edge
    t = cusp_c * (l0 - 1.0) / (c1 * (cusp_l - 1.0) + cusp_c * (l0 - l1))

    dl = l1 - l0
    dc = c1

    k_l = OKLAB_TO_LMS[0, 1] * a + OKLAB_TO_LMS[0, 2] * b
    k_m = OKLAB_TO_LMS[1, 1] * a + OKLAB_TO_LMS[1, 2] * b
    k_s = OKLAB_TO_LMS[2, 1] * a + OKLAB_TO_LMS[2, 2] * b

    l_dt = dl + dc * k_l
    m_dt = dl + dc * k_m
    s_dt = dl + dc * k_s

    for _ in range(INTERSECTION_HALLEY_STEPS):
        L = l0 * (1.0 - t) + t * l1
        C = t * c1

        l_ = L + C * k_l
        m_ = L + C * k_m
        s_ = L + C * k_s

        l = l_ * l_ * l_
        m = m_ * m_ * m_
        s = s_ * s_ * s_

        ldt = 3.0 * l_dt * l_ * l_
        mdt = 3.0 * m_dt * m_ * m_
        sdt = 3.0 * s_dt * s_ * s_

        ldt2 = 6.0 * l_dt * l_dt * l_
        mdt2 = 6.0 * m_dt * m_dt * m_
        sdt2 = 6.0 * s_dt * s_dt * s_

        step = DISCARDED_ROOT
        for ch in range(3):
            w0 = LMS_TO_LINEAR[ch, 0]
            w1 = LMS_TO_LINEAR[ch, 1]
            w2 = LMS_TO_LINEAR[ch, 2]

            f = w0 * l + w1 * m + w2 * s - 1.0
            f1 = w0 * ldt + w1 * mdt + w2 * sdt
            f2 = w0 * ldt2 + w1 * mdt2 + w2 * sdt2

            u = f1 / (f1 * f1 - 0.5 * f * f2)
            # u < 0 (or NaN): this channel moves away from 1 along the line
            if u >= 0.0:
                step = min(step, -f * u)

        t += step

    return t


@njit(cache=True, nogil=True, error_model="numpy")
def find_gamut_intersection_scalar(a: float, b: float, l1: float, c1: float, l0: float) -> float:
    """find_gamut_intersection_cusp with the cusp computed here."""
    cusp_l, cusp_c = find_cusp_scalar(a, b)
    return find_gamut_intersection_cusp(a, b, l1, c1, l0, cusp_l, cusp_c)


@njit(cache=True, nogil=True, error_model="numpy")
def anchor_lightness(
    policy: int, L: float, C: float, cusp_l: float, alpha: float
) -> float:
    """Lightness the projection line starts from, per clip policy."""
    if policy == POLICY_PRESERVE_CHROMA:
        return min(max(L, 0.0), 1.0)
    if policy == POLICY_PROJECT_TO_MID:
        return NEUTRAL_LIGHTNESS
    if policy == POLICY_PROJECT_TO_CUSP:
        return cusp_l
    if policy == POLICY_ADAPTIVE_MID:
        ld = L - NEUTRAL_LIGHTNESS
        e1 = 0.5 + abs(ld) + alpha * C
        return 0.5 * (1.0 + sgn(ld) * (e1 - math.sqrt(e1 * e1 - 2.0 * abs(ld))))
    # POLICY_ADAPTIVE_CUSP
    ld = L - cusp_l
    k = 2.0 * ((1.0 - cusp_l) if ld > 0.0 else cusp_l)
    e1 = 0.5 * k + abs(ld) + alpha * C / k
    return cusp_l + 0.5 * (sgn(ld) * (e1 - math.sqrt(e1 * e1 - 2.0 * k * abs(ld))))


@njit(cache=True, nogil=True, error_model="numpy")
def gamut_clip_scalar(
    r: float, g: float, b: float, policy: int, alpha: float
) -> tuple[float, float, float]:
    """Map one linear sRGB color into [0, 1]^3 along a policy-specific line.

    :param r: Linear red
    :param g: Linear green
    :param b: Linear blue
    :param policy: POLICY_* code
    :param alpha: Sensitivity of the adaptive anchors
    :returns: Clipped (r, g, b)
    """
    if r < 1.0 and g < 1.0 and b < 1.0 and r > 0.0 and g > 0.0 and b > 0.0:
        return r, g, b

    L, la, lb = linear_to_oklab_scalar(r, g, b)
    C = math.sqrt(la * la + lb * lb)
    if C < CHROMA_EPSILON:
        return oklab_to_linear_scalar(min(max(L, 0.0), 1.0), la, lb)

    a_ = la / C
    b_ = lb / C

    cusp_l, cusp_c = find_cusp_scalar(a_, b_)
    l0 = anchor_lightness(policy, L, C, cusp_l, alpha)

    t = find_gamut_intersection_cusp(a_, b_, L, C, l0, cusp_l, cusp_c)
    l_clipped = l0 * (1.0 - t) + t * L
    c_clipped = t * C

    return oklab_to_linear_scalar(l_clipped, c_clipped * a_, c_clipped * b_)


# =============================================================================
# Array kernels
# =============================================================================


@njit(parallel=True, cache=True, nogil=True, error_model="numpy")
def gamut_clip_numba(
    colors: NDArray[np.float64],
    policy: int,
    alpha: float,
    out: NDArray[np.float64],
) -> None:
    """Clip linear sRGB colors [N, 3] into gamut (out modified in-place)."""
    for i in prange(colors.shape[0]):
        r, g, b = gamut_clip_scalar(colors[i, 0], colors[i, 1], colors[i, 2], policy, alpha)
        out[i, 0] = r
        out[i, 1] = g
        out[i, 2] = b


@njit(parallel=True, cache=True, nogil=True)
def in_gamut_numba(colors: NDArray[np.float64], out: NDArray[np.bool_]) -> None:
    """Strict (0, 1) gamut test for linear colors [N, 3]."""
    for i in prange(colors.shape[0]):
        inside = True
        for c in range(3):
            v = colors[i, c]
            if not (v > 0.0 and v < 1.0):
                inside = False
        out[i] = inside


@njit(parallel=True, cache=True, nogil=True, error_model="numpy")
def oklab_to_srgb_clipped_numba(
    lab: NDArray[np.float64],
    policy: int,
    alpha: float,
    out: NDArray[np.float64],
) -> None:
    """Oklab [N, 3] -> gamut clip -> display sRGB in [0, 1] (fused)."""
    for i in prange(lab.shape[0]):
        r, g, b = oklab_to_linear_scalar(lab[i, 0], lab[i, 1], lab[i, 2])
        r, g, b = gamut_clip_scalar(r, g, b, policy, alpha)
        out[i, 0] = min(max(srgb_encode(r), 0.0), 1.0)
        out[i, 1] = min(max(srgb_encode(g), 0.0), 1.0)
        out[i, 2] = min(max(srgb_encode(b), 0.0), 1.0)


@njit(parallel=True, cache=True, nogil=True)
def oklab_to_srgb_bounded_numba(lab: NDArray[np.float64], out: NDArray[np.float64]) -> None:
    """Oklab [N, 3] -> display sRGB without gamut extension.

    Colors whose plain conversion leaves [0, 1] become black.
    """
    for i in prange(lab.shape[0]):
        r, g, b = oklab_to_linear_scalar(lab[i, 0], lab[i, 1], lab[i, 2])
        if r >= 0.0 and r <= 1.0 and g >= 0.0 and g <= 1.0 and b >= 0.0 and b <= 1.0:
            out[i, 0] = srgb_encode(r)
            out[i, 1] = srgb_encode(g)
            out[i, 2] = srgb_encode(b)
        else:
            out[i, 0] = 0.0
            out[i, 1] = 0.0
            out[i, 2] = 0.0
