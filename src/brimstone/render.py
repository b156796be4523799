"""Render a color function into a display pixel buffer.

Rendering runs in three stages:

1. The image rows are split into contiguous blocks and a thread pool
   evaluates the color function on each block, writing its own slice of an
   Oklab scratch buffer.
2. One parallel numba kernel converts the scratch buffer to display sRGB,
   through the gamut mapper (``extend=True``) or with out-of-gamut pixels
   blacked out (``extend=False``).
3. Optionally, the display buffer is converted back to Oklab, blurred and
   converted to display sRGB again.

Example:
    >>> import numpy as np
    >>> from brimstone import render, RenderValues
    >>>
    >>> def gradient(coords):
    ...     lab = np.zeros((len(coords), 3))
    ...     lab[:, 0] = coords[:, 0]          # lightness along x
    ...     lab[:, 1] = 0.3 * coords[:, 1]    # red along y
    ...     return lab
    >>>
    >>> buffer = np.zeros((64 * 64, 3))
    >>> render((64, 64), buffer, gradient, values=RenderValues(policy="adaptive_cusp"))
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from numbers import Integral

import numpy as np

from brimstone.color.kernels import srgb_to_oklab_numba
from brimstone.config.values import RenderValues
from brimstone.constants import COORDINATE_MODES, DEFAULT_LEVELS
from brimstone.curve.trajectory import hilbert_trajectory
from brimstone.filter.blur import gaussian_blur
from brimstone.gamut.kernels import oklab_to_srgb_bounded_numba, oklab_to_srgb_clipped_numba
from brimstone.gamut.policy import GamutClipPolicy
from brimstone.protocols import ColorFunction
from brimstone.types import PixelBuffer, Size

logger = logging.getLogger(__name__)


def _check_size(size: Size) -> tuple[int, int]:
    try:
        width, height = size
    except (TypeError, ValueError) as e:
        raise ValueError(f"size must be a (width, height) pair, got {size!r}") from e
    for name, value in (("width", width), ("height", height)):
        if not isinstance(value, Integral) or isinstance(value, bool):
            raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
        if value < 1:
            raise ValueError(f"{name}={value} must be positive")
    return int(width), int(height)


def _check_buffer(buffer: PixelBuffer, n_pixels: int) -> None:
    if not isinstance(buffer, np.ndarray):
        raise ValueError(f"buffer must be a numpy array, got {type(buffer).__name__}")
    if buffer.shape != (n_pixels, 3):
        raise ValueError(f"buffer shape {buffer.shape} does not match ({n_pixels}, 3)")
    if buffer.dtype.kind != "f":
        raise ValueError(f"buffer must hold floats, got dtype {buffer.dtype}")
    if not buffer.flags["WRITEABLE"]:
        raise ValueError("buffer must be writable")


def pixel_coordinates(
    width: int, height: int, mode: str = "normalized", levels: int = DEFAULT_LEVELS
) -> np.ndarray:
    """Per-pixel coordinates in raster order.

    :param width: Image width
    :param height: Image height
    :param mode: "normalized" (x/w, y/h), "pixel" (integer x, y) or
        "hilbert" (3D trajectory point, square power-of-two images only)
    :param levels: Trajectory refinement for "hilbert"
    :returns: Array [width * height, k]
    :raises ValueError: If the mode is unknown or the size does not suit it
    """
    if mode == "hilbert":
        if width != height:
            raise ValueError(f"hilbert coordinates need a square image, got {width}x{height}")
        return hilbert_trajectory(width, levels)

    ys, xs = np.divmod(np.arange(width * height, dtype=np.int64), width)
    if mode == "pixel":
        return np.stack([xs, ys], axis=1)
    if mode == "normalized":
        return np.stack([xs / float(width), ys / float(height)], axis=1)
    valid = ", ".join(COORDINATE_MODES)
    raise ValueError(f'coordinates="{mode}" is not valid. Valid options: {valid}')


def row_partitions(height: int, n_parts: int) -> list[tuple[int, int]]:
    """Split ``range(height)`` into at most ``n_parts`` contiguous, non-empty row blocks."""
    n_parts = max(1, min(n_parts, height))
    bounds = np.linspace(0, height, n_parts + 1).round().astype(int)
    return [(int(lo), int(hi)) for lo, hi in zip(bounds[:-1], bounds[1:]) if hi > lo]


def _evaluate_block(
    evaluate: ColorFunction, coords: np.ndarray, lab: np.ndarray, lo: int, hi: int
) -> None:
    result = np.asarray(evaluate(coords[lo:hi]), dtype=np.float64)
    if result.shape != (hi - lo, 3):
        raise ValueError(
            f"color function returned shape {result.shape}, expected ({hi - lo}, 3)"
        )
    lab[lo:hi] = result


def pixelwise(func: Callable[..., object]) -> ColorFunction:
    """Adapt a per-pixel function to the partition contract of ``render``.

    :param func: Called as ``func(*coord)`` for each pixel; returns a
        PerceptualColor or an (l, a, b) sequence
    :returns: ColorFunction evaluating ``func`` pixel by pixel

    Example:
        >>> from brimstone.color import PerceptualColor
        >>> evaluate = pixelwise(lambda x, y: PerceptualColor(x, 0.1, -0.1))
    """

    def evaluate(coords: np.ndarray) -> np.ndarray:
        colors = np.empty((len(coords), 3), dtype=np.float64)
        for i, coord in enumerate(coords):
            colors[i] = tuple(func(*coord))
        return colors

    return evaluate


def render(
    size: Size,
    buffer: PixelBuffer,
    evaluate: ColorFunction,
    smoothing_sigma: float | None = None,
    values: RenderValues | None = None,
) -> PixelBuffer:
    """Fill ``buffer`` with the display colors of ``evaluate``.

    :param size: (width, height) in pixels
    :param buffer: Writable float array [width * height, 3], row-major
    :param evaluate: Color function, see :class:`brimstone.protocols.ColorFunction`
    :param smoothing_sigma: Blur sigma in pixels; None uses ``values.smooth``
    :param values: Render settings (defaults to ``RenderValues()``)
    :returns: ``buffer``, holding display sRGB in [0, 1]
    :raises ValueError: On invalid size, buffer, settings or color function output
    """
    values = values if values is not None else RenderValues()
    width, height = _check_size(size)
    n_pixels = width * height
    _check_buffer(buffer, n_pixels)

    sigma = values.smooth if smoothing_sigma is None else float(smoothing_sigma)
    if not sigma >= 0.0:
        raise ValueError(f"smoothing_sigma={sigma} must be non-negative")
    if sigma > 0.0 and width != height:
        raise ValueError(f"smoothing needs a square image, got {width}x{height}")

    start = time.perf_counter()
    coords = pixel_coordinates(width, height, values.coordinates, values.levels)
    lab = np.empty((n_pixels, 3), dtype=np.float64)

    blocks = row_partitions(height, values.workers)
    logger.debug(
        "[Render] %dx%d mode=%s partitions=%d workers=%d",
        width,
        height,
        values.coordinates,
        len(blocks),
        values.workers,
    )

    if len(blocks) == 1:
        _evaluate_block(evaluate, coords, lab, 0, n_pixels)
    else:
        with ThreadPoolExecutor(max_workers=values.workers) as pool:
            futures = [
                pool.submit(_evaluate_block, evaluate, coords, lab, lo * width, hi * width)
                for lo, hi in blocks
            ]
            for future in futures:
                future.result()
    evaluated = time.perf_counter()

    direct = buffer.dtype == np.float64 and buffer.flags["C_CONTIGUOUS"]
    display = buffer if direct else np.empty((n_pixels, 3), dtype=np.float64)

    code = GamutClipPolicy.coerce(values.policy).code
    alpha = float(values.alpha)
    if values.extend:
        oklab_to_srgb_clipped_numba(lab, code, alpha, display)
    else:
        oklab_to_srgb_bounded_numba(lab, display)

    if sigma > 0.0:
        srgb_to_oklab_numba(display, lab)
        gaussian_blur(lab, width, height, sigma)
        oklab_to_srgb_clipped_numba(lab, code, alpha, display)

    if not direct:
        buffer[...] = display

    logger.debug(
        "[Render] evaluate=%.1fms convert=%.1fms smooth=%s",
        (evaluated - start) * 1000.0,
        (time.perf_counter() - evaluated) * 1000.0,
        sigma if sigma > 0.0 else "off",
    )
    return buffer
