"""
Example: rendering Oklab color functions.

Demonstrates how to use brimstone for:
- A lightness/hue ramp with different gamut clip policies
- A space-filling gradient driven by Hilbert trajectory coordinates
- Smoothing and the extend=False diagnostic view
- Clipping single colors

Images are saved as .npy arrays of display sRGB in [0, 1].
"""

import logging

import numpy as np

from brimstone import (
    GamutClipPolicy,
    LinearColor,
    RenderPipeline,
    clip,
    linear_to_perceptual,
)

# Configure logging to see pipeline messages
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

SIZE = 256


def hue_ramp(coords: np.ndarray) -> np.ndarray:
    """Hue around x, lightness along y, chroma well outside sRGB."""
    angle = 2.0 * np.pi * coords[:, 0]
    lab = np.empty((len(coords), 3))
    lab[:, 0] = 0.15 + 0.8 * coords[:, 1]
    lab[:, 1] = 0.3 * np.cos(angle)
    lab[:, 2] = 0.3 * np.sin(angle)
    return lab


def space_filling(offset=(0.0, 0.0, 0.0), scale=(1.0, 1.0, 1.0)):
    """Map trajectory points in [0, 1)^3 onto an Oklab box around mid gray."""
    offset = np.asarray(offset, dtype=np.float64)
    scale = np.asarray(scale, dtype=np.float64)

    def evaluate(coords: np.ndarray) -> np.ndarray:
        v = (coords - 0.5) * np.array([1.0, 2.0, 2.0]) * scale
        v[:, 0] += 0.5
        return v + offset

    return evaluate


def example_1_policies():
    """Example 1: The same ramp under each clip policy."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Gamut clip policies")
    print("=" * 70)

    buffer = np.zeros((SIZE * SIZE, 3))
    for policy in GamutClipPolicy:
        RenderPipeline().policy(policy)((SIZE, SIZE), buffer, hue_ramp)
        np.save(f"ramp_{policy.value}.npy", buffer.reshape(SIZE, SIZE, 3))
        print(f"  {policy.value:16s} mean={buffer.mean(axis=0).round(3)}")


def example_2_space_filling():
    """Example 2: Space-filling gradient with offset and scale."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Space-filling gradient")
    print("=" * 70)

    pipeline = (
        RenderPipeline()
        .policy("adaptive_cusp")
        .coordinates("hilbert", levels=3)
        .smooth(1.0)
    )
    evaluate = space_filling(offset=(0.05, 0.0, 0.02), scale=(0.8, 0.3, 0.3))

    buffer = np.zeros((SIZE * SIZE, 3))
    pipeline((SIZE, SIZE), buffer, evaluate)
    np.save("space_filling.npy", buffer.reshape(SIZE, SIZE, 3))
    print(f"  {pipeline!r}")


def example_3_out_of_gamut_view():
    """Example 3: Black out pixels that need gamut mapping."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Out-of-gamut diagnostic")
    print("=" * 70)

    buffer = np.zeros((SIZE * SIZE, 3))
    RenderPipeline().extend(False)((SIZE, SIZE), buffer, hue_ramp)
    black = np.all(buffer == 0.0, axis=1).mean()
    print(f"  {black:.1%} of the ramp lies outside sRGB")


def example_4_single_colors():
    """Example 4: Clip individual linear sRGB colors."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Single colors")
    print("=" * 70)

    color = LinearColor(1.3, 0.2, -0.1)
    print(f"  input      {tuple(round(c, 4) for c in color)}")
    print(f"  oklab      {tuple(round(c, 4) for c in linear_to_perceptual(color))}")
    for policy in GamutClipPolicy:
        clipped = clip(color, policy)
        print(f"  {policy.value:16s} {tuple(round(c, 4) for c in clipped)}")


if __name__ == "__main__":
    example_1_policies()
    example_2_space_filling()
    example_3_out_of_gamut_view()
    example_4_single_colors()
