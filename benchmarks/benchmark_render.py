"""Benchmark render throughput.

Measures each stage on its own and the full pipeline:
- Gamut clipping of out-of-gamut colors (per policy)
- Box-filter Gaussian blur
- Hilbert trajectory coordinates
- End-to-end render with and without smoothing
"""

import time

import numpy as np

from brimstone import (
    GamutClipPolicy,
    RenderPipeline,
    clip_array,
    gaussian_blur,
    hilbert_trajectory,
)


def timed(func, n_iterations: int) -> float:
    """Average wall time of ``func()`` in milliseconds, after one warmup call."""
    func()
    start = time.perf_counter()
    for _ in range(n_iterations):
        func()
    return (time.perf_counter() - start) / n_iterations * 1000


def wheel(coords):
    angle = 2.0 * np.pi * coords[:, 0]
    lab = np.empty((len(coords), 3))
    lab[:, 0] = 0.2 + 0.7 * coords[:, 1]
    lab[:, 1] = 0.35 * np.cos(angle)
    lab[:, 2] = 0.35 * np.sin(angle)
    return lab


def benchmark_gamut(n_colors: int, n_iterations: int = 20):
    print(f"\n{'='*60}")
    print(f"Gamut Clip Benchmark ({n_colors:,} colors)")
    print(f"{'='*60}")

    rng = np.random.default_rng(42)
    colors = rng.uniform(-0.3, 1.3, size=(n_colors, 3))
    out = np.empty_like(colors)

    for policy in GamutClipPolicy:
        ms = timed(lambda p=policy: clip_array(colors, p, out=out), n_iterations)
        print(f"  {policy.value:16s} {ms:8.2f} ms  {n_colors / ms / 1e3:6.1f} M/s")


def benchmark_blur(size: int, n_iterations: int = 20):
    print(f"\n{'='*60}")
    print(f"Gaussian Blur Benchmark ({size}x{size})")
    print(f"{'='*60}")

    buffer = np.random.default_rng(0).uniform(size=(size * size, 3))
    for sigma in (1.0, 4.0, 16.0):
        ms = timed(lambda s=sigma: gaussian_blur(buffer, size, size, s), n_iterations)
        print(f"  sigma={sigma:5.1f} {ms:8.2f} ms")


def benchmark_trajectory(size: int, n_iterations: int = 10):
    print(f"\n{'='*60}")
    print(f"Hilbert Trajectory Benchmark ({size}x{size})")
    print(f"{'='*60}")

    for levels in (1, 3, 9):
        ms = timed(lambda lv=levels: hilbert_trajectory(size, lv), n_iterations)
        print(f"  levels={levels} {ms:8.2f} ms")


def benchmark_render(size: int, n_iterations: int = 10):
    print(f"\n{'='*60}")
    print(f"Render Benchmark ({size}x{size})")
    print(f"{'='*60}")

    buffer = np.zeros((size * size, 3))
    for label, pipeline in (
        ("single thread", RenderPipeline().workers(1)),
        ("default", RenderPipeline()),
        ("smooth=2", RenderPipeline().smooth(2.0)),
        ("hilbert", RenderPipeline().coordinates("hilbert")),
    ):
        ms = timed(lambda p=pipeline: p((size, size), buffer, wheel), n_iterations)
        print(f"  {label:14s} {ms:8.2f} ms  {size * size / ms / 1e3:6.1f} Mpx/s")


if __name__ == "__main__":
    benchmark_gamut(1_000_000)
    benchmark_blur(1024)
    benchmark_trajectory(1024)
    benchmark_render(1024)
