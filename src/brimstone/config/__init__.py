"""Configuration module for brimstone rendering.

This module provides standardized parameter specifications for the render
pipeline and the per-render value dataclass.

Usage:
    from brimstone.config import CONFIG, RenderValues
    CONFIG.render.alpha.default  # 0.05
    CONFIG.curve.max_kernel_bits  # 62

    values = RenderValues(policy="project_to_cusp", smooth=1.5).clamp()
"""

from brimstone.config.config import CONFIG, CURVE_CONFIG, RENDER_CONFIG, BrimstoneConfig
from brimstone.config.operations import ParameterSpec
from brimstone.config.render import CurveConfig, RenderConfig
from brimstone.config.values import RenderValues

__all__ = [
    # Core types
    "ParameterSpec",
    "BrimstoneConfig",
    "RenderConfig",
    "CurveConfig",
    # Values
    "RenderValues",
    # Singletons
    "CONFIG",
    "RENDER_CONFIG",
    "CURVE_CONFIG",
]
