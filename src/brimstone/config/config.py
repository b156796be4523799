"""Unified brimstone configuration.

This module provides a top-level configuration dataclass that contains
the render and curve configurations as sub-attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from brimstone.config.render import CurveConfig, RenderConfig


@dataclass(frozen=True)
class BrimstoneConfig:
    """Top-level configuration containing all component configurations.

    Provides hierarchical access to all parameter specifications:
        CONFIG.render.alpha
        CONFIG.render.smooth
        CONFIG.curve.max_kernel_bits

    Attributes:
        render: Render pipeline parameter specifications
        curve: Space-filling curve limits
    """

    render: RenderConfig = RenderConfig()
    curve: CurveConfig = CurveConfig()

    def get_all_specs(self) -> dict[str, dict[str, Any]]:
        """Get all parameter specs organized by component.

        :return: Nested dictionary of all specifications
        """
        return {
            "render": self.render.get_all_specs(),
        }


# Main singleton instance
CONFIG = BrimstoneConfig()

RENDER_CONFIG = CONFIG.render
CURVE_CONFIG = CONFIG.curve
