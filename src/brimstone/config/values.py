"""Render value dataclass.

RenderValues holds the per-render settings that RenderPipeline builds up and
``render`` consumes. Ranges come from :data:`brimstone.config.RENDER_CONFIG`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from brimstone.config.config import RENDER_CONFIG
from brimstone.constants import COORDINATE_MODES
from brimstone.gamut.policy import GamutClipPolicy


@dataclass
class RenderValues:
    """Render settings.

    Example:
        >>> values = RenderValues(policy="adaptive_cusp", smooth=2.0)
        >>> values.is_smoothing()
        True
        >>> RenderValues.from_dict(values.to_dict()) == values
        True
    """

    policy: GamutClipPolicy = GamutClipPolicy.ADAPTIVE_MID
    alpha: float = RENDER_CONFIG.alpha.default
    extend: bool = True  # False: out-of-gamut pixels become black
    smooth: float = RENDER_CONFIG.smooth.default
    coordinates: str = "normalized"
    levels: int = int(RENDER_CONFIG.levels.default)
    workers: int = field(default_factory=lambda: int(RENDER_CONFIG.workers.default))

    def __post_init__(self) -> None:
        self.policy = GamutClipPolicy.coerce(self.policy)
        if self.coordinates not in COORDINATE_MODES:
            valid = ", ".join(COORDINATE_MODES)
            raise ValueError(
                f'coordinates="{self.coordinates}" is not valid. Valid options: {valid}'
            )

    def clamp(self) -> RenderValues:
        """Clamp all numeric values to valid ranges.

        :returns: New RenderValues with clamped values
        """
        return RenderValues(
            policy=self.policy,
            alpha=RENDER_CONFIG.alpha.validate(self.alpha),
            extend=self.extend,
            smooth=RENDER_CONFIG.smooth.validate(self.smooth),
            coordinates=self.coordinates,
            levels=int(RENDER_CONFIG.levels.validate(self.levels)),
            workers=int(RENDER_CONFIG.workers.validate(self.workers)),
        )

    def is_smoothing(self) -> bool:
        """Check if a blur pass will run."""
        return not RENDER_CONFIG.smooth.is_neutral(self.smooth) and self.smooth > 0.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible values."""
        return {
            "policy": self.policy.value,
            "alpha": self.alpha,
            "extend": self.extend,
            "smooth": self.smooth,
            "coordinates": self.coordinates,
            "levels": self.levels,
            "workers": self.workers,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderValues:
        """Build from a dictionary, ignoring unknown keys.

        :raises ValueError: If policy or coordinates are not valid
        """
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)
