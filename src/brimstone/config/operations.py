"""Parameter specifications for render configuration.

This module defines the ParameterSpec dataclass that specifies the range,
default and neutral value of each tunable render parameter.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real


@dataclass(frozen=True)
class ParameterSpec:
    """Specification for a render parameter.

    Attributes:
        name: Parameter name (e.g., "alpha", "smooth")
        min_value: Minimum allowed value
        max_value: Maximum allowed value
        default: Default value when not specified
        neutral: Value that causes no change (identity)
        description: Human-readable description
    """

    name: str
    min_value: float
    max_value: float
    default: float
    neutral: float
    description: str = ""

    def validate(self, value: float) -> float:
        """Validate and clamp value to allowed range.

        :param value: Value to validate
        :returns: Clamped value within [min_value, max_value]
        :raises TypeError: If value is not a number
        """
        if not isinstance(value, Real) or isinstance(value, bool):
            raise TypeError(f"{self.name}: expected number, got {type(value).__name__}")

        return max(self.min_value, min(self.max_value, float(value)))

    def contains(self, value: float) -> bool:
        """Check if value lies inside [min_value, max_value]."""
        return self.min_value <= value <= self.max_value

    def is_neutral(self, value: float, tolerance: float = 1e-6) -> bool:
        """Check if value is effectively neutral (no change).

        :param value: Value to check
        :param tolerance: Tolerance for floating point comparison
        :returns: True if value is within tolerance of neutral
        """
        return abs(value - self.neutral) < tolerance

    def __repr__(self) -> str:
        return (
            f"ParameterSpec({self.name}, "
            f"range=[{self.min_value}, {self.max_value}], "
            f"default={self.default}, neutral={self.neutral})"
        )
