"""Gamut clipping policies."""

from __future__ import annotations

from enum import Enum

from brimstone.constants import (
    POLICY_ADAPTIVE_CUSP,
    POLICY_ADAPTIVE_MID,
    POLICY_PRESERVE_CHROMA,
    POLICY_PROJECT_TO_CUSP,
    POLICY_PROJECT_TO_MID,
)


class GamutClipPolicy(str, Enum):
    """Where the projection line of an out-of-gamut color is anchored.

    - PRESERVE_CHROMA: keep lightness, reduce chroma only
    - PROJECT_TO_MID: project toward (L=0.5, C=0)
    - PROJECT_TO_CUSP: project toward (L=L_cusp, C=0)
    - ADAPTIVE_MID: anchor slides from L toward 0.5 as chroma grows
    - ADAPTIVE_CUSP: anchor slides from L toward L_cusp as chroma grows
    """

    PRESERVE_CHROMA = "preserve_chroma"
    PROJECT_TO_MID = "project_to_mid"
    PROJECT_TO_CUSP = "project_to_cusp"
    ADAPTIVE_MID = "adaptive_mid"
    ADAPTIVE_CUSP = "adaptive_cusp"

    @property
    def code(self) -> int:
        """Integer code passed to the numba kernels."""
        return _POLICY_CODES[self]

    @property
    def is_adaptive(self) -> bool:
        """True if the anchor depends on alpha."""
        return self in (GamutClipPolicy.ADAPTIVE_MID, GamutClipPolicy.ADAPTIVE_CUSP)

    @classmethod
    def coerce(cls, value: GamutClipPolicy | str) -> GamutClipPolicy:
        """Return ``value`` as a policy, accepting names in any case.

        :raises ValueError: If ``value`` names no policy
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            if key in cls._value2member_map_:
                return cls(key)
        valid = ", ".join(p.value for p in cls)
        raise ValueError(f'policy="{value}" is not valid. Valid options: {valid}')


_POLICY_CODES = {
    GamutClipPolicy.PRESERVE_CHROMA: POLICY_PRESERVE_CHROMA,
    GamutClipPolicy.PROJECT_TO_MID: POLICY_PROJECT_TO_MID,
    GamutClipPolicy.PROJECT_TO_CUSP: POLICY_PROJECT_TO_CUSP,
    GamutClipPolicy.ADAPTIVE_MID: POLICY_ADAPTIVE_MID,
    GamutClipPolicy.ADAPTIVE_CUSP: POLICY_ADAPTIVE_CUSP,
}
