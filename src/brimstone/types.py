"""Type aliases for brimstone.

Provides unified type hints for color and buffer parameters across all modules.
"""

import numpy as np

# Display buffer: float array [width * height, 3], row-major
PixelBuffer = np.ndarray

# Image size (width, height)
Size = tuple[int, int]