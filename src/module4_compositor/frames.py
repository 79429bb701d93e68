"""
Frame data types.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass
class Frame:
    """One grayscale animation frame"""
    pixels: np.ndarray  # Shape: (H, W), dtype: uint8
    delay: Tuple[int, int]  # (numerator, denominator)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def to_bytes(self) -> bytes:
        """Row-major 8-bit grayscale buffer of length width * height."""
        return self.pixels.tobytes()


@dataclass
class AnimationSummary:
    """What was handed to the animation sink"""
    num_frames: int
    width: int
    height: int
    delay: Tuple[int, int]
