"""
Animated PNG writer.

Receives grayscale frames one at a time and writes them as an APNG file
once finished. Frames are PNG-encoded with OpenCV as they arrive; the
container itself is assembled by the ``apng`` package.
"""

import logging
import os
from typing import Optional, Tuple

import cv2
import numpy as np
from apng import APNG, PNG

from .errors import AnimationStateError, AnimationWriteError

logger = logging.getLogger(__name__)


class ApngWriter:
    """
    Animation sink writing an infinitely looping 8-bit grayscale APNG.

    State machine: Empty -> Building (append*) -> Finalized.
    """

    def __init__(self, path: str):
        """
        Args:
            path: Output file path; parent directories are created on finish
        """
        self.path = path
        self._apng = APNG(num_plays=0)
        self._size: Optional[Tuple[int, int]] = None
        self._num_frames = 0
        self._finalized = False

    @property
    def num_frames(self) -> int:
        return self._num_frames

    def append(self, frame) -> None:
        """
        Encode one frame and add it to the animation.

        Args:
            frame: Object with ``pixels`` (H, W) uint8 array and
                   ``delay`` (numerator, denominator) pair

        Raises:
            AnimationStateError: If the writer was already finished
            AnimationWriteError: If the frame is malformed or cannot be encoded
        """
        if self._finalized:
            raise AnimationStateError("Cannot append frame: animation already finished")

        pixels = frame.pixels
        if pixels.ndim != 2 or pixels.dtype != np.uint8:
            raise AnimationWriteError(
                f"Expected 2-D uint8 grayscale frame, got shape {pixels.shape} "
                f"dtype {pixels.dtype}"
            )

        if self._size is None:
            self._size = pixels.shape
        elif pixels.shape != self._size:
            raise AnimationWriteError(
                f"Inconsistent frame shape at index {self._num_frames}: {pixels.shape}. "
                f"Expected {self._size}."
            )

        ok, encoded = cv2.imencode('.png', pixels)
        if not ok:
            raise AnimationWriteError(f"PNG encoding failed for frame {self._num_frames}")

        delay_num, delay_den = frame.delay
        self._apng.append(
            PNG.from_bytes(encoded.tobytes()),
            delay=delay_num,
            delay_den=delay_den,
        )
        self._num_frames += 1

    def finish(self) -> None:
        """
        Write the animation to ``self.path``.

        Raises:
            AnimationStateError: If already finished or no frames were appended
            AnimationWriteError: If the file cannot be written
        """
        if self._finalized:
            raise AnimationStateError("Animation already finished")
        if self._num_frames == 0:
            raise AnimationStateError("Cannot finish an animation with no frames")

        output_dir = os.path.dirname(self.path)
        try:
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)
            self._apng.save(self.path)
        except OSError as e:
            raise AnimationWriteError(f"Error writing animation {self.path}: {e}") from e
        finally:
            self._finalized = True

        logger.info(
            "Wrote %d frames (%dx%d) to %s",
            self.num_frames, self._size[1], self._size[0], self.path
        )
