"""
Module 4: Frame Compositor

Scales QR module matrices into grayscale frames with a quiet-zone border
and streams them, with a fixed per-frame delay, to an animation sink.

Public API:
    - composite(matrices, config, sink) -> AnimationSummary
    - iter_frames(matrices, config) -> Iterator[Frame]
    - render_frame(matrix, config) -> np.ndarray
    - canvas_size(dimension, config) -> int
"""

from .compositor import composite, iter_frames, render_frame, canvas_size
from .frames import Frame, AnimationSummary
from .sinks import AnimationSink, FrameCollector
from .errors import (
    CompositorError,
    EmptyAnimationError,
    InconsistentFrameSizeError,
    AnimationStateError,
)

__version__ = "1.0.0"

__all__ = [
    "composite",
    "iter_frames",
    "render_frame",
    "canvas_size",
    "Frame",
    "AnimationSummary",
    "AnimationSink",
    "FrameCollector",
    "CompositorError",
    "EmptyAnimationError",
    "InconsistentFrameSizeError",
    "AnimationStateError",
]
