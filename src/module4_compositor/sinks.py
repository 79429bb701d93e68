"""
Animation sinks: where composited frames go.
"""

from typing import List, Protocol

from .errors import AnimationStateError
from .frames import Frame


class AnimationSink(Protocol):
    """Append frames in order, then finish exactly once."""

    def append(self, frame: Frame) -> None:
        ...

    def finish(self) -> None:
        ...


class FrameCollector:
    """
    In-memory sink keeping every frame.

    Follows the same Empty -> Building -> Finalized order as file writers.
    """

    def __init__(self):
        self.frames: List[Frame] = []
        self.finished = False

    def append(self, frame: Frame) -> None:
        if self.finished:
            raise AnimationStateError("Cannot append frame: animation already finished")
        self.frames.append(frame)

    def finish(self) -> None:
        if self.finished:
            raise AnimationStateError("Animation already finished")
        self.finished = True
