"""
Compositor exception hierarchy.
"""


class CompositorError(Exception):
    """Base exception for frame composition errors."""
    pass


class EmptyAnimationError(CompositorError):
    """Raised when there are no matrices to composite."""
    pass


class InconsistentFrameSizeError(CompositorError):
    """Raised when matrices of one run differ in dimension."""

    def __init__(self, message: str, index: int = None, expected: int = None, actual: int = None):
        super().__init__(message)
        self.index = index
        self.expected = expected
        self.actual = actual


class AnimationStateError(CompositorError):
    """Raised when a sink is used after it was finalized."""
    pass
