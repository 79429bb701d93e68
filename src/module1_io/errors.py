"""
Error types for Module 1: configuration, payload and animation I/O.
"""


class IOStageError(Exception):
    """Base exception for Module 1 I/O operations."""
    pass


class ConfigurationError(IOStageError):
    """Raised when configuration is missing, unreadable or invalid."""
    pass


class PayloadLoadError(IOStageError):
    """Raised when the payload file cannot be read or decoded."""
    pass


class AnimationWriteError(IOStageError):
    """Raised when a frame cannot be added to the animation container."""
    pass


class AnimationStateError(AnimationWriteError):
    """Raised when the writer is used outside its Empty -> Building -> Finalized order."""
    pass
