"""
Matrix rendering error types for Module 3.
"""


class MatrixRenderError(Exception):
    """
    Raised when a packet cannot be turned into a module matrix.

    Packets are size-checked before rendering, so this signals that the
    capacity limit and the QR encoder have diverged, not a user error.
    """
    pass
