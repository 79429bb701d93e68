"""
Receiver error types for Module 6.
"""


class ReassemblyError(Exception):
    """Raised when captured packets cannot belong to one payload."""
    pass
