"""
Packetizer exception hierarchy.

All exceptions inherit from PacketizeError for unified handling.
"""


class PacketizeError(Exception):
    """Base exception for all packetization errors."""
    pass


class PayloadTooLargeError(PacketizeError):
    """Raised when the payload length does not fit in the 31-bit length field."""

    def __init__(self, message: str, payload_length: int = None, limit: int = None):
        super().__init__(message)
        self.payload_length = payload_length
        self.limit = limit


class EmptyEncodingError(PacketizeError):
    """Raised when the erasure coder returns no symbols."""
    pass


class UnequalPacketLengthError(PacketizeError):
    """Raised when packets of one run differ in length (coder contract breach)."""

    def __init__(self, message: str, index: int = None, expected: int = None, actual: int = None):
        super().__init__(message)
        self.index = index
        self.expected = expected
        self.actual = actual


class PacketTooLargeForMatrixError(PacketizeError):
    """Raised when packets exceed the QR binary capacity; use a smaller symbol size."""

    def __init__(self, message: str, packet_length: int = None, limit: int = None):
        super().__init__(message)
        self.packet_length = packet_length
        self.limit = limit


class MalformedPacketError(PacketizeError):
    """Raised when a packet header cannot be parsed."""
    pass


class ErasureCodingError(PacketizeError):
    """Raised when the erasure-coding library fails on a valid input."""
    pass
