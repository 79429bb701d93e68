"""
Module 2: Packetizer

Frames a payload with RaptorQ redundancy into fixed-size packets, each
carrying the payload length in a 4-byte header.

Public API:
    - packetize(payload: bytes, symbol_size: int, coder=None) -> List[bytes]
    - compute_repair_count(payload_length: int, symbol_size: int) -> int
    - build_length_header(payload_length: int) -> bytes
    - parse_length_header(packet: bytes) -> int
"""

from .packetizer import packetize, compute_repair_count, QR_BINARY_CAPACITY
from .header import (
    build_length_header,
    parse_length_header,
    split_packet,
    HEADER_SIZE,
    LENGTH_MARKER,
    MAX_PAYLOAD_LENGTH,
)
from .fountain import ErasureCoder, SymbolDecoder, RaptorQCoder, raptorq_decoder, PAYLOAD_ID_SIZE
from .errors import (
    PacketizeError,
    PayloadTooLargeError,
    EmptyEncodingError,
    UnequalPacketLengthError,
    PacketTooLargeForMatrixError,
    MalformedPacketError,
    ErasureCodingError,
)

__version__ = "1.0.0"

__all__ = [
    "packetize",
    "compute_repair_count",
    "QR_BINARY_CAPACITY",
    "build_length_header",
    "parse_length_header",
    "split_packet",
    "HEADER_SIZE",
    "LENGTH_MARKER",
    "MAX_PAYLOAD_LENGTH",
    "ErasureCoder",
    "SymbolDecoder",
    "RaptorQCoder",
    "raptorq_decoder",
    "PAYLOAD_ID_SIZE",
    "PacketizeError",
    "PayloadTooLargeError",
    "EmptyEncodingError",
    "UnequalPacketLengthError",
    "PacketTooLargeForMatrixError",
    "MalformedPacketError",
    "ErasureCodingError",
]
