"""
Packetizer: payload bytes -> equal-length, self-identifying packets.

Packet structure:
    [length header:4][serialized erasure-coded symbol]

The same length header is prepended to every packet so a receiver can
learn the payload length from any single captured frame.
"""

import logging
from typing import List, Optional

from .errors import (
    EmptyEncodingError,
    PacketTooLargeForMatrixError,
    PayloadTooLargeError,
    UnequalPacketLengthError,
)
from .fountain import ErasureCoder, RaptorQCoder
from .header import MAX_PAYLOAD_LENGTH, build_length_header

logger = logging.getLogger(__name__)


# Binary-mode capacity of a version 40 QR code at error correction level L
QR_BINARY_CAPACITY = 2953

MAX_SYMBOL_SIZE = 0xFFFF


def compute_repair_count(payload_length: int, symbol_size: int) -> int:
    """
    Number of repair symbols to request.

    Small payloads (one symbol or less) get no redundancy; larger ones get
    roughly one repair symbol per source symbol.
    """
    if payload_length <= symbol_size:
        return 0
    return payload_length // symbol_size


def packetize(
    payload: bytes,
    symbol_size: int,
    coder: Optional[ErasureCoder] = None
) -> List[bytes]:
    """
    Erasure-code a payload into packets ready for QR rendering.

    Args:
        payload: Message bytes (length < 2**31)
        symbol_size: Erasure-coding symbol size in bytes (1..65535)
        coder: Erasure-coding capability (default: RaptorQCoder)

    Returns:
        Ordered packets, source symbols first, all of identical length

    Raises:
        ValueError: If symbol_size is out of range
        PayloadTooLargeError: If len(payload) >= 2**31
        ErasureCodingError: If the RaptorQ library fails
        EmptyEncodingError: If the coder produced no symbols
        UnequalPacketLengthError: If packets differ in length
        PacketTooLargeForMatrixError: If packets exceed QR_BINARY_CAPACITY

    Notes:
        - Deterministic: the same arguments always give the same packets
          or the same error
    """
    payload_length = len(payload)
    if payload_length >= MAX_PAYLOAD_LENGTH:
        raise PayloadTooLargeError(
            f"Input data is too long ({payload_length} bytes), processing not possible",
            payload_length=payload_length,
            limit=MAX_PAYLOAD_LENGTH - 1,
        )

    if isinstance(symbol_size, bool) or not isinstance(symbol_size, int):
        raise ValueError(f"symbol_size must be an integer, got {type(symbol_size)}")
    if not 0 < symbol_size <= MAX_SYMBOL_SIZE:
        raise ValueError(f"Invalid symbol_size: {symbol_size}. Must be in [1, {MAX_SYMBOL_SIZE}].")

    if coder is None:
        coder = RaptorQCoder()

    header = build_length_header(payload_length)
    repair_count = compute_repair_count(payload_length, symbol_size)

    symbols = coder.encode(bytes(payload), symbol_size, repair_count)
    packets = [header + bytes(symbol) for symbol in symbols]

    if len(packets) == 0:
        raise EmptyEncodingError(
            f"Erasure coder produced no symbols for a {payload_length}-byte payload"
        )

    expected = len(packets[0])
    for idx, packet in enumerate(packets):
        if len(packet) != expected:
            raise UnequalPacketLengthError(
                f"Encoded packets have different length: packet {idx} is "
                f"{len(packet)} bytes, expected {expected}",
                index=idx,
                expected=expected,
                actual=len(packet),
            )

    if expected > QR_BINARY_CAPACITY:
        raise PacketTooLargeForMatrixError(
            f"Encoded packets too large to be turned into QR codes: {expected} bytes "
            f"(limit {QR_BINARY_CAPACITY}); choose a smaller symbol_size than {symbol_size}",
            packet_length=expected,
            limit=QR_BINARY_CAPACITY,
        )

    logger.debug(
        "Packetized %d bytes into %d packets of %d bytes (%d repair)",
        payload_length, len(packets), expected, repair_count
    )
    return packets
