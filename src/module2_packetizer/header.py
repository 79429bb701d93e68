"""
Length header carried at the front of every packet.

Header structure (4 bytes, big-endian):
    bit 31     : format marker, always 1
    bits 30..0 : original payload length in bytes
"""

import struct
from typing import Tuple

from .errors import MalformedPacketError, PayloadTooLargeError


HEADER_SIZE = 4
LENGTH_MARKER = 0x80000000
MAX_PAYLOAD_LENGTH = 0x80000000  # exclusive


def build_length_header(payload_length: int) -> bytes:
    """
    Build the 4-byte header for a payload of the given length.

    Raises:
        PayloadTooLargeError: If payload_length >= 2**31
    """
    if payload_length >= MAX_PAYLOAD_LENGTH:
        raise PayloadTooLargeError(
            f"Payload of {payload_length} bytes is too long, limit is "
            f"{MAX_PAYLOAD_LENGTH - 1} bytes",
            payload_length=payload_length,
            limit=MAX_PAYLOAD_LENGTH - 1,
        )
    if payload_length < 0:
        raise ValueError(f"Negative payload length: {payload_length}")

    return struct.pack('>I', LENGTH_MARKER | payload_length)


def parse_length_header(packet: bytes) -> int:
    """
    Recover the payload length from any single packet.

    Raises:
        MalformedPacketError: If the packet is truncated or lacks the marker bit
    """
    if len(packet) < HEADER_SIZE:
        raise MalformedPacketError(
            f"Packet too short: {len(packet)} bytes (minimum {HEADER_SIZE})"
        )

    value = struct.unpack('>I', packet[:HEADER_SIZE])[0]
    if not value & LENGTH_MARKER:
        raise MalformedPacketError(f"Missing format marker bit in header 0x{value:08x}")

    return value & ~LENGTH_MARKER


def split_packet(packet: bytes) -> Tuple[int, bytes]:
    """Split a packet into (payload_length, serialized_symbol)."""
    return parse_length_header(packet), packet[HEADER_SIZE:]
