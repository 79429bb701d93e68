"""
Payload Reassembler

Receiver side of the packet format: reads the length header from captured
packets and feeds their symbols to a fountain decoder until the payload
is recovered. Packets may arrive in any order and any subset.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from src.module2_packetizer.fountain import PAYLOAD_ID_SIZE, SymbolDecoder, raptorq_decoder
from src.module2_packetizer.header import HEADER_SIZE, split_packet

from .errors import ReassemblyError

logger = logging.getLogger(__name__)


DecoderFactory = Callable[[int, int], SymbolDecoder]


@dataclass
class ReceivedPacket:
    """A parsed packet"""
    payload_length: int
    symbol: bytes  # serialized erasure-coded symbol


def read_packet(packet: bytes) -> ReceivedPacket:
    """
    Parse one captured packet.

    Raises:
        MalformedPacketError: If the header is truncated or unmarked
    """
    payload_length, symbol = split_packet(packet)
    return ReceivedPacket(payload_length=payload_length, symbol=symbol)


def reassemble(
    packets: Iterable[bytes],
    symbol_size: Optional[int] = None,
    decoder_factory: Optional[DecoderFactory] = None
) -> Optional[bytes]:
    """
    Recover the payload from captured packets.

    Args:
        packets: Captured packets, any order, duplicates allowed
        symbol_size: Symbol size used by the sender
                     (None = derived from the packet length)
        decoder_factory: (payload_length, symbol_size) -> decoder
                         (default: RaptorQ decoder)

    Returns:
        The payload, or None if the packets were not enough to decode it

    Raises:
        MalformedPacketError: If a packet header is invalid
        ReassemblyError: If packets disagree on payload length or size
    """
    if decoder_factory is None:
        decoder_factory = raptorq_decoder

    decoder = None
    expected_length = None
    packet_length = None
    used = 0

    for idx, packet in enumerate(packets):
        received = read_packet(packet)

        if decoder is None:
            expected_length = received.payload_length
            if expected_length == 0:
                # Symbols of an empty payload only carry padding
                return b""
            packet_length = len(packet)
            if symbol_size is None:
                symbol_size = packet_length - HEADER_SIZE - PAYLOAD_ID_SIZE
            if symbol_size <= 0:
                raise ReassemblyError(
                    f"Packet of {packet_length} bytes is too short to carry a symbol"
                )
            decoder = decoder_factory(expected_length, symbol_size)
        elif received.payload_length != expected_length:
            raise ReassemblyError(
                f"Packet {idx} announces {received.payload_length} bytes, "
                f"expected {expected_length}"
            )
        elif len(packet) != packet_length:
            raise ReassemblyError(
                f"Packet {idx} is {len(packet)} bytes, expected {packet_length}"
            )

        used += 1
        result = decoder.decode(received.symbol)
        if result is not None:
            logger.debug("Recovered %d-byte payload from %d packets", expected_length, used)
            return bytes(result)

    logger.debug("Payload not recoverable from %d packets", used)
    return None
