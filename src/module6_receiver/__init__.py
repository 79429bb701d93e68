"""
Module 6: Receiver

Parses captured packets and reconstructs the payload with the fountain
decoder.

Public API:
    - read_packet(packet: bytes) -> ReceivedPacket
    - reassemble(packets, symbol_size=None, decoder_factory=None) -> Optional[bytes]
"""

from .reassembler import read_packet, reassemble, ReceivedPacket
from .errors import ReassemblyError

__version__ = "1.0.0"

__all__ = [
    "read_packet",
    "reassemble",
    "ReceivedPacket",
    "ReassemblyError",
]
