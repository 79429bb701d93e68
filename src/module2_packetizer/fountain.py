"""
Erasure-coding capability.

Wraps the RaptorQ fountain code from the ``raptorq`` package. Every
serialized symbol is a 4-byte payload id followed by ``symbol_size`` bytes,
so all symbols of one run have the same length.
"""

from typing import List, Optional, Protocol, Sequence

import raptorq

from .errors import ErasureCodingError


# Serialized RaptorQ packets start with a (source block, encoding symbol id) pair
PAYLOAD_ID_SIZE = 4


class ErasureCoder(Protocol):
    """Encode a payload into independently decodable symbols."""

    def encode(self, payload: bytes, symbol_size: int, repair_count: int) -> Sequence[bytes]:
        ...


class SymbolDecoder(Protocol):
    """Incremental decoder; returns the payload once enough symbols arrived."""

    def decode(self, symbol: bytes) -> Optional[bytes]:
        ...


class RaptorQCoder:
    """RaptorQ encoder with default transmission parameters."""

    def encode(self, payload: bytes, symbol_size: int, repair_count: int) -> List[bytes]:
        """
        Args:
            payload: Message bytes
            symbol_size: Symbol size in bytes (the RaptorQ MTU)
            repair_count: Repair symbols per source block

        Returns:
            Serialized symbols, source symbols first

        Raises:
            ErasureCodingError: If the RaptorQ library fails

        Notes:
            - RaptorQ cannot encode zero bytes; an empty payload is sent as
              one zero byte, the length header still announces 0
        """
        if len(payload) == 0:
            payload = b"\x00"

        try:
            encoder = raptorq.Encoder.with_defaults(payload, symbol_size)
            packets = encoder.get_encoded_packets(repair_count)
        except (KeyboardInterrupt, SystemExit):
            raise
        except BaseException as e:
            # Rust panics surface as pyo3 PanicException, a BaseException
            raise ErasureCodingError(
                f"RaptorQ encoding failed for {len(payload)}-byte payload "
                f"with symbol_size={symbol_size}: {e}"
            ) from e

        return [bytes(packet) for packet in packets]


def raptorq_decoder(payload_length: int, symbol_size: int) -> SymbolDecoder:
    """Create a RaptorQ decoder matching ``RaptorQCoder`` defaults."""
    return raptorq.Decoder.with_defaults(payload_length, symbol_size)
