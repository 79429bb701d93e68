"""
Testing utilities for the packetizer.

Simulates frames missed by a receiving camera and provides a deterministic
erasure coder so framing logic can be tested without RaptorQ.
Used only in test/evaluation contexts.
"""

import random
from typing import List, Optional


def drop_packets(
    packets: List[bytes],
    count: int,
    seed: Optional[int] = None
) -> List[bytes]:
    """
    Remove ``count`` packets at random, keeping the survivors in order.

    Example:
        >>> survivors = drop_packets(packets, count=2, seed=42)
        >>> assert len(survivors) == len(packets) - 2
    """
    if not 0 <= count <= len(packets):
        raise ValueError(f"count must be in [0, {len(packets)}], got {count}")

    rng = random.Random(seed)
    dropped = set(rng.sample(range(len(packets)), count))

    return [packet for idx, packet in enumerate(packets) if idx not in dropped]


class FakeErasureCoder:
    """
    Deterministic stand-in for the RaptorQ coder.

    Produces ceil(len / symbol_size) source symbols (at least one) followed by
    ``repair_count`` repair symbols, each ``[index:4][symbol_size bytes]``.
    Source symbols carry zero-padded payload slices; repair symbols carry
    the XOR of all source slices with the repair index mixed in.
    """

    def __init__(self):
        self.calls = []

    def encode(self, payload: bytes, symbol_size: int, repair_count: int) -> List[bytes]:
        self.calls.append((len(payload), symbol_size, repair_count))

        num_source = max(1, -(-len(payload) // symbol_size))
        slices = [
            payload[i * symbol_size:(i + 1) * symbol_size].ljust(symbol_size, b'\x00')
            for i in range(num_source)
        ]

        parity = bytearray(symbol_size)
        for chunk in slices:
            for i, value in enumerate(chunk):
                parity[i] ^= value

        symbols = [idx.to_bytes(4, 'big') + chunk for idx, chunk in enumerate(slices)]
        for r in range(repair_count):
            idx = num_source + r
            repair = bytes((value + r) & 0xFF for value in parity)
            symbols.append(idx.to_bytes(4, 'big') + repair)

        return symbols
