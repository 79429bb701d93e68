"""
Testing utilities for the matrix renderer.

Provides a deterministic matrix encoder so compositor and pipeline tests
do not depend on real QR generation. Used only in test contexts.
"""

import numpy as np


class FakeMatrixEncoder:
    """
    Maps bytes to a square matrix whose side grows with the data length.

    Side is ``base + 4 * (len(data) // step)``, like QR versions; modules
    are the data bits, repeated to fill the matrix.
    """

    def __init__(self, base: int = 21, step: int = 64, fail_on: bytes = None):
        self.base = base
        self.step = step
        self.fail_on = fail_on

    def side(self, length: int) -> int:
        return self.base + 4 * (length // self.step)

    def encode(self, data: bytes) -> np.ndarray:
        if self.fail_on is not None and data == self.fail_on:
            raise ValueError("data overflow")

        side = self.side(len(data))
        bits = np.unpackbits(np.frombuffer(bytes(data) or b'\x00', dtype=np.uint8))
        return np.resize(bits, side * side).reshape(side, side).astype(bool)
