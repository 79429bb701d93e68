"""
Matrix-code capability backed by ``segno``.
"""

from typing import Protocol

import numpy as np
import segno


# Lowest QR error correction level; redundancy comes from the erasure code
ERROR_LEVEL = 'L'


class MatrixEncoder(Protocol):
    """Encode bytes into a square boolean module matrix (True = dark)."""

    def encode(self, data: bytes) -> np.ndarray:
        ...


class SegnoMatrixEncoder:
    """
    Byte-mode QR encoder at error level L.

    The version is chosen automatically as the smallest that fits; the
    returned matrix has no quiet zone.
    """

    def __init__(self, error: str = ERROR_LEVEL):
        self.error = error

    def encode(self, data: bytes) -> np.ndarray:
        qr = segno.make_qr(bytes(data), error=self.error, mode='byte', boost_error=False)
        return np.array([list(row) for row in qr.matrix], dtype=bool)
