"""
Matrix Renderer: one packet -> one QR module matrix.
"""

import logging
from typing import Iterable, List, Optional

import numpy as np

from .errors import MatrixRenderError
from .qr_encoder import MatrixEncoder, SegnoMatrixEncoder

logger = logging.getLogger(__name__)


ModuleMatrix = np.ndarray  # Shape: (D, D), dtype: bool, True = main color


def render(packet: bytes, encoder: Optional[MatrixEncoder] = None) -> ModuleMatrix:
    """
    Encode a packet as a QR module matrix.

    Args:
        packet: Packet bytes from the packetizer
        encoder: Matrix-code capability (default: SegnoMatrixEncoder)

    Returns:
        Square boolean matrix

    Raises:
        MatrixRenderError: If the encoder fails or returns a non-square matrix
    """
    if encoder is None:
        encoder = SegnoMatrixEncoder()

    try:
        matrix = encoder.encode(packet)
    except Exception as e:
        raise MatrixRenderError(
            f"QR encoding failed for {len(packet)}-byte packet: {e}"
        ) from e

    matrix = np.asarray(matrix, dtype=bool)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.shape[0] == 0:
        raise MatrixRenderError(f"Encoder returned non-square matrix of shape {matrix.shape}")

    return matrix


def render_all(
    packets: Iterable[bytes],
    encoder: Optional[MatrixEncoder] = None
) -> List[ModuleMatrix]:
    """
    Render every packet, preserving packet order.

    Raises:
        MatrixRenderError: If any packet fails; the message names its index
    """
    if encoder is None:
        encoder = SegnoMatrixEncoder()

    matrices = []
    for idx, packet in enumerate(packets):
        try:
            matrices.append(render(packet, encoder))
        except MatrixRenderError as e:
            raise MatrixRenderError(f"Packet {idx}: {e}") from e

    if matrices:
        logger.debug("Rendered %d matrices of %dx%d modules",
                     len(matrices), matrices[0].shape[0], matrices[0].shape[1])
    return matrices
