"""
Module 3: Matrix Renderer

Turns packets into QR module matrices at the lowest error correction level.

Public API:
    - render(packet: bytes, encoder=None) -> np.ndarray
    - render_all(packets, encoder=None) -> List[np.ndarray]
"""

from .renderer import render, render_all, ModuleMatrix
from .qr_encoder import MatrixEncoder, SegnoMatrixEncoder, ERROR_LEVEL
from .errors import MatrixRenderError

__version__ = "1.0.0"

__all__ = [
    "render",
    "render_all",
    "ModuleMatrix",
    "MatrixEncoder",
    "SegnoMatrixEncoder",
    "ERROR_LEVEL",
    "MatrixRenderError",
]
