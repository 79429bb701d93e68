"""
Frame Compositor: module matrices -> timed grayscale frames.

Geometry:
    border_pixels = border * scaling
    canvas = D * scaling + 2 * border_pixels

Pixel (row, col) shows module (row // scaling - border, col // scaling - border);
pixels mapping outside the matrix are border and always take the back color.
"""

import logging
from typing import Iterator, List, Sequence

import numpy as np

from src.module1_io.config import QRConfig

from .errors import EmptyAnimationError, InconsistentFrameSizeError
from .frames import AnimationSummary, Frame
from .sinks import AnimationSink

logger = logging.getLogger(__name__)


def canvas_size(dimension: int, config: QRConfig) -> int:
    """Side length in pixels of a frame showing a dimension x dimension matrix."""
    return dimension * config.scaling + 2 * config.border * config.scaling


def render_frame(matrix: np.ndarray, config: QRConfig) -> np.ndarray:
    """
    Rasterize one module matrix.

    Args:
        matrix: (D, D) boolean matrix, True = main color
        config: Colors, scaling and border

    Returns:
        (canvas, canvas) uint8 pixel array
    """
    matrix = np.asarray(matrix, dtype=bool)
    scaling = config.scaling
    border_pixels = config.border * scaling

    modules = np.where(matrix, config.main_color, config.back_color).astype(np.uint8)

    # Nearest-neighbour upscale: each module becomes a scaling x scaling block
    scaled = np.repeat(np.repeat(modules, scaling, axis=0), scaling, axis=1)

    if border_pixels == 0:
        return scaled

    return np.pad(
        scaled,
        border_pixels,
        mode='constant',
        constant_values=config.back_color,
    )


def _validate_dimensions(matrices: List[np.ndarray]) -> int:
    if len(matrices) == 0:
        raise EmptyAnimationError("No matrices to composite")

    dimension = None
    for idx, matrix in enumerate(matrices):
        shape = np.shape(matrix)
        if len(shape) != 2 or shape[0] != shape[1]:
            raise InconsistentFrameSizeError(
                f"Matrix {idx} is not square: shape {shape}",
                index=idx,
            )
        if dimension is None:
            dimension = shape[0]
        elif shape[0] != dimension:
            raise InconsistentFrameSizeError(
                f"Inconsistent matrix size at index {idx}: {shape[0]}. Expected {dimension}.",
                index=idx,
                expected=dimension,
                actual=shape[0],
            )

    return dimension


def iter_frames(matrices: Sequence[np.ndarray], config: QRConfig) -> Iterator[Frame]:
    """
    Yield one Frame per matrix, in input order.

    All dimensions are checked before the first frame is produced.

    Raises:
        EmptyAnimationError: If matrices is empty
        InconsistentFrameSizeError: If matrices differ in size
    """
    matrices = list(matrices)
    _validate_dimensions(matrices)

    for matrix in matrices:
        yield Frame(pixels=render_frame(matrix, config), delay=config.delay)


def composite(
    matrices: Sequence[np.ndarray],
    config: QRConfig,
    sink: AnimationSink
) -> AnimationSummary:
    """
    Render matrices into frames and stream them into an animation sink.

    Args:
        matrices: Module matrices, all of the same dimension
        config: Validated configuration
        sink: Receives ``append(frame)`` per frame, then ``finish()`` once

    Returns:
        AnimationSummary with frame count, size and delay

    Raises:
        EmptyAnimationError: If matrices is empty
        InconsistentFrameSizeError: If matrices differ in size

    Notes:
        - ``finish()`` is never called when an error is raised
        - Only the frame being appended is held in memory
    """
    matrices = list(matrices)
    dimension = _validate_dimensions(matrices)
    size = canvas_size(dimension, config)

    count = 0
    for matrix in matrices:
        sink.append(Frame(pixels=render_frame(matrix, config), delay=config.delay))
        count += 1
    sink.finish()

    logger.debug("Composited %d frames of %dx%d pixels", count, size, size)
    return AnimationSummary(
        num_frames=count,
        width=size,
        height=size,
        delay=config.delay,
    )
