"""
End-to-end encoding pipeline.

Pipeline:
    payload bytes
    → Packetizer (Module 2)
    → Matrix Renderer (Module 3, per packet)
    → Frame Compositor (Module 4)
    → animation sink (APNG writer from Module 1, or in-memory)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.module1_io.apng_writer import ApngWriter
from src.module1_io.config import QRConfig, load_config
from src.module1_io.payload_loader import load_hex_payload, load_text_payload
from src.module2_packetizer.fountain import ErasureCoder
from src.module2_packetizer.packetizer import packetize
from src.module3_matrix.qr_encoder import MatrixEncoder
from src.module3_matrix.renderer import render_all
from src.module4_compositor.compositor import composite
from src.module4_compositor.sinks import AnimationSink

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Statistics of one encoding run."""
    payload_length: int
    num_packets: int
    packet_length: int
    matrix_size: int  # modules per side
    canvas_size: int  # pixels per side
    delay: tuple


def encode_payload(
    payload: bytes,
    config: QRConfig,
    sink: AnimationSink,
    coder: Optional[ErasureCoder] = None,
    matrix_encoder: Optional[MatrixEncoder] = None
) -> PipelineResult:
    """
    Run the full pipeline and stream frames into ``sink``.

    Args:
        payload: Message bytes
        config: Validated configuration
        sink: Animation sink, finished on success
        coder: Erasure-coding capability (default: RaptorQ)
        matrix_encoder: Matrix-code capability (default: segno QR)

    Returns:
        PipelineResult

    Raises:
        PacketizeError: If the payload or symbol size is unusable
        MatrixRenderError: If a packet cannot be encoded as QR
        CompositorError: If matrices are inconsistent
    """
    packets = packetize(payload, config.symbol_size, coder=coder)
    matrices = render_all(packets, encoder=matrix_encoder)
    summary = composite(matrices, config, sink)

    result = PipelineResult(
        payload_length=len(payload),
        num_packets=len(packets),
        packet_length=len(packets[0]),
        matrix_size=matrices[0].shape[0],
        canvas_size=summary.width,
        delay=summary.delay,
    )
    logger.info(
        "Encoded %d bytes into %d frames (%d-byte packets, %dx%d modules, %dpx canvas)",
        result.payload_length, result.num_packets, result.packet_length,
        result.matrix_size, result.matrix_size, result.canvas_size
    )
    return result


def run_hex(source: str, setup: Optional[str], output: str) -> PipelineResult:
    """Encode a hex-string payload file into an APNG."""
    payload = load_hex_payload(source)
    config = load_config(setup)
    return encode_payload(payload, config, ApngWriter(output))


def run_text(source: str, setup: Optional[str], output: str) -> PipelineResult:
    """Encode a text payload file into an APNG."""
    payload = load_text_payload(source)
    config = load_config(setup)
    return encode_payload(payload, config, ApngWriter(output))
