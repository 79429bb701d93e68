"""
Module 5: Encoding Pipeline

Chains packetizer, matrix renderer and compositor, and exposes the
``qr-fountain-gen`` command line.

Public API:
    - encode_payload(payload, config, sink, coder=None, matrix_encoder=None) -> PipelineResult
    - run_hex(source, setup, output) -> PipelineResult
    - run_text(source, setup, output) -> PipelineResult
"""

from .pipeline import encode_payload, run_hex, run_text, PipelineResult

__version__ = "1.0.0"

__all__ = [
    "encode_payload",
    "run_hex",
    "run_text",
    "PipelineResult",
]
