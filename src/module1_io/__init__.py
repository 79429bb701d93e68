"""
Module 1: I/O collaborators

Everything the encoding core needs from the outside world: validated
configuration, payload bytes, and the APNG file writer.

Public API:
    - QRConfig, load_config(path), parse_constants(text), validate_config(config)
    - load_hex_payload(path), load_text_payload(path)
    - ApngWriter(path)
"""

from .config import (
    QRConfig,
    DEFAULT_CONFIG,
    load_config,
    parse_constants,
    config_from_dict,
    validate_config,
)
from .payload_loader import load_hex_payload, load_text_payload
from .apng_writer import ApngWriter
from .errors import (
    IOStageError,
    ConfigurationError,
    PayloadLoadError,
    AnimationWriteError,
    AnimationStateError,
)

__version__ = "1.0.0"

__all__ = [
    "QRConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "parse_constants",
    "config_from_dict",
    "validate_config",
    "load_hex_payload",
    "load_text_payload",
    "ApngWriter",
    "IOStageError",
    "ConfigurationError",
    "PayloadLoadError",
    "AnimationWriteError",
    "AnimationStateError",
]
