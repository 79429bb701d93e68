"""
Configuration loading for the QR animation generator.

Two sources are supported:
    - YAML files (``.yaml`` / ``.yml``), deep-merged over ``DEFAULT_CONFIG``
    - legacy constants files (``CHUNK_SIZE = 1000;`` style lines)

Both produce a validated ``QRConfig``.
"""

import copy
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


UINT8_MAX = 0xFF
UINT16_MAX = 0xFFFF
INT32_MAX = 0x7FFFFFFF


DEFAULT_CONFIG: Dict[str, Any] = {
    'packetizer': {
        'symbol_size': 1000,
    },
    'render': {
        'main_color': 0x00,  # black
        'back_color': 0xFF,  # white
        'scaling': 4,  # pixels per module
        'border': 4,  # quiet zone, in modules
    },
    'animation': {
        # Used directly as the per-frame delay fraction (seconds)
        'fps_num': 1,
        'fps_den': 10,
    },
}


@dataclass(frozen=True)
class QRConfig:
    """Validated constants for one encoding run."""
    symbol_size: int
    main_color: int
    back_color: int
    scaling: int
    fps_num: int
    fps_den: int
    border: int

    @property
    def delay(self):
        return (self.fps_num, self.fps_den)


def _check_int(name: str, value: Any, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise ConfigurationError(f"{name}={value} out of range [{low}, {high}]")


def validate_config(config: QRConfig) -> QRConfig:
    """
    Check ranges and color distinctness.

    Raises:
        ConfigurationError: If any value is out of range or colors are identical
    """
    _check_int('symbol_size', config.symbol_size, 1, UINT16_MAX)
    _check_int('main_color', config.main_color, 0, UINT8_MAX)
    _check_int('back_color', config.back_color, 0, UINT8_MAX)
    _check_int('scaling', config.scaling, 1, INT32_MAX)
    _check_int('fps_num', config.fps_num, 0, UINT16_MAX)
    _check_int('fps_den', config.fps_den, 0, UINT16_MAX)
    _check_int('border', config.border, 0, INT32_MAX)

    if config.main_color == config.back_color:
        raise ConfigurationError(
            f"Main and back color are identical: {config.main_color}, "
            f"QR code generation not possible"
        )

    return config


def deep_update(dst: Dict[str, Any], src: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge configuration dictionaries."""
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            deep_update(dst[k], v)
        else:
            dst[k] = v
    return dst


def config_from_dict(raw: Dict[str, Any]) -> QRConfig:
    """
    Build a QRConfig from a nested configuration dictionary.

    Missing keys fall back to ``DEFAULT_CONFIG``.
    """
    merged = deep_update(copy.deepcopy(DEFAULT_CONFIG), raw or {})

    try:
        config = QRConfig(
            symbol_size=merged['packetizer']['symbol_size'],
            main_color=merged['render']['main_color'],
            back_color=merged['render']['back_color'],
            scaling=merged['render']['scaling'],
            fps_num=merged['animation']['fps_num'],
            fps_den=merged['animation']['fps_den'],
            border=merged['render']['border'],
        )
    except (KeyError, TypeError) as e:
        raise ConfigurationError(f"Malformed configuration section: {e}") from e

    return validate_config(config)


# Legacy "KEY = value;" constants file. Colors are two hex digits with an
# optional 0x prefix, everything else is decimal.
_LEGACY_PATTERNS = {
    'chunk_size': re.compile(r'CHUNK_SIZE.*= (?P<value>[0-9]+);', re.IGNORECASE),
    'main_color': re.compile(r'MAIN_COLOR.*= (0x)?(?P<value>[0-9a-f]{2});', re.IGNORECASE),
    'back_color': re.compile(r'BACK_COLOR.*= (0x)?(?P<value>[0-9a-f]{2});', re.IGNORECASE),
    'scaling': re.compile(r'SCALING.*= (?P<value>[0-9]*);', re.IGNORECASE),
    'fps_nom': re.compile(r'FPS_NOM.*= (?P<value>[0-9]+);', re.IGNORECASE),
    'fps_den': re.compile(r'FPS_DEN.*= (?P<value>[0-9]+);', re.IGNORECASE),
    'border': re.compile(r'BORDER.*= (?P<value>[0-9]+);', re.IGNORECASE),
}

_HEX_KEYS = ('main_color', 'back_color')


def parse_constants(contents: str, source: str = '<string>') -> QRConfig:
    """
    Parse the legacy constants format.

    Args:
        contents: Text of the constants file
        source: Name used in error messages

    Returns:
        Validated QRConfig

    Raises:
        ConfigurationError: If a key is missing or a value is unusable
    """
    values = {}
    for key, pattern in _LEGACY_PATTERNS.items():
        match = pattern.search(contents)
        if match is None:
            raise ConfigurationError(f"No {key} value found in {source}")

        text = match.group('value')
        try:
            values[key] = int(text, 16) if key in _HEX_KEYS else int(text)
        except ValueError as e:
            raise ConfigurationError(f"Invalid {key} value {text!r} in {source}") from e

    return validate_config(QRConfig(
        symbol_size=values['chunk_size'],
        main_color=values['main_color'],
        back_color=values['back_color'],
        scaling=values['scaling'],
        fps_num=values['fps_nom'],
        fps_den=values['fps_den'],
        border=values['border'],
    ))


def load_config(path: Optional[str] = None) -> QRConfig:
    """
    Load configuration from a YAML or legacy constants file.

    Args:
        path: Config file path (None = built-in defaults)

    Returns:
        Validated QRConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    if path is None:
        return config_from_dict({})

    path_obj = Path(path)
    try:
        contents = path_obj.read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if path_obj.suffix.lower() in ('.yaml', '.yml'):
        try:
            raw = yaml.safe_load(contents) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Top level of {path} must be a mapping")
        config = config_from_dict(raw)
    else:
        config = parse_constants(contents, source=str(path))

    logger.debug("Loaded config from %s: %s", path, config)
    return config
