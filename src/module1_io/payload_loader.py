"""
Payload loading: read the message bytes to transmit from a file.
"""

from pathlib import Path

from .errors import PayloadLoadError


def _read_utf8(path: str) -> bytes:
    """Raw file bytes, checked to be UTF-8 text. Line endings are kept."""
    try:
        data = Path(path).read_bytes()
        data.decode('utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise PayloadLoadError(f"Cannot read payload file {path}: {e}") from e
    return data


def load_hex_payload(path: str) -> bytes:
    """
    Load a payload stored as a single hex string.

    Surrounding whitespace is ignored; whitespace between digits is not.

    Raises:
        PayloadLoadError: If the file is unreadable or not valid hex
    """
    text = _read_utf8(path).decode('utf-8').strip()
    if any(ch.isspace() for ch in text):
        raise PayloadLoadError(f"Payload file {path} is not valid hex: contains whitespace")

    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise PayloadLoadError(f"Payload file {path} is not valid hex: {e}") from e


def load_text_payload(path: str) -> bytes:
    """Load a text payload as its UTF-8 bytes, unmodified."""
    return _read_utf8(path)
