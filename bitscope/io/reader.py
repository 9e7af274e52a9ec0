"""
Reader - all bit-string file reads go through here.

Binary files (.bin, .dat, anything unrecognised) become 8 bits per byte,
MSB first. Text files (.txt, .bits) keep only their '0'/'1' characters.
"""

from pathlib import Path

import numpy as np

from bitscope.validation import sanitize_bits, validate_bits


TEXT_SUFFIXES = ('.txt', '.bits')


def bytes_to_bits(data: bytes) -> str:
    """Raw bytes -> '0'/'1' string, MSB first."""
    if not data:
        return ''
    arr = np.unpackbits(np.frombuffer(data, dtype=np.uint8))
    return (arr + ord('0')).astype(np.uint8).tobytes().decode('ascii')


def bits_to_bytes(bits: str) -> bytes:
    """'0'/'1' string -> bytes. A trailing partial byte is right-padded with '0'."""
    validate_bits(bits)
    if not bits:
        return b''
    arr = np.frombuffer(bits.encode('ascii'), dtype=np.uint8) - ord('0')
    return np.packbits(arr).tobytes()


def read_bits(path: str) -> str:
    """Load a bit-string from a binary or text file."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input not found: {path}")

    if p.suffix.lower() in TEXT_SUFFIXES:
        return sanitize_bits(p.read_text())
    return bytes_to_bits(p.read_bytes())
