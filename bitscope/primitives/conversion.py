"""
Bit-string conversions shared by metrics and transforms.

The canonical unit is a str over {'0', '1'}. Byte views group bits MSB
first, 8 per byte, and drop a trailing partial byte.
"""

from typing import List

import numpy as np


def bits_to_array(bits: str) -> np.ndarray:
    """'0'/'1' string -> uint8 array of 0/1."""
    if not bits:
        return np.zeros(0, dtype=np.uint8)
    return np.frombuffer(bits.encode('ascii'), dtype=np.uint8) - ord('0')


def bits_to_byte_values(bits: str) -> np.ndarray:
    """Group into whole bytes (MSB first). A trailing partial byte is dropped."""
    n_bytes = len(bits) // 8
    if n_bytes == 0:
        return np.zeros(0, dtype=np.int64)
    arr = bits_to_array(bits[:n_bytes * 8])
    return np.packbits(arr).astype(np.int64)


def byte_values_to_bits(values) -> str:
    """Inverse of bits_to_byte_values for values in [0, 255]."""
    return ''.join(format(int(v), '08b') for v in values)


def run_lengths(bits: str, char: str) -> List[int]:
    """Lengths of maximal runs of `char`, left to right."""
    return [len(run) for run in bits.split('1' if char == '0' else '0') if run]


def windows(seq, size: int, step: int = 1) -> list:
    """Overlapping (or strided) windows of `size` as hashable keys."""
    if size <= 0 or len(seq) < size:
        return []
    if isinstance(seq, str):
        return [seq[i:i + size] for i in range(0, len(seq) - size + 1, step)]
    values = [int(v) for v in seq]
    return [tuple(values[i:i + size]) for i in range(0, len(values) - size + 1, step)]
