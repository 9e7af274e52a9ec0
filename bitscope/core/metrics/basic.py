"""
Basic Statistics Engine
=======================

Counts and checksums over the raw bit-string and its byte view.

Outputs:
    total_bits, total_bytes     - length in bits / whole bytes
    zero_count, one_count       - symbol counts
    zero_percentage, one_percentage
    bit_density                 - ones / length
    byte_alignment              - length mod 8
    padding_bits                - bits needed to reach the next byte boundary
    hamming_weight, population_count - number of '1' bits
    parity                      - 0 = even number of ones, 1 = odd
    checksum_8bit               - sum of bytes mod 256
    crc32                       - CRC-32 (poly 0xEDB88320 reflected, init/xorout 0xFFFFFFFF)
"""

import zlib
from typing import Dict, Iterable

import numpy as np

from ._input import prepare, ratio


OUTPUTS = [
    'total_bits',
    'total_bytes',
    'zero_count',
    'one_count',
    'zero_percentage',
    'one_percentage',
    'bit_density',
    'byte_alignment',
    'padding_bits',
    'hamming_weight',
    'population_count',
    'parity',
    'checksum_8bit',
    'crc32',
]


def crc32(byte_values: Iterable[int]) -> int:
    """Standard CRC-32. crc32(b'123456789') == 0xCBF43926."""
    return zlib.crc32(np.asarray(byte_values, dtype=np.uint8).tobytes())


def compute(bits: str) -> Dict[str, float]:
    bits, _, byte_values = prepare(bits)
    n = len(bits)
    ones = bits.count('1')
    zeros = n - ones

    return {
        'total_bits': float(n),
        'total_bytes': float(len(byte_values)),
        'zero_count': float(zeros),
        'one_count': float(ones),
        'zero_percentage': ratio(zeros, n) * 100.0,
        'one_percentage': ratio(ones, n) * 100.0,
        'bit_density': ratio(ones, n),
        'byte_alignment': float(n % 8),
        'padding_bits': float((-n) % 8),
        'hamming_weight': float(ones),
        'population_count': float(ones),
        'parity': float(ones % 2),
        'checksum_8bit': float(int(byte_values.sum()) % 256) if len(byte_values) else 0.0,
        'crc32': float(crc32(byte_values)),
    }
