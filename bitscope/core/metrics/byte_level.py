"""
Byte-Level Engine
=================

Statistics of the byte view (complete bytes only).

Outputs:
    ascii_printable_percentage - % of bytes in the printable range
    null_byte_count
    high_entropy_byte_count    - bytes whose 8-bit Shannon entropy exceeds the high threshold
    low_entropy_byte_count     - bytes whose 8-bit Shannon entropy is below the low threshold
    byte_value_range           - max - min
    byte_value_mean, byte_value_median, byte_value_std_dev
    bigram_probability         - probability of the most frequent byte bigram
    trigram_probability        - probability of the most frequent byte trigram
"""

from collections import Counter
from typing import Dict, Optional

import numpy as np

from bitscope.config import get_config
from bitscope.primitives import maximum, mean, median, minimum, shannon_entropy, std, windows

from ._input import prepare, ratio


OUTPUTS = [
    'ascii_printable_percentage',
    'null_byte_count',
    'high_entropy_byte_count',
    'low_entropy_byte_count',
    'byte_value_range',
    'byte_value_mean',
    'byte_value_median',
    'byte_value_std_dev',
    'bigram_probability',
    'trigram_probability',
]

# Shannon entropy of a byte's own 8 bits, indexed by popcount.
_POPCOUNT_ENTROPY = np.array([shannon_entropy([k, 8 - k]) for k in range(9)])


def bit_entropy_per_byte(byte_values) -> np.ndarray:
    b = np.asarray(byte_values, dtype=np.uint8)
    ones = np.unpackbits(b.reshape(-1, 1), axis=1).sum(axis=1)
    return _POPCOUNT_ENTROPY[ones]


def ngram_probability(byte_values, n: int) -> float:
    total = len(byte_values) - n + 1
    if total <= 0:
        return 0.0
    counts = Counter(windows(np.asarray(byte_values), n))
    return max(counts.values()) / total


def compute(bits: str, config: Optional[dict] = None) -> Dict[str, float]:
    cfg = (config or get_config())['bytes']
    low, high = cfg['printable_range']

    _, _, byte_values = prepare(bits)
    n = len(byte_values)
    entropies = bit_entropy_per_byte(byte_values)
    printable = int(np.count_nonzero((byte_values >= low) & (byte_values <= high)))

    return {
        'ascii_printable_percentage': ratio(printable * 100.0, n),
        'null_byte_count': float(np.count_nonzero(byte_values == 0)),
        'high_entropy_byte_count': float(np.count_nonzero(entropies > cfg['high_entropy_threshold'])),
        'low_entropy_byte_count': float(np.count_nonzero(entropies < cfg['low_entropy_threshold'])),
        'byte_value_range': maximum(byte_values) - minimum(byte_values),
        'byte_value_mean': mean(byte_values),
        'byte_value_median': median(byte_values),
        'byte_value_std_dev': std(byte_values),
        'bigram_probability': ngram_probability(byte_values, 2),
        'trigram_probability': ngram_probability(byte_values, 3),
    }
