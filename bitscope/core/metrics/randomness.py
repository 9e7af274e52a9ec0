"""
Randomness Test Engine
======================

NIST-style statistics. Each output is a normalised test statistic, not a
pass/fail verdict: larger |z| means further from an ideal random source.

Outputs:
    chi_squared        - Pearson chi^2 of byte counts vs uniform (255 dof)
    frequency_test     - monobit |ones - n/2| / sqrt(n/4)
    runs_test          - Wald-Wolfowitz |runs - mu| / sigma
    longest_run_test   - longest run / log2(n)
    serial_correlation - (sum x[i] x[i+1] - p^2 (n-1)) / sqrt(p^2 (n-1))
    birthday_spacings  - fraction of bytes whose value was already seen
"""

from math import log2, sqrt
from typing import Dict

import numpy as np

from bitscope.primitives import run_lengths

from ._input import prepare, ratio


OUTPUTS = [
    'chi_squared',
    'frequency_test',
    'runs_test',
    'longest_run_test',
    'serial_correlation',
    'birthday_spacings',
]


def chi_squared(byte_values) -> float:
    n = len(byte_values)
    if n == 0:
        return 0.0
    observed = np.bincount(np.asarray(byte_values, dtype=np.int64), minlength=256)
    expected = n / 256.0
    return float(np.sum((observed - expected) ** 2) / expected)


def frequency_test(bits: str) -> float:
    n = len(bits)
    if n == 0:
        return 0.0
    ones = bits.count('1')
    return abs(ones - n / 2.0) / sqrt(n / 4.0)


def runs_test(bits: str) -> float:
    n = len(bits)
    if n < 2:
        return 0.0
    n1 = bits.count('1')
    n0 = n - n1
    runs = 1 + sum(1 for a, b in zip(bits, bits[1:]) if a != b)
    mu = 2.0 * n0 * n1 / n + 1.0
    var = (mu - 1.0) * (mu - 2.0) / (n - 1)
    if var <= 0:
        return 0.0
    return abs(runs - mu) / sqrt(var)


def longest_run_test(bits: str) -> float:
    n = len(bits)
    if n < 2:
        return 0.0
    longest = max(run_lengths(bits, '0') + run_lengths(bits, '1'))
    return longest / log2(n)


def serial_correlation(bit_array) -> float:
    n = len(bit_array)
    if n < 2:
        return 0.0
    x = np.asarray(bit_array, dtype=np.float64)
    p = x.mean()
    expected = p * p * (n - 1)
    if expected == 0:
        return 0.0
    observed = float(np.dot(x[:-1], x[1:]))
    return (observed - expected) / sqrt(expected)


def birthday_spacings(byte_values) -> float:
    seen = set()
    repeats = 0
    for v in byte_values:
        v = int(v)
        if v in seen:
            repeats += 1
        seen.add(v)
    return ratio(repeats, len(byte_values))


def compute(bits: str) -> Dict[str, float]:
    bits, bit_array, byte_values = prepare(bits)
    return {
        'chi_squared': chi_squared(byte_values),
        'frequency_test': frequency_test(bits),
        'runs_test': runs_test(bits),
        'longest_run_test': longest_run_test(bits),
        'serial_correlation': serial_correlation(bit_array),
        'birthday_spacings': birthday_spacings(byte_values),
    }
