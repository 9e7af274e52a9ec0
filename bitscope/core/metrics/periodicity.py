"""
Periodicity Engine
==================

Time-domain correlation structure.

Outputs:
    autocorrelation_lag_{1,8,16}   - (sum x[i] x[i+k] - p^2 (n-k)) / sqrt(p^2 (n-k)),
                                     normalised against the observed bit bias p
    cross_correlation_score        - fraction of equal bits between first and second halves
    serial_correlation_coefficient - lag-1 autocorrelation (same normalisation)
    durbin_watson_statistic        - sum (b[t] - b[t-1])^2 / sum b[t]^2 over bytes
"""

from math import sqrt
from typing import Dict

import numpy as np

from ._input import prepare, ratio


AUTOCORRELATION_LAGS = (1, 8, 16)

OUTPUTS = [f'autocorrelation_lag_{lag}' for lag in AUTOCORRELATION_LAGS] + [
    'cross_correlation_score',
    'serial_correlation_coefficient',
    'durbin_watson_statistic',
]


def autocorrelation(bit_array, lag: int) -> float:
    n = len(bit_array)
    if lag < 1 or lag >= n:
        return 0.0
    x = np.asarray(bit_array, dtype=np.float64)
    p = x.mean()
    overlap = n - lag
    expected = p * p * overlap
    if expected == 0:
        return 0.0
    observed = float(np.dot(x[:overlap], x[lag:]))
    return (observed - expected) / sqrt(expected)


def cross_correlation(bits: str) -> float:
    half = len(bits) // 2
    if half == 0:
        return 0.0
    first, second = bits[:half], bits[half:2 * half]
    return sum(1 for a, b in zip(first, second) if a == b) / half


def durbin_watson(byte_values) -> float:
    b = np.asarray(byte_values, dtype=np.float64)
    if len(b) < 2:
        return 0.0
    return ratio(np.sum(np.diff(b) ** 2), np.sum(b ** 2))


def compute(bits: str) -> Dict[str, float]:
    bits, bit_array, byte_values = prepare(bits)

    result = {
        f'autocorrelation_lag_{lag}': autocorrelation(bit_array, lag)
        for lag in AUTOCORRELATION_LAGS
    }
    result['cross_correlation_score'] = cross_correlation(bits)
    result['serial_correlation_coefficient'] = autocorrelation(bit_array, 1)
    result['durbin_watson_statistic'] = durbin_watson(byte_values)
    return result
