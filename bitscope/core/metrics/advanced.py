"""
Advanced Estimators Engine
==========================

Heuristic dynamical and complexity estimators.

Outputs:
    lyapunov_exponent                - mean ln|x[i] - x[i-1]| over the first bits (zero terms skipped)
    hurst_exponent                   - rescaled-range estimate over the first bytes
    fractal_dimension                - -slope of log(occupied boxes + 1) vs log(scale)
    minimum_description_length       - H(bytes) * nbytes + 8 * unique bytes
    algorithmic_information_content  - LZ77 textual compression ratio
    local_complexity_measure         - mean unique-4-gram ratio over 32-bit windows
    noise_level_estimate             - RMS of first byte differences
    signal_to_noise_ratio            - 10 log10(mean^2 / variance), dB
    predictability_index             - hit rate of the repeat-if-stable predictor
    information_density              - H(bytes) / 8

Notes:
    For binary input every non-zero |x[i] - x[i-1]| is 1, so the Lyapunov
    estimate is identically 0. It is kept as a literal estimator.
"""

from typing import Dict, Optional, Sequence

import numpy as np
from scipy.stats import linregress

from bitscope.config import get_config
from bitscope.primitives import mean, shannon_entropy, variance

from ._input import prepare, ratio
from .entropy import byte_counts, kolmogorov_estimate


OUTPUTS = [
    'lyapunov_exponent',
    'hurst_exponent',
    'fractal_dimension',
    'minimum_description_length',
    'algorithmic_information_content',
    'local_complexity_measure',
    'noise_level_estimate',
    'signal_to_noise_ratio',
    'predictability_index',
    'information_density',
]


def lyapunov_exponent(bit_array, max_bits: int = 1000) -> float:
    x = np.asarray(bit_array[:max_bits], dtype=np.float64)
    if len(x) < 2:
        return 0.0
    d = np.abs(np.diff(x))
    d = d[d > 0]
    return float(np.sum(np.log(d))) / (len(x) - 1)


def hurst_exponent(byte_values, max_bytes: int = 512) -> float:
    """R/S estimate: log(R/S) / log(n). Constant input gives 0.5."""
    y = np.asarray(byte_values[:max_bytes], dtype=np.float64)
    n = len(y)
    if n < 2:
        return 0.0
    s = np.std(y)
    if s == 0:
        return 0.5
    z = np.cumsum(y - y.mean())
    r = z.max() - z.min()
    if r <= 0:
        return 0.0
    return float(np.log(r / s) / np.log(n))


def fractal_dimension(bits: str, scales: Sequence[int] = (2, 4, 8, 16, 32)) -> float:
    n = len(bits)
    if len(scales) < 2:
        return 0.0
    counts = []
    for scale in scales:
        counts.append(sum(1 for i in range(0, n - scale, scale) if '1' in bits[i:i + scale]))
    fit = linregress(np.log(np.asarray(scales, dtype=np.float64)),
                     np.log(np.asarray(counts, dtype=np.float64) + 1.0))
    return -float(fit.slope) + 0.0


def local_complexity(bits: str, window: int = 32, pattern: int = 4) -> float:
    scores = []
    for i in range(0, len(bits) - window + 1, window):
        chunk = bits[i:i + window]
        grams = {chunk[j:j + pattern] for j in range(window - pattern + 1)}
        scores.append(len(grams) / (window - pattern + 1))
    return mean(scores)


def noise_level(byte_values) -> float:
    y = np.asarray(byte_values, dtype=np.float64)
    if len(y) < 2:
        return 0.0
    return float(np.sqrt(np.mean(np.diff(y) ** 2)))


def signal_to_noise(byte_values) -> float:
    m = mean(byte_values)
    v = variance(byte_values)
    if v <= 0 or m == 0:
        return 0.0
    return float(10.0 * np.log10(m * m / v))


def predictability(bits: str) -> float:
    """Predict bit i as bit i-1 when bits i-2, i-1 agree, its complement otherwise."""
    n = len(bits)
    if n < 3:
        return 0.0
    correct = 0
    for i in range(2, n):
        if bits[i - 1] == bits[i - 2]:
            predicted = bits[i - 1]
        else:
            predicted = '0' if bits[i - 1] == '1' else '1'
        correct += predicted == bits[i]
    return correct / (n - 2)


def compute(bits: str, config: Optional[dict] = None) -> Dict[str, float]:
    cfg = config or get_config()
    adv = cfg['advanced']
    comp = cfg['compression']

    bits, bit_array, byte_values = prepare(bits)
    counts = byte_counts(byte_values)
    h = shannon_entropy(counts)
    unique = int(np.count_nonzero(counts))
    aic = kolmogorov_estimate(
        bits, comp['lz77_window'], comp['lz77_max_match'], comp['lz77_min_match'],
    )

    return {
        'lyapunov_exponent': lyapunov_exponent(bit_array, adv['lyapunov_max_bits']),
        'hurst_exponent': hurst_exponent(byte_values, adv['hurst_max_bytes']),
        'fractal_dimension': fractal_dimension(bits, adv['fractal_scales']),
        'minimum_description_length': h * len(byte_values) + unique * 8.0,
        'algorithmic_information_content': aic,
        'local_complexity_measure': local_complexity(
            bits, adv['local_complexity_window'], adv['local_complexity_pattern'],
        ),
        'noise_level_estimate': noise_level(byte_values),
        'signal_to_noise_ratio': signal_to_noise(byte_values),
        'predictability_index': predictability(bits),
        'information_density': ratio(h, 8),
    }
