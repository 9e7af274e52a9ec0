"""
Spectral Primitives.

Magnitude spectrum of a real sequence. numpy.fft gives the same values as
the direct O(n^2) DFT  X[k] = sum_t x[t] exp(-2 pi i k t / n)  up to
floating-point rounding.
"""

import numpy as np


def dft_magnitudes(values) -> np.ndarray:
    """|X[k]| for k = 0..n-1 (full, two-sided spectrum)."""
    x = np.asarray(values, dtype=np.float64).ravel()
    if len(x) == 0:
        return np.zeros(0)
    return np.abs(np.fft.fft(x))


def direct_dft_magnitudes(values) -> np.ndarray:
    """Reference O(n^2) DFT. Only used to cross-check dft_magnitudes."""
    x = np.asarray(values, dtype=np.float64).ravel()
    n = len(x)
    if n == 0:
        return np.zeros(0)
    t = np.arange(n)
    angles = -2.0 * np.pi * np.outer(t, t) / n
    real = (x * np.cos(angles)).sum(axis=1)
    imag = (x * np.sin(angles)).sum(axis=1)
    return np.sqrt(real ** 2 + imag ** 2)
