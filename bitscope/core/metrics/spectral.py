"""
Spectral Engine
===============

Frequency-domain measures of the byte sequence, from the full DFT
magnitude spectrum |X[k]|, k = 0..n-1 (DC included).

Outputs:
    dominant_period      - n / k* where k* maximises |X[k]| over 0 < k < n/2
    periodicity_strength - |X[k*]| / mean |X|
    spectral_flatness    - geometric mean / arithmetic mean of |X| (+eps)
    spectral_centroid    - sum k |X[k]| / sum |X[k]|, in bin units
    spectral_rolloff     - first k reaching the rolloff fraction of total magnitude, / n
    spectral_flux        - mean L2 distance between spectra of consecutive byte windows
"""

from typing import Dict, Optional

import numpy as np

from bitscope.config import get_config
from bitscope.primitives import dft_magnitudes

from ._input import prepare, ratio


OUTPUTS = [
    'dominant_period',
    'periodicity_strength',
    'spectral_flatness',
    'spectral_centroid',
    'spectral_rolloff',
    'spectral_flux',
]


def _half_band(mags: np.ndarray) -> np.ndarray:
    """|X[k]| for 0 < k < n/2."""
    return mags[1:(len(mags) + 1) // 2]


def dominant_period(mags: np.ndarray) -> float:
    band = _half_band(mags)
    if len(band) == 0 or band.max() <= 0:
        return 0.0
    k = int(np.argmax(band)) + 1
    return len(mags) / k


def periodicity_strength(mags: np.ndarray) -> float:
    band = _half_band(mags)
    if len(band) == 0:
        return 0.0
    return ratio(band.max(), mags.mean())


def spectral_flatness(mags: np.ndarray, eps: float = 1e-10) -> float:
    if len(mags) == 0:
        return 0.0
    arithmetic = mags.mean()
    if arithmetic <= 0:
        return 0.0
    geometric = np.exp(np.mean(np.log(mags + eps)))
    return float(geometric / arithmetic)


def spectral_centroid(mags: np.ndarray) -> float:
    return ratio(np.sum(np.arange(len(mags)) * mags), mags.sum())


def spectral_rolloff(mags: np.ndarray, fraction: float = 0.85) -> float:
    total = mags.sum()
    if len(mags) == 0 or total <= 0:
        return 0.0
    k = int(np.searchsorted(np.cumsum(mags), fraction * total))
    return min(k, len(mags) - 1) / len(mags)


def spectral_flux(byte_values, window: int = 64) -> float:
    n = len(byte_values)
    n_windows = n // window
    if n_windows == 0:
        return 0.0
    values = np.asarray(byte_values, dtype=np.float64)
    flux = 0.0
    for i in range(0, n - 2 * window, window):
        m1 = dft_magnitudes(values[i:i + window])
        m2 = dft_magnitudes(values[i + window:i + 2 * window])
        flux += float(np.sqrt(np.sum((m2 - m1) ** 2)))
    return flux / n_windows


def compute(bits: str, config: Optional[dict] = None) -> Dict[str, float]:
    cfg = (config or get_config())['periodicity']

    _, _, byte_values = prepare(bits)
    mags = dft_magnitudes(byte_values)

    return {
        'dominant_period': dominant_period(mags),
        'periodicity_strength': periodicity_strength(mags),
        'spectral_flatness': spectral_flatness(mags, cfg['flatness_epsilon']),
        'spectral_centroid': spectral_centroid(mags),
        'spectral_rolloff': spectral_rolloff(mags, cfg['rolloff_fraction']),
        'spectral_flux': spectral_flux(byte_values, cfg['flux_window']),
    }
