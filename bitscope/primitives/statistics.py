"""Inline basic statistics over finite 1-D samples. Population (biased) moments throughout."""

from scipy.stats import kurtosis as _scipy_kurtosis, skew as _scipy_skew
import numpy as np


def _clean(y):
    y = np.asarray(y, dtype=np.float64).ravel()
    return y[np.isfinite(y)]


def mean(y):
    y = _clean(y)
    if len(y) == 0:
        return 0.0
    return float(np.mean(y))


def variance(y):
    """Population variance; 0 for empty input."""
    y = _clean(y)
    if len(y) == 0:
        return 0.0
    return float(np.var(y))


def std(y):
    return float(np.sqrt(variance(y)))


def median(y):
    y = _clean(y)
    if len(y) == 0:
        return 0.0
    return float(np.median(y))


def skewness(y):
    """Population skewness. Constant or empty samples give 0."""
    y = _clean(y)
    if len(y) < 2 or np.std(y) == 0:
        return 0.0
    return float(_scipy_skew(y, bias=True))


def kurtosis(y, fisher=True):
    """Population kurtosis; fisher=True (default) returns excess kurtosis. Constant samples give 0."""
    y = _clean(y)
    if len(y) < 2 or np.std(y) == 0:
        return 0.0
    return float(_scipy_kurtosis(y, fisher=fisher, bias=True))


def minimum(y):
    y = _clean(y)
    return float(np.min(y)) if len(y) else 0.0


def maximum(y):
    y = _clean(y)
    return float(np.max(y)) if len(y) else 0.0
