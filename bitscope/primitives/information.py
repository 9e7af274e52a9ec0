"""
Information Primitives.

Entropies over discrete symbol counts. Counts may come from a Counter,
numpy.unique, or any iterable of non-negative integers.
"""

from collections import Counter
from typing import Iterable

import numpy as np


def _probabilities(counts) -> np.ndarray:
    c = np.asarray(list(counts), dtype=np.float64)
    c = c[c > 0]
    total = c.sum()
    if total <= 0:
        return np.zeros(0)
    return c / total


def shannon_entropy(counts) -> float:
    """-sum p log2 p. Empty or single-symbol distributions give 0."""
    p = _probabilities(counts)
    if len(p) <= 1:
        return 0.0
    return float(-np.sum(p * np.log2(p)))


def renyi_entropy(counts, alpha: float) -> float:
    """
    Renyi entropy of order alpha (bits).

    alpha -> 1 is Shannon, alpha = inf is min-entropy, alpha = 0 is Hartley.
    """
    p = _probabilities(counts)
    if len(p) <= 1:
        return 0.0
    if alpha == 1:
        return shannon_entropy(counts)
    if np.isinf(alpha):
        return float(-np.log2(p.max()))
    return float(np.log2(np.sum(p ** alpha)) / (1.0 - alpha))


def min_entropy(counts) -> float:
    p = _probabilities(counts)
    if len(p) == 0:
        return 0.0
    return float(max(0.0, -np.log2(p.max())))


def collision_entropy(counts) -> float:
    return renyi_entropy(counts, 2.0)


def hartley_entropy(counts) -> float:
    k = len(_probabilities(counts))
    return float(np.log2(k)) if k > 1 else 0.0


def symbol_counts(symbols: Iterable) -> Counter:
    """Counter over hashable symbols, preserving first-seen order for ties."""
    return Counter(symbols)


def sequence_entropy(symbols: Iterable) -> float:
    return shannon_entropy(symbol_counts(symbols).values())
