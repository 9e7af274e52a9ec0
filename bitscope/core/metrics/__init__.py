"""
bitscope Metric Engines.

One module per metric group, each exposing OUTPUTS and
compute(bits, ...) -> Dict[str, float]:
    basic, entropy, randomness, runs, patterns, transitions,
    periodicity, spectral, partitions, advanced, byte_level, ideality

Use bitscope.core.registry to compute by metric name or all at once.
"""

from . import (
    basic,
    entropy,
    randomness,
    runs,
    patterns,
    transitions,
    periodicity,
    spectral,
    partitions,
    advanced,
    byte_level,
    ideality,
)
from .partitions import Partition
from .ideality import IdealityResult, calculate_ideality, top_ideality_windows

__all__ = [
    'basic',
    'entropy',
    'randomness',
    'runs',
    'patterns',
    'transitions',
    'periodicity',
    'spectral',
    'partitions',
    'advanced',
    'byte_level',
    'ideality',
    'Partition',
    'IdealityResult',
    'calculate_ideality',
    'top_ideality_windows',
]
