"""
bitscope Primitives

Atomic numeric helpers, numpy in, numbers out:
- conversion: bits_to_array, bits_to_byte_values, byte_values_to_bits, run_lengths, windows
- information: shannon_entropy, renyi_entropy, min_entropy, collision_entropy, hartley_entropy
- statistics: mean, variance, std, median, skewness, kurtosis, minimum, maximum
- spectral: dft_magnitudes, direct_dft_magnitudes
"""

from .conversion import (
    bits_to_array,
    bits_to_byte_values,
    byte_values_to_bits,
    run_lengths,
    windows,
)
from .information import (
    shannon_entropy,
    renyi_entropy,
    min_entropy,
    collision_entropy,
    hartley_entropy,
    symbol_counts,
    sequence_entropy,
)
from .statistics import (
    mean,
    variance,
    std,
    median,
    skewness,
    kurtosis,
    minimum,
    maximum,
)
from .spectral import dft_magnitudes, direct_dft_magnitudes

__all__ = [
    'bits_to_array',
    'bits_to_byte_values',
    'byte_values_to_bits',
    'run_lengths',
    'windows',
    'shannon_entropy',
    'renyi_entropy',
    'min_entropy',
    'collision_entropy',
    'hartley_entropy',
    'symbol_counts',
    'sequence_entropy',
    'mean',
    'variance',
    'std',
    'median',
    'skewness',
    'kurtosis',
    'minimum',
    'maximum',
    'dft_magnitudes',
    'direct_dft_magnitudes',
]
