"""Shared input handling for metric engines."""

import numpy as np

from bitscope.primitives import bits_to_array, bits_to_byte_values
from bitscope.validation import validate_bits


def prepare(bits: str):
    """Validate and return (bits, bit_array, byte_values)."""
    validate_bits(bits)
    return bits, bits_to_array(bits), bits_to_byte_values(bits)


def ratio(numerator, denominator) -> float:
    """numerator / denominator, or 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return float(numerator) / float(denominator)


def finite(value) -> float:
    value = float(value)
    if not np.isfinite(value):
        return 0.0
    return value + 0.0  # normalise -0.0
