"""
Random bit-string generation.
"""

from numbers import Real
from typing import Optional

import numpy as np

from bitscope.validation import InvalidParameterError, validate_count


def generate_random(length: int, probability: float = 0.5, seed: Optional[int] = None) -> str:
    """
    Independent bits, each '1' with `probability`.

    Args:
        length: number of bits
        probability: P(bit == '1'), in [0, 1]
        seed: seed for numpy's default_rng (None draws fresh entropy)
    """
    validate_count(length, 'length')
    if isinstance(probability, bool) or not isinstance(probability, Real):
        raise InvalidParameterError('probability', probability, 'must be a number')
    if not 0.0 <= probability <= 1.0:
        raise InvalidParameterError('probability', probability, 'must be in [0, 1]')
    rng = np.random.default_rng(seed)
    ones = rng.random(length) < probability
    return (ones.astype(np.uint8) + ord('0')).tobytes().decode('ascii')
