"""
Input validation and the error taxonomy.

Usage:
    from bitscope.validation import validate_bits, LengthMismatchError
"""

from .errors import (
    BitscopeError,
    InvalidCharacterError,
    LengthMismatchError,
    IndexOutOfRangeError,
    DivisionByZeroError,
    UnknownOperationError,
    UnknownMetricError,
    InvalidParameterError,
    AlignmentError,
)
from .bits import (
    validate_bits,
    sanitize_bits,
    validate_fill,
    validate_count,
    validate_index,
    validate_range,
)

__all__ = [
    'BitscopeError',
    'InvalidCharacterError',
    'LengthMismatchError',
    'IndexOutOfRangeError',
    'DivisionByZeroError',
    'UnknownOperationError',
    'UnknownMetricError',
    'InvalidParameterError',
    'AlignmentError',
    'validate_bits',
    'sanitize_bits',
    'validate_fill',
    'validate_count',
    'validate_index',
    'validate_range',
]
