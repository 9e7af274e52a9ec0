"""
Bit-string validation.

Every public transform and metric entry point funnels its inputs through
these checks before doing any work.
"""

import re

from .errors import (
    IndexOutOfRangeError,
    InvalidCharacterError,
    InvalidParameterError,
)


_INVALID = re.compile(r'[^01]')


def validate_bits(bits: str, argument: str = 'bits') -> str:
    """Return `bits` unchanged, or raise InvalidCharacterError at the first bad character."""
    if not isinstance(bits, str):
        raise InvalidParameterError(argument, type(bits).__name__, "expected a str of '0'/'1'")
    match = _INVALID.search(bits)
    if match is not None:
        raise InvalidCharacterError(match.start(), match.group(), argument)
    return bits


def sanitize_bits(text: str) -> str:
    """Drop every character that is not '0' or '1'."""
    return _INVALID.sub('', text)


def validate_fill(fill: str, argument: str = 'fill') -> str:
    if fill not in ('0', '1'):
        raise InvalidParameterError(argument, fill, "must be '0' or '1'")
    return fill


def validate_count(count: int, argument: str = 'count') -> int:
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidParameterError(argument, count, 'must be an integer')
    if count < 0:
        raise InvalidParameterError(argument, count, 'must be >= 0')
    return count


def validate_index(value: int, upper: int, argument: str, lower: int = 0) -> int:
    """Check lower <= value <= upper (inclusive on both ends)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(argument, value, 'must be an integer')
    if value < lower or value > upper:
        raise IndexOutOfRangeError(argument, value, lower, upper)
    return value


def validate_range(start: int, end: int, length: int) -> tuple:
    """Validate a half-open range [start, end) against a string of `length` bits."""
    validate_index(start, length, 'start')
    validate_index(end, length, 'end', lower=start)
    return start, end
