"""
Arbitrary-Precision Binary Arithmetic
=====================================

Operands are unsigned binary magnitudes of any length. Results carry full
precision and are returned as the minimal-length binary string ('0' for
zero). Fixed-width behaviour (wrap/truncate/pad) belongs to the operation
catalog, not to these functions.

Errors:
    DivisionByZeroError   - divide/modulo by a zero-valued operand
    InvalidParameterError - subtract() with a negative result, negative from_decimal()
"""

from typing import Tuple

from bitscope.validation import (
    DivisionByZeroError,
    InvalidParameterError,
    validate_bits,
)


def to_decimal(bits: str) -> int:
    """Unsigned value of `bits`; the empty string is 0."""
    validate_bits(bits)
    return int(bits, 2) if bits else 0


def from_decimal(value: int) -> str:
    """Minimal binary representation of a non-negative integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError('value', value, 'must be an integer')
    if value < 0:
        raise InvalidParameterError('value', value, 'must be non-negative')
    return format(value, 'b')


def _operands(a: str, b: str) -> Tuple[int, int]:
    validate_bits(a, 'a')
    validate_bits(b, 'b')
    return (int(a, 2) if a else 0), (int(b, 2) if b else 0)


def add(a: str, b: str) -> str:
    x, y = _operands(a, b)
    return from_decimal(x + y)


def subtract(a: str, b: str) -> str:
    x, y = _operands(a, b)
    if y > x:
        raise InvalidParameterError('b', b, f'subtrahend {y} exceeds minuend {x} (unsigned result)')
    return from_decimal(x - y)


def multiply(a: str, b: str) -> str:
    x, y = _operands(a, b)
    return from_decimal(x * y)


def divide(a: str, b: str) -> Tuple[str, str]:
    """Return (quotient, remainder)."""
    x, y = _operands(a, b)
    if y == 0:
        raise DivisionByZeroError('divide')
    q, r = divmod(x, y)
    return from_decimal(q), from_decimal(r)


def modulo(a: str, b: str) -> str:
    x, y = _operands(a, b)
    if y == 0:
        raise DivisionByZeroError('modulo')
    return from_decimal(x % y)


def power(base: str, exponent: str) -> str:
    x, y = _operands(base, exponent)
    return from_decimal(x ** y)


def fit_width(bits: str, width: int) -> str:
    """Keep the low `width` bits, left-padding with '0' when shorter."""
    if width == 0:
        return ''
    if len(bits) > width:
        return bits[-width:]
    return bits.zfill(width)
