"""
Shifts and Rotations
====================

Logical shifts fill vacated positions with '0'. Arithmetic right shift
replicates the leftmost (sign) bit; arithmetic left shift is identical to
logical left shift. Rotations are circular, so `count` is taken modulo the
length. Non-circular shifts by `count >= len(bits)` yield all fill bits.
"""

from bitscope.validation import validate_bits, validate_count


def _prepare(bits: str, count: int):
    validate_bits(bits)
    validate_count(count)
    return len(bits)


def logical_shift_left(bits: str, count: int = 1) -> str:
    n = _prepare(bits, count)
    if count >= n:
        return '0' * n
    return bits[count:] + '0' * count


def logical_shift_right(bits: str, count: int = 1) -> str:
    n = _prepare(bits, count)
    if count >= n:
        return '0' * n
    return '0' * count + bits[:n - count]


def arithmetic_shift_left(bits: str, count: int = 1) -> str:
    return logical_shift_left(bits, count)


def arithmetic_shift_right(bits: str, count: int = 1) -> str:
    n = _prepare(bits, count)
    if n == 0:
        return ''
    sign = bits[0]
    if count >= n:
        return sign * n
    return sign * count + bits[:n - count]


def rotate_left(bits: str, count: int = 1) -> str:
    n = _prepare(bits, count)
    if n == 0:
        return ''
    k = count % n
    return bits[k:] + bits[:k]


def rotate_right(bits: str, count: int = 1) -> str:
    n = _prepare(bits, count)
    if n == 0:
        return ''
    k = count % n
    if k == 0:
        return bits
    return bits[-k:] + bits[:-k]
