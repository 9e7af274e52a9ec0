"""
Advanced Bit Operations
=======================

Reversal, reflected binary Gray code, byte-order swap, range swap,
population count and transition count.

swap_endianness requires len(bits) % 8 == 0 and raises AlignmentError
otherwise; pad first with align_to_bytes if that is what you want.
"""

from bitscope.validation import (
    AlignmentError,
    InvalidParameterError,
    validate_bits,
    validate_range,
)


def reverse_bits(bits: str) -> str:
    validate_bits(bits)
    return bits[::-1]


def binary_to_gray(bits: str) -> str:
    """gray[0] = b[0]; gray[i] = b[i] XOR b[i-1]."""
    validate_bits(bits)
    if not bits:
        return ''
    out = [bits[0]]
    for prev, cur in zip(bits, bits[1:]):
        out.append('0' if prev == cur else '1')
    return ''.join(out)


def gray_to_binary(gray: str) -> str:
    """b[0] = g[0]; b[i] = b[i-1] XOR g[i]."""
    validate_bits(gray)
    if not gray:
        return ''
    out = [gray[0]]
    for g in gray[1:]:
        out.append(out[-1] if g == '0' else ('1' if out[-1] == '0' else '0'))
    return ''.join(out)


def swap_endianness(bits: str) -> str:
    """Reverse byte order, keeping bit order within each byte."""
    validate_bits(bits)
    if len(bits) % 8 != 0:
        raise AlignmentError('swap_endianness', len(bits), 8)
    chunks = [bits[i:i + 8] for i in range(0, len(bits), 8)]
    return ''.join(reversed(chunks))


def swap_bits(bits: str, start1: int, end1: int, start2: int, end2: int) -> str:
    """
    Exchange two non-overlapping ranges [start1, end1) and [start2, end2).

    The ranges may differ in length; the bits between them are preserved.
    """
    validate_bits(bits)
    validate_range(start1, end1, len(bits))
    validate_range(start2, end2, len(bits))
    if start2 < start1:
        start1, end1, start2, end2 = start2, end2, start1, end1
    if end1 > start2:
        raise InvalidParameterError(
            'ranges', (start1, end1, start2, end2), 'swap ranges must not overlap'
        )
    return (
        bits[:start1]
        + bits[start2:end2]
        + bits[end1:start2]
        + bits[start1:end1]
        + bits[end2:]
    )


def population_count(bits: str) -> int:
    validate_bits(bits)
    return bits.count('1')


def count_transitions(bits: str) -> int:
    """Number of adjacent positions i where bits[i] != bits[i+1]."""
    validate_bits(bits)
    return sum(1 for a, b in zip(bits, bits[1:]) if a != b)
