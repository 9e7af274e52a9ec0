"""
Packing and Alignment.

pad_left/pad_right are no-ops when target_length <= len(bits).
align_to_* return (bits, added) so callers can report the padding.
"""

from typing import Tuple

from bitscope.validation import (
    InvalidParameterError,
    validate_bits,
    validate_count,
    validate_fill,
)


def pad_left(bits: str, target_length: int, fill: str = '0') -> str:
    validate_bits(bits)
    validate_count(target_length, 'target_length')
    validate_fill(fill)
    if target_length <= len(bits):
        return bits
    return fill * (target_length - len(bits)) + bits


def pad_right(bits: str, target_length: int, fill: str = '0') -> str:
    validate_bits(bits)
    validate_count(target_length, 'target_length')
    validate_fill(fill)
    if target_length <= len(bits):
        return bits
    return bits + fill * (target_length - len(bits))


def align_to(bits: str, multiple: int, fill: str = '0') -> Tuple[str, int]:
    """Right-pad to the next multiple of `multiple`."""
    if isinstance(multiple, bool) or not isinstance(multiple, int) or multiple < 1:
        raise InvalidParameterError('multiple', multiple, 'must be a positive integer')
    validate_bits(bits)
    validate_fill(fill)
    added = (-len(bits)) % multiple
    return bits + fill * added, added


def align_to_bytes(bits: str, fill: str = '0') -> Tuple[str, int]:
    return align_to(bits, 8, fill)


def align_to_nibbles(bits: str, fill: str = '0') -> Tuple[str, int]:
    return align_to(bits, 4, fill)
