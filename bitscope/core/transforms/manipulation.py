"""
Bit Manipulation
================

Splice-style edits. Ranges are half-open [start, end). Every function
returns a new string; inputs are never modified.

move_bits destination semantics: `dest` indexes the string AFTER the
moved range has been removed, so valid destinations are
0..len(bits) - (end - start).
"""

from bitscope.validation import (
    validate_bits,
    validate_count,
    validate_index,
    validate_range,
)

from .logic import apply_gate


def insert_bits(bits: str, position: int, insertion: str) -> str:
    validate_bits(bits)
    validate_bits(insertion, 'insertion')
    validate_index(position, len(bits), 'position')
    return bits[:position] + insertion + bits[position:]


def delete_bits(bits: str, start: int, end: int) -> str:
    validate_bits(bits)
    validate_range(start, end, len(bits))
    return bits[:start] + bits[end:]


def move_bits(bits: str, start: int, end: int, dest: int) -> str:
    validate_bits(bits)
    validate_range(start, end, len(bits))
    segment = bits[start:end]
    remaining = bits[:start] + bits[end:]
    validate_index(dest, len(remaining), 'dest')
    return remaining[:dest] + segment + remaining[dest:]


def peek_bits(bits: str, start: int, end: int) -> str:
    """Read-only slice [start, end)."""
    validate_bits(bits)
    validate_range(start, end, len(bits))
    return bits[start:end]


def replace_bits(bits: str, start: int, replacement: str) -> str:
    """Overwrite from `start`; a replacement running past the end extends the string."""
    validate_bits(bits)
    validate_bits(replacement, 'replacement')
    validate_index(start, len(bits), 'start')
    return bits[:start] + replacement + bits[start + len(replacement):]


def truncate_bits(bits: str, length: int) -> str:
    """Keep the first `length` bits (identity when length >= len(bits))."""
    validate_bits(bits)
    validate_count(length, 'length')
    return bits[:length]


def append_bits(bits: str, suffix: str) -> str:
    validate_bits(bits)
    validate_bits(suffix, 'suffix')
    return bits + suffix


def apply_mask(bits: str, mask: str, op: str = 'AND') -> str:
    """Apply a two-input gate with `mask` as operand B."""
    return apply_gate(op, bits, mask)
