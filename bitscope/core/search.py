"""
Pattern Search
==============

Find, count and replace a literal bit pattern.

    find_pattern       every occurrence, overlaps included, as {position, length}
    pattern_frequency  overlapping occurrences / len(bits)
    replace_pattern    left-to-right, non-overlapping replacement and its count
"""

from typing import Dict, List, Tuple

from bitscope.validation import InvalidParameterError, validate_bits


def _validate_pattern(pattern: str, argument: str = 'pattern') -> str:
    validate_bits(pattern, argument)
    if not pattern:
        raise InvalidParameterError(argument, pattern, 'must not be empty')
    return pattern


def find_pattern(bits: str, pattern: str) -> List[Dict[str, int]]:
    validate_bits(bits)
    _validate_pattern(pattern)
    found = []
    i = bits.find(pattern)
    while i != -1:
        found.append({'position': i, 'length': len(pattern)})
        i = bits.find(pattern, i + 1)
    return found


def pattern_frequency(bits: str, pattern: str) -> float:
    occurrences = find_pattern(bits, pattern)
    if not bits:
        return 0.0
    return len(occurrences) / len(bits)


def replace_pattern(bits: str, pattern: str, replacement: str) -> Tuple[str, int]:
    """Replace every non-overlapping occurrence. Returns (new bits, replacements made)."""
    validate_bits(bits)
    _validate_pattern(pattern)
    validate_bits(replacement, 'replacement')
    return bits.replace(pattern, replacement), bits.count(pattern)
