"""
Logic Gates
===========

Bitwise AND, OR, XOR, NAND, NOR, XNOR over two equal-length bit-strings,
and NOT over one.

Operands of different lengths are rejected with LengthMismatchError; no
implicit padding or truncation is ever applied.
"""

from typing import Callable, Dict

from bitscope.validation import LengthMismatchError, UnknownOperationError, validate_bits


def _to_int(bits: str) -> int:
    return int(bits, 2) if bits else 0


def _from_int(value: int, width: int) -> str:
    if width == 0:
        return ''
    return format(value & ((1 << width) - 1), f'0{width}b')


def _binary(name: str, a: str, b: str, fn: Callable[[int, int], int]) -> str:
    validate_bits(a, 'a')
    validate_bits(b, 'b')
    if len(a) != len(b):
        raise LengthMismatchError(name, len(a), len(b))
    return _from_int(fn(_to_int(a), _to_int(b)), len(a))


def bit_not(a: str) -> str:
    validate_bits(a, 'a')
    return a.translate(str.maketrans('01', '10'))


def bit_and(a: str, b: str) -> str:
    return _binary('AND', a, b, lambda x, y: x & y)


def bit_or(a: str, b: str) -> str:
    return _binary('OR', a, b, lambda x, y: x | y)


def bit_xor(a: str, b: str) -> str:
    return _binary('XOR', a, b, lambda x, y: x ^ y)


def bit_nand(a: str, b: str) -> str:
    return _binary('NAND', a, b, lambda x, y: ~(x & y))


def bit_nor(a: str, b: str) -> str:
    return _binary('NOR', a, b, lambda x, y: ~(x | y))


def bit_xnor(a: str, b: str) -> str:
    return _binary('XNOR', a, b, lambda x, y: ~(x ^ y))


GATES: Dict[str, Callable[[str, str], str]] = {
    'AND': bit_and,
    'OR': bit_or,
    'XOR': bit_xor,
    'NAND': bit_nand,
    'NOR': bit_nor,
    'XNOR': bit_xnor,
}

# Operand-B fill used by the operation catalog when no mask is supplied.
DEFAULT_MASK_BIT = {
    'AND': '1',
    'OR': '0',
    'XOR': '0',
    'NAND': '1',
    'NOR': '0',
    'XNOR': '0',
}


def apply_gate(gate: str, a: str, b: str) -> str:
    """Apply a named two-input gate."""
    key = gate.upper()
    if key not in GATES:
        raise UnknownOperationError(gate, GATES.keys())
    return GATES[key](a, b)
