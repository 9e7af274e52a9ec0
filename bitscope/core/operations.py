"""
Operation Catalog
=================

A closed set of named bit-string operations, each with default
parameters and a budget cost. apply_operation() is the single entry point
used by the pipeline runner; it never raises, failures come back in the
OperationResult.

Parameters (all optional, defaults in brackets):
    gates         mask [fill of the gate's identity bit, len(bits)]
    shifts        count [1]
    INSERT        position [0], bits ['']
    DELETE        start [0], count [1] or end
    REPLACE       start [0], bits ['']
    MOVE          source [0], count [1], dest [0]  (dest after removal)
    TRUNCATE      count [len(bits)]
    APPEND        bits ['']
    PEEK          start [0], end [len(bits)]
    PAD           alignment [8], value ['0']
    PAD_LEFT/RIGHT count [len(bits) + 8], value ['0']
    arithmetic    value ['1'; '10' for POW]
    SWAP          start [0], end [len/2]; second range follows the first
    line codes    direction ['encode' | 'decode']

Catalog arithmetic is width-preserving: ADD/MUL/POW keep the low
len(bits) bits, SUB wraps modulo 2**len(bits), DIV/MOD left-pad.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from bitscope.validation import (
    BitscopeError,
    InvalidParameterError,
    UnknownOperationError,
    validate_bits,
    validate_count,
    validate_fill,
    validate_index,
    validate_range,
)

from . import transforms as t
from .transforms.logic import DEFAULT_MASK_BIT

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    NOT = 'NOT'
    AND = 'AND'
    OR = 'OR'
    XOR = 'XOR'
    NAND = 'NAND'
    NOR = 'NOR'
    XNOR = 'XNOR'
    SHL = 'SHL'
    SHR = 'SHR'
    ASHL = 'ASHL'
    ASHR = 'ASHR'
    ROL = 'ROL'
    ROR = 'ROR'
    INSERT = 'INSERT'
    DELETE = 'DELETE'
    REPLACE = 'REPLACE'
    MOVE = 'MOVE'
    TRUNCATE = 'TRUNCATE'
    APPEND = 'APPEND'
    PEEK = 'PEEK'
    PAD = 'PAD'
    PAD_LEFT = 'PAD_LEFT'
    PAD_RIGHT = 'PAD_RIGHT'
    GRAY = 'GRAY'
    ENDIAN = 'ENDIAN'
    REVERSE = 'REVERSE'
    SWAP = 'SWAP'
    ADD = 'ADD'
    SUB = 'SUB'
    MUL = 'MUL'
    DIV = 'DIV'
    MOD = 'MOD'
    POW = 'POW'
    MANCHESTER = 'MANCHESTER'
    DIFFERENTIAL = 'DIFFERENTIAL'
    NRZI = 'NRZI'

    @classmethod
    def parse(cls, name: Union[str, 'Operation']) -> 'Operation':
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).upper())
        except ValueError:
            raise UnknownOperationError(str(name), [op.value for op in cls]) from None


OPERATION_COSTS: Dict[Operation, int] = {
    Operation.NOT: 1,
    Operation.AND: 1, Operation.OR: 1, Operation.XOR: 1,
    Operation.NAND: 2, Operation.NOR: 2, Operation.XNOR: 2,
    Operation.SHL: 1, Operation.SHR: 1, Operation.ASHL: 1, Operation.ASHR: 1,
    Operation.ROL: 1, Operation.ROR: 1,
    Operation.INSERT: 2, Operation.DELETE: 2, Operation.REPLACE: 2,
    Operation.MOVE: 3, Operation.TRUNCATE: 1, Operation.APPEND: 1, Operation.PEEK: 1,
    Operation.PAD: 1, Operation.PAD_LEFT: 1, Operation.PAD_RIGHT: 1,
    Operation.GRAY: 2, Operation.ENDIAN: 2, Operation.REVERSE: 1, Operation.SWAP: 2,
    Operation.ADD: 3, Operation.SUB: 3,
    Operation.MUL: 4, Operation.DIV: 4, Operation.MOD: 4, Operation.POW: 5,
    Operation.MANCHESTER: 2, Operation.DIFFERENTIAL: 2, Operation.NRZI: 2,
}


@dataclass
class OperationResult:
    """Outcome of one catalog operation. On failure `bits` is the unchanged input."""
    operation: str
    bits: str
    params: Dict[str, Any] = field(default_factory=dict)
    error: Optional[BitscopeError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> str:
        """Return the resulting bits, or re-raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.bits


# =============================================================================
# Parameter helpers
# =============================================================================

def _fill(params: dict) -> str:
    return validate_fill(str(params.get('value', '0')))


def _direction(params: dict) -> str:
    direction = params.get('direction', 'encode')
    if direction not in ('encode', 'decode'):
        raise InvalidParameterError('direction', direction, "must be 'encode' or 'decode'")
    return direction


def _value(params: dict, default: str = '1') -> int:
    value = validate_bits(str(params.get('value', default)), 'value')
    return int(value, 2) if value else 0


def _width(value: int, width: int) -> str:
    """Low `width` bits of a non-negative integer, zero-padded."""
    if width == 0:
        return ''
    return format(value % (1 << width), f'0{width}b')


# =============================================================================
# Implementations (bits, params) -> bits
# =============================================================================

def _gate(op: Operation) -> Callable[[str, dict], str]:
    def impl(bits: str, params: dict) -> str:
        mask = params.get('mask') or DEFAULT_MASK_BIT[op.value] * len(bits)
        return t.apply_gate(op.value, bits, mask)
    return impl


def _delete(bits: str, p: dict) -> str:
    start = validate_index(p.get('start', 0), len(bits), 'start')
    end = p['end'] if 'end' in p else start + validate_count(p.get('count', 1))
    return t.delete_bits(bits, start, end)


def _move(bits: str, p: dict) -> str:
    source = validate_index(p.get('source', 0), len(bits), 'source')
    return t.move_bits(bits, source, source + validate_count(p.get('count', 1)), p.get('dest', 0))


def _pad(bits: str, p: dict) -> str:
    return t.align_to(bits, p.get('alignment', 8), _fill(p))[0]


def _swap(bits: str, p: dict) -> str:
    n = len(bits)
    start1 = p.get('start', 0)
    end1 = p.get('end', n // 2)
    validate_range(start1, end1, n)
    end2 = min(end1 + (end1 - start1), n)
    return t.swap_bits(bits, start1, end1, end1, end2)


def _gray(bits: str, p: dict) -> str:
    if _direction(p) == 'decode':
        return t.gray_to_binary(bits)
    return t.binary_to_gray(bits)


def _line_code(encode: Callable[[str], str], decode: Callable[[str], str]):
    def impl(bits: str, p: dict) -> str:
        return decode(bits) if _direction(p) == 'decode' else encode(bits)
    return impl


def _add(bits: str, p: dict) -> str:
    return t.fit_width(t.add(bits, str(p.get('value', '1'))), len(bits))


def _sub(bits: str, p: dict) -> str:
    return _width(t.to_decimal(bits) - _value(p), len(bits))


def _mul(bits: str, p: dict) -> str:
    return t.fit_width(t.multiply(bits, str(p.get('value', '1'))), len(bits))


def _div(bits: str, p: dict) -> str:
    quotient, _ = t.divide(bits, str(p.get('value', '1')))
    return t.fit_width(quotient, len(bits))


def _mod(bits: str, p: dict) -> str:
    return t.fit_width(t.modulo(bits, str(p.get('value', '1'))), len(bits))


def _pow(bits: str, p: dict) -> str:
    # pow(x, e, 2**n) is the low n bits of x**e
    if not bits:
        return ''
    return _width(pow(t.to_decimal(bits), _value(p, '10'), 1 << len(bits)), len(bits))


_IMPLEMENTATIONS: Dict[Operation, Callable[[str, dict], str]] = {
    Operation.NOT: lambda b, p: t.bit_not(b),
    Operation.AND: _gate(Operation.AND),
    Operation.OR: _gate(Operation.OR),
    Operation.XOR: _gate(Operation.XOR),
    Operation.NAND: _gate(Operation.NAND),
    Operation.NOR: _gate(Operation.NOR),
    Operation.XNOR: _gate(Operation.XNOR),
    Operation.SHL: lambda b, p: t.logical_shift_left(b, p.get('count', 1)),
    Operation.SHR: lambda b, p: t.logical_shift_right(b, p.get('count', 1)),
    Operation.ASHL: lambda b, p: t.arithmetic_shift_left(b, p.get('count', 1)),
    Operation.ASHR: lambda b, p: t.arithmetic_shift_right(b, p.get('count', 1)),
    Operation.ROL: lambda b, p: t.rotate_left(b, p.get('count', 1)),
    Operation.ROR: lambda b, p: t.rotate_right(b, p.get('count', 1)),
    Operation.INSERT: lambda b, p: t.insert_bits(b, p.get('position', 0), p.get('bits', '')),
    Operation.DELETE: _delete,
    Operation.REPLACE: lambda b, p: t.replace_bits(b, p.get('start', 0), p.get('bits', '')),
    Operation.MOVE: _move,
    Operation.TRUNCATE: lambda b, p: t.truncate_bits(b, p.get('count', len(b))),
    Operation.APPEND: lambda b, p: t.append_bits(b, p.get('bits', '')),
    Operation.PEEK: lambda b, p: t.peek_bits(b, p.get('start', 0), p.get('end', len(b))),
    Operation.PAD: _pad,
    Operation.PAD_LEFT: lambda b, p: t.pad_left(b, p.get('count', len(b) + 8), _fill(p)),
    Operation.PAD_RIGHT: lambda b, p: t.pad_right(b, p.get('count', len(b) + 8), _fill(p)),
    Operation.GRAY: _gray,
    Operation.ENDIAN: lambda b, p: t.swap_endianness(b),
    Operation.REVERSE: lambda b, p: t.reverse_bits(b),
    Operation.SWAP: _swap,
    Operation.ADD: _add,
    Operation.SUB: _sub,
    Operation.MUL: _mul,
    Operation.DIV: _div,
    Operation.MOD: _mod,
    Operation.POW: _pow,
    Operation.MANCHESTER: _line_code(t.manchester_encode, t.manchester_decode),
    Operation.DIFFERENTIAL: _line_code(t.differential_encode, t.differential_decode),
    Operation.NRZI: _line_code(t.nrzi_encode, t.nrzi_decode),
}

_missing = set(Operation) - set(_IMPLEMENTATIONS) | set(Operation) - set(OPERATION_COSTS)
if _missing:
    raise RuntimeError(f"Operations without implementation or cost: {sorted(op.value for op in _missing)}")


# =============================================================================
# Public API
# =============================================================================

def list_operations() -> List[str]:
    return [op.value for op in Operation]


def operation_cost(name: Union[str, Operation]) -> int:
    """Budget cost of an operation. Raises UnknownOperationError."""
    return OPERATION_COSTS[Operation.parse(name)]


def apply_operation(name: Union[str, Operation], bits: str,
                    params: Optional[Dict[str, Any]] = None) -> OperationResult:
    """
    Apply a catalog operation to `bits`.

    Args:
        name: Operation or its identifier (case-insensitive)
        bits: '0'/'1' string
        params: operation parameters (see module docstring)

    Returns:
        OperationResult; on failure `error` holds the BitscopeError
    """
    params = dict(params or {})
    label = name.value if isinstance(name, Operation) else str(name)
    try:
        op = Operation.parse(name)
        label = op.value
        validate_bits(bits)
        out = _IMPLEMENTATIONS[op](bits, params)
    except BitscopeError as e:
        logger.debug(f"{label} failed: {e}")
        return OperationResult(label, bits, params, error=e)
    return OperationResult(label, out, params)


def apply_operation_on_range(name: Union[str, Operation], bits: str, start: int, end: int,
                             params: Optional[Dict[str, Any]] = None) -> OperationResult:
    """
    Apply an operation to bits[start:end] and splice the result back.

    The result may change the total length when the operation does.
    """
    params = dict(params or {})
    try:
        validate_bits(bits)
        validate_range(start, end, len(bits))
    except BitscopeError as e:
        return OperationResult(str(getattr(name, 'value', name)), bits, params, error=e)

    result = apply_operation(name, bits[start:end], params)
    if not result.success:
        return OperationResult(result.operation, bits, params, error=result.error)
    return OperationResult(result.operation, bits[:start] + result.bits + bits[end:], params)
