"""
bitscope Transforms.

Pure bit-string -> bit-string functions. Each module covers one family:
    logic         AND, OR, XOR, NAND, NOR, XNOR, NOT
    shifts        logical/arithmetic shifts, rotations
    arithmetic    unsigned arbitrary-precision add/sub/mul/div/mod/pow
    manipulation  insert, delete, move, peek, replace, truncate, append, mask
    packing       pad_left, pad_right, align_to_bytes, align_to_nibbles
    advanced      reverse, Gray code, endianness, swap ranges, popcount, transitions
    encoding      Manchester, differential, NRZI
"""

from .logic import (
    bit_not,
    bit_and,
    bit_or,
    bit_xor,
    bit_nand,
    bit_nor,
    bit_xnor,
    apply_gate,
    GATES,
)
from .shifts import (
    logical_shift_left,
    logical_shift_right,
    arithmetic_shift_left,
    arithmetic_shift_right,
    rotate_left,
    rotate_right,
)
from .arithmetic import (
    to_decimal,
    from_decimal,
    add,
    subtract,
    multiply,
    divide,
    modulo,
    power,
    fit_width,
)
from .manipulation import (
    insert_bits,
    delete_bits,
    move_bits,
    peek_bits,
    replace_bits,
    truncate_bits,
    append_bits,
    apply_mask,
)
from .packing import (
    pad_left,
    pad_right,
    align_to,
    align_to_bytes,
    align_to_nibbles,
)
from .advanced import (
    reverse_bits,
    binary_to_gray,
    gray_to_binary,
    swap_endianness,
    swap_bits,
    population_count,
    count_transitions,
)
from .encoding import (
    manchester_encode,
    manchester_decode,
    differential_encode,
    differential_decode,
    nrzi_encode,
    nrzi_decode,
)

__all__ = [
    'bit_not', 'bit_and', 'bit_or', 'bit_xor', 'bit_nand', 'bit_nor', 'bit_xnor',
    'apply_gate', 'GATES',
    'logical_shift_left', 'logical_shift_right',
    'arithmetic_shift_left', 'arithmetic_shift_right',
    'rotate_left', 'rotate_right',
    'to_decimal', 'from_decimal', 'add', 'subtract', 'multiply',
    'divide', 'modulo', 'power', 'fit_width',
    'insert_bits', 'delete_bits', 'move_bits', 'peek_bits',
    'replace_bits', 'truncate_bits', 'append_bits', 'apply_mask',
    'pad_left', 'pad_right', 'align_to', 'align_to_bytes', 'align_to_nibbles',
    'reverse_bits', 'binary_to_gray', 'gray_to_binary', 'swap_endianness',
    'swap_bits', 'population_count', 'count_transitions',
    'manchester_encode', 'manchester_decode',
    'differential_encode', 'differential_decode',
    'nrzi_encode', 'nrzi_decode',
]
