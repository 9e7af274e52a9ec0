"""
Tests for bitscope transforms.

Gates, shifts, arithmetic, splicing, packing, Gray code and line codes.
"""

import numpy as np
import pytest

from bitscope.core.transforms import (
    add,
    align_to_bytes,
    align_to_nibbles,
    append_bits,
    apply_mask,
    arithmetic_shift_left,
    arithmetic_shift_right,
    binary_to_gray,
    bit_and,
    bit_nand,
    bit_nor,
    bit_not,
    bit_or,
    bit_xnor,
    bit_xor,
    count_transitions,
    delete_bits,
    differential_decode,
    differential_encode,
    divide,
    from_decimal,
    gray_to_binary,
    insert_bits,
    logical_shift_left,
    logical_shift_right,
    manchester_decode,
    manchester_encode,
    modulo,
    move_bits,
    multiply,
    nrzi_decode,
    nrzi_encode,
    pad_left,
    pad_right,
    peek_bits,
    population_count,
    power,
    replace_bits,
    reverse_bits,
    rotate_left,
    rotate_right,
    subtract,
    swap_bits,
    swap_endianness,
    to_decimal,
    truncate_bits,
)
from bitscope.validation import (
    AlignmentError,
    DivisionByZeroError,
    IndexOutOfRangeError,
    InvalidCharacterError,
    InvalidParameterError,
    LengthMismatchError,
)


def random_bits(n, seed=42):
    rng = np.random.RandomState(seed)
    return ''.join(rng.choice(['0', '1'], size=n))


class TestScenarios:
    """Worked examples from the operation reference."""

    def test_mask_and(self):
        assert apply_mask('1100', '1010', 'AND') == '1000'

    def test_insert(self):
        assert insert_bits('1111', 2, '00') == '110011'

    def test_delete(self):
        assert delete_bits('110011', 2, 4) == '1111'

    def test_pad_left(self):
        assert pad_left('101', 6, '0') == '000101'

    def test_gray(self):
        assert binary_to_gray('1010') == '1111'


class TestLogicGates:
    """Two-input gates and NOT."""

    def test_truth_tables(self):
        a, b = '1100', '1010'
        assert bit_and(a, b) == '1000'
        assert bit_or(a, b) == '1110'
        assert bit_xor(a, b) == '0110'
        assert bit_nand(a, b) == '0111'
        assert bit_nor(a, b) == '0001'
        assert bit_xnor(a, b) == '1001'

    def test_leading_zeros_preserved(self):
        """Width is kept even when the result has leading zeros."""
        assert bit_and('0011', '0001') == '0001'
        assert bit_or('', '') == ''

    def test_not_involution(self):
        x = random_bits(257)
        assert bit_not(bit_not(x)) == x

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatchError) as exc:
            bit_xor('1010', '101')
        assert exc.value.kind == 'LengthMismatchError'
        assert exc.value.details['left_length'] == 4
        assert exc.value.details['right_length'] == 3

    def test_length_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            bit_and('1', '11')

    def test_invalid_character(self):
        with pytest.raises(InvalidCharacterError) as exc:
            bit_not('10a1')
        assert exc.value.details['index'] == 2
        assert exc.value.details['char'] == 'a'

    def test_unknown_mask_gate(self):
        with pytest.raises(KeyError):
            apply_mask('10', '10', 'IMPLIES')


class TestShifts:
    """Logical/arithmetic shifts and rotations."""

    def test_logical(self):
        assert logical_shift_left('1011', 1) == '0110'
        assert logical_shift_right('1011', 1) == '0101'

    def test_shift_past_length(self):
        x = random_bits(13)
        assert logical_shift_left(x, 13) == '0' * 13
        assert logical_shift_left(x, 100) == '0' * 13
        assert logical_shift_right(x, 100) == '0' * 13

    def test_arithmetic(self):
        assert arithmetic_shift_right('1011', 2) == '1110'
        assert arithmetic_shift_right('0111', 2) == '0001'
        assert arithmetic_shift_right('1000', 9) == '1111'
        assert arithmetic_shift_left('1011', 1) == logical_shift_left('1011', 1)

    def test_rotate(self):
        assert rotate_left('1011', 1) == '0111'
        assert rotate_right('1011', 1) == '1101'

    def test_rotate_identities(self):
        x = random_bits(24)
        assert rotate_left(x, len(x)) == x
        for k in (0, 1, 5, 24, 50):
            assert rotate_left(rotate_right(x, k), k) == x

    def test_empty(self):
        assert rotate_left('', 3) == ''
        assert arithmetic_shift_right('', 3) == ''

    def test_negative_count(self):
        with pytest.raises(InvalidParameterError):
            logical_shift_left('101', -1)


class TestArithmetic:
    """Unsigned arbitrary-precision arithmetic."""

    def test_basic(self):
        assert add('101', '11') == '1000'
        assert subtract('1000', '1') == '111'
        assert multiply('11', '11') == '1001'
        assert divide('1101', '11') == ('100', '1')
        assert modulo('1101', '101') == '11'
        assert power('10', '11') == '1000'

    def test_minimal_length(self):
        assert add('0000', '0000') == '0'
        assert subtract('101', '101') == '0'

    def test_conversions(self):
        assert to_decimal('') == 0
        assert to_decimal('1111') == 15
        assert from_decimal(0) == '0'
        assert from_decimal(10) == '1010'

    def test_full_precision(self):
        a = '1' * 200
        assert to_decimal(add(a, '1')) == 2 ** 200

    def test_random_properties(self):
        """add/multiply/divide agree with integer arithmetic."""
        rng = np.random.RandomState(42)
        for _ in range(50):
            x = int(rng.randint(0, 2 ** 30))
            y = int(rng.randint(1, 2 ** 20))
            a, b = from_decimal(x), from_decimal(y)
            assert to_decimal(add(a, b)) == x + y
            assert to_decimal(multiply(a, b)) == x * y
            q, r = divide(a, b)
            assert to_decimal(q) * y + to_decimal(r) == x

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            divide('101', '000')
        with pytest.raises(ZeroDivisionError):
            modulo('101', '0')

    def test_negative_results_rejected(self):
        with pytest.raises(InvalidParameterError):
            subtract('1', '10')
        with pytest.raises(InvalidParameterError):
            from_decimal(-1)


class TestManipulation:
    """Splice-style edits."""

    def test_move_post_deletion_dest(self):
        """dest indexes the string with the moved range removed."""
        assert move_bits('10000000', 0, 1, 7) == '00000001'
        assert move_bits('11000000', 0, 2, 0) == '11000000'

    def test_move_dest_out_of_range(self):
        with pytest.raises(IndexOutOfRangeError):
            move_bits('10000000', 0, 1, 8)

    def test_peek(self):
        x = '101100'
        assert peek_bits(x, 1, 4) == '011'
        assert x == '101100'

    def test_replace(self):
        assert replace_bits('0000', 1, '11') == '0110'
        assert replace_bits('0000', 2, '111') == '00111'

    def test_truncate_append(self):
        assert truncate_bits('10101', 3) == '101'
        assert truncate_bits('10', 5) == '10'
        assert append_bits('10', '01') == '1001'

    def test_index_errors(self):
        with pytest.raises(IndexOutOfRangeError):
            insert_bits('1111', 5, '0')
        with pytest.raises(IndexOutOfRangeError):
            delete_bits('1111', 3, 2)
        with pytest.raises(IndexError):
            delete_bits('1111', -1, 2)


class TestPacking:
    """Padding and alignment."""

    def test_pad(self):
        assert pad_right('101', 6, '1') == '101111'
        assert pad_left('101', 2) == '101'

    def test_align(self):
        assert align_to_bytes('101') == ('10100000', 5)
        assert align_to_nibbles('10101', '1') == ('10101111', 3)
        assert align_to_bytes('1' * 16) == ('1' * 16, 0)

    def test_bad_fill(self):
        with pytest.raises(InvalidParameterError):
            pad_left('1', 4, 'x')


class TestAdvanced:
    """Reversal, Gray code, endianness, range swap, counts."""

    def test_round_trips(self):
        x = random_bits(99)
        assert reverse_bits(reverse_bits(x)) == x
        assert gray_to_binary(binary_to_gray(x)) == x
        assert gray_to_binary('1111') == '1010'

    def test_gray_adjacent_values_differ_by_one_bit(self):
        for v in range(255):
            g1 = binary_to_gray(format(v, '08b'))
            g2 = binary_to_gray(format(v + 1, '08b'))
            assert sum(a != b for a, b in zip(g1, g2)) == 1

    def test_swap_endianness(self):
        assert swap_endianness('0000000111111110') == '1111111000000001'
        assert swap_endianness('') == ''

    def test_swap_endianness_unaligned(self):
        with pytest.raises(AlignmentError):
            swap_endianness('1' * 12)

    def test_swap_bits(self):
        assert swap_bits('110010', 0, 2, 4, 6) == '100011'
        assert swap_bits('1110001', 0, 3, 5, 7) == '0100111'
        assert swap_bits('1110001', 5, 7, 0, 3) == '0100111'

    def test_swap_overlap(self):
        with pytest.raises(InvalidParameterError):
            swap_bits('1111000', 0, 3, 2, 5)

    def test_population_invariant(self):
        x = random_bits(300)
        assert population_count(x) + population_count(bit_not(x)) == len(x)

    def test_transitions(self):
        assert count_transitions('0110') == 2
        assert count_transitions('0000') == 0
        assert count_transitions('1111') == 0
        assert count_transitions('') == 0


class TestLineCodes:
    """Manchester, differential and NRZI."""

    def test_manchester(self):
        assert manchester_encode('10') == '1001'
        x = random_bits(40)
        assert manchester_decode(manchester_encode(x)) == x

    def test_manchester_errors(self):
        with pytest.raises(AlignmentError):
            manchester_decode('101')
        with pytest.raises(InvalidParameterError):
            manchester_decode('11')

    def test_differential(self):
        assert differential_encode('1101') == '1011'
        assert differential_decode('1011') == '1101'

    def test_nrzi(self):
        assert nrzi_encode('1101') == '1001'
        assert nrzi_decode('1001') == '1101'
        x = random_bits(64)
        assert nrzi_decode(nrzi_encode(x)) == x
