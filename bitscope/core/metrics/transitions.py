"""
Transition Engine
=================

Bit-to-bit changes.

Outputs:
    total_transitions       - positions where bits[i] != bits[i+1]
    zero_to_one_transitions
    one_to_zero_transitions
    transition_density      - total / (n - 1)
    transition_ratio        - 0->1 count / 1->0 count
    transition_entropy      - entropy of the adjacent-pair distribution {00, 01, 10, 11}
    edge_density            - total / n
    change_rate_per_byte    - total / whole bytes
"""

from typing import Dict

from bitscope.primitives import sequence_entropy

from ._input import prepare, ratio


OUTPUTS = [
    'total_transitions',
    'zero_to_one_transitions',
    'one_to_zero_transitions',
    'transition_density',
    'transition_ratio',
    'transition_entropy',
    'edge_density',
    'change_rate_per_byte',
]


def compute(bits: str) -> Dict[str, float]:
    bits, _, _ = prepare(bits)
    n = len(bits)
    pairs = [a + b for a, b in zip(bits, bits[1:])]
    up = pairs.count('01')
    down = pairs.count('10')
    total = up + down

    return {
        'total_transitions': float(total),
        'zero_to_one_transitions': float(up),
        'one_to_zero_transitions': float(down),
        'transition_density': ratio(total, n - 1) if n > 1 else 0.0,
        'transition_ratio': ratio(up, down),
        'transition_entropy': sequence_entropy(pairs),
        'edge_density': ratio(total, n),
        'change_rate_per_byte': ratio(total, n // 8),
    }
