"""
Run-Length Engine
=================

Statistics of maximal runs of identical bits, separately for '0' and '1'.

Outputs (suffix _0 / _1 for the run symbol):
    run_count           - number of runs
    mean_run_length
    max_run_length
    min_run_length
    median_run_length
    run_length_variance - population variance

A symbol that never occurs has all-zero statistics.
"""

from typing import Dict

from bitscope.primitives import maximum, mean, median, minimum, run_lengths, variance

from ._input import prepare


OUTPUTS = [
    f'{stat}_{symbol}'
    for symbol in ('0', '1')
    for stat in (
        'run_count',
        'mean_run_length',
        'max_run_length',
        'min_run_length',
        'median_run_length',
        'run_length_variance',
    )
]


def run_statistics(bits: str, symbol: str) -> Dict[str, float]:
    runs = run_lengths(bits, symbol)
    return {
        f'run_count_{symbol}': float(len(runs)),
        f'mean_run_length_{symbol}': mean(runs),
        f'max_run_length_{symbol}': maximum(runs),
        f'min_run_length_{symbol}': minimum(runs),
        f'median_run_length_{symbol}': median(runs),
        f'run_length_variance_{symbol}': variance(runs),
    }


def compute(bits: str) -> Dict[str, float]:
    bits, _, _ = prepare(bits)
    result = run_statistics(bits, '0')
    result.update(run_statistics(bits, '1'))
    return result
