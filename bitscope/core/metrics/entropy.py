"""
Entropy Engine
==============

Information-theoretic measures over the byte view (and, for the windowed
regularity statistics, over the raw bits).

Outputs:
    shannon_entropy        - -sum p log2 p over byte values, in [0, 8]
    min_entropy            - -log2(max p)
    collision_entropy      - Renyi order 2
    renyi_entropy          - Renyi order alpha (config: entropy.renyi_alpha)
    hartley_entropy        - log2(number of distinct byte values)
    kolmogorov_complexity_estimate - LZ77 encoded length / bit length
    approximate_entropy    - ApEn(m), Pincus; exact matching on bits
    sample_entropy         - SampEn(m, r), Richman & Moorman; Chebyshev distance on bits
    permutation_entropy    - ordinal-pattern entropy (bits), order from config
    spectral_entropy       - entropy of the normalised DFT magnitude spectrum of bytes
    block_entropy          - entropy over consecutive 8-byte blocks
    conditional_entropy    - H(X[t+1] | X[t]) over adjacent byte pairs
    joint_entropy          - H(X[t], X[t+1]) over adjacent byte pairs
    mutual_information     - I(X[t]; X[t+1]) over adjacent byte pairs

Degenerate inputs (empty, single symbol, too short for the window) give 0.
"""

from typing import Dict, Optional

import numpy as np
from antropy import app_entropy, perm_entropy
from antropy import sample_entropy as ant_sample_entropy

from bitscope.config import get_config
from bitscope.primitives import (
    bits_to_array,
    collision_entropy,
    dft_magnitudes,
    hartley_entropy,
    min_entropy,
    renyi_entropy,
    sequence_entropy,
    shannon_entropy,
)

from ._input import finite, prepare, ratio


OUTPUTS = [
    'shannon_entropy',
    'min_entropy',
    'collision_entropy',
    'renyi_entropy',
    'hartley_entropy',
    'kolmogorov_complexity_estimate',
    'approximate_entropy',
    'sample_entropy',
    'permutation_entropy',
    'spectral_entropy',
    'block_entropy',
    'conditional_entropy',
    'joint_entropy',
    'mutual_information',
]


def byte_counts(byte_values) -> np.ndarray:
    if len(byte_values) == 0:
        return np.zeros(0, dtype=np.int64)
    return np.bincount(np.asarray(byte_values, dtype=np.int64), minlength=256)


def lz77_encoded_length(data: str, window: int = 4096, max_match: int = 258,
                        min_match: int = 3) -> int:
    """
    Length of a simplified textual LZ77 encoding of `data`.

    Greedy parse: at each position take the longest earlier match (start
    within `window`, overlap allowed, at most `max_match` long; earliest
    start wins ties). Matches of at least `min_match` emit a token
    "[distance,length]", anything else emits the literal character.
    """
    n = len(data)
    i = 0
    total = 0
    while i < n:
        lo = max(0, i - window)
        best_len, best_start = 0, -1
        if i > 0:
            # occurrence is monotone in length, so binary-search the longest one
            low, high = 0, min(max_match, n - i)
            while low < high:
                mid = (low + high + 1) // 2
                j = data.find(data[i:i + mid], lo, i - 1 + mid)
                if j != -1:
                    low, best_start = mid, j
                else:
                    high = mid - 1
            best_len = low

        if best_len >= min_match:
            total += len(f'[{i - best_start},{best_len}]')
            i += best_len
        else:
            total += 1
            i += 1
    return total


def kolmogorov_estimate(bits: str, window: int = 4096, max_match: int = 258,
                        min_match: int = 3) -> float:
    return ratio(lz77_encoded_length(bits, window, max_match, min_match), len(bits))


def _as_signal(bits: str) -> np.ndarray:
    return bits_to_array(bits).astype(np.float64)


def approximate_entropy(bits: str, m: int = 2) -> float:
    """ApEn = Phi_m - Phi_{m+1}, Phi_k = mean_i ln C_i^k (self-matches included)."""
    if len(bits) < m + 1 or len(set(bits)) < 2:
        return 0.0
    return finite(app_entropy(_as_signal(bits), order=int(m), metric='chebyshev'))


def sample_entropy(bits: str, m: int = 2, r: float = 0.2) -> float:
    """
    SampEn = -ln(A / B).

    B counts template pairs (i < j) of length m within Chebyshev distance r,
    A the same for length m + 1, both over the N - m shared start positions.
    With 0/1 samples any 0 < r < 1 means exact matching. Returns 0 when A or
    B is zero.
    """
    if len(bits) <= m + 1 or len(set(bits)) < 2:
        return 0.0
    value = ant_sample_entropy(
        _as_signal(bits), order=int(m), tolerance=float(r), metric='chebyshev',
    )
    return finite(value)


def permutation_entropy(bits: str, order: int = 3) -> float:
    """Entropy (bits) of ordinal patterns; ties are ordered by numpy argsort."""
    if order < 2 or len(bits) < order:
        return 0.0
    return finite(perm_entropy(_as_signal(bits), order=int(order), normalize=False))


def spectral_entropy(byte_values) -> float:
    mags = dft_magnitudes(byte_values)
    total = mags.sum()
    if total <= 0:
        return 0.0
    p = mags[mags > 0] / total
    return float(-np.sum(p * np.log2(p)))


def block_entropy(byte_values, block_size: int = 8) -> float:
    """Entropy over consecutive `block_size`-byte blocks (trailing short block included)."""
    values = [int(v) for v in byte_values]
    blocks = [tuple(values[i:i + block_size]) for i in range(0, len(values), block_size)]
    return sequence_entropy(blocks)


def pair_entropies(byte_values):
    """(H(X), H(Y), H(X, Y)) over adjacent pairs (X[t], X[t+1])."""
    values = [int(v) for v in byte_values]
    if len(values) < 2:
        return 0.0, 0.0, 0.0
    firsts, seconds = values[:-1], values[1:]
    return (
        sequence_entropy(firsts),
        sequence_entropy(seconds),
        sequence_entropy(zip(firsts, seconds)),
    )


def compute(bits: str, config: Optional[dict] = None) -> Dict[str, float]:
    cfg = config or get_config()
    ent = cfg['entropy']
    comp = cfg['compression']

    bits, _, byte_values = prepare(bits)
    counts = byte_counts(byte_values)

    h_x, h_y, h_xy = pair_entropies(byte_values)

    return {
        'shannon_entropy': shannon_entropy(counts),
        'min_entropy': min_entropy(counts),
        'collision_entropy': collision_entropy(counts),
        'renyi_entropy': renyi_entropy(counts, float(ent['renyi_alpha'])),
        'hartley_entropy': hartley_entropy(counts),
        'kolmogorov_complexity_estimate': kolmogorov_estimate(
            bits, comp['lz77_window'], comp['lz77_max_match'], comp['lz77_min_match'],
        ),
        'approximate_entropy': approximate_entropy(bits, ent['approximate_entropy_m']),
        'sample_entropy': sample_entropy(
            bits, ent['sample_entropy_m'], ent['sample_entropy_r'],
        ),
        'permutation_entropy': permutation_entropy(bits, ent['permutation_order']),
        'spectral_entropy': spectral_entropy(byte_values),
        'block_entropy': block_entropy(byte_values, ent['block_size']),
        'conditional_entropy': max(0.0, h_xy - h_x),
        'joint_entropy': h_xy,
        'mutual_information': max(0.0, h_x + h_y - h_xy),
    }
