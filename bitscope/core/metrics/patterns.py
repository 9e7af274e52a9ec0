"""
Pattern and Compression Engine
==============================

Window diversity, byte-distribution shape and compressibility estimates.

Outputs:
    unique_4bit_patterns, unique_8bit_patterns, unique_16bit_patterns
                              - distinct sliding bit windows of that width
    most_frequent_byte        - byte value with the highest count (first seen wins ties)
    least_frequent_byte       - byte value with the lowest non-zero count
    byte_distribution_skewness, byte_distribution_kurtosis
                              - population moments of the byte values (excess kurtosis)
    alphabet_size             - distinct byte values
    pattern_regularity_index  - distinct 16-bit windows / total 16-bit windows
    repetition_factor         - share of positions where an 8-bit window equals the next one
    bigram_diversity, trigram_diversity, fourgram_diversity
                              - distinct byte n-grams / total n-grams
    lempel_ziv_complexity     - phrases in a greedy new-substring parse of the bits
    compression_ratio_estimate - Huffman-coded size / original size (bytes)
    dictionary_size_estimate  - distinct 4-byte windows
    redundancy_percentage     - (8 - shannon_entropy) / 8 * 100
"""

import heapq
from collections import Counter
from typing import Dict, Optional

from bitscope.config import get_config
from bitscope.primitives import kurtosis, skewness, shannon_entropy, windows

from ._input import prepare, ratio


UNIQUE_WINDOW_SIZES = (4, 8, 16)
_NGRAM_KEYS = {2: 'bigram_diversity', 3: 'trigram_diversity', 4: 'fourgram_diversity'}

OUTPUTS = [f'unique_{size}bit_patterns' for size in UNIQUE_WINDOW_SIZES] + [
    'most_frequent_byte',
    'least_frequent_byte',
    'byte_distribution_skewness',
    'byte_distribution_kurtosis',
    'alphabet_size',
    'pattern_regularity_index',
    'repetition_factor',
    'bigram_diversity',
    'trigram_diversity',
    'fourgram_diversity',
    'lempel_ziv_complexity',
    'compression_ratio_estimate',
    'dictionary_size_estimate',
    'redundancy_percentage',
]


def unique_patterns(bits: str, size: int) -> int:
    return len(set(windows(bits, size)))


def pattern_regularity(bits: str, size: int = 16) -> float:
    total = len(bits) - size + 1
    if total <= 0:
        return 0.0
    return unique_patterns(bits, size) / total


def repetition_factor(bits: str, size: int = 8) -> float:
    total = len(bits) - 2 * size + 1
    if total <= 0:
        return 0.0
    repeats = sum(
        1 for i in range(total)
        if bits[i:i + size] == bits[i + size:i + 2 * size]
    )
    return repeats / total


def ngram_diversity(byte_values, n: int) -> float:
    grams = windows(byte_values, n)
    return ratio(len(set(grams)), len(grams))


def lempel_ziv_complexity(bits: str) -> int:
    """Greedy parse: extend the current phrase until it is new, then start over."""
    phrases = set()
    phrase = ''
    for b in bits:
        phrase += b
        if phrase not in phrases:
            phrases.add(phrase)
            phrase = ''
    return len(phrases)


def huffman_code_lengths(counts: Counter) -> Dict[int, int]:
    """Code length per symbol of an optimal prefix code. A lone symbol gets 1 bit."""
    if not counts:
        return {}
    if len(counts) == 1:
        return {next(iter(counts)): 1}

    lengths = {symbol: 0 for symbol in counts}
    heap = [(count, order, [symbol]) for order, (symbol, count) in enumerate(counts.items())]
    heapq.heapify(heap)
    order = len(heap)
    while len(heap) > 1:
        c1, _, s1 = heapq.heappop(heap)
        c2, _, s2 = heapq.heappop(heap)
        for symbol in s1 + s2:
            lengths[symbol] += 1
        heapq.heappush(heap, (c1 + c2, order, s1 + s2))
        order += 1
    return lengths


def huffman_ratio(byte_values) -> float:
    n = len(byte_values)
    if n == 0:
        return 0.0
    counts = Counter(int(v) for v in byte_values)
    lengths = huffman_code_lengths(counts)
    coded = sum(counts[s] * lengths[s] for s in counts)
    return coded / (n * 8.0)


def compute(bits: str, config: Optional[dict] = None) -> Dict[str, float]:
    cfg = (config or get_config())['patterns']

    bits, _, byte_values = prepare(bits)
    counts = Counter(int(v) for v in byte_values)

    result = {
        f'unique_{size}bit_patterns': float(unique_patterns(bits, size))
        for size in UNIQUE_WINDOW_SIZES
    }

    if counts:
        most = counts.most_common(1)[0][0]
        least = min(counts.items(), key=lambda kv: kv[1])[0]
    else:
        most = least = 0

    entropy = shannon_entropy(counts.values())

    result.update({
        'most_frequent_byte': float(most),
        'least_frequent_byte': float(least),
        'byte_distribution_skewness': skewness(byte_values),
        'byte_distribution_kurtosis': kurtosis(byte_values),
        'alphabet_size': float(len(counts)),
        'pattern_regularity_index': pattern_regularity(bits, cfg['regularity_window']),
        'repetition_factor': repetition_factor(bits, cfg['repetition_window']),
        'lempel_ziv_complexity': float(lempel_ziv_complexity(bits)),
        'compression_ratio_estimate': huffman_ratio(byte_values),
        'dictionary_size_estimate': float(
            len(set(windows(byte_values, cfg['dictionary_window'])))
        ),
        'redundancy_percentage': (8.0 - entropy) / 8.0 * 100.0 if len(byte_values) else 0.0,
    })
    for n, key in _NGRAM_KEYS.items():
        result[key] = ngram_diversity(byte_values, n)

    return result
