"""
Anomaly Detectors
=================

Structural oddities in a bit-string. Every detector takes (bits, min_length)
and returns records {'position': int, 'length': int, ...} in scan order.

Detectors (default threshold from config: anomalies.min_length):
    palindrome         - odd-length palindrome around each centre, maximal radius (5)
    repeating_pattern  - a width-w block repeated back to back at least
                         min_repeats times, for w = min_length..max_pattern_width (4)
    alternating        - maximal 0101... / 1010... stretches (8)
    long_run           - maximal runs of one symbol (10)
    sparse_region      - half-overlapping windows of min_length bits whose
                         ones density falls outside the configured band (64)
    byte_misalignment  - the trailing partial byte, if any (1)

Usage:
    from bitscope.core.anomalies import detect_anomalies

    found = detect_anomalies(bits)                  # every detector
    runs = detect_anomalies(bits, ['long_run'])     # a subset
"""

import logging
from dataclasses import dataclass
from itertools import groupby
from typing import Any, Callable, Dict, Iterable, List, Optional

from bitscope.config import get_config
from bitscope.validation import (
    InvalidParameterError,
    validate_bits,
    validate_count,
)

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def _odd_radii(bits: str) -> List[int]:
    """radius[i]: largest k with bits[i-k+1:i+k] a palindrome (Manacher, odd centres)."""
    n = len(bits)
    radius = [0] * n
    left, right = 0, -1
    for i in range(n):
        k = 1 if i > right else min(radius[left + right - i], right - i + 1)
        while i - k >= 0 and i + k < n and bits[i - k] == bits[i + k]:
            k += 1
        radius[i] = k
        if i + k - 1 > right:
            left, right = i - k + 1, i + k - 1
    return radius


def palindromes(bits: str, min_length: int = 5) -> List[Record]:
    validate_bits(bits)
    validate_count(min_length, 'min_length')
    found = []
    for i, k in enumerate(_odd_radii(bits)):
        span = 2 * k - 1
        if span >= min_length:
            found.append({'position': i - k + 1, 'length': span})
    return found


def repeating_patterns(bits: str, min_length: int = 4, max_width: int = 20,
                       min_repeats: int = 3) -> List[Record]:
    """
    Blocks repeated back to back, reported at every start position.

    A start i is reported for width w when bits[i:i+w] occurs at least
    `min_repeats` times consecutively from i. Widths are scanned in
    increasing order, positions left to right within each width.
    """
    validate_bits(bits)
    validate_count(min_length, 'min_length')
    if isinstance(min_repeats, bool) or not isinstance(min_repeats, int) or min_repeats < 1:
        raise InvalidParameterError('min_repeats', min_repeats, 'must be an integer >= 1')
    n = len(bits)
    found = []
    for width in range(max(min_length, 1), max_width + 1):
        if width * min_repeats > n:
            break
        # repeats[i]: consecutive copies of bits[i:i+width] starting at i
        repeats = [1] * (n - width + 1)
        for i in range(n - 2 * width, -1, -1):
            if bits[i:i + width] == bits[i + width:i + 2 * width]:
                repeats[i] = repeats[i + width] + 1
        for i in range(n - width * min_repeats + 1):
            if repeats[i] >= min_repeats:
                found.append({
                    'position': i,
                    'length': width * repeats[i],
                    'pattern': bits[i:i + width],
                    'repeats': repeats[i],
                })
    return found


def alternating_runs(bits: str, min_length: int = 8) -> List[Record]:
    validate_bits(bits)
    validate_count(min_length, 'min_length')
    if not bits:
        return []
    found = []
    start = 0
    for i in range(1, len(bits) + 1):
        if i < len(bits) and bits[i] != bits[i - 1]:
            continue
        if i - start >= min_length:
            found.append({'position': start, 'length': i - start})
        start = i
    return found


def long_runs(bits: str, min_length: int = 10) -> List[Record]:
    validate_bits(bits)
    validate_count(min_length, 'min_length')
    found = []
    position = 0
    for bit, group in groupby(bits):
        length = sum(1 for _ in group)
        if length >= min_length:
            found.append({'position': position, 'length': length, 'bit': bit})
        position += length
    return found


def sparse_regions(bits: str, min_length: int = 64, low: float = 15.0,
                   high: float = 85.0) -> List[Record]:
    """Windows of `min_length` bits, stepped by half a window, with ones% < low or > high."""
    validate_bits(bits)
    validate_count(min_length, 'min_length')
    if min_length == 0:
        raise InvalidParameterError('min_length', min_length, 'window must be positive')
    step = max(min_length // 2, 1)
    found = []
    for i in range(0, len(bits) - min_length + 1, step):
        density = bits.count('1', i, i + min_length) / min_length * 100.0
        if density < low or density > high:
            found.append({'position': i, 'length': min_length, 'density': density})
    return found


def byte_misalignment(bits: str, min_length: int = 1) -> List[Record]:
    validate_bits(bits)
    tail = len(bits) % 8
    if tail == 0:
        return []
    return [{'position': len(bits) - tail, 'length': tail}]


@dataclass(frozen=True)
class Detector:
    name: str
    description: str
    category: str
    severity: str
    detect: Callable[..., List[Record]]


DETECTORS: Dict[str, Detector] = {
    'palindrome': Detector(
        'palindrome', 'Palindromic bit sequences', 'Pattern', 'medium', palindromes),
    'repeating_pattern': Detector(
        'repeating_pattern', 'Sequences that repeat consecutively', 'Pattern', 'medium',
        repeating_patterns),
    'alternating': Detector(
        'alternating', 'Alternating 0101... or 1010... stretches', 'Pattern', 'low',
        alternating_runs),
    'long_run': Detector(
        'long_run', 'Long runs of identical bits', 'Run', 'high', long_runs),
    'sparse_region': Detector(
        'sparse_region', 'Regions with extremely low or high bit density', 'Density', 'medium',
        sparse_regions),
    'byte_misalignment': Detector(
        'byte_misalignment', 'Length not a multiple of 8', 'Structure', 'low', byte_misalignment),
}


def list_detectors() -> List[str]:
    return list(DETECTORS)


def _options(name: str, cfg: dict) -> dict:
    """Detector-specific settings beyond min_length."""
    if name == 'repeating_pattern':
        return {'max_width': cfg['max_pattern_width'], 'min_repeats': cfg['min_repeats']}
    if name == 'sparse_region':
        low, high = cfg['sparse_density']
        return {'low': low, 'high': high}
    return {}


def detect_anomalies(bits: str, names: Optional[Iterable[str]] = None,
                     config: Optional[dict] = None) -> Dict[str, List[Record]]:
    """
    Run detectors over `bits`.

    Args:
        bits: '0'/'1' string
        names: detector names (default: all, in DETECTORS order)
        config: configuration dict (default: get_config())

    Returns:
        {detector name: records}

    Raises:
        InvalidParameterError: a name is not a known detector
    """
    validate_bits(bits)
    cfg = (config or get_config())['anomalies']
    thresholds = cfg['min_length']
    selected = list(DETECTORS) if names is None else list(names)

    found = {}
    for name in selected:
        if name not in DETECTORS:
            raise InvalidParameterError('detector', name, f"unknown (use one of {', '.join(DETECTORS)})")
        records = DETECTORS[name].detect(bits, thresholds[name], **_options(name, cfg))
        logger.debug(f"{name}: {len(records)} anomalies over {len(bits)} bits")
        found[name] = records
    return found
