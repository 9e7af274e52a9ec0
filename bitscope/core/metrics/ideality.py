"""
Ideality Engine
===============

File ideality: the share of bits covered by a pattern of width w that is
immediately repeated (w+w, w+w+w, ...). 1010 is ideal at w=2; 100110 is not.

Outputs:
    ideality_percentage - best floored percentage over widths min_window..min(n/2, max_window)
    ideality_window     - the width achieving it (smallest on ties, 0 if none)
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from bitscope.config import get_config
from bitscope.validation import validate_bits, validate_count, validate_range

from ._input import prepare


OUTPUTS = [
    'ideality_percentage',
    'ideality_window',
]


@dataclass(frozen=True)
class IdealityResult:
    window_size: int
    repeating_count: int
    total_bits: int
    ideality_percentage: int


def calculate_ideality(bits: str, window: int, start: int = 0,
                       end: Optional[int] = None) -> IdealityResult:
    """Ideality of bits[start:end] at a single window width."""
    validate_bits(bits)
    validate_count(window, 'window')
    end = len(bits) if end is None else end
    validate_range(start, end, len(bits))
    section = bits[start:end]
    n = len(section)

    if window == 0 or n < 2 * window:
        return IdealityResult(window, 0, n, 0)

    covered = 0
    i = 0
    while i <= n - 2 * window:
        pattern = section[i:i + window]
        if section[i + window:i + 2 * window] != pattern:
            i += 1
            continue
        pos = i + 2 * window
        while pos + window <= n and section[pos:pos + window] == pattern:
            pos += window
        covered += pos - i
        i = pos

    return IdealityResult(window, covered, n, covered * 100 // n)


def all_idealities(bits: str, start: int = 0, end: Optional[int] = None,
                   min_window: int = 2, max_window: Optional[int] = None) -> List[IdealityResult]:
    """Ideality at every width from min_window to half the section length."""
    end = len(bits) if end is None else end
    limit = (end - start) // 2
    if max_window is not None:
        limit = min(limit, max_window)
    return [calculate_ideality(bits, w, start, end) for w in range(min_window, limit + 1)]


def top_ideality_windows(bits: str, top_n: int = 10, start: int = 0,
                         end: Optional[int] = None) -> List[IdealityResult]:
    """The top_n widths by ideality, best first; ties keep the smaller width first."""
    validate_count(top_n, 'top_n')
    results = all_idealities(bits, start, end)
    return sorted(results, key=lambda r: r.ideality_percentage, reverse=True)[:top_n]


def compute(bits: str, config: Optional[dict] = None) -> Dict[str, float]:
    cfg = (config or get_config())['ideality']

    bits, _, _ = prepare(bits)
    results = all_idealities(bits, min_window=cfg['min_window'], max_window=cfg['max_window'])
    if not results:
        return {'ideality_percentage': 0.0, 'ideality_window': 0.0}

    best = max(results, key=lambda r: r.ideality_percentage)
    if best.ideality_percentage == 0:
        return {'ideality_percentage': 0.0, 'ideality_window': 0.0}
    return {
        'ideality_percentage': float(best.ideality_percentage),
        'ideality_window': float(best.window_size),
    }
