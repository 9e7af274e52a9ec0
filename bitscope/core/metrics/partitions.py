"""
Partition Aggregate Engine
==========================

Pure aggregation over caller-supplied partitions {start, end, entropy}.
The engine never discovers partitions itself.

Outputs:
    partition_count
    mean_partition_size, partition_size_variance
    smallest_partition, largest_partition
    partition_entropy_variance
    inter_partition_similarity  - mean over neighbours of 1 - min(|dH|, 1)
    partition_boundary_sharpness - max neighbour |dH|
    partition_homogeneity       - 1 - var(H) / max(max(H), 1)
    partition_complexity_score  - count * var(H)

An empty partition list gives all zeros.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from bitscope.primitives import mean, variance
from bitscope.validation import InvalidParameterError


OUTPUTS = [
    'partition_count',
    'mean_partition_size',
    'partition_size_variance',
    'smallest_partition',
    'largest_partition',
    'partition_entropy_variance',
    'inter_partition_similarity',
    'partition_boundary_sharpness',
    'partition_homogeneity',
    'partition_complexity_score',
]


@dataclass(frozen=True)
class Partition:
    """A pre-computed sub-range [start, end) and its entropy."""
    start: int
    end: int
    entropy: float

    @property
    def size(self) -> int:
        return self.end - self.start


def as_partition(item) -> Partition:
    """Accept a Partition, a mapping with start/end/entropy, or a 3-sequence."""
    if isinstance(item, Partition):
        return item
    if isinstance(item, dict):
        try:
            return Partition(int(item['start']), int(item['end']), float(item['entropy']))
        except KeyError as e:
            raise InvalidParameterError('partition', item, f'missing key {e}') from e
        except (TypeError, ValueError) as e:
            raise InvalidParameterError('partition', item, f'non-numeric field: {e}') from e
    if isinstance(item, (tuple, list)) and len(item) == 3:
        try:
            return Partition(int(item[0]), int(item[1]), float(item[2]))
        except (TypeError, ValueError) as e:
            raise InvalidParameterError('partition', item, f'non-numeric field: {e}') from e
    raise InvalidParameterError('partition', item, 'expected Partition, dict or (start, end, entropy)')


def similarity(entropies: List[float]) -> float:
    if len(entropies) < 2:
        return 0.0
    scores = [1.0 - min(abs(b - a), 1.0) for a, b in zip(entropies, entropies[1:])]
    return sum(scores) / len(scores)


def boundary_sharpness(entropies: List[float]) -> float:
    if len(entropies) < 2:
        return 0.0
    return max(abs(b - a) for a, b in zip(entropies, entropies[1:]))


def compute(bits: str = '', partitions: Optional[Iterable] = None) -> Dict[str, float]:
    parts = [as_partition(p) for p in (partitions or [])]
    if not parts:
        return {name: 0.0 for name in OUTPUTS}

    sizes = [p.size for p in parts]
    entropies = [p.entropy for p in parts]
    entropy_var = variance(entropies)

    return {
        'partition_count': float(len(parts)),
        'mean_partition_size': mean(sizes),
        'partition_size_variance': variance(sizes),
        'smallest_partition': float(min(sizes)),
        'largest_partition': float(max(sizes)),
        'partition_entropy_variance': entropy_var,
        'inter_partition_similarity': similarity(entropies),
        'partition_boundary_sharpness': boundary_sharpness(entropies),
        'partition_homogeneity': 1.0 - entropy_var / max(max(entropies), 1.0),
        'partition_complexity_score': len(parts) * entropy_var,
    }
