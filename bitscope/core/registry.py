"""
Metric Registry - maps metric names to the engine group that computes them.

The registry provides:
1. A fixed catalog of metric groups (one engine module each)
2. Lazy loading of each group's compute function
3. Name -> group lookup for single-metric requests
4. The aggregate compute_all_metrics with a finite-value guarantee
"""

import importlib
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from bitscope.validation import BitscopeError, UnknownMetricError

from .metrics._input import finite

logger = logging.getLogger(__name__)


# Engine modules in aggregate output order.
METRIC_GROUPS = [
    'basic',
    'entropy',
    'randomness',
    'runs',
    'patterns',
    'transitions',
    'periodicity',
    'spectral',
    'partitions',
    'advanced',
    'byte_level',
    'ideality',
]

# Groups whose compute() takes the caller's partition list.
PARTITION_GROUPS = {'partitions'}


@dataclass
class MetricResult:
    """Outcome of a single compute_metric call."""
    name: str
    value: Optional[float] = None
    error: Optional[BitscopeError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> float:
        """Return the value, or re-raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value


class MetricRegistry:
    """
    Registry of metric groups.

    Each group is an engine module under bitscope.core.metrics with an
    OUTPUTS list and a compute function.
    """

    def __init__(self, groups: Optional[List[str]] = None):
        self.groups = list(groups or METRIC_GROUPS)
        self._compute_funcs: Dict[str, Callable] = {}
        self._outputs: Dict[str, List[str]] = {}
        self._index: Dict[str, str] = {}

        for group in self.groups:
            module = self._load(group)
            self._outputs[group] = list(module.OUTPUTS)
            for name in module.OUTPUTS:
                # first group wins for shared names (e.g. population_count)
                self._index.setdefault(name, group)

    def _load(self, group: str):
        module = importlib.import_module(f'bitscope.core.metrics.{group}')
        self._compute_funcs[group] = module.compute
        return module

    def list_groups(self) -> List[str]:
        return list(self.groups)

    def list_metrics(self) -> List[str]:
        """All metric names, in aggregate output order."""
        return list(self._index)

    def has_metric(self, name: str) -> bool:
        return name in self._index

    def group_of(self, name: str) -> str:
        if name not in self._index:
            raise UnknownMetricError(name, self.list_metrics())
        return self._index[name]

    def get_outputs(self, group: str) -> List[str]:
        return self._outputs[group]

    def get_compute_func(self, group: str) -> Callable:
        if group not in self._compute_funcs:
            raise UnknownMetricError(group, self.groups)
        return self._compute_funcs[group]

    def compute_group(self, group: str, bits: str,
                      partitions: Optional[Iterable] = None) -> Dict[str, float]:
        fn = self.get_compute_func(group)
        if group in PARTITION_GROUPS:
            return fn(bits, partitions)
        return fn(bits)


# Global registry instance (lazy initialized)
_registry: Optional[MetricRegistry] = None


def get_registry() -> MetricRegistry:
    """Get or create global metric registry."""
    global _registry
    if _registry is None:
        _registry = MetricRegistry()
    return _registry


def reset_registry():
    """Reset the global registry (for testing)."""
    global _registry
    _registry = None


def metric_names() -> List[str]:
    return get_registry().list_metrics()


def _finite_values(values: Dict[str, float], group: str) -> Dict[str, float]:
    out = {}
    for name, value in values.items():
        if not math.isfinite(value):
            logger.warning(f"{group}.{name}: non-finite value {value!r} replaced with 0.0")
        out[name] = finite(value)
    return out


def compute_all_metrics(bits: str, partitions: Optional[Iterable] = None) -> Dict[str, float]:
    """
    Compute every metric over `bits`.

    Args:
        bits: '0'/'1' string (may be empty)
        partitions: optional list of {start, end, entropy}

    Returns:
        Flat dict of metric name -> finite float

    Raises:
        InvalidCharacterError: bits contains anything other than '0'/'1'
        InvalidParameterError: a partition is malformed
    """
    registry = get_registry()
    partitions = list(partitions) if partitions is not None else None
    result: Dict[str, float] = {}
    for group in registry.list_groups():
        values = registry.compute_group(group, bits, partitions)
        for name, value in _finite_values(values, group).items():
            result.setdefault(name, value)
    logger.debug(f"computed {len(result)} metrics over {len(bits)} bits")
    return result


def compute_metric(name: str, bits: str, partitions: Optional[Iterable] = None) -> MetricResult:
    """
    Compute a single named metric.

    Failures (unknown name, invalid characters) are captured in the
    returned MetricResult instead of being raised.
    """
    registry = get_registry()
    try:
        group = registry.group_of(name)
        values = registry.compute_group(group, bits, partitions)
        if name not in values:
            raise UnknownMetricError(name, values.keys())
        return MetricResult(name, finite(values[name]))
    except BitscopeError as e:
        logger.debug(f"compute_metric({name!r}) failed: {e}")
        return MetricResult(name, error=e)

