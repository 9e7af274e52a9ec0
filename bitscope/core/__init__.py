"""
bitscope Core - pure computation, no file I/O.

    bitscope.core.transforms   bit-string -> bit-string functions
    bitscope.core.metrics      metric engines, one module per group
    bitscope.core.operations   named operation catalog (apply_operation)
    bitscope.core.registry     metric catalog (compute_metric, compute_all_metrics)
    bitscope.core.anomalies    structural anomaly detectors (detect_anomalies)
    bitscope.core.search       literal pattern search and replace
    bitscope.core.generate     seeded random bit-strings
"""

from .operations import (
    Operation,
    OperationResult,
    apply_operation,
    apply_operation_on_range,
    operation_cost,
    list_operations,
)
from .anomalies import DETECTORS, detect_anomalies, list_detectors
from .generate import generate_random
from .search import find_pattern, pattern_frequency, replace_pattern
from .registry import (
    MetricResult,
    compute_metric,
    compute_all_metrics,
    metric_names,
    get_registry,
    reset_registry,
)

__all__ = [
    'Operation',
    'OperationResult',
    'apply_operation',
    'apply_operation_on_range',
    'operation_cost',
    'list_operations',
    'MetricResult',
    'compute_metric',
    'compute_all_metrics',
    'metric_names',
    'get_registry',
    'reset_registry',
    'DETECTORS',
    'detect_anomalies',
    'list_detectors',
    'generate_random',
    'find_pattern',
    'pattern_frequency',
    'replace_pattern',
]
