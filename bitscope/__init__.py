"""
bitscope - bit-string transforms and metrics.

Public API:
    from bitscope import apply_operation, compute_metric, compute_all_metrics

    apply_operation('XOR', '1100', {'mask': '1010'}).bits   # '0110'
    compute_all_metrics('01101000')['shannon_entropy']

Layers:
    bitscope.core.transforms   Pure bit-string functions (gates, shifts, arithmetic, ...)
    bitscope.core.metrics      Metric engines (bits in, Dict[str, float] out)
    bitscope.core.anomalies    Anomaly detectors (bits in, {position, length} records out)
    bitscope.primitives        numpy/scipy helpers (entropy, moments, spectra)

Also:
    bitscope.io          File I/O (reader, writer, manifest)
    bitscope.config      Metric tuning defaults (defaults.yaml)
    bitscope.validation  Input validation and the error taxonomy
    bitscope.run         Manifest-driven pipeline and CLI
"""

__version__ = '0.1.0'

from bitscope.core import (
    Operation,
    OperationResult,
    MetricResult,
    apply_operation,
    apply_operation_on_range,
    operation_cost,
    list_operations,
    compute_metric,
    compute_all_metrics,
    metric_names,
    detect_anomalies,
    find_pattern,
    generate_random,
)
from bitscope.validation import BitscopeError

__all__ = [
    'Operation',
    'OperationResult',
    'MetricResult',
    'apply_operation',
    'apply_operation_on_range',
    'operation_cost',
    'list_operations',
    'compute_metric',
    'compute_all_metrics',
    'metric_names',
    'detect_anomalies',
    'find_pattern',
    'generate_random',
    'BitscopeError',
]
