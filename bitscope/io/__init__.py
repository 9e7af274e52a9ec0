"""
bitscope I/O - every file read and write goes through here.

    reader    read_bits, bytes_to_bits, bits_to_bytes
    writer    write_table, write_metrics, write_transformations, write_bits, write_anomalies
    manifest  load_manifest, get_steps, get_budget, get_partitions, get_anomalies
"""

from .reader import read_bits, bytes_to_bits, bits_to_bytes
from .writer import write_table, write_metrics, write_transformations, write_bits, write_anomalies
from .manifest import load_manifest, get_steps, get_budget, get_partitions, get_anomalies

__all__ = [
    'read_bits',
    'bytes_to_bits',
    'bits_to_bytes',
    'write_table',
    'write_metrics',
    'write_transformations',
    'write_bits',
    'write_anomalies',
    'load_manifest',
    'get_steps',
    'get_budget',
    'get_partitions',
    'get_anomalies',
]
