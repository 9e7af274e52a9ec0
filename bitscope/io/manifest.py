"""
Manifest - parse a pipeline manifest.yaml.

    budget: 20                # optional
    format: parquet           # parquet | csv | json
    partitions:               # optional, fed to the partition metrics
    anomalies: true           # optional; true for every detector, or a list of names
      - {start: 0, end: 64, entropy: 0.9}
    steps:
      - operation: XOR
        params: {mask: '10101010'}
      - operation: ROL
        params: {count: 3}
        range: [0, 16]
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from bitscope.core.anomalies import list_detectors
from bitscope.validation import InvalidParameterError


def load_manifest(manifest_path: str) -> Dict[str, Any]:
    """
    Load a manifest file, or manifest.yaml inside a directory.
    """
    p = Path(manifest_path)

    if p.is_dir():
        p = p / 'manifest.yaml'

    if not p.exists():
        raise FileNotFoundError(f"No manifest at {manifest_path}")

    with open(p) as f:
        manifest = yaml.safe_load(f) or {}

    if not isinstance(manifest, dict):
        raise InvalidParameterError('manifest', str(p), 'top level must be a mapping')

    manifest['_manifest_path'] = str(p)
    return manifest


def get_steps(manifest: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Normalised steps: each has operation, params (dict) and range (tuple or None)."""
    steps = []
    for i, raw in enumerate(manifest.get('steps') or []):
        if isinstance(raw, str):
            raw = {'operation': raw}
        if not isinstance(raw, dict) or 'operation' not in raw:
            raise InvalidParameterError(f'steps[{i}]', raw, "expected a mapping with 'operation'")
        rng = raw.get('range')
        if rng is not None:
            if not isinstance(rng, (list, tuple)) or len(rng) != 2:
                raise InvalidParameterError(f'steps[{i}].range', rng, 'expected [start, end]')
            try:
                rng = (int(rng[0]), int(rng[1]))
            except (TypeError, ValueError) as e:
                raise InvalidParameterError(f'steps[{i}].range', rng, 'bounds must be integers') from e
        steps.append({
            'operation': str(raw['operation']),
            'params': dict(raw.get('params') or {}),
            'range': rng,
        })
    return steps


def get_budget(manifest: Dict[str, Any]) -> Optional[int]:
    budget = manifest.get('budget')
    if budget is None:
        return None
    try:
        return int(budget)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError('budget', budget, 'must be an integer') from e


def get_partitions(manifest: Dict[str, Any]) -> Optional[list]:
    return manifest.get('partitions')


def get_anomalies(manifest: Dict[str, Any]) -> Optional[List[str]]:
    """Detector names to run on the final bits; None when the manifest asks for none."""
    selected = manifest.get('anomalies')
    if selected is None or selected is False:
        return None
    if selected is True:
        return list_detectors()
    if isinstance(selected, str):
        selected = [selected]
    if not isinstance(selected, list):
        raise InvalidParameterError('anomalies', selected, 'expected true or a list of detector names')
    names = [str(name) for name in selected]
    unknown = sorted(set(names) - set(list_detectors()))
    if unknown:
        raise InvalidParameterError('anomalies', unknown, f"unknown detectors (use {', '.join(list_detectors())})")
    return names
