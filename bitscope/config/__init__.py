"""
Configuration Management
========================

Metric tuning constants, loaded from the packaged defaults.yaml and
optionally overridden by a user YAML file.

Resolution order (later wins):
    1. bitscope/config/defaults.yaml
    2. $BITSCOPE_CONFIG (path to a YAML file), if set
    3. load_config(path) at runtime

Usage:
    from bitscope.config import get_config

    cfg = get_config()
    m = cfg['entropy']['sample_entropy_m']
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULTS_PATH = Path(__file__).parent / 'defaults.yaml'
ENV_VAR = 'BITSCOPE_CONFIG'

_config: Optional[Dict[str, Any]] = None


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path) as f:
        raw = yaml.safe_load(f)
    return raw or {}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge: override's leaves replace base's."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load defaults, then apply overrides from `path` (or $BITSCOPE_CONFIG).

    The result becomes the active configuration returned by get_config().
    The caller gets a copy.
    """
    global _config

    config = _read_yaml(DEFAULTS_PATH)

    override_path = path or os.environ.get(ENV_VAR)
    if override_path:
        p = Path(override_path)
        if not p.exists():
            raise FileNotFoundError(f"Config override not found: {p}")
        config = _merge(config, _read_yaml(p))
        logger.debug("Applied config overrides from %s", p)

    _config = config
    return copy.deepcopy(_config)


def get_config() -> Dict[str, Any]:
    """
    Get the active configuration, loading it on first use.

    Each call returns a private copy; edits never reach the cached config.
    """
    if _config is None:
        return load_config()
    return copy.deepcopy(_config)


def reset_config() -> None:
    """Drop the cached configuration (for testing)."""
    global _config
    _config = None


__all__ = ['get_config', 'load_config', 'reset_config', 'DEFAULTS_PATH', 'ENV_VAR']
