"""
Writer - all file writes go through here.

Tables (metrics, transformation log) are polars DataFrames written as
parquet, csv or json according to the path suffix. No other module should
call df.write_* directly.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import polars as pl

from bitscope.io.reader import bits_to_bytes
from bitscope.validation import InvalidParameterError

logger = logging.getLogger(__name__)


FORMATS = ('parquet', 'csv', 'json')


def _safe_write(df: pl.DataFrame, path: Path, verbose: bool = True) -> bool:
    """
    Guard against writing tables with no columns.

    Returns True if a file was written, False if skipped.
    """
    if df is None:
        return False

    if len(df.columns) == 0:
        if verbose:
            print(f"  !! Skipped {path} (empty schema - 0 columns)")
        return False

    fmt = path.suffix.lstrip('.').lower()
    if fmt == 'parquet':
        df.write_parquet(str(path))
    elif fmt == 'csv':
        df.write_csv(str(path))
    elif fmt == 'json':
        df.write_json(str(path))
    else:
        raise InvalidParameterError('path', str(path), f"unsupported format (use one of {', '.join(FORMATS)})")
    return True


def write_table(df: pl.DataFrame, path: str, verbose: bool = True) -> Optional[Path]:
    """
    Write a DataFrame to `path`, creating parent directories.

    Returns:
        Path to written file, or None if skipped
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if not _safe_write(df, path, verbose=verbose):
        return None

    logger.debug(f"wrote {path} ({df.height} rows)")
    if verbose:
        print(f"  -> {path} ({len(df)} rows)")
    return path


def metrics_frame(snapshots: Dict[str, Dict[str, float]]) -> pl.DataFrame:
    """One row per labelled metrics snapshot: label column then one column per metric."""
    rows = [{'label': label, **values} for label, values in snapshots.items()]
    if not rows:
        return pl.DataFrame({'label': []}, schema={'label': pl.Utf8})
    return pl.DataFrame(rows)


def write_metrics(snapshots: Dict[str, Dict[str, float]], path: str,
                  verbose: bool = True) -> Optional[Path]:
    return write_table(metrics_frame(snapshots), path, verbose=verbose)


def write_transformations(records: List[dict], path: str, schema: Dict[str, pl.DataType],
                          verbose: bool = True) -> Optional[Path]:
    """Transformation log, one row per step. `schema` keeps column types for empty logs."""
    df = pl.DataFrame(records, schema=schema) if records else pl.DataFrame(schema=schema)
    return write_table(df, path, verbose=verbose)


def write_bits(bits: str, path: str, binary: bool = False, verbose: bool = True) -> Path:
    """Write a bit-string as '0'/'1' text, or packed bytes when binary=True."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if binary:
        path.write_bytes(bits_to_bytes(bits))
    else:
        path.write_text(bits)
    if verbose:
        print(f"  -> {path} ({len(bits)} bits)")
    return path


ANOMALY_SCHEMA = {
    'detector': pl.Utf8,
    'position': pl.Int64,
    'length': pl.Int64,
}


def anomalies_frame(found: Dict[str, List[dict]]) -> pl.DataFrame:
    """One row per anomaly record: detector, position, length."""
    rows = [
        {'detector': name, 'position': r['position'], 'length': r['length']}
        for name, records in found.items()
        for r in records
    ]
    return pl.DataFrame(rows, schema=ANOMALY_SCHEMA) if rows else pl.DataFrame(schema=ANOMALY_SCHEMA)


def write_anomalies(found: Dict[str, List[dict]], path: str,
                    verbose: bool = True) -> Optional[Path]:
    return write_table(anomalies_frame(found), path, verbose=verbose)
