"""
bitscope Pipeline
=================

Loads a bit-string, applies the manifest's steps in order through the
operation catalog, and writes:

    metrics.<fmt>           one row per snapshot (initial, final)
    transformations.<fmt>   one row per executed step
    final.bits              the resulting bit-string as '0'/'1' text
    anomalies.<fmt>         detector hits on the final bits (when the manifest asks)

Pure orchestration - no computation here.

A step that fails is logged with success=False and leaves the bits
unchanged; later steps still run. With a budget, execution stops before
the first step whose cost exceeds what is left. Failed steps are not
charged.

Usage:
    python -m bitscope data.bin pipeline.yaml
    python -m bitscope data.bits pipeline.yaml -o out --format csv
"""

import argparse
import json
import logging
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import polars as pl

from bitscope.core.anomalies import detect_anomalies
from bitscope.core.operations import apply_operation, apply_operation_on_range, operation_cost
from bitscope.core.registry import compute_all_metrics
from bitscope.io.manifest import get_anomalies, get_budget, get_partitions, get_steps, load_manifest
from bitscope.io.reader import read_bits
from bitscope.io.writer import FORMATS, write_anomalies, write_bits, write_metrics, write_transformations
from bitscope.validation import BitscopeError, InvalidParameterError

logger = logging.getLogger(__name__)


@dataclass
class TransformationRecord:
    """One executed pipeline step."""
    step: int
    operation: str
    params: Dict[str, Any] = field(default_factory=dict)
    cost: int = 0
    budget_remaining: Optional[int] = None
    size_before: int = 0
    size_after: int = 0
    bits_before: str = ''
    bits_after: str = ''
    duration_ms: float = 0.0
    success: bool = True
    error: Optional[str] = None

    def to_row(self) -> Dict[str, Any]:
        row = asdict(self)
        row['params'] = json.dumps(self.params, sort_keys=True)
        return row


RECORD_SCHEMA = {
    'step': pl.Int64,
    'operation': pl.Utf8,
    'params': pl.Utf8,
    'cost': pl.Int64,
    'budget_remaining': pl.Int64,
    'size_before': pl.Int64,
    'size_after': pl.Int64,
    'bits_before': pl.Utf8,
    'bits_after': pl.Utf8,
    'duration_ms': pl.Float64,
    'success': pl.Boolean,
    'error': pl.Utf8,
}


def execute_steps(
    bits: str,
    steps: List[Dict[str, Any]],
    budget: Optional[int] = None,
    verbose: bool = False,
) -> Tuple[str, List[TransformationRecord]]:
    """
    Apply normalised steps (see io.manifest.get_steps) to `bits`.

    Returns:
        (final bits, one TransformationRecord per attempted step)
    """
    records = []
    remaining = budget

    for i, step in enumerate(steps, start=1):
        name, params, rng = step['operation'], step['params'], step['range']

        try:
            cost = operation_cost(name)
        except BitscopeError:
            # unknown name; apply_operation reports it below
            cost = 0

        if remaining is not None and cost > remaining:
            logger.info(f"step {i}: {name} costs {cost}, {remaining} left - stopping")
            if verbose:
                print(f"  [{i:02d}] {name}: budget exhausted ({remaining} left, needs {cost})")
            break

        t0 = time.perf_counter()
        if rng is None:
            result = apply_operation(name, bits, params)
        else:
            result = apply_operation_on_range(name, bits, rng[0], rng[1], params)
        elapsed = (time.perf_counter() - t0) * 1000

        if result.success and remaining is not None:
            remaining -= cost

        records.append(TransformationRecord(
            step=i,
            operation=result.operation,
            params=params,
            cost=cost if result.success else 0,
            budget_remaining=remaining,
            size_before=len(bits),
            size_after=len(result.bits),
            bits_before=bits,
            bits_after=result.bits,
            duration_ms=elapsed,
            success=result.success,
            error=None if result.success else str(result.error),
        ))

        if result.success:
            if verbose:
                print(f"  [{i:02d}] {result.operation}: {len(bits)} -> {len(result.bits)} bits ({elapsed:.1f}ms)")
            bits = result.bits
        else:
            logger.warning(f"step {i}: {result.operation} failed: {result.error}")
            if verbose:
                print(f"  [{i:02d}] {result.operation}: FAILED ({result.error})")

    return bits, records


def run(
    input_path: str,
    manifest_path: str,
    output_dir: str,
    fmt: Optional[str] = None,
    verbose: bool = True,
) -> Dict[str, Any]:
    """
    Run a manifest against an input file.

    Args:
        input_path: Bit-string source (.bin/.dat bytes, .txt/.bits text)
        manifest_path: Path to manifest.yaml
        output_dir: Where to write outputs
        fmt: Table format (parquet | csv | json); defaults to the manifest's, then parquet
        verbose: Print progress

    Returns:
        Dict with final bits, transformation records, metric snapshots
        and anomaly records (empty unless the manifest lists detectors)
    """
    input_path = Path(input_path)
    manifest_path = Path(manifest_path)
    output_dir = Path(output_dir)

    if not input_path.exists():
        raise FileNotFoundError(f"input not found: {input_path}")
    if not manifest_path.exists():
        raise FileNotFoundError(f"manifest not found: {manifest_path}")

    manifest = load_manifest(str(manifest_path))
    fmt = (fmt or manifest.get('format') or 'parquet').lower()
    if fmt not in FORMATS:
        raise InvalidParameterError('format', fmt, f"must be one of {', '.join(FORMATS)}")

    steps = get_steps(manifest)
    budget = get_budget(manifest)
    partitions = get_partitions(manifest)
    detectors = get_anomalies(manifest)

    bits = read_bits(str(input_path))

    if verbose:
        print("=" * 70)
        print("BITSCOPE PIPELINE")
        print("=" * 70)
        print(f"Input:    {input_path} ({len(bits)} bits)")
        print(f"Manifest: {manifest_path}")
        print(f"Output:   {output_dir}")
        print(f"Steps:    {len(steps)}")
        print(f"Budget:   {budget if budget is not None else 'unlimited'}")
        print()

    t0 = time.time()
    initial_metrics = compute_all_metrics(bits, partitions)
    final_bits, records = execute_steps(bits, steps, budget, verbose=verbose)
    final_metrics = compute_all_metrics(final_bits, partitions)
    anomalies = detect_anomalies(final_bits, detectors) if detectors is not None else {}

    output_dir.mkdir(parents=True, exist_ok=True)
    snapshots = {'initial': initial_metrics, 'final': final_metrics}
    write_metrics(snapshots, output_dir / f'metrics.{fmt}', verbose=verbose)
    write_transformations(
        [r.to_row() for r in records], output_dir / f'transformations.{fmt}',
        RECORD_SCHEMA, verbose=verbose,
    )
    write_bits(final_bits, output_dir / 'final.bits', verbose=verbose)
    if detectors is not None:
        write_anomalies(anomalies, output_dir / f'anomalies.{fmt}', verbose=verbose)

    if verbose:
        ok = sum(r.success for r in records)
        print()
        print(f"Done: {ok}/{len(records)} steps succeeded in {time.time() - t0:.2f}s")

    return {
        'bits': final_bits,
        'records': records,
        'metrics': snapshots,
        'anomalies': anomalies,
    }


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="bitscope pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Usage:
  python -m bitscope data.bin pipeline.yaml
  python -m bitscope data.bits pipeline.yaml -o out --format csv
"""
    )
    parser.add_argument('input', help='Input file (.bin/.dat bytes, .txt/.bits text)')
    parser.add_argument('manifest', help='Pipeline manifest.yaml')
    parser.add_argument('-o', '--output', default='output', help='Output directory (default: output)')
    parser.add_argument('--format', choices=FORMATS, help='Table format (default: manifest format or parquet)')
    parser.add_argument('-q', '--quiet', action='store_true', help='Suppress output')

    args = parser.parse_args()

    run(
        input_path=args.input,
        manifest_path=args.manifest,
        output_dir=args.output,
        fmt=args.format,
        verbose=not args.quiet,
    )


if __name__ == '__main__':
    main()
