#!/usr/bin/env python3
"""Benchmark script for tracepack performance testing.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path


def benchmark_import_time() -> float:
    """Measure import time of tracepack package."""
    start = time.perf_counter()
    import tracepack  # noqa: F401

    return time.perf_counter() - start


def _nested_failure(depth: int) -> None:
    if depth == 0:
        json.loads("{")
    _nested_failure(depth - 1)


def _capture(depth: int):
    from tracepack import record_from_exception

    try:
        _nested_failure(depth)
    except ValueError as exc:
        return record_from_exception(exc)
    raise AssertionError("nothing raised")


def benchmark_probe() -> float:
    """Measure one-time capability probing (distribution index build)."""
    from tracepack.infrastructure.capabilities import Capabilities

    start = time.perf_counter()
    Capabilities.probe()
    return time.perf_counter() - start


def benchmark_cold(iterations: int, depth: int) -> float:
    """Measure calculation with a fresh calculator (empty cache) each time."""
    from tracepack import PackagingCalculator
    from tracepack.infrastructure.capabilities import Capabilities

    capabilities = Capabilities.probe()
    records = [_capture(depth) for _ in range(iterations)]
    start = time.perf_counter()
    for record in records:
        PackagingCalculator(capabilities=capabilities).calculate(record)
    return time.perf_counter() - start


def benchmark_cached(iterations: int, depth: int) -> float:
    """Measure calculation with one calculator (warm cache)."""
    from tracepack import PackagingCalculator

    calculator = PackagingCalculator()
    records = [_capture(depth) for _ in range(iterations)]
    calculator.calculate(records[0])
    start = time.perf_counter()
    for record in records:
        calculator.calculate(record)
    return time.perf_counter() - start


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run tracepack benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    parser.add_argument("--iterations", type=int, default=200, help="Records per benchmark")
    parser.add_argument("--depth", type=int, default=20, help="Extra frames per record")
    args = parser.parse_args()

    results = []

    # Import time
    import_time = benchmark_import_time()
    results.append(
        {
            "name": "Import Time",
            "unit": "seconds",
            "value": import_time,
        }
    )

    results.append(
        {
            "name": "Capability Probe",
            "unit": "seconds",
            "value": benchmark_probe(),
        }
    )

    # Cold vs cached calculation
    results.append(
        {
            "name": f"Cold Calculation ({args.iterations} records)",
            "unit": "seconds",
            "value": benchmark_cold(args.iterations, args.depth),
        }
    )
    results.append(
        {
            "name": f"Cached Calculation ({args.iterations} records)",
            "unit": "seconds",
            "value": benchmark_cached(args.iterations, args.depth),
        }
    )

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()
