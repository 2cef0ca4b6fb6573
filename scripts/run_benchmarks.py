#!/usr/bin/env python3
# ABOUTME: Script to run the composition engine benchmarks with detailed reporting
# ABOUTME: Uses pytest-benchmark to compare ComposeMiddleware against the no-op baseline

import argparse
import subprocess
import sys
from pathlib import Path

BENCHMARK_DIR = "src/action_middleware/tests/benchmark/"


def build_command(
    save_baseline: bool = False,
    compare_baseline: str | None = None,
    output_format: str = "table",
    keyword: str | None = None,
) -> list[str]:
    """Assemble the pytest invocation for the benchmark suite."""
    cmd = [sys.executable, "-m", "pytest", BENCHMARK_DIR, "-m", "benchmark", "-v"]

    if keyword:
        cmd.extend(["-k", keyword])

    if save_baseline:
        cmd.append("--benchmark-save=baseline")
    if compare_baseline:
        cmd.append(f"--benchmark-compare={compare_baseline}")

    if output_format == "json":
        cmd.append("--benchmark-json=benchmark_results.json")
    elif output_format == "histogram":
        cmd.append("--benchmark-histogram=benchmark_histogram")

    cmd.extend(
        [
            "--benchmark-min-rounds=5",
            "--benchmark-max-time=2.0",
            "--benchmark-warmup=on",
            "--benchmark-sort=mean",
            "--benchmark-group-by=func",
        ]
    )
    return cmd


def run_benchmarks(**options) -> int:
    """Run the composition engine benchmarks and report the outcome."""
    project_root = Path(__file__).parent.parent
    cmd = build_command(**options)

    print("🚀 Running action-middleware benchmarks")
    print(f"🔧 {' '.join(cmd)}")
    print("-" * 50)

    result = subprocess.run(cmd, cwd=project_root, text=True)
    if result.returncode != 0:
        print("\n❌ Benchmark run failed!")
        return result.returncode

    print("\n✅ Benchmarks completed")
    if options.get("output_format") == "json":
        print("📄 Results saved to benchmark_results.json")
    elif options.get("output_format") == "histogram":
        print("📈 Histogram saved to benchmark_histogram.svg")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Run benchmark tests for action-middleware")
    parser.add_argument("--save-baseline", action="store_true", help="Save results as baseline for later comparison")
    parser.add_argument("--compare", type=str, help="Compare against a saved baseline (e.g., '0001')")
    parser.add_argument("--format", choices=["table", "json", "histogram"], default="table", help="Output format")
    parser.add_argument("-k", "--keyword", type=str, help="Only run benchmarks matching this pytest -k expression")
    args = parser.parse_args()

    return run_benchmarks(
        save_baseline=args.save_baseline,
        compare_baseline=args.compare,
        output_format=args.format,
        keyword=args.keyword,
    )


if __name__ == "__main__":
    sys.exit(main())
