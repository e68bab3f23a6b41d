#!/usr/bin/env python
"""Benchmark: Normal Distribution Kernels.

fastnorm kernels vs scipy.stats.norm on float64 arrays of growing size.

Kernels tested:
1. pdf  - normal_pdf vs norm.pdf
2. cdf  - normal_cdf (A&S erf) and normal_cdf_precise vs norm.cdf
3. prob - normal_prob vs norm.cdf(upper) - norm.cdf(lower)

Usage:
    python benchmarks/benchmark_normal.py
    python benchmarks/benchmark_normal.py --kernel cdf
    python benchmarks/benchmark_normal.py --quick
"""

import argparse
import time
import warnings
from typing import Any, Callable, Dict, List, Tuple

import numpy as np

warnings.filterwarnings('ignore')

# Check dependencies
try:
    from scipy.stats import norm
    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False

try:
    from fastnorm.kernel.normal import (
        normal_pdf, normal_cdf, normal_prob,
        normal_cdf_precise, normal_prob_precise,
    )
    FASTNORM_AVAILABLE = True
except ImportError:
    FASTNORM_AVAILABLE = False


MU = 0.5
SIGMA = 2.0


# =============================================================================
# Utilities
# =============================================================================

def timeit(func: Callable, n_runs: int = 5, warmup: int = 1) -> Tuple[float, Any]:
    """Time a function and return (avg_time, last_result)."""
    result = None
    for _ in range(warmup):
        result = func()

    start = time.perf_counter()
    for _ in range(n_runs):
        result = func()
    elapsed = time.perf_counter() - start

    return elapsed / n_runs, result


def create_test_data(n: int, seed: int = 42) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Samples around MU plus ordered interval bounds."""
    rng = np.random.default_rng(seed)
    x = rng.normal(MU, SIGMA, n)
    a = rng.normal(MU, SIGMA, n)
    b = rng.normal(MU, SIGMA, n)
    return x, np.minimum(a, b), np.maximum(a, b)


def format_time(seconds: float) -> str:
    """Format time with appropriate unit."""
    if seconds < 0.001:
        return f"{seconds*1e6:.1f}μs"
    elif seconds < 1:
        return f"{seconds*1e3:.2f}ms"
    else:
        return f"{seconds:.2f}s"


# =============================================================================
# Benchmarks
# =============================================================================

def bench_pdf(n: int, n_runs: int) -> Dict[str, Any]:
    x, _, _ = create_test_data(n)
    out = np.empty_like(x)

    def run_fastnorm():
        normal_pdf(x, MU, SIGMA, out)
        return out

    t_scipy, expected = timeit(lambda: norm.pdf(x, MU, SIGMA), n_runs)
    t_fast, result = timeit(run_fastnorm, n_runs)

    return {
        "kernel": "pdf",
        "n": n,
        "scipy_time": t_scipy,
        "fastnorm_time": t_fast,
        "speedup": t_scipy / t_fast if t_fast > 0 else float('inf'),
        "max_err": float(np.max(np.abs(result - expected))) if n else 0.0,
    }


def bench_cdf(n: int, n_runs: int, precise: bool = False) -> Dict[str, Any]:
    x, _, _ = create_test_data(n)
    out = np.empty_like(x)
    kernel = normal_cdf_precise if precise else normal_cdf

    def run_fastnorm():
        kernel(x, MU, SIGMA, out)
        return out

    t_scipy, expected = timeit(lambda: norm.cdf(x, MU, SIGMA), n_runs)
    t_fast, result = timeit(run_fastnorm, n_runs)

    return {
        "kernel": "cdf_precise" if precise else "cdf",
        "n": n,
        "scipy_time": t_scipy,
        "fastnorm_time": t_fast,
        "speedup": t_scipy / t_fast if t_fast > 0 else float('inf'),
        "max_err": float(np.max(np.abs(result - expected))) if n else 0.0,
    }


def bench_prob(n: int, n_runs: int, precise: bool = False) -> Dict[str, Any]:
    _, lower, upper = create_test_data(n)
    out = np.empty_like(lower)
    kernel = normal_prob_precise if precise else normal_prob

    def run_fastnorm():
        kernel(lower, upper, MU, SIGMA, out)
        return out

    def run_scipy():
        return norm.cdf(upper, MU, SIGMA) - norm.cdf(lower, MU, SIGMA)

    t_scipy, expected = timeit(run_scipy, n_runs)
    t_fast, result = timeit(run_fastnorm, n_runs)

    return {
        "kernel": "prob_precise" if precise else "prob",
        "n": n,
        "scipy_time": t_scipy,
        "fastnorm_time": t_fast,
        "speedup": t_scipy / t_fast if t_fast > 0 else float('inf'),
        "max_err": float(np.max(np.abs(result - expected))) if n else 0.0,
    }


BENCHMARKS = {
    "pdf": [lambda n, r: bench_pdf(n, r)],
    "cdf": [lambda n, r: bench_cdf(n, r), lambda n, r: bench_cdf(n, r, precise=True)],
    "prob": [lambda n, r: bench_prob(n, r), lambda n, r: bench_prob(n, r, precise=True)],
}


def run_scaling_benchmark(kernel: str, quick: bool = False, n_runs: int = 5) -> List[Dict[str, Any]]:
    """Run one kernel family across array sizes."""
    sizes = [1_000, 100_000] if quick else [1_000, 10_000, 100_000, 1_000_000, 10_000_000]
    results = []

    print(f"\n--- {kernel.upper()} Scaling ---")
    print(f"{'Kernel':<14} {'N':<12} {'scipy':<12} {'fastnorm':<12} {'Speedup':<10} {'Max err':<10}")
    print("-" * 80)

    for bench in BENCHMARKS[kernel]:
        for n in sizes:
            result = bench(n, n_runs)
            results.append(result)

            print(f"{result['kernel']:<14} {n:<12} "
                  f"{format_time(result['scipy_time']):<12} "
                  f"{format_time(result['fastnorm_time']):<12} "
                  f"{result['speedup']:<10.2f}x "
                  f"{result['max_err']:<10.1e}")

    return results


def run_all_benchmarks(quick: bool = False, n_runs: int = 5):
    """Run all kernel benchmarks."""
    all_results = []

    for kernel in BENCHMARKS:
        all_results.extend(run_scaling_benchmark(kernel, quick, n_runs))

    # Summary
    print(f"\n{'='*80}")
    print("OVERALL SUMMARY")
    print(f"{'='*80}")

    for name in sorted({r["kernel"] for r in all_results}):
        speedups = [r["speedup"] for r in all_results
                    if r["kernel"] == name and 0 < r["speedup"] != float('inf')]
        if speedups:
            print(f"\n{name.upper()}:")
            print(f"  Median speedup: {np.median(speedups):.1f}x")
            print(f"  Range:          {min(speedups):.1f}x - {max(speedups):.1f}x")


def main():
    parser = argparse.ArgumentParser(description="Normal Distribution Kernel Benchmarks")
    parser.add_argument("--kernel", choices=["pdf", "cdf", "prob", "all"], default="all",
                        help="Which kernel to benchmark")
    parser.add_argument("--quick", action="store_true", help="Quick mode with smaller arrays")
    parser.add_argument("--runs", type=int, default=5, help="Number of runs")
    args = parser.parse_args()

    print("=" * 80)
    print("NORMAL KERNEL BENCHMARK")
    print("=" * 80)
    print(f"scipy available: {SCIPY_AVAILABLE}")
    print(f"fastnorm available: {FASTNORM_AVAILABLE}")

    if not SCIPY_AVAILABLE:
        print("ERROR: scipy is required")
        return

    if not FASTNORM_AVAILABLE:
        print("ERROR: fastnorm is required")
        return

    if args.kernel == "all":
        run_all_benchmarks(args.quick, args.runs)
    else:
        run_scaling_benchmark(args.kernel, args.quick, args.runs)


if __name__ == "__main__":
    main()
