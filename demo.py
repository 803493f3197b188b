#!/usr/bin/env python3
"""
Demo and benchmarks for the bernie binomial generator.

Usage:
    python3 demo.py --sample                # Draw deviates and compare with expectations
    python3 demo.py --describe              # Print the generator state report
    python3 demo.py --benchmark             # Time every algorithm on its home ground
    python3 demo.py --sample -n 200 -p 0.3  # Custom parameters
"""

import argparse
import time

from bernie import BinomialGenerator, Expectation, StrategyKind


# =============================================================================
# Formatting Utilities
# =============================================================================


def format_count(n: int) -> str:
    """Format number with K/M suffix."""
    if n >= 1_000_000:
        return f"{n/1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n/1_000:.1f}K"
    return str(n)


def format_time(seconds: float) -> str:
    """Format time with appropriate unit."""
    if seconds >= 1:
        return f"{seconds:.2f}s"
    if seconds >= 0.001:
        return f"{seconds*1000:.2f}ms"
    return f"{seconds*1_000_000:.1f}us"


# =============================================================================
# Sampling Demo
# =============================================================================


def run_sample_demo(trials: int, probability: float, seed: int, count: int):
    """Draw deviates and compare sample statistics with the exact ones."""
    print("=" * 70)
    print("bernie Binomial Generator - Demo")
    print("=" * 70)

    gen = BinomialGenerator(trials=trials, probability=probability, seed=seed)

    print(f"\n{'Parameters':─^70}")
    print(f"  Trials (n):         {gen.trials:>12}")
    print(f"  Probability (p):    {gen.probability:>12.6f}")
    print(f"  Seed:               {seed:>12}")
    print(f"  Algorithm:          {gen.strategy.kind.name:>12}")

    print(f"\n{'Sampling (' + format_count(count) + ' deviates)':─^70}")
    start = time.perf_counter()
    values = gen.draw(count)
    elapsed = time.perf_counter() - start

    mean = sum(values) / count
    var = sum((x - mean) ** 2 for x in values) / (count - 1) if count > 1 else 0.0
    print(f"  First values:   {values[:10]}")
    print(f"  Time:           {format_time(elapsed):>12}")
    print(f"  Per deviate:    {format_time(elapsed / count):>12}")

    print(f"\n{'Expectations':─^70}")
    print(f"  {'statistic':<12} {'exact':>14} {'sample':>14}")
    print(f"  {'mean':<12} {gen.query_expectation(Expectation.MEAN):>14.6f} {mean:>14.6f}")
    print(f"  {'variance':<12} {gen.query_expectation(Expectation.VARIANCE):>14.6f} {var:>14.6f}")
    print(f"  {'min':<12} {gen.query_expectation(Expectation.MIN):>14.6f} {min(values):>14}")
    print(f"  {'max':<12} {gen.query_expectation(Expectation.MAX):>14.6f} {max(values):>14}")
    for name in ("mode", "stddev", "skew", "kurtosis", "entropy"):
        print(f"  {name:<12} {gen.query_expectation(name):>14.6f}")
    print("=" * 70)


def run_describe(trials: int, probability: float, seed: int):
    """Print the state report before and after strategy selection."""
    gen = BinomialGenerator(trials=trials, probability=probability, seed=seed)
    print(gen.describe())
    gen.sample()
    print(gen.describe())


# =============================================================================
# Benchmark
# =============================================================================


# One (n, p) per algorithm where automatic selection picks it.
BENCHMARK_CASES = [
    (StrategyKind.ALWAYS_ZERO, 100, 0.0),
    (StrategyKind.ALWAYS_N, 100, 1.0),
    (StrategyKind.FIFTY_FIFTY, 256, 0.5),
    (StrategyKind.BRUTE_FORCE, 12, 0.3),
    (StrategyKind.BINV, 100, 0.1),
    (StrategyKind.BTPE, 1000, 0.3),
]


def run_benchmark(seed: int, count: int):
    """Time each algorithm, plus BINV vs BTPE on the same parameters."""
    print("=" * 70)
    print("bernie Binomial Generator - Benchmark")
    print("=" * 70)

    print(f"\n{'Automatic Selection (' + format_count(count) + ' deviates each)':─^70}")
    print(f"  {'algorithm':<14} {'n':>6} {'p':>6} {'per deviate':>12} {'mean':>10} {'np':>10}")
    for kind, n, p in BENCHMARK_CASES:
        gen = BinomialGenerator(trials=n, probability=p, seed=seed)
        assert gen.strategy.kind is kind
        start = time.perf_counter()
        values = gen.draw(count)
        elapsed = time.perf_counter() - start
        mean = sum(values) / count
        print(
            f"  {kind.name:<14} {n:>6} {p:>6.2f} {format_time(elapsed / count):>12}"
            f" {mean:>10.3f} {gen.params.mean:>10.3f}"
        )

    print(f"\n{'Forced Algorithm, n=200 p=0.1 (np=20)':─^70}")
    for kind in (StrategyKind.BRUTE_FORCE, StrategyKind.BINV, StrategyKind.BTPE):
        gen = BinomialGenerator(trials=200, probability=0.1, seed=seed)
        gen.force_strategy(kind)
        start = time.perf_counter()
        gen.draw(count)
        elapsed = time.perf_counter() - start
        print(f"  {kind.name:<14} {format_time(elapsed / count):>12}")
    print("=" * 70)


# =============================================================================
# Main
# =============================================================================


# Default parameters
DEFAULT_TRIALS = 20
DEFAULT_PROBABILITY = 0.5
DEFAULT_SEED = 12345
DEFAULT_COUNT = 10_000


def main():
    parser = argparse.ArgumentParser(
        description="bernie binomial generator demo with benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 demo.py --sample                  # Sampling demo
  python3 demo.py --describe -n 100 -p 0.9  # State report (mirrored BTPE)
  python3 demo.py --benchmark               # Per-algorithm timings
  python3 demo.py --sample --count 100000   # More deviates
        """,
    )
    parser.add_argument("--sample", action="store_true", help="Run sampling demo")
    parser.add_argument("--describe", action="store_true", help="Print generator state report")
    parser.add_argument("--benchmark", action="store_true", help="Run per-algorithm benchmark")
    parser.add_argument("-n", "--trials", type=int, default=DEFAULT_TRIALS, help=f"Number of trials (default: {DEFAULT_TRIALS})")
    parser.add_argument("-p", "--probability", type=float, default=DEFAULT_PROBABILITY, help=f"Success probability (default: {DEFAULT_PROBABILITY})")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help=f"Seed, 0 for random (default: {DEFAULT_SEED})")
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT, help=f"Number of deviates (default: {DEFAULT_COUNT})")
    args = parser.parse_args()

    if args.count < 1:
        parser.error("--count must be at least 1")

    if args.benchmark:
        run_benchmark(args.seed, args.count)
    elif args.describe:
        run_describe(args.trials, args.probability, args.seed)
    elif args.sample:
        run_sample_demo(args.trials, args.probability, args.seed, args.count)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
