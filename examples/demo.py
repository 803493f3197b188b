#!/usr/bin/env python3
"""
Demo of the bernie binomial generator.

This demonstrates the basic usage:
1. Create a generator
2. Draw deviates
3. Change parameters and watch the algorithm change
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from bernie import BinomialGenerator


def main():
    print("=" * 60)
    print("bernie Binomial Generator Demo")
    print("=" * 60)

    gen = BinomialGenerator(trials=10, probability=0.3, seed=2024)
    print(f"\nGenerator: {gen}")
    print(f"  - Mean: {gen.query_expectation('mean')}")
    print(f"  - Variance: {gen.query_expectation('variance')}")
    print(f"  - Entropy: {gen.query_expectation('entropy'):.4f} bits")
    print(f"\nTen deviates: {gen.draw(10)}")

    print("\nAlgorithm by parameters:")
    for n, p in [(0, 0.7), (50, 1.0), (100, 0.5), (12, 0.3), (100, 0.1), (100, 0.2), (100, 0.9)]:
        gen.set_trials(n)
        gen.set_probability(p)
        x = gen.sample()
        print(f"  n={n:<4} p={p:<4} -> {gen.strategy.kind.name:<12} sample={x}")

    print("\nState report:")
    print(gen.describe())


if __name__ == "__main__":
    main()
