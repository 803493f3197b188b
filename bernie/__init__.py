"""
bernie: binomial random deviates with automatic algorithm selection.

Draws from B(n, p) by picking, per (n, p), the cheapest of six algorithms:
constant results, coin flips by bit counting, brute-force Bernoulli sums,
inversion (BINV), and Kachitvichyanukul & Schmeiser's BTPE rejection sampler.
Moments and entropy are available for the same parameters.

The key components:
- Taus88: seedable 32-bit uniform source
- ParameterSet: clamped (n, p)
- select_strategy / sample: algorithm choice and deviate generation
- expect: mean, median, mode, variance, stddev, skew, kurtosis, min, max, entropy
- BinomialGenerator: the above behind one object with a lazy strategy cache
"""

from .params import ParameterSet
from .taus88 import Taus88
from .strategies import StrategyKind, select_strategy, build_strategy
from .sampling import sample
from .expect import Expectation, expect, expectations
from .generator import BinomialGenerator

__version__ = "0.1.0"


def create_generator(trials: int = 1, probability: float = 0.5, **kwargs) -> BinomialGenerator:
    """
    Create a binomial generator.

    Args:
        trials: Number of trials n
        probability: Success probability p
        **kwargs: Source options (seed, source)

    Returns:
        Configured BinomialGenerator
    """
    return BinomialGenerator(trials=trials, probability=probability, **kwargs)


__all__ = [
    "ParameterSet",
    "Taus88",
    "StrategyKind",
    "select_strategy",
    "build_strategy",
    "sample",
    "Expectation",
    "expect",
    "expectations",
    "BinomialGenerator",
    "create_generator",
]
