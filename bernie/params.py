"""
Parameters for the binomial generator.

Key parameters:
- n: Number of Bernoulli trials, clamped to n >= 0
- p: Per-trial success probability, clamped to [0, 1]

Writes never raise. Out-of-range input is clipped so a host can forward raw
user values straight through.
"""

from dataclasses import dataclass
import math


def clamp_trials(n) -> int:
    """Truncate to an integer and clip negatives to 0."""
    n = int(n)
    return n if n >= 0 else 0


def clamp_probability(p) -> float:
    """Clip to [0, 1]. NaN becomes 0."""
    p = float(p)
    if math.isnan(p) or p < 0.0:
        return 0.0
    if p > 1.0:
        return 1.0
    return p


@dataclass
class ParameterSet:
    """Binomial parameters B(n, p)."""

    n: int = 1  # Number of trials
    p: float = 0.5  # Success probability

    def __post_init__(self):
        self.n = clamp_trials(self.n)
        self.p = clamp_probability(self.p)

    def set_trials(self, n) -> None:
        self.n = clamp_trials(n)

    def set_probability(self, p) -> None:
        self.p = clamp_probability(p)

    @property
    def q(self) -> float:
        """Failure probability 1 - p."""
        return 1.0 - self.p

    @property
    def mean(self) -> float:
        return self.n * self.p

    def __repr__(self) -> str:
        return f"ParameterSet(n={self.n}, p={self.p})"
