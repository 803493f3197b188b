"""
Binomial deviate generator.

BinomialGenerator owns a ParameterSet, a private UniformSource, and a lazily
computed Strategy. Any parameter write discards the cached strategy; the
next sample() re-selects it.

Not thread-safe: each instance assumes a single caller at a time.
"""

from .expect import Expectation, expect, expectations
from .params import ParameterSet
from .primitives import UniformSource
from .sampling import sample
from .strategies import (
    BInversion,
    BruteForce,
    BTPE,
    Strategy,
    StrategyKind,
    build_strategy,
    select_strategy,
)
from .taus88 import Taus88


class BinomialGenerator:
    """
    Generator of B(n, p) deviates with automatic algorithm selection.

    Example:
        gen = BinomialGenerator(trials=100, probability=0.2, seed=42)
        x = gen.sample()
        mean = gen.query_expectation("mean")
    """

    def __init__(
        self,
        trials: int = 1,
        probability: float = 0.5,
        seed: int | None = None,
        source: UniformSource | None = None,
    ):
        """
        Initialize generator.

        Args:
            trials: Number of trials n (clamped to >= 0)
            probability: Success probability p (clamped to [0, 1])
            seed: Seed for the default Taus88 source. None auto-seeds.
            source: Uniform source to use instead of a new Taus88. Must not
                be shared with another generator. seed is ignored if given.
        """
        self._params = ParameterSet(n=trials, p=probability)
        self._strategy: Strategy | None = None
        if source is None:
            source = Taus88(seed or 0)
        self._source = source

    # -------------------------------------------------------------------------
    # Parameters
    # -------------------------------------------------------------------------

    @property
    def params(self) -> ParameterSet:
        return self._params

    @property
    def trials(self) -> int:
        return self._params.n

    @trials.setter
    def trials(self, n: int) -> None:
        self.set_trials(n)

    @property
    def probability(self) -> float:
        return self._params.p

    @probability.setter
    def probability(self, p: float) -> None:
        self.set_probability(p)

    @property
    def source(self) -> UniformSource:
        return self._source

    def set_trials(self, n: int) -> None:
        """Set n. Negative values become 0."""
        self._params.set_trials(n)
        self._strategy = None

    def set_probability(self, p: float) -> None:
        """Set p. Values outside [0, 1] are clipped."""
        self._params.set_probability(p)
        self._strategy = None

    def reseed(self, seed: int) -> None:
        """Re-seed the uniform source. 0 auto-seeds."""
        self._source.seed(seed)

    # -------------------------------------------------------------------------
    # Strategy
    # -------------------------------------------------------------------------

    @property
    def strategy(self) -> Strategy:
        """Active strategy, selected now if parameters changed."""
        if self._strategy is None:
            self._strategy = select_strategy(self._params.n, self._params.p)
        return self._strategy

    @property
    def is_stale(self) -> bool:
        """True when the next sample() must re-select the strategy."""
        return self._strategy is None

    def force_strategy(self, kind: StrategyKind) -> Strategy:
        """
        Use a specific algorithm until the next parameter change.

        Intended for testing and benchmarking the individual algorithms.

        Raises:
            ValueError: if the algorithm cannot handle the current (n, p)
        """
        self._strategy = build_strategy(kind, self._params.n, self._params.p)
        return self._strategy

    # -------------------------------------------------------------------------
    # Sampling
    # -------------------------------------------------------------------------

    def sample(self) -> int:
        """Draw one deviate in [0, n]."""
        return sample(self.strategy, self._source)

    def draw(self, count: int) -> list[int]:
        """Draw count deviates."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        strategy = self.strategy
        return [sample(strategy, self._source) for _ in range(count)]

    # -------------------------------------------------------------------------
    # Expectations
    # -------------------------------------------------------------------------

    def query_expectation(self, selector: Expectation | str) -> float:
        """
        Expected statistic for the current parameters.

        Raises:
            ValueError: if selector is not a known name
        """
        return expect(self._params.n, self._params.p, selector)

    def expectations(self) -> dict[str, float]:
        """All ten statistics, keyed by name."""
        return expectations(self._params.n, self._params.p)

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def describe(self) -> str:
        """Human-readable report of parameters and the cached strategy."""
        lines = [
            "bernie state",
            f"  number of trials is {self._params.n}",
            f"  p is {self._params.p:f}",
            "  Using generator:",
        ]

        strategy = self._strategy
        if strategy is None:
            lines.append("    generating algorithm currently undetermined")
            return "\n".join(lines)

        lines.append(f"    {strategy.kind.value}")
        if isinstance(strategy, BruteForce):
            lines.append(f"    threshold set to {strategy.threshold}")
        elif isinstance(strategy, BInversion):
            if strategy.mirror:
                lines.append("    using mirrored distribution")
            lines.append(f"    q^n = {strategy.q_pow_n:f}")
            lines.append(f"    p/q = {strategy.p_over_q:f}")
        elif isinstance(strategy, BTPE):
            if strategy.mirror:
                lines.append("    using mirrored distribution")
            lines.append(f"    q = {strategy.q:f}")
            lines.append(f"    n * p * q = {strategy.var:f}")
            lines.append(f"    cached mode = {strategy.mode:f}")
            lines.append(
                f"    cumulative areas p1-4 = {strategy.p1:f}, {strategy.p2:f}, "
                f"{strategy.p3:f}, {strategy.p4:f}"
            )
            lines.append(f"    xm, xl, xr = {strategy.xm:f}, {strategy.xl:f}, {strategy.xr:f}")
            lines.append(f"    lambdas L/R = {strategy.lambda_l:f}, {strategy.lambda_r:f}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"BinomialGenerator(trials={self._params.n}, "
            f"probability={self._params.p}, source={self._source!r})"
        )
