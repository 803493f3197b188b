"""Tests for binomial deviate generation."""

import math
from collections import Counter

import pytest
from scipy.stats import binom, chi2_contingency, chisquare

from bernie.sampling import sample
from bernie.strategies import (
    BInversion,
    StrategyKind,
    build_strategy,
    select_strategy,
)
from bernie.taus88 import Taus88


# Reject only on overwhelming evidence; every test uses a fixed seed.
P_VALUE_FLOOR = 1e-4


class ScriptedSource:
    """Uniform source that replays a fixed list of words."""

    def __init__(self, words):
        self._words = list(words)
        self.reads = 0

    def seed(self, salt):
        pass

    def next_u32(self):
        if self.reads >= len(self._words):
            raise AssertionError("scripted source exhausted")
        word = self._words[self.reads]
        self.reads += 1
        return word

    def next_unit(self):
        return self.next_u32() / 2**32


class CountingSource:
    """Taus88 wrapper that counts draws."""

    def __init__(self, seed):
        self._inner = Taus88(seed)
        self.reads = 0

    def seed(self, salt):
        self._inner.seed(salt)

    def next_u32(self):
        self.reads += 1
        return self._inner.next_u32()

    def next_unit(self):
        self.reads += 1
        return self._inner.next_unit()


def draw_many(n, p, count, seed, kind=None):
    """Draw count deviates from B(n, p), optionally with a forced strategy."""
    strategy = select_strategy(n, p) if kind is None else build_strategy(kind, n, p)
    source = Taus88(seed)
    return [sample(strategy, source) for _ in range(count)]


def goodness_of_fit(values, n, p):
    """Chi-squared p-value of values against B(n, p), pooling sparse bins."""
    counts = Counter(values)
    total = len(values)
    pmf = binom.pmf(range(n + 1), n, p)

    observed, expected = [], []
    obs_acc = exp_acc = 0.0
    for k in range(n + 1):
        obs_acc += counts.get(k, 0)
        exp_acc += pmf[k] * total
        if exp_acc >= 5.0:
            observed.append(obs_acc)
            expected.append(exp_acc)
            obs_acc = exp_acc = 0.0
    observed[-1] += obs_acc
    expected[-1] += exp_acc

    scale = sum(observed) / sum(expected)
    expected = [e * scale for e in expected]
    return chisquare(observed, expected).pvalue


def same_distribution(a, b, n):
    """Chi-squared contingency p-value for two samples on [0, n]."""
    ca, cb = Counter(a), Counter(b)
    row_a, row_b = [], []
    acc_a = acc_b = 0
    for k in range(n + 1):
        acc_a += ca.get(k, 0)
        acc_b += cb.get(k, 0)
        if acc_a + acc_b >= 20:
            row_a.append(acc_a)
            row_b.append(acc_b)
            acc_a = acc_b = 0
    row_a[-1] += acc_a
    row_b[-1] += acc_b

    _, pvalue, _, _ = chi2_contingency([row_a, row_b])
    return pvalue


class TestConstantStrategies:
    """AlwaysZero and AlwaysN consume no randomness."""

    @pytest.mark.parametrize("p", [0.0, 0.3, 0.5, 0.9, 1.0])
    def test_zero_trials(self, p):
        source = CountingSource(1)
        for _ in range(100):
            assert sample(select_strategy(0, p), source) == 0
        assert source.reads == 0

    def test_zero_probability(self):
        source = CountingSource(1)
        for n in [1, 15, 100, 10**6]:
            assert sample(select_strategy(n, 0.0), source) == 0
        assert source.reads == 0

    def test_unit_probability(self):
        source = CountingSource(1)
        for n in [1, 15, 100, 10**6]:
            assert sample(select_strategy(n, 1.0), source) == n
        assert source.reads == 0


class TestFiftyFifty:
    """Tests for the flip-coin generator."""

    def test_partial_word_uses_top_bits(self):
        """n % 32 leftover trials come from the top of the first word."""
        strategy = select_strategy(36, 0.5)
        assert sample(strategy, ScriptedSource([0xF0000000, 0xFFFFFFFF])) == 36
        assert sample(strategy, ScriptedSource([0x0FFFFFFF, 0x00000001])) == 1

    def test_whole_words(self):
        """n divisible by 32 reads exactly n / 32 words."""
        strategy = select_strategy(64, 0.5)
        source = ScriptedSource([0xFFFFFFFF, 0x00000000])
        assert sample(strategy, source) == 32
        assert source.reads == 2

    def test_single_trial(self):
        strategy = select_strategy(1, 0.5)
        assert sample(strategy, ScriptedSource([0x80000000])) == 1
        assert sample(strategy, ScriptedSource([0x7FFFFFFF])) == 0

    def test_reproducible(self):
        """Same stream, same deviates."""
        assert draw_many(700, 0.5, 50, seed=9) == draw_many(700, 0.5, 50, seed=9)


class TestBruteForce:
    """Tests for the Bernoulli-sum generator."""

    def test_threshold_comparison(self):
        """A trial succeeds when draw < threshold."""
        strategy = select_strategy(4, 0.25)
        source = ScriptedSource([0, 2**30 - 1, 2**30, 0xFFFFFFFF])
        assert sample(strategy, source) == 2
        assert source.reads == 4

    def test_one_draw_per_trial(self):
        source = CountingSource(5)
        sample(select_strategy(13, 0.7), source)
        assert source.reads == 13


class TestBInversion:
    """Tests for BINV."""

    def test_zero_draw(self):
        """u = 0 stops at x = 0, or n when mirrored."""
        assert sample(select_strategy(100, 0.1), ScriptedSource([0])) == 0
        assert sample(select_strategy(100, 0.9), ScriptedSource([0])) == 100

    def test_single_draw(self):
        """One uniform per deviate in the normal case."""
        source = ScriptedSource([0xFFFFFFFF])
        x = sample(select_strategy(100, 0.1), source)
        assert 0 <= x <= 100
        assert source.reads == 1

    def test_underflow_retry(self):
        """A search that runs past x = 110 restarts with a new draw."""
        strategy = BInversion(n=200, p=0.5, mirror=False, q_pow_n=1e-300, p_over_q=1.0)
        source = ScriptedSource([0x80000000, 0])
        assert sample(strategy, source) == 0
        assert source.reads == 2


class TestBTPE:
    """Tests for BTPE."""

    def test_triangle_tip(self):
        """u = v = 0 lands on the mode inside the triangle."""
        assert sample(select_strategy(100, 0.2), ScriptedSource([0, 0])) == 20
        assert sample(select_strategy(100, 0.8), ScriptedSource([0, 0])) == 80

    def test_range(self):
        """Deviates stay in [0, n], including far tails."""
        for n, p in [(100, 0.2), (100, 0.8), (40, 0.45), (5000, 0.01)]:
            for x in draw_many(n, p, 2000, seed=17):
                assert 0 <= x <= n


class TestDistribution:
    """Sample statistics agree with B(n, p) for every strategy."""

    CASES = [
        (40, 0.5),  # FiftyFifty
        (700, 0.5),  # FiftyFifty, many words
        (64, 0.5),  # FiftyFifty, no partial word
        (12, 0.3),  # BruteForce
        (15, 0.8),  # BruteForce
        (100, 0.1),  # BInversion
        (100, 0.9),  # BInversion, mirrored
        (1000, 0.003),  # BInversion, tiny p
        (100, 0.2),  # BTPE
        (100, 0.8),  # BTPE, mirrored
        (64, 0.25),  # BTPE at the BINV boundary
        (5000, 0.37),  # BTPE, squeeze and Stirling tests
        (1000, 0.5),  # BTPE, p = 0.5 above the flip-coin limit
    ]

    @pytest.mark.parametrize("n, p", CASES)
    def test_mean(self, n, p):
        """Sample mean of 10,000 deviates is within 5 standard errors of np."""
        count = 10000
        values = draw_many(n, p, count, seed=20240501)
        mean = sum(values) / count
        stderr = math.sqrt(n * p * (1.0 - p) / count)
        assert abs(mean - n * p) < 5.0 * stderr

    @pytest.mark.parametrize("n, p", CASES)
    def test_goodness_of_fit(self, n, p):
        """Histogram of 10,000 deviates fits the binomial pmf."""
        values = draw_many(n, p, 10000, seed=8675309)
        assert all(0 <= x <= n for x in values)
        assert goodness_of_fit(values, n, p) > P_VALUE_FLOOR

    @pytest.mark.parametrize(
        "kind",
        [StrategyKind.BRUTE_FORCE, StrategyKind.BINV, StrategyKind.BTPE],
    )
    def test_forced_strategies_agree(self, kind):
        """Each general algorithm produces B(200, 0.1) when forced."""
        values = draw_many(200, 0.1, 10000, seed=424242, kind=kind)
        assert goodness_of_fit(values, 200, 0.1) > P_VALUE_FLOOR


class TestMirrorSymmetry:
    """sample(n, p) and n - sample(n, 1 - p) are identically distributed."""

    @pytest.mark.parametrize("n, p", [(12, 0.8), (100, 0.9), (100, 0.7), (2000, 0.6)])
    def test_mirror(self, n, p):
        direct = draw_many(n, p, 10000, seed=1001)
        reflected = [n - x for x in draw_many(n, 1.0 - p, 10000, seed=2002)]
        assert same_distribution(direct, reflected, n) > P_VALUE_FLOOR


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
