"""
Moments and entropy of B(n, p).

All values are closed-form functions of (n, p) and agree with whatever
strategy the generator has cached. Degenerate inputs (p in {0, 1}, n == 0)
yield 0.0 instead of NaN or infinities.
"""

from enum import Enum
import math


# Exact entropy summation up to this many trials; Gaussian approximation above.
ENTROPY_EXACT_MAX_TRIALS = 24


class Expectation(str, Enum):
    """Selectors for expect(). Values are the query names."""

    MEAN = "mean"
    MEDIAN = "median"
    MODE = "mode"
    VARIANCE = "variance"
    STDDEV = "stddev"
    SKEW = "skew"
    KURTOSIS = "kurtosis"
    MIN = "min"
    MAX = "max"
    ENTROPY = "entropy"


def _parse_selector(selector) -> Expectation:
    try:
        return Expectation(selector)
    except ValueError:
        raise ValueError(f"Invalid expectation selector: {selector!r}") from None


def _mode(n: int, p: float) -> float:
    np_ = n * p
    result = math.floor(np_ + p)
    if result == np_ + p:
        # Two modes; report the lower one
        result -= 1
    return float(max(result, 0))


def entropy(n: int, p: float) -> float:
    """
    Shannon entropy of B(n, p) in bits.

    Exact summation of -P(k) log2 P(k) for n <= ENTROPY_EXACT_MAX_TRIALS,
    log2(sqrt(2 pi e n p q)) beyond.
    """
    q = 1.0 - p
    if n == 0 or p <= 0.0 or q <= 0.0:
        return 0.0

    if n == 1:
        return -p * math.log2(p) - q * math.log2(q)

    if n > ENTROPY_EXACT_MAX_TRIALS:
        return math.log2(math.sqrt(2.0 * math.pi * math.e * n * p * q))

    # Symmetric in p and q; keep q^n away from underflow
    if p > 0.5:
        p, q = q, p

    # Running C(n, k), p^k and q^(n-k), starting from k = 0
    result = 0.0
    ncombk = 1
    pk = 1.0
    qinv = 1.0 / q
    qnk = q ** n
    for k in range(n + 1):
        term = ncombk * pk * qnk
        if term > 0.0:
            result -= term * math.log2(term)
        pk *= p
        qnk *= qinv
        ncombk = ncombk * (n - k) // (k + 1)
    return result


def expect(n: int, p: float, selector) -> float:
    """
    Expected statistic of B(n, p).

    Args:
        n: Number of trials, >= 0
        p: Success probability in [0, 1]
        selector: Expectation member or its name ("mean", "entropy", ...)

    Returns:
        The requested value

    Raises:
        ValueError: if selector is not a known name
    """
    selector = _parse_selector(selector)
    np_ = n * p
    q = 1.0 - p

    if selector is Expectation.MEAN:
        return np_
    if selector in (Expectation.MEDIAN, Expectation.MODE):
        # NOTE: floor(np + p) is exact for the mode; the median can differ by one
        return _mode(n, p)
    if selector is Expectation.VARIANCE:
        return np_ * q
    if selector is Expectation.STDDEV:
        return math.sqrt(np_ * q)
    if selector is Expectation.SKEW:
        if p in (0.0, 0.5, 1.0) or np_ * q == 0.0:
            return 0.0
        return (q - p) / math.sqrt(np_ * q)
    if selector is Expectation.KURTOSIS:
        if np_ * q == 0.0:
            return 0.0
        return (1.0 - 6.0 * p * q) / (np_ * q)
    if selector is Expectation.MIN:
        return 0.0
    if selector is Expectation.MAX:
        return 0.0 if n == 0 or p == 0.0 else float(n)
    return entropy(n, p)


def expectations(n: int, p: float) -> dict[str, float]:
    """All statistics of B(n, p), keyed by selector name."""
    return {sel.value: expect(n, p, sel) for sel in Expectation}
