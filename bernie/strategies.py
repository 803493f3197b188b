"""
Strategy selection for binomial deviates.

Six generation strategies cover B(n, p):

| Strategy    | When                         | Cost                 |
|-------------|------------------------------|----------------------|
| AlwaysZero  | n == 0 or p == 0             | no draws             |
| AlwaysN     | p == 1                       | no draws             |
| FiftyFifty  | p == 0.5 and n <= 768        | ceil(n / 32) words   |
| BruteForce  | n <= 15                      | n words              |
| BInversion  | n > 15, n * min(p, q) < 16   | ~1 draw              |
| BTPE        | n > 15, n * min(p, q) >= 16  | ~2 draws per attempt |

The first matching row wins; the conditions overlap on purpose.

The strategy is a pure function of (n, p). Its cached coefficients are
computed once per parameter change and reused for every deviate.

References:
- Kachitvichyanukul, V. and Schmeiser, B. W. (1988). Binomial random variate
  generation. Communications of the ACM 31, 216-222. (BINV, BTPE)
"""

from dataclasses import dataclass
from enum import Enum
import math

from .utils import bernoulli_threshold


FIFTY_FIFTY_MAX_TRIALS = 768
BRUTE_FORCE_MAX_TRIALS = 15
# OPT: K&S put the BINV/BTPE crossover at a mean of 30.
INVERSION_MAX_MEAN = 16

# BTPE envelope constants from K&S. Not tunable.
_BTPE_RADIUS_SCALE = 2.195
_BTPE_RADIUS_SHIFT = 4.6
_BTPE_C_BASE = 0.134
_BTPE_C_NUM = 20.5
_BTPE_C_DEN = 15.3


class StrategyKind(Enum):
    """Generation algorithm tags, with their report labels."""

    ALWAYS_ZERO = "always zero"
    ALWAYS_N = "always n"
    FIFTY_FIFTY = "flip-coin algorithm"
    BRUTE_FORCE = "brute force algorithm"
    BINV = "Binomial Inversion algorithm"
    BTPE = "Kachitvichyanukul and Schmeiser BTPE algorithm"


@dataclass(frozen=True)
class AlwaysZero:
    n: int

    kind = StrategyKind.ALWAYS_ZERO


@dataclass(frozen=True)
class AlwaysN:
    n: int

    kind = StrategyKind.ALWAYS_N


@dataclass(frozen=True)
class FiftyFifty:
    """Symmetric case: count set bits in n fair random bits."""

    n: int

    kind = StrategyKind.FIFTY_FIFTY


@dataclass(frozen=True)
class BruteForce:
    """Direct Bernoulli sum against a u32 cut line."""

    n: int
    threshold: int  # A trial succeeds when draw < threshold

    kind = StrategyKind.BRUTE_FORCE


@dataclass(frozen=True)
class BInversion:
    """Inverse-cdf search from k = 0 (BINV)."""

    n: int
    p: float  # Effective probability, <= 0.5
    mirror: bool  # Reflect result as n - X
    q_pow_n: float  # P(X = 0) = q^n
    p_over_q: float

    kind = StrategyKind.BINV


@dataclass(frozen=True)
class BTPE:
    """
    Triangle/parallelogram/exponential-tail rejection envelope.

    p1..p4 are the cumulative areas of the triangle, parallelogram, left tail
    and right tail. The triangle spans [xl, xr] with its tip at xm.
    """

    n: int
    p: float  # Effective probability, <= 0.5
    q: float
    mirror: bool
    var: float  # n * p * q
    mode: float  # floor(n * p + p)
    p1: float
    p2: float
    p3: float
    p4: float
    xm: float
    xl: float
    xr: float
    c: float  # Tail height at the triangle edges
    lambda_l: float
    lambda_r: float

    kind = StrategyKind.BTPE


Strategy = AlwaysZero | AlwaysN | FiftyFifty | BruteForce | BInversion | BTPE


def _mirror(p: float) -> tuple[float, bool]:
    """Return (min(p, 1 - p), p > 0.5)."""
    if p > 0.5:
        return 1.0 - p, True
    return p, False


def make_binv(n: int, p: float) -> BInversion:
    """Precompute BINV coefficients for B(n, p)."""
    p_eff, mirror = _mirror(p)
    q = 1.0 - p_eff
    return BInversion(
        n=n,
        p=p_eff,
        mirror=mirror,
        q_pow_n=q ** n,
        p_over_q=p_eff / q,
    )


def make_btpe(n: int, p: float) -> BTPE:
    """
    Precompute the BTPE envelope for B(n, p).

    p must be strictly inside (0, 1); the tail slopes are infinite otherwise.
    """
    p_eff, mirror = _mirror(p)
    q = 1.0 - p_eff

    mean = n * p_eff
    var = mean * q
    npp = mean + p_eff
    mode = float(math.floor(npp))
    xm = mode + 0.5

    # Half-width of the triangle. Its height is 1, so this is also its area.
    p1 = math.floor(_BTPE_RADIUS_SCALE * math.sqrt(var) - _BTPE_RADIUS_SHIFT * q) + 0.5
    xl = xm - p1
    xr = xm + p1

    c = _BTPE_C_BASE + _BTPE_C_NUM / (_BTPE_C_DEN + mode)
    p2 = p1 * (1.0 + c + c)

    a = (npp - xl) / (npp - xl * p_eff)
    lambda_l = a * (1.0 + 0.5 * a)
    a = (xr - npp) / (xr * q)
    lambda_r = a * (1.0 + 0.5 * a)

    p3 = p2 + c / lambda_l
    p4 = p3 + c / lambda_r

    return BTPE(
        n=n,
        p=p_eff,
        q=q,
        mirror=mirror,
        var=var,
        mode=mode,
        p1=p1,
        p2=p2,
        p3=p3,
        p4=p4,
        xm=xm,
        xl=xl,
        xr=xr,
        c=c,
        lambda_l=lambda_l,
        lambda_r=lambda_r,
    )


def select_strategy(n: int, p: float) -> Strategy:
    """
    Pick the generation strategy for B(n, p).

    Args:
        n: Number of trials, >= 0
        p: Success probability in [0, 1]

    Returns:
        The strategy instance, with its coefficients precomputed
    """
    if n == 0 or p == 0.0:
        return AlwaysZero(n)

    if p == 1.0:
        return AlwaysN(n)

    if p == 0.5 and n <= FIFTY_FIFTY_MAX_TRIALS:
        return FiftyFifty(n)

    if n <= BRUTE_FORCE_MAX_TRIALS:
        return BruteForce(n, bernoulli_threshold(p))

    p_eff, _ = _mirror(p)
    if p_eff * n < INVERSION_MAX_MEAN:
        return make_binv(n, p)
    return make_btpe(n, p)


def build_strategy(kind: StrategyKind, n: int, p: float) -> Strategy:
    """
    Build a specific strategy, bypassing automatic selection.

    The deviates still follow B(n, p) except for FIFTY_FIFTY, which always
    samples p = 0.5, and ALWAYS_ZERO / ALWAYS_N, which are constant.

    Raises:
        ValueError: for BINV or BTPE when p is not strictly inside (0, 1)
            or n is 0, and for BTPE when the triangle leaves [0, n]
    """
    kind = StrategyKind(kind)

    if kind is StrategyKind.ALWAYS_ZERO:
        return AlwaysZero(n)
    if kind is StrategyKind.ALWAYS_N:
        return AlwaysN(n)
    if kind is StrategyKind.FIFTY_FIFTY:
        return FiftyFifty(n)
    if kind is StrategyKind.BRUTE_FORCE:
        return BruteForce(n, bernoulli_threshold(p))

    if n < 1 or not 0.0 < p < 1.0:
        raise ValueError(f"{kind.name} requires n >= 1 and 0 < p < 1, got n={n}, p={p}")
    if kind is StrategyKind.BINV:
        return make_binv(n, p)

    strategy = make_btpe(n, p)
    # The triangle must sit inside [0, n]; that needs a moderately large mean.
    if strategy.p1 <= 0.0 or strategy.xl < 0.0 or strategy.xr > n:
        raise ValueError(f"BTPE envelope undefined for n={n}, p={p}: mean too small")
    return strategy
