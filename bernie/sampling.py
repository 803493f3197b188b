"""
Binomial deviate generation, one function per strategy.

Every generator takes its precomputed strategy and a UniformSource and
returns an integer in [0, n]. The constant strategies never touch the
source.
"""

import math

from .primitives import UniformSource
from .strategies import (
    AlwaysN,
    AlwaysZero,
    BInversion,
    BruteForce,
    BTPE,
    FiftyFifty,
    Strategy,
)
from .utils import count_bits, stirling


# K&S: past this point the BINV cdf search has lost all precision.
BINV_MAX_SEARCH = 110

# |x - mode| at or below this is accepted by explicit pmf recurrence.
BTPE_EXPLICIT_RADIUS = 20


def generate_fifty_fifty(params: FiftyFifty, source: UniformSource) -> int:
    """Count set bits in n fair bits, 32 per draw."""
    n = params.n
    result = 0

    remainder = n & 31
    if remainder:
        # Leftover trials come from the top bits of one extra word.
        result += count_bits(source.next_u32() >> (32 - remainder))

    for _ in range(n >> 5):
        result += count_bits(source.next_u32())

    return result


def generate_brute_force(params: BruteForce, source: UniformSource) -> int:
    """Simulate n Bernoulli trials with one u32 draw each."""
    threshold = params.threshold
    result = 0
    for _ in range(params.n):
        if source.next_u32() < threshold:
            result += 1
    return result


def generate_binv(params: BInversion, source: UniformSource) -> int:
    """
    Inversion by sequential search (BINV).

    Walks the pmf upward from f(0) = q^n using
    f(x+1) = f(x) * (n - x) / (x + 1) * (p / q) until the single uniform draw
    is used up. Usually one draw; a search that runs past BINV_MAX_SEARCH has
    underflowed and restarts with a new draw.
    """
    n = params.n
    p_over_q = params.p_over_q

    while True:
        u = source.next_unit()
        fx = params.q_pow_n
        x = 0
        nx = n

        while u > fx:
            u -= fx
            fx *= nx
            nx -= 1
            x += 1
            fx /= x
            fx *= p_over_q
            if x > BINV_MAX_SEARCH:
                break
        else:
            return nx if params.mirror else x


def _btpe_accept(params: BTPE, x: int, v: float) -> bool:
    """Test v <= f(x) / f(mode) for a candidate from the envelope."""
    n = params.n
    p = params.p
    q = params.q
    m = int(params.mode)
    var = params.var

    k = abs(x - m)
    if k <= BTPE_EXPLICIT_RADIUS:
        pq = p / q
        g = (n + 1) * pq
        f = 1.0
        if m < x:
            for i in range(m + 1, x + 1):
                f *= g / i - pq
        elif m > x:
            for i in range(x + 1, m + 1):
                f /= g / i - pq
        return v <= f

    lnv = math.log(v)

    # Squeeze with bounds on log f(x); only valid while k < var/2 - 1.
    if k < 0.5 * var - 1.0:
        amaxp = k / var * ((k * (k / 3.0 + 0.625) + 1.0 / 6.0) / var + 0.5)
        ynorm = -(k * k / (2.0 * var))
        if lnv < ynorm - amaxp:
            return True
        if lnv > ynorm + amaxp:
            return False

    # log(m!(n-m)! / (x!(n-x)!) * (p/q)^(x-m)) via Stirling's formula.
    x1 = x + 1.0
    f1 = m + 1.0
    z1 = n + 1.0 - m
    w1 = n - x + 1.0
    bound = (
        params.xm * math.log(f1 / x1)
        + (n - m + 0.5) * math.log(z1 / w1)
        + (x - m) * math.log(w1 * p / (x1 * q))
        + stirling(f1)
        + stirling(z1)
        - stirling(x1)
        - stirling(w1)
    )
    return lnv <= bound


def generate_btpe(params: BTPE, source: UniformSource) -> int:
    """
    Kachitvichyanukul & Schmeiser BTPE rejection sampler.

    Each attempt draws two uniforms: u picks a region of the envelope
    (triangle, parallelogram, left tail, right tail), v places the candidate
    and drives the acceptance test. There is no attempt limit; the expected
    number of attempts is small and termination is almost sure.
    """
    n = params.n
    p1, p2, p3, p4 = params.p1, params.p2, params.p3, params.p4
    xm, xl, xr = params.xm, params.xl, params.xr
    c = params.c

    while True:
        u = source.next_unit() * p4
        v = source.next_unit()

        if u <= p1:
            # Triangle: always accepted.
            x = math.floor(xm - p1 * v + u)
            break

        if u <= p2:
            # Parallelogram
            xf = xl + (u - p1) / c
            v = v * c + 1.0 - abs(xf - xm) / p1
            if v > 1.0 or v <= 0.0:
                continue
            x = math.floor(xf)

        elif u <= p3:
            # Left exponential tail
            if v == 0.0:
                continue
            x = math.floor(xl + math.log(v) / params.lambda_l)
            if x < 0:
                continue
            v *= (u - p2) * params.lambda_l

        else:
            # Right exponential tail
            if v == 0.0:
                continue
            x = math.floor(xr - math.log(v) / params.lambda_r)
            if x > n:
                continue
            v *= (u - p3) * params.lambda_r

        if _btpe_accept(params, x, v):
            break

    return n - x if params.mirror else x


def _generate_zero(params: AlwaysZero, source: UniformSource) -> int:
    return 0


def _generate_n(params: AlwaysN, source: UniformSource) -> int:
    return params.n


_GENERATORS = {
    AlwaysZero: _generate_zero,
    AlwaysN: _generate_n,
    FiftyFifty: generate_fifty_fifty,
    BruteForce: generate_brute_force,
    BInversion: generate_binv,
    BTPE: generate_btpe,
}


def sample(strategy: Strategy, source: UniformSource) -> int:
    """
    Draw one deviate with the given strategy.

    Args:
        strategy: Output of select_strategy() or build_strategy()
        source: Uniform source owned by the caller

    Returns:
        Integer in [0, strategy.n]
    """
    try:
        generate = _GENERATORS[type(strategy)]
    except KeyError:
        raise TypeError(f"Unknown strategy: {strategy!r}") from None
    return generate(strategy, source)
