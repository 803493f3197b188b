"""
Numeric helpers shared by the binomial strategies.

Includes:
- u32 scaling onto the unit interval
- count_bits for the flip-coin generator
- bernoulli_threshold for the brute-force generator
- stirling correction term used by the BTPE acceptance test
"""

U32_MASK = 0xFFFFFFFF
U32_RANGE = 1 << 32


def u32_to_unit(value: int) -> float:
    """Map a 32-bit value onto [0, 1)."""
    return value / U32_RANGE


def count_bits(word: int) -> int:
    """Number of set bits in a 32-bit word."""
    return (word & U32_MASK).bit_count()


def bernoulli_threshold(p: float) -> int:
    """
    Map a probability onto the u32 domain.

    A uniform 32-bit draw d succeeds when d < threshold, so a single integer
    comparison replaces a float comparison per trial.

    Args:
        p: Success probability in [0, 1]

    Returns:
        round(p * 2^32), capped at 2^32 - 1
    """
    return min(round(p * U32_RANGE), U32_MASK)


def stirling(x: float) -> float:
    """
    Tail of Stirling's series for log(x!).

    log((x-1)!) = (x - 0.5) * log(x) - x + log(2*pi)/2 + stirling(x)

    Only the correction term is returned; BTPE needs it for x >= 1.
    """
    x2 = x * x
    return (13860.0 - (462.0 - (132.0 - (99.0 - 140.0 / x2) / x2) / x2) / x2) / x / 166320.0
