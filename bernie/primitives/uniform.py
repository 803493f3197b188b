"""
Uniform Source protocol.

A Uniform Source is a seedable, deterministic generator of 32-bit words.
Every binomial strategy draws its randomness through this interface and
nothing else.
"""

from typing import Protocol


class UniformSource(Protocol):
    """
    Uniform pseudorandom 32-bit generator.

    Properties:
    - Deterministic: the same seed reproduces the same stream
    - Exclusive: one source belongs to one generator; callers serialize access
    """

    def seed(self, salt: int) -> None:
        """
        Re-initialize the generator state.

        Args:
            salt: 32-bit seed. 0 requests a fresh, unpredictable seed.
        """
        ...

    def next_u32(self) -> int:
        """
        Next raw value.

        Returns:
            Integer in [0, 2^32)
        """
        ...

    def next_unit(self) -> float:
        """
        Next value normalized to the unit interval.

        Returns:
            Float in [0, 1)
        """
        ...
