"""
Taus88 uniform generator.

L'Ecuyer's three-component combined Tausworthe generator ("Maximally
equidistributed combined Tausworthe generators", Math. Comp. 65, 1996).
Period is about 2^88; every call produces a full 32-bit word.

Seeding uses a 32-bit salt that is mixed into three fixed default seeds, so
adjacent salts give unrelated seed sets. Salt 0 asks for a fresh salt from
the operating system entropy pool.
"""

from Crypto.Random import get_random_bytes

from .utils import U32_MASK, u32_to_unit


# Default component seeds. Also the fallback when a mixed seed falls below
# its component minimum.
DEFAULT_SEEDS = (0x4A1FCF79, 0xB86271CC, 0x6C986D11)

# Each component ignores its low 1, 3 and 4 bits; a state below these values
# collapses to an all-zero (degenerate) component.
MIN_SEEDS = (2, 8, 16)


def _add_pepper(salt: int) -> int:
    """Scramble a salt so successive seeds differ in more than a few bits."""
    mixed = (salt >> 16) * (salt & 0xFFFF)
    return 0xFEDCFEDC if mixed == 0 else mixed


def seed_states(salt: int) -> tuple[int, int, int]:
    """
    Derive the three component states from a non-zero 32-bit salt.

    Args:
        salt: Seed value (only the low 32 bits are used)

    Returns:
        (s1, s2, s3), each satisfying its component minimum
    """
    salt &= U32_MASK
    k1, k2, k3 = DEFAULT_SEEDS

    s = (k1 ^ salt ^ (salt << 1)) & U32_MASK
    s1 = s if s >= MIN_SEEDS[0] else k1

    salt ^= _add_pepper(salt)
    s = (k2 ^ salt ^ (salt << 3)) & U32_MASK
    s2 = s if s >= MIN_SEEDS[1] else k2

    salt ^= _add_pepper(salt)
    s = (k3 ^ salt ^ (salt << 4)) & U32_MASK
    s3 = s if s >= MIN_SEEDS[2] else k3

    return s1, s2, s3


def fresh_salt() -> int:
    """Draw a non-zero 32-bit salt from the OS entropy pool."""
    salt = 0
    while salt == 0:
        salt = int.from_bytes(get_random_bytes(4), "little")
    return salt


class Taus88:
    """
    Taus88 uniform source.

    Implements the UniformSource protocol. Instances are independent; there
    is no shared seed pool.
    """

    def __init__(self, seed: int = 0):
        """
        Initialize and seed the generator.

        Args:
            seed: 32-bit salt. 0 (default) auto-seeds.
        """
        self._s1, self._s2, self._s3 = DEFAULT_SEEDS
        self.seed(seed)

    @classmethod
    def from_state(cls, s1: int, s2: int, s3: int) -> "Taus88":
        """
        Build a generator from explicit component states.

        Raises:
            ValueError: if a component is outside [minimum, 2^32)
        """
        for name, value, minimum in zip(("s1", "s2", "s3"), (s1, s2, s3), MIN_SEEDS):
            if value < minimum or value > U32_MASK:
                raise ValueError(f"{name}={value} out of range [{minimum}, 2^32)")
        gen = cls.__new__(cls)
        gen._s1, gen._s2, gen._s3 = s1, s2, s3
        return gen

    @property
    def state(self) -> tuple[int, int, int]:
        """Current component states (s1, s2, s3)."""
        return self._s1, self._s2, self._s3

    def seed(self, salt: int) -> None:
        """Re-seed from a 32-bit salt; 0 auto-seeds."""
        salt &= U32_MASK
        if salt == 0:
            salt = fresh_salt()
        self._s1, self._s2, self._s3 = seed_states(salt)

    def next_u32(self) -> int:
        """Advance all three components and return their combined output."""
        s1, s2, s3 = self._s1, self._s2, self._s3

        b = (((s1 << 13) ^ s1) & U32_MASK) >> 19
        s1 = (((s1 & 0xFFFFFFFE) << 12) & U32_MASK) ^ b
        b = (((s2 << 2) ^ s2) & U32_MASK) >> 25
        s2 = (((s2 & 0xFFFFFFF8) << 4) & U32_MASK) ^ b
        b = (((s3 << 3) ^ s3) & U32_MASK) >> 11
        s3 = (((s3 & 0xFFFFFFF0) << 17) & U32_MASK) ^ b

        self._s1, self._s2, self._s3 = s1, s2, s3
        return s1 ^ s2 ^ s3

    def next_unit(self) -> float:
        """Next value in [0, 1)."""
        return u32_to_unit(self.next_u32())

    def __repr__(self) -> str:
        return f"Taus88(s1={self._s1:#010x}, s2={self._s2:#010x}, s3={self._s3:#010x})"
