"""Core definition of the KoalaBear prime field Fp."""

from typing import ClassVar

from poseidon_sponge.types import PrimeFieldElement

# =================================================================
# Field Constants
#
# A 31-bit prime with fast reduction. P - 1 = 2^24 * 127 is coprime
# to 5, so the quintic S-box (x -> x^5) is a permutation here too.
# =================================================================

P: int = 2**31 - 2**24 + 1
"""The KoalaBear Prime: P = 2^31 - 2^24 + 1"""

P_BITS: int = 31
"""The number of bits in the prime P."""

P_BYTES: int = (P_BITS + 7) // 8
"""The size of a KoalaBear field element in bytes."""


class Fp(PrimeFieldElement):
    """An element in the KoalaBear prime field F_p."""

    MODULUS: ClassVar[int] = P
    BYTES: ClassVar[int] = P_BYTES
