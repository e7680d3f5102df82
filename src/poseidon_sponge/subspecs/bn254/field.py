"""Core definition of the BN254 (alt_bn128) scalar field Fr."""

from typing import ClassVar

from poseidon_sponge.types import PrimeFieldElement

# =================================================================
# Field Constants
#
# The scalar field of the BN254 pairing-friendly curve, used by
# Groth16 and PLONK circuits. Since gcd(5, R - 1) = 1, the quintic map
# (x -> x^5) is a permutation of the field.
# =================================================================

R: int = 21888242871839275222246405745257275088548364400416034343698204186575808495617
"""The BN254 scalar field order."""

R_BITS: int = 254
"""The number of bits in the prime R."""

R_BYTES: int = (R_BITS + 7) // 8
"""The size of a BN254 scalar field element in bytes."""


class Fr(PrimeFieldElement):
    """An element in the BN254 scalar field F_r."""

    MODULUS: ClassVar[int] = R
    BYTES: ClassVar[int] = R_BYTES
