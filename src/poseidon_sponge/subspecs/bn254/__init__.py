"""The BN254 scalar field."""

from .field import R, R_BITS, R_BYTES, Fr

__all__ = [
    "R",
    "R_BITS",
    "R_BYTES",
    "Fr",
]
