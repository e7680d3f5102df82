"""The KoalaBear prime field."""

from .field import P_BITS, P_BYTES, Fp, P

__all__ = [
    "P",
    "P_BITS",
    "P_BYTES",
    "Fp",
]
