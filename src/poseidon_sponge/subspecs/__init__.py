"""Field and hash implementations for the Poseidon package."""

from .bn254 import Fr
from .koalabear import Fp
from .poseidon import (
    PoseidonParams,
    PoseidonSponge,
    create_sponge,
    load_parameters,
    permute,
    poseidon_hash,
)

__all__ = [
    "Fp",
    "Fr",
    "PoseidonParams",
    "PoseidonSponge",
    "create_sponge",
    "load_parameters",
    "permute",
    "poseidon_hash",
]
