"""The Poseidon permutation, its parameters and the sponge built on it."""

from .loader import dump_parameters_file, load_parameters_file
from .optimization import optimize_parameters, split_sparse_matrix
from .params import (
    PoseidonParams,
    RawParameterDocument,
    SparseMatrix,
    load_parameters,
)
from .permutation import permute
from .reference import PoseidonReferenceParams, reference_permute
from .sponge import PoseidonSponge, SpongePhase, create_sponge, poseidon_hash

__all__ = [
    "PoseidonParams",
    "PoseidonReferenceParams",
    "PoseidonSponge",
    "RawParameterDocument",
    "SparseMatrix",
    "SpongePhase",
    "create_sponge",
    "dump_parameters_file",
    "load_parameters",
    "load_parameters_file",
    "optimize_parameters",
    "permute",
    "poseidon_hash",
    "reference_permute",
    "split_sparse_matrix",
]
