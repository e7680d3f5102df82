"""
The optimized Poseidon permutation.

The design follows "Poseidon: A New Hash Function for Zero-Knowledge Proof
Systems" (https://eprint.iacr.org/2019/458), including the optimization of
Appendix B that replaces the dense MDS multiplication of every partial round
with a sparse matrix.

Round schedule, with half = R_F / 2:

    add start[0]
    (half - 1) x  [ S-box (full) -> add start[i]     -> MDS            ]
    1 x           [ S-box (full) -> add start[half]  -> pre-sparse MDS ]
    R_P x         [ S-box (slot 0) -> add partial[i] -> sparse[i]      ]
    (half - 1) x  [ S-box (full) -> add end[i]       -> MDS            ]
    1 x           [ S-box (full)                     -> MDS            ]

Constants are added *after* the S-box because the parameter derivation moved
each round's constants backwards through the linear layer.
"""

from __future__ import annotations

from poseidon_sponge.types import FieldElement, ShapeError

from .linalg import Vector, dot, matrix_mul_vector
from .params import PoseidonParams, SparseMatrix


def sbox(x: FieldElement) -> FieldElement:
    """
    The quintic S-box: x -> x^5.

    Computed as x * (x^2)^2, two squarings and one multiplication, so every
    element costs the same regardless of its value.
    """
    return x * x.square().square()


def sbox_full(state: Vector) -> Vector:
    """Applies the S-box to every slot of the state."""
    return [sbox(x) for x in state]


def sbox_partial(state: Vector) -> Vector:
    """Applies the S-box to slot 0 only."""
    return [sbox(state[0]), *state[1:]]


def add_round_constants(state: Vector, constants: Vector) -> Vector:
    """Adds a round-constant vector to the state, componentwise."""
    return [s + c for s, c in zip(state, constants, strict=True)]


def apply_sparse_matrix(
    state: Vector, sparse: SparseMatrix, field: type[FieldElement]
) -> Vector:
    """
    Multiplies the state by a sparse matrix in O(t).

    Slot 0 becomes the dot product of `row` with the whole state, and every
    other slot `j` receives `col_hat[j - 1]` times the *old* slot 0.

    Args:
        state: The current state vector.
        sparse: The decomposed matrix of this partial round.
        field: The field the state belongs to.

    Returns:
        The state vector after the sparse linear layer.
    """
    # Both the new slot 0 and the column updates read the pre-update state.
    old_first = state[0]
    new_first = dot(sparse.row, state, field)
    rest = [s + c * old_first for s, c in zip(state[1:], sparse.col_hat, strict=True)]
    return [new_first, *rest]


def permute(state: Vector, params: PoseidonParams) -> Vector:
    """
    Performs the full optimized Poseidon permutation on the given state.

    Args:
        state: A list of `params.t` field elements.
        params: The object defining the permutation's configuration.

    Returns:
        The new state after applying the permutation. The input is not modified.

    Raises:
        ShapeError: If the state length does not match `params.t`.
    """
    # Ensure the input state has the correct dimensions.
    if len(state) != params.t:
        raise ShapeError(expected=params.t, actual=len(state))

    field = params.field
    half = params.half_rounds_f
    start = params.start_constants

    # 1. Initial round constants, before any S-box.
    state = add_round_constants(list(state), start[0])

    # 2. First half of the full rounds, except the last one.
    for i in range(1, half):
        state = sbox_full(state)
        state = add_round_constants(state, start[i])
        state = matrix_mul_vector(params.mds, state, field)

    # 3. Last full round of the first half.
    #
    # Its linear layer is the pre-sparse matrix, which absorbs the dense
    # factor that the sparse matrices leave out.
    state = sbox_full(state)
    state = add_round_constants(state, start[half])
    state = matrix_mul_vector(params.pre_sparse_mds, state, field)

    # 4. Partial rounds.
    for constant, sparse in zip(params.partial_constants, params.sparse_matrices, strict=True):
        state = sbox_partial(state)
        state = [state[0] + constant, *state[1:]]
        state = apply_sparse_matrix(state, sparse, field)

    # 5. Second half of the full rounds, except the last one.
    for constants in params.end_constants:
        state = sbox_full(state)
        state = add_round_constants(state, constants)
        state = matrix_mul_vector(params.mds, state, field)

    # 6. Final round: no round constants.
    state = sbox_full(state)
    return matrix_mul_vector(params.mds, state, field)
