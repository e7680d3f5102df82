"""
Derivation of the optimized Poseidon parameters from the textbook ones.

Two rewrites turn the textbook schedule into the optimized one without
changing the permutation:

- Round constants are moved backwards through the linear layer, using
  `M * x + c = M * (x + M^-1 * c)`. Inside the partial rounds only slot 0
  goes through the S-box, so everything but slot 0 of a constant keeps moving
  back until it reaches the last full round of the first half. Each partial
  round is left with a single scalar constant.

- Every partial-round MDS is split as `L = A * B`, where
  `B = diag(1, L_hat)` commutes with the partial S-box and `A` is sparse.
  `B` is folded into the previous round's matrix and the process repeats,
  walking backwards. The last leftover `B` is folded into the pre-sparse
  matrix of the first half.

Writing `L = [[l00, v], [w, L_hat]]`, the sparse factor is
`A = [[l00, v * L_hat^-1], [w, I]]`.
"""

from __future__ import annotations

import logging

from poseidon_sponge.types import PrimeFieldElement

from .linalg import Matrix, Vector, matrix_inverse, matrix_mul, matrix_mul_vector
from .params import PoseidonParams, SparseMatrix
from .reference import PoseidonReferenceParams

logger = logging.getLogger(__name__)


def _optimize_constants(
    params: PoseidonReferenceParams, mds_inv: Matrix
) -> tuple[list[Vector], list[Vector], Vector]:
    """
    Move round constants backwards through the linear layers.

    Returns:
        The start constants, end constants and partial-round scalars.
    """
    field = params.field
    half = params.rounds_f // 2
    constants = params.round_constants

    # First half: the constant of round i is added after the S-box of round i - 1.
    start = [list(constants[0])]
    start.extend(matrix_mul_vector(mds_inv, constants[i], field) for i in range(1, half))

    # Partial rounds, walking backwards.
    #
    # `acc` is the constant vector that still has to be placed before the
    # S-box of the current round. Slot 0 cannot pass the S-box and stays as
    # the scalar of the previous round.
    acc = list(constants[half + params.rounds_p])
    partial: list[PrimeFieldElement] = [field.zero()] * params.rounds_p
    for i in reversed(range(params.rounds_p)):
        pulled = matrix_mul_vector(mds_inv, acc, field)
        partial[i] = pulled[0]
        acc = [constants[half + i][0]] + [
            c + p for c, p in zip(constants[half + i][1:], pulled[1:], strict=True)
        ]
    start.append(matrix_mul_vector(mds_inv, acc, field))

    # Second half: as in the first half, minus the round folded into `acc`.
    first_end = half + params.rounds_p + 1
    end = [
        matrix_mul_vector(mds_inv, constants[i], field)
        for i in range(first_end, params.rounds_f + params.rounds_p)
    ]

    return start, end, partial


def split_sparse_matrix(
    matrix: Matrix, field: type[PrimeFieldElement]
) -> tuple[SparseMatrix, Matrix]:
    """
    Split `matrix` into a sparse factor and `diag(1, L_hat)`.

    Applying the dense factor first and the sparse factor second is the
    same linear map as `matrix`.

    Args:
        matrix: A square matrix whose lower-right block is invertible.
        field: The field the entries belong to.

    Returns:
        The sparse factor `A` and the dense factor `B` with `matrix = A * B`.

    Raises:
        ValidationError: If the lower-right block is singular.
    """
    v = matrix[0][1:]
    w = [row[0] for row in matrix[1:]]
    l_hat = [row[1:] for row in matrix[1:]]

    # v * L_hat^-1, as a row vector.
    l_hat_inv = matrix_inverse(l_hat, field)
    v_hat = [
        sum((v[j] * l_hat_inv[j][k] for j in range(len(v))), field.zero())
        for k in range(len(v))
    ]
    sparse = SparseMatrix(row=[matrix[0][0], *v_hat], col_hat=w)

    dense = [[field.one()] + [field.zero()] * len(v)]
    dense.extend([field.zero(), *row] for row in l_hat)
    return sparse, dense


def _optimize_matrices(
    params: PoseidonReferenceParams,
) -> tuple[Matrix, list[SparseMatrix]]:
    """
    Decompose the partial-round linear layers into sparse matrices.

    Returns:
        The pre-sparse matrix and one sparse matrix per partial round.
    """
    field = params.field
    mds = params.mds

    # Collected from the last partial round to the first.
    sparse_matrices: list[SparseMatrix] = []
    carry: Matrix | None = None
    for _ in range(params.rounds_p):
        layer = mds if carry is None else matrix_mul(carry, mds, field)
        sparse, carry = split_sparse_matrix(layer, field)
        sparse_matrices.append(sparse)

    pre_sparse = mds if carry is None else matrix_mul(carry, mds, field)
    return [list(row) for row in pre_sparse], sparse_matrices[::-1]


def optimize_parameters(params: PoseidonReferenceParams) -> PoseidonParams:
    """
    Derive optimized parameters that compute the same permutation.

    Args:
        params: Textbook parameters with one constant vector per round.

    Returns:
        Parameters for `permute` such that
        `permute(x, result) == reference_permute(x, params)` for every state.

    Raises:
        ValidationError: If the MDS matrix or one of its sub-blocks is singular.
    """
    mds_inv = matrix_inverse(params.mds, params.field)
    start, end, partial = _optimize_constants(params, mds_inv)
    pre_sparse, sparse_matrices = _optimize_matrices(params)

    logger.debug(
        "Derived optimized Poseidon parameters: t=%d rF=%d rP=%d",
        params.t,
        params.rounds_f,
        params.rounds_p,
    )

    return PoseidonParams(
        field=params.field,
        t=params.t,
        rate=params.rate,
        rounds_f=params.rounds_f,
        rounds_p=params.rounds_p,
        start_constants=start,
        end_constants=end,
        partial_constants=partial,
        mds=[list(row) for row in params.mds],
        pre_sparse_mds=pre_sparse,
        sparse_matrices=sparse_matrices,
    )
