"""
Vector and matrix arithmetic over a prime field.

Every function is pure: it returns a fresh list and never mutates its inputs.
The field is always passed explicitly so that the zero element of the right
field is used for accumulation.
"""

from __future__ import annotations

from typing import List

from poseidon_sponge.types import FieldElement, PrimeFieldElement, ValidationError

Vector = List[FieldElement]
"""A sequence of field elements, such as a Poseidon state."""

Matrix = List[List[FieldElement]]
"""A row-major matrix of field elements."""


def dot(lhs: Vector, rhs: Vector, field: type[FieldElement]) -> FieldElement:
    """Inner product of two vectors of equal length."""
    return sum((a * b for a, b in zip(lhs, rhs, strict=True)), field.zero())


def matrix_mul_vector(matrix: Matrix, vector: Vector, field: type[FieldElement]) -> Vector:
    """
    Standard matrix-vector product.

    Entry `i` of the result is row `i` of `matrix` dotted with `vector`.
    """
    return [dot(row, vector, field) for row in matrix]


def matrix_mul(lhs: Matrix, rhs: Matrix, field: type[FieldElement]) -> Matrix:
    """Standard matrix product `lhs * rhs`."""
    columns = transpose(rhs)
    return [[dot(row, column, field) for column in columns] for row in lhs]


def transpose(matrix: Matrix) -> Matrix:
    """Swap rows and columns."""
    return [list(column) for column in zip(*matrix, strict=True)]


def identity(size: int, field: type[FieldElement]) -> Matrix:
    """The `size x size` identity matrix."""
    return [[field.one() if i == j else field.zero() for j in range(size)] for i in range(size)]


def matrix_inverse(matrix: Matrix, field: type[PrimeFieldElement]) -> Matrix:
    """
    Inverts a square matrix with Gauss-Jordan elimination.

    Args:
        matrix: A square, invertible matrix.
        field: The field the entries belong to.

    Returns:
        The inverse matrix.

    Raises:
        ValidationError: If the matrix is not square or is singular.
    """
    size = len(matrix)
    if any(len(row) != size for row in matrix):
        raise ValidationError("matrix", detail=f"expected a square {size}x{size} matrix")

    # Augment with the identity: [A | I] reduces to [I | A^-1].
    rows = [list(row) + unit for row, unit in zip(matrix, identity(size, field), strict=True)]

    for col in range(size):
        # Find a row with a non-zero pivot in this column.
        pivot = next((r for r in range(col, size) if rows[r][col] != field.zero()), None)
        if pivot is None:
            raise ValidationError("matrix", detail="matrix is singular")
        rows[col], rows[pivot] = rows[pivot], rows[col]

        # Normalize the pivot row so the pivot becomes one.
        pivot_inv = rows[col][col].inverse()
        rows[col] = [x * pivot_inv for x in rows[col]]

        # Eliminate the column from every other row.
        for r in range(size):
            factor = rows[r][col]
            if r != col and factor != field.zero():
                rows[r] = [x - factor * p for x, p in zip(rows[r], rows[col], strict=True)]

    return [row[size:] for row in rows]
