"""
Parameter model for the optimized Poseidon permutation.

Parameters arrive as a raw document whose field elements are fixed-width
little-endian byte arrays. Loading happens in two steps:

1. The raw document is checked against an explicit schema
   (`RawParameterDocument`), rejecting unknown or malformed shapes early.
2. Every byte array is decoded through the field element interface and the
   result is validated into an immutable `PoseidonParams`.

All length and dimension invariants are checked once, at construction time.
An undersized array would otherwise surface as an index error deep inside
the round schedule.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError
from typing_extensions import Annotated

from poseidon_sponge.types import CamelModel, PrimeFieldElement, ValidationError

from ..bn254 import Fr

logger = logging.getLogger(__name__)


def _coerce_element_bytes(value: Any) -> Any:
    """
    Accept a field element encoding as bytes, a list of octets or a hex string.

    Parameter files produced by JSON tooling store byte arrays as lists of
    integers. Hand-written files are easier to read with hex strings.
    """
    if isinstance(value, list):
        if not all(isinstance(b, int) and not isinstance(b, bool) and 0 <= b < 256 for b in value):
            raise ValueError("byte arrays must contain integers in [0, 255]")
        return bytes(value)
    if isinstance(value, str):
        return bytes.fromhex(value.removeprefix("0x"))
    return value


ElementBytes = Annotated[
    bytes,
    BeforeValidator(_coerce_element_bytes),
    PlainSerializer(lambda data: "0x" + data.hex(), return_type=str, when_used="json"),
]
"""The fixed-width little-endian encoding of one field element."""


# =================================================================
# Raw Document Schema
#
# Mirrors the layout written by the parameter generator:
#
#   t, rate, rF, rP
#   constants:   {start, end, partial}
#   mdsMatrices: {mds, preSparseMds, sparseMatrices: [{row, colHat}]}
# =================================================================


class RawModel(CamelModel):
    """Base for raw document models: camelCase keys, unknown keys rejected."""

    model_config = CamelModel.model_config | {"extra": "forbid", "frozen": True}


class RawConstants(RawModel):
    """Round constants as encoded in the parameter document."""

    start: list[list[ElementBytes]]
    end: list[list[ElementBytes]]
    partial: list[ElementBytes]


class RawSparseMatrix(RawModel):
    """One sparse matrix as encoded in the parameter document."""

    row: list[ElementBytes]
    col_hat: list[ElementBytes]


class RawMdsMatrices(RawModel):
    """Linear layer matrices as encoded in the parameter document."""

    mds: list[list[ElementBytes]]
    pre_sparse_mds: list[list[ElementBytes]]
    sparse_matrices: list[RawSparseMatrix]


class RawParameterDocument(RawModel):
    """The raw Poseidon parameter document, before field decoding."""

    t: int
    rate: int
    rounds_f: int = Field(alias="rF")
    rounds_p: int = Field(alias="rP")
    constants: RawConstants
    mds_matrices: RawMdsMatrices


# =================================================================
# Validated Parameters
# =================================================================


class SparseMatrix(BaseModel):
    """
    A partial-round linear layer in decomposed form.

    The matrix has the shape

        [ row[0]     row[1] ... row[t-1] ]
        [ col_hat[0]     1           0   ]
        [ ...                ...         ]
        [ col_hat[t-2]   0           1   ]

    so applying it costs O(t) instead of O(t^2).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    row: List[PrimeFieldElement] = Field(description="First row of the matrix (length t).")
    col_hat: List[PrimeFieldElement] = Field(
        description="First column below the diagonal (length t - 1)."
    )


class PoseidonParams(BaseModel):
    """Parameters for a specific instance of the optimized Poseidon permutation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    field: type[PrimeFieldElement] = Field(description="The field every value belongs to.")
    t: int = Field(description="The size of the state.")
    rate: int = Field(description="Number of state slots used for input and output.")
    rounds_f: int = Field(description="Total number of 'full' rounds.")
    rounds_p: int = Field(description="Total number of 'partial' rounds.")
    start_constants: List[List[PrimeFieldElement]] = Field(
        description="Round constants for the first half of the full rounds."
    )
    end_constants: List[List[PrimeFieldElement]] = Field(
        description="Round constants for the second half of the full rounds."
    )
    partial_constants: List[PrimeFieldElement] = Field(
        description="One constant per partial round, added to slot 0."
    )
    mds: List[List[PrimeFieldElement]] = Field(description="Dense MDS matrix of the full rounds.")
    pre_sparse_mds: List[List[PrimeFieldElement]] = Field(
        description="Dense matrix applied once before the partial rounds."
    )
    sparse_matrices: List[SparseMatrix] = Field(
        description="Decomposed linear layers of the partial rounds."
    )

    @property
    def capacity(self) -> int:
        """Number of state slots that input never touches directly."""
        return self.t - self.rate

    @property
    def half_rounds_f(self) -> int:
        """Number of full rounds on each side of the partial rounds."""
        return self.rounds_f // 2

    @model_validator(mode="after")
    def check_geometry(self) -> "PoseidonParams":
        """Ensures the round counts and every array dimension are consistent."""
        if self.t < 2:
            raise ValidationError("t", detail=f"state width must be at least 2, got {self.t}")
        if not 1 <= self.rate < self.t:
            raise ValidationError(
                "rate", detail=f"rate must satisfy 1 <= rate < t={self.t}, got {self.rate}"
            )
        if self.rounds_f < 2 or self.rounds_f % 2 != 0:
            raise ValidationError(
                "rF", detail=f"full rounds must be a positive even number, got {self.rounds_f}"
            )
        if self.rounds_p < 0:
            raise ValidationError(
                "rP", detail=f"partial rounds must be non-negative, got {self.rounds_p}"
            )

        half = self.half_rounds_f
        t = self.t

        # Round constants.
        _check_matrix("constants.start", self.start_constants, half + 1, t)
        _check_matrix("constants.end", self.end_constants, half - 1, t)
        _check_length("constants.partial", self.partial_constants, self.rounds_p)

        # Linear layers.
        _check_matrix("mdsMatrices.mds", self.mds, t, t)
        _check_matrix("mdsMatrices.preSparseMds", self.pre_sparse_mds, t, t)
        _check_length("mdsMatrices.sparseMatrices", self.sparse_matrices, self.rounds_p)
        for i, sparse in enumerate(self.sparse_matrices):
            _check_length(f"mdsMatrices.sparseMatrices[{i}].row", sparse.row, t)
            _check_length(f"mdsMatrices.sparseMatrices[{i}].colHat", sparse.col_hat, t - 1)

        # Mixing elements of different fields would silently compute garbage.
        if not all(isinstance(x, self.field) for x in self._all_elements()):
            raise ValidationError(
                "field", detail=f"every element must be a {self.field.__name__} element"
            )

        return self

    def _all_elements(self) -> list[PrimeFieldElement]:
        elements: list[PrimeFieldElement] = list(self.partial_constants)
        for vector in (*self.start_constants, *self.end_constants, *self.mds, *self.pre_sparse_mds):
            elements.extend(vector)
        for sparse in self.sparse_matrices:
            elements.extend(sparse.row)
            elements.extend(sparse.col_hat)
        return elements

    def to_raw(self) -> RawParameterDocument:
        """Encode the parameters back into the raw document layout."""

        def enc(vector: list[PrimeFieldElement]) -> list[bytes]:
            return [bytes(x) for x in vector]

        return RawParameterDocument(
            t=self.t,
            rate=self.rate,
            rounds_f=self.rounds_f,
            rounds_p=self.rounds_p,
            constants=RawConstants(
                start=[enc(v) for v in self.start_constants],
                end=[enc(v) for v in self.end_constants],
                partial=enc(self.partial_constants),
            ),
            mds_matrices=RawMdsMatrices(
                mds=[enc(row) for row in self.mds],
                pre_sparse_mds=[enc(row) for row in self.pre_sparse_mds],
                sparse_matrices=[
                    RawSparseMatrix(row=enc(s.row), col_hat=enc(s.col_hat))
                    for s in self.sparse_matrices
                ],
            ),
        )


def _check_length(name: str, values: list[Any], expected: int) -> None:
    if len(values) != expected:
        raise ValidationError(name, expected=expected, actual=len(values))


def _check_matrix(name: str, rows: list[list[Any]], num_rows: int, num_cols: int) -> None:
    _check_length(name, rows, num_rows)
    for i, row in enumerate(rows):
        _check_length(f"{name}[{i}]", row, num_cols)


def load_parameters(
    raw: RawParameterDocument | Mapping[str, Any],
    field: type[PrimeFieldElement] = Fr,
) -> PoseidonParams:
    """
    Turn a raw parameter document into validated parameters.

    Args:
        raw: The raw document, or a mapping with the same layout.
        field: The field to decode every byte array into.

    Returns:
        Immutable, validated parameters.

    Raises:
        ValidationError: If the document shape or any dimension is wrong.
        EncodingError: If a byte array is not a canonical field element.
    """
    if not isinstance(raw, RawParameterDocument):
        try:
            raw = RawParameterDocument.model_validate(raw)
        except PydanticValidationError as e:
            raise ValidationError("parameter document", detail=str(e)) from e

    decode = field.from_bytes

    def vec(data: list[bytes]) -> list[PrimeFieldElement]:
        return [decode(x) for x in data]

    try:
        params = PoseidonParams(
            field=field,
            t=raw.t,
            rate=raw.rate,
            rounds_f=raw.rounds_f,
            rounds_p=raw.rounds_p,
            start_constants=[vec(v) for v in raw.constants.start],
            end_constants=[vec(v) for v in raw.constants.end],
            partial_constants=vec(raw.constants.partial),
            mds=[vec(row) for row in raw.mds_matrices.mds],
            pre_sparse_mds=[vec(row) for row in raw.mds_matrices.pre_sparse_mds],
            sparse_matrices=[
                SparseMatrix(row=vec(s.row), col_hat=vec(s.col_hat))
                for s in raw.mds_matrices.sparse_matrices
            ],
        )
    except PydanticValidationError as e:
        raise ValidationError("parameters", detail=str(e)) from e

    logger.debug(
        "Loaded Poseidon parameters: field=%s t=%d rate=%d rF=%d rP=%d",
        field.__name__,
        params.t,
        params.rate,
        params.rounds_f,
        params.rounds_p,
    )
    return params
