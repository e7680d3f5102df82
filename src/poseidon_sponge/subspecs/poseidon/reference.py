"""
The textbook Poseidon permutation, without the sparse-matrix optimization.

Every round is `add constants -> S-box -> dense MDS`. It is much slower than
the optimized permutation but maps one-to-one onto the paper's definition,
so it serves as the reference the optimized parameters are derived from and
checked against.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from poseidon_sponge.types import PrimeFieldElement, ShapeError, ValidationError

from .linalg import Vector, matrix_mul_vector
from .permutation import add_round_constants, sbox_full, sbox_partial


class PoseidonReferenceParams(BaseModel):
    """Parameters of the textbook Poseidon permutation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    field: type[PrimeFieldElement] = Field(description="The field every value belongs to.")
    t: int = Field(ge=2, description="The size of the state.")
    rate: int = Field(ge=1, description="Number of state slots used for input and output.")
    rounds_f: int = Field(gt=0, description="Total number of 'full' rounds.")
    rounds_p: int = Field(ge=0, description="Total number of 'partial' rounds.")
    round_constants: List[List[PrimeFieldElement]] = Field(
        description="One constant vector of length t per round."
    )
    mds: List[List[PrimeFieldElement]] = Field(description="Dense MDS matrix of every round.")

    @model_validator(mode="after")
    def check_lengths(self) -> "PoseidonReferenceParams":
        """Ensures vector lengths match the configuration."""
        if self.rate >= self.t:
            raise ValidationError("rate", detail=f"rate must be smaller than t={self.t}")
        if self.rounds_f % 2 != 0:
            raise ValidationError("rF", detail="full rounds must be split evenly")

        num_rounds = self.rounds_f + self.rounds_p
        if len(self.round_constants) != num_rounds:
            raise ValidationError(
                "round_constants", expected=num_rounds, actual=len(self.round_constants)
            )
        for i, constants in enumerate(self.round_constants):
            if len(constants) != self.t:
                raise ValidationError(
                    f"round_constants[{i}]", expected=self.t, actual=len(constants)
                )

        if len(self.mds) != self.t or any(len(row) != self.t for row in self.mds):
            raise ValidationError("mds", detail=f"expected a {self.t}x{self.t} matrix")

        return self


def reference_permute(state: Vector, params: PoseidonReferenceParams) -> Vector:
    """
    Performs the textbook Poseidon permutation on the given state.

    Args:
        state: A list of `params.t` field elements.
        params: The reference parameters.

    Returns:
        The new state after applying the permutation.

    Raises:
        ShapeError: If the state length does not match `params.t`.
    """
    if len(state) != params.t:
        raise ShapeError(expected=params.t, actual=len(state))

    half = params.rounds_f // 2
    first_partial = half
    first_full_again = half + params.rounds_p

    state = list(state)
    for r, constants in enumerate(params.round_constants):
        state = add_round_constants(state, constants)
        # Full S-box on both ends of the schedule, slot 0 only in between.
        if first_partial <= r < first_full_again:
            state = sbox_partial(state)
        else:
            state = sbox_full(state)
        state = matrix_mul_vector(params.mds, state, params.field)

    return state
