"""
The Poseidon sponge: absorb field elements, squeeze a digest.

### State layout

The state has `t` slots. Slot 0 is the capacity slot: it holds the
domain-separation value at creation and is never written by input. Slots
`1..rate` form the rate portion that input is added into and output is read
from.

### Protocol

1.  **Absorbing**: Input is buffered. Whenever `rate` elements are available
    they are added into the rate slots and the state is permuted. Between calls
    the buffer always holds fewer than `rate` elements.

2.  **Squeezing**: The buffer is padded with a single `one` element, added into
    the rate slots, and the state is permuted once more. Padding is applied
    even when the buffer is empty, so inputs whose length is a multiple of
    `rate` stay distinct from their extensions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum, auto

from poseidon_sponge import config
from poseidon_sponge.types import FieldElement, SpongeStateError

from .linalg import Vector
from .params import PoseidonParams
from .permutation import permute

logger = logging.getLogger(__name__)


class SpongePhase(Enum):
    """Sponge state machine states."""

    CREATED = auto()
    """Fresh sponge, nothing absorbed yet."""

    ABSORBING = auto()
    """At least one absorb call since creation or the last squeeze."""

    SQUEEZED = auto()
    """The last operation was a squeeze."""


class PoseidonSponge:
    """
    A Poseidon sponge over a shared, read-only parameter set.

    A sponge owns its state exclusively. Hash independent streams with
    independent sponges; the parameters can be shared freely.

    Args:
        params: Validated permutation parameters.
        capacity_value: Domain-separation value for the capacity slot.
        single_use: Reject any absorb or squeeze after the first squeeze.
    """

    def __init__(
        self,
        params: PoseidonParams,
        capacity_value: FieldElement | int,
        *,
        single_use: bool = False,
    ) -> None:
        field = params.field
        if isinstance(capacity_value, int):
            capacity_value = field(value=capacity_value)
        elif not isinstance(capacity_value, field):
            raise TypeError(f"capacity_value must be an int or a {field.__name__} element")

        self._params = params
        self._single_use = single_use
        self._state: Vector = [capacity_value] + [field.zero()] * (params.t - 1)
        self._absorbing: Vector = []
        self._phase = SpongePhase.CREATED

    @property
    def params(self) -> PoseidonParams:
        """The permutation parameters."""
        return self._params

    @property
    def state(self) -> Vector:
        """A copy of the current state vector."""
        return list(self._state)

    @property
    def absorbing(self) -> Vector:
        """A copy of the buffered, not yet permuted, input."""
        return list(self._absorbing)

    @property
    def phase(self) -> SpongePhase:
        """Where the sponge is in its absorb/squeeze life cycle."""
        return self._phase

    @property
    def single_use(self) -> bool:
        """Whether the sponge is locked after its first squeeze."""
        return self._single_use

    def _ensure_usable(self) -> None:
        if self._single_use and self._phase is SpongePhase.SQUEEZED:
            raise SpongeStateError("single-use sponge was already squeezed")

    def _add_and_permute(self, block: Vector) -> None:
        """Add `block` into the rate slots, starting at slot 1, then permute."""
        state = list(self._state)
        for i, x in enumerate(block, start=1):
            state[i] = state[i] + x
        self._state = permute(state, self._params)

    def absorb(self, inputs: Iterable[FieldElement]) -> None:
        """
        Absorb field elements into the sponge.

        Args:
            inputs: Elements of the parameters' field.

        Raises:
            TypeError: If an input is not an element of the parameters' field.
            SpongeStateError: If a single-use sponge was already squeezed.
        """
        self._ensure_usable()

        field = self._params.field
        rate = self._params.rate

        absorbing = [*self._absorbing, *inputs]
        if not all(isinstance(x, field) for x in absorbing):
            raise TypeError(f"inputs must be {field.__name__} elements")

        # Consume every complete chunk, keep the remainder buffered.
        consumed = len(absorbing) - len(absorbing) % rate
        for offset in range(0, consumed, rate):
            self._add_and_permute(absorbing[offset : offset + rate])

        self._absorbing = absorbing[consumed:]
        self._phase = SpongePhase.ABSORBING

        if consumed:
            logger.debug(
                "Absorbed %d block(s), %d element(s) buffered",
                consumed // rate,
                len(self._absorbing),
            )

    def absorb_bytes(self, encodings: Iterable[bytes]) -> None:
        """
        Decode fixed-width encodings and absorb the resulting elements.

        Raises:
            EncodingError: If an encoding has the wrong width or is not canonical.
        """
        decode = self._params.field.from_bytes
        self.absorb([decode(bytes(data)) for data in encodings])

    def squeeze(self) -> FieldElement:
        """
        Pad, permute and return the first rate slot.

        Calling `squeeze` again without absorbing pads and permutes again,
        producing a new element that depends on the evolving state.

        Returns:
            The output field element, `state[1]` after the final permutation.

        Raises:
            SpongeStateError: If a single-use sponge was already squeezed.
        """
        self._ensure_usable()

        # The buffer holds fewer than `rate` elements, so the padded block fits.
        padded = [*self._absorbing, self._params.field.one()]
        self._add_and_permute(padded)

        self._absorbing = []
        self._phase = SpongePhase.SQUEEZED

        logger.debug("Squeezed sponge with %d padded element(s)", len(padded))
        return self._state[1]

    def digest(self) -> bytes:
        """Squeeze and return the canonical encoding of the output."""
        return bytes(self.squeeze())

    def hexdigest(self) -> str:
        """Squeeze and return the output encoding as a hex string."""
        return self.digest().hex()


def create_sponge(
    params: PoseidonParams,
    capacity_value: FieldElement | int | None = None,
    *,
    single_use: bool | None = None,
) -> PoseidonSponge:
    """
    Create a fresh sponge.

    Args:
        params: Validated permutation parameters.
        capacity_value: Domain-separation value. Defaults to the configured
            `POSEIDON_CAPACITY_VALUE`.
        single_use: Lock the sponge after one squeeze. Defaults to the
            configured `POSEIDON_SINGLE_USE_SPONGE`.

    Returns:
        A sponge in the `CREATED` phase.
    """
    if capacity_value is None:
        capacity_value = config.DEFAULT_CAPACITY_VALUE
    if single_use is None:
        single_use = config.SINGLE_USE_SPONGE
    return PoseidonSponge(params, capacity_value, single_use=single_use)


def poseidon_hash(
    params: PoseidonParams,
    inputs: Iterable[FieldElement],
    capacity_value: FieldElement | int | None = None,
) -> FieldElement:
    """
    Hash a sequence of field elements with a fresh sponge.

    Args:
        params: Validated permutation parameters.
        inputs: The elements to hash.
        capacity_value: Domain-separation value, see `create_sponge`.

    Returns:
        The single-element digest.
    """
    sponge = create_sponge(params, capacity_value)
    sponge.absorb(inputs)
    return sponge.squeeze()
