"""Exception hierarchy for the Poseidon hash."""

from __future__ import annotations


class PoseidonError(Exception):
    """
    Base exception for all Poseidon-related errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class ValidationError(PoseidonError):
    """
    Raised when Poseidon parameters are malformed or inconsistent.

    Only raised while loading or constructing parameters, never while
    permuting or hashing.

    Attributes:
        name: The offending array or setting, e.g. `constants.start`.
        expected: The expected length or value (if applicable).
        actual: The actual length or value (if applicable).
        detail: Free-form description used when no lengths apply.
    """

    def __init__(
        self,
        name: str,
        *,
        expected: int | None = None,
        actual: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        self.detail = detail

        if expected is not None and actual is not None:
            msg = f"{name} requires exactly {expected} entries, got {actual}"
        elif detail:
            msg = f"{name}: {detail}"
        else:
            msg = f"{name} is invalid"

        super().__init__(msg)


class ShapeError(PoseidonError):
    """
    Raised when a state vector does not match the permutation width.

    This indicates a programming error in the caller.

    Attributes:
        expected: The state width `t` of the parameters.
        actual: The length of the state that was supplied.
    """

    def __init__(self, *, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Input state must have length {expected}, got {actual}")


class EncodingError(PoseidonError):
    """
    Raised when bytes cannot be decoded into a field element.

    Attributes:
        type_name: The field element type being decoded.
        detail: Description of what went wrong.
    """

    def __init__(self, type_name: str, detail: str) -> None:
        self.type_name = type_name
        self.detail = detail
        super().__init__(f"Failed to decode {type_name}: {detail}")


class SpongeStateError(PoseidonError):
    """Raised when a single-use sponge is used again after it was squeezed."""
