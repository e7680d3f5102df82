"""
The field element interface consumed by the Poseidon permutation and sponge.

The permutation never performs modular arithmetic itself. It only talks to
field elements through the small contract defined by `FieldElement`, so the
round schedule stays independent of the concrete prime.

`PrimeFieldElement` implements that contract for any prime order with a
fixed-width little-endian encoding. Concrete fields subclass it and pin
`MODULUS` and `BYTES`.
"""

from __future__ import annotations

from typing import ClassVar, Protocol, Self, runtime_checkable

from pydantic import field_validator

from .base import StrictBaseModel
from .exceptions import EncodingError


@runtime_checkable
class FieldElement(Protocol):
    """
    An immutable element of a prime field.

    Implementations must be value types: every operation returns a new
    element and never mutates its operands.
    """

    @classmethod
    def zero(cls) -> Self:
        """The additive identity."""
        ...

    @classmethod
    def one(cls) -> Self:
        """The multiplicative identity."""
        ...

    @classmethod
    def element_size(cls) -> int:
        """Width in bytes of the canonical encoding."""
        ...

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        """
        Decode a canonical little-endian encoding.

        Raises:
            EncodingError: If the width is wrong or the value is not canonical.
        """
        ...

    def __bytes__(self) -> bytes:
        """Canonical little-endian encoding of exactly `element_size()` bytes."""
        ...

    def __add__(self, other: Self) -> Self: ...

    def __mul__(self, other: Self) -> Self: ...

    def square(self) -> Self: ...


class PrimeFieldElement(StrictBaseModel):
    """
    An integer modulo the prime `MODULUS`.

    Any integer is accepted on construction and reduced, so `value` is always
    the canonical representative in [0, MODULUS).
    """

    MODULUS: ClassVar[int]
    """Prime order of the field."""

    BYTES: ClassVar[int]
    """Width of the canonical encoding."""

    value: int

    @field_validator("value", mode="before")
    @classmethod
    def reduce_modulo_prime(cls, v: int) -> int:
        """Reduce any integer input to its canonical representative."""
        return v % cls.MODULUS

    def _lift(self, value: int) -> Self:
        """Wrap a raw integer as an element of the same field."""
        return type(self)(value=value)

    @classmethod
    def zero(cls) -> Self:
        """The additive identity."""
        return cls(value=0)

    @classmethod
    def one(cls) -> Self:
        """The multiplicative identity."""
        return cls(value=1)

    @classmethod
    def element_size(cls) -> int:
        """Width in bytes of the canonical encoding."""
        return cls.BYTES

    def __add__(self, other: Self) -> Self:
        return self._lift(self.value + other.value)

    def __sub__(self, other: Self) -> Self:
        return self._lift(self.value - other.value)

    def __neg__(self) -> Self:
        return self._lift(-self.value)

    def __mul__(self, other: Self) -> Self:
        return self._lift(self.value * other.value)

    def __pow__(self, exponent: int) -> Self:
        return self._lift(pow(self.value, exponent, self.MODULUS))

    def __truediv__(self, other: Self) -> Self:
        return self * other.inverse()

    def __int__(self) -> int:
        return self.value

    def square(self) -> Self:
        """The element multiplied by itself."""
        return self._lift(self.value * self.value)

    def inverse(self) -> Self:
        """
        The multiplicative inverse.

        Raises:
            ZeroDivisionError: For the zero element.
        """
        if self.value == 0:
            raise ZeroDivisionError("Cannot invert the zero element.")
        return self._lift(pow(self.value, -1, self.MODULUS))

    def __bytes__(self) -> bytes:
        """The canonical encoding: `BYTES` bytes, least significant first."""
        return self.value.to_bytes(self.BYTES, byteorder="little")

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        """
        Decode the canonical encoding produced by `bytes(element)`.

        Raises:
            EncodingError: If `data` is not `BYTES` wide or encodes a value
                at or above the modulus.
        """
        if len(data) != cls.BYTES:
            raise EncodingError(cls.__name__, f"Expected {cls.BYTES} bytes, got {len(data)}")

        value = int.from_bytes(data, byteorder="little")
        if value >= cls.MODULUS:
            raise EncodingError(cls.__name__, f"Value {value} exceeds field modulus {cls.MODULUS}")

        return cls(value=value)
