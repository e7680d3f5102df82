"""
Tests for the KoalaBear prime field Fp.
"""

import pytest

from poseidon_sponge.subspecs.koalabear.field import P, P_BYTES, Fp
from poseidon_sponge.types import EncodingError, FieldElement


def test_constants() -> None:
    """Verify field constants."""
    assert P == 2**31 - 2**24 + 1
    assert P_BYTES == 4
    assert Fp.element_size() == P_BYTES
    # x -> x^5 is a bijection only when 5 does not divide P - 1.
    assert (P - 1) % 5 != 0


def test_operations() -> None:
    """Small values behave like ordinary integers until they wrap."""
    five, ten = Fp(value=5), Fp(value=10)

    assert five + ten == Fp(value=15)
    assert ten - five == five
    assert five - ten == Fp(value=P - 5)
    assert -five == Fp(value=P - 5)
    assert five * ten == Fp(value=50)
    assert five.square() == Fp(value=25)
    assert five**3 == Fp(value=125)
    assert (five / ten) * ten == five
    assert int(ten) == 10


def test_construction_reduces() -> None:
    """Out-of-range integers are reduced to their canonical representative."""
    assert Fp(value=P + 3) == Fp(value=3)
    assert Fp(value=-1).value == P - 1
    assert Fp(value=P) == Fp.zero()


def test_equality() -> None:
    """Elements compare by value and never equal plain integers."""
    assert Fp(value=5) == Fp(value=5)
    assert Fp(value=5) != Fp(value=6)
    assert Fp(value=5) != 5  # type: ignore[comparison-overlap]


def test_inverse() -> None:
    """Every non-zero element has an inverse, zero has none."""
    x = Fp(value=123456)
    assert x * x.inverse() == Fp.one()

    with pytest.raises(ZeroDivisionError, match="Cannot invert the zero element."):
        Fp.zero().inverse()


def test_identities() -> None:
    """zero and one are the additive and multiplicative identities."""
    x = Fp(value=123456)
    assert x + Fp.zero() == x
    assert x * Fp.one() == x
    assert x * Fp.zero() == Fp.zero()


def test_satisfies_field_element_interface() -> None:
    """Fp implements the interface consumed by the permutation."""
    assert isinstance(Fp(value=1), FieldElement)


@pytest.mark.parametrize(
    "value, encoding",
    [
        (0, b"\x00\x00\x00\x00"),
        (42, b"\x2a\x00\x00\x00"),
        (P - 1, (P - 1).to_bytes(4, byteorder="little")),
    ],
)
def test_encoding(value: int, encoding: bytes) -> None:
    """Elements encode to four little-endian bytes and decode back."""
    assert bytes(Fp(value=value)) == encoding
    assert Fp.from_bytes(encoding) == Fp(value=value)


def test_from_bytes_rejects_bad_encodings() -> None:
    """Wrong widths and values at or above P are encoding errors."""
    with pytest.raises(EncodingError, match="Expected 4 bytes, got 3"):
        Fp.from_bytes(b"\x01\x02\x03")

    with pytest.raises(EncodingError, match="exceeds field modulus"):
        Fp.from_bytes(P.to_bytes(4, byteorder="little"))
