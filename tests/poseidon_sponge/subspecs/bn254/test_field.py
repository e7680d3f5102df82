"""
Tests for the BN254 scalar field Fr.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from poseidon_sponge.subspecs.bn254.field import R, R_BYTES, Fr
from poseidon_sponge.subspecs.koalabear import Fp
from poseidon_sponge.types import EncodingError

elements = st.integers(min_value=0, max_value=R - 1).map(lambda v: Fr(value=v))


def test_constants() -> None:
    """Verify field constants."""
    assert R.bit_length() == 254
    assert R_BYTES == 32
    assert Fr.element_size() == 32
    assert (R - 1) % 5 != 0


def test_arithmetic_wraps_around_modulus() -> None:
    """Addition and multiplication reduce modulo R."""
    minus_one = Fr(value=R - 1)
    assert minus_one + Fr.one() == Fr.zero()
    assert minus_one * minus_one == Fr.one()
    assert minus_one.square() == Fr.one()


def test_fields_do_not_compare_equal() -> None:
    """Elements of different fields are never equal, even with the same value."""
    assert Fr(value=7) != Fp(value=7)


def test_encoding_is_little_endian() -> None:
    """The canonical encoding is 32 bytes, least significant byte first."""
    data = bytes(Fr(value=0x0102))
    assert len(data) == 32
    assert data[:2] == b"\x02\x01"
    assert data[2:] == bytes(30)


def test_from_bytes_rejects_bad_encodings() -> None:
    """Wrong widths and non-canonical values are encoding errors."""
    with pytest.raises(EncodingError, match="Expected 32 bytes, got 31"):
        Fr.from_bytes(bytes(31))

    with pytest.raises(EncodingError, match="Expected 32 bytes, got 33"):
        Fr.from_bytes(bytes(33))

    with pytest.raises(EncodingError, match="exceeds field modulus"):
        Fr.from_bytes(R.to_bytes(32, byteorder="little"))

    # 2^256 - 1 is well above the modulus.
    with pytest.raises(EncodingError, match="exceeds field modulus"):
        Fr.from_bytes(b"\xff" * 32)


@given(elements)
def test_property_encoding_roundtrip(x: Fr) -> None:
    """Decoding the encoding of any element gives the element back."""
    assert Fr.from_bytes(bytes(x)) == x


@given(elements)
def test_property_square_matches_mul(x: Fr) -> None:
    """square() agrees with multiplying an element by itself."""
    assert x.square() == x * x
    assert x * x.square().square() == x**5
