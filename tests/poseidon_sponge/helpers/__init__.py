"""Test helpers for poseidon_sponge unit tests."""

from __future__ import annotations

from .builders import (
    make_cauchy_mds,
    make_matrix,
    make_reference_params,
    make_toy_params,
    make_vector,
)

__all__ = [
    "make_cauchy_mds",
    "make_matrix",
    "make_reference_params",
    "make_toy_params",
    "make_vector",
]
