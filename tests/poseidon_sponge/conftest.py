"""
Shared pytest fixtures for all poseidon_sponge tests.

Import these fixtures automatically via pytest discovery.
"""

from __future__ import annotations

import pytest

from poseidon_sponge.subspecs.poseidon import (
    PoseidonParams,
    PoseidonReferenceParams,
    optimize_parameters,
)
from tests.poseidon_sponge.helpers import make_reference_params, make_toy_params


@pytest.fixture
def toy_params() -> PoseidonParams:
    """Hand-written optimized parameters with pinned digests."""
    return make_toy_params()


@pytest.fixture(scope="session")
def reference_params() -> PoseidonReferenceParams:
    """Textbook BN254 parameters with the usual t = 3 round counts."""
    return make_reference_params(t=3, rounds_f=8, rounds_p=57)


@pytest.fixture(scope="session")
def optimized_params(reference_params: PoseidonReferenceParams) -> PoseidonParams:
    """Optimized parameters derived from `reference_params`."""
    return optimize_parameters(reference_params)
