"""
Global configuration for the Poseidon hash.

This module contains environment-specific settings that apply across the whole package.
"""

import os

_SUPPORTED_POSEIDON_ENVS: list[str] = ["prod", "test"]

POSEIDON_ENV = os.environ.get("POSEIDON_ENV", "prod").lower()
"""The environment flag ('prod' or 'test'). Defaults to 'prod'."""

if POSEIDON_ENV not in _SUPPORTED_POSEIDON_ENVS:
    raise ValueError(
        f"Invalid POSEIDON_ENV environment variable: '{POSEIDON_ENV}'. "
        f"Supported values: {_SUPPORTED_POSEIDON_ENVS}"
    )

DEFAULT_CAPACITY_VALUE = int(os.environ.get("POSEIDON_CAPACITY_VALUE", "21"), 0)
"""
Domain-separation value placed in the capacity slot of a new sponge.

Digests are only comparable between deployments that agree on this value.
It must match the authoritative parameter source before interoperating.
"""

SINGLE_USE_SPONGE = os.environ.get("POSEIDON_SINGLE_USE_SPONGE", "0") == "1"
"""Whether new sponges reject any use after their first squeeze by default."""
