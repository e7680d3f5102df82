"""Reusable type definitions for the Poseidon hash."""

from .base import CamelModel, StrictBaseModel
from .exceptions import (
    EncodingError,
    PoseidonError,
    ShapeError,
    SpongeStateError,
    ValidationError,
)
from .field import FieldElement, PrimeFieldElement

__all__ = [
    # Core types
    "CamelModel",
    "StrictBaseModel",
    "FieldElement",
    "PrimeFieldElement",
    # Exceptions
    "PoseidonError",
    "ValidationError",
    "ShapeError",
    "EncodingError",
    "SpongeStateError",
]
