"""Primitives - field arithmetic and element encodings."""

from .field import (
    BLS12_381_SCALAR_PRIME,
    FF,
    FIELDS,
    GOLDILOCKS,
    GOLDILOCKS_PRIME,
    bits_le,
    byte_length,
    from_bytes_le,
    get_field,
    inverse_or_zero,
    to_bytes_le,
    to_field,
    to_field_array,
)

__all__ = [
    "BLS12_381_SCALAR_PRIME",
    "FF",
    "FIELDS",
    "GOLDILOCKS",
    "GOLDILOCKS_PRIME",
    "bits_le",
    "byte_length",
    "from_bytes_le",
    "get_field",
    "inverse_or_zero",
    "to_bytes_le",
    "to_field",
    "to_field_array",
]
