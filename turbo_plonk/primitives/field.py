"""Prime fields used by the constraint system.

Uses galois library for all field arithmetic. FF (BLS12-381 scalar field) is the
default field of every constraint system; GOLDILOCKS is provided so circuits can
be built over a second, much smaller field.

Field elements are 0-d galois FieldArrays. A column of the constraint matrix is
a 1-d FieldArray of the same class, so every arithmetic helper below works on
single elements and on whole columns alike.
"""

from typing import Dict, List, Type, Union

import galois
import numpy as np

from ..errors import ParameterError

# --- Field Construction ---

BLS12_381_SCALAR_PRIME = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001
GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

# The multiplicative generators are known, so galois does not need to factor p - 1.
FF = galois.GF(BLS12_381_SCALAR_PRIME, primitive_element=7, verify=False)
"""Scalar field of BLS12-381."""

GOLDILOCKS = galois.GF(GOLDILOCKS_PRIME, primitive_element=7, verify=False)
"""Goldilocks prime field GF(2^64 - 2^32 + 1)."""

FIELDS: Dict[str, Type[galois.FieldArray]] = {
    "bls12_381": FF,
    "goldilocks": GOLDILOCKS,
}

FieldLike = Union[galois.FieldArray, int, np.integer]


def get_field(name: str) -> Type[galois.FieldArray]:
    """Look up a registered field class by name."""
    try:
        return FIELDS[name]
    except KeyError:
        raise ParameterError(
            f"Unknown field '{name}'. Available: {list(FIELDS.keys())}"
        ) from None


# --- Element Conversion ---


def to_field(field: Type[galois.FieldArray], value: FieldLike) -> galois.FieldArray:
    """Coerce an integer (possibly negative) or a single element of `field` into `field`.

    Raises:
        ParameterError: For elements of another field, arrays, bools and
            non-integer numbers
    """
    if isinstance(value, galois.FieldArray):
        if not isinstance(value, field):
            raise ParameterError(
                f"Element of {type(value).name} cannot be used in {field.name}"
            )
        if value.ndim != 0:
            raise ParameterError(f"Expected a single element, got shape {value.shape}")
        return value
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise ParameterError(f"Cannot convert {value!r} to an element of {field.name}")
    return field(int(value) % field.characteristic)


def to_field_array(field: Type[galois.FieldArray], values) -> galois.FieldArray:
    """Build a 1-d FieldArray from a sequence of field elements or integers."""
    ints = [int(to_field(field, v)) for v in values]
    if not ints:
        return field.Zeros(0)
    return field(ints)


def byte_length(field: Type[galois.FieldArray]) -> int:
    """Number of bytes in the canonical encoding of an element of `field`."""
    return (field.characteristic.bit_length() + 7) // 8


def to_bytes_le(x: galois.FieldArray) -> bytes:
    """Canonical little-endian byte encoding of a field element."""
    return int(x).to_bytes(byte_length(type(x)), "little")


def from_bytes_le(field: Type[galois.FieldArray], data: bytes) -> galois.FieldArray:
    """Decode a canonical little-endian encoding; non-canonical input is rejected."""
    if len(data) != byte_length(field):
        raise ParameterError(
            f"Expected {byte_length(field)} bytes for {field.name}, got {len(data)}"
        )
    value = int.from_bytes(data, "little")
    if value >= field.characteristic:
        raise ParameterError("Non-canonical field element encoding")
    return field(value)


def bits_le(x: galois.FieldArray, n_bits: int) -> List[galois.FieldArray]:
    """Little-endian bit decomposition of `x`, truncated or zero-extended to `n_bits`.

    Bits are read from the canonical byte encoding, least significant bit of the
    first byte first. Each bit is returned as a field element (0 or 1).
    """
    field = type(x)
    zero, one = field(0), field(1)
    bits = []
    for byte in to_bytes_le(x):
        for _ in range(8):
            bits.append(one if byte & 1 else zero)
            byte >>= 1
    bits.extend([zero] * (n_bits - len(bits)))
    return bits[:n_bits]


def inverse_or_zero(x: galois.FieldArray) -> galois.FieldArray:
    """Return x^(-1), or zero when x is the additive identity."""
    try:
        return x ** -1
    except ZeroDivisionError:
        return type(x)(0)
