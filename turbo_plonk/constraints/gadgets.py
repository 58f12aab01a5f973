"""Gadget library: composite constructions built from TurboPLONK rows.

Every gadget takes the constraint system as its first argument, inserts one or
more rows and, where it produces an output, allocates the output variable with
a witness value that satisfies the rows it inserted.

Soundness notes:
- select does NOT constrain its control input. Callers must pass a variable that
  is already boolean-constrained (a BoolVar returned by insert_boolean_gate,
  range_check or the equality gadgets) whenever its booleanness matters.
- The equality gadgets insert the extra gate diff * equal_flag = 0; without it
  the prover could choose equal_flag freely whenever diff != 0.
"""

from typing import List, Sequence, Tuple

from ..errors import ParameterError
from ..primitives.field import FieldLike, bits_le, inverse_or_zero, to_field
from .base import BoolVar, VarIndex
from .turbo_plonk_cs import TurboPlonkConstraintSystem


def linear_combine(
    cs: TurboPlonkConstraintSystem,
    wires_in: Sequence[VarIndex],
    q1: FieldLike,
    q2: FieldLike,
    q3: FieldLike,
    q4: FieldLike,
) -> VarIndex:
    """Create out = q1*w1 + q2*w2 + q3*w3 + q4*w4 and return it."""
    if len(wires_in) != 4:
        raise ParameterError(f"Linear combination takes 4 input wires, got {len(wires_in)}")
    field = cs.field
    qs = [to_field(field, q) for q in (q1, q2, q3, q4)]
    values = [cs.witness_value(w) for w in wires_in]
    lc = field(0)
    for q, v in zip(qs, values):
        lc = lc + q * v
    out_var = cs.new_variable(lc)
    cs.insert_lc_gate(wires_in, out_var, *qs)
    return out_var


def add(cs: TurboPlonkConstraintSystem, left_var: VarIndex, right_var: VarIndex) -> VarIndex:
    """Create out = left + right and return it."""
    out_var = cs.new_variable(cs.witness_value(left_var) + cs.witness_value(right_var))
    cs.insert_add_gate(left_var, right_var, out_var)
    return out_var


def sub(cs: TurboPlonkConstraintSystem, left_var: VarIndex, right_var: VarIndex) -> VarIndex:
    """Create out = left - right and return it."""
    out_var = cs.new_variable(cs.witness_value(left_var) - cs.witness_value(right_var))
    cs.insert_sub_gate(left_var, right_var, out_var)
    return out_var


def mul(cs: TurboPlonkConstraintSystem, left_var: VarIndex, right_var: VarIndex) -> VarIndex:
    """Create out = left * right and return it."""
    out_var = cs.new_variable(cs.witness_value(left_var) * cs.witness_value(right_var))
    cs.insert_mul_gate(left_var, right_var, out_var)
    return out_var


def equal(cs: TurboPlonkConstraintSystem, left_var: VarIndex, right_var: VarIndex) -> None:
    """Constrain left == right (a subtraction gate whose output is the zero variable)."""
    cs.witness_value(left_var)
    cs.witness_value(right_var)
    zero_var = cs.zero_var()
    cs.insert_sub_gate(left_var, right_var, zero_var)


def select(
    cs: TurboPlonkConstraintSystem,
    var0: VarIndex,
    var1: VarIndex,
    bit: BoolVar,
) -> VarIndex:
    """Return var0 if bit == 0 and var1 if bit == 1.

    out = (1 - bit) * var0 + bit * var1 = -bit*var0 + bit*var1 + var0
    Wires: (w1, w2, w3, w4, wo) = (bit, var0, bit, var1, out)
    Selectors: q2 = qm2 = qo = 1, qm1 = -1

    `bit` is not boolean-constrained here; see the module docstring.
    """
    b = cs.witness_value(bit)
    v0 = cs.witness_value(var0)
    v1 = cs.witness_value(var1)
    out_var = cs.new_variable(v0 + b * (v1 - v0))
    cs.insert_gate(
        [bit, var0, bit, var1, out_var],
        [0, 1, 0, 0, -1, 1, 0, 0, 0, 0, 0, 0, 1],
    )
    return out_var


def is_equal(cs: TurboPlonkConstraintSystem, left_var: VarIndex, right_var: VarIndex) -> BoolVar:
    """Return a variable equal to 1 iff left == right, else 0."""
    equal_flag, _ = is_equal_or_not_equal(cs, left_var, right_var)
    return equal_flag


def is_not_equal(cs: TurboPlonkConstraintSystem, left_var: VarIndex, right_var: VarIndex) -> BoolVar:
    """Return a variable equal to 1 iff left != right, else 0."""
    _, not_equal_flag = is_equal_or_not_equal(cs, left_var, right_var)
    return not_equal_flag


def is_equal_or_not_equal(
    cs: TurboPlonkConstraintSystem,
    left_var: VarIndex,
    right_var: VarIndex,
) -> Tuple[BoolVar, BoolVar]:
    """Return (equal_flag, not_equal_flag): (1, 0) if left == right, (0, 1) otherwise.

    diff = left - right
    inv_diff = diff^(-1), or 0 when diff == 0 (any value works there)
    not_equal_flag = diff * inv_diff
    equal_flag = 1 - not_equal_flag
    diff * equal_flag = 0

    Inserts 4 rows, plus one constant row for each of the zero and one
    variables the call allocates (6 rows on the first call in a system).
    """
    diff = sub(cs, left_var, right_var)
    inv_diff = cs.new_variable(inverse_or_zero(cs.witness_value(diff)))

    not_equal_flag = mul(cs, diff, inv_diff)
    one_var = cs.one_var()
    equal_flag = sub(cs, one_var, not_equal_flag)

    # Forces equal_flag = 0 whenever diff != 0
    zero_var = cs.zero_var()
    cs.insert_mul_gate(diff, equal_flag, zero_var)

    return BoolVar(equal_flag), BoolVar(not_equal_flag)


def range_check(cs: TurboPlonkConstraintSystem, var: VarIndex, n_bits: int) -> List[BoolVar]:
    """Enforce 0 <= var < 2^n_bits.

    1. Decompose the witness of `var` into n_bits bits and boolean-constrain each.
    2. Recompose the bits three at a time with linear combination gates,
       accumulator weights (8, 4, 2, 1), starting from the most significant bit.
    3. The last gate writes into `var` itself, which ties the bits to its value.

    Returns:
        The bit variables, least significant first
    """
    if n_bits < 2:
        raise ParameterError(f"the number of bits is less than two: {n_bits}")
    value = cs.witness_value(var)

    b = [cs.new_variable(bit) for bit in bits_le(value, n_bits)]
    for elem in b:
        cs.insert_boolean_gate(elem)

    acc = b[n_bits - 1]
    m = (n_bits - 2) // 3
    for i in range(m):
        hi = n_bits - 1 - i * 3
        acc = linear_combine(cs, [acc, b[hi - 1], b[hi - 2], b[hi - 3]], 8, 4, 2, 1)

    remaining = (n_bits - 1) - 3 * m
    if remaining == 1:
        cs.insert_lc_gate([acc, b[0], 0, 0], var, 2, 1, 0, 0)
    elif remaining == 2:
        cs.insert_lc_gate([acc, b[1], b[0], 0], var, 4, 2, 1, 0)
    else:
        cs.insert_lc_gate([acc, b[2], b[1], b[0]], var, 8, 4, 2, 1)

    return [BoolVar(v) for v in b]
