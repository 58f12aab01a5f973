"""Reference circuits built from the gadget library.

These are small, fully specified circuits used as end-to-end examples and as
fixtures: each returns the constraint system with its honest witness still in
place, so callers decide when to pad and extract it.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .config import CircuitConfig
from .constraints import gadgets
from .constraints.base import VarIndex
from .constraints.turbo_plonk_cs import TurboPlonkConstraintSystem
from .primitives.field import FieldLike


def arithmetic_range_circuit(
    a: FieldLike,
    b: FieldLike,
    weights: Sequence[FieldLike] = (1, 1, 1, 1),
    n_bits: int = 3,
    boolean_a: bool = False,
    config: Optional[CircuitConfig] = None,
) -> Tuple[TurboPlonkConstraintSystem, Dict[str, VarIndex]]:
    """Build the circuit

        a in {0, 1}                      (only if boolean_a)
        c = a + b
        d = a * b
        e = w0*a + w1*b + w2*c + w3*d
        0 <= e < 2^n_bits

    Returns:
        (cs, variables) mapping "a" to "e" and the bits of e ("e_bit0" is the
        least significant) to their variable indices
    """
    cs = TurboPlonkConstraintSystem(config)
    a_var = cs.new_variable(a)
    b_var = cs.new_variable(b)
    if boolean_a:
        cs.insert_boolean_gate(a_var)
    c_var = gadgets.add(cs, a_var, b_var)
    d_var = gadgets.mul(cs, a_var, b_var)
    e_var = gadgets.linear_combine(cs, [a_var, b_var, c_var, d_var], *weights)
    bits = gadgets.range_check(cs, e_var, n_bits)

    variables = {"a": a_var, "b": b_var, "c": c_var, "d": d_var, "e": e_var}
    for i, bit in enumerate(bits):
        variables[f"e_bit{i}"] = int(bit)
    return cs, variables


def online_value_circuit(
    x: Sequence[FieldLike] = (1, 3),
    y: Sequence[FieldLike] = (2, 4),
    config: Optional[CircuitConfig] = None,
) -> Tuple[TurboPlonkConstraintSystem, List[FieldLike]]:
    """Build and pad the circuit (x0 + y0) * (x1 + 4) + x0 * y1.

    The 4 is a variable fixed by a constant gate and y0, y1 are public (online)
    inputs. With the defaults the output is (1 + 2) * (3 + 4) + 1 * 4 = 25.

    Returns:
        (cs, public_inputs) with public_inputs = [y0, y1]
    """
    cs = TurboPlonkConstraintSystem(config)
    x0, y0, x1 = cs.add_variables([x[0], y[0], x[1]])
    four = cs.new_variable(4)
    s0 = gadgets.add(cs, x0, y0)
    s1 = gadgets.add(cs, x1, four)
    p0 = gadgets.mul(cs, s0, s1)
    y1 = cs.new_variable(y[1])
    p1 = gadgets.mul(cs, x0, y1)
    gadgets.add(cs, p0, p1)
    cs.insert_constant_gate(four, 4)
    cs.prepare_io_variable(y0)
    cs.prepare_io_variable(y1)
    cs.pad()
    return cs, [y[0], y[1]]
