"""The TurboPLONK gate equation.

Every row of the constraint matrix holds 5 wires (w1, w2, w3, w4, wo) and 13
selectors, and is satisfied iff

    q1*w1 + q2*w2 + q3*w3 + q4*w4 + qm1*(w1*w2) + qm2*(w3*w4) + qc + PI
    + qecc*(w1*w2*w3*w4*wo)
    + qh1*w1^5 + qh2*w2^5 + qh3*w3^5 + qh4*w4^5
    - qo*wo = 0

where PI is the public value supplied for the row (zero for ordinary rows).

Both functions are written with plain galois arithmetic, so they work on scalars
(one row) and on equally-shaped FieldArray columns (all rows at once) thanks to
galois broadcasting.
"""

from enum import IntEnum
from typing import List, Sequence

import galois

from ..errors import ParameterError

N_WIRES_PER_GATE = 5
N_SELECTORS = 13
MAX_GATE_DEGREE = 5  # qecc and the qh* terms


class Wire(IntEnum):
    """Wire slots of a row, in column order."""
    W1 = 0
    W2 = 1
    W3 = 2
    W4 = 3
    OUT = 4


class Selector(IntEnum):
    """Selector columns, in the order used by eval_gate_func and eval_selector_multipliers."""
    Q1 = 0
    Q2 = 1
    Q3 = 2
    Q4 = 3
    QM1 = 4  # w1*w2
    QM2 = 5  # w3*w4
    QC = 6
    QECC = 7
    QH1 = 8
    QH2 = 9
    QH3 = 10
    QH4 = 11
    QO = 12


def eval_gate_func(
    wire_vals: Sequence[galois.FieldArray],
    sel_vals: Sequence[galois.FieldArray],
    pub_input: galois.FieldArray,
) -> galois.FieldArray:
    """Evaluate the gate equation; the row is satisfied iff the result is zero.

    Args:
        wire_vals: (w1, w2, w3, w4, wo)
        sel_vals: 13 selector values, indexed by Selector
        pub_input: Public value for the row (zero if the row is not a public-input row)

    Returns:
        The left-hand side of the gate equation

    Raises:
        ParameterError: If the number of wire or selector values is wrong
    """
    if len(wire_vals) != N_WIRES_PER_GATE or len(sel_vals) != N_SELECTORS:
        raise ParameterError(
            f"eval_gate_func expects {N_WIRES_PER_GATE} wires and {N_SELECTORS} selectors, "
            f"got {len(wire_vals)} and {len(sel_vals)}"
        )
    w1, w2, w3, w4, wo = wire_vals
    q = sel_vals

    add = q[Selector.Q1] * w1 + q[Selector.Q2] * w2 + q[Selector.Q3] * w3 + q[Selector.Q4] * w4
    mul = q[Selector.QM1] * (w1 * w2) + q[Selector.QM2] * (w3 * w4)
    constant = q[Selector.QC] + pub_input
    ecc = q[Selector.QECC] * (w1 * w2 * w3 * w4 * wo)
    hash_ = (
        q[Selector.QH1] * w1 ** 5
        + q[Selector.QH2] * w2 ** 5
        + q[Selector.QH3] * w3 ** 5
        + q[Selector.QH4] * w4 ** 5
    )
    out = q[Selector.QO] * wo
    return add + mul + ecc + hash_ + constant - out


def eval_selector_multipliers(wire_vals: Sequence[galois.FieldArray]) -> List[galois.FieldArray]:
    """Return the values each selector is multiplied by in the gate equation.

    The result is (w1, w2, w3, w4, w1*w2, w3*w4, 1, w1*w2*w3*w4*wo,
    w1^5, w2^5, w3^5, w4^5, -wo), so that sum(q_i * m_i) + PI equals
    eval_gate_func for the same wires.
    """
    if len(wire_vals) < N_WIRES_PER_GATE:
        raise ParameterError(
            f"eval_selector_multipliers expects {N_WIRES_PER_GATE} wires, got {len(wire_vals)}"
        )
    w1, w2, w3, w4, wo = wire_vals[:N_WIRES_PER_GATE]
    return [
        w1,
        w2,
        w3,
        w4,
        w1 * w2,
        w3 * w4,
        w1 ** 0,  # one, shaped like the wires
        w1 * w2 * w3 * w4 * wo,
        w1 ** 5,
        w2 ** 5,
        w3 ** 5,
        w4 ** 5,
        -wo,
    ]
