"""Witness verification.

verify_witness is a plaintext reference oracle: it has the full witness in the
clear and checks every row of the constraint matrix against the gate equation.
It is used to test circuits independently of any proving protocol and gives no
zero-knowledge or succinctness guarantees.
"""

import logging
from typing import List, Sequence

import galois
import numpy as np

from .constraints.base import ConstraintSystem
from .errors import (
    PublicInputCountError,
    PublicInputMismatchError,
    UnsatisfiedGateError,
    WitnessLengthError,
)
from .primitives.field import FieldLike, to_field, to_field_array

logger = logging.getLogger(__name__)


def _check_lengths(cs: ConstraintSystem, witness: Sequence, public_inputs: Sequence) -> None:
    if len(witness) != cs.num_vars:
        raise WitnessLengthError(cs.num_vars, len(witness))
    n_public = len(cs.public_vars_witness_indices)
    if len(public_inputs) != n_public or len(public_inputs) != len(cs.public_vars_constraint_indices):
        raise PublicInputCountError(n_public, len(public_inputs))


def verify_witness(
    cs: ConstraintSystem,
    witness: Sequence[FieldLike],
    public_inputs: Sequence[FieldLike] = (),
) -> None:
    """Check that `witness` satisfies every row of `cs`.

    Rows are checked in increasing order. For a row bound to a public input the
    supplied value must equal the witness of the bound variable, and is fed into
    the gate equation as PI; every other row uses PI = 0.

    Args:
        cs: Constraint system (any phase)
        witness: One value per variable
        public_inputs: One value per public-input binding, in binding order

    Raises:
        WitnessLengthError: If len(witness) != cs.num_vars
        PublicInputCountError: If the number of public inputs is wrong
        PublicInputMismatchError: If a public input differs from the witness
        UnsatisfiedGateError: If the gate equation does not vanish at a row
    """
    _check_lengths(cs, witness, public_inputs)
    field = cs.field
    witness = [to_field(field, w) for w in witness]
    public_inputs = [to_field(field, v) for v in public_inputs]
    bindings = list(zip(
        cs.public_vars_constraint_indices,
        cs.public_vars_witness_indices,
        public_inputs,
    ))
    wiring = cs.wiring
    selectors = [cs.selector(i) for i in range(cs.num_selectors())]
    zero = field(0)

    for cs_index in range(cs.size):
        public_online = zero
        for c_i, w_i, online_var in bindings:
            if c_i == cs_index:
                public_online = online_var
                if witness[w_i] != online_var:
                    logger.debug("Public input mismatch at row %d (variable %d)", cs_index, w_i)
                    raise PublicInputMismatchError(cs_index, w_i, online_var, witness[w_i])

        wire_vals = [witness[column[cs_index]] for column in wiring]
        sel_vals = [column[cs_index] for column in selectors]
        residual = cs.eval_gate_func(wire_vals, sel_vals, public_online)
        if residual != zero:
            logger.debug("Gate equation not satisfied at row %d", cs_index)
            raise UnsatisfiedGateError(cs_index, wire_vals, sel_vals, residual)


def gate_residuals(
    cs: ConstraintSystem,
    witness: Sequence[FieldLike],
    public_inputs: Sequence[FieldLike] = (),
) -> galois.FieldArray:
    """Evaluate the gate equation at every row at once.

    Unlike verify_witness, public inputs are only fed in as PI and not compared
    with the witness.

    Returns:
        FieldArray of length cs.size; row i is satisfied iff entry i is zero
    """
    _check_lengths(cs, witness, public_inputs)
    field = cs.field
    if cs.size == 0:
        return field.Zeros(0)

    w = to_field_array(field, witness)
    wiring = np.array(cs.wiring, dtype=np.int64)
    wire_vals = [w[wiring[i]] for i in range(cs.n_wires_per_gate())]
    sel_vals = [cs.selector(i) for i in range(cs.num_selectors())]

    pi = field.Zeros(cs.size)
    for row, value in zip(cs.public_vars_constraint_indices, public_inputs):
        pi[row] = to_field(field, value)

    return cs.eval_gate_func(wire_vals, sel_vals, pi)


def unsatisfied_rows(
    cs: ConstraintSystem,
    witness: Sequence[FieldLike],
    public_inputs: Sequence[FieldLike] = (),
) -> List[int]:
    """Indices of every row whose gate equation does not vanish."""
    residuals = gate_residuals(cs, witness, public_inputs)
    return [int(i) for i in np.flatnonzero(residuals.view(np.ndarray))]
