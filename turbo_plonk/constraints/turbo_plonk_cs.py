"""TurboPLONK constraint system.

The constraint matrix is stored column-wise: 5 wire columns of variable indices
and 13 selector columns of field elements, one entry per row. The witness store
is a list of field elements indexed by VarIndex. Rows and variables are only
ever appended; every insertion validates its arguments first, so a failed call
leaves the system unchanged.

Lifecycle:
    BUILDING  -- pad() -->  PADDED  -- get_and_clear_witness() -->  PROVING

Variables and rows can only be added while BUILDING.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import galois
import numpy as np

from ..config import CircuitConfig
from ..errors import FrozenSystemError, ParameterError, VariableIndexError
from ..primitives.field import FieldLike, to_field, to_field_array
from .base import BoolVar, ConstraintSystem, CsIndex, VarIndex
from .gate import (
    MAX_GATE_DEGREE,
    N_SELECTORS,
    N_WIRES_PER_GATE,
    Selector,
    eval_gate_func,
    eval_selector_multipliers,
)

logger = logging.getLogger(__name__)


class CircuitPhase(Enum):
    BUILDING = "building"
    PADDED = "padded"
    PROVING = "proving"  # witness extracted and erased


def _next_power_of_two(n: int) -> int:
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


class TurboPlonkConstraintSystem(ConstraintSystem):
    """Builder for TurboPLONK circuits.

    Gates are inserted through the insert_* methods (which bind existing
    variables) or through the gadgets module (which also allocates the output
    variable and computes its witness value).

    Example:
        cs = TurboPlonkConstraintSystem()
        a = cs.new_variable(3)
        b = cs.new_variable(4)
        c = gadgets.mul(cs, a, b)
        cs.prepare_io_variable(c)
        cs.pad()
        witness = cs.get_and_clear_witness()
        cs.verify_witness(witness, [12])
    """

    def __init__(self, config: Optional[CircuitConfig] = None):
        self.config = config if config is not None else CircuitConfig()
        self.field = self.config.field
        self._selectors: List[List[galois.FieldArray]] = [[] for _ in range(N_SELECTORS)]
        self._wiring: Tuple[List[VarIndex], ...] = tuple([] for _ in range(N_WIRES_PER_GATE))
        self._size = 0
        self._num_vars = 0
        self._public_vars_constraint_indices: List[CsIndex] = []
        self._public_vars_witness_indices: List[VarIndex] = []
        # Private witness, erased by get_and_clear_witness()
        self._witness: List[galois.FieldArray] = []
        self._zero_var: Optional[VarIndex] = None
        self._one_var: Optional[VarIndex] = None
        self._phase = CircuitPhase.BUILDING

    # --- ConstraintSystem interface ---

    @property
    def size(self) -> int:
        return self._size

    @property
    def num_vars(self) -> int:
        return self._num_vars

    @property
    def wiring(self) -> Tuple[List[VarIndex], ...]:
        return tuple(list(col) for col in self._wiring)

    @property
    def public_vars_constraint_indices(self) -> List[CsIndex]:
        return list(self._public_vars_constraint_indices)

    @property
    def public_vars_witness_indices(self) -> List[VarIndex]:
        return list(self._public_vars_witness_indices)

    @property
    def phase(self) -> CircuitPhase:
        return self._phase

    def n_wires_per_gate(self) -> int:
        return N_WIRES_PER_GATE

    def num_selectors(self) -> int:
        return N_SELECTORS

    def max_gate_degree(self) -> int:
        return MAX_GATE_DEGREE

    def selector(self, index: int) -> galois.FieldArray:
        if not 0 <= index < N_SELECTORS:
            raise ParameterError(f"Selector index {index} out of range [0, {N_SELECTORS})")
        return to_field_array(self.field, self._selectors[index])

    def quot_eval_dom_size(self) -> int:
        return self.config.quot_eval_dom_size(self._size)

    def eval_gate_func(self, wire_vals, sel_vals, pub_input) -> galois.FieldArray:
        return eval_gate_func(wire_vals, sel_vals, pub_input)

    def eval_selector_multipliers(self, wire_vals) -> List[galois.FieldArray]:
        return eval_selector_multipliers(wire_vals)

    def get_witness_index(self, wire_index: int, cs_index: CsIndex) -> VarIndex:
        """Variable bound to wire `wire_index` of row `cs_index`."""
        if not 0 <= wire_index < N_WIRES_PER_GATE:
            raise VariableIndexError(f"wire index {wire_index} out of bound")
        if not 0 <= cs_index < self._size:
            raise VariableIndexError(f"constraint index {cs_index} out of bound (size = {self._size})")
        return self._wiring[wire_index][cs_index]

    # --- Variables ---

    def new_variable(self, value: FieldLike) -> VarIndex:
        """Add a variable with witness value `value`."""
        self._ensure_building()
        self._witness.append(to_field(self.field, value))
        self._num_vars += 1
        return self._num_vars - 1

    def add_variables(self, values: Sequence[FieldLike]) -> List[VarIndex]:
        """Add one variable per value; returns their indices in order."""
        self._ensure_building()
        elems = [to_field(self.field, v) for v in values]
        first = self._num_vars
        self._witness.extend(elems)
        self._num_vars += len(elems)
        return list(range(first, self._num_vars))

    def witness_value(self, var: VarIndex) -> galois.FieldArray:
        """Current witness value of `var` (unavailable once the witness is cleared)."""
        if self._phase is CircuitPhase.PROVING:
            raise FrozenSystemError("Witness has been extracted and cleared")
        self._check_var(var, "var")
        return self._witness[var]

    def zero_var(self) -> VarIndex:
        """Reserved variable constrained to zero, allocated on first use."""
        if self._zero_var is None:
            var = self.new_variable(0)
            self.insert_constant_gate(var, 0)
            self._zero_var = var
        return self._zero_var

    def one_var(self) -> VarIndex:
        """Reserved variable constrained to one, allocated on first use."""
        if self._one_var is None:
            var = self.new_variable(1)
            self.insert_constant_gate(var, 1)
            self._one_var = var
        return self._one_var

    # --- Gates ---

    def insert_gate(self, wires: Sequence[VarIndex], selectors: Sequence[FieldLike]) -> CsIndex:
        """Insert a fully specified row.

        This is the entry point for gadgets that use the ECC or hash selectors.

        Args:
            wires: (w1, w2, w3, w4, wo) variable indices
            selectors: 13 selector values, indexed by Selector

        Returns:
            Index of the inserted row
        """
        if len(selectors) != N_SELECTORS:
            raise ParameterError(f"Expected {N_SELECTORS} selectors, got {len(selectors)}")
        return self._push_row(wires, [to_field(self.field, q) for q in selectors])

    def insert_lc_gate(
        self,
        wires_in: Sequence[VarIndex],
        wire_out: VarIndex,
        q1: FieldLike,
        q2: FieldLike,
        q3: FieldLike,
        q4: FieldLike,
    ) -> CsIndex:
        """Insert a linear combination gate: wo = q1*w1 + q2*w2 + q3*w3 + q4*w4."""
        if len(wires_in) != 4:
            raise ParameterError(f"Linear combination takes 4 input wires, got {len(wires_in)}")
        sels = self._selector_row({
            Selector.Q1: q1,
            Selector.Q2: q2,
            Selector.Q3: q3,
            Selector.Q4: q4,
            Selector.QO: 1,
        })
        return self._push_row([*wires_in, wire_out], sels)

    def insert_add_gate(self, left_var: VarIndex, right_var: VarIndex, out_var: VarIndex) -> CsIndex:
        return self.insert_lc_gate([left_var, right_var, 0, 0], out_var, 1, 1, 0, 0)

    def insert_sub_gate(self, left_var: VarIndex, right_var: VarIndex, out_var: VarIndex) -> CsIndex:
        return self.insert_lc_gate([left_var, right_var, 0, 0], out_var, 1, -1, 0, 0)

    def insert_mul_gate(self, left_var: VarIndex, right_var: VarIndex, out_var: VarIndex) -> CsIndex:
        """Insert a multiplication gate: wo = w1 * w2."""
        sels = self._selector_row({Selector.QM1: 1, Selector.QO: 1})
        return self._push_row([left_var, right_var, 0, 0, out_var], sels)

    def insert_boolean_gate(self, var: VarIndex) -> BoolVar:
        """Boolean constrain `var` with the multiplication gate var * var = var."""
        self.insert_mul_gate(var, var, var)
        return BoolVar(var)

    def insert_constant_gate(self, var: VarIndex, constant: FieldLike) -> CsIndex:
        """Insert a constant constraint: wo = constant (every wire bound to `var`)."""
        sels = self._selector_row({Selector.QC: constant, Selector.QO: 1})
        return self._push_row([var] * N_WIRES_PER_GATE, sels)

    def prepare_io_variable(self, var: VarIndex) -> CsIndex:
        """Reserve the next row for a public value of `var`, supplied at verification time.

        The row is a constant gate with constant zero, so it is satisfied exactly
        when the public value PI fed into the gate equation equals the witness of
        `var`.
        """
        row = self.insert_constant_gate(var, 0)
        self._public_vars_constraint_indices.append(row)
        self._public_vars_witness_indices.append(int(var))
        return row

    # --- Finalisation ---

    def pad(self) -> None:
        """Pad the number of rows to a power of two with all-zero rows."""
        if self._phase is CircuitPhase.PROVING:
            raise FrozenSystemError("Cannot pad after the witness has been cleared")
        if self._num_vars == 0:
            self.zero_var()
        n = _next_power_of_two(self._size)
        diff = n - self._size
        zero = self.field(0)
        for column in self._selectors:
            column.extend([zero] * diff)
        for column in self._wiring:
            column.extend([0] * diff)
        logger.debug("Padded constraint system from %d to %d rows", self._size, n)
        self._size = n
        self._phase = CircuitPhase.PADDED

    def get_and_clear_witness(self) -> List[galois.FieldArray]:
        """Extract and clear the entire witness of the circuit.

        The witness consists of secret inputs, public inputs and the values of
        intermediate variables. This can only be done once; afterwards the
        system is read-only.
        """
        if self._phase is CircuitPhase.PROVING:
            raise FrozenSystemError("Witness has already been extracted")
        witness = list(self._witness)
        self._witness.clear()
        self._phase = CircuitPhase.PROVING
        logger.debug("Extracted witness of %d variables", len(witness))
        return witness

    def verify_witness(self, witness: Sequence[FieldLike], public_inputs: Sequence[FieldLike] = ()) -> None:
        """Check `witness` against every row; see turbo_plonk.verifier.verify_witness."""
        from ..verifier import verify_witness

        verify_witness(self, witness, public_inputs)

    # --- Internals ---

    def _ensure_building(self) -> None:
        if self._phase is not CircuitPhase.BUILDING:
            raise FrozenSystemError(
                f"Constraint system is {self._phase.value}; no more variables or gates can be added"
            )

    def _check_var(self, var: VarIndex, name: str) -> None:
        if isinstance(var, bool) or not isinstance(var, (int, np.integer)):
            raise VariableIndexError(f"{name} must be an integer variable index, got {var!r}")
        if not 0 <= var < self._num_vars:
            raise VariableIndexError(
                f"{name} index {var} out of bound (num_vars = {self._num_vars})"
            )

    def _selector_row(self, active: dict) -> List[galois.FieldArray]:
        """13 selector values: zero except for the `active` {Selector: value} entries."""
        zero = self.field(0)
        row = [zero] * N_SELECTORS
        for sel, value in active.items():
            row[sel] = to_field(self.field, value)
        return row

    def _push_row(self, wires: Sequence[VarIndex], selectors: List[galois.FieldArray]) -> CsIndex:
        self._ensure_building()
        if len(wires) != N_WIRES_PER_GATE:
            raise ParameterError(f"Expected {N_WIRES_PER_GATE} wires, got {len(wires)}")
        for i, var in enumerate(wires):
            self._check_var(var, f"wire {i}")
        for column, value in zip(self._selectors, selectors):
            column.append(value)
        for column, var in zip(self._wiring, wires):
            column.append(int(var))
        self._size += 1
        return self._size - 1
