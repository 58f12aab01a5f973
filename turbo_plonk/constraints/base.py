"""Interface between a constraint system and the proving protocol.

A proving protocol (preprocessing, prover and verifier) only needs the shape of
the circuit: the number of rows and variables, the wire and selector columns,
the public-input bindings and the gate equation. ConstraintSystem describes that
surface; CircuitShape is a detached snapshot of it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Type

import galois
import numpy as np

VarIndex = int  # Index into the witness store
CsIndex = int  # Row (constraint) index


class BoolVar(int):
    """Index of a variable whose value is forced to be 0 or 1 by the circuit.

    Returned by insert_boolean_gate, range_check and the equality gadgets. It is
    an ordinary VarIndex at runtime; the type marks which variables may safely be
    used as the control input of select.
    """

    def __repr__(self) -> str:
        return f"BoolVar({int(self)})"


@dataclass
class CircuitShape:
    """Witness-free description of a circuit, as handed to the proving protocol.

    Attributes:
        size: Number of rows
        num_vars: Number of variables
        n_wires_per_gate: Wire columns per row (5)
        num_selectors: Selector columns per row (13)
        max_gate_degree: Degree of the gate equation in the wires (5)
        quot_eval_dom_size: Size of the quotient-polynomial evaluation domain
        wiring: int64 array of shape (n_wires_per_gate, size)
        selectors: One FieldArray column per selector
        public_vars_constraint_indices: Rows that accept a public value
        public_vars_witness_indices: Variable bound at each of those rows
    """
    size: int
    num_vars: int
    n_wires_per_gate: int
    num_selectors: int
    max_gate_degree: int
    quot_eval_dom_size: int
    wiring: np.ndarray
    selectors: List[galois.FieldArray] = field(default_factory=list)
    public_vars_constraint_indices: List[CsIndex] = field(default_factory=list)
    public_vars_witness_indices: List[VarIndex] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-int representation suitable for json.dump."""
        return {
            "size": self.size,
            "numVars": self.num_vars,
            "nWiresPerGate": self.n_wires_per_gate,
            "numSelectors": self.num_selectors,
            "maxGateDegree": self.max_gate_degree,
            "quotEvalDomSize": self.quot_eval_dom_size,
            "wiring": [[int(v) for v in col] for col in self.wiring],
            "selectors": [[int(v) for v in col] for col in self.selectors],
            "publicVarsConstraintIndices": list(self.public_vars_constraint_indices),
            "publicVarsWitnessIndices": list(self.public_vars_witness_indices),
        }


class ConstraintSystem(ABC):
    """Circuit description consumed by the proving protocol.

    Attributes:
        field: galois FieldArray class of the witness and selector values
    """

    field: Type[galois.FieldArray]

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of rows."""

    @property
    @abstractmethod
    def num_vars(self) -> int:
        """Number of variables in the witness."""

    @property
    @abstractmethod
    def wiring(self) -> Sequence[Sequence[VarIndex]]:
        """Wire columns: wiring[i][row] is the variable bound to wire i of row."""

    @property
    @abstractmethod
    def public_vars_constraint_indices(self) -> Sequence[CsIndex]:
        pass

    @property
    @abstractmethod
    def public_vars_witness_indices(self) -> Sequence[VarIndex]:
        pass

    @abstractmethod
    def n_wires_per_gate(self) -> int:
        pass

    @abstractmethod
    def num_selectors(self) -> int:
        pass

    @abstractmethod
    def max_gate_degree(self) -> int:
        pass

    @abstractmethod
    def selector(self, index: int) -> galois.FieldArray:
        """Selector column `index` as a FieldArray of length size."""

    @abstractmethod
    def quot_eval_dom_size(self) -> int:
        """Size of the quotient evaluation domain (> max_gate_degree * size + 7)."""

    @abstractmethod
    def eval_gate_func(self, wire_vals, sel_vals, pub_input) -> galois.FieldArray:
        pass

    @abstractmethod
    def eval_selector_multipliers(self, wire_vals) -> List[galois.FieldArray]:
        pass

    def shape(self) -> CircuitShape:
        """Snapshot the circuit shape."""
        return CircuitShape(
            size=self.size,
            num_vars=self.num_vars,
            n_wires_per_gate=self.n_wires_per_gate(),
            num_selectors=self.num_selectors(),
            max_gate_degree=self.max_gate_degree(),
            quot_eval_dom_size=self.quot_eval_dom_size(),
            wiring=np.array(
                [list(col) for col in self.wiring], dtype=np.int64
            ).reshape(self.n_wires_per_gate(), self.size),
            selectors=[self.selector(i) for i in range(self.num_selectors())],
            public_vars_constraint_indices=list(self.public_vars_constraint_indices),
            public_vars_witness_indices=list(self.public_vars_witness_indices),
        )
