"""
TurboPLONK arithmetization

Builds the row/column representation of an arithmetic circuit consumed by a
PLONK-style proving protocol, and checks witnesses against it.

This package provides:
- Prime fields (via galois)
- The TurboPLONK gate equation (5 wires, 13 selectors, degree 5)
- A constraint system builder with constant and public-input gates and padding
- Gadgets: linear combination, add/sub/mul, boolean, select, equality test,
  range check
- A reference witness verifier

Usage:
    from turbo_plonk import TurboPlonkConstraintSystem, gadgets

    cs = TurboPlonkConstraintSystem()
    a = cs.new_variable(1)
    b = cs.new_variable(1)
    c = gadgets.add(cs, a, b)
    gadgets.range_check(cs, c, 3)
    cs.pad()
    witness = cs.get_and_clear_witness()
    cs.verify_witness(witness)
"""

from .config import CircuitConfig
from .constraints import (
    MAX_GATE_DEGREE,
    N_SELECTORS,
    N_WIRES_PER_GATE,
    BoolVar,
    CircuitPhase,
    CircuitShape,
    ConstraintSystem,
    CsIndex,
    Selector,
    TurboPlonkConstraintSystem,
    VarIndex,
    Wire,
    eval_gate_func,
    eval_selector_multipliers,
    gadgets,
)
from .errors import (
    CircuitError,
    FrozenSystemError,
    ParameterError,
    PublicInputCountError,
    PublicInputMismatchError,
    UnsatisfiedGateError,
    VariableIndexError,
    WitnessLengthError,
    WitnessVerificationError,
)
from .primitives.field import FF, FIELDS, GOLDILOCKS, get_field
from .verifier import gate_residuals, unsatisfied_rows, verify_witness

__version__ = "0.1.0"
__all__ = [
    # Field
    "FF",
    "FIELDS",
    "GOLDILOCKS",
    "get_field",
    # Config
    "CircuitConfig",
    # Gate
    "MAX_GATE_DEGREE",
    "N_SELECTORS",
    "N_WIRES_PER_GATE",
    "Selector",
    "Wire",
    "eval_gate_func",
    "eval_selector_multipliers",
    # Constraint system
    "BoolVar",
    "CircuitPhase",
    "CircuitShape",
    "ConstraintSystem",
    "CsIndex",
    "TurboPlonkConstraintSystem",
    "VarIndex",
    "gadgets",
    # Verification
    "verify_witness",
    "gate_residuals",
    "unsatisfied_rows",
    # Errors
    "CircuitError",
    "FrozenSystemError",
    "ParameterError",
    "PublicInputCountError",
    "PublicInputMismatchError",
    "UnsatisfiedGateError",
    "VariableIndexError",
    "WitnessLengthError",
    "WitnessVerificationError",
]
