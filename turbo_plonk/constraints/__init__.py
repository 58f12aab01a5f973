"""Constraint system, gate equation and gadget library."""

from . import gadgets
from .base import BoolVar, CircuitShape, ConstraintSystem, CsIndex, VarIndex
from .gate import (
    MAX_GATE_DEGREE,
    N_SELECTORS,
    N_WIRES_PER_GATE,
    Selector,
    Wire,
    eval_gate_func,
    eval_selector_multipliers,
)
from .turbo_plonk_cs import CircuitPhase, TurboPlonkConstraintSystem

__all__ = [
    "BoolVar",
    "CircuitPhase",
    "CircuitShape",
    "ConstraintSystem",
    "CsIndex",
    "MAX_GATE_DEGREE",
    "N_SELECTORS",
    "N_WIRES_PER_GATE",
    "Selector",
    "TurboPlonkConstraintSystem",
    "VarIndex",
    "Wire",
    "eval_gate_func",
    "eval_selector_multipliers",
    "gadgets",
]
