"""Exceptions raised by the constraint system and the witness verifier.

Two families:
- Contract violations (ParameterError, VariableIndexError, FrozenSystemError)
  are raised by the call that was misused, before any state is changed.
- Verification failures (WitnessVerificationError and subclasses) are raised by
  verify_witness when a concrete witness does not satisfy the circuit.
"""

from typing import Optional, Sequence


class CircuitError(Exception):
    """Base class for all constraint system errors."""


class ParameterError(CircuitError, ValueError):
    """Unexpected parameter for a method or function."""


class VariableIndexError(CircuitError, IndexError):
    """Variable, wire or constraint index out of bounds."""


class FrozenSystemError(CircuitError):
    """The constraint system can no longer be mutated in its current phase."""


class WitnessVerificationError(CircuitError):
    """A witness does not satisfy the constraint system.

    Attributes:
        row: Offending constraint index, or None for shape mismatches
    """

    def __init__(self, message: str, row: Optional[int] = None):
        super().__init__(message)
        self.row = row


class WitnessLengthError(WitnessVerificationError):
    """Witness length differs from the number of variables."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"witness len = {actual}, num_vars = {expected}")
        self.expected = expected
        self.actual = actual


class PublicInputCountError(WitnessVerificationError):
    """Number of public inputs differs from the number of public-input bindings."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"wrong number of online variables: got {actual}, expected {expected}"
        )
        self.expected = expected
        self.actual = actual


class PublicInputMismatchError(WitnessVerificationError):
    """A supplied public value differs from the witness value bound at its row."""

    def __init__(self, row: int, variable: int, expected, actual):
        super().__init__(
            f"cs index {row}: online var {int(expected)} does not match "
            f"witness {int(actual)} (variable {variable})",
            row=row,
        )
        self.variable = variable
        self.expected = expected
        self.actual = actual


class UnsatisfiedGateError(WitnessVerificationError):
    """The gate equation does not vanish at a row."""

    def __init__(self, row: int, wire_vals: Sequence, sel_vals: Sequence, residual):
        super().__init__(
            f"cs index {row}: wire_vals = ({', '.join(str(int(w)) for w in wire_vals)}), "
            f"sel_vals = ({', '.join(str(int(s)) for s in sel_vals)})",
            row=row,
        )
        self.wire_vals = list(wire_vals)
        self.sel_vals = list(sel_vals)
        self.residual = residual
