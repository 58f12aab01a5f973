"""Tests for the reference witness verifier."""

import pytest

from turbo_plonk import (
    GOLDILOCKS,
    ParameterError,
    PublicInputCountError,
    PublicInputMismatchError,
    TurboPlonkConstraintSystem,
    UnsatisfiedGateError,
    WitnessLengthError,
    WitnessVerificationError,
    gadgets,
    gate_residuals,
    unsatisfied_rows,
    verify_witness,
)
from turbo_plonk.circuits import arithmetic_range_circuit


@pytest.fixture
def io_cs(cs):
    """c = a * b with c public; witness (3, 4, 12)."""
    a, b = cs.add_variables([3, 4])
    c = gadgets.mul(cs, a, b)
    cs.prepare_io_variable(c)
    cs.pad()
    return cs


class TestShapeChecks:
    def test_witness_too_short(self, io_cs) -> None:
        witness = io_cs.get_and_clear_witness()
        with pytest.raises(WitnessLengthError) as exc_info:
            verify_witness(io_cs, witness[:-1], [12])
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2
        assert exc_info.value.row is None

    def test_witness_too_long(self, io_cs) -> None:
        witness = io_cs.get_and_clear_witness()
        with pytest.raises(WitnessLengthError):
            verify_witness(io_cs, witness + [io_cs.field(0)], [12])

    @pytest.mark.parametrize("public_inputs", [[], [12, 12]])
    def test_public_input_count(self, io_cs, public_inputs) -> None:
        witness = io_cs.get_and_clear_witness()
        with pytest.raises(PublicInputCountError):
            verify_witness(io_cs, witness, public_inputs)


class TestPublicInputs:
    def test_accepted(self, io_cs) -> None:
        verify_witness(io_cs, io_cs.get_and_clear_witness(), [12])

    def test_accepts_field_elements(self, io_cs, field) -> None:
        verify_witness(io_cs, io_cs.get_and_clear_witness(), [field(12)])

    def test_mismatch(self, io_cs) -> None:
        witness = io_cs.get_and_clear_witness()
        with pytest.raises(PublicInputMismatchError) as exc_info:
            verify_witness(io_cs, witness, [13])
        err = exc_info.value
        assert err.row == 1
        assert err.variable == 2
        assert int(err.expected) == 13
        assert int(err.actual) == 12

    def test_consistent_but_wrong_product(self, io_cs, field) -> None:
        """The public value matches the witness but the witness breaks the mul row."""
        with pytest.raises(UnsatisfiedGateError) as exc_info:
            verify_witness(io_cs, [field(3), field(4), field(13)], [13])
        assert exc_info.value.row == 0

    def test_errors_share_a_base(self, io_cs) -> None:
        with pytest.raises(WitnessVerificationError):
            verify_witness(io_cs, io_cs.get_and_clear_witness(), [0])


class TestResiduals:
    def test_honest_witness_has_zero_residuals(self, io_cs) -> None:
        witness = io_cs.get_and_clear_witness()
        residuals = gate_residuals(io_cs, witness, [12])
        assert len(residuals) == io_cs.size
        assert [int(r) for r in residuals] == [0] * io_cs.size
        assert unsatisfied_rows(io_cs, witness, [12]) == []

    def test_residual_matches_error(self, io_cs, field) -> None:
        witness = [field(3), field(4), field(13)]
        with pytest.raises(UnsatisfiedGateError) as exc_info:
            verify_witness(io_cs, witness, [13])
        residuals = gate_residuals(io_cs, witness, [13])
        # 3 * 4 - 13
        assert residuals[0] == -field(1)
        assert exc_info.value.residual == residuals[0]

    def test_public_value_feeds_residual(self, io_cs, field) -> None:
        witness = io_cs.get_and_clear_witness()
        # PI - c at the public-input row
        assert gate_residuals(io_cs, witness, [10])[1] == -field(2)
        assert unsatisfied_rows(io_cs, witness, [10]) == [1]

    def test_foreign_field_witness_rejected(self) -> None:
        """Both checkers reject elements of another field."""
        cs = TurboPlonkConstraintSystem()
        cs.insert_constant_gate(cs.new_variable(0), 0)
        witness = [GOLDILOCKS(0)]
        with pytest.raises(ParameterError):
            gate_residuals(cs, witness)
        with pytest.raises(ParameterError):
            verify_witness(cs, witness)

    def test_empty_system(self, cs) -> None:
        assert len(gate_residuals(cs, [])) == 0
        verify_witness(cs, [])


class TestMutation:
    def test_every_variable_is_constrained(self, config) -> None:
        """Changing any single variable of the circuit breaks some row."""
        cs, _ = arithmetic_range_circuit(1, 1, config=config)
        cs.pad()
        witness = cs.get_and_clear_witness()
        cs.verify_witness(witness)
        for i in range(len(witness)):
            mutated = list(witness)
            mutated[i] = mutated[i] + cs.field(1)
            with pytest.raises(UnsatisfiedGateError):
                cs.verify_witness(mutated)
            assert unsatisfied_rows(cs, mutated) != []

    def test_row_by_row_and_vectorised_agree(self, config) -> None:
        cs, _ = arithmetic_range_circuit(1, 2, weights=(2, 3, 1, 1), n_bits=4, config=config)
        cs.pad()
        witness = cs.get_and_clear_witness()
        mutated = list(witness)
        mutated[2] = cs.field(0)
        rows = unsatisfied_rows(cs, mutated)
        with pytest.raises(UnsatisfiedGateError) as exc_info:
            cs.verify_witness(mutated)
        assert exc_info.value.row == rows[0]
