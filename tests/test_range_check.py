"""Tests for the range check gadget."""

import pytest

from turbo_plonk import (
    BoolVar,
    ParameterError,
    TurboPlonkConstraintSystem,
    UnsatisfiedGateError,
    gadgets,
)

N_BITS = list(range(2, 11))


def _range_checked(cs, value, n_bits):
    var = cs.new_variable(value)
    bits = gadgets.range_check(cs, var, n_bits)
    cs.pad()
    return var, bits, cs.get_and_clear_witness()


class TestRangeCheck:
    @pytest.mark.parametrize("n_bits", N_BITS)
    def test_in_range(self, config, n_bits: int) -> None:
        for value in (0, 1, 2 ** n_bits - 1, (2 ** n_bits) // 3):
            cs = TurboPlonkConstraintSystem(config)
            _, _, witness = _range_checked(cs, value, n_bits)
            cs.verify_witness(witness)

    @pytest.mark.parametrize("n_bits", N_BITS)
    def test_out_of_range(self, cs, n_bits: int) -> None:
        _, _, witness = _range_checked(cs, 2 ** n_bits, n_bits)
        with pytest.raises(UnsatisfiedGateError):
            cs.verify_witness(witness)

    def test_minus_one_out_of_range(self, cs) -> None:
        _, _, witness = _range_checked(cs, -1, 8)
        with pytest.raises(UnsatisfiedGateError):
            cs.verify_witness(witness)

    @pytest.mark.parametrize("n_bits", N_BITS)
    def test_row_and_variable_counts(self, cs, n_bits: int) -> None:
        var = cs.new_variable(1)
        gadgets.range_check(cs, var, n_bits)
        n_folds = (n_bits - 2) // 3
        assert cs.size == n_bits + n_folds + 1
        assert cs.num_vars == 1 + n_bits + n_folds

    def test_bits_least_significant_first(self, cs) -> None:
        var = cs.new_variable(0b1101)
        bits = gadgets.range_check(cs, var, 6)
        assert all(isinstance(b, BoolVar) for b in bits)
        assert [int(cs.witness_value(b)) for b in bits] == [1, 0, 1, 1, 0, 0]

    def test_last_row_writes_into_checked_variable(self, cs) -> None:
        var = cs.new_variable(5)
        gadgets.range_check(cs, var, 7)
        assert cs.get_witness_index(4, cs.size - 1) == var

    @pytest.mark.parametrize("n_bits", [0, 1, -3])
    def test_too_few_bits(self, cs, n_bits: int) -> None:
        var = cs.new_variable(1)
        with pytest.raises(ParameterError):
            gadgets.range_check(cs, var, n_bits)
        assert cs.num_vars == 1
        assert cs.size == 0


class TestForgedBits:
    def test_non_boolean_decomposition(self, cs, field) -> None:
        """5 = 4*0 + 2*1 + 3 recomposes but 3 is not a bit."""
        _, bits, witness = _range_checked(cs, 5, 3)
        witness[bits[0]] = field(3)
        witness[bits[1]] = field(1)
        witness[bits[2]] = field(0)
        with pytest.raises(UnsatisfiedGateError) as exc_info:
            cs.verify_witness(witness)
        assert exc_info.value.row == 0

    @pytest.mark.parametrize("position", range(5))
    def test_flipped_bit(self, cs, field, position: int) -> None:
        _, bits, witness = _range_checked(cs, 0b10110, 5)
        witness[bits[position]] = field(1) - witness[bits[position]]
        with pytest.raises(UnsatisfiedGateError):
            cs.verify_witness(witness)

    def test_value_changed(self, cs, field) -> None:
        var, _, witness = _range_checked(cs, 9, 4)
        witness[var] = field(10)
        with pytest.raises(UnsatisfiedGateError) as exc_info:
            cs.verify_witness(witness)
        assert exc_info.value.row == 4
