"""Tests for padding the constraint system to a power of two."""

import pytest

from turbo_plonk import CircuitPhase, Selector, gate_residuals


def _with_rows(cs, n_rows: int):
    var = cs.new_variable(2)
    for _ in range(n_rows):
        cs.insert_constant_gate(var, 2)
    return cs


class TestPad:
    @pytest.mark.parametrize("n_rows,expected", [
        (1, 1), (2, 2), (3, 4), (4, 4), (5, 8), (6, 8), (7, 8), (8, 8), (9, 16),
    ])
    def test_size_is_next_power_of_two(self, cs, n_rows: int, expected: int) -> None:
        _with_rows(cs, n_rows).pad()
        assert cs.size == expected
        assert cs.phase is CircuitPhase.PADDED
        assert all(len(col) == expected for col in cs.wiring)
        assert all(len(cs.selector(s)) == expected for s in Selector)

    def test_padded_rows(self, cs) -> None:
        _with_rows(cs, 5).pad()
        for row in range(5, 8):
            assert [cs.get_witness_index(w, row) for w in range(5)] == [0] * 5
            assert [int(cs.selector(s)[row]) for s in Selector] == [0] * 13

    def test_padded_rows_accept_any_witness(self, cs, field) -> None:
        _with_rows(cs, 3)
        cs.add_variables([7, 11])
        cs.pad()
        witness = [field.Random() for _ in range(cs.num_vars)]
        residuals = gate_residuals(cs, witness)
        assert int(residuals[3]) == 0

    def test_empty_system(self, cs) -> None:
        cs.pad()
        assert cs.size == 1
        assert cs.num_vars == 1
        witness = cs.get_and_clear_witness()
        assert [int(w) for w in witness] == [0]
        cs.verify_witness(witness)

    def test_variables_without_rows(self, cs) -> None:
        cs.add_variables([1, 2])
        cs.pad()
        assert cs.size == 1
        assert cs.num_vars == 2

    def test_idempotent(self, cs) -> None:
        _with_rows(cs, 3).pad()
        cs.pad()
        assert cs.size == 4

    def test_existing_rows_untouched(self, cs) -> None:
        _with_rows(cs, 3)
        before = [col[:3] for col in cs.wiring]
        cs.pad()
        assert [col[:3] for col in cs.wiring] == before
        assert [int(v) for v in cs.selector(Selector.QC)] == [2, 2, 2, 0]
