"""Tests for copy-constraint equivalence classes."""

import pytest

from constraints.columns import Cell
from constraints.system import ConstraintSystem
from primitives.errors import EqualityNotEnabled, RegionOverflow
from protocol.permutation import Permutation


def _setup(n: int = 4):
    cs = ConstraintSystem()
    a = cs.new_witness_column()
    b = cs.new_witness_column()
    c = cs.new_witness_column()
    cs.enable_equality(a)
    cs.enable_equality(b)
    return Permutation(cs.finalize(), n), a, b, c


class TestPermutation:

    def test_fresh_permutation_has_no_classes(self) -> None:
        """Cells start in singleton classes, which are not reported."""
        perm, a, b, _ = _setup()
        assert perm.classes() == []
        assert perm.same_class(Cell(a, 0), Cell(a, 0))
        assert not perm.same_class(Cell(a, 0), Cell(b, 0))

    def test_copy_merges(self) -> None:
        """copy puts both cells in one class."""
        perm, a, b, _ = _setup()
        perm.copy(Cell(a, 1), Cell(b, 3))
        assert perm.same_class(Cell(a, 1), Cell(b, 3))
        assert perm.classes() == [[Cell(a, 1), Cell(b, 3)]]

    def test_transitive(self) -> None:
        """Chained copies join into a single class."""
        perm, a, b, _ = _setup()
        perm.copy(Cell(a, 0), Cell(b, 0))
        perm.copy(Cell(b, 0), Cell(a, 2))
        perm.copy(Cell(b, 3), Cell(a, 3))
        assert perm.same_class(Cell(a, 0), Cell(a, 2))
        assert perm.classes() == [
            [Cell(a, 0), Cell(a, 2), Cell(b, 0)],
            [Cell(a, 3), Cell(b, 3)],
        ]

    def test_copy_idempotent(self) -> None:
        """Binding the same pair twice, in either order, changes nothing."""
        perm, a, b, _ = _setup()
        perm.copy(Cell(a, 1), Cell(b, 1))
        before = perm.classes()
        perm.copy(Cell(a, 1), Cell(b, 1))
        perm.copy(Cell(b, 1), Cell(a, 1))
        assert perm.classes() == before

    def test_self_copy_is_trivial(self) -> None:
        """A cell copied to itself forms no reported class."""
        perm, a, _, _ = _setup()
        perm.copy(Cell(a, 2), Cell(a, 2))
        assert perm.classes() == []

    def test_column_without_equality_rejected(self) -> None:
        """Copies need equality on both columns."""
        perm, a, _, c = _setup()
        with pytest.raises(EqualityNotEnabled) as exc_info:
            perm.copy(Cell(a, 0), Cell(c, 0))
        assert exc_info.value.column == c

    def test_row_out_of_range_rejected(self) -> None:
        """Cells beyond the grid cannot be copied."""
        perm, a, b, _ = _setup(n=4)
        with pytest.raises(RegionOverflow):
            perm.copy(Cell(a, 4), Cell(b, 0))
