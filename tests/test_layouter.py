"""Tests for the assignment grid, regions and layouters."""

import pytest

from constraints.columns import Cell
from constraints.system import ConstraintSystem
from primitives.assigned import Assigned
from primitives.errors import CellAlreadyAssigned, EqualityNotEnabled, RegionOverflow
from primitives.field import FF, GL
from primitives.value import Value
from protocol.assignment import Assignment, RegionInfo
from protocol.layouter import PublicBinding, ShapeLayouter, SimpleLayouter
from protocol.permutation import Permutation


@pytest.fixture
def grid():
    """Two equality-enabled witness columns, one plain witness, one fixed, one public."""
    cs = ConstraintSystem(GL)
    a = cs.new_witness_column()
    b = cs.new_witness_column()
    w = cs.new_witness_column()
    s = cs.new_fixed_column()
    p = cs.new_public_column()
    cs.enable_equality(a)
    cs.enable_equality(b)
    cs.enable_equality(p)
    description = cs.finalize()
    assignment = Assignment(description, 2)
    permutation = Permutation(description, assignment.n)
    layouter = SimpleLayouter(assignment, permutation)
    return layouter, (a, b, w, s, p)


class TestAssignment:

    def test_unassigned_reads_zero(self, grid) -> None:
        """Cells never assigned read as zero."""
        layouter, (a, _, _, s, _) = grid
        assert layouter.assignment.value(Cell(a, 3)) == GL(0)
        assert layouter.assignment.value(Cell(s, 0)) == GL(0)

    def test_unknown_value_marks_assigned(self, grid) -> None:
        """An unknown value occupies the cell but stores zero."""
        layouter, (a, _, _, _, _) = grid
        assignment = layouter.assignment
        cell = assignment.assign(a, 1, Value.unknown())
        assert assignment.is_assigned(cell)
        assert assignment.value(cell) == GL(0)

    def test_double_assignment_rejected(self, grid) -> None:
        """A cell can be assigned once per pass."""
        layouter, (a, _, _, _, _) = grid
        assignment = layouter.assignment
        assignment.assign(a, 0, Value.known(1))
        with pytest.raises(CellAlreadyAssigned):
            assignment.assign(a, 0, Value.known(2))

    def test_public_column_not_assignable(self, grid) -> None:
        """Public values come from the instance, never from synthesis."""
        layouter, (_, _, _, _, p) = grid
        with pytest.raises(ValueError):
            layouter.assignment.assign(p, 0, Value.known(1))

    def test_fraction_evaluated_on_read(self, grid) -> None:
        """Assigned fractions are inverted when the grid is read."""
        layouter, (_, _, w, _, _) = grid
        assignment = layouter.assignment
        assignment.assign(w, 0, Value.known(Assigned.fraction(GL, 1, 4)))
        assignment.assign(w, 1, Value.known(GL(9)))
        column = assignment.columns()[w]
        assert column[0] * GL(4) == GL(1)
        assert column[1] == GL(9)

    def test_fraction_from_other_field_rejected(self, grid) -> None:
        """Fractions are held to the grid's field like plain values."""
        layouter, (_, _, w, _, _) = grid
        assignment = layouter.assignment
        with pytest.raises(TypeError):
            assignment.assign(w, 0, Value.known(Assigned(FF(3))))
        with pytest.raises(TypeError):
            assignment.assign(w, 0, Value.known(Assigned(GL(1), FF(3))))
        assert not assignment.is_assigned(Cell(w, 0))
        assignment.assign(w, 0, Value.known(Assigned.of(GL, 3)))
        assert assignment.value(Cell(w, 0)) == GL(3)

    def test_negative_k_rejected(self, grid) -> None:
        """k must be non-negative."""
        layouter, _ = grid
        with pytest.raises(ValueError):
            Assignment(layouter.assignment.cs, -1)


class TestSimpleLayouter:

    def test_regions_placed_sequentially(self, grid) -> None:
        """Each region starts at the row after the previous one ends."""
        layouter, (a, b, _, s, _) = grid

        def two_rows(region):
            region.assign_advice(a, 0, lambda: Value.known(1))
            return region.assign_advice(b, 1, lambda: Value.known(2))

        def one_row(region):
            region.assign_fixed(s, 0, lambda: Value.known(1))
            return region.assign_advice(a, 0, lambda: Value.known(3))

        first = layouter.assign_region("first", two_rows)
        second = layouter.assign_region("second", one_row)
        assert first == Cell(b, 1)
        assert second == Cell(a, 2)
        assert layouter.assignment.regions == [RegionInfo("first", 0, 2), RegionInfo("second", 2, 1)]
        assert layouter.assignment.value(Cell(a, 2)) == GL(3)
        assert layouter.assignment.region_at(1).name == "first"
        assert layouter.assignment.region_at(3) is None
        assert layouter.assignment.used_rows == 3

    def test_value_fn_accepts_plain_scalars(self, grid) -> None:
        """A value function may return a bare field element."""
        layouter, (a, _, _, _, _) = grid
        cell = layouter.assign_region("plain", lambda region: region.assign_advice(a, 0, lambda: GL(5)))
        assert layouter.assignment.value(cell) == GL(5)

    def test_zero_row_region(self, grid) -> None:
        """A region that only copies takes no rows and is not recorded."""
        layouter, (a, b, _, _, _) = grid
        c0 = layouter.assign_region("x", lambda region: region.assign_advice(a, 0, lambda: Value.known(1)))
        layouter.assign_region("copy", lambda region: region.constrain_equal(c0, Cell(b, 0)))
        assert layouter.next_row == 1
        assert [r.name for r in layouter.assignment.regions] == ["x"]
        assert layouter.permutation.same_class(c0, Cell(b, 0))

    def test_overflow(self, grid) -> None:
        """A region past the end of the grid raises before assigning anything."""
        layouter, (a, _, _, _, _) = grid
        calls = []

        def big(region):
            calls.append(type(region).__name__)
            region.assign_advice(a, 4, lambda: Value.known(1))

        with pytest.raises(RegionOverflow) as exc_info:
            layouter.assign_region("big", big)
        assert exc_info.value.needed == 5
        assert exc_info.value.available == 4
        assert calls == ["RegionShape"]

    def test_negative_offset_rejected(self, grid) -> None:
        """Region offsets start at zero."""
        layouter, (a, _, _, _, _) = grid
        with pytest.raises(ValueError):
            layouter.assign_region("neg", lambda region: region.assign_advice(a, -1, lambda: Value.known(1)))

    def test_kind_checked(self, grid) -> None:
        """assign_advice takes witness columns, assign_fixed takes fixed ones."""
        layouter, (a, _, _, s, _) = grid
        with pytest.raises(ValueError):
            layouter.assign_region("bad", lambda region: region.assign_advice(s, 0, lambda: Value.known(1)))
        with pytest.raises(ValueError):
            layouter.assign_region("bad", lambda region: region.assign_fixed(a, 0, lambda: Value.known(1)))

    def test_copy_without_equality(self, grid) -> None:
        """constrain_equal on a column without equality raises."""
        layouter, (a, _, w, _, _) = grid

        def assign(region):
            x = region.assign_advice(a, 0, lambda: Value.known(1))
            y = region.assign_advice(w, 0, lambda: Value.known(1))
            region.constrain_equal(x, y)

        with pytest.raises(EqualityNotEnabled):
            layouter.assign_region("copy", assign)

    def test_constrain_instance(self, grid) -> None:
        """Bindings are recorded in call order."""
        layouter, (a, _, _, _, p) = grid
        cell = layouter.assign_region("x", lambda region: region.assign_advice(a, 0, lambda: Value.known(1)))
        layouter.constrain_instance(cell, p, 0)
        layouter.constrain_instance(cell, p, 3)
        assert layouter.bindings == [PublicBinding(cell, p, 0), PublicBinding(cell, p, 3)]

    def test_constrain_instance_errors(self, grid) -> None:
        """Bindings need a public column, equality on both sides and an in-range row."""
        layouter, (a, _, w, _, p) = grid
        with pytest.raises(ValueError):
            layouter.constrain_instance(Cell(a, 0), a, 0)
        with pytest.raises(EqualityNotEnabled):
            layouter.constrain_instance(Cell(w, 0), p, 0)
        with pytest.raises(RegionOverflow):
            layouter.constrain_instance(Cell(a, 0), p, 4)


class TestShapeLayouter:

    def test_measures_without_values(self, grid) -> None:
        """The shape pass records rows and never calls value functions."""
        _, (a, b, _, s, p) = grid
        layouter = ShapeLayouter()

        def never():
            raise AssertionError("value function called during measuring")

        def assign(region):
            region.assign_advice(a, 0, never)
            region.assign_advice(b, 2, never)
            region.assign_fixed(s, 1, never)
            return region.assign_advice(a, 1, never)

        cell = layouter.assign_region("shape", assign)
        layouter.assign_region("copy", lambda region: region.constrain_equal(cell, cell))
        layouter.constrain_instance(cell, p, 0)
        assert cell == Cell(a, 1)
        assert layouter.rows == 3
        assert [r.rows for r in layouter.regions] == [3, 0]
        assert layouter.regions[0].columns == {a, b, s}
