"""Regions and layouters.

A region is a scoped group of assignments made with row offsets relative to
the region's start. The layouter decides where each region starts.

SimpleLayouter places regions back to back in call order. Each region closure
runs twice: first against a RegionShape, which records the offsets the closure
touches (value functions are never called), then against a Region placed at
the next free row. Placement is therefore deterministic and regions never
overlap.

Example:
    def assign(region):
        a = region.assign_advice(config.a, 0, lambda: x)
        b = region.assign_advice(config.b, 0, lambda: x * 2)
        region.assign_fixed(config.s, 0, lambda: Value.known(1))
        return a, b

    a, b = layouter.assign_region("double", assign)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Set, TypeVar

from constraints.columns import Cell, Column, ColumnKind
from primitives.errors import EqualityNotEnabled, RegionOverflow
from primitives.value import Value
from protocol.assignment import Assignment
from protocol.permutation import Permutation

R = TypeVar('R')


@dataclass(frozen=True)
class PublicBinding:
    """cell must equal row `row` of public column `column`."""
    cell: Cell
    column: Column
    row: int


def _check_kind(column: Column, kind: ColumnKind) -> None:
    if column.kind is not kind:
        raise ValueError(f"Column {column} is not a {kind.name.lower()} column")


def _check_offset(offset: int) -> None:
    if offset < 0:
        raise ValueError(f"Region offsets start at 0, got {offset}")


def as_value(result) -> Value:
    """Wrap a bare result of a value function as a known Value."""
    return result if isinstance(result, Value) else Value.known(result)


class RegionShape:
    """Measuring pass of a region: tracks columns and the highest offset used."""

    def __init__(self, name: str):
        self.name = name
        self.columns: Set[Column] = set()
        self.rows = 0

    def _record(self, column: Column, offset: int) -> Cell:
        _check_offset(offset)
        self.columns.add(column)
        self.rows = max(self.rows, offset + 1)
        return Cell(column, offset)

    def assign_advice(self, column: Column, offset: int, value_fn: Callable[[], Value]) -> Cell:
        _check_kind(column, ColumnKind.WITNESS)
        return self._record(column, offset)

    def assign_fixed(self, column: Column, offset: int, value_fn: Callable[[], Value]) -> Cell:
        _check_kind(column, ColumnKind.FIXED)
        return self._record(column, offset)

    def constrain_equal(self, a: Cell, b: Cell) -> None:
        pass


class Region:
    """Assignment pass of a region placed at absolute row `start`."""

    def __init__(self, name: str, start: int, assignment: Assignment, permutation: Permutation):
        self.name = name
        self.start = start
        self._assignment = assignment
        self._permutation = permutation

    def _assign(self, column: Column, offset: int, value_fn: Callable[[], Value]) -> Cell:
        _check_offset(offset)
        return self._assignment.assign(column, self.start + offset, as_value(value_fn()))

    def assign_advice(self, column: Column, offset: int, value_fn: Callable[[], Value]) -> Cell:
        """Assign a witness cell; returns its absolute Cell."""
        _check_kind(column, ColumnKind.WITNESS)
        return self._assign(column, offset, value_fn)

    def assign_fixed(self, column: Column, offset: int, value_fn: Callable[[], Value]) -> Cell:
        """Assign a fixed cell; returns its absolute Cell."""
        _check_kind(column, ColumnKind.FIXED)
        return self._assign(column, offset, value_fn)

    def constrain_equal(self, a: Cell, b: Cell) -> None:
        """Put a and b in the same equivalence class.

        Raises:
            EqualityNotEnabled: If either column is not equality-enabled
        """
        self._permutation.copy(a, b)


class Layouter(ABC):
    """Places regions on the grid and records public-input bindings."""

    @abstractmethod
    def assign_region(self, name: str, closure: Callable[..., R]) -> R:
        """Run closure with a region handle and return what it returns."""

    @abstractmethod
    def constrain_instance(self, cell: Cell, column: Column, row: int) -> None:
        """Bind cell to row `row` of public column `column`."""


class SimpleLayouter(Layouter):
    """Lays regions out one after another, in call order."""

    def __init__(self, assignment: Assignment, permutation: Permutation):
        self.assignment = assignment
        self.permutation = permutation
        self.bindings: List[PublicBinding] = []
        self.next_row = 0

    def assign_region(self, name: str, closure: Callable[..., R]) -> R:
        shape = RegionShape(name)
        closure(shape)

        start = self.next_row
        end = start + shape.rows
        if end > self.assignment.n:
            raise RegionOverflow(end, self.assignment.n, what=f"region '{name}'")

        result = closure(Region(name, start, self.assignment, self.permutation))
        if shape.rows:
            self.assignment.add_region(name, start, shape.rows)
        self.next_row = end
        return result

    def constrain_instance(self, cell: Cell, column: Column, row: int) -> None:
        _check_kind(column, ColumnKind.PUBLIC)
        cs = self.assignment.cs
        for col in (cell.column, column):
            if not cs.is_equality_enabled(col):
                raise EqualityNotEnabled(col)
        if not 0 <= row < self.assignment.n:
            raise RegionOverflow(row + 1, self.assignment.n, what=f"public row {row}")
        self.bindings.append(PublicBinding(cell, column, row))


class ShapeLayouter(Layouter):
    """Measures a circuit without assigning anything.

    Region closures only ever see a RegionShape, so witness values are never
    computed; this is how the row count of a circuit is found without a
    witness.
    """

    def __init__(self):
        self.rows = 0
        self.regions: List[RegionShape] = []

    def assign_region(self, name: str, closure: Callable[..., R]) -> R:
        shape = RegionShape(name)
        result = closure(shape)
        self.regions.append(shape)
        self.rows += shape.rows
        return result

    def constrain_instance(self, cell: Cell, column: Column, row: int) -> None:
        _check_kind(column, ColumnKind.PUBLIC)
