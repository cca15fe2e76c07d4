"""Dense witness/fixed grid for one synthesis pass.

Each witness and fixed column is a galois array of 2^k rows. Unassigned cells
read as zero. A parallel boolean mask per column tracks which cells were
assigned, so a second assignment to the same cell is rejected.

Witness values may be Assigned fractions. Their denominators are kept in a
separate array per column and inverted in one batch when the grid is read.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import galois
import numpy as np

from constraints.columns import Cell, Column, ColumnKind
from constraints.system import ConstraintSystemDescription
from primitives.assigned import Assigned, batch_evaluate
from primitives.errors import CellAlreadyAssigned, RegionOverflow
from primitives.field import to_field
from primitives.value import Value


@dataclass(frozen=True)
class RegionInfo:
    """Rows [start, start + rows) placed for a named region."""
    name: str
    start: int
    rows: int

    def contains(self, row: int) -> bool:
        return self.start <= row < self.start + self.rows


class Assignment:
    """Witness and fixed column values for one synthesis pass.

    Attributes:
        cs: Frozen constraint system the grid is laid out for
        k: log2 of the number of rows
        n: Number of rows (2^k)
        regions: Placed regions in layout order
    """

    def __init__(self, cs: ConstraintSystemDescription, k: int):
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")
        self.cs = cs
        self.k = k
        self.n = 1 << k
        self.regions: List[RegionInfo] = []

        field = cs.field
        assignable = cs.witness_columns + cs.fixed_columns
        self._values: Dict[Column, galois.FieldArray] = {c: field.Zeros(self.n) for c in assignable}
        self._assigned: Dict[Column, np.ndarray] = {c: np.zeros(self.n, dtype=bool) for c in assignable}
        # Only columns that received a fraction get a denominator array
        self._denominators: Dict[Column, galois.FieldArray] = {}
        self._evaluated: Optional[Dict[Column, galois.FieldArray]] = None

    # --- Writing ---

    def assign(self, column: Column, row: int, value: Value) -> Cell:
        """Store value at (column, row) and return the cell.

        An unknown value marks the cell assigned and leaves it zero.

        Raises:
            TypeError: If value belongs to a different field
            RegionOverflow: If row is outside the grid
            CellAlreadyAssigned: If the cell already holds a value
        """
        if column.kind is ColumnKind.PUBLIC:
            raise ValueError(f"Public column {column} cannot be assigned; values come from public inputs")
        if column not in self._assigned:
            raise ValueError(f"Column {column} is not part of this constraint system")
        if not 0 <= row < self.n:
            raise RegionOverflow(row + 1, self.n, what=f"cell {column}@{row}")
        if self._assigned[column][row]:
            raise CellAlreadyAssigned(column, row)

        if value.is_known():
            self._store(column, row, value.unwrap())
        self._assigned[column][row] = True
        self._evaluated = None
        return Cell(column, row)

    def _store(self, column: Column, row: int, inner) -> None:
        field = self.cs.field
        if isinstance(inner, Assigned):
            numerator = to_field(field, inner.numerator)
            denominator = None if inner.denominator is None else to_field(field, inner.denominator)
            self._values[column][row] = numerator
            if denominator is not None:
                if column not in self._denominators:
                    self._denominators[column] = field.Ones(self.n)
                self._denominators[column][row] = denominator
        else:
            self._values[column][row] = to_field(field, inner)

    def add_region(self, name: str, start: int, rows: int) -> RegionInfo:
        info = RegionInfo(name, start, rows)
        self.regions.append(info)
        return info

    # --- Reading ---

    def is_assigned(self, cell: Cell) -> bool:
        return bool(self._assigned[cell.column][cell.row])

    def columns(self) -> Dict[Column, galois.FieldArray]:
        """Evaluated witness and fixed columns (fractions inverted)."""
        if self._evaluated is None:
            evaluated = dict(self._values)
            for column, denominators in self._denominators.items():
                evaluated[column] = batch_evaluate(self._values[column], denominators)
            self._evaluated = evaluated
        return self._evaluated

    def value(self, cell: Cell) -> galois.FieldArray:
        return self.columns()[cell.column][cell.row]

    def region_at(self, row: int) -> Optional[RegionInfo]:
        for region in self.regions:
            if region.contains(row):
                return region
        return None

    @property
    def used_rows(self) -> int:
        return max((r.start + r.rows for r in self.regions), default=0)
