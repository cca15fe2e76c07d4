"""Evaluation contexts for gate expressions.

EvaluationContext provides a uniform interface for expression evaluation that
works over whole columns (returns arrays) or a single row (returns scalars). The
same gate expression is used in both contexts thanks to galois broadcasting.

Example:
    poly = sm * l * r - so * o

    # Every row at once: array of residuals, one per row
    residuals = poly.evaluate(GridContext(field, columns, n))

    # One row: scalar residual, used to report the failing cell values
    residual = poly.evaluate(RowContext(field, columns, n, row=3))
"""

from abc import ABC, abstractmethod
from typing import Dict

import galois
import numpy as np

from constraints.columns import Column, Rotation
from primitives.field import FieldType, to_field


class EvaluationContext(ABC):
    """Column lookups and constants for Expression.evaluate."""

    def __init__(self, field: FieldType, columns: Dict[Column, galois.FieldArray], n: int):
        self.field = field
        self._columns = columns
        self._n = n

    def constant(self, value: int) -> galois.FieldArray:
        return to_field(self.field, value)

    def column(self, column: Column) -> galois.FieldArray:
        """Full column of values; missing columns read as all zero."""
        values = self._columns.get(column)
        if values is None:
            return self.field.Zeros(self._n)
        return values

    @abstractmethod
    def query(self, column: Column, rotation: Rotation):
        """Value(s) of column at the current row shifted by rotation."""


class GridContext(EvaluationContext):
    """Evaluates at every row simultaneously; rotations wrap around the grid."""

    def query(self, column: Column, rotation: Rotation) -> galois.FieldArray:
        values = self.column(column)
        if rotation.offset == 0:
            return values
        # Row i reads row i + offset, so shift left by offset (circular)
        return np.roll(values, -rotation.offset)


class RowContext(EvaluationContext):
    """Evaluates at a single row."""

    def __init__(self, field: FieldType, columns: Dict[Column, galois.FieldArray], n: int, row: int):
        super().__init__(field, columns, n)
        self.row = row

    def resolve(self, rotation: Rotation) -> int:
        return (self.row + rotation.offset) % self._n

    def query(self, column: Column, rotation: Rotation) -> galois.FieldArray:
        return self.column(column)[self.resolve(rotation)]
