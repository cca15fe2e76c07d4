"""Column, rotation and cell handles.

A circuit is a grid: columns of three kinds, 2^k rows each.

    WITNESS  per-row values supplied by the prover for one instance
    FIXED    per-row values fixed at circuit design time (selectors, constants)
    PUBLIC   per-row values supplied externally (instance / public inputs)

Columns are identified by (kind, index), where index counts columns of the same
kind in declaration order. Rotations address neighbouring rows relative to the
row a gate is evaluated on.
"""

from dataclasses import dataclass
from enum import Enum


class ColumnKind(Enum):
    """Column type, ordered witness < fixed < public for sorting."""
    WITNESS = 0
    FIXED = 1
    PUBLIC = 2


@dataclass(frozen=True)
class Column:
    """Handle to a column of the grid."""
    kind: ColumnKind
    index: int

    def __lt__(self, other: 'Column') -> bool:
        return (self.kind.value, self.index) < (other.kind.value, other.index)

    def __str__(self) -> str:
        return f"{self.kind.name.lower()}[{self.index}]"


@dataclass(frozen=True)
class Rotation:
    """Signed row offset, resolved against the current row at check time."""
    offset: int = 0

    @classmethod
    def cur(cls) -> 'Rotation':
        return cls(0)

    @classmethod
    def next(cls) -> 'Rotation':
        return cls(1)

    @classmethod
    def prev(cls) -> 'Rotation':
        return cls(-1)


@dataclass(frozen=True)
class Cell:
    """Absolute (column, row) location; only returned by region assignment."""
    column: Column
    row: int

    def __lt__(self, other: 'Cell') -> bool:
        return (self.column, self.row) < (other.column, other.row)

    def __str__(self) -> str:
        return f"{self.column}@{self.row}"
