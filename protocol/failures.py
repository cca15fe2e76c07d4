"""Check-time failures reported by the mock prover.

Failures are values, not exceptions: a single check collects every violation
it finds, in the order gates, copy constraints, public inputs.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from constraints.columns import Cell, Column


@dataclass(frozen=True)
class VerifyFailure:
    """Base class for check failures."""


@dataclass(frozen=True)
class UnsatisfiedGate(VerifyFailure):
    """Polynomial `constraint` of `gate` is non-zero at `row`.

    Attributes:
        gate: Gate name
        constraint: Index of the polynomial within the gate
        row: Absolute row
        region: Name of the region containing row, if any
        offset: Row offset within that region
        cell_values: (query, value) pairs read by the polynomial at row
    """
    gate: str
    constraint: int
    row: int
    region: Optional[str] = None
    offset: Optional[int] = None
    cell_values: Tuple[Tuple[str, int], ...] = ()

    def __str__(self) -> str:
        location = f"row {self.row}"
        if self.region is not None:
            location += f" (region '{self.region}', offset {self.offset})"
        values = ", ".join(f"{q} = {v}" for q, v in self.cell_values)
        return f"Constraint {self.constraint} of gate '{self.gate}' is not satisfied at {location}: {values}"


@dataclass(frozen=True)
class CopyMismatch(VerifyFailure):
    """Two cells of one equivalence class hold different values."""
    cell_a: Cell
    cell_b: Cell
    value_a: int
    value_b: int

    def __str__(self) -> str:
        return (f"Equality constraint not satisfied: {self.cell_a} = {self.value_a}, "
                f"{self.cell_b} = {self.value_b}")


@dataclass(frozen=True)
class PublicInputMismatch(VerifyFailure):
    """The cell bound to public row `row` disagrees with the public input."""
    row: int
    column: Column
    cell: Cell
    expected: int
    found: int

    def __str__(self) -> str:
        return (f"Public input {self.column}@{self.row} is {self.expected}, "
                f"but bound cell {self.cell} holds {self.found}")


@dataclass(frozen=True)
class MissingPublicInput(VerifyFailure):
    """A binding refers to a row beyond the supplied public input vector."""
    row: int
    column: Column

    def __str__(self) -> str:
        return f"No public input supplied for {self.column}@{self.row}"
