"""Base class for composers."""

from abc import ABC, abstractmethod
from typing import Callable, Tuple

from constraints.columns import Cell
from primitives.value import Value
from protocol.layouter import Layouter

Triple = Tuple[Cell, Cell, Cell]
TripleFn = Callable[[], Value]


class Composer(ABC):
    """Circuit-author operations of a PLONK-style chip.

    Each raw operation assigns one gate row in its own region from a single
    evaluation of value_fn, which returns Value((l, r, o)) or a bare (l, r, o)
    triple. The chip only sets selectors; whether (l, r, o) actually satisfies
    the relation is left to the gate.
    """

    @abstractmethod
    def raw_multiply(self, layouter: Layouter, value_fn: TripleFn) -> Triple:
        """Row constrained by o = l * r. Returns the (l, r, o) cells."""
        pass

    @abstractmethod
    def raw_add(self, layouter: Layouter, value_fn: TripleFn) -> Triple:
        """Row constrained by o = l + r. Returns the (l, r, o) cells."""
        pass

    @abstractmethod
    def copy(self, layouter: Layouter, a: Cell, b: Cell) -> None:
        """Bind two previously returned cells into one equivalence class."""
        pass

    @abstractmethod
    def expose_public(self, layouter: Layouter, cell: Cell, row: int) -> None:
        """Bind cell to row `row` of the public column."""
        pass
