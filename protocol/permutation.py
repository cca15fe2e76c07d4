"""Copy constraints as a union-find over equality-enabled cells.

Every equality-enabled column contributes n cells, numbered densely as
position * n + row where position is the column's index in the sorted
equality column list. Parent and rank live in numpy arrays; union is by rank
with path halving on find.
"""

from typing import Dict, List, Set

import numpy as np

from constraints.columns import Cell, Column
from constraints.system import ConstraintSystemDescription
from primitives.errors import EqualityNotEnabled, RegionOverflow


class Permutation:
    """Equivalence classes of cells bound by copy constraints."""

    def __init__(self, cs: ConstraintSystemDescription, n: int):
        self.n = n
        self._columns = cs.equality_columns
        self._position: Dict[Column, int] = {c: i for i, c in enumerate(self._columns)}
        size = len(self._columns) * n
        self._parent = np.arange(size, dtype=np.int64)
        self._rank = np.zeros(size, dtype=np.int8)
        self._touched: Set[int] = set()

    def _index(self, cell: Cell) -> int:
        position = self._position.get(cell.column)
        if position is None:
            raise EqualityNotEnabled(cell.column)
        if not 0 <= cell.row < self.n:
            raise RegionOverflow(cell.row + 1, self.n, what=f"cell {cell}")
        return position * self.n + cell.row

    def _cell(self, index: int) -> Cell:
        position, row = divmod(index, self.n)
        return Cell(self._columns[position], row)

    def _find(self, i: int) -> int:
        parent = self._parent
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = int(parent[i])
        return i

    def copy(self, a: Cell, b: Cell) -> None:
        """Merge the classes of a and b. Binding an already-bound pair is a no-op.

        Raises:
            EqualityNotEnabled: If either cell's column is not equality-enabled
        """
        ia, ib = self._index(a), self._index(b)
        self._touched.update((ia, ib))
        ra, rb = self._find(ia), self._find(ib)
        if ra == rb:
            return
        if self._rank[ra] < self._rank[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        if self._rank[ra] == self._rank[rb]:
            self._rank[ra] += 1

    def same_class(self, a: Cell, b: Cell) -> bool:
        return self._find(self._index(a)) == self._find(self._index(b))

    def classes(self) -> List[List[Cell]]:
        """Non-trivial equivalence classes, each sorted, ordered by first cell."""
        groups: Dict[int, List[Cell]] = {}
        for index in self._touched:
            groups.setdefault(self._find(index), []).append(self._cell(index))
        classes = [sorted(group) for group in groups.values() if len(group) > 1]
        return sorted(classes, key=lambda group: group[0])
