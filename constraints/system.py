"""Constraint system builder.

Configuration phase of a circuit: declare columns, enable equality on the
columns that take part in copy constraints, and create gates. `finalize()`
freezes everything into a ConstraintSystemDescription, which layout and the
checker read but never modify.

Example:
    cs = ConstraintSystem()
    a = cs.new_witness_column()
    b = cs.new_witness_column()
    s = cs.new_fixed_column()
    cs.enable_equality(a)

    cs.create_gate("double", lambda meta: meta.query(s) * (meta.query(a) * 2 - meta.query(b)))
    description = cs.finalize()
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Tuple, Union

from constraints.columns import Column, ColumnKind, Rotation
from constraints.expression import Expression, Query
from primitives.errors import EqualityNotEnabled
from primitives.field import FF, FieldType


@dataclass(frozen=True)
class Gate:
    """Named set of polynomials, each of which must vanish on every row."""
    name: str
    polys: Tuple[Expression, ...]

    def degree(self) -> int:
        return max(poly.degree() for poly in self.polys)


class VirtualCells:
    """Query interface handed to create_gate closures."""

    def __init__(self, cs: 'ConstraintSystem'):
        self._cs = cs

    def query(self, column: Column, rotation: Rotation = Rotation.cur()) -> Expression:
        self._cs._check_declared(column)
        return Query(column, rotation)

    def _query_kind(self, column: Column, rotation: Rotation, kind: ColumnKind) -> Expression:
        if column.kind is not kind:
            raise ValueError(f"Column {column} queried as {kind.name.lower()}")
        return self.query(column, rotation)

    def query_witness(self, column: Column, rotation: Rotation = Rotation.cur()) -> Expression:
        return self._query_kind(column, rotation, ColumnKind.WITNESS)

    def query_fixed(self, column: Column, rotation: Rotation = Rotation.cur()) -> Expression:
        return self._query_kind(column, rotation, ColumnKind.FIXED)

    def query_public(self, column: Column, rotation: Rotation = Rotation.cur()) -> Expression:
        return self._query_kind(column, rotation, ColumnKind.PUBLIC)


@dataclass(frozen=True)
class ConstraintSystemDescription:
    """Immutable result of configuration.

    Attributes:
        field: galois prime field all values live in
        witness_columns: Witness columns in declaration order
        fixed_columns: Fixed columns in declaration order
        public_columns: Public (instance) columns in declaration order
        equality_columns: Columns allowed in copy constraints, sorted
        gates: Gates in declaration order
    """
    field: FieldType
    witness_columns: Tuple[Column, ...]
    fixed_columns: Tuple[Column, ...]
    public_columns: Tuple[Column, ...]
    equality_columns: Tuple[Column, ...]
    gates: Tuple[Gate, ...]

    @property
    def columns(self) -> Tuple[Column, ...]:
        return self.witness_columns + self.fixed_columns + self.public_columns

    @property
    def degree(self) -> int:
        """Maximum gate degree (informational, no bound is enforced)."""
        return max((gate.degree() for gate in self.gates), default=0)

    def is_equality_enabled(self, column: Column) -> bool:
        return column in self.equality_columns


GateBody = Union[Expression, Iterable[Expression]]


class ConstraintSystem:
    """Accumulates column declarations, equality flags and gates."""

    def __init__(self, field: FieldType = FF):
        self.field = field
        self._counts = {kind: 0 for kind in ColumnKind}
        self._equality: List[Column] = []
        self._gates: List[Gate] = []
        self._finalized = False

    # --- Columns ---

    def _new_column(self, kind: ColumnKind) -> Column:
        self._check_open()
        column = Column(kind, self._counts[kind])
        self._counts[kind] += 1
        return column

    def new_witness_column(self) -> Column:
        return self._new_column(ColumnKind.WITNESS)

    def new_fixed_column(self) -> Column:
        return self._new_column(ColumnKind.FIXED)

    def new_public_column(self) -> Column:
        return self._new_column(ColumnKind.PUBLIC)

    def enable_equality(self, column: Column) -> None:
        """Allow column's cells in copy constraints and public-input bindings.

        Raises:
            EqualityNotEnabled: If column is a fixed column
        """
        self._check_open()
        self._check_declared(column)
        if column.kind is ColumnKind.FIXED:
            raise EqualityNotEnabled(column)
        if column not in self._equality:
            self._equality.append(column)

    # --- Gates ---

    def create_gate(self, name: str, closure: Callable[[VirtualCells], GateBody]) -> Gate:
        """Add a gate whose polynomials are returned by closure.

        Args:
            name: Gate name, used in failure reports
            closure: Receives a VirtualCells and returns one expression or an
                iterable of expressions, each constrained to zero on every row

        Returns:
            The created Gate
        """
        self._check_open()
        body = closure(VirtualCells(self))
        polys = (body,) if isinstance(body, Expression) else tuple(body)
        if not polys:
            raise ValueError(f"Gate '{name}' has no polynomials")
        for poly in polys:
            if not isinstance(poly, Expression):
                raise TypeError(f"Gate '{name}' returned {type(poly).__name__}, expected Expression")
        gate = Gate(name, polys)
        self._gates.append(gate)
        return gate

    # --- Finalization ---

    def finalize(self) -> ConstraintSystemDescription:
        self._finalized = True
        return ConstraintSystemDescription(
            field=self.field,
            witness_columns=self._columns_of(ColumnKind.WITNESS),
            fixed_columns=self._columns_of(ColumnKind.FIXED),
            public_columns=self._columns_of(ColumnKind.PUBLIC),
            equality_columns=tuple(sorted(self._equality)),
            gates=tuple(self._gates),
        )

    def _columns_of(self, kind: ColumnKind) -> Tuple[Column, ...]:
        return tuple(Column(kind, i) for i in range(self._counts[kind]))

    def _check_open(self) -> None:
        if self._finalized:
            raise ValueError("ConstraintSystem is finalized; configuration is closed")

    def _check_declared(self, column: Column) -> None:
        if column.index >= self._counts[column.kind]:
            raise ValueError(f"Column {column} was not declared on this constraint system")
