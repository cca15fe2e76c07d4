"""Polynomial expressions over column queries.

Gates are built from these nodes with ordinary Python operators:

    sl * l + sr * r + sm * l * r - so * o + sc

Leaves are constants and column queries (a column at a rotation); internal
nodes are negation, sum and product. Subtraction is a sum with a negated right
operand. Expressions are evaluated by substitution through an
EvaluationContext, so there is no bound on degree.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Set, Tuple

import galois

from constraints.columns import Column, Rotation


class Expression(ABC):
    """Node of a gate polynomial."""

    @abstractmethod
    def evaluate(self, ctx):
        """Substitute column values from ctx (arrays or scalars)."""

    @abstractmethod
    def degree(self) -> int:
        """Total degree in the queried cells."""

    @abstractmethod
    def queries(self) -> Set[Tuple[Column, Rotation]]:
        """All (column, rotation) pairs this expression reads."""

    def __add__(self, other) -> 'Expression':
        return Sum(self, as_expression(other))

    def __radd__(self, other) -> 'Expression':
        return Sum(as_expression(other), self)

    def __sub__(self, other) -> 'Expression':
        return Sum(self, Negated(as_expression(other)))

    def __rsub__(self, other) -> 'Expression':
        return Sum(as_expression(other), Negated(self))

    def __mul__(self, other) -> 'Expression':
        return Product(self, as_expression(other))

    def __rmul__(self, other) -> 'Expression':
        return Product(as_expression(other), self)

    def __neg__(self) -> 'Expression':
        return Negated(self)


def as_expression(value) -> Expression:
    """Lift ints and field scalars to Constant; pass expressions through."""
    if isinstance(value, Expression):
        return value
    if isinstance(value, (int, galois.FieldArray)):
        return Constant(int(value))
    raise TypeError(f"Cannot use {type(value).__name__} in a gate expression")


@dataclass(frozen=True)
class Constant(Expression):
    value: int

    def evaluate(self, ctx):
        return ctx.constant(self.value)

    def degree(self) -> int:
        return 0

    def queries(self):
        return set()

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Query(Expression):
    column: Column
    rotation: Rotation = Rotation()

    def evaluate(self, ctx):
        return ctx.query(self.column, self.rotation)

    def degree(self) -> int:
        return 1

    def queries(self):
        return {(self.column, self.rotation)}

    def __str__(self) -> str:
        if self.rotation.offset == 0:
            return str(self.column)
        return f"{self.column}{self.rotation.offset:+d}"


@dataclass(frozen=True)
class Negated(Expression):
    inner: Expression

    def evaluate(self, ctx):
        return -self.inner.evaluate(ctx)

    def degree(self) -> int:
        return self.inner.degree()

    def queries(self):
        return self.inner.queries()

    def __str__(self) -> str:
        return f"-{self.inner}"


@dataclass(frozen=True)
class Sum(Expression):
    left: Expression
    right: Expression

    def evaluate(self, ctx):
        return self.left.evaluate(ctx) + self.right.evaluate(ctx)

    def degree(self) -> int:
        return max(self.left.degree(), self.right.degree())

    def queries(self):
        return self.left.queries() | self.right.queries()

    def __str__(self) -> str:
        if isinstance(self.right, Negated):
            return f"{self.left} - {self.right.inner}"
        return f"{self.left} + {self.right}"


@dataclass(frozen=True)
class Product(Expression):
    left: Expression
    right: Expression

    def evaluate(self, ctx):
        return self.left.evaluate(ctx) * self.right.evaluate(ctx)

    def degree(self) -> int:
        return self.left.degree() + self.right.degree()

    def queries(self):
        return self.left.queries() | self.right.queries()

    def __str__(self) -> str:
        def wrap(e):
            return f"({e})" if isinstance(e, Sum) else str(e)
        return f"{wrap(self.left)} * {wrap(self.right)}"
