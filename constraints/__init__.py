"""Constraint description: columns, gate expressions and the system builder.

A circuit's configuration is expressed entirely with these types. Gates are
polynomial Expressions over column Queries; ConstraintSystem collects columns,
equality flags and gates, then freezes into a ConstraintSystemDescription.
Expressions are evaluated through an EvaluationContext, either for every row
at once (GridContext) or for one row (RowContext).
"""

from .columns import Cell, Column, ColumnKind, Rotation
from .context import EvaluationContext, GridContext, RowContext
from .expression import (
    Constant,
    Expression,
    Negated,
    Product,
    Query,
    Sum,
    as_expression,
)
from .system import (
    ConstraintSystem,
    ConstraintSystemDescription,
    Gate,
    VirtualCells,
)

__all__ = [
    "Cell",
    "Column",
    "ColumnKind",
    "Rotation",
    "Expression",
    "Constant",
    "Query",
    "Negated",
    "Sum",
    "Product",
    "as_expression",
    "EvaluationContext",
    "GridContext",
    "RowContext",
    "ConstraintSystem",
    "ConstraintSystemDescription",
    "Gate",
    "VirtualCells",
]
