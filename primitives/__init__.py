"""Primitives - field arithmetic and witness value wrappers."""

from primitives.assigned import Assigned, batch_evaluate
from primitives.field import (
    BN254_SCALAR_PRIME,
    FF,
    GL,
    GOLDILOCKS_PRIME,
    batch_inverse,
    nonzero_rows,
    to_field,
)
from primitives.errors import (
    CellAlreadyAssigned,
    CircuitError,
    ConstraintsNotSatisfied,
    EqualityNotEnabled,
    RegionOverflow,
)
from primitives.value import Value

__all__ = [
    # Errors
    "CircuitError",
    "EqualityNotEnabled",
    "CellAlreadyAssigned",
    "RegionOverflow",
    "ConstraintsNotSatisfied",
    # Field
    "FF",
    "GL",
    "BN254_SCALAR_PRIME",
    "GOLDILOCKS_PRIME",
    "to_field",
    "nonzero_rows",
    "batch_inverse",
    # Witness values
    "Value",
    "Assigned",
    "batch_evaluate",
]
