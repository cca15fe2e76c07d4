"""Field fractions with deferred inversion.

Witness values that involve division (a / b) are stored as `Assigned` until
the whole grid is known, then every denominator is inverted in one batch.
A fraction with zero denominator evaluates to zero.
"""

from dataclasses import dataclass
from typing import Optional

import galois
import numpy as np

from primitives.field import FieldLike, FieldType, batch_inverse, to_field


@dataclass(frozen=True)
class Assigned:
    """numerator / denominator, or just numerator when denominator is None."""
    numerator: galois.FieldArray
    denominator: Optional[galois.FieldArray] = None

    @classmethod
    def of(cls, field: FieldType, value: FieldLike) -> 'Assigned':
        return cls(to_field(field, value))

    @classmethod
    def fraction(cls, field: FieldType, numerator: FieldLike, denominator: FieldLike) -> 'Assigned':
        return cls(to_field(field, numerator), to_field(field, denominator))

    @property
    def field(self) -> FieldType:
        return type(self.numerator)

    def is_zero(self) -> bool:
        return bool(self.numerator == 0)

    def _parts(self):
        one = self.field(1)
        return self.numerator, (one if self.denominator is None else self.denominator)

    def _coerce(self, other) -> 'Assigned':
        if isinstance(other, Assigned):
            return other
        return Assigned.of(self.field, other)

    def __add__(self, other) -> 'Assigned':
        other = self._coerce(other)
        if self.denominator is None and other.denominator is None:
            return Assigned(self.numerator + other.numerator)
        a, b = self._parts()
        c, d = other._parts()
        return Assigned(a * d + c * b, b * d)

    __radd__ = __add__

    def __neg__(self) -> 'Assigned':
        return Assigned(-self.numerator, self.denominator)

    def __sub__(self, other) -> 'Assigned':
        return self + (-self._coerce(other))

    def __rsub__(self, other) -> 'Assigned':
        return self._coerce(other) - self

    def __mul__(self, other) -> 'Assigned':
        other = self._coerce(other)
        if self.denominator is None and other.denominator is None:
            return Assigned(self.numerator * other.numerator)
        a, b = self._parts()
        c, d = other._parts()
        return Assigned(a * c, b * d)

    __rmul__ = __mul__

    def invert(self) -> 'Assigned':
        """Swap numerator and denominator (0 inverts to 0)."""
        a, b = self._parts()
        return Assigned(b, a)

    def evaluate(self) -> galois.FieldArray:
        """Collapse to a single field element, inverting the denominator."""
        if self.denominator is None:
            return self.numerator
        if self.denominator == 0:
            return self.field(0)
        return self.numerator * self.denominator ** -1


def batch_evaluate(numerators: galois.FieldArray,
                   denominators: galois.FieldArray) -> galois.FieldArray:
    """Evaluate a column of fractions with a single field inversion.

    Rows whose denominator is zero evaluate to zero.
    """
    field_type = type(numerators)
    mask = denominators.view(np.ndarray) != 0
    result = field_type.Zeros(len(numerators))
    if not mask.any():
        return result
    inverses = batch_inverse(denominators[mask])
    result[mask] = numerators[mask] * inverses
    return result
