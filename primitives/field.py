"""Prime fields GF(p) for circuit arithmetic.

Uses galois library for all field arithmetic. FF is the default circuit field
(BN254 scalar field), GL is the Goldilocks field. Any galois prime field class
can be handed to the constraint system; nothing below the builder assumes a
particular modulus.
"""

from typing import Type, Union

import galois
import numpy as np

# --- Field Construction ---

BN254_SCALAR_PRIME = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001
GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

# 5 generates the multiplicative group of the BN254 scalar field. Passing it
# explicitly keeps galois from factoring p - 1 on import.
FF = galois.GF(BN254_SCALAR_PRIME, primitive_element=5, verify=False)
"""Default circuit field - BN254 scalar field (Fr)."""

GL = galois.GF(GOLDILOCKS_PRIME)
"""Goldilocks prime field."""

FieldType = Type[galois.FieldArray]
FieldLike = Union[int, galois.FieldArray]


def to_field(field: FieldType, value: FieldLike) -> galois.FieldArray:
    """Convert an int (possibly negative or >= p) or field scalar into `field`.

    Raises:
        TypeError: If value is an element of a different field
    """
    if isinstance(value, galois.FieldArray):
        if type(value) is not field:
            raise TypeError(f"Value from {type(value).name} used with {field.name}")
        return value
    return field(int(value) % field.order)


def nonzero_rows(values: galois.FieldArray) -> np.ndarray:
    """Indices of the entries of a field column that are not zero."""
    return np.flatnonzero(values.view(np.ndarray) != 0)


# --- Batch Inversion ---

def batch_inverse(values: galois.FieldArray) -> galois.FieldArray:
    """Invert every entry of a field column with a single field inversion.

    Prefix products a[0] * ... * a[i] are inverted once at the end and
    unwound from the back, one multiplication pair per entry.

    Raises:
        ZeroDivisionError: If any entry is zero
    """
    field = type(values)
    count = len(values)
    if count <= 1:
        return values ** -1 if count else values

    prefix = field.Zeros(count)
    running = field(1)
    for i, v in enumerate(values):
        running = running * v
        prefix[i] = running

    inverses = field.Zeros(count)
    acc = prefix[-1] ** -1
    for i in range(count - 1, 0, -1):
        inverses[i] = acc * prefix[i - 1]
        acc = acc * values[i]
    inverses[0] = acc
    return inverses
