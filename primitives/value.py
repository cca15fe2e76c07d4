"""Possibly-unknown witness values.

A circuit is synthesized twice in spirit: once without a witness, to learn its
shape (how many rows, which cells), and once with one. Witness-dependent
values are therefore wrapped in `Value`, which is either known or unknown.
Arithmetic on `Value`s is lifted pointwise; any unknown operand makes the
result unknown. Plain ints mixed with field elements are reduced into the
field first.

Example:
    x = Value.known(FF(5))
    y = Value.unknown()
    (x * x).map(int)      # Value.known(25)
    x + y                 # Value.unknown()
"""

from typing import Any, Callable, Generic, Tuple, TypeVar

import galois

from primitives.field import to_field

T = TypeVar('T')
U = TypeVar('U')

_UNKNOWN = object()


def _align(a: Any, b: Any) -> Tuple[Any, Any]:
    """Bring a plain int operand into the field of the other operand."""
    if isinstance(a, galois.FieldArray) and isinstance(b, int):
        return a, to_field(type(a), b)
    if isinstance(b, galois.FieldArray) and isinstance(a, int):
        return to_field(type(b), a), b
    return a, b


class Value(Generic[T]):
    """Either Known(value) or Unknown."""

    __slots__ = ('_inner',)

    def __init__(self, inner: Any = _UNKNOWN):
        self._inner = inner

    @classmethod
    def known(cls, value: T) -> 'Value[T]':
        return cls(value)

    @classmethod
    def unknown(cls) -> 'Value[T]':
        return cls()

    def is_known(self) -> bool:
        return self._inner is not _UNKNOWN

    def map(self, f: Callable[[T], U]) -> 'Value[U]':
        if not self.is_known():
            return Value.unknown()
        return Value.known(f(self._inner))

    def and_then(self, f: Callable[[T], 'Value[U]']) -> 'Value[U]':
        if not self.is_known():
            return Value.unknown()
        return f(self._inner)

    def zip(self, other: 'Value[U]') -> 'Value[Tuple[T, U]]':
        if not (self.is_known() and other.is_known()):
            return Value.unknown()
        return Value.known((self._inner, other._inner))

    def assert_if_known(self, predicate: Callable[[T], bool]) -> None:
        """Assert predicate on the inner value; no-op when unknown."""
        if self.is_known():
            assert predicate(self._inner)

    def unwrap(self) -> T:
        """Return the inner value.

        Raises:
            ValueError: If the value is unknown
        """
        if not self.is_known():
            raise ValueError("Value is unknown")
        return self._inner

    # --- Lifted arithmetic ---

    def _lift(self, other: Any, op: Callable[[Any, Any], Any]) -> 'Value':
        if isinstance(other, Value):
            return self.zip(other).map(lambda pair: op(*_align(pair[0], pair[1])))
        return self.map(lambda v: op(*_align(v, other)))

    def _rlift(self, other: Any, op: Callable[[Any, Any], Any]) -> 'Value':
        return self.map(lambda v: op(*_align(other, v)))

    def __add__(self, other):
        return self._lift(other, lambda a, b: a + b)

    def __radd__(self, other):
        return self._rlift(other, lambda a, b: a + b)

    def __sub__(self, other):
        return self._lift(other, lambda a, b: a - b)

    def __rsub__(self, other):
        return self._rlift(other, lambda a, b: a - b)

    def __mul__(self, other):
        return self._lift(other, lambda a, b: a * b)

    def __rmul__(self, other):
        return self._rlift(other, lambda a, b: a * b)

    def __neg__(self):
        return self.map(lambda v: -v)

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        if self.is_known() != other.is_known():
            return False
        if not self.is_known():
            return True
        return bool(self._inner == other._inner)

    __hash__ = None

    def __repr__(self) -> str:
        if not self.is_known():
            return "Value.unknown()"
        return f"Value.known({self._inner!r})"
