"""Circuit interface.

A circuit is configured once per constraint system (columns and gates) and
synthesized once per witness (region assignments through a Layouter).
"""

from abc import ABC, abstractmethod
from typing import Any

from constraints.system import ConstraintSystem
from primitives.field import FF, FieldType
from protocol.layouter import Layouter


class Circuit(ABC):
    """Base class for circuits.

    Attributes:
        field: galois prime field the circuit is defined over
    """

    field: FieldType = FF

    @classmethod
    @abstractmethod
    def configure(cls, cs: ConstraintSystem) -> Any:
        """Declare columns and gates on cs and return the config handles."""
        pass

    @abstractmethod
    def synthesize(self, config: Any, layouter: Layouter) -> None:
        """Assign this circuit's witness through layouter."""
        pass

    @abstractmethod
    def without_witnesses(self) -> 'Circuit':
        """Same circuit with every witness value unknown."""
        pass
