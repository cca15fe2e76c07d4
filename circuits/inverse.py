"""Inverse circuit: x * w = 1 for public x.

    row  region  l   r     o
    0    mul     x   1/x   1

The inverse w is assigned as the fraction 1/x, so the grid holds it
unevaluated until all denominators are inverted together. l is exposed as
public row 0 and o as public row 1.
"""

from typing import Optional

from chips.standard_plonk import StandardPlonkChip, StandardPlonkConfig
from constraints.system import ConstraintSystem
from primitives.assigned import Assigned
from primitives.field import FF, FieldType, to_field
from primitives.value import Value
from protocol.circuit import Circuit
from protocol.layouter import Layouter


class InverseCircuit(Circuit):
    """Knowledge of the inverse of a public x. Public inputs: [x, 1]."""

    def __init__(self, x: Optional[Value] = None, field: FieldType = FF):
        self.field = field
        self.x = x if x is not None else Value.unknown()

    @classmethod
    def from_int(cls, x: int, field: FieldType = FF) -> 'InverseCircuit':
        return cls(Value.known(to_field(field, x)), field=field)

    @classmethod
    def configure(cls, cs: ConstraintSystem) -> StandardPlonkConfig:
        return StandardPlonkConfig.configure(cs)

    def without_witnesses(self) -> 'InverseCircuit':
        return type(self)(field=self.field)

    def synthesize(self, config: StandardPlonkConfig, layouter: Layouter) -> None:
        chip = StandardPlonkChip(config)
        field = self.field

        def mul_values():
            return self.x.map(lambda v: (
                Assigned(v), Assigned.fraction(field, 1, v), Assigned.of(field, 1)
            ))

        x_cell, _, product = chip.raw_multiply(layouter, mul_values)
        chip.expose_public(layouter, x_cell, 0)
        chip.expose_public(layouter, product, 1)
