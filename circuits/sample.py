"""Sample circuit: z = x^2 * y^2 + c.

Layout (one row per region, copy regions take no rows):

    row  region  l        r      o
    0    mul     x        x      x^2
    1    mul     y        y      y^2
    2    mul     x^2      y^2    x^2*y^2
    3    add     x^2*y^2  c      x^2*y^2 + c

Copies tie l = r on rows 0 and 1, each square to its use on row 2 and the
product to row 3. r on row 3 is exposed as public row 0 (c) and o on row 3 as
public row 1 (z).
"""

from typing import Optional

from chips.standard_plonk import StandardPlonkChip, StandardPlonkConfig
from constraints.system import ConstraintSystem
from primitives.field import FF, FieldLike, FieldType, to_field
from primitives.value import Value
from protocol.circuit import Circuit
from protocol.layouter import Layouter


class SampleCircuit(Circuit):
    """Knowledge of x, y such that x^2 * y^2 + c = z, with c and z public.

    Attributes:
        x: Witness x
        y: Witness y
        constant: c, fixed at circuit design time
        link_copies: Whether the squares are copy-constrained to the inputs of
            the third multiplication. Without these links the two rows are
            unrelated and a prover may put any value there.
    """

    def __init__(self, x: Optional[Value] = None, y: Optional[Value] = None,
                 constant: FieldLike = 0, field: FieldType = FF, link_copies: bool = True):
        self.field = field
        self.x = x if x is not None else Value.unknown()
        self.y = y if y is not None else Value.unknown()
        self.constant = to_field(field, constant)
        self.link_copies = link_copies

    @classmethod
    def from_ints(cls, x: int, y: int, constant: int, field: FieldType = FF,
                  link_copies: bool = True) -> 'SampleCircuit':
        return cls(Value.known(to_field(field, x)), Value.known(to_field(field, y)),
                   constant, field=field, link_copies=link_copies)

    @classmethod
    def configure(cls, cs: ConstraintSystem) -> StandardPlonkConfig:
        return StandardPlonkConfig.configure(cs)

    def without_witnesses(self) -> 'SampleCircuit':
        return type(self)(constant=self.constant, field=self.field, link_copies=self.link_copies)

    def x_squared(self) -> Value:
        """Left input of the third multiplication."""
        return self.x * self.x

    def public_inputs(self) -> Value:
        """[c, z] for the current witness."""
        c = self.constant
        return (self.x_squared() * self.y * self.y).map(lambda p: [c, p + c])

    def synthesize(self, config: StandardPlonkConfig, layouter: Layouter) -> None:
        chip = StandardPlonkChip(config)
        x, y, c = self.x, self.y, self.constant

        a0, b0, c0 = chip.raw_multiply(layouter, lambda: x.map(lambda v: (v, v, v * v)))
        chip.copy(layouter, a0, b0)

        a1, b1, c1 = chip.raw_multiply(layouter, lambda: y.map(lambda v: (v, v, v * v)))
        chip.copy(layouter, a1, b1)

        x2 = self.x_squared()
        y2 = y * y
        a2, b2, c2 = chip.raw_multiply(
            layouter, lambda: x2.zip(y2).map(lambda v: (v[0], v[1], v[0] * v[1]))
        )
        if self.link_copies:
            chip.copy(layouter, a2, c0)
            chip.copy(layouter, b2, c1)

        a3, b3, c3 = chip.raw_add(layouter, lambda: (x2 * y2).map(lambda p: (p, c, p + c)))
        chip.copy(layouter, a3, c2)

        chip.expose_public(layouter, b3, 0)
        chip.expose_public(layouter, c3, 1)
