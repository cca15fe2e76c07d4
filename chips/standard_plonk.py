"""Standard PLONK chip.

Three witness columns l, r, o and one parameterised gate

    l*sl + r*sr + (l*r)*sm - o*so + sc = 0

realise both addition and multiplication rows by selector choice:

    addition        sl = sr = so = 1, sm = sc = 0   =>  l + r - o = 0
    multiplication  sm = so = 1, sl = sr = sc = 0   =>  l * r - o = 0

A second gate, sp * (l - PI) = 0, ties l to the public column on rows where
the sp selector is set. Selectors left unassigned read as zero, so a row
without any selector satisfies both gates trivially.
"""

import functools
from dataclasses import dataclass

from constraints.columns import Cell, Column
from constraints.system import ConstraintSystem
from primitives.value import Value
from protocol.layouter import Layouter, as_value
from .base import Composer, Triple, TripleFn


@dataclass(frozen=True)
class StandardPlonkConfig:
    """Column handles of the standard PLONK chip."""
    l: Column
    r: Column
    o: Column

    sl: Column
    sr: Column
    so: Column
    sm: Column
    sc: Column
    sp: Column

    pi: Column

    @classmethod
    def configure(cls, cs: ConstraintSystem) -> 'StandardPlonkConfig':
        """Declare the chip's columns and gates on cs."""
        l = cs.new_witness_column()
        r = cs.new_witness_column()
        o = cs.new_witness_column()

        cs.enable_equality(l)
        cs.enable_equality(r)
        cs.enable_equality(o)

        sm = cs.new_fixed_column()
        sl = cs.new_fixed_column()
        sr = cs.new_fixed_column()
        so = cs.new_fixed_column()
        sc = cs.new_fixed_column()
        sp = cs.new_fixed_column()

        pi = cs.new_public_column()
        cs.enable_equality(pi)

        def mini_plonk(meta):
            lv = meta.query_witness(l)
            rv = meta.query_witness(r)
            ov = meta.query_witness(o)
            return (lv * meta.query_fixed(sl)
                    + rv * meta.query_fixed(sr)
                    + lv * rv * meta.query_fixed(sm)
                    - ov * meta.query_fixed(so)
                    + meta.query_fixed(sc))

        def public_input(meta):
            return meta.query_fixed(sp) * (meta.query_witness(l) - meta.query_public(pi))

        cs.create_gate("mini plonk", mini_plonk)
        cs.create_gate("public input", public_input)

        return cls(l=l, r=r, o=o, sl=sl, sr=sr, so=so, sm=sm, sc=sc, sp=sp, pi=pi)


class StandardPlonkChip(Composer):
    """Composer over a StandardPlonkConfig."""

    def __init__(self, config: StandardPlonkConfig):
        self.config = config

    def _gate_row(self, layouter: Layouter, name: str, value_fn: TripleFn,
                  selectors) -> Triple:
        config = self.config

        def assign(region) -> Triple:
            # Evaluated at most once per pass, and never by the measuring pass
            values = functools.cache(lambda: as_value(value_fn()))
            lhs = region.assign_advice(config.l, 0, lambda: values().map(lambda v: v[0]))
            rhs = region.assign_advice(config.r, 0, lambda: values().map(lambda v: v[1]))
            out = region.assign_advice(config.o, 0, lambda: values().map(lambda v: v[2]))
            for selector in selectors:
                region.assign_fixed(selector, 0, lambda: Value.known(1))
            return lhs, rhs, out

        return layouter.assign_region(name, assign)

    def raw_multiply(self, layouter: Layouter, value_fn: TripleFn) -> Triple:
        return self._gate_row(layouter, "mul", value_fn, (self.config.sm, self.config.so))

    def raw_add(self, layouter: Layouter, value_fn: TripleFn) -> Triple:
        config = self.config
        return self._gate_row(layouter, "add", value_fn, (config.sl, config.sr, config.so))

    def copy(self, layouter: Layouter, a: Cell, b: Cell) -> None:
        layouter.assign_region("copy", lambda region: region.constrain_equal(a, b))

    def expose_public(self, layouter: Layouter, cell: Cell, row: int) -> None:
        layouter.constrain_instance(cell, self.config.pi, row)
