"""Satisfiability checker (mock prover).

Checks a synthesized circuit without any cryptography:

1. Gates - every gate polynomial must be zero on every row. Each polynomial is
   evaluated over whole columns at once (rotations are circular shifts), and
   the rows with a non-zero residual are reported.
2. Copy constraints - all cells of an equivalence class hold the same value.
3. Public inputs - every bound cell equals its row of the public input vector.

All failures are collected; an empty list means the witness satisfies the
circuit. This is the reference oracle a real prover's soundness would later
enforce cryptographically.
"""

from typing import Dict, List, Sequence

import galois

from constraints.columns import Column
from constraints.context import GridContext, RowContext
from constraints.expression import Query
from constraints.system import Gate
from primitives.errors import ConstraintsNotSatisfied, RegionOverflow
from primitives.field import FieldLike, nonzero_rows, to_field
from protocol.circuit import Circuit
from protocol.failures import (
    CopyMismatch,
    MissingPublicInput,
    PublicInputMismatch,
    UnsatisfiedGate,
    VerifyFailure,
)
from protocol.synthesis import Synthesis, synthesize

Instances = Sequence[Sequence[FieldLike]]


def _public_vectors(synthesis: Synthesis, instances: Instances) -> Dict[Column, List[galois.FieldArray]]:
    """One converted public input vector per public column (missing -> empty)."""
    public_columns = synthesis.cs.public_columns
    if len(instances) > len(public_columns):
        raise ValueError(
            f"Got {len(instances)} public input vectors for {len(public_columns)} public columns"
        )
    field = synthesis.cs.field
    vectors = {}
    for i, column in enumerate(public_columns):
        values = instances[i] if i < len(instances) else []
        if len(values) > synthesis.n:
            raise RegionOverflow(len(values), synthesis.n, what=f"public inputs of {column}")
        vectors[column] = [to_field(field, v) for v in values]
    return vectors


def _grid_columns(synthesis: Synthesis, vectors: Dict[Column, List[galois.FieldArray]]) -> Dict[Column, galois.FieldArray]:
    field = synthesis.cs.field
    columns = dict(synthesis.assignment.columns())
    for column, values in vectors.items():
        padded = field.Zeros(synthesis.n)
        for row, value in enumerate(values):
            padded[row] = value
        columns[column] = padded
    return columns


def _unsatisfied(synthesis: Synthesis, columns, gate: Gate, index: int, row: int) -> UnsatisfiedGate:
    poly = gate.polys[index]
    ctx = RowContext(synthesis.cs.field, columns, synthesis.n, row)
    cell_values = tuple(sorted(
        (str(Query(column, rotation)), int(ctx.query(column, rotation)))
        for column, rotation in poly.queries()
    ))
    region = synthesis.assignment.region_at(row)
    return UnsatisfiedGate(
        gate=gate.name,
        constraint=index,
        row=row,
        region=region.name if region else None,
        offset=row - region.start if region else None,
        cell_values=cell_values,
    )


def check_gates(synthesis: Synthesis, columns) -> List[VerifyFailure]:
    field, n = synthesis.cs.field, synthesis.n
    grid = GridContext(field, columns, n)
    failures = []
    for gate in synthesis.cs.gates:
        for index, poly in enumerate(gate.polys):
            residual = poly.evaluate(grid)
            if residual.ndim == 0:
                # Constant polynomial: same residual on every row
                residual = residual + field.Zeros(n)
            for row in nonzero_rows(residual):
                failures.append(_unsatisfied(synthesis, columns, gate, index, int(row)))
    return failures


def check_copies(synthesis: Synthesis, columns) -> List[VerifyFailure]:
    failures = []
    for members in synthesis.permutation.classes():
        first = members[0]
        first_value = columns[first.column][first.row]
        for other in members[1:]:
            other_value = columns[other.column][other.row]
            if other_value != first_value:
                failures.append(CopyMismatch(first, other, int(first_value), int(other_value)))
    return failures


def check_bindings(synthesis: Synthesis, columns, vectors) -> List[VerifyFailure]:
    failures = []
    for binding in synthesis.bindings:
        vector = vectors[binding.column]
        if binding.row >= len(vector):
            failures.append(MissingPublicInput(binding.row, binding.column))
            continue
        expected = vector[binding.row]
        found = columns[binding.cell.column][binding.cell.row]
        if expected != found:
            failures.append(PublicInputMismatch(
                binding.row, binding.column, binding.cell, int(expected), int(found)
            ))
    return failures


def check(synthesis: Synthesis, instances: Instances) -> List[VerifyFailure]:
    """Check gates, copy constraints and public inputs of a synthesized circuit.

    Args:
        synthesis: Result of synthesize()
        instances: One public input vector per public column

    Returns:
        Every failure found; empty when the circuit is satisfied

    Raises:
        RegionOverflow: If a public input vector is longer than the grid
    """
    vectors = _public_vectors(synthesis, instances)
    columns = _grid_columns(synthesis, vectors)
    return (
        check_gates(synthesis, columns)
        + check_copies(synthesis, columns)
        + check_bindings(synthesis, columns, vectors)
    )


class MockProver:
    """Synthesized circuit plus public inputs, ready to be checked.

    Usage:
        prover = MockProver.run(4, circuit, [[7, 2032]])
        assert prover.verify() == []
    """

    def __init__(self, synthesis: Synthesis, instances: Instances):
        self.synthesis = synthesis
        self.instances = [list(values) for values in instances]
        # Surface oversized public inputs now rather than at verify time
        _public_vectors(synthesis, self.instances)

    @classmethod
    def run(cls, k: int, circuit: Circuit, instances: Instances) -> 'MockProver':
        return cls(synthesize(circuit, k), instances)

    def verify(self) -> List[VerifyFailure]:
        return check(self.synthesis, self.instances)

    def assert_satisfied(self) -> None:
        """Print every failure and raise if there are any.

        Raises:
            ConstraintsNotSatisfied: If verify() reports failures
        """
        failures = self.verify()
        for failure in failures:
            print(f"ERROR: {failure}")
        if failures:
            raise ConstraintsNotSatisfied(failures)
