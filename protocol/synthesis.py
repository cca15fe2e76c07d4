"""Witness synthesis.

Drives a circuit through configuration and one synthesis pass, producing the
assigned grid, the copy-constraint classes and the public-input bindings.
Each call starts from a fresh grid and permutation; only the frozen
constraint system is shared between passes.
"""

from dataclasses import dataclass
from typing import Any, List, Tuple

from constraints.system import ConstraintSystem, ConstraintSystemDescription
from protocol.assignment import Assignment
from protocol.circuit import Circuit
from protocol.layouter import PublicBinding, ShapeLayouter, SimpleLayouter
from protocol.permutation import Permutation


@dataclass
class Synthesis:
    """Result of one synthesis pass.

    Attributes:
        cs: Frozen constraint system
        config: Whatever the circuit's configure returned
        assignment: Assigned witness and fixed columns
        permutation: Copy-constraint equivalence classes
        bindings: Public-input bindings in the order they were made
    """
    cs: ConstraintSystemDescription
    config: Any
    assignment: Assignment
    permutation: Permutation
    bindings: List[PublicBinding]

    @property
    def k(self) -> int:
        return self.assignment.k

    @property
    def n(self) -> int:
        return self.assignment.n


def configure(circuit: Circuit) -> Tuple[ConstraintSystemDescription, Any]:
    """Run the circuit's configure on a fresh ConstraintSystem and freeze it."""
    cs = ConstraintSystem(circuit.field)
    config = type(circuit).configure(cs)
    return cs.finalize(), config


def synthesize(circuit: Circuit, k: int) -> Synthesis:
    """Configure circuit and assign its witness into a 2^k-row grid.

    Raises:
        RegionOverflow: If the circuit's regions need more than 2^k rows
        CellAlreadyAssigned: If a cell is assigned twice
        EqualityNotEnabled: If a copy or binding uses a column without equality
    """
    cs, config = configure(circuit)
    assignment = Assignment(cs, k)
    permutation = Permutation(cs, assignment.n)
    layouter = SimpleLayouter(assignment, permutation)
    circuit.synthesize(config, layouter)
    return Synthesis(cs, config, assignment, permutation, layouter.bindings)


def required_rows(circuit: Circuit) -> int:
    """Number of rows the circuit's regions occupy, found without a witness."""
    _, config = configure(circuit)
    layouter = ShapeLayouter()
    circuit.without_witnesses().synthesize(config, layouter)
    return layouter.rows


def minimum_k(circuit: Circuit) -> int:
    """Smallest k whose 2^k-row grid fits the circuit."""
    rows = required_rows(circuit)
    k = 0
    while (1 << k) < rows:
        k += 1
    return k
