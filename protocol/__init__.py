"""Protocol - layout, witness synthesis and satisfiability checking."""

from protocol.assignment import Assignment, RegionInfo
from protocol.circuit import Circuit
from protocol.failures import (
    CopyMismatch,
    MissingPublicInput,
    PublicInputMismatch,
    UnsatisfiedGate,
    VerifyFailure,
)
from protocol.layouter import (
    Layouter,
    PublicBinding,
    Region,
    RegionShape,
    ShapeLayouter,
    SimpleLayouter,
)
from protocol.mock_prover import MockProver, check
from protocol.permutation import Permutation
from protocol.synthesis import (
    Synthesis,
    configure,
    minimum_k,
    required_rows,
    synthesize,
)

__all__ = [
    # Grid and copy constraints
    "Assignment",
    "RegionInfo",
    "Permutation",
    # Layout
    "Layouter",
    "SimpleLayouter",
    "ShapeLayouter",
    "Region",
    "RegionShape",
    "PublicBinding",
    # Circuits and synthesis
    "Circuit",
    "Synthesis",
    "configure",
    "synthesize",
    "required_rows",
    "minimum_k",
    # Checking
    "MockProver",
    "check",
    "VerifyFailure",
    "UnsatisfiedGate",
    "CopyMismatch",
    "PublicInputMismatch",
    "MissingPublicInput",
]
