"""Error types raised while configuring or synthesizing a circuit.

Configuration errors (EqualityNotEnabled) are programmer errors and are fatal to
the configure call. Synthesis errors (CellAlreadyAssigned, RegionOverflow) abort
the synthesis pass. Check-time problems are not exceptions; the mock prover
collects them as VerifyFailure values (see protocol.failures).
"""


class CircuitError(ValueError):
    """Base class for all circuit construction errors."""


class EqualityNotEnabled(CircuitError):
    """Copy or public-input binding on a column without equality enabled."""

    def __init__(self, column):
        self.column = column
        super().__init__(f"Equality is not enabled on column {column}")


class CellAlreadyAssigned(CircuitError):
    """The same (column, row) cell was assigned twice."""

    def __init__(self, column, row: int):
        self.column = column
        self.row = row
        super().__init__(f"Cell {column}@{row} is already assigned")


class RegionOverflow(CircuitError):
    """The circuit needs more rows than the 2^k grid provides."""

    def __init__(self, needed: int, available: int, what: str = "regions"):
        self.needed = needed
        self.available = available
        super().__init__(
            f"Not enough rows available: {what} need {needed}, grid has {available}"
        )


class ConstraintsNotSatisfied(CircuitError):
    """Raised by MockProver.assert_satisfied; carries every failure found."""

    def __init__(self, failures):
        self.failures = list(failures)
        super().__init__(f"{len(self.failures)} constraint failure(s)")
