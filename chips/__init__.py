"""Chips - reusable gate configurations and the operations built on them.

A chip owns some columns and gates (its config) and exposes composer
operations that assign rows through a Layouter. Circuits are written against
the Composer interface.
"""

from .base import Composer
from .standard_plonk import StandardPlonkChip, StandardPlonkConfig

__all__ = [
    'Composer',
    'StandardPlonkChip',
    'StandardPlonkConfig',
]
