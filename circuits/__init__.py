"""Example circuits built on the standard PLONK chip.

Circuits are looked up by name through CIRCUIT_REGISTRY.
"""

from protocol.circuit import Circuit

from .inverse import InverseCircuit
from .sample import SampleCircuit

# Registry mapping circuit names to circuit classes
CIRCUIT_REGISTRY: dict[str, type[Circuit]] = {
    'sample': SampleCircuit,
    'inverse': InverseCircuit,
}


def get_circuit(name: str) -> type[Circuit]:
    """Get circuit class by name.

    Raises:
        KeyError: If no circuit is registered under name
    """
    if name in CIRCUIT_REGISTRY:
        return CIRCUIT_REGISTRY[name]
    raise KeyError(f"No circuit named '{name}'. "
                   f"Available: {list(CIRCUIT_REGISTRY.keys())}")


__all__ = [
    'SampleCircuit',
    'InverseCircuit',
    'CIRCUIT_REGISTRY',
    'get_circuit',
]
