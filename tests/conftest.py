"""
Pytest configuration for mini-plonk tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path so absolute imports work
# (tests/ is inside the root, so parent is the root)
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))


@pytest.fixture
def sample_inputs():
    """x, y, c and the public inputs [c, x^2 * y^2 + c] of the worked example."""
    return 5, 9, 7, [7, 25 * 81 + 7]
