"""
Pytest configuration and shared fixtures for linear tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import linear
from linear import RandomState


EPSILON = 1e-6


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def row_default_order():
    """Run every test with row-major as the default order."""
    previous = linear.get_default_order()
    linear.set_default_order("row")
    yield
    linear.set_default_order(previous)


@pytest.fixture
def rng():
    """Deterministic random state."""
    return RandomState(42)


@pytest.fixture
def row_matrix():
    """2x3 row-major matrix.

    Matrix:
    [[1, 2, 3],
     [4, 5, 6]]
    """
    return linear.tolinear([[1, 2, 3], [4, 5, 6]], "row")


@pytest.fixture
def col_matrix():
    """The same logical 2x3 matrix stored column-major."""
    return linear.tolinear([[1, 4], [2, 5], [3, 6]], "col")


@pytest.fixture
def magic():
    """3x3 magic square (rows, columns and diagonals sum to 15)."""
    return linear.tolinear([[8, 1, 6], [3, 5, 7], [4, 9, 2]])


# =============================================================================
# Helper Functions
# =============================================================================

def assert_array_equal(a1, a2, rtol=1e-7, atol=EPSILON):
    """Assert a view (or array) approximately equals expected values.

    Matrices are compared by their logical (rows, cols) values.
    """
    if isinstance(a1, linear.MatrixView):
        a1 = a1.array
    elif isinstance(a1, linear.VectorView):
        a1 = a1.values
    np.testing.assert_allclose(np.asarray(a1), np.asarray(a2, dtype=float), rtol=rtol, atol=atol)
