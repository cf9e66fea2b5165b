"""
Operand Classification and Validation.

Every dispatched operation accepts a number, a vector view or a matrix
view. This module tags an operand once per call and provides the checks
shared by the program functions:

    - Operand tags (SCALAR, VECTOR, MATRIX)
    - ``classify`` for the dispatch engine
    - ``ensure_vector`` / ``ensure_matrix`` / ``ensure_square`` for argument
      validation with uniform error messages

Example:
    >>> from linear._typing import classify, Operand
    >>> classify(2.0)
    <Operand.SCALAR: 'number'>
    >>> classify(linear.vector(3))
    <Operand.VECTOR: 'vector'>
"""

from __future__ import annotations

import numbers
from enum import Enum
from typing import Any, Union

from .core.config import Order
from .core.error import (
    ArgumentError,
    DimensionError,
    OperandTypeError,
    LINEAR_ERROR_NOT_SQUARE,
    LINEAR_ERROR_ORDER_MISMATCH,
)
from .core.views import MatrixView, VectorView

__all__ = [
    "Operand",
    "Number",
    "View",
    "classify",
    "ensure_vector",
    "ensure_matrix",
    "ensure_square",
    "ensure_same_order",
    "ensure_number",
]


Number = Union[int, float]
View = Union[VectorView, MatrixView]


# =============================================================================
# Operand Tags
# =============================================================================

class Operand(Enum):
    SCALAR = "number"
    VECTOR = "vector"
    MATRIX = "matrix"


def classify(obj: Any) -> Operand:
    """Tag an operand.

    Args:
        obj: Number, VectorView or MatrixView.

    Returns:
        The operand tag.

    Raises:
        OperandTypeError: If obj is none of the three.
    """
    if isinstance(obj, VectorView):
        return Operand.VECTOR
    if isinstance(obj, MatrixView):
        return Operand.MATRIX
    if isinstance(obj, numbers.Real) and not isinstance(obj, bool):
        return Operand.SCALAR
    raise OperandTypeError(
        f"number, vector, or matrix expected, got {type(obj).__name__}"
    )


# =============================================================================
# Validation
# =============================================================================

def ensure_vector(obj: Any, name: str = "x") -> VectorView:
    """Require a vector view."""
    if not isinstance(obj, VectorView):
        raise OperandTypeError(f"{name}: vector expected, got {type(obj).__name__}")
    return obj


def ensure_matrix(obj: Any, name: str = "A") -> MatrixView:
    """Require a matrix view."""
    if not isinstance(obj, MatrixView):
        raise OperandTypeError(f"{name}: matrix expected, got {type(obj).__name__}")
    return obj


def ensure_square(A: MatrixView, name: str = "A") -> MatrixView:
    """Require a square matrix view."""
    ensure_matrix(A, name)
    if A.rows != A.cols:
        raise DimensionError(f"{name}: matrix must be square", LINEAR_ERROR_NOT_SQUARE)
    return A


def ensure_same_order(*matrices: MatrixView) -> Order:
    """Require all matrices to share one storage order and return it."""
    order = matrices[0].order
    for other in matrices[1:]:
        if other.order is not order:
            raise DimensionError("order mismatch", LINEAR_ERROR_ORDER_MISMATCH)
    return order


def ensure_number(value: Any, name: str) -> float:
    """Require a real number (bool excluded) and convert it to float."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ArgumentError(f"{name}: number expected, got {type(value).__name__}")
    return float(value)
