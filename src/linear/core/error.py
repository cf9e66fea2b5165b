"""
Error handling for linear.

Every failure raised by the package is a ``LinearError`` carrying a numeric
code from the table below. Subclasses also derive from the matching builtin
exception so callers can catch ``ValueError``, ``IndexError`` and friends.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

# Success
LINEAR_OK = 0

# General errors (1-9)
LINEAR_ERROR_UNKNOWN = 1
LINEAR_ERROR_INTERNAL = 2
LINEAR_ERROR_OUT_OF_MEMORY = 3

# Argument errors (10-19)
LINEAR_ERROR_INVALID_ARGUMENT = 10
LINEAR_ERROR_DIMENSION_MISMATCH = 11
LINEAR_ERROR_ORDER_MISMATCH = 12
LINEAR_ERROR_RANGE_ERROR = 13
LINEAR_ERROR_INDEX_OUT_OF_BOUNDS = 14
LINEAR_ERROR_NOT_SQUARE = 15

# Type errors (20-29)
LINEAR_ERROR_TYPE_ERROR = 20

# Lifetime errors (30-39)
LINEAR_ERROR_BUFFER_RELEASED = 30


_ERROR_MESSAGES = {
    LINEAR_OK: "Success",
    LINEAR_ERROR_UNKNOWN: "Unknown error",
    LINEAR_ERROR_INTERNAL: "Internal error",
    LINEAR_ERROR_OUT_OF_MEMORY: "Out of memory",
    LINEAR_ERROR_INVALID_ARGUMENT: "Invalid argument",
    LINEAR_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    LINEAR_ERROR_ORDER_MISMATCH: "Order mismatch",
    LINEAR_ERROR_RANGE_ERROR: "Range error",
    LINEAR_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
    LINEAR_ERROR_NOT_SQUARE: "Not square",
    LINEAR_ERROR_TYPE_ERROR: "Type error",
    LINEAR_ERROR_BUFFER_RELEASED: "Buffer released",
}


# =============================================================================
# Exception Classes
# =============================================================================

class LinearError(Exception):
    """
    Base exception for all linear errors.

    Attributes:
        code: Numeric error code (one of the ``LINEAR_ERROR_*`` constants)
        message: Human readable description
    """

    OK = LINEAR_OK
    ERROR_UNKNOWN = LINEAR_ERROR_UNKNOWN
    ERROR_INTERNAL = LINEAR_ERROR_INTERNAL
    ERROR_OUT_OF_MEMORY = LINEAR_ERROR_OUT_OF_MEMORY
    ERROR_INVALID_ARGUMENT = LINEAR_ERROR_INVALID_ARGUMENT
    ERROR_DIMENSION_MISMATCH = LINEAR_ERROR_DIMENSION_MISMATCH
    ERROR_ORDER_MISMATCH = LINEAR_ERROR_ORDER_MISMATCH
    ERROR_RANGE_ERROR = LINEAR_ERROR_RANGE_ERROR
    ERROR_INDEX_OUT_OF_BOUNDS = LINEAR_ERROR_INDEX_OUT_OF_BOUNDS
    ERROR_NOT_SQUARE = LINEAR_ERROR_NOT_SQUARE
    ERROR_TYPE_ERROR = LINEAR_ERROR_TYPE_ERROR
    ERROR_BUFFER_RELEASED = LINEAR_ERROR_BUFFER_RELEASED

    def __init__(self, code: int, message: Optional[str] = None):
        """
        Create exception.

        Args:
            code: Error code
            message: Optional detailed message (table message if not provided)
        """
        self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(message)


class ArgumentError(LinearError, ValueError):
    """Invalid argument detected during validation, before any mutation."""

    default_code = LINEAR_ERROR_INVALID_ARGUMENT

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        super().__init__(self.default_code if code is None else code, message)


class DimensionError(ArgumentError):
    """Operand extents (or orders) are incompatible."""

    default_code = LINEAR_ERROR_DIMENSION_MISMATCH


class RangeError(ArgumentError):
    """A numeric parameter lies outside its admissible range."""

    default_code = LINEAR_ERROR_RANGE_ERROR


class BoundsError(ArgumentError, IndexError):
    """A position or range lies outside the extents of a view."""

    default_code = LINEAR_ERROR_INDEX_OUT_OF_BOUNDS


class OperandTypeError(LinearError, TypeError):
    """An operand is not a number, vector or matrix as required."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(LINEAR_ERROR_TYPE_ERROR, message)


class ReleasedError(LinearError, RuntimeError):
    """Access through a view whose buffer reference was released."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(LINEAR_ERROR_BUFFER_RELEASED, message)


class AllocationError(LinearError, MemoryError):
    """Storage for a buffer could not be allocated."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(LINEAR_ERROR_OUT_OF_MEMORY, message)


class InternalError(LinearError, RuntimeError):
    """The external library rejected an argument it was handed internally."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(LINEAR_ERROR_INTERNAL, message)


# =============================================================================
# Error Checking Functions
# =============================================================================

def check_info(info: int, routine: str = "") -> bool:
    """
    Check a LAPACK status value.

    A negative status means an illegal argument was passed, which is a
    contract violation. A positive status is an expected numerical outcome
    (singular matrix, no convergence) and is reported as ``False``.

    Args:
        info: Status returned by the routine
        routine: Routine name for error reporting

    Returns:
        True on success, False on a positive status

    Raises:
        InternalError: If info is negative
    """
    if info < 0:
        context = f"{routine}: " if routine else ""
        raise InternalError(f"{context}illegal value in argument {-info}")
    return info == 0


__all__ = [
    "LINEAR_OK",
    "LINEAR_ERROR_UNKNOWN",
    "LINEAR_ERROR_INTERNAL",
    "LINEAR_ERROR_OUT_OF_MEMORY",
    "LINEAR_ERROR_INVALID_ARGUMENT",
    "LINEAR_ERROR_DIMENSION_MISMATCH",
    "LINEAR_ERROR_ORDER_MISMATCH",
    "LINEAR_ERROR_RANGE_ERROR",
    "LINEAR_ERROR_INDEX_OUT_OF_BOUNDS",
    "LINEAR_ERROR_NOT_SQUARE",
    "LINEAR_ERROR_TYPE_ERROR",
    "LINEAR_ERROR_BUFFER_RELEASED",
    "LinearError",
    "ArgumentError",
    "DimensionError",
    "RangeError",
    "BoundsError",
    "OperandTypeError",
    "ReleasedError",
    "AllocationError",
    "InternalError",
    "check_info",
]
