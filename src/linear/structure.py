"""
Structural Operations.

Construction, introspection, derived views and conversion between views
and Python collections. Derived views (``sub``, ``tvector``, ``X[i]``)
share the parent's buffer; conversions (``tolinear``, ``tovector``) always
allocate a fresh one.

Positions are 0-based and ranges half-open, as in Python slicing.

Example:
    >>> X = linear.tolinear([[1, 2, 3], [4, 5, 6]])
    >>> col = linear.tvector(X, 1)          # column 1, stride 3
    >>> linear.tolist(col)
    [2.0, 5.0]
    >>> block = linear.sub(X, 0, 1, 2, 3)   # rows [0, 2), cols [1, 3)
    >>> linear.size(block)
    (2, 2, 'row')
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from ._typing import View, ensure_matrix, ensure_vector
from .core.buffer import Buffer
from .core.config import Order, get_default_order, get_random_state
from .core.error import ArgumentError, DimensionError, OperandTypeError
from .core.views import MatrixView, VectorView, normalize_index, normalize_range

__all__ = [
    "vector",
    "matrix",
    "type_of",
    "size",
    "tvector",
    "sub",
    "unwind",
    "reshape",
    "tolist",
    "tolinear",
    "tovector",
    "ipairs",
    "randomseed",
]


# =============================================================================
# Construction and Introspection
# =============================================================================

def vector(length: int) -> VectorView:
    """Create a zero-filled vector of ``length >= 1`` elements."""
    return VectorView.create(length)


def matrix(rows: int, cols: int, order: Optional[Union[Order, str]] = None) -> MatrixView:
    """
    Create a zero-filled matrix.

    Args:
        rows: Number of rows (>= 1)
        cols: Number of columns (>= 1)
        order: ``"row"`` or ``"col"``; the configured default if omitted
    """
    return MatrixView.create(rows, cols, order)


def type_of(obj: Any) -> Optional[str]:
    """Return ``"vector"``, ``"matrix"`` or ``None``."""
    if isinstance(obj, VectorView):
        return "vector"
    if isinstance(obj, MatrixView):
        return "matrix"
    return None


def size(obj: View) -> Union[int, Tuple[int, int, str]]:
    """
    Return the length of a vector, or ``(rows, cols, order)`` of a matrix.

    Raises:
        OperandTypeError: If obj is not a view
    """
    if isinstance(obj, VectorView):
        return obj.length
    if isinstance(obj, MatrixView):
        return (obj.rows, obj.cols, obj.order.value)
    raise OperandTypeError(f"vector or matrix expected, got {type(obj).__name__}")


# =============================================================================
# Derived Views
# =============================================================================

def tvector(X: MatrixView, index: int) -> VectorView:
    """
    Transposed vector: the vector across the storage order of ``X``.

    For a row-major matrix this is column ``index`` (length ``rows``); for a
    col-major matrix, row ``index`` (length ``cols``). The vector's stride
    is the leading dimension of ``X``.

    Raises:
        BoundsError: If index is out of range
    """
    ensure_matrix(X, "X")
    if X.order is Order.ROW:
        i = normalize_index(index, X.cols)
        length = X.rows
    else:
        i = normalize_index(index, X.rows)
        length = X.cols
    return VectorView.derive(X._live_buffer(), length, X.ld, X.offset + i)


def sub(view: View, *args) -> View:
    """
    Derived sub-view sharing the buffer.

    Forms:
        ``sub(x, start=0, end=None)``: elements ``[start, end)`` of a vector.
        ``sub(X, i=0, j=0, m=None, n=None)``: rows ``[i, m)`` and columns
        ``[j, n)`` of a matrix, with the same order and leading dimension.

    Raises:
        BoundsError: If a range is empty or out of bounds
        OperandTypeError: If a bound is not an integer
    """
    if isinstance(view, VectorView):
        if len(args) > 2:
            raise ArgumentError("sub(x, start, end) takes at most 2 positions")
        start, end = (tuple(args) + (None, None))[:2]
        lo, hi = normalize_range(start, end, view.length)
        return VectorView.derive(
            view._live_buffer(), hi - lo, view.inc, view.offset + lo * view.inc
        )
    if isinstance(view, MatrixView):
        if len(args) > 4:
            raise ArgumentError("sub(X, i, j, m, n) takes at most 4 positions")
        i, j, m, n = (tuple(args) + (None,) * 4)[:4]
        r0, r1 = normalize_range(i, m, view.rows)
        c0, c1 = normalize_range(j, n, view.cols)
        return MatrixView.derive(
            view._live_buffer(), r1 - r0, c1 - c0, view.ld, view.order,
            view.address(r0, c0),
        )
    raise OperandTypeError(f"vector or matrix expected, got {type(view).__name__}")


# =============================================================================
# Packing
# =============================================================================

def _storage_order(X: MatrixView) -> str:
    return "C" if X.order is Order.ROW else "F"


def _check_total(matrices: Sequence[MatrixView], length: int) -> List[MatrixView]:
    matrices = [ensure_matrix(X, "matrices") for X in matrices]
    if not matrices:
        raise ArgumentError("at least one matrix expected")
    total = sum(X.rows * X.cols for X in matrices)
    if total != length:
        raise DimensionError(
            f"dimension mismatch: matrices hold {total} elements, vector has {length}"
        )
    return matrices


def unwind(matrices: Sequence[MatrixView], x: VectorView) -> None:
    """
    Copy the elements of ``matrices`` consecutively into ``x``.

    Each matrix is traversed in its own storage order (row by row for
    row-major, column by column for col-major).

    Raises:
        DimensionError: If the element counts do not match exactly
    """
    ensure_vector(x, "x")
    matrices = _check_total(matrices, x.length)
    packed = np.concatenate([X.array.ravel(order=_storage_order(X)) for X in matrices])
    x.values[...] = packed


def reshape(x: VectorView, matrices: Sequence[MatrixView]) -> None:
    """
    Inverse of ``unwind``: distribute ``x`` over ``matrices``.

    Raises:
        DimensionError: If the element counts do not match exactly
    """
    ensure_vector(x, "x")
    matrices = _check_total(matrices, x.length)
    source = x.values.copy()
    pos = 0
    for X in matrices:
        count = X.rows * X.cols
        X.array[...] = source[pos:pos + count].reshape(X.shape, order=_storage_order(X))
        pos += count


# =============================================================================
# Conversion
# =============================================================================

def tolist(view: View) -> list:
    """
    Convert to Python lists.

    A vector becomes a list of floats; a matrix becomes a list of its major
    vectors (rows for row-major, columns for col-major).
    """
    if isinstance(view, VectorView):
        return view.values.tolist()
    if isinstance(view, MatrixView):
        a = view.array
        return a.tolist() if view.order is Order.ROW else a.T.tolist()
    raise OperandTypeError(f"vector or matrix expected, got {type(view).__name__}")


def tolinear(values, order: Optional[Union[Order, str]] = None) -> View:
    """
    Build a vector or matrix from Python values.

    Args:
        values: Flat sequence of numbers (vector) or sequence of equally
            long sequences (matrix); 1-D and 2-D numpy arrays are accepted
        order: Matrix order; the outer sequence indexes rows for ``"row"``
            and columns for ``"col"``

    Returns:
        A new vector or matrix with its own buffer

    Raises:
        ArgumentError: If values are not numeric, ragged or empty
    """
    order = get_default_order() if order is None else Order.parse(order)
    if isinstance(values, (str, bytes, Mapping)):
        raise ArgumentError(f"bad values of type {type(values).__name__}")
    try:
        data = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ArgumentError(f"bad values: {e}") from e
    if data.size == 0:
        raise ArgumentError("bad size 0")

    if data.ndim == 1:
        x = VectorView.create(data.size)
        x.values[...] = data
        return x
    if data.ndim == 2:
        major, minor = data.shape
        rows, cols = (major, minor) if order is Order.ROW else (minor, major)
        X = MatrixView.create(rows, cols, order)
        X.array[...] = data if order is Order.ROW else data.T
        return X
    raise ArgumentError(f"bad values with {data.ndim} dimensions")


def tovector(objects, key: Union[str, Callable[[Any], Any]]) -> VectorView:
    """
    Build a vector from one value per object.

    Args:
        objects: Iterable of objects
        key: Mapping key or attribute name, or a callable returning the
            value; ``None`` values are skipped

    Raises:
        ArgumentError: If no object yields a value, or a value is not a number
    """
    objects = list(objects)
    if callable(key):
        extract = key
    elif isinstance(key, str):
        def extract(obj):
            if isinstance(obj, Mapping):
                return obj.get(key)
            return getattr(obj, key, None)
    else:
        raise ArgumentError(f"bad key of type {type(key).__name__}")

    buffer = Buffer(max(len(objects), 1))
    storage = buffer.storage
    count = 0
    for index, obj in enumerate(objects):
        value = extract(obj)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ArgumentError(f"bad value at index {index}")
        storage[count] = float(value)
        count += 1
    if count == 0:
        raise ArgumentError("no values")
    buffer.resize(count)
    return VectorView(buffer, count)


def ipairs(view: View) -> Iterator[Tuple[int, Any]]:
    """
    Iterate ``(index, value)`` pairs in ascending order.

    Values are floats for a vector and major vectors for a matrix.
    """
    if not isinstance(view, (VectorView, MatrixView)):
        raise OperandTypeError(f"vector or matrix expected, got {type(view).__name__}")
    return enumerate(view)


def randomseed(seed1=None, seed2=None) -> None:
    """Reseed the default random state; ``None`` seeds from the clock."""
    get_random_state().seed(seed1, seed2)
