"""Generic dispatch engine.

Routes one kernel over a number, a vector view or a matrix view in either
storage order. Operands are classified once per call, all arguments are
resolved and validated before the first kernel call, and matrices are
walked as a sequence of strided runs ("lines"):

    - A line along the physical major dimension is contiguous (inc 1).
    - A line across it (when the requested order differs from the storage
      order) has stride ``ld``.
    - A packed matrix (``ld == minor``) collapses into a single run.

Kernel contracts live in ``elementary``, ``unary`` and ``binary``.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Mapping, Sequence, Tuple

import numpy as np

from .._typing import Operand, classify, ensure_same_order, ensure_vector
from ..core.config import Order, get_default_order
from ..core.error import DimensionError, OperandTypeError
from ..core.views import MatrixView
from .params import Param, resolve, split_leading

__all__ = ["elementary", "unary", "binary", "lines"]


def _order(value) -> Order:
    return get_default_order() if value is None else Order.parse(value)


def lines(X: MatrixView, order: Order) -> Tuple[int, int, Iterator[Tuple[int, int]]]:
    """
    Walk a matrix by rows (``order`` row) or columns (``order`` col).

    Returns:
        ``(count, size, runs)`` where ``runs`` yields ``(offset, inc)`` of
        each of the ``count`` lines of ``size`` elements
    """
    if order is Order.ROW:
        count, size = X.rows, X.cols
    else:
        count, size = X.cols, X.rows
    if order is X.order:
        runs = ((X.offset + i * X.ld, 1) for i in range(count))
    else:
        runs = ((X.offset + i, X.ld) for i in range(count))
    return count, size, runs


# =============================================================================
# Elementary
# =============================================================================

def elementary(
    kernel: Callable,
    params: Sequence[Param],
    x: Any,
    args: Sequence[Any],
    kwargs: Mapping[str, Any],
):
    """
    Apply an in-place kernel to every element of ``x``.

    Returns:
        The transformed value for a number, ``None`` for views
    """
    kind = classify(x)

    if kind is Operand.SCALAR:
        values = resolve(params, args, kwargs, size=1)
        cell = np.array([float(x)], dtype=np.float64)
        kernel(1, cell, 0, 1, values)
        return float(cell[0])

    if kind is Operand.VECTOR:
        values = resolve(params, args, kwargs, size=x.length)
        kernel(x.length, x.storage, x.offset, x.inc, values)
        return None

    values = resolve(params, args, kwargs, size=x.minor)
    storage = x.storage
    if x.packed:
        kernel(x.rows * x.cols, storage, x.offset, 1, values)
    else:
        for i in range(x.major):
            kernel(x.minor, storage, x.offset + i * x.ld, 1, values)
    return None


# =============================================================================
# Unary
# =============================================================================

def unary(
    kernel: Callable,
    params: Sequence[Param],
    x: Any,
    args: Sequence[Any],
    kwargs: Mapping[str, Any],
):
    """
    Reduce a vector to a float, or each line of a matrix into a vector.

    Matrix form: ``op(X, y, order=None, *params)``; ``order`` row reduces
    every row into ``y`` (``len(y) == rows``), col every column.
    """
    kind = classify(x)

    if kind is Operand.VECTOR:
        values = resolve(params, args, kwargs, size=x.length)
        return kernel(x.length, x.storage, x.offset, x.inc, values)

    if kind is Operand.SCALAR:
        raise OperandTypeError("vector or matrix expected, got number")

    (y, order), args, kwargs = split_leading(("y", "order"), args, kwargs)
    y = ensure_vector(y, "y")
    order = _order(order)
    count, size, runs = lines(x, order)
    if y.length != count:
        raise DimensionError(f"dimension mismatch: y has length {y.length}, expected {count}")
    values = resolve(params, args, kwargs, size=size)

    storage = x.storage
    out = y.values
    for i, (offset, inc) in enumerate(runs):
        out[i] = kernel(size, storage, offset, inc, values)
    return None


# =============================================================================
# Binary
# =============================================================================

def binary(
    kernel: Callable,
    params: Sequence[Param],
    x: Any,
    y: Any,
    args: Sequence[Any],
    kwargs: Mapping[str, Any],
):
    """
    Combine ``x`` into ``y`` element-wise.

    Forms:
        - vector, vector: equal lengths
        - vector, matrix: ``op(x, Y, order=None, *params)``; ``x`` is
          broadcast over each row (order row) or column (order col)
        - matrix, matrix: same order and shape
    """
    kx, ky = classify(x), classify(y)

    if kx is Operand.VECTOR and ky is Operand.VECTOR:
        if x.length != y.length:
            raise DimensionError(
                f"dimension mismatch: vectors have lengths {x.length} and {y.length}"
            )
        values = resolve(params, args, kwargs, size=x.length)
        kernel(x.length, x.storage, x.offset, x.inc, y.storage, y.offset, y.inc, values)
        return None

    if kx is Operand.VECTOR and ky is Operand.MATRIX:
        (order,), args, kwargs = split_leading(("order",), args, kwargs)
        order = _order(order)
        _, size, runs = lines(y, order)
        if x.length != size:
            raise DimensionError(
                f"dimension mismatch: x has length {x.length}, expected {size}"
            )
        values = resolve(params, args, kwargs, size=x.length)
        xs, ys = x.storage, y.storage
        for offset, inc in runs:
            kernel(size, xs, x.offset, x.inc, ys, offset, inc, values)
        return None

    if kx is Operand.MATRIX and ky is Operand.MATRIX:
        ensure_same_order(x, y)
        if x.shape != y.shape:
            raise DimensionError(
                f"dimension mismatch: {x.rows}x{x.cols} and {y.rows}x{y.cols}"
            )
        values = resolve(params, args, kwargs, size=x.minor)
        xs, ys = x.storage, y.storage
        if x.packed and y.packed:
            kernel(x.rows * x.cols, xs, x.offset, 1, ys, y.offset, 1, values)
        else:
            for i in range(x.major):
                kernel(x.minor, xs, x.offset + i * x.ld, 1, ys, y.offset + i * y.ld, 1, values)
        return None

    for operand in (x, y):
        if classify(operand) is Operand.SCALAR:
            raise OperandTypeError("vector or matrix expected, got number")
    raise OperandTypeError(
        f"unsupported operands: {type(x).__name__}, {type(y).__name__}"
    )
