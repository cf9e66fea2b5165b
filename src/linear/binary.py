"""
Binary operations.

All operations mutate ``y`` (``swap`` also mutates ``x``) and return
``None``.

Forms:
    - ``op(x, y, *params)``: vectors of equal length.
    - ``op(x, Y, order=None, *params)``: vector ``x`` broadcast over each
      row of ``Y`` (order ``"row"``, ``len(x) == cols``) or each column
      (order ``"col"``, ``len(x) == rows``).
    - ``op(X, Y, *params)``: matrices of equal order and shape.

Example:
    >>> x = linear.tolinear([1, 2])
    >>> y = linear.tolinear([3, 4])
    >>> linear.axpby(x, y, 2, 3)
    >>> linear.tolist(y)
    [11.0, 16.0]
"""

from __future__ import annotations

from ._kernel import binary as kernels
from ._kernel import dispatch
from ._kernel.params import NO_PARAMS, Param, ParamKind

__all__ = ["axpy", "axpby", "mul", "swap", "copy"]


ALPHA = (Param("alpha", ParamKind.NUMBER, 1.0),)
ALPHA_BETA = (
    Param("alpha", ParamKind.NUMBER, 1.0),
    Param("beta", ParamKind.NUMBER, 1.0),
)


def axpy(x, y, *args, **kwargs):
    """
    ``y += alpha * x`` (external ``daxpy``).

    Args:
        alpha: Scale factor (default 1)
    """
    return dispatch.binary(kernels.axpy, ALPHA, x, y, args, kwargs)


def axpby(x, y, *args, **kwargs):
    """
    ``y = alpha * x + beta * y``.

    Args:
        alpha: Scale factor for x (default 1)
        beta: Scale factor for y (default 1)
    """
    return dispatch.binary(kernels.axpby, ALPHA_BETA, x, y, args, kwargs)


def mul(x, y, *args, **kwargs):
    """
    Element-wise product with an exponent: ``y *= x ** alpha``.

    ``alpha`` 1 multiplies (default), -1 divides, 0.5 multiplies by the
    square root and 0 leaves ``y`` unchanged.
    """
    return dispatch.binary(kernels.mul, ALPHA, x, y, args, kwargs)


def swap(x, y, *args, **kwargs):
    """Exchange the elements of ``x`` and ``y`` (external ``dswap``)."""
    return dispatch.binary(kernels.swap, NO_PARAMS, x, y, args, kwargs)


def copy(x, y, *args, **kwargs):
    """``y = x`` (external ``dcopy``)."""
    return dispatch.binary(kernels.copy, NO_PARAMS, x, y, args, kwargs)
