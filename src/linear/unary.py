"""
Unary (reduction) operations.

Forms:
    - ``op(x, *params)`` with a vector ``x`` returns a float.
    - ``op(X, y, order=None, *params)`` with a matrix ``X`` reduces each row
      (order ``"row"``, ``len(y) == rows``) or each column (order ``"col"``,
      ``len(y) == cols``) into the vector ``y``. The order defaults to the
      configured default order and need not match the storage order of
      ``X``.

Parameters may also be passed by keyword (``var(x, ddof=1)``,
``var(X, y, "col", ddof=1)``).

Example:
    >>> X = linear.tolinear([[1, 2, 3], [4, 5, 6]])
    >>> y = linear.vector(3)
    >>> linear.sum(X, y, "col")
    >>> linear.tolist(y)
    [5.0, 7.0, 9.0]
"""

from __future__ import annotations

from ._kernel import dispatch
from ._kernel import unary as kernels
from ._kernel.params import NO_PARAMS, Param, ParamKind

__all__ = [
    "sum", "mean", "var", "std", "skew", "kurt", "median", "mad",
    "nrm2", "asum", "min", "max",
]


DDOF = (Param("ddof", ParamKind.DDOF, 0),)
MODE = (Param("mode", ParamKind.ENUM, "p", ("p", "s")),)


def sum(x, *args, **kwargs):
    return dispatch.unary(kernels.sum, NO_PARAMS, x, args, kwargs)


def mean(x, *args, **kwargs):
    """Arithmetic mean."""
    return dispatch.unary(kernels.mean, NO_PARAMS, x, args, kwargs)


def var(x, *args, **kwargs):
    """
    Variance with delta degrees of freedom.

    ``sum((x - mean(x)) ** 2) / (n - ddof)``

    Args:
        ddof: Integer ``0 <= ddof < n`` (default 0)

    Raises:
        RangeError: If ddof is not smaller than the reduced length
    """
    return dispatch.unary(kernels.var, DDOF, x, args, kwargs)


def std(x, *args, **kwargs):
    """Standard deviation, the square root of ``var`` (same ``ddof``)."""
    return dispatch.unary(kernels.std, DDOF, x, args, kwargs)


def skew(x, *args, **kwargs):
    """
    Skewness.

    Args:
        mode: ``"p"`` population ``g1 = m3 / m2 ** 1.5`` (default), or
            ``"s"`` sample ``G1 = g1 * sqrt(n (n - 1)) / (n - 2)``

    Returns NaN for constant data and, in sample mode, for ``n < 3``.
    """
    return dispatch.unary(kernels.skew, MODE, x, args, kwargs)


def kurt(x, *args, **kwargs):
    """
    Excess kurtosis.

    Args:
        mode: ``"p"`` population ``g2 = m4 / m2 ** 2 - 3`` (default), or
            ``"s"`` sample ``((n + 1) g2 + 6) (n - 1) / ((n - 2) (n - 3))``

    Returns NaN for constant data and, in sample mode, for ``n < 4``.
    """
    return dispatch.unary(kernels.kurt, MODE, x, args, kwargs)


def median(x, *args, **kwargs):
    """Median; the mean of the two middle values for an even length."""
    return dispatch.unary(kernels.median, NO_PARAMS, x, args, kwargs)


def mad(x, *args, **kwargs):
    """Median absolute deviation from the median."""
    return dispatch.unary(kernels.mad, NO_PARAMS, x, args, kwargs)


def nrm2(x, *args, **kwargs):
    """Euclidean norm (external ``dnrm2``)."""
    return dispatch.unary(kernels.nrm2, NO_PARAMS, x, args, kwargs)


def asum(x, *args, **kwargs):
    """Sum of absolute values (external ``dasum``)."""
    return dispatch.unary(kernels.asum, NO_PARAMS, x, args, kwargs)


def min(x, *args, **kwargs):
    return dispatch.unary(kernels.min, NO_PARAMS, x, args, kwargs)


def max(x, *args, **kwargs):
    return dispatch.unary(kernels.max, NO_PARAMS, x, args, kwargs)
