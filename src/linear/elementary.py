"""
Elementary (element-wise, in-place) operations.

Each operation accepts a number, a vector or a matrix. Vectors and
matrices are transformed in place and ``None`` is returned; for a number
the transformed value is returned. Optional parameters may be passed
positionally or by keyword, and ``None`` stands for the default.

Example:
    >>> x = linear.tolinear([1.0, 4.0, 9.0])
    >>> linear.pow(x, 0.5)
    >>> linear.tolist(x)
    [1.0, 2.0, 3.0]
    >>> linear.scal(3.0, alpha=2)
    6.0
"""

from __future__ import annotations

from typing import Callable, Optional

from ._kernel import dispatch
from ._kernel import elementary as kernels
from ._kernel.params import NO_PARAMS, Param, ParamKind
from ._kernel.random import RandomState
from ._typing import Number

__all__ = [
    "inc", "scal", "pow", "exp", "log", "sgn", "abs", "logistic", "tanh",
    "apply", "set", "clip", "uniform", "normal",
    "normalpdf", "normalcdf", "normalqf",
]


# =============================================================================
# Parameter Signatures
# =============================================================================

ALPHA = (Param("alpha", ParamKind.NUMBER, 1.0),)
CALLBACK = (Param("fn", ParamKind.CALLBACK),)
CLIP = (
    Param("min", ParamKind.NUMBER, 0.0),
    Param("max", ParamKind.NUMBER, 1.0),
)
RANDOM = (Param("rng", ParamKind.RANDOM),)
NORMAL = (
    Param("mu", ParamKind.NUMBER, 0.0),
    Param("sigma", ParamKind.NUMBER, 1.0),
)


# =============================================================================
# Arithmetic
# =============================================================================

def inc(x, alpha: Optional[Number] = None):
    """Increment: ``x += alpha`` (default 1)."""
    return dispatch.elementary(kernels.inc, ALPHA, x, (alpha,), {})


def scal(x, alpha: Optional[Number] = None):
    """
    Scale: ``x *= alpha`` (default 1).

    Runs the external ``dscal`` routine directly on the view's storage.
    """
    return dispatch.elementary(kernels.scal, ALPHA, x, (alpha,), {})


def pow(x, alpha: Optional[Number] = None):
    """
    Power: ``x = x ** alpha`` (default 1).

    The exponents -1 (reciprocal), 0 (one), 0.5 (square root) and 1
    (unchanged) take dedicated paths.
    """
    return dispatch.elementary(kernels.pow, ALPHA, x, (alpha,), {})


def exp(x):
    return dispatch.elementary(kernels.exp, NO_PARAMS, x, (), {})


def log(x):
    """Natural logarithm (non-positive values give -inf / NaN)."""
    return dispatch.elementary(kernels.log, NO_PARAMS, x, (), {})


def sgn(x):
    """Sign: 1 for positive and -1 for negative values; 0 and NaN unchanged."""
    return dispatch.elementary(kernels.sgn, NO_PARAMS, x, (), {})


def abs(x):
    return dispatch.elementary(kernels.abs, NO_PARAMS, x, (), {})


def logistic(x):
    """Logistic function ``1 / (1 + exp(-x))``."""
    return dispatch.elementary(kernels.logistic, NO_PARAMS, x, (), {})


def tanh(x):
    return dispatch.elementary(kernels.tanh, NO_PARAMS, x, (), {})


# =============================================================================
# Assignment
# =============================================================================

def apply(x, fn: Callable[[float], float]):
    """
    Apply a Python callable to every element: ``x = fn(x)``.

    Elements are visited in storage order. An exception raised by ``fn``
    propagates, leaving the elements visited so far transformed.

    Args:
        x: Number, vector or matrix
        fn: Callable taking and returning a number

    Example:
        >>> linear.apply(x, lambda v: v * v + 1)
    """
    return dispatch.elementary(kernels.apply, CALLBACK, x, (fn,), {})


def set(x, alpha: Optional[Number] = None):
    """Fill: ``x = alpha`` (default 1)."""
    return dispatch.elementary(kernels.set, ALPHA, x, (alpha,), {})


def clip(x, min: Optional[Number] = None, max: Optional[Number] = None):
    """
    Clip to ``[min, max]`` (defaults 0 and 1).

    Values below ``min`` become ``min``; otherwise values above ``max``
    become ``max``.
    """
    return dispatch.elementary(kernels.clip, CLIP, x, (min, max), {})


# =============================================================================
# Random Fills
# =============================================================================

def uniform(x, rng: Optional[RandomState] = None):
    """
    Fill with uniform draws in [0, 1).

    Args:
        x: Number, vector or matrix
        rng: Random state; the configured default state if omitted
    """
    return dispatch.elementary(kernels.uniform, RANDOM, x, (rng,), {})


def normal(x, rng: Optional[RandomState] = None):
    """Fill with standard normal draws (Box-Muller)."""
    return dispatch.elementary(kernels.normal, RANDOM, x, (rng,), {})


# =============================================================================
# Normal Distribution
# =============================================================================

def normalpdf(x, mu: Optional[Number] = None, sigma: Optional[Number] = None):
    """Normal probability density with mean ``mu`` (0) and deviation ``sigma`` (1)."""
    return dispatch.elementary(kernels.normalpdf, NORMAL, x, (mu, sigma), {})


def normalcdf(x, mu: Optional[Number] = None, sigma: Optional[Number] = None):
    """Normal cumulative distribution function."""
    return dispatch.elementary(kernels.normalcdf, NORMAL, x, (mu, sigma), {})


def normalqf(x, mu: Optional[Number] = None, sigma: Optional[Number] = None):
    """
    Normal quantile function (inverse of ``normalcdf``).

    Probabilities outside [0, 1] give NaN; 0 and 1 give -inf and inf.
    The inverse error function is solved by Newton-Raphson to within
    1e-16 or 100 iterations.
    """
    return dispatch.elementary(kernels.normalqf, NORMAL, x, (mu, sigma), {})
