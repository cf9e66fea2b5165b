"""
Statistics Program Functions.

Implemented Operations:
    - Covariance and Pearson correlation matrices of columns
    - Rank grids
    - Quantiles by linear interpolation, and their inverse

Quantile Definition:
    For sorted values ``v[0..n-1]`` and a rank ``r`` in [0, 1], the
    quantile is found at position ``r * (n - 1)``, interpolating linearly
    between the two neighbouring values. ``rank`` inverts this mapping.
"""

from __future__ import annotations

import numbers
from typing import Optional, Union

import numpy as np

from .._kernel.params import Param, ParamKind, resolve
from .._typing import ensure_matrix, ensure_number, ensure_vector
from ..core.error import (
    ArgumentError,
    DimensionError,
    OperandTypeError,
    RangeError,
    LINEAR_ERROR_NOT_SQUARE,
)
from ..core.views import MatrixView, VectorView

__all__ = [
    "cov",
    "corr",
    "ranks",
    "quantile",
    "rank",
]


COV = (Param("ddof", ParamKind.DDOF, 0),)


# =============================================================================
# Covariance and Correlation
# =============================================================================

def _centered_columns(A: MatrixView, B: MatrixView) -> np.ndarray:
    ensure_matrix(A, "A")
    ensure_matrix(B, "B")
    if B.rows != B.cols:
        raise DimensionError("B: matrix must be square", LINEAR_ERROR_NOT_SQUARE)
    if B.rows != A.cols:
        raise DimensionError(f"dimension mismatch: B is {B.rows}x{B.cols}, A has {A.cols} columns")
    a = A.array
    return a - a.mean(axis=0)


def cov(A: MatrixView, B: MatrixView, ddof=None) -> None:
    """
    Covariance matrix of the columns of A.

    ``B[i, j] = sum_k (A[k, i] - mean_i) (A[k, j] - mean_j) / (m - ddof)``

    Args:
        A: Data matrix (m observations x n variables)
        B: n x n output matrix
        ddof: Delta degrees of freedom, ``0 <= ddof < m`` (default 0)
    """
    centered = _centered_columns(A, B)
    (ddof,) = resolve(COV, (ddof,), {}, size=A.rows)
    B.array[...] = centered.T @ centered / (A.rows - ddof)


def corr(A: MatrixView, B: MatrixView) -> None:
    """
    Pearson correlation matrix of the columns of A.

    Constant columns produce NaN entries.
    """
    centered = _centered_columns(A, B)
    norms = np.sqrt(np.sum(centered * centered, axis=0))
    with np.errstate(divide="ignore", invalid="ignore"):
        B.array[...] = centered.T @ centered / np.outer(norms, norms)


# =============================================================================
# Ranks and Quantiles
# =============================================================================

def ranks(q: int, r: VectorView, mode: Optional[str] = None) -> None:
    """
    Fill ``r`` with the evenly spaced ranks ``k / q``.

    Args:
        q: Number of intervals (> 0)
        r: Output vector; its length must match the number of ranks
        mode: May contain ``"z"`` to start at 0 (instead of ``1 / q``) and
            ``"q"`` to end at 1 (instead of ``(q - 1) / q``)

    Example:
        >>> r = linear.vector(5)
        >>> linear.ranks(4, r, "zq")
        >>> linear.tolist(r)
        [0.0, 0.25, 0.5, 0.75, 1.0]
    """
    if isinstance(q, bool) or not isinstance(q, numbers.Integral):
        raise ArgumentError(f"q: integer expected, got {type(q).__name__}")
    if q < 1:
        raise RangeError(f"bad q {q} (must be positive)")
    ensure_vector(r, "r")
    mode = mode or ""
    lower = 0 if "z" in mode else 1
    upper = q if "q" in mode else q - 1
    count = upper - lower + 1
    if r.length != count:
        raise DimensionError(f"dimension mismatch: r has length {r.length}, expected {count}")
    r.values[...] = np.arange(lower, upper + 1, dtype=np.float64) / q


def _sorted_values(x: VectorView) -> np.ndarray:
    ensure_vector(x, "x")
    values = np.sort(x.values)
    if np.isnan(values).any():
        raise ArgumentError("bad value: NaN")
    return values


def _quantile(v: np.ndarray, r: float) -> float:
    pos = r * (v.size - 1)
    index = int(np.floor(pos))
    frac = pos - index
    if frac > 0.0:
        return float(v[index] + (v[index + 1] - v[index]) * frac)
    return float(v[index])


def _rank(v: np.ndarray, q: float) -> float:
    if q <= v[0]:
        return 0.0
    if q >= v[-1]:
        return 1.0
    lower = int(np.searchsorted(v, q, side="left"))
    upper = lower - 1
    return float((upper + (q - v[upper]) / (v[lower] - v[upper])) / (v.size - 1))


def quantile(x: VectorView, r: Union[VectorView, float]) -> Optional[float]:
    """
    Quantiles of ``x`` by linear interpolation.

    Args:
        x: Data vector (must not contain NaN)
        r: Vector of ranks in [0, 1], replaced in place by the quantiles,
            or a single rank

    Returns:
        The quantile for a single rank, ``None`` for a vector of ranks

    Raises:
        RangeError: If a rank lies outside [0, 1]
    """
    v = _sorted_values(x)
    if isinstance(r, VectorView):
        ranks_ = r.values
        bad = ~((ranks_ >= 0.0) & (ranks_ <= 1.0))
        if bad.any():
            raise RangeError(f"bad rank at index {int(np.argmax(bad))}")
        ranks_[...] = [_quantile(v, float(value)) for value in ranks_]
        return None
    if isinstance(r, MatrixView):
        raise OperandTypeError("number or vector expected, got MatrixView")
    value = ensure_number(r, "r")
    if not 0.0 <= value <= 1.0:
        raise RangeError(f"bad rank {value}")
    return _quantile(v, value)


def rank(x: VectorView, q: Union[VectorView, float]) -> Optional[float]:
    """
    Interpolated ranks of values within ``x`` (inverse of ``quantile``).

    Values at or below the minimum map to 0, at or above the maximum to 1.

    Args:
        x: Data vector with at least 2 elements (must not contain NaN)
        q: Vector of values, replaced in place by their ranks, or a single
            value

    Returns:
        The rank for a single value, ``None`` for a vector of values
    """
    ensure_vector(x, "x")
    if x.length < 2:
        raise ArgumentError(f"bad vector of length {x.length} (at least 2 expected)")
    v = _sorted_values(x)
    if isinstance(q, VectorView):
        values = q.values
        nan = np.isnan(values)
        if nan.any():
            raise ArgumentError(f"bad quantile at index {int(np.argmax(nan))}")
        values[...] = [_rank(v, float(value)) for value in values]
        return None
    if isinstance(q, MatrixView):
        raise OperandTypeError("number or vector expected, got MatrixView")
    value = ensure_number(q, "q")
    if np.isnan(value):
        raise ArgumentError("bad quantile: NaN")
    return _rank(v, value)
