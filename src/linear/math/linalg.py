"""
Linear Algebra Program Functions.

Thin validation and forwarding to the external BLAS/LAPACK routines:

    - Level 1-3 BLAS: dot, ger, gemv, gemm
    - LAPACK: gesv (linear solve), gels (least squares), inv, det, svd

Every function validates shapes, orders and options before touching any
operand. Factorization-based functions report a singular or
non-converging input as ``False`` (``0.0`` for ``det``) rather than
raising: it is an expected outcome of valid input.

Results of level-2/3 and LAPACK routines are computed on the logical
``(rows, cols)`` arrays of the views and written back, so either storage
order works.

Example:
    >>> A = linear.tolinear([[1, 2], [3, 4]])
    >>> linear.det(A)
    -2.0
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .._kernel.params import Param, ParamKind, resolve
from .._typing import (
    ensure_matrix,
    ensure_number,
    ensure_same_order,
    ensure_square,
    ensure_vector,
)
from ..core.config import get_library
from ..core.error import ArgumentError, DimensionError, check_info
from ..core.views import MatrixView, VectorView

__all__ = [
    "dot",
    "ger",
    "gemv",
    "gemm",
    "gesv",
    "gels",
    "inv",
    "det",
    "svd",
]


logger = logging.getLogger("linear.linalg")

TRANSPOSES = ("notrans", "trans")

GER = (Param("alpha", ParamKind.NUMBER, 1.0),)
GEMV = (
    Param("trans", ParamKind.ENUM, "notrans", TRANSPOSES),
    Param("alpha", ParamKind.NUMBER, 1.0),
    Param("beta", ParamKind.NUMBER, 0.0),
)
GEMM = (
    Param("transA", ParamKind.ENUM, "notrans", TRANSPOSES),
    Param("transB", ParamKind.ENUM, "notrans", TRANSPOSES),
    Param("alpha", ParamKind.NUMBER, 1.0),
    Param("beta", ParamKind.NUMBER, 0.0),
)
GELS = (Param("trans", ParamKind.ENUM, "notrans", TRANSPOSES),)


def _mismatch(what: str) -> DimensionError:
    return DimensionError(f"dimension mismatch: {what}")


# =============================================================================
# BLAS
# =============================================================================

def dot(x: VectorView, y: VectorView) -> float:
    """
    Dot product of two vectors of equal length (external ``ddot``).

    Runs directly on the storage of both views.
    """
    ensure_vector(x, "x")
    ensure_vector(y, "y")
    if x.length != y.length:
        raise _mismatch(f"vectors have lengths {x.length} and {y.length}")
    return float(get_library().ddot(
        x.storage, y.storage, n=x.length,
        offx=x.offset, incx=x.inc, offy=y.offset, incy=y.inc,
    ))


def ger(x: VectorView, y: VectorView, A: MatrixView, alpha=None) -> None:
    """
    Rank-1 update ``A += alpha * x * y^T``.

    Args:
        x: Vector with ``len(x) == A.rows``
        y: Vector with ``len(y) == A.cols``
        A: Matrix updated in place
        alpha: Scale factor (default 1)
    """
    ensure_vector(x, "x")
    ensure_vector(y, "y")
    ensure_matrix(A, "A")
    if x.length != A.rows:
        raise _mismatch(f"x has length {x.length}, A has {A.rows} rows")
    if y.length != A.cols:
        raise _mismatch(f"y has length {y.length}, A has {A.cols} columns")
    (alpha,) = resolve(GER, (alpha,), {})
    A.array[...] = get_library().dger(alpha, x.values, y.values, a=A.array)


def gemv(
    A: MatrixView,
    x: VectorView,
    y: VectorView,
    trans: Optional[str] = None,
    alpha=None,
    beta=None,
) -> None:
    """
    Matrix-vector product ``y = alpha * op(A) * x + beta * y``.

    Args:
        A: Matrix (m x n after ``op``)
        x: Vector of length n
        y: Vector of length m, updated in place
        trans: ``"notrans"`` (default) or ``"trans"``
        alpha: Scale factor (default 1)
        beta: Scale factor for y (default 0)

    Example:
        >>> A = linear.tolinear([[1, 2, 3], [4, 5, 6]])
        >>> x = linear.tolinear([1, 2, 3])
        >>> y = linear.vector(2)
        >>> linear.gemv(A, x, y)
        >>> linear.tolist(y)
        [14.0, 32.0]
    """
    ensure_matrix(A, "A")
    ensure_vector(x, "x")
    ensure_vector(y, "y")
    trans, alpha, beta = resolve(GEMV, (trans, alpha, beta), {})
    transposed = trans == "trans"
    m, n = (A.cols, A.rows) if transposed else (A.rows, A.cols)
    if x.length != n:
        raise _mismatch(f"x has length {x.length}, expected {n}")
    if y.length != m:
        raise _mismatch(f"y has length {y.length}, expected {m}")
    y.values[...] = get_library().dgemv(
        alpha, A.array, x.values, beta=beta, y=y.values, trans=int(transposed)
    )


def gemm(
    A: MatrixView,
    B: MatrixView,
    C: MatrixView,
    transA: Optional[str] = None,
    transB: Optional[str] = None,
    alpha=None,
    beta=None,
) -> None:
    """
    Matrix-matrix product ``C = alpha * op(A) * op(B) + beta * C``.

    A, B and C must share one storage order.

    Args:
        transA: ``"notrans"`` (default) or ``"trans"``
        transB: ``"notrans"`` (default) or ``"trans"``
        alpha: Scale factor (default 1)
        beta: Scale factor for C (default 0)

    Raises:
        DimensionError: On an order mismatch or incompatible shapes
    """
    ensure_matrix(A, "A")
    ensure_matrix(B, "B")
    ensure_matrix(C, "C")
    ensure_same_order(A, B, C)
    transA, transB, alpha, beta = resolve(GEMM, (transA, transB, alpha, beta), {})
    ta, tb = transA == "trans", transB == "trans"
    m, ka = (A.cols, A.rows) if ta else (A.rows, A.cols)
    kb, n = (B.cols, B.rows) if tb else (B.rows, B.cols)
    if ka != kb:
        raise _mismatch(f"inner dimensions {ka} and {kb}")
    if C.shape != (m, n):
        raise _mismatch(f"C is {C.rows}x{C.cols}, expected {m}x{n}")
    C.array[...] = get_library().dgemm(
        alpha, A.array, B.array, beta=beta, c=C.array,
        trans_a=int(ta), trans_b=int(tb),
    )


# =============================================================================
# LAPACK
# =============================================================================

def gesv(A: MatrixView, B: MatrixView) -> bool:
    """
    Solve ``A X = B`` in place.

    On return A holds its LU factorization and, on success, B holds the
    solution X.

    Args:
        A: Square matrix (n x n)
        B: Right-hand sides (n x nrhs), same order as A

    Returns:
        True on success, False if A is singular
    """
    ensure_square(A, "A")
    ensure_matrix(B, "B")
    ensure_same_order(A, B)
    if B.rows != A.rows:
        raise _mismatch(f"B has {B.rows} rows, A has {A.rows}")
    lu, _, x, info = get_library().dgesv(A.array, B.array)
    ok = check_info(info, "dgesv")
    A.array[...] = lu
    if ok:
        B.array[...] = x
    else:
        logger.debug("dgesv: singular matrix (info=%d)", info)
    return ok


def gels(A: MatrixView, B: MatrixView, trans: Optional[str] = None) -> bool:
    """
    Least squares or minimum norm solution of ``op(A) X = B`` in place.

    Args:
        A: Matrix (m x n), overwritten by its QR/LQ factorization
        B: Right-hand sides with ``max(m, n)`` rows; receives the solution
            in its leading rows
        trans: ``"notrans"`` (default) or ``"trans"``

    Returns:
        True on success, False if A is rank deficient
    """
    ensure_matrix(A, "A")
    ensure_matrix(B, "B")
    ensure_same_order(A, B)
    (trans,) = resolve(GELS, (trans,), {})
    if B.rows != max(A.rows, A.cols):
        raise _mismatch(f"B has {B.rows} rows, expected {max(A.rows, A.cols)}")
    lqr, x, info = get_library().dgels(
        A.array, B.array, trans="T" if trans == "trans" else "N"
    )
    ok = check_info(info, "dgels")
    A.array[...] = lqr
    if ok:
        B.array[...] = x
    else:
        logger.debug("dgels: rank deficient matrix (info=%d)", info)
    return ok


def inv(A: MatrixView) -> bool:
    """
    Invert a square matrix in place (LU factorization, then inversion).

    Returns:
        True on success, False if A is singular (A then holds its LU
        factorization)
    """
    ensure_square(A, "A")
    lib = get_library()
    lu, piv, info = lib.dgetrf(A.array)
    ok = check_info(info, "dgetrf")
    A.array[...] = lu
    if not ok:
        logger.debug("dgetrf: singular matrix (info=%d)", info)
        return False
    inv_a, info = lib.dgetri(lu, piv)
    ok = check_info(info, "dgetri")
    if ok:
        A.array[...] = inv_a
    return ok


def det(A: MatrixView) -> float:
    """
    Determinant of a square matrix.

    A copy of A is LU factorized; the determinant is the product of the
    diagonal of U, negated once per row interchange. A is not modified.

    Returns:
        The determinant, 0.0 if A is singular at machine precision
    """
    ensure_square(A, "A")
    lu, piv, info = get_library().dgetrf(A.array)
    if not check_info(info, "dgetrf"):
        return 0.0
    result = float(np.prod(np.diagonal(lu)))
    swaps = int(np.count_nonzero(piv != np.arange(A.rows)))
    return -result if swaps % 2 else result


def svd(
    A: MatrixView,
    U: MatrixView,
    s: VectorView,
    VT: MatrixView,
    k: Optional[int] = None,
) -> bool:
    """
    Singular value decomposition ``A = U diag(s) VT`` (external ``dgesdd``).

    A (m x n) is left unchanged and ``len(s) == min(m, n)``.

    Args:
        U: m x m, or m x k when ``k`` is given
        s: Receives the singular values in descending order; zero beyond k
        VT: n x n, or k x n when ``k`` is given
        k: Optional number of leading singular triplets, ``1 <= k <= min(m, n)``

    Returns:
        True on success, False if the decomposition did not converge
    """
    ensure_matrix(A, "A")
    ensure_matrix(U, "U")
    ensure_vector(s, "s")
    ensure_matrix(VT, "VT")
    m, n = A.shape
    p = min(m, n)
    if s.length != p:
        raise _mismatch(f"s has length {s.length}, expected {p}")
    if k is None:
        ku, kv = m, n
    else:
        k = int(ensure_number(k, "k"))
        if not 1 <= k <= p:
            raise ArgumentError(f"bad k {k} (expected 1 to {p})")
        ku = kv = k
    if U.shape != (m, ku):
        raise _mismatch(f"U is {U.rows}x{U.cols}, expected {m}x{ku}")
    if VT.shape != (kv, n):
        raise _mismatch(f"VT is {VT.rows}x{VT.cols}, expected {kv}x{n}")

    u, sv, vt, info = get_library().dgesdd(A.array, compute_uv=1, full_matrices=1)
    if not check_info(info, "dgesdd"):
        logger.debug("dgesdd: no convergence (info=%d)", info)
        return False
    U.array[...] = u[:, :ku]
    VT.array[...] = vt[:kv, :]
    values = s.values
    values[...] = sv[:p]
    if k is not None:
        values[k:] = 0.0
    return True
