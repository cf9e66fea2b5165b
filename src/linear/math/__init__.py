"""
Linear Program Functions.

This package provides operations that validate their operands and forward
to the external dense linear-algebra library, plus statistics and spline
interpolation built on the same views:

    - Linear algebra (dot, ger, gemv, gemm, gesv, gels, inv, det, svd)
    - Statistics (cov, corr, ranks, quantile, rank)
    - Cubic spline interpolation (spline)

Example:
    >>> import linear
    >>> A = linear.tolinear([[1, 2, 3], [4, 5, 6]])
    >>> B = linear.tolinear([[1, 2], [3, 4], [5, 6]])
    >>> C = linear.matrix(2, 2)
    >>> linear.gemm(A, B, C)
    >>> linear.tolist(C)
    [[22.0, 28.0], [49.0, 64.0]]
"""

from linear.math.linalg import (
    dot,
    ger,
    gemv,
    gemm,
    gesv,
    gels,
    inv,
    det,
    svd,
)

from linear.math.stats import (
    cov,
    corr,
    ranks,
    quantile,
    rank,
)

from linear.math.spline import (
    Spline,
    spline,
)

__all__ = [
    # Linear algebra
    "dot",
    "ger",
    "gemv",
    "gemm",
    "gesv",
    "gels",
    "inv",
    "det",
    "svd",
    # Statistics
    "cov",
    "corr",
    "ranks",
    "quantile",
    "rank",
    # Interpolation
    "Spline",
    "spline",
]
