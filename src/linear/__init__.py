"""
Linear - Vectors and Matrices over Shared Buffers

Dense linear algebra and statistics library with:
- Zero-copy vector and matrix views over reference-counted buffers
- Row-major and column-major matrices, packed or strided
- Generic dispatch of element-wise, reduction and binary kernels
- BLAS/LAPACK program functions (products, solves, factorizations)
- Explicit, reseedable random state

Modules:
- structure: construction, derived views and conversion
- elementary: in-place element-wise operations
- unary: reductions of vectors and matrix rows/columns
- binary: vector/matrix combinations with broadcasting
- math: linear algebra, statistics and splines

Architecture:
    ┌──────────────────────────────────────────────┐
    │   elementary / unary / binary / math ops     │
    ├──────────────────────────────────────────────┤
    │   Dispatch engine + parameter resolver       │
    ├──────────────────────────────────────────────┤
    │   VectorView / MatrixView -> Buffer          │
    └──────────────────────────────────────────────┘

Example:
    >>> import linear
    >>> X = linear.matrix(2, 3)
    >>> for i, row in linear.ipairs(X):
    ...     linear.set(row, i + 1)
    >>> x = linear.tolinear([1, 2, 3])
    >>> linear.axpy(x, X)
    >>> linear.tolist(X)
    [[2.0, 3.0, 4.0], [3.0, 4.0, 5.0]]
    >>> linear.mean(x)
    2.0
"""

__version__ = '0.1.0'

# Import main modules
from . import core
from . import structure
from . import elementary
from . import unary
from . import binary
from . import math

from .core import (
    # Errors
    LinearError,
    ArgumentError,
    DimensionError,
    RangeError,
    BoundsError,
    OperandTypeError,
    ReleasedError,
    AllocationError,
    InternalError,

    # Configuration
    Order,
    set_default_order,
    get_default_order,

    # Views
    VectorView,
    MatrixView,
)
from ._kernel.random import RandomState

from .structure import (
    vector,
    matrix,
    type_of,
    size,
    tvector,
    sub,
    unwind,
    reshape,
    tolist,
    tolinear,
    tovector,
    ipairs,
    randomseed,
)

from .elementary import (
    inc,
    scal,
    pow,
    exp,
    log,
    sgn,
    abs,
    logistic,
    tanh,
    apply,
    set,
    clip,
    uniform,
    normal,
    normalpdf,
    normalcdf,
    normalqf,
)

from .unary import (
    sum,
    mean,
    var,
    std,
    skew,
    kurt,
    median,
    mad,
    nrm2,
    asum,
    min,
    max,
)

from .binary import (
    axpy,
    axpby,
    mul,
    swap,
    copy,
)

from .math import (
    dot,
    ger,
    gemv,
    gemm,
    gesv,
    gels,
    inv,
    det,
    svd,
    cov,
    corr,
    ranks,
    quantile,
    rank,
    Spline,
    spline,
)

__all__ = [
    # Modules
    "core",
    "structure",
    "elementary",
    "unary",
    "binary",
    "math",

    # Errors
    "LinearError",
    "ArgumentError",
    "DimensionError",
    "RangeError",
    "BoundsError",
    "OperandTypeError",
    "ReleasedError",
    "AllocationError",
    "InternalError",

    # Configuration
    "Order",
    "set_default_order",
    "get_default_order",
    "RandomState",

    # Views
    "VectorView",
    "MatrixView",

    # Structure
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

    # Elementary
    "inc",
    "scal",
    "pow",
    "exp",
    "log",
    "sgn",
    "abs",
    "logistic",
    "tanh",
    "apply",
    "set",
    "clip",
    "uniform",
    "normal",
    "normalpdf",
    "normalcdf",
    "normalqf",

    # Unary
    "sum",
    "mean",
    "var",
    "std",
    "skew",
    "kurt",
    "median",
    "mad",
    "nrm2",
    "asum",
    "min",
    "max",

    # Binary
    "axpy",
    "axpby",
    "mul",
    "swap",
    "copy",

    # Program functions
    "dot",
    "ger",
    "gemv",
    "gemm",
    "gesv",
    "gels",
    "inv",
    "det",
    "svd",
    "cov",
    "corr",
    "ranks",
    "quantile",
    "rank",
    "Spline",
    "spline",
]
