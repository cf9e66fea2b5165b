"""Unary kernels: reductions of a strided run to one value.

Every kernel has the signature ``kernel(n, x, offx, incx, args) -> float``
and leaves the storage untouched.
"""

from __future__ import annotations

import math

import numpy as np

from ..core.config import get_library
from .elementary import strided

__all__ = [
    "sum", "mean", "var", "std", "skew", "kurt", "median", "mad",
    "nrm2", "asum", "min", "max",
]


def sum(n, x, offx, incx, args):
    return float(np.sum(strided(x, n, offx, incx)))


def mean(n, x, offx, incx, args):
    return float(np.sum(strided(x, n, offx, incx))) / n


def var(n, x, offx, incx, args):
    v = strided(x, n, offx, incx)
    d = v - np.sum(v) / n
    return float(np.dot(d, d)) / (n - args[0])


def std(n, x, offx, incx, args):
    return math.sqrt(var(n, x, offx, incx, args))


def _central_moments(v: np.ndarray, n: int):
    d = v - np.sum(v) / n
    d2 = d * d
    return float(np.sum(d2)) / n, d, d2


def skew(n, x, offx, incx, args):
    m2, d, d2 = _central_moments(strided(x, n, offx, incx), n)
    if m2 == 0.0:
        return math.nan
    g1 = float(np.sum(d2 * d)) / n / m2 ** 1.5
    if args[0] == "p":
        return g1
    if n < 3:
        return math.nan
    return g1 * math.sqrt(n * (n - 1)) / (n - 2)


def kurt(n, x, offx, incx, args):
    m2, _, d2 = _central_moments(strided(x, n, offx, incx), n)
    if m2 == 0.0:
        return math.nan
    g2 = float(np.sum(d2 * d2)) / n / (m2 * m2) - 3.0
    if args[0] == "p":
        return g2
    if n < 4:
        return math.nan
    return ((n + 1) * g2 + 6.0) * (n - 1) / ((n - 2) * (n - 3))


def median(n, x, offx, incx, args):
    return _median(np.array(strided(x, n, offx, incx)))


def mad(n, x, offx, incx, args):
    v = np.array(strided(x, n, offx, incx))
    return _median(np.fabs(v - _median(v.copy())))


def _median(v: np.ndarray) -> float:
    # partitions v in place
    n = v.size
    half = n // 2
    if n % 2:
        v.partition(half)
        return float(v[half])
    v.partition((half - 1, half))
    return 0.5 * (float(v[half - 1]) + float(v[half]))


def nrm2(n, x, offx, incx, args):
    return float(get_library().dnrm2(x, n=n, offx=offx, incx=incx))


def asum(n, x, offx, incx, args):
    return float(get_library().dasum(x, n=n, offx=offx, incx=incx))


def min(n, x, offx, incx, args):
    return float(np.min(strided(x, n, offx, incx)))


def max(n, x, offx, incx, args):
    return float(np.max(strided(x, n, offx, incx)))
