"""Elementary kernels: in-place element-wise transforms.

Every kernel has the signature ``kernel(n, x, offx, incx, args)``: it
transforms the ``n`` elements ``x[offx], x[offx + incx], ...`` of the flat
storage array ``x`` in place, with ``args`` the resolved parameter tuple.
"""

from __future__ import annotations

import math

import numpy as np
from scipy import special

from ..core.config import get_library

__all__ = [
    "strided",
    "inc", "scal", "pow", "exp", "log", "sgn", "abs", "logistic", "tanh",
    "apply", "set", "clip", "uniform", "normal",
    "normalpdf", "normalcdf", "normalqf",
]


# Newton-Raphson for the inverse error function
QF_TOLERANCE = 1e-16
QF_MAX_ITERATIONS = 100

_SQRT2 = math.sqrt(2.0)
_2_SQRTPI = 2.0 / math.sqrt(math.pi)
_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def strided(x: np.ndarray, n: int, offx: int, incx: int) -> np.ndarray:
    """Numpy view of ``n`` elements starting at ``offx`` with stride ``incx``."""
    return x[offx:offx + (n - 1) * incx + 1:incx]


def inc(n, x, offx, incx, args):
    strided(x, n, offx, incx)[...] += args[0]


def scal(n, x, offx, incx, args):
    get_library().dscal(args[0], x, n=n, offx=offx, incx=incx)


def pow(n, x, offx, incx, args):
    alpha = args[0]
    v = strided(x, n, offx, incx)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        if alpha == -1.0:
            np.reciprocal(v, out=v)
        elif alpha == 0.0:
            v[...] = 1.0
        elif alpha == 0.5:
            np.sqrt(v, out=v)
        elif alpha != 1.0:
            np.power(v, alpha, out=v)


def exp(n, x, offx, incx, args):
    v = strided(x, n, offx, incx)
    with np.errstate(over="ignore"):
        np.exp(v, out=v)


def log(n, x, offx, incx, args):
    v = strided(x, n, offx, incx)
    with np.errstate(divide="ignore", invalid="ignore"):
        np.log(v, out=v)


def sgn(n, x, offx, incx, args):
    # zero and NaN stay as they are
    v = strided(x, n, offx, incx)
    v[v > 0] = 1.0
    v[v < 0] = -1.0


def abs(n, x, offx, incx, args):
    v = strided(x, n, offx, incx)
    np.fabs(v, out=v)


def logistic(n, x, offx, incx, args):
    v = strided(x, n, offx, incx)
    special.expit(v, out=v)


def tanh(n, x, offx, incx, args):
    v = strided(x, n, offx, incx)
    np.tanh(v, out=v)


def apply(n, x, offx, incx, args):
    fn = args[0]
    for k in range(offx, offx + n * incx, incx):
        x[k] = float(fn(float(x[k])))


def set(n, x, offx, incx, args):
    strided(x, n, offx, incx)[...] = args[0]


def clip(n, x, offx, incx, args):
    lo, hi = args
    v = strided(x, n, offx, incx)
    below = v < lo
    above = (v > hi) & ~below
    v[below] = lo
    v[above] = hi


def uniform(n, x, offx, incx, args):
    strided(x, n, offx, incx)[...] = args[0].uniforms(n)


def normal(n, x, offx, incx, args):
    strided(x, n, offx, incx)[...] = args[0].normals(n)


def normalpdf(n, x, offx, incx, args):
    mu, sigma = args
    v = strided(x, n, offx, incx)
    z = (v - mu) / sigma
    v[...] = (_INV_SQRT_2PI / sigma) * np.exp(-0.5 * z * z)


def normalcdf(n, x, offx, incx, args):
    mu, sigma = args
    v = strided(x, n, offx, incx)
    v[...] = 0.5 * (1.0 + special.erf((v - mu) / (sigma * _SQRT2)))


def normalqf(n, x, offx, incx, args):
    mu, sigma = args
    v = strided(x, n, offx, incx)
    v[...] = mu + sigma * _SQRT2 * inverf(2.0 * v - 1.0)


def inverf(p: np.ndarray) -> np.ndarray:
    """
    Inverse error function by Newton-Raphson.

    Outside [-1, 1] the result is NaN; -1 and 1 map to -inf and inf.
    """
    p = np.asarray(p, dtype=np.float64)
    out = np.full(p.shape, np.nan)
    out[p == -1.0] = -np.inf
    out[p == 1.0] = np.inf

    inner = (p > -1.0) & (p < 1.0)
    q = p[inner]
    y = np.sqrt(-np.log((1.0 - q) * (1.0 + q))) * np.where(q >= 0.0, 1.0, -1.0)
    active = np.ones(y.shape, dtype=bool)
    for _ in range(QF_MAX_ITERATIONS):
        if not active.any():
            break
        ya = y[active]
        step = (special.erf(ya) - q[active]) / (_2_SQRTPI * np.exp(-(ya * ya)))
        y[active] = ya - step
        active[active] = np.fabs(step) > QF_TOLERANCE
    out[inner] = y
    return out
