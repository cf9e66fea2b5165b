"""Binary kernels: combine a strided run of ``x`` into a run of ``y``.

Every kernel has the signature
``kernel(n, x, offx, incx, y, offy, incy, args)`` and mutates ``y`` (and
``x`` for ``swap``) in place. ``x`` and ``y`` are flat storage arrays,
possibly the same one.
"""

from __future__ import annotations

import numpy as np

from ..core.config import get_library
from .elementary import strided

__all__ = ["axpy", "axpby", "mul", "swap", "copy"]


def axpy(n, x, offx, incx, y, offy, incy, args):
    get_library().daxpy(x, y, n=n, a=args[0], offx=offx, incx=incx, offy=offy, incy=incy)


def axpby(n, x, offx, incx, y, offy, incy, args):
    alpha, beta = args
    lib = get_library()
    if beta != 1.0:
        lib.dscal(beta, y, n=n, offx=offy, incx=incy)
    lib.daxpy(x, y, n=n, a=alpha, offx=offx, incx=incx, offy=offy, incy=incy)


def mul(n, x, offx, incx, y, offy, incy, args):
    alpha = args[0]
    if alpha == 0.0:
        return
    u = strided(x, n, offx, incx)
    v = strided(y, n, offy, incy)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        if alpha == 1.0:
            v *= u
        elif alpha == -1.0:
            v /= u
        elif alpha == 0.5:
            v *= np.sqrt(u)
        else:
            v *= np.power(u, alpha)


def swap(n, x, offx, incx, y, offy, incy, args):
    get_library().dswap(x, y, n=n, offx=offx, incx=incx, offy=offy, incy=incy)


def copy(n, x, offx, incx, y, offy, incy, args):
    get_library().dcopy(x, y, n=n, offx=offx, incx=incx, offy=offy, incy=incy)
