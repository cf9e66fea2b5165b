"""External dense-algebra library loader.

Routines come from SciPy's BLAS/LAPACK wrappers and are resolved lazily by
name, then cached. Level-1 BLAS routines accept a flat array together with
explicit ``n``, offset and stride, which lets the kernels run directly on a
buffer's storage without copying.

Usage (Internal only):
    >>> lib = get_library()
    >>> lib.dscal(2.0, storage, n=3, offx=0, incx=2)
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

import numpy as np
from scipy.linalg import blas, lapack

__all__ = ["Library", "LibraryRoutineError"]


logger = logging.getLogger("linear.library")

_BLAS_ROUTINES = frozenset({
    "dscal", "daxpy", "dswap", "dcopy", "ddot", "dnrm2", "dasum",
    "dger", "dgemv", "dgemm",
})
_LAPACK_ROUTINES = frozenset({
    "dgesv", "dgels", "dgetrf", "dgetri", "dgesdd", "dgtsv",
})


class LibraryRoutineError(AttributeError):
    """Raised when a routine outside the supported set is requested."""
    pass


class Library:
    """
    Facade over the double-precision BLAS/LAPACK routines.

    Routines are looked up on first attribute access, e.g. ``lib.dgemm``.
    """

    def __init__(self):
        self._routines: Dict[str, Callable] = {}

    def __getattr__(self, name: str) -> Callable:
        if name.startswith("_"):
            raise AttributeError(name)
        routine = self._routines.get(name)
        if routine is None:
            routine = self._load(name)
            self._routines[name] = routine
        return routine

    @staticmethod
    def _load(name: str) -> Callable:
        base = name[1:]
        if name in _BLAS_ROUTINES:
            routine = blas.get_blas_funcs(base, dtype=np.float64)
        elif name in _LAPACK_ROUTINES:
            routine = lapack.get_lapack_funcs(base, dtype=np.float64)
        else:
            raise LibraryRoutineError(f"unsupported routine: {name}")
        logger.debug("Resolved %s -> %s", name, getattr(routine, "module_name", "scipy"))
        return routine

    @property
    def loaded(self) -> list:
        """Names of routines resolved so far."""
        return sorted(self._routines)

    def __repr__(self) -> str:
        return f"Library(loaded={self.loaded})"
