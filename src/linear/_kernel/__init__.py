"""Linear Private Kernel Layer (_kernel).

This is a private package holding the numeric kernels and the machinery
that routes them over numbers, vectors and matrices.

Architecture:
    - Kernels work on flat storage arrays with explicit size, offset and
      stride, close to the BLAS calling convention
    - A generic dispatch engine walks views and calls kernels per run
    - Declarative parameter descriptors replace per-operation parsing

Modules:
    - lib_loader: External BLAS/LAPACK routine facade
    - params: Parameter descriptors and resolver
    - dispatch: Elementary, unary and binary dispatch engine
    - elementary: In-place element-wise kernels
    - unary: Reduction kernels
    - binary: Two-operand kernels
    - random: SFC64 random state (numpy.random)

Usage (Internal only):
    >>> from linear._kernel import dispatch, elementary
    >>> dispatch.elementary(elementary.scal, SCAL_PARAMS, x, (2.0,), {})
"""

from . import lib_loader
from . import random
from . import params
from . import elementary
from . import unary
from . import binary
from . import dispatch
