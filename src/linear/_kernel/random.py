"""Random state for uniform and normal fills.

Wraps a numpy ``Generator`` over the SFC64 bit generator (4 x 64-bit
state), seeded through a ``SeedSequence``. A RandomState is an explicit
handle: the elementary ``uniform``/``normal`` operations draw from the
handle they are given, or from the default state held by the global
configuration.

Example:
    >>> rng = RandomState(42)
    >>> x = linear.vector(3)
    >>> linear.uniform(x, rng)
"""

from __future__ import annotations

import math
import numbers
import time

import numpy as np

from ..core.error import ArgumentError

__all__ = ["RandomState"]


_MASK = 0xFFFFFFFFFFFFFFFF


def _seed_word(seed) -> int:
    if isinstance(seed, bool) or not isinstance(seed, numbers.Real):
        raise ArgumentError(f"number expected as seed, got {type(seed).__name__}")
    if not math.isfinite(seed):
        raise ArgumentError(f"bad seed {seed}")
    return int(seed) & _MASK


class RandomState:
    """
    SFC64 random state.

    Attributes:
        _bitgen: The SFC64 bit generator
        _gen: Generator drawing from ``_bitgen``
    """

    __slots__ = ("_bitgen", "_gen")

    def __init__(self, seed1=None, seed2=None):
        self.seed(seed1, seed2)

    def seed(self, seed1=None, seed2=None) -> None:
        """
        Reseed deterministically.

        Args:
            seed1: Primary seed; ``None`` seeds from the clock.
            seed2: Optional secondary seed mixed into the entropy.
        """
        entropy = [time.time_ns() & _MASK if seed1 is None else _seed_word(seed1)]
        if seed2 is not None:
            entropy.append(_seed_word(seed2))
        self._bitgen = np.random.SFC64(np.random.SeedSequence(entropy))
        self._gen = np.random.Generator(self._bitgen)

    @property
    def state(self) -> tuple:
        """Snapshot of the four state words."""
        return tuple(int(word) for word in self._bitgen.state["state"]["state"])

    def next_uint64(self) -> int:
        """Advance the state and return the next 64-bit output."""
        return int(self._bitgen.random_raw())

    def uniform(self) -> float:
        """Uniform draw in [0, 1) with 53 bits of precision."""
        return float(self._gen.random())

    def uniforms(self, n: int) -> np.ndarray:
        """Array of ``n`` uniform draws."""
        return self._gen.random(n)

    def normals(self, n: int) -> np.ndarray:
        """
        Array of ``n`` standard normal draws (Box-Muller).

        Draws come in cosine/sine pairs; an odd tail uses the cosine branch
        of one more pair.
        """
        pairs = (n + 1) // 2
        u = self._gen.random(2 * pairs).reshape(pairs, 2)
        r = np.sqrt(-2.0 * np.log1p(-u[:, 0]))
        theta = 2.0 * np.pi * u[:, 1]
        out = np.empty((pairs, 2), dtype=np.float64)
        np.multiply(r, np.cos(theta), out=out[:, 0])
        np.multiply(r, np.sin(theta), out=out[:, 1])
        return out.reshape(-1)[:n].copy()

    def __repr__(self) -> str:
        return f"RandomState(state={self.state[0]:#018x}...)"
