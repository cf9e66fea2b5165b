"""Buffer Ownership and Reference Counting.

A Buffer is the sole owner of a flat float64 storage array. Views never own
storage; each view holds one counted reference to the buffer it exposes.

Key Concepts:
    - Reference Count: starts at 1 for the creating view, incremented by
      every derived view, decremented when a view is released.
    - Release: when the count reaches zero the storage is dropped and any
      further access raises ``ReleasedError``.
    - Exclusive Resize: only a buffer with a single reference may change
      its size (used while a freshly created vector is being filled).

Example:
    >>> buf = Buffer(6)          # refs == 1
    >>> buf.retain()             # derived view, refs == 2
    >>> buf.release()            # refs == 1
    >>> buf.release()            # refs == 0, storage dropped
    >>> buf.alive
    False
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .error import AllocationError, ArgumentError, ReleasedError

__all__ = [
    "Buffer",
]


logger = logging.getLogger("linear.buffer")


class Buffer:
    """Reference-counted flat array of doubles.

    Attributes:
        _storage: Contiguous float64 array, ``None`` once released.
        _refs: Number of live references.
    """

    __slots__ = ("_storage", "_refs", "__weakref__")

    def __init__(self, size: int):
        """Allocate zero-filled storage of ``size`` elements with one reference.

        Args:
            size: Number of elements.

        Raises:
            AllocationError: If the storage cannot be allocated.
        """
        self._storage: Optional[np.ndarray] = _allocate(size)
        self._refs = 1

    @classmethod
    def from_values(cls, values) -> "Buffer":
        """Create a buffer holding a copy of ``values`` (flattened)."""
        flat = np.asarray(values, dtype=np.float64).ravel()
        buf = cls(flat.size)
        buf._storage[:] = flat
        return buf

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def storage(self) -> np.ndarray:
        """Backing array.

        Raises:
            ReleasedError: If the last reference was already released.
        """
        if self._storage is None:
            raise ReleasedError("buffer has been released")
        return self._storage

    @property
    def refs(self) -> int:
        """Number of live references."""
        return self._refs

    @property
    def alive(self) -> bool:
        """Whether storage is still held."""
        return self._storage is not None

    @property
    def size(self) -> int:
        """Number of elements (0 once released)."""
        return 0 if self._storage is None else self._storage.size

    # -------------------------------------------------------------------------
    # Reference Management
    # -------------------------------------------------------------------------

    def retain(self) -> "Buffer":
        """Add a reference for a derived view."""
        if self._storage is None:
            raise ReleasedError("cannot derive a view from a released buffer")
        self._refs += 1
        return self

    def release(self) -> None:
        """Drop one reference; frees storage when none remain."""
        if self._refs == 0:
            return
        self._refs -= 1
        if self._refs == 0:
            logger.debug("Releasing buffer of %d elements", self._storage.size)
            self._storage = None

    def resize(self, size: int) -> None:
        """Change the storage size, keeping the leading elements.

        Only allowed while the buffer has a single reference.

        Raises:
            ArgumentError: If the buffer is shared or size is not positive.
        """
        storage = self.storage
        if self._refs != 1:
            raise ArgumentError(f"cannot resize a buffer with {self._refs} references")
        if size < 1:
            raise ArgumentError(f"bad size {size}")
        if size == storage.size:
            return
        resized = _allocate(size)
        keep = min(size, storage.size)
        resized[:keep] = storage[:keep]
        self._storage = resized

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Buffer(size={self.size}, refs={self._refs})"


def _allocate(size: int) -> np.ndarray:
    try:
        return np.zeros(size, dtype=np.float64)
    except MemoryError as e:
        raise AllocationError(f"cannot allocate {size} values") from e
