"""
Vector and matrix views over reference-counted buffers.

A view is a (shape, stride, offset, buffer) descriptor. Creating a view
allocates a fresh Buffer; deriving a view (sub-range, major vector,
transposed vector) shares the parent's Buffer and adds a reference to it.
Views never copy storage.

Positions are 0-based and ranges half-open, as in Python slicing. Every
derived view is bounds-checked once, at construction.

Example:
    >>> x = VectorView.create(4)
    >>> head = x[0:2]            # shares x's buffer
    >>> head[1] = 5.0
    >>> x[1]
    5.0
    >>> with linear.matrix(2, 3) as A:
    ...     A[1, 2] = 1.0
"""

from __future__ import annotations

import numbers
from typing import Iterator, Optional, Tuple, Union

import numpy as np
from numpy.lib.stride_tricks import as_strided

from .buffer import Buffer
from .config import Order, get_default_order
from .error import ArgumentError, BoundsError, DimensionError, OperandTypeError, ReleasedError

__all__ = [
    "VectorView",
    "MatrixView",
    "normalize_index",
    "normalize_range",
]


# =============================================================================
# Index Helpers
# =============================================================================

def normalize_index(index, extent: int) -> int:
    """
    Validate a position against an extent.

    Negative positions count from the end.

    Raises:
        OperandTypeError: If index is not an integer
        BoundsError: If index is out of range
    """
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        raise OperandTypeError(f"integer index expected, got {type(index).__name__}")
    i = int(index)
    if i < 0:
        i += extent
    if not 0 <= i < extent:
        raise BoundsError(f"index {index} out of range for extent {extent}")
    return i


def normalize_range(start: Optional[int], end: Optional[int], extent: int) -> Tuple[int, int]:
    """
    Validate a half-open range ``[start, end)`` against an extent.

    ``None`` selects the beginning / end; negative values count from the end.
    The range must be non-empty.

    Raises:
        OperandTypeError: If a bound is not an integer
        BoundsError: If the range is empty or exceeds the extent
    """
    for bound in (start, end):
        if bound is not None and (
            isinstance(bound, bool) or not isinstance(bound, numbers.Integral)
        ):
            raise OperandTypeError(f"integer bound expected, got {type(bound).__name__}")
    lo = 0 if start is None else int(start)
    hi = extent if end is None else int(end)
    if lo < 0:
        lo += extent
    if hi < 0:
        hi += extent
    if not 0 <= lo < hi <= extent:
        raise BoundsError(f"bad range [{start}, {end}) for extent {extent}")
    return lo, hi


# =============================================================================
# Base
# =============================================================================

class _ViewBase:
    """
    Common lifetime handling for views.

    A view holds exactly one counted reference to its buffer and gives it
    back on ``release()``, on leaving a ``with`` block, or when collected.
    """

    __slots__ = ()

    def __del__(self):
        if not getattr(self, "_released", True):
            self.release()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

    def release(self) -> None:
        """
        Release this view's buffer reference.

        The buffer's storage is freed when its last view is released.
        Releasing twice is a no-op.
        """
        if not self._released:
            self._released = True
            self._buffer.release()

    @property
    def released(self) -> bool:
        """Whether this view has been released."""
        return self._released

    @property
    def buffer(self) -> Buffer:
        """The shared buffer."""
        return self._buffer

    @property
    def storage(self) -> np.ndarray:
        """
        Flat backing array of the buffer.

        Raises:
            ReleasedError: If the view or its buffer has been released
        """
        return self._live_buffer().storage

    def _live_buffer(self) -> Buffer:
        if self._released:
            raise ReleasedError("view has been released")
        return self._buffer


# =============================================================================
# Vector
# =============================================================================

class VectorView(_ViewBase):
    """
    Strided vector over a Buffer.

    Element ``i`` lives at ``storage[offset + i * inc]``.
    """

    __slots__ = ("_buffer", "_length", "_inc", "_offset", "_released")

    def __init__(self, buffer: Buffer, length: int, inc: int = 1, offset: int = 0):
        """
        Wrap a buffer reference already counted for this view.

        Internal constructor - use ``create()`` or ``derive()``.
        """
        self._buffer = buffer
        self._length = length
        self._inc = inc
        self._offset = offset
        self._released = False

    @classmethod
    def create(cls, length: int) -> "VectorView":
        """Allocate a zero-filled vector with its own buffer."""
        if isinstance(length, bool) or not isinstance(length, numbers.Integral):
            raise OperandTypeError(f"integer length expected, got {type(length).__name__}")
        if length < 1:
            raise ArgumentError(f"bad dimension {length}")
        return cls(Buffer(int(length)), int(length))

    @classmethod
    def derive(cls, buffer: Buffer, length: int, inc: int, offset: int) -> "VectorView":
        """
        Create a view sharing ``buffer``.

        Raises:
            BoundsError: If any element would fall outside the buffer
        """
        size = buffer.storage.size
        if length < 1 or inc < 1 or offset < 0 or offset + (length - 1) * inc >= size:
            raise BoundsError(
                f"vector view (length={length}, inc={inc}, offset={offset}) "
                f"exceeds buffer of {size} elements"
            )
        return cls(buffer.retain(), length, inc, offset)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def length(self) -> int:
        return self._length

    @property
    def inc(self) -> int:
        """Stride between consecutive elements."""
        return self._inc

    @property
    def offset(self) -> int:
        """Position of element 0 in the buffer."""
        return self._offset

    @property
    def values(self) -> np.ndarray:
        """Zero-copy numpy view of the elements."""
        end = self._offset + (self._length - 1) * self._inc + 1
        return self.storage[self._offset:end:self._inc]

    # =========================================================================
    # Sequence Protocol
    # =========================================================================

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, key: Union[int, slice]) -> Union[float, "VectorView"]:
        if isinstance(key, slice):
            return self._slice(key)
        i = normalize_index(key, self._length)
        return float(self.storage[self._offset + i * self._inc])

    def __setitem__(self, key: Union[int, slice], value) -> None:
        if isinstance(key, slice):
            target = self.values[key]
            target[...] = _to_slice_values(value, target.shape)
            return
        i = normalize_index(key, self._length)
        self.storage[self._offset + i * self._inc] = _to_float(value)

    def __iter__(self) -> Iterator[float]:
        storage = self.storage
        for i in range(self._length):
            yield float(storage[self._offset + i * self._inc])

    def _slice(self, key: slice) -> "VectorView":
        start, stop, step = key.indices(self._length)
        if step < 1:
            raise ArgumentError("vector slices require a positive step")
        count = len(range(start, stop, step))
        if count == 0:
            raise BoundsError(f"empty slice of vector with length {self._length}")
        return VectorView.derive(
            self._live_buffer(), count, self._inc * step, self._offset + start * self._inc
        )

    def __repr__(self) -> str:
        if self._released:
            return f"VectorView(length={self._length}, released)"
        return f"VectorView({self.values.tolist()})"


# =============================================================================
# Matrix
# =============================================================================

class MatrixView(_ViewBase):
    """
    Matrix over a Buffer in row-major or column-major order.

    The major index selects a row (row-major) or column (col-major); major
    vectors are ``ld`` elements apart and contiguous inside.
    """

    __slots__ = ("_buffer", "_rows", "_cols", "_ld", "_order", "_offset", "_released")

    def __init__(
        self,
        buffer: Buffer,
        rows: int,
        cols: int,
        ld: int,
        order: Order,
        offset: int = 0,
    ):
        """
        Wrap a buffer reference already counted for this view.

        Internal constructor - use ``create()`` or ``derive()``.
        """
        self._buffer = buffer
        self._rows = rows
        self._cols = cols
        self._ld = ld
        self._order = order
        self._offset = offset
        self._released = False

    @classmethod
    def create(
        cls,
        rows: int,
        cols: int,
        order: Optional[Union[Order, str]] = None,
    ) -> "MatrixView":
        """Allocate a zero-filled, fully packed matrix with its own buffer."""
        for extent in (rows, cols):
            if isinstance(extent, bool) or not isinstance(extent, numbers.Integral):
                raise OperandTypeError(f"integer dimension expected, got {type(extent).__name__}")
            if extent < 1:
                raise ArgumentError(f"bad dimension {extent}")
        order = get_default_order() if order is None else Order.parse(order)
        rows, cols = int(rows), int(cols)
        ld = cols if order is Order.ROW else rows
        return cls(Buffer(rows * cols), rows, cols, ld, order)

    @classmethod
    def derive(
        cls,
        buffer: Buffer,
        rows: int,
        cols: int,
        ld: int,
        order: Order,
        offset: int,
    ) -> "MatrixView":
        """
        Create a view sharing ``buffer``.

        Raises:
            BoundsError: If any element would fall outside the buffer
        """
        size = buffer.storage.size
        major, minor = (rows, cols) if order is Order.ROW else (cols, rows)
        if (rows < 1 or cols < 1 or ld < minor or offset < 0
                or offset + (major - 1) * ld + minor > size):
            raise BoundsError(
                f"matrix view ({rows}x{cols}, ld={ld}, offset={offset}) "
                f"exceeds buffer of {size} elements"
            )
        return cls(buffer.retain(), rows, cols, ld, order, offset)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def ld(self) -> int:
        """Leading dimension: distance between major vectors."""
        return self._ld

    @property
    def order(self) -> Order:
        return self._order

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def major(self) -> int:
        """Number of major vectors (rows if row-major, else cols)."""
        return self._rows if self._order is Order.ROW else self._cols

    @property
    def minor(self) -> int:
        """Length of each major vector."""
        return self._cols if self._order is Order.ROW else self._rows

    @property
    def packed(self) -> bool:
        """Whether major vectors are adjacent (no gaps between them)."""
        return self._ld == self.minor

    @property
    def array(self) -> np.ndarray:
        """Zero-copy numpy view with logical shape ``(rows, cols)``."""
        storage = self.storage
        item = storage.itemsize
        if self._order is Order.ROW:
            strides = (self._ld * item, item)
        else:
            strides = (item, self._ld * item)
        return as_strided(storage[self._offset:], shape=self.shape, strides=strides)

    def address(self, row: int, col: int) -> int:
        """Buffer position of the logical element ``(row, col)``."""
        if self._order is Order.ROW:
            return self._offset + row * self._ld + col
        return self._offset + col * self._ld + row

    # =========================================================================
    # Sequence Protocol
    # =========================================================================

    def __len__(self) -> int:
        return self.major

    def __getitem__(self, key) -> Union[float, VectorView]:
        """
        ``A[i]`` is the i-th major vector (a derived view);
        ``A[i, j]`` the logical element at row ``i``, column ``j``.
        """
        if isinstance(key, tuple):
            return float(self.storage[self._element(key)])
        i = normalize_index(key, self.major)
        return VectorView.derive(self._live_buffer(), self.minor, 1, self._offset + i * self._ld)

    def __setitem__(self, key, value) -> None:
        if not isinstance(key, tuple):
            raise OperandTypeError("matrix elements are assigned by (row, col)")
        self.storage[self._element(key)] = _to_float(value)

    def __iter__(self) -> Iterator[VectorView]:
        for i in range(self.major):
            yield self[i]

    def _element(self, key: tuple) -> int:
        if len(key) != 2:
            raise OperandTypeError("matrix elements are addressed by (row, col)")
        row = normalize_index(key[0], self._rows)
        col = normalize_index(key[1], self._cols)
        return self.address(row, col)

    def __repr__(self) -> str:
        if self._released:
            return f"MatrixView({self._rows}x{self._cols}, {self._order.value}, released)"
        return f"MatrixView({self.array.tolist()}, order={self._order.value!r})"


def _to_float(value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise OperandTypeError(f"number expected, got {type(value).__name__}")
    return float(value)


def _to_slice_values(value, shape):
    """Number or sequence of numbers to assign over a slice of ``shape``."""
    if isinstance(value, VectorView):
        value = value.values
    elif isinstance(value, numbers.Real):
        return _to_float(value)
    try:
        data = np.asarray(value)
    except ValueError:
        raise OperandTypeError("ragged sequence assigned to slice") from None
    if data.dtype.kind not in "iuf":
        raise OperandTypeError(f"numbers expected, got {data.dtype} values")
    if data.shape != shape:
        raise DimensionError(f"cannot assign {data.shape} values to slice of {shape}")
    return data
