"""
Linear Core: buffers, views, configuration and errors.

Architecture:
    ┌──────────────────────────────────────────────┐
    │     VectorView / MatrixView (descriptors)    │
    ├──────────────────────────────────────────────┤
    │  Buffer: reference-counted float64 storage   │
    └──────────────────────────────────────────────┘

Every view holds one counted reference to its buffer; the storage is freed
when the last view is released.
"""

from .error import (
    LinearError,
    ArgumentError,
    DimensionError,
    RangeError,
    BoundsError,
    OperandTypeError,
    ReleasedError,
    AllocationError,
    InternalError,
    check_info,
)
from .config import (
    Order,
    get_config,
    set_default_order,
    get_default_order,
    get_library,
    get_random_state,
)
from .buffer import Buffer
from .views import VectorView, MatrixView

__all__ = [
    "LinearError",
    "ArgumentError",
    "DimensionError",
    "RangeError",
    "BoundsError",
    "OperandTypeError",
    "ReleasedError",
    "AllocationError",
    "InternalError",
    "check_info",
    "Order",
    "get_config",
    "set_default_order",
    "get_default_order",
    "get_library",
    "get_random_state",
    "Buffer",
    "VectorView",
    "MatrixView",
]
