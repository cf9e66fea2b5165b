"""
Global configuration for linear.

Provides:
- Default storage order for new matrices and order-directed operations
- The default random state used when no handle is passed
- Lazy loading of the external dense-algebra library

Environment:
    LINEAR_ORDER: ``row`` or ``col``, initial default order
    LINEAR_SEED: integer seed for the default random state
"""

from __future__ import annotations

import logging
import os
import time
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from .error import ArgumentError

if TYPE_CHECKING:
    from .._kernel.lib_loader import Library
    from .._kernel.random import RandomState


logger = logging.getLogger("linear.config")


# =============================================================================
# Storage Order
# =============================================================================

class Order(str, Enum):
    """Matrix storage order."""
    ROW = "row"
    COL = "col"

    @classmethod
    def parse(cls, value: Union["Order", str]) -> "Order":
        """Convert ``"row"``/``"col"`` (or an Order) to an Order."""
        if isinstance(value, Order):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise ArgumentError(f"bad order {value!r} (expected 'row' or 'col')")


# =============================================================================
# Global Configuration State
# =============================================================================

class _Config:
    """
    Global configuration singleton.

    Manages the default order, the default random state and lazy library
    loading.
    """

    def __init__(self):
        self._default_order = Order.parse(os.environ.get("LINEAR_ORDER", "row"))
        self._random_state: Optional["RandomState"] = None
        self._library: Optional["Library"] = None

    @property
    def default_order(self) -> Order:
        """Get default storage order."""
        return self._default_order

    @default_order.setter
    def default_order(self, value: Union[Order, str]):
        """Set default storage order."""
        self._default_order = Order.parse(value)

    @property
    def random_state(self) -> "RandomState":
        """
        Get the default random state (created on first use).

        Seeded from ``LINEAR_SEED`` when set, otherwise from the clock.

        Raises:
            ArgumentError: If ``LINEAR_SEED`` is not an integer
        """
        if self._random_state is None:
            from .._kernel.random import RandomState
            env_seed = os.environ.get("LINEAR_SEED")
            if env_seed:
                try:
                    seed = int(env_seed)
                except ValueError:
                    raise ArgumentError(
                        f"bad LINEAR_SEED {env_seed!r} (integer expected)"
                    ) from None
            else:
                seed = time.time_ns()
            logger.debug("Seeding default random state with %d", seed)
            self._random_state = RandomState(seed)
        return self._random_state

    def get_library(self) -> "Library":
        """
        Get the external dense-algebra library (lazy loaded).

        Returns:
            Library instance
        """
        if self._library is None:
            from .._kernel.lib_loader import Library
            self._library = Library()
        return self._library


# Global config instance
_config = _Config()


# =============================================================================
# Public API
# =============================================================================

def get_config() -> _Config:
    """Get global configuration instance."""
    return _config


def set_default_order(order: Union[Order, str]) -> None:
    """
    Set the default storage order.

    Args:
        order: ``"row"`` or ``"col"``

    Example:
        >>> linear.set_default_order("col")
        >>> linear.size(linear.matrix(2, 3))
        (2, 3, 'col')
    """
    _config.default_order = order


def get_default_order() -> Order:
    """Get the default storage order."""
    return _config.default_order


def get_library() -> "Library":
    """Get the external dense-algebra library (lazy loaded)."""
    return _config.get_library()


def get_random_state() -> "RandomState":
    """Get the default random state."""
    return _config.random_state


__all__ = [
    "Order",
    "get_config",
    "set_default_order",
    "get_default_order",
    "get_library",
    "get_random_state",
]
