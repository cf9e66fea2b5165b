"""Declarative parameter descriptors and their resolver.

Each operation declares its optional trailing parameters once, as an
ordered tuple of ``Param`` descriptors. ``resolve()`` matches them
left-to-right against the caller's positional values (then keywords by
name), fills defaults for absent values (``None``) and validates kinds.

Kinds:
    - NUMBER: any real number, converted to float
    - INTEGER: integral number, converted to int
    - ENUM: string from a fixed option set
    - DDOF: integer ``0 <= d < size`` where size is the operand length
    - RANDOM: RandomState handle; absent means the default state
    - CALLBACK: callable invoked per element

Example:
    >>> DDOF = (Param("ddof", ParamKind.DDOF, 0),)
    >>> resolve(DDOF, (1,), {}, size=3)
    (1,)
    >>> resolve(DDOF, (), {"ddof": 3}, size=3)
    Traceback (most recent call last):
    ...
    RangeError: bad ddof 3 (must be smaller than 3)
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Sequence, Tuple

from ..core.config import get_random_state
from ..core.error import ArgumentError, RangeError
from .random import RandomState

__all__ = [
    "ParamKind",
    "Param",
    "resolve",
    "split_leading",
    "NO_PARAMS",
]


class ParamKind(Enum):
    NUMBER = "number"
    INTEGER = "integer"
    ENUM = "enum"
    DDOF = "ddof"
    RANDOM = "random"
    CALLBACK = "callback"


@dataclass(frozen=True)
class Param:
    """Descriptor of one optional parameter.

    Attributes:
        name: Keyword name.
        kind: Value kind.
        default: Value used when the argument is absent. For CALLBACK a
            ``None`` default makes the parameter required.
        options: Admissible strings for ENUM parameters.
    """
    name: str
    kind: ParamKind
    default: Any = None
    options: Tuple[str, ...] = ()


NO_PARAMS: Tuple[Param, ...] = ()


def resolve(
    params: Sequence[Param],
    args: Sequence[Any],
    kwargs: Mapping[str, Any],
    size: int = 0,
) -> tuple:
    """
    Resolve caller values against descriptors.

    Args:
        params: Ordered descriptors
        args: Trailing positional values (``None`` means absent)
        kwargs: Keyword values, by descriptor name
        size: Operand length bounding DDOF parameters

    Returns:
        Tuple with one resolved value per descriptor

    Raises:
        ArgumentError: Too many values, unknown keyword or bad value
        RangeError: DDOF not smaller than size
    """
    if len(args) > len(params):
        raise ArgumentError(
            f"too many arguments: at most {len(params)} expected, got {len(args)}"
        )
    names = {p.name for p in params}
    for key in kwargs:
        if key not in names:
            raise ArgumentError(f"unexpected keyword argument {key!r}")

    resolved = []
    for i, param in enumerate(params):
        value = args[i] if i < len(args) else None
        if param.name in kwargs:
            if value is not None:
                raise ArgumentError(f"multiple values for argument {param.name!r}")
            value = kwargs[param.name]
        resolved.append(_resolve_one(param, value, size))
    return tuple(resolved)


def split_leading(
    names: Sequence[str],
    args: Sequence[Any],
    kwargs: Dict[str, Any],
) -> Tuple[list, tuple, Dict[str, Any]]:
    """
    Take leading positional slots (operands, order) before the descriptors.

    Returns:
        ``(leading values, remaining args, remaining kwargs)``; absent
        leading values are ``None``.
    """
    kwargs = dict(kwargs)
    leading = []
    for i, name in enumerate(names):
        value = args[i] if i < len(args) else None
        if name in kwargs:
            if value is not None:
                raise ArgumentError(f"multiple values for argument {name!r}")
            value = kwargs.pop(name)
        leading.append(value)
    return leading, tuple(args[len(names):]), kwargs


def _resolve_one(param: Param, value: Any, size: int) -> Any:
    kind = param.kind
    if kind is ParamKind.RANDOM:
        if value is None:
            return get_random_state()
        if not isinstance(value, RandomState):
            raise ArgumentError(
                f"{param.name}: RandomState expected, got {type(value).__name__}"
            )
        return value

    if kind is ParamKind.CALLBACK:
        if value is None:
            value = param.default
        if not callable(value):
            raise ArgumentError(f"{param.name}: callable expected")
        return value

    if value is None:
        return param.default

    if kind is ParamKind.NUMBER:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ArgumentError(f"{param.name}: number expected, got {type(value).__name__}")
        return float(value)

    if kind is ParamKind.ENUM:
        if not isinstance(value, str) or value not in param.options:
            choices = ", ".join(repr(o) for o in param.options)
            raise ArgumentError(f"{param.name}: invalid option {value!r} (expected one of {choices})")
        return value

    # INTEGER and DDOF
    integer = _as_integer(param.name, value)
    if kind is ParamKind.DDOF and not 0 <= integer < size:
        raise RangeError(f"bad ddof {integer} (must be smaller than {size})")
    return integer


def _as_integer(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ArgumentError(f"{name}: integer expected, got {type(value).__name__}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if not math.isfinite(value) or not float(value).is_integer():
        raise ArgumentError(f"{name}: integer expected, got {value!r}")
    return int(value)
