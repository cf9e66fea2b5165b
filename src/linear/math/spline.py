"""
Cubic Spline Interpolation.

``spline(x, y, ...)`` fits one cubic polynomial per knot interval,

    S_i(t) = a_i + b_i (t - x_i) + c_i (t - x_i)^2 + d_i (t - x_i)^3

with continuous first and second derivatives at the inner knots. The
second-derivative coefficients ``c`` solve a tridiagonal system (external
``dgtsv``) whose first and last rows encode the boundary condition:

    - not-a-knot: third derivative continuous at the second and
      second-to-last knots (needs at least 4 knots)
    - natural: zero second derivative at both ends
    - clamped: given first derivatives ``da`` and ``db`` at the ends

Evaluation outside the knots follows the extrapolation mode: ``"none"``
raises, ``"const"`` holds the end values, ``"linear"`` continues along the
end slopes and ``"cubic"`` extends the end polynomials.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .._kernel.params import Param, ParamKind, resolve
from .._typing import ensure_number, ensure_vector
from ..core.config import get_library
from ..core.error import ArgumentError, DimensionError, InternalError, RangeError
from ..core.views import VectorView

__all__ = ["spline", "Spline"]


SPLINE = (
    Param("boundary", ParamKind.ENUM, "not-a-knot", ("not-a-knot", "natural", "clamped")),
    Param("extrapolation", ParamKind.ENUM, "none", ("none", "const", "linear", "cubic")),
    Param("da", ParamKind.NUMBER),
    Param("db", ParamKind.NUMBER),
)


class Spline:
    """
    Piecewise cubic interpolant.

    Calling the instance evaluates it at one point.

    Attributes:
        knots: Knot positions (n + 1)
        a, b, c, d: Polynomial coefficients (a has n + 1 entries, the others n)
        extrapolation: Extrapolation mode
    """

    __slots__ = ("knots", "a", "b", "c", "d", "extrapolation")

    def __init__(self, knots, a, b, c, d, extrapolation: str = "none"):
        self.knots = knots
        self.a = a
        self.b = b
        self.c = c
        self.d = d
        self.extrapolation = extrapolation

    @property
    def intervals(self) -> int:
        """Number of polynomials."""
        return len(self.b)

    def _poly(self, i: int, t: float) -> float:
        t -= self.knots[i]
        return float(((self.d[i] * t + self.c[i]) * t + self.b[i]) * t + self.a[i])

    def __call__(self, t) -> float:
        t = ensure_number(t, "t")
        n = self.intervals
        first, last = float(self.knots[0]), float(self.knots[n])
        if first <= t <= last:
            i = min(int(np.searchsorted(self.knots, t, side="right")) - 1, n - 1)
            return self._poly(i, t)
        if t < first:
            mode = self.extrapolation
            if mode == "none":
                raise RangeError(f"too small: {t} (first knot {first})")
            if mode == "const":
                return float(self.a[0])
            if mode == "linear":
                return float(self.b[0] * (t - first) + self.a[0])
            return self._poly(0, t)
        if t > last:
            mode = self.extrapolation
            if mode == "none":
                raise RangeError(f"too large: {t} (last knot {last})")
            if mode == "const":
                return float(self.a[n])
            if mode == "linear":
                return float(self.b[n - 1] * (t - last) + self.a[n])
            return self._poly(n - 1, t)
        raise ArgumentError("bad value: NaN")

    def __repr__(self) -> str:
        return (
            f"Spline(intervals={self.intervals}, knots=[{float(self.knots[0])}, "
            f"{float(self.knots[-1])}], extrapolation={self.extrapolation!r})"
        )


def spline(
    x: VectorView,
    y: VectorView,
    boundary: Optional[str] = None,
    extrapolation: Optional[str] = None,
    da=None,
    db=None,
) -> Spline:
    """
    Fit a cubic spline through the points ``(x[i], y[i])``.

    Args:
        x: Strictly increasing knots
        y: Values at the knots, same length as x
        boundary: ``"not-a-knot"`` (default), ``"natural"`` or ``"clamped"``
        extrapolation: ``"none"`` (default), ``"const"``, ``"linear"`` or
            ``"cubic"``
        da: First derivative at the first knot (clamped only, required)
        db: First derivative at the last knot (clamped only, required)

    Returns:
        Callable interpolant

    Raises:
        ArgumentError: Too few knots, knots not strictly increasing, or
            missing clamped derivatives
        InternalError: If the tridiagonal solver fails

    Example:
        >>> s = linear.spline(x, y, "natural", "linear")
        >>> s(0.5)
    """
    ensure_vector(x, "x")
    ensure_vector(y, "y")
    boundary, extrapolation, da, db = resolve(
        SPLINE, (boundary, extrapolation, da, db), {}
    )
    if boundary == "clamped":
        if da is None or db is None:
            raise ArgumentError("clamped boundary requires da and db")
    minimum = 4 if boundary == "not-a-knot" else 3
    if x.length < minimum:
        raise ArgumentError(f"bad dimension {x.length} (at least {minimum} knots expected)")
    if x.length != y.length:
        raise DimensionError(f"dimension mismatch: x has length {x.length}, y has {y.length}")

    knots = np.array(x.values)
    a = np.array(y.values)
    n = knots.size - 1
    h = np.diff(knots)
    if not np.all(h > 0.0):
        raise ArgumentError("bad order: knots must be strictly increasing")

    slopes = np.diff(a) / h
    dl = np.empty(n)
    d = np.empty(n + 1)
    du = np.empty(n)
    rhs = np.empty(n + 1)
    dl[:n - 1] = h[:-1]
    d[1:n] = 2.0 * (h[:-1] + h[1:])
    du[1:] = h[1:]
    rhs[1:n] = 3.0 * (slopes[1:] - slopes[:-1])

    if boundary == "not-a-knot":
        d[0] = h[0] - h[1] * h[1] / h[0]
        du[0] = 3.0 * h[1] + 2.0 * h[0] + h[1] * h[1] / h[0]
        rhs[0] = 3.0 * (slopes[1] - slopes[0])
        dl[n - 1] = 3.0 * h[n - 2] + 2.0 * h[n - 1] + h[n - 2] * h[n - 2] / h[n - 1]
        d[n] = h[n - 1] - h[n - 2] * h[n - 2] / h[n - 1]
        rhs[n] = 3.0 * (slopes[n - 1] - slopes[n - 2])
    elif boundary == "natural":
        d[0], du[0], rhs[0] = 1.0, 0.0, 0.0
        dl[n - 1], d[n], rhs[n] = 0.0, 1.0, 0.0
    else:
        d[0], du[0] = 2.0 * h[0], h[0]
        rhs[0] = 3.0 * (slopes[0] - da)
        dl[n - 1], d[n] = h[n - 1], 2.0 * h[n - 1]
        rhs[n] = 3.0 * (db - slopes[n - 1])

    _, _, _, c, info = get_library().dgtsv(dl, d, du, rhs.reshape(-1, 1))
    if info != 0:
        raise InternalError(f"dgtsv: tridiagonal solve failed (info={info})")
    c = c.ravel()

    b = slopes - (2.0 * c[:-1] + c[1:]) * h / 3.0
    dd = (c[1:] - c[:-1]) / (3.0 * h)
    return Spline(knots, a, b, c[:-1].copy(), dd, extrapolation)
