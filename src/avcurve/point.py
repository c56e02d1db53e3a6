"""Point and distance capabilities required from the values a curve interpolates.

A point is anything that can be added to another point and scaled by a float.
Plain numbers and numpy arrays qualify out of the box; tuples and lists of
numbers are turned into numpy arrays by :func:`as_point`. Custom types (colors,
quaternions, ...) only need ``__add__`` and ``__mul__``. Linear speed
reparametrization additionally needs a distance function between two points.
"""

from __future__ import annotations

from numbers import Real
from typing import Any, Callable, Protocol, TypeVar

import numpy as np


class VectorLike(Protocol):
    """Protocol for values usable as curve points.

    Only vector addition and scaling by a scalar are required; subtraction,
    interpolation and the zero vector are derived from these two.
    """

    def __add__(self, other: Any) -> Any:
        """Vector addition of two points."""

    def __mul__(self, scalar: float) -> Any:
        """Scale the point by a scalar."""


P = TypeVar("P", bound=VectorLike)

DistanceFn = Callable[[Any, Any], float]


def as_point(value: Any) -> Any:
    """Normalize a caller supplied point.

    Tuples and lists become read-only ``float64`` numpy arrays, numpy arrays are
    copied to a read-only ``float64`` array, Python numbers become ``float``.
    Everything else is returned unchanged and must satisfy :class:`VectorLike`.
    """
    if isinstance(value, (tuple, list, np.ndarray)):
        arr = np.array(value, dtype=np.float64)
        arr.setflags(write=False)
        return arr
    if isinstance(value, Real):
        return float(value)
    return value


def difference(a: Any, b: Any) -> Any:
    """Return ``a - b`` using only addition and scaling."""
    return a + b * -1.0


def lerp(a: Any, b: Any, t: float) -> Any:
    """Linear interpolation between ``a`` (t=0) and ``b`` (t=1).

    The result is an offset from the nearer end point, so both ends are exact
    and two equal points give that point for every t.
    """
    if t <= 0.5:
        return a + difference(b, a) * t
    return b + difference(a, b) * (1.0 - t)


def zero_like(point: Any) -> Any:
    """Zero vector of the same type (and shape) as ``point``."""
    return point * 0.0


def points_equal(a: Any, b: Any) -> bool:
    """Exact equality of two points, also for numpy arrays."""
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return bool(np.array_equal(a, b))
    return bool(a == b)


def euclidean_distance(a: Any, b: Any) -> float:
    """Euclidean distance between two points.

    Works for scalars and numpy arrays of any dimension, and for custom point
    types whose difference converts to a numeric numpy array.
    """
    diff = np.asarray(difference(a, b), dtype=np.float64)
    return float(np.sqrt(np.sum(diff * diff)))
