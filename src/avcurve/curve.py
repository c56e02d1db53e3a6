"""Curve facade and the single-segment Bezier variants.

Every curve maps a parameter ``t`` in [0, 1] to a point. The variants are
:class:`FixedPoint`, :class:`Line`, :class:`QuadraticBezier`,
:class:`CubicBezier`, ``avcurve.composed.ComposedCurve`` and
``avcurve.linear_speed.LinearSpeedCurve``. All of them are immutable; the
transforms on :class:`Curve` always return new curve values.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, Iterator, Tuple

import numpy as np
from numpy.typing import NDArray

from avcurve.bezier import BezierCurve
from avcurve.consts import DEFAULT_LENGTH_PRECISION, DEFAULT_STEPS_COUNT, DEFAULT_TABLE_SIZE
from avcurve.point import DistanceFn, P, as_point, euclidean_distance

if TYPE_CHECKING:
    from avcurve.composed import ComposedCurveBuilder
    from avcurve.linear_speed import LinearSpeedCurve


###############################################################################
# Curve
###############################################################################
class Curve(ABC, Generic[P]):
    """Parametric curve mapping ``t`` in [0, 1] to a point."""

    @abstractmethod
    def point_at(self, t: float) -> P:
        """Return the point at parameter ``t``."""

    @abstractmethod
    def tangent_at(self, t: float) -> P:
        """Return the (unnormalized) derivative at parameter ``t``."""

    def start_point(self) -> P:
        """The point at t=0."""
        return self.point_at(0.0)

    def end_point(self) -> P:
        """The point at t=1."""
        return self.point_at(1.0)

    @abstractmethod
    def estimate_length(
        self, precision: float = DEFAULT_LENGTH_PRECISION, distance: DistanceFn = euclidean_distance
    ) -> float:
        """
        Estimate the arc length of the curve.

        Args:
            precision: Accepted relative difference between the lower (chord) and
                upper (control polygon) length bound. ``math.inf`` stops after one step.
            distance: Distance function between two points

        Returns:
            The estimated length
        """

    def iter_points(self, steps_count: int, inclusive: bool = False) -> Iterator[P]:
        """
        Iterate over the points at t = i / steps_count.

        Args:
            steps_count: Number of steps the parameter range is divided into
            inclusive: If True, the end point (t=1) is yielded as well

        Yields:
            ``steps_count`` points, or ``steps_count + 1`` if inclusive
        """
        if steps_count < 1:
            raise ValueError(f"steps_count must be at least 1, got {steps_count}")
        last = steps_count + 1 if inclusive else steps_count
        for i in range(last):
            yield self.point_at(i / steps_count)

    def polygonize(self, steps: int) -> NDArray[np.float64]:
        """
        Sample the curve at ``steps + 1`` evenly spaced parameters, both ends included.

        The points must be convertible to a float64 array.

        Returns:
            NDArray of shape (steps+1,) for scalar points or (steps+1, d)
        """
        return np.array(list(self.iter_points(steps, inclusive=True)), dtype=np.float64)

    def linear_speed(
        self,
        table_size: int = DEFAULT_TABLE_SIZE,
        steps_count: int = DEFAULT_STEPS_COUNT,
        distance: DistanceFn = euclidean_distance,
    ) -> LinearSpeedCurve[P]:
        """
        Create a curve with the same path that moves with constant speed.

        The returned curve's parameter is the fraction of the arc length
        travelled. It is useful to animate a movement along a composed curve.

        Args:
            table_size: Number of entries of the inverse arc-length table,
                bigger means more precise
            steps_count: Number of samples used to measure the arc length,
                e.g. 3 samples the curve at 0.0, 0.5 and 1.0
            distance: Distance function between two points

        Returns:
            A new LinearSpeedCurve wrapping this curve
        """
        # pylint: disable=import-outside-toplevel
        from avcurve.linear_speed import LinearSpeedCurve

        return LinearSpeedCurve(self, table_size, steps_count, distance)

    ###########################################################################
    # Factories
    ###########################################################################

    @staticmethod
    def fixed(p0: Any) -> FixedPoint:
        """Create a curve that returns the same point for every ``t``."""
        return FixedPoint(p0)

    @staticmethod
    def line(p0: Any, p1: Any) -> Line:
        """Create a straight line from p0 to p1."""
        return Line(p0, p1)

    @staticmethod
    def quadratic(p0: Any, p1: Any, p2: Any) -> QuadraticBezier:
        """Create a quadratic Bezier curve."""
        return QuadraticBezier(p0, p1, p2)

    @staticmethod
    def cubic(p0: Any, p1: Any, p2: Any, p3: Any) -> CubicBezier:
        """Create a cubic Bezier curve."""
        return CubicBezier(p0, p1, p2, p3)

    @staticmethod
    def composed(start_point: Any) -> ComposedCurveBuilder:
        """
        Start a composed curve at ``start_point``.

        Each segment added to the returned builder covers an equal share of the
        parameter range: three segments take 0-1/3, 1/3-2/3 and 2/3-1.
        """
        # pylint: disable=import-outside-toplevel
        from avcurve.composed import ComposedCurveBuilder

        return ComposedCurveBuilder(start_point)


###############################################################################
# BezierSegment
###############################################################################
class BezierSegment(Curve[P]):
    """Bezier curve of a fixed order, holding ``order + 1`` control points.

    Parameters outside [0, 1] are not clamped, the polynomial is extrapolated.
    """

    ORDER: int = -1

    def __init__(self, *points: Any):
        if len(points) != self.ORDER + 1:
            raise ValueError(
                f"{type(self).__name__} needs {self.ORDER + 1} control points, got {len(points)}"
            )
        self._points: Tuple[P, ...] = tuple(as_point(p) for p in points)

    @property
    def control_points(self) -> Tuple[P, ...]:
        """The control points, first and last are on the curve."""
        return self._points

    @property
    def order(self) -> int:
        """Polynomial degree of the curve."""
        return self.ORDER

    def point_at(self, t: float) -> P:
        return BezierCurve.point_bernstein(self._points, t)

    def tangent_at(self, t: float) -> P:
        return BezierCurve.tangent(self._points, t)

    def start_point(self) -> P:
        return self._points[0]

    def end_point(self) -> P:
        return self._points[-1]

    def estimate_length(
        self, precision: float = DEFAULT_LENGTH_PRECISION, distance: DistanceFn = euclidean_distance
    ) -> float:
        return BezierCurve.estimate_length(self._points, precision, distance)

    def polygonize(self, steps: int) -> NDArray[np.float64]:
        if all(isinstance(p, (float, np.ndarray)) for p in self._points):
            return BezierCurve.sample(self._points, steps)
        return super().polygonize(steps)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(np.array_equal(a, b) for a, b in zip(self._points, other.control_points))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        points = ", ".join(repr(p.tolist() if isinstance(p, np.ndarray) else p) for p in self._points)
        return f"{type(self).__name__}({points})"


class FixedPoint(BezierSegment[P]):
    """Order 0: a single point, the tangent is the zero vector."""

    ORDER = 0

    def __init__(self, p0: Any):
        super().__init__(p0)


class Line(BezierSegment[P]):
    """Order 1: straight line, the tangent p1 - p0 is constant."""

    ORDER = 1

    def __init__(self, p0: Any, p1: Any):
        super().__init__(p0, p1)


class QuadraticBezier(BezierSegment[P]):
    """Order 2 Bezier curve."""

    ORDER = 2

    def __init__(self, p0: Any, p1: Any, p2: Any):
        super().__init__(p0, p1, p2)


class CubicBezier(BezierSegment[P]):
    """Order 3 Bezier curve."""

    ORDER = 3

    def __init__(self, p0: Any, p1: Any, p2: Any, p3: Any):
        super().__init__(p0, p1, p2, p3)
