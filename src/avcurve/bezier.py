"""Bezier curve math on plain control point sequences.

The functions work on any point type satisfying ``avcurve.point.VectorLike``.
:meth:`BezierCurve.sample` is the vectorized NumPy path for array-convertible
control points.
"""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from avcurve.consts import MAX_LENGTH_SUBDIVISION_DEPTH
from avcurve.point import DistanceFn, difference, lerp, zero_like

# Highest supported Bezier order (cubic).
MAX_ORDER: int = 3


class BezierCurve:
    """Class to handle Bezier curve evaluation of order 0 (point) up to 3 (cubic).

    All methods are stateless and take the control points as a sequence of
    ``order + 1`` points.
    """

    @staticmethod
    def order_of(points: Sequence[Any]) -> int:
        """Return the order of the Bezier curve described by ``points``.

        Raises:
            ValueError: If there are no control points or more than four.
        """
        order = len(points) - 1
        if order < 0 or order > MAX_ORDER:
            raise ValueError(f"Bezier curves need 1 to {MAX_ORDER + 1} control points, got {len(points)}")
        return order

    @staticmethod
    def bernstein_weights(order: int, t: float) -> List[float]:
        """Return the ``order + 1`` Bernstein basis weights at ``t``."""
        omt = 1.0 - t
        if order == 0:
            return [1.0]
        if order == 1:
            return [omt, t]
        if order == 2:
            return [omt * omt, 2.0 * omt * t, t * t]
        omt2 = omt * omt
        t2 = t * t
        return [omt2 * omt, 3.0 * omt2 * t, 3.0 * omt * t2, t2 * t]

    @classmethod
    def point_bernstein(cls, points: Sequence[Any], t: float) -> Any:
        """
        Evaluate the curve at ``t`` using the closed-form Bernstein sum.

        B(t) = sum_i C(n, i) * (1-t)^(n-i) * t^i * P_i

        The sum is taken as offsets from the first control point for t <= 0.5
        and from the last one otherwise. The weights sum to 1, so this is the
        same polynomial, but B(0) and B(1) are exact and a curve whose control
        points are all equal evaluates to exactly that point.

        Args:
            points: Control points, 1 to 4 entries
            t: Curve parameter, values outside [0, 1] extrapolate

        Returns:
            The point on the curve
        """
        order = cls.order_of(points)
        if order == 0:
            return points[0]
        if order == 1:
            return lerp(points[0], points[1], t)

        weights = cls.bernstein_weights(order, t)
        anchor_index = 0 if t <= 0.5 else order
        anchor = points[anchor_index]
        result = anchor
        for i, (point, weight) in enumerate(zip(points, weights)):
            if i != anchor_index:
                result = result + difference(point, anchor) * weight
        return result

    @classmethod
    def de_casteljau(cls, points: Sequence[Any], t: float) -> Any:
        """
        Evaluate the curve at ``t`` by repeated linear interpolation.

        Numerically equivalent to :meth:`point_bernstein`.
        """
        cls.order_of(points)
        level: List[Any] = list(points)
        while len(level) > 1:
            level = [lerp(level[i], level[i + 1], t) for i in range(len(level) - 1)]
        return level[0]

    @classmethod
    def hodograph(cls, points: Sequence[Any]) -> List[Any]:
        """
        Return the control points of the derivative curve.

        The derivative of an order n Bezier is an order n-1 Bezier with the
        control points n * (P[i+1] - P[i]).
        """
        order = cls.order_of(points)
        return [difference(points[i + 1], points[i]) * float(order) for i in range(order)]

    @classmethod
    def tangent(cls, points: Sequence[Any], t: float) -> Any:
        """
        Evaluate the first derivative of the curve at ``t``.

        The result is not normalized: its magnitude is the speed of the curve at t.
        For a single point the zero vector is returned.
        """
        if cls.order_of(points) == 0:
            return zero_like(points[0])
        return cls.point_bernstein(cls.hodograph(points), t)

    @classmethod
    def split(cls, points: Sequence[Any], t: float = 0.5) -> Tuple[List[Any], List[Any]]:
        """
        Split the curve at ``t`` into two curves of the same order.

        Returns:
            Tuple of control points (left, right); left covers [0, t], right [t, 1]
        """
        cls.order_of(points)
        left: List[Any] = [points[0]]
        right: List[Any] = [points[-1]]
        level: List[Any] = list(points)
        while len(level) > 1:
            level = [lerp(level[i], level[i + 1], t) for i in range(len(level) - 1)]
            left.append(level[0])
            right.append(level[-1])
        right.reverse()
        return left, right

    @staticmethod
    def control_polygon_length(points: Sequence[Any], distance: DistanceFn) -> float:
        """Sum of the distances between consecutive control points."""
        return sum(distance(points[i], points[i + 1]) for i in range(len(points) - 1))

    @classmethod
    def estimate_length(
        cls,
        points: Sequence[Any],
        precision: float,
        distance: DistanceFn,
        max_depth: int = MAX_LENGTH_SUBDIVISION_DEPTH,
    ) -> float:
        """
        Estimate the arc length by recursive halving.

        The chord (first to last point) is a lower bound of the arc length, the
        control polygon an upper bound. Once both bounds differ by less than
        ``precision`` (relative to the upper bound) their mean is returned,
        otherwise both halves are estimated separately.

        Args:
            points: Control points
            precision: Accepted relative difference between the bounds, must be > 0
            distance: Distance function between two points
            max_depth: Maximal number of halvings along one branch

        Returns:
            The estimated arc length

        Raises:
            ValueError: If precision is not positive.
        """
        if not precision > 0.0:
            raise ValueError(f"precision must be positive, got {precision}")
        if cls.order_of(points) == 0:
            return 0.0
        return cls._estimate_length_recursive(list(points), precision, distance, max_depth)

    @classmethod
    def _estimate_length_recursive(
        cls, points: List[Any], precision: float, distance: DistanceFn, depth: int
    ) -> float:
        min_length = distance(points[0], points[-1])
        max_length = cls.control_polygon_length(points, distance)
        if max_length == 0.0:
            return 0.0
        if len(points) == 2 or depth <= 0 or (max_length - min_length) / max_length < precision:
            return 0.5 * (min_length + max_length)
        left, right = cls.split(points, 0.5)
        return cls._estimate_length_recursive(left, precision, distance, depth - 1) + cls._estimate_length_recursive(
            right, precision, distance, depth - 1
        )

    @classmethod
    def sample(cls, points: Sequence[Any], steps: int) -> NDArray[np.float64]:
        """
        Sample the curve at ``steps + 1`` evenly spaced parameters using NumPy.

        Uses direct Bernstein evaluation with vectorized operations.

        Args:
            points: Control points convertible to a float64 array of shape (n,) or (n, d)
            steps: Number of segments to divide the curve into

        Returns:
            NDArray of shape (steps+1,) or (steps+1, d) containing the sampled points
        """
        order = cls.order_of(points)
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")
        points_array = np.asarray(points, dtype=np.float64)

        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)
        omt = 1.0 - t
        if order == 0:
            weights = [np.ones_like(t)]
        elif order == 1:
            weights = [omt, t]
        elif order == 2:
            weights = [omt**2, 2.0 * omt * t, t**2]
        else:
            weights = [omt**3, 3.0 * omt**2 * t, 3.0 * omt * t**2, t**3]

        # (steps+1, n) @ (n, ...) -> (steps+1, ...)
        # offsets from the first point for t <= 0.5, from the last point otherwise
        basis = np.stack(weights, axis=1)
        first = points_array[0]
        last = points_array[-1]
        from_first = first + np.tensordot(basis, points_array - first, axes=(1, 0))
        from_last = last + np.tensordot(basis, points_array - last, axes=(1, 0))
        first_half = (t <= 0.5).reshape((-1,) + (1,) * (points_array.ndim - 1))
        return np.where(first_half, from_first, from_last)
