"""Composed curves: several Bezier segments addressed by one shared parameter."""

from __future__ import annotations

import math
from typing import Any, Iterator, List, Sequence, Tuple

from avcurve.consts import DEFAULT_LENGTH_PRECISION
from avcurve.curve import BezierSegment, CubicBezier, Curve, Line, QuadraticBezier
from avcurve.point import DistanceFn, P, as_point, euclidean_distance, points_equal

###############################################################################
# ComposedCurve
###############################################################################


class ComposedCurve(Curve[P]):
    """Immutable sequence of connected segments.

    With n segments, segment i covers the parameter range [i/n, (i+1)/n].
    Parameters outside [0, 1] are clamped. The tangent is generally
    discontinuous at segment boundaries.
    """

    def __init__(self, segments: Sequence[BezierSegment[P]]):
        """Initialize from already connected segments.

        Args:
            segments: At least one segment; each must start where the previous one ends

        Raises:
            ValueError: If there is no segment or two neighbours are not connected
        """
        if len(segments) == 0:
            raise ValueError("A composed curve needs at least one segment")
        for i in range(1, len(segments)):
            if not points_equal(segments[i - 1].end_point(), segments[i].start_point()):
                raise ValueError(f"Segment {i} does not start at the end point of segment {i - 1}")
        self._segments: Tuple[BezierSegment[P], ...] = tuple(segments)

    @property
    def segments(self) -> Tuple[BezierSegment[P], ...]:
        """The segments in parameter order."""
        return self._segments

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[BezierSegment[P]]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> BezierSegment[P]:
        return self._segments[index]

    def locate(self, t: float) -> Tuple[int, float]:
        """
        Map a global parameter to (segment index, local parameter).

        t is clamped to [0, 1]; t = 1.0 maps to the last segment at local
        parameter 1.0.

        Raises:
            ValueError: If t is NaN
        """
        t = float(t)
        if math.isnan(t):
            raise ValueError("Curve parameter must not be NaN")
        count = len(self._segments)
        scaled = min(max(t, 0.0), 1.0) * count
        index = min(max(int(math.floor(scaled)), 0), count - 1)
        local_t = min(max(scaled - index, 0.0), 1.0)
        return index, local_t

    def point_at(self, t: float) -> P:
        index, local_t = self.locate(t)
        return self._segments[index].point_at(local_t)

    def tangent_at(self, t: float) -> P:
        # d/dt of segment(t*n - i) is n * segment'(local_t)
        index, local_t = self.locate(t)
        return self._segments[index].tangent_at(local_t) * float(len(self._segments))

    def start_point(self) -> P:
        return self._segments[0].start_point()

    def end_point(self) -> P:
        return self._segments[-1].end_point()

    def estimate_length(
        self, precision: float = DEFAULT_LENGTH_PRECISION, distance: DistanceFn = euclidean_distance
    ) -> float:
        return sum(segment.estimate_length(precision, distance) for segment in self._segments)

    def __repr__(self) -> str:
        return f"ComposedCurve({list(self._segments)!r})"


###############################################################################
# ComposedCurveBuilder
###############################################################################


class ComposedCurveBuilder:
    """Mutable builder collecting segments for a :class:`ComposedCurve`.

    Every ``*_to`` call starts the new segment at the current end point and
    returns the builder, so calls can be chained::

        curve = Curve.composed((0, 0)).line_to((1, 0)).quadratic_to((2, 0), (2, 1)).build()
    """

    def __init__(self, start_point: Any):
        self._start_point = as_point(start_point)
        self._last_point = self._start_point
        self._segments: List[BezierSegment[Any]] = []

    @property
    def start_point(self) -> Any:
        """The point the composed curve starts at."""
        return self._start_point

    @property
    def last_point(self) -> Any:
        """The current end point, where the next segment will start."""
        return self._last_point

    def __len__(self) -> int:
        return len(self._segments)

    def _append(self, segment: BezierSegment[Any]) -> ComposedCurveBuilder:
        self._segments.append(segment)
        self._last_point = segment.end_point()
        return self

    def line_to(self, p1: Any) -> ComposedCurveBuilder:
        """Append a straight line to ``p1``."""
        return self._append(Line(self._last_point, p1))

    def quadratic_to(self, p1: Any, p2: Any) -> ComposedCurveBuilder:
        """Append a quadratic Bezier with control point ``p1`` ending at ``p2``."""
        return self._append(QuadraticBezier(self._last_point, p1, p2))

    def cubic_to(self, p1: Any, p2: Any, p3: Any) -> ComposedCurveBuilder:
        """Append a cubic Bezier with control points ``p1``, ``p2`` ending at ``p3``."""
        return self._append(CubicBezier(self._last_point, p1, p2, p3))

    def close(self) -> ComposedCurveBuilder:
        """Append a line back to the start point, unless the path already ends there."""
        if self._segments and not points_equal(self._last_point, self._start_point):
            self.line_to(self._start_point)
        return self

    def build(self) -> ComposedCurve[Any]:
        """
        Freeze the collected segments into a :class:`ComposedCurve`.

        The builder stays usable; later additions do not affect curves built before.

        Raises:
            ValueError: If no segment was added
        """
        if not self._segments:
            raise ValueError("Cannot build a composed curve without segments")
        return ComposedCurve(self._segments)
