"""Linear speed reparametrization of curves.

A :class:`LinearSpeedCurve` follows the same path as the curve it wraps, but its
parameter is the travelled fraction of the arc length: equal parameter steps
give (approximately) equal distances. The mapping from arc-length fraction to
the wrapped curve's parameter is precomputed once into an :class:`ArcLengthTable`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from numbers import Integral

import numpy as np
from numpy.typing import NDArray

from avcurve.consts import (
    DEFAULT_LENGTH_PRECISION,
    DEFAULT_STEPS_COUNT,
    DEFAULT_TABLE_SIZE,
    MIN_STEPS_COUNT,
    MIN_TABLE_SIZE,
)
from avcurve.curve import Curve
from avcurve.point import DistanceFn, P, euclidean_distance

logger = logging.getLogger(__name__)


def _check_count(name: str, value: int, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return int(value)


###############################################################################
# ArcLengthTable
###############################################################################


@dataclass(frozen=True, eq=False)
class ArcLengthTable:
    """Inverse arc-length mapping of a curve.

    Entry j pairs the arc-length fraction ``s_values[j] = j / (size - 1)`` with
    the curve parameter ``t_values[j]`` at which that fraction is reached. Both
    columns are non-decreasing, ``s_values`` runs from 0 to 1.

    ``t_values[-1]`` is the first sampled parameter at which the whole length
    has been travelled. It is 1.0 unless the curve ends in a stretch that does
    not move, such as a trailing zero-length segment; that stretch is skipped
    like any other stationary part of the curve.

    Attributes:
        s_values: Arc-length fractions, read-only array of shape (size,)
        t_values: Matching curve parameters, read-only array of shape (size,)
        length: Total length of the sampled polyline
    """

    s_values: NDArray[np.float64]
    t_values: NDArray[np.float64]
    length: float

    @property
    def size(self) -> int:
        """Number of table entries."""
        return len(self.s_values)

    @classmethod
    def build(
        cls,
        curve: Curve[P],
        table_size: int = DEFAULT_TABLE_SIZE,
        steps_count: int = DEFAULT_STEPS_COUNT,
        distance: DistanceFn = euclidean_distance,
    ) -> ArcLengthTable:
        """
        Measure ``curve`` and build its inverse arc-length table.

        The curve is sampled at ``steps_count`` evenly spaced parameters, the
        cumulative polyline distance is normalized to [0, 1] and then resampled
        at ``table_size`` evenly spaced fractions. A curve of zero length maps
        every fraction to t=0.

        Args:
            curve: The curve to measure
            table_size: Number of table entries, at least 2
            steps_count: Number of samples along the curve, at least 2
            distance: Distance function between two points

        Returns:
            The table

        Raises:
            ValueError: If table_size or steps_count is not an integer >= 2
        """
        table_size = _check_count("table_size", table_size, MIN_TABLE_SIZE)
        steps_count = _check_count("steps_count", steps_count, MIN_STEPS_COUNT)
        if steps_count < table_size:
            logger.warning(
                "steps_count (%d) is smaller than table_size (%d), arc length will be coarse",
                steps_count,
                table_size,
            )

        params = np.linspace(0.0, 1.0, steps_count, dtype=np.float64)
        cumulative = np.empty(steps_count, dtype=np.float64)
        cumulative[0] = 0.0
        last_point = curve.point_at(0.0)
        for k in range(1, steps_count):
            point = curve.point_at(float(params[k]))
            cumulative[k] = cumulative[k - 1] + distance(last_point, point)
            last_point = point
        total_length = float(cumulative[-1])

        s_values = np.linspace(0.0, 1.0, table_size, dtype=np.float64)
        if not total_length > 0.0:
            logger.debug("Curve has zero length, all arc-length fractions map to t=0")
            t_values = np.zeros(table_size, dtype=np.float64)
        else:
            fractions = cumulative / total_length
            fractions[-1] = 1.0
            t_values = cls._resample(fractions, params, s_values)

        logger.debug(
            "Built arc-length table: table_size=%d, steps_count=%d, length=%g",
            table_size,
            steps_count,
            total_length,
        )
        s_values.setflags(write=False)
        t_values.setflags(write=False)
        return cls(s_values=s_values, t_values=t_values, length=total_length)

    @staticmethod
    def _resample(
        fractions: NDArray[np.float64], params: NDArray[np.float64], targets: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Interpolate the parameter at each target fraction.

        ``fractions`` is non-decreasing and may contain plateaus where the curve
        did not move between two samples.
        """
        upper = np.searchsorted(fractions, targets, side="left")
        upper = np.clip(upper, 1, len(fractions) - 1)
        lower = upper - 1

        s0 = fractions[lower]
        span = fractions[upper] - s0
        ratio = np.divide(targets - s0, span, out=np.zeros_like(targets), where=span > 0.0)
        ratio = np.clip(ratio, 0.0, 1.0)

        t0 = params[lower]
        t1 = params[upper]
        return np.where(ratio >= 1.0, t1, t0 + (t1 - t0) * ratio)

    def parameter_at(self, s: float) -> float:
        """
        Return the curve parameter at arc-length fraction ``s``.

        ``s`` is clamped to [0, 1]; the result is linearly interpolated between
        the two bracketing table entries found by binary search.

        Raises:
            ValueError: If s is NaN
        """
        s = float(s)
        if math.isnan(s):
            raise ValueError("Arc-length fraction must not be NaN")
        s = min(max(s, 0.0), 1.0)

        upper = int(np.searchsorted(self.s_values, s, side="left"))
        if self.s_values[upper] == s:
            return float(self.t_values[upper])
        lower = upper - 1

        s0 = float(self.s_values[lower])
        s1 = float(self.s_values[upper])
        t0 = float(self.t_values[lower])
        t1 = float(self.t_values[upper])
        return t0 + (t1 - t0) * (s - s0) / (s1 - s0)


###############################################################################
# LinearSpeedCurve
###############################################################################


class LinearSpeedCurve(Curve[P]):
    """The same path as the wrapped curve, traversed with constant speed.

    The parameter is the fraction of the arc length travelled and is clamped to
    [0, 1]. The tangent is the wrapped curve's tangent at the resolved parameter,
    it is not rescaled to unit speed.
    """

    def __init__(
        self,
        curve: Curve[P],
        table_size: int = DEFAULT_TABLE_SIZE,
        steps_count: int = DEFAULT_STEPS_COUNT,
        distance: DistanceFn = euclidean_distance,
    ):
        """Wrap ``curve`` and build its arc-length table.

        Args:
            curve: The curve to reparametrize
            table_size: Number of entries of the inverse arc-length table, at least 2
            steps_count: Number of samples used to measure the curve, at least 2
            distance: Distance function between two points

        Raises:
            ValueError: If table_size or steps_count is not an integer >= 2
        """
        self._curve = curve
        self._table = ArcLengthTable.build(curve, table_size, steps_count, distance)

    @property
    def curve(self) -> Curve[P]:
        """The wrapped curve."""
        return self._curve

    @property
    def table(self) -> ArcLengthTable:
        """The inverse arc-length table."""
        return self._table

    @property
    def length(self) -> float:
        """Arc length of the wrapped curve as measured while building the table."""
        return self._table.length

    def parameter_at(self, s: float) -> float:
        """The wrapped curve's parameter at arc-length fraction ``s``."""
        return self._table.parameter_at(s)

    def point_at(self, t: float) -> P:
        return self._curve.point_at(self._table.parameter_at(t))

    def tangent_at(self, t: float) -> P:
        return self._curve.tangent_at(self._table.parameter_at(t))

    def start_point(self) -> P:
        return self._curve.start_point()

    def end_point(self) -> P:
        return self._curve.end_point()

    def estimate_length(
        self, precision: float = DEFAULT_LENGTH_PRECISION, distance: DistanceFn = euclidean_distance
    ) -> float:
        return self._table.length

    def __repr__(self) -> str:
        return f"LinearSpeedCurve({self._curve!r}, table_size={self._table.size}, length={self.length:g})"
