"""Test module for avcurve.point

The tests are run using pytest.
"""

import numpy as np
import pytest

from avcurve.point import as_point, difference, euclidean_distance, lerp, points_equal, zero_like


class TestAsPoint:
    """Normalization of caller supplied points."""

    def test_tuple_becomes_readonly_array(self):
        """Tuples are converted to read-only float64 arrays."""
        point = as_point((1, 2))
        assert isinstance(point, np.ndarray)
        assert point.dtype == np.float64
        assert not point.flags.writeable
        with pytest.raises(ValueError):
            point[0] = 5.0

    def test_array_is_copied(self):
        """Mutating the caller's array does not change the stored point."""
        source = np.array([1.0, 2.0, 3.0])
        point = as_point(source)
        source[0] = 100.0
        assert np.allclose(point, [1.0, 2.0, 3.0])

    def test_numbers_become_float(self):
        """Python and numpy numbers are converted to float."""
        assert as_point(3) == 3.0
        assert isinstance(as_point(3), float)
        assert isinstance(as_point(np.int64(2)), float)

    def test_other_objects_pass_through(self):
        """Custom point types are used as they are."""
        marker = object()
        assert as_point(marker) is marker


class TestVectorOps:
    """Operations derived from addition and scaling."""

    def test_lerp(self):
        """lerp returns the endpoints at 0 and 1 and blends in between."""
        a = as_point((0.0, 10.0))
        b = as_point((10.0, 0.0))
        assert np.allclose(lerp(a, b, 0.0), a)
        assert np.allclose(lerp(a, b, 1.0), b)
        assert np.allclose(lerp(a, b, 0.25), (2.5, 7.5))
        assert lerp(2.0, 4.0, 0.5) == 3.0

    def test_lerp_equal_points(self):
        """Interpolating between equal points gives that point exactly."""
        a = as_point((0.1, 0.7))
        b = as_point((0.1, 0.7))
        for t in np.linspace(0.0, 1.0, 31):
            assert np.array_equal(lerp(a, b, t), a)
        assert lerp(0.3, 0.3, 0.6) == 0.3

    def test_lerp_endpoints_exact(self):
        """t=0 and t=1 return the end points without rounding."""
        a = as_point((0.1, -3.3))
        b = as_point((7.9, 0.2))
        assert np.array_equal(lerp(a, b, 0.0), a)
        assert np.array_equal(lerp(a, b, 1.0), b)

    def test_difference_and_zero(self):
        """difference subtracts, zero_like keeps the shape."""
        assert np.allclose(difference(as_point((3, 5)), as_point((1, 1))), (2, 4))
        zero = zero_like(as_point((3, 5, 7)))
        assert zero.shape == (3,)
        assert np.all(zero == 0.0)

    def test_points_equal(self):
        """Exact equality for arrays and scalars."""
        assert points_equal(as_point((1, 2)), as_point([1.0, 2.0]))
        assert not points_equal(as_point((1, 2)), as_point((1, 2.000001)))
        assert points_equal(1.5, 1.5)
        assert not points_equal(1.5, 2.5)


class TestEuclideanDistance:
    """Default distance function."""

    def test_distance_2d(self):
        """3-4-5 triangle."""
        assert euclidean_distance(as_point((0, 0)), as_point((3, 4))) == pytest.approx(5.0)

    def test_distance_scalar(self):
        """Scalars use the absolute difference."""
        assert euclidean_distance(2.0, -1.0) == pytest.approx(3.0)

    def test_distance_symmetric_and_zero(self):
        """The metric is symmetric and zero for equal points."""
        a = as_point((1.0, 2.0, 3.0))
        b = as_point((-2.0, 0.5, 4.0))
        assert euclidean_distance(a, b) == pytest.approx(euclidean_distance(b, a))
        assert euclidean_distance(a, a) == 0.0
