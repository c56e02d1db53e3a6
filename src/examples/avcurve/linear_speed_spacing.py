"""Compare point spacing of a raw cubic Bezier with its linear speed version."""

import logging

import numpy as np

from avcurve.curve import Curve

CONTROL_POINTS = ((0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0))
NUM_STEPS = 10
TABLE_SIZE = 64
STEPS_COUNT = 100


def spacing(points: np.ndarray) -> np.ndarray:
    """Distances between consecutive points."""
    return np.hypot(*np.diff(points, axis=0).T)


def main():
    """Main"""
    logging.basicConfig(level=logging.DEBUG)

    raw = Curve.cubic(*CONTROL_POINTS)
    uniform = raw.linear_speed(TABLE_SIZE, STEPS_COUNT)

    raw_spacing = spacing(raw.polygonize(NUM_STEPS))
    uniform_spacing = spacing(uniform.polygonize(NUM_STEPS))

    print(f"Curve length (polyline estimate): {uniform.length:.4f}")
    print(f"Curve length (subdivision):       {raw.estimate_length():.4f}")
    print()
    print(" step      raw   linear")
    for i, (d_raw, d_uniform) in enumerate(zip(raw_spacing, uniform_spacing)):
        print(f"{i:5d} {d_raw:8.4f} {d_uniform:8.4f}")
    print()
    print(f"std raw:    {np.std(raw_spacing):.5f}")
    print(f"std linear: {np.std(uniform_spacing):.5f}")

    midpoint = uniform.point_at(0.5)
    print(f"linear speed point_at(0.5) = ({midpoint[0]:.4f}, {midpoint[1]:.4f})")


if __name__ == "__main__":
    main()
