"""Central module containing default values for curve evaluation and reparametrization."""

from __future__ import annotations

###############################################################################
# Linear speed defaults
###############################################################################

# Number of entries in the inverse arc-length table of a linear speed curve.
DEFAULT_TABLE_SIZE: int = 64

# Number of fine samples taken along the wrapped curve to estimate arc length.
DEFAULT_STEPS_COUNT: int = 100

# Both values must be at least this large.
MIN_TABLE_SIZE: int = 2
MIN_STEPS_COUNT: int = 2

###############################################################################
# Length estimation
###############################################################################

# Accepted ratio (max - min) / max between control polygon length and chord length.
DEFAULT_LENGTH_PRECISION: float = 0.001

# Upper bound for the recursive halving in estimate_length().
MAX_LENGTH_SUBDIVISION_DEPTH: int = 24


def main() -> None:
    """Print the configured defaults."""
    print("DEFAULT_TABLE_SIZE:          ", DEFAULT_TABLE_SIZE)
    print("DEFAULT_STEPS_COUNT:         ", DEFAULT_STEPS_COUNT)
    print("DEFAULT_LENGTH_PRECISION:    ", DEFAULT_LENGTH_PRECISION)
    print("MAX_LENGTH_SUBDIVISION_DEPTH:", MAX_LENGTH_SUBDIVISION_DEPTH)


if __name__ == "__main__":
    main()
