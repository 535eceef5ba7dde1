"""Integer helpers shared by the trial-division and sieve loops."""

from __future__ import annotations

import math

INT64_MAX = 2**63 - 1


def integral_sqrt(x: int) -> int:
    """Return the largest integer y such that y * y <= x.

    Args:
        x: Non-negative integer.

    Returns:
        Integral part of the square root of x.

    Raises:
        ValueError: If x is negative.
    """
    if x < 0:
        raise ValueError(f"x must be >= 0, got {x}")
    return math.isqrt(int(x))
