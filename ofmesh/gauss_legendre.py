"""Gauss-Legendre quadrature rules on [-1, 1] with 1 to 20 points."""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

import numpy as np

MAX_POINTS = 20
"""Largest number of points a rule may have."""


@lru_cache(maxsize=MAX_POINTS)
def _rule(npoints: int) -> tuple[tuple[float, float], ...]:
    points, weights = np.polynomial.legendre.leggauss(npoints)
    # Points are listed from +1 towards -1; a midpoint is exactly zero.
    pairs = []
    for x, w in zip(points[::-1], weights[::-1]):
        x = float(x)
        if abs(x) < 1e-15:
            x = 0.0
        pairs.append((x, float(w)))
    return tuple(pairs)


def gauss_legendre_points(npoints: int) -> tuple[tuple[float, float], ...]:
    """Points and weights of the ``npoints``-point rule on [-1, 1].

    Pairs ``(point, weight)`` are ordered by decreasing point. The rule
    integrates polynomials of degree up to ``2 * npoints - 1`` exactly.
    """
    if isinstance(npoints, bool) or not isinstance(npoints, (int, np.integer)):
        raise TypeError("the number of points must be an integer")
    npoints = int(npoints)
    if not 1 <= npoints <= MAX_POINTS:
        raise ValueError(
            f"the number of points must be between 1 and {MAX_POINTS}, got {npoints}"
        )
    return _rule(npoints)


def integrate(
    f: Callable[[float], float], a: float, b: float, npoints: int = 10
) -> float:
    """Approximate the integral of ``f`` over [a, b] with an ``npoints`` rule."""
    rule = gauss_legendre_points(npoints)
    half = (b - a) / 2.0
    mid = (a + b) / 2.0
    return half * sum(w * float(f(half * x + mid)) for x, w in rule)