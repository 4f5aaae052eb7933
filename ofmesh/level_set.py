"""Implicit level set functions for simple shapes."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

Point = Sequence[float]


def sign(value: float) -> int:
    """Return -1, 0 or 1 according to the sign of ``value``."""
    return (value > 0) - (value < 0)


class _LevelSet:
    def __call__(self, p: Point) -> float:  # pragma: no cover - overridden
        raise NotImplementedError

    def sign(self, p: Point) -> int:
        """Sign of the level set value at ``p``."""
        return sign(self(p))


@dataclass(frozen=True)
class Circle2(_LevelSet):
    """Circle as the zero set of ``|p - c|^2 - r^2``."""

    x: float = 0.0
    y: float = 0.0
    r: float = 1.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def radius(self) -> float:
        return self.r

    def __call__(self, p: Point) -> float:
        return (p[0] - self.x) ** 2 + (p[1] - self.y) ** 2 - self.r * self.r

    def sign(self, p: Point) -> int:
        return sign(self(p))


@dataclass(frozen=True)
class SignedDistanceCircle2(_LevelSet):
    """Signed distance to a circle."""

    x: float = 0.0
    y: float = 0.0
    r: float = 1.0

    def __call__(self, p: Point) -> float:
        return math.hypot(p[0] - self.x, p[1] - self.y) - self.r

    def sign(self, p: Point) -> int:
        return sign(self(p))


@dataclass(frozen=True)
class Sphere3(_LevelSet):
    """Sphere as the zero set of ``|p - c|^2 - r^2``."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    r: float = 1.0

    @property
    def center(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def radius(self) -> float:
        return self.r

    def __call__(self, p: Point) -> float:
        return sum((a - c) ** 2 for a, c in zip(p, self.center)) - self.r * self.r

    def sign(self, p: Point) -> int:
        return sign(self(p))


class DoubleTorus3(_LevelSet):
    """Algebraic double torus surface."""

    def __call__(self, p: Point) -> float:
        x2 = p[0] * p[0]
        y2 = p[1] * p[1]
        z2 = p[2] * p[2]
        return x2 * (x2 - 1) * (x2 * (x2 - 1) + 2 * y2) + y2 * y2 + z2 - 0.04

    def sign(self, p: Point) -> int:
        return sign(self(p))


class Orthocircle3(_LevelSet):
    """Algebraic orthocircle surface."""

    def __call__(self, p: Point) -> float:
        x2 = p[0] * p[0]
        y2 = p[1] * p[1]
        z2 = p[2] * p[2]
        r0 = x2 + y2 + z2
        r1 = x2 + y2 - 1
        r2 = y2 + z2 - 1
        r3 = z2 + x2 - 1
        return (r1 * r1 + z2) * (r2 * r2 + x2) * (r3 * r3 + y2) - 0.075 * 0.075 * (
            1 + 3 * r0
        )

    def sign(self, p: Point) -> int:
        return sign(self(p))


@dataclass(frozen=True)
class SignedDistanceSphere3(_LevelSet):
    """Signed distance to a sphere, with gradient and projection."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    r: float = 1.0

    @property
    def center(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def radius(self) -> float:
        return self.r

    def _offset(self, p: Point) -> tuple[float, float, float]:
        return (p[0] - self.x, p[1] - self.y, p[2] - self.z)

    def __call__(self, p: Point) -> float:
        return math.hypot(*self._offset(p)) - self.r

    def sign(self, p: Point) -> int:
        return sign(self(p))

    def gradient(self, p: Point) -> tuple[float, float, float]:
        """Unit vector from the center towards ``p``; undefined at the center."""
        v = self._offset(p)
        d = math.hypot(*v)
        if d == 0.0:
            raise ZeroDivisionError("gradient is undefined at the center")
        return (v[0] / d, v[1] / d, v[2] / d)

    def project(self, p: Point) -> tuple[float, float, float]:
        """Closest point on the sphere to ``p``."""
        d = self(p)
        g = self.gradient(p)
        return (p[0] - d * g[0], p[1] - d * g[1], p[2] - d * g[2])