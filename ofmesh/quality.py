"""Cell quality measures and their gradients with respect to cell vertices.

A quality of 1 marks an ideal cell; larger values mark worse cells. Cells
with a negative orientation get :data:`INVALID_QUALITY`.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

import numpy as np

INVALID_QUALITY = float(2**63 - 1)
"""Quality reported for inverted cells."""

TET_LOCAL_FACE = ((1, 2, 3), (0, 3, 2), (0, 1, 3), (0, 2, 1))
"""For each tetrahedron vertex, the opposite face ordered counter-clockwise."""


def _hex_vertex_orderings() -> tuple[tuple[int, ...], ...]:
    """For each hexahedron vertex, a relabelling of the cell that puts that
    vertex first and keeps the orientation."""
    coords = (
        (0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0),
        (0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1),
    )
    index = {c: k for k, c in enumerate(coords)}
    orderings = []
    for a, b, c in coords:
        odd = (a + b + c) % 2 == 1
        order = []
        for x, y, z in coords:
            if odd:
                x, y = y, x
            order.append(index[(x ^ a, y ^ b, z ^ c)])
        orderings.append(tuple(order))
    return tuple(orderings)


HEX_NUM = _hex_vertex_orderings()


def _cross2(a: np.ndarray, b: np.ndarray) -> float:
    return float(a[0] * b[1] - a[1] * b[0])


def _ratio(num: float, den: float) -> float:
    return num / den if den != 0 else math.inf


class CellQuality(ABC):
    """Quality of the cells of a mesh and its gradient at cell vertices."""

    def __init__(self, mesh) -> None:
        self.mesh = mesh

    @abstractmethod
    def quality(self, i: int) -> float:
        """Quality of cell ``i``."""

    @abstractmethod
    def gradient(self, c: int, i: int) -> np.ndarray:
        """Gradient of the quality of cell ``c`` at its local vertex ``i``."""

    def quality_of_mesh(self) -> list[float]:
        """Quality of every cell of the mesh."""
        return [self.quality(i) for i in range(self.mesh.number_of_cells())]

    def _points(self, c: int, dim: int | None = None) -> list[np.ndarray]:
        points = [np.asarray(self.mesh.nodes[v], dtype=float) for v in self.mesh.cells[c]]
        if dim is not None:
            points = [p[:dim] for p in points]
        return points


class TriRadiusRatioQuality(CellQuality):
    """Circumradius over inradius of a triangle, divided by two."""

    def quality(self, i: int) -> float:
        p0, p1, p2 = self._points(i, 2)
        v1, v2, v12 = p1 - p0, p2 - p0, p2 - p1
        l1, l2, l12 = (float(np.linalg.norm(v)) for v in (v1, v2, v12))
        area = _cross2(v1, v2) / 2
        if area <= 0:
            return INVALID_QUALITY
        big_r = l1 * l2 * l12 / area / 4
        small_r = 2 * area / (l1 + l2 + l12)
        return big_r / small_r / 2

    def gradient(self, c: int, i: int) -> np.ndarray:
        points = self._points(c, 2)
        x0, x1, x2 = points[i], points[(i + 1) % 3], points[(i + 2) % 3]
        v1, v2, v12 = x1 - x0, x2 - x0, x2 - x1
        l1, l2, l12 = (float(np.linalg.norm(v)) for v in (v1, v2, v12))

        area = _cross2(v1, v2) / 2.0
        big_r = l1 * l2 * l12 / area / 4.0
        perimeter = l1 + l2 + l12
        small_r = 2.0 * area / perimeter

        nabla_l1 = -v1 / l1
        nabla_l2 = -v2 / l2
        nabla_a = np.array([-v12[1], v12[0]]) / 2.0
        nabla_big_r = (
            l12 * (area * (l2 * nabla_l1 + l1 * nabla_l2) - l1 * l2 * nabla_a)
            / area / area / 4.0
        )
        nabla_small_r = (
            2.0 * (perimeter * nabla_a - area * (nabla_l1 + nabla_l2))
            / perimeter / perimeter
        )
        return (small_r * nabla_big_r - big_r * nabla_small_r) / small_r / small_r / 2.0


class TetRadiusRatioQuality(CellQuality):
    """Circumradius over inradius of a tetrahedron, divided by three."""

    def quality(self, i: int) -> float:
        p = self._points(i)
        v1, v2, v3 = p[1] - p[0], p[2] - p[0], p[3] - p[0]
        l1, l2, l3 = (float(v @ v) for v in (v1, v2, v3))
        c12, c23, c31 = np.cross(v1, v2), np.cross(v2, v3), np.cross(v3, v1)
        s = (
            np.linalg.norm(c12) + np.linalg.norm(c23) + np.linalg.norm(c31)
            + np.linalg.norm(np.cross(v3 - v1, v2 - v1))
        ) / 2
        d = l1 * c23 + l2 * c31 + l3 * c12
        ld = float(np.linalg.norm(d))
        volume = float(c12 @ v3) / 6
        if volume < 0:
            return INVALID_QUALITY
        if volume == 0:
            return math.inf
        small_r = 3 * volume / s
        big_r = ld / volume / 12
        return float(big_r / small_r / 3)

    def gradient(self, c: int, i: int) -> np.ndarray:
        p = self._points(c)
        face = TET_LOCAL_FACE[i]
        x0 = p[i]
        v1, v2, v3 = p[face[0]] - x0, p[face[1]] - x0, p[face[2]] - x0
        l1, l2, l3 = (float(v @ v) for v in (v1, v2, v3))

        c12, c23, c31 = np.cross(v1, v2), np.cross(v2, v3), np.cross(v3, v1)
        s12 = float(np.linalg.norm(c12)) / 2
        s23 = float(np.linalg.norm(c23)) / 2
        s31 = float(np.linalg.norm(c31)) / 2
        s123 = float(np.linalg.norm(np.cross(v3 - v1, v2 - v1))) / 2
        s = s12 + s23 + s31 + s123

        d = l1 * c23 + l2 * c31 + l3 * c12
        ld = float(np.linalg.norm(d))
        volume = float(c12 @ v3) / 6
        small_r = 3 * volume / s
        big_r = ld / volume / 12
        q = big_r / small_r / 3

        nabla_ld = (
            2.0 * ((d @ c23) * v1 + (d @ c31) * v2 + (d @ c12) * v3)
            + np.cross(d, (l3 - l2) * v1 + (l1 - l3) * v2 + (l2 - l1) * v3)
        ) / ld
        nabla_s = (
            np.cross(c12, v1 - v2) / s12
            + np.cross(c23, v2 - v3) / s23
            + np.cross(c31, v3 - v1) / s31
        ) / 4.0
        nabla_v = (c12 + c23 + c31) / 6.0
        return -q * (nabla_ld / ld + nabla_s / s - 2.0 * nabla_v / volume)


class QuadPositiveJacobiQuality(CellQuality):
    """Mean over the corners of a quadrilateral of ``(L1 + L2) / (2 J)``."""

    def quality(self, i: int) -> float:
        p = self._points(i, 2)
        q = 0.0
        for j in range(4):
            v1 = p[(j + 1) % 4] - p[j]
            v2 = p[(j + 3) % 4] - p[j]
            jac = _cross2(v1, v2)
            q += _ratio(float(v1 @ v1 + v2 @ v2), 2.0 * jac)
            if jac < 0:
                return INVALID_QUALITY
        return q / 4.0

    def gradient(self, c: int, i: int) -> np.ndarray:
        p = self._points(c, 2)
        x0, x1, x2, x3 = p[i], p[(i + 1) % 4], p[(i + 2) % 4], p[(i + 3) % 4]
        v01, v12, v23, v30 = x1 - x0, x2 - x1, x3 - x2, x0 - x3
        l1, l2, l3, l4 = (float(v @ v) for v in (v01, v12, v23, v30))

        jac = _cross2(v30, v01)
        d = l1 + l4
        nabla_j = np.array([v01[1] + v30[1], -v30[0] - v01[0]])
        nabla_d = 2.0 * (v01 - v30)
        nabla_q0 = (-d * nabla_j + jac * nabla_d) / (2.0 * jac * jac)

        jac = _cross2(v01, v12)
        d = l2 + l1
        nabla_j = np.array([-v12[1], v12[0]])
        nabla_d = -2.0 * v01
        nabla_q1 = (-d * nabla_j + jac * nabla_d) / (2.0 * jac * jac)

        jac = _cross2(v23, v30)
        d = l4 + l3
        nabla_j = np.array([-v23[1], v23[0]])
        nabla_d = 2.0 * v30
        nabla_q3 = (-d * nabla_j + jac * nabla_d) / (2.0 * jac * jac)

        return nabla_q0 + nabla_q1 + nabla_q3


class HexPositiveJacobiQuality(CellQuality):
    """Mean over the corners of a hexahedron of ``(l1^3 + l2^3 + l3^3) / (3 J)``."""

    def quality(self, i: int) -> float:
        p = self._points(i)
        q = 0.0
        for idx in HEX_NUM:
            x0 = p[idx[0]]
            v1, v2, v3 = p[idx[1]] - x0, p[idx[3]] - x0, p[idx[4]] - x0
            jac = float(np.cross(v1, v2) @ v3)
            d = sum(float(np.linalg.norm(v)) ** 3 for v in (v1, v2, v3))
            q += _ratio(d / 3.0, jac)
            if jac < 0:
                return INVALID_QUALITY
        return q / 8

    def gradient(self, c: int, i: int) -> np.ndarray:
        cell = self._points(c)
        idx = HEX_NUM[i]
        x0, x1, x2, x3, x4, x5, x7 = (cell[idx[k]] for k in (0, 1, 2, 3, 4, 5, 7))

        v04, v02, v01 = x1 - x0, x3 - x0, x4 - x0
        v46, v45 = x2 - x1, x5 - x1
        v23, v26 = x7 - x3, x2 - x3
        v13, v15 = x7 - x4, x5 - x4

        l04, l02, l01, l46, l45, l23, l26, l13, l15 = (
            float(np.linalg.norm(v))
            for v in (v04, v02, v01, v46, v45, v23, v26, v13, v15)
        )

        j0 = float(np.cross(v04, v02) @ v01)
        j4 = float(np.cross(v46, v45) @ v04)
        j2 = float(np.cross(v23, v26) @ v02)
        j1 = float(np.cross(v15, v13) @ v01)

        d0 = l04**3 + l01**3 + l02**3
        d4 = l04**3 + l45**3 + l46**3
        d2 = l26**3 + l23**3 + l02**3
        d1 = l13**3 + l01**3 + l15**3

        nabla_j0 = np.cross(v04, v01) + np.cross(v02, v04) + np.cross(v01, v02)
        nabla_j4 = np.cross(v45, v46)
        nabla_j2 = np.cross(v26, v23)
        nabla_j1 = np.cross(v13, v15)

        nabla_d0 = -3.0 * (l04 * v04 + l02 * v02 + l01 * v01)
        nabla_d4 = -3.0 * l04 * v04
        nabla_d2 = -3.0 * l02 * v02
        nabla_d1 = -3.0 * l01 * v01

        def term(d, jac, nabla_j, nabla_d):
            return 3.0 * (-d * nabla_j + jac * nabla_d) / jac / jac

        return (
            term(d0, j0, nabla_j0, nabla_d0)
            + term(d4, j4, nabla_j4, nabla_d4)
            + term(d2, j2, nabla_j2, nabla_d2)
            + term(d1, j1, nabla_j1, nabla_d1)
        )