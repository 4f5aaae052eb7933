import math
from dataclasses import dataclass

import numpy as np
import pytest

from ofmesh.hexahedron_mesh import HexahedronMesh
from ofmesh.quality import (
    HEX_NUM,
    INVALID_QUALITY,
    CellQuality,
    HexPositiveJacobiQuality,
    QuadPositiveJacobiQuality,
    TetRadiusRatioQuality,
    TriRadiusRatioQuality,
)
from ofmesh.triangle_mesh import TriangleMesh


@dataclass
class _Mesh:
    nodes: list
    cells: list

    def number_of_cells(self):
        return len(self.cells)


def _mesh(nodes, cells):
    return _Mesh([np.array(p, dtype=float) for p in nodes], [tuple(c) for c in cells])


EQUILATERAL = [(0.0, 0.0), (1.0, 0.0), (0.5, math.sqrt(3) / 2)]
REGULAR_TET = [(1, 1, 1), (-1, 1, -1), (1, -1, -1), (-1, -1, 1)]
UNIT_SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]
UNIT_CUBE = [
    (0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0),
    (0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1),
]
DISTORTED_TRI = [(0.0, 0.0), (2.0, 0.3), (0.4, 1.1)]
DISTORTED_TET = [(0, 0, 0), (1.2, 0.1, 0), (0.2, 0.9, 0.1), (0.1, 0.3, 1.4)]
DISTORTED_QUAD = [(0.0, 0.0), (1.3, 0.1), (1.1, 0.9), (-0.2, 1.2)]
DISTORTED_CUBE = [
    (0.1, -0.05, 0.0), (1, 0, 0), (1, 1, 0), (0, 1, 0),
    (0, 0, 1), (1, 0, 1), (1.2, 1.1, 0.9), (0, 1, 1),
]


def _tri(nodes):
    return TriangleMesh(nodes, [(0, 1, 2)])


def _hex(nodes, cell=tuple(range(8))):
    return HexahedronMesh(nodes, [cell])


def _build(kind, nodes):
    if kind == "tri":
        return TriRadiusRatioQuality(_tri(nodes))
    if kind == "tet":
        return TetRadiusRatioQuality(_mesh(nodes, [(0, 1, 2, 3)]))
    if kind == "quad":
        return QuadPositiveJacobiQuality(_mesh(nodes, [(0, 1, 2, 3)]))
    return HexPositiveJacobiQuality(_hex(nodes))


def _transform(nodes, scale, shift):
    return [tuple(scale * c + shift for c in p) for p in nodes]


def _fd_gradient(quality, c, j, h=1e-6):
    mesh = quality.mesh
    node = mesh.cells[c][j]
    base = mesh.nodes[node].copy()
    grad = []
    for k in range(len(base)):
        plus = base.copy()
        plus[k] += h
        minus = base.copy()
        minus[k] -= h
        mesh.nodes[node] = plus
        qp = quality.quality(c)
        mesh.nodes[node] = minus
        qm = quality.quality(c)
        mesh.nodes[node] = base
        grad.append((qp - qm) / (2 * h))
    return np.array(grad)


@pytest.mark.parametrize(
    "kind, nodes",
    [("tri", EQUILATERAL), ("tet", REGULAR_TET), ("quad", UNIT_SQUARE), ("hex", UNIT_CUBE)],
)
def test_ideal_cells_have_quality_one(kind, nodes):
    assert _build(kind, nodes).quality(0) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "kind, nodes",
    [
        ("tri", DISTORTED_TRI),
        ("tet", DISTORTED_TET),
        ("quad", DISTORTED_QUAD),
        ("hex", DISTORTED_CUBE),
    ],
)
def test_quality_is_at_least_one_and_similarity_invariant(kind, nodes):
    q = _build(kind, nodes).quality(0)
    assert q > 1.0
    moved = _build(kind, _transform(nodes, 3.5, -2.0)).quality(0)
    assert moved == pytest.approx(q)


def test_inverted_cells_are_invalid():
    assert _build("tri", EQUILATERAL[::-1]).quality(0) == INVALID_QUALITY
    tet = [REGULAR_TET[1], REGULAR_TET[0], REGULAR_TET[2], REGULAR_TET[3]]
    assert _build("tet", tet).quality(0) == INVALID_QUALITY
    assert _build("quad", UNIT_SQUARE[::-1]).quality(0) == INVALID_QUALITY
    flipped = HexPositiveJacobiQuality(_hex(UNIT_CUBE, (4, 5, 6, 7, 0, 1, 2, 3)))
    assert flipped.quality(0) == INVALID_QUALITY


def test_quality_of_mesh_lists_every_cell():
    mesh = TriangleMesh(
        [(0, 0), (1, 0), (1, 1), (0, 1)], [(0, 1, 2), (0, 2, 3)]
    )
    quality = TriRadiusRatioQuality(mesh)
    values = quality.quality_of_mesh()
    assert len(values) == 2
    assert values == [quality.quality(0), quality.quality(1)]
    assert values[0] == pytest.approx(values[1])


@pytest.mark.parametrize("j", [0, 1, 2])
def test_triangle_gradient_matches_finite_differences(j):
    quality = _build("tri", DISTORTED_TRI)
    expected = _fd_gradient(quality, 0, j)
    assert np.allclose(quality.gradient(0, j), expected, rtol=1e-5, atol=1e-6)


@pytest.mark.parametrize("j", [0, 1, 2, 3])
def test_tetrahedron_gradient_matches_finite_differences(j):
    quality = _build("tet", DISTORTED_TET)
    expected = _fd_gradient(quality, 0, j)
    assert np.allclose(quality.gradient(0, j), expected, rtol=1e-5, atol=1e-6)


@pytest.mark.parametrize("j", range(8))
def test_hex_gradient_vanishes_at_unit_cube(j):
    grad = _build("hex", UNIT_CUBE).gradient(0, j)
    assert np.allclose(grad, np.zeros(3), atol=1e-12)


@pytest.mark.parametrize("kind, nodes", [("quad", DISTORTED_QUAD), ("hex", DISTORTED_CUBE)])
def test_gradient_is_translation_invariant_and_scales_inversely(kind, nodes):
    base = _build(kind, nodes)
    shifted = _build(kind, _transform(nodes, 1.0, 5.0))
    scaled = _build(kind, _transform(nodes, 2.0, 0.0))
    for j in range(len(nodes) if kind == "quad" else 8):
        g = base.gradient(0, j)
        assert np.allclose(shifted.gradient(0, j), g)
        assert np.allclose(scaled.gradient(0, j), g / 2.0)


def test_hex_vertex_orderings_follow_cell_edges():
    mesh = _hex(UNIT_CUBE)
    mesh.init_top()
    edges = {frozenset(e) for e in mesh.edges}
    assert len(edges) == 12
    assert len(HEX_NUM) == 8
    for i, order in enumerate(HEX_NUM):
        assert order[0] == i
        assert sorted(order) == list(range(8))
        for k in (1, 3, 4):
            assert frozenset((order[0], order[k])) in edges


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        CellQuality(_tri(EQUILATERAL))