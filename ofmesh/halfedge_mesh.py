"""Half-edge representation of a two-dimensional mesh."""

from __future__ import annotations

from typing import Any, NamedTuple

import numpy as np


class HalfEdge(NamedTuple):
    """One half-edge.

    ``node`` is the vertex the half-edge points to. ``cell`` is the index of
    the adjacent cell shifted by one, so that ``0`` stands for the unbounded
    outer region. ``next``, ``prev`` and ``opposite`` are half-edge indices.
    """

    node: int
    cell: int
    next: int
    prev: int
    opposite: int


class HalfEdgeMesh:
    """Mesh stored as node coordinates and a list of half-edges."""

    GEO_DIMENSION = 3
    TOP_DIMENSION = 3

    def __init__(self) -> None:
        self.nodes: list[np.ndarray] = []
        self.halfedges: list[HalfEdge] = []
        self.data: dict[str, Any] = {}
        self.cellstart = 1

    @classmethod
    def from_mesh(cls, mesh) -> "HalfEdgeMesh":
        """Build the half-edges of a mesh that has edges and edge/cell relations.

        Edge ``k`` gives half-edges ``2k`` (in the edge's left cell) and
        ``2k + 1`` (in its right cell, or the outer region on the boundary).
        """
        if mesh.cells and not mesh.edges:
            mesh.init_top()

        result = cls()
        result.nodes = [np.array(p, dtype=float) for p in mesh.nodes]

        node: list[int] = []
        cell: list[int] = []
        opposite: list[int] = []
        for k, ((a, b), (left, right, _, _)) in enumerate(
            zip(mesh.edges, mesh.edge2cell)
        ):
            node.extend((a, b))
            cell.extend((left + 1, 0 if left == right else right + 1))
            opposite.extend((2 * k + 1, 2 * k))

        count = len(node)
        # Keyed by (start vertex, cell): the start of h is the end of its twin.
        starts = {(node[opposite[h]], cell[h]): h for h in range(count)}

        following: list[int] = []
        for h in range(count):
            key = (node[h], cell[h])
            if key not in starts:
                raise ValueError(
                    f"half-edge {h} has no successor; cells are not consistently oriented"
                )
            following.append(starts[key])

        preceding = [0] * count
        for h, n in enumerate(following):
            preceding[n] = h

        result.halfedges = [
            HalfEdge(node[h], cell[h], following[h], preceding[h], opposite[h])
            for h in range(count)
        ]
        return result

    def number_of_nodes(self) -> int:
        return len(self.nodes)

    def number_of_halfedges(self) -> int:
        return len(self.halfedges)

    def vtk_cell_type(self, td: int = 3) -> int:
        """VTK cell type for entities of topological dimension ``td``."""
        if td == 3:
            return 72
        if td == 2:
            return 70
        if td == 1:
            return 3
        return 68

    def is_boundary_edge(self) -> list[bool]:
        """For each half-edge, whether it lies in the outer region."""
        return [h.cell < self.cellstart for h in self.halfedges]

    def is_boundary_node(self) -> list[bool]:
        """For each node, whether a boundary half-edge points to it."""
        flags = [False] * self.number_of_nodes()
        for h in self.halfedges:
            if h.cell < self.cellstart:
                flags[h.node] = True
        return flags

    def __str__(self) -> str:
        lines = ["Nodes:"]
        lines.extend(
            f"{i}:" + "".join(f" {float(x)}" for x in p)
            for i, p in enumerate(self.nodes)
        )
        lines.append("HalfEdges:")
        lines.extend(
            f"{i}:" + "".join(f" {v}" for v in h) for i, h in enumerate(self.halfedges)
        )
        return "\n".join(lines)