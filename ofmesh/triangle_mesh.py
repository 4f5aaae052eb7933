"""Unstructured triangle mesh with edge topology and uniform refinement."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np

from .topology import MeshTopology


def _build_topology(
    ta: int,
    tb: int,
    nb: int,
    adjacency: Sequence[Sequence[int]],
    local: Sequence[Sequence[int]] | None = None,
) -> MeshTopology:
    top = MeshTopology(ta, tb, len(adjacency), nb)
    offsets = [0]
    for adj in adjacency:
        offsets.append(offsets[-1] + len(adj))
    top.locations = offsets
    top.neighbors = [e for adj in adjacency for e in adj]
    if local is not None:
        top.local_indices = [j for loc in local for j in loc]
    return top


class TriangleMesh:
    """Triangle mesh stored as node coordinates and node triples.

    Edges and the edge/cell relations are built by :meth:`init_top`.
    ``edge2cell[k]`` is ``(left cell, right cell, left local, right local)``;
    on a boundary edge both cells are the same.
    """

    LOCAL_EDGE = ((1, 2), (2, 0), (0, 1))
    LOCAL_FACE = ((1, 2), (2, 0), (0, 1))
    VTK_INDEX = (0, 1, 2)
    NUM = ((0, 1, 2), (1, 2, 0), (2, 0, 1))
    NODES_PER_CELL = 3
    EDGES_PER_CELL = 3
    TOP_DIMENSION = 2

    def __init__(
        self,
        nodes: Iterable[Sequence[float]] = (),
        cells: Iterable[Sequence[int]] = (),
    ) -> None:
        self.nodes: list[np.ndarray] = []
        self.cells: list[tuple[int, int, int]] = []
        self.edges: list[tuple[int, int]] = []
        self.edge2cell: list[tuple[int, int, int, int]] = []
        self.cell2edge: list[tuple[int, int, int]] = []
        self.holes = 1
        self.genus = 0
        for node in nodes:
            self.insert_node(node)
        for cell in cells:
            self.insert_cell(cell)

    def insert_node(self, node: Sequence[float]) -> None:
        """Append a node; all nodes must share one dimension."""
        point = np.asarray(node, dtype=float)
        if point.ndim != 1:
            raise ValueError("a node must be a flat sequence of coordinates")
        if self.nodes and point.shape != self.nodes[0].shape:
            raise ValueError(
                f"node has dimension {point.size}, mesh has {self.nodes[0].size}"
            )
        self.nodes.append(point)

    def insert_cell(self, cell: Sequence[int]) -> None:
        """Append a triangle given by three node indices."""
        if len(cell) != 3:
            raise ValueError("a triangle needs exactly three nodes")
        self.cells.append(tuple(int(v) for v in cell))

    def number_of_nodes(self) -> int:
        return len(self.nodes)

    def number_of_cells(self) -> int:
        return len(self.cells)

    def number_of_edges(self) -> int:
        return len(self.edges)

    def number_of_faces(self) -> int:
        return len(self.edges)

    def geo_dimension(self) -> int:
        """Dimension of the node coordinates."""
        if not self.nodes:
            raise ValueError("mesh has no nodes")
        return int(self.nodes[0].size)

    def vtk_cell_type(self, td: int = 2) -> int:
        """VTK cell type for entities of topological dimension ``td``."""
        if td == 2:
            return 5
        if td == 1:
            return 3
        return 0

    def init_top(self) -> None:
        """Build edges and the edge/cell relations from the cells."""
        index: dict[tuple[int, int], int] = {}
        edge2cell: list[list[int]] = []
        cell2edge: list[tuple[int, int, int]] = []
        for i, cell in enumerate(self.cells):
            local = []
            for j, (a, b) in enumerate(self.LOCAL_EDGE):
                key = (min(cell[a], cell[b]), max(cell[a], cell[b]))
                k = index.get(key)
                if k is None:
                    k = len(edge2cell)
                    index[key] = k
                    edge2cell.append([i, i, j, j])
                else:
                    edge2cell[k][1] = i
                    edge2cell[k][3] = j
                local.append(k)
            cell2edge.append(tuple(local))
        self.edge2cell = [tuple(e) for e in edge2cell]
        self.cell2edge = cell2edge
        self.edges = []
        for left, _, j, _ in self.edge2cell:
            a, b = self.LOCAL_EDGE[j]
            cell = self.cells[left]
            self.edges.append((cell[a], cell[b]))

    def sorted_edges(self) -> list[tuple[int, int]]:
        """All cell edges with sorted ends, ordered by second then first node."""
        edges = [
            (min(cell[a], cell[b]), max(cell[a], cell[b]))
            for cell in self.cells
            for a, b in self.LOCAL_EDGE
        ]
        return sorted(edges, key=lambda e: (e[1], e[0]))

    def is_boundary_edge(self) -> list[bool]:
        return [e[0] == e[1] for e in self.edge2cell]

    def is_boundary_node(self) -> list[bool]:
        flags = [False] * self.number_of_nodes()
        for edge, e2c in zip(self.edges, self.edge2cell):
            if e2c[0] == e2c[1]:
                flags[edge[0]] = True
                flags[edge[1]] = True
        return flags

    def cell_to_cell(self) -> MeshTopology:
        """Cells across each edge; a boundary edge lists the cell itself."""
        nc = self.number_of_cells()
        adjacency: list[list[int]] = [[] for _ in range(nc)]
        for left, right, _, _ in self.edge2cell:
            adjacency[left].append(right)
            if left != right:
                adjacency[right].append(left)
        return _build_topology(2, 2, nc, adjacency)

    def node_to_node(self) -> MeshTopology:
        nn = self.number_of_nodes()
        adjacency: list[list[int]] = [[] for _ in range(nn)]
        for a, b in self.edges:
            adjacency[a].append(b)
            adjacency[b].append(a)
        return _build_topology(0, 0, nn, adjacency)

    def node_to_cell(self) -> MeshTopology:
        """Cells around each node, with the node's local index in each cell."""
        nn = self.number_of_nodes()
        adjacency: list[list[int]] = [[] for _ in range(nn)]
        local: list[list[int]] = [[] for _ in range(nn)]
        for i, cell in enumerate(self.cells):
            for j, v in enumerate(cell):
                adjacency[v].append(i)
                local[v].append(j)
        return _build_topology(0, 2, self.number_of_cells(), adjacency, local)

    def cell_to_node(self) -> MeshTopology:
        return _build_topology(2, 0, self.number_of_nodes(), self.cells)

    def cell_measure(self, i: int) -> float:
        """Signed area of cell ``i``, positive for counter-clockwise order."""
        c = self.cells[i]
        v1 = self.nodes[c[1]] - self.nodes[c[0]]
        v2 = self.nodes[c[2]] - self.nodes[c[0]]
        return 0.5 * float(v1[0] * v2[1] - v1[1] * v2[0])

    def cell_measures(self) -> list[float]:
        return [self.cell_measure(i) for i in range(self.number_of_cells())]

    def cell_size(self, i: int) -> float:
        return math.sqrt(self.cell_measure(i))

    def edge_barycenter(self, i: int) -> np.ndarray:
        a, b = self.edges[i]
        return (self.nodes[a] + self.nodes[b]) / 2.0

    def edge_barycenters(self) -> list[np.ndarray]:
        return [self.edge_barycenter(i) for i in range(self.number_of_edges())]

    def cell_barycenter(self, i: int) -> np.ndarray:
        a, b, c = self.cells[i]
        return (self.nodes[a] + self.nodes[b] + self.nodes[c]) / 3.0

    def cell_barycenters(self) -> list[np.ndarray]:
        return [self.cell_barycenter(i) for i in range(self.number_of_cells())]

    def edge_tangent(self, i: int) -> np.ndarray:
        """Unit vector from the first to the second node of edge ``i``."""
        a, b = self.edges[i]
        v = self.nodes[b] - self.nodes[a]
        return v / math.sqrt(float(v @ v))

    def edge_normal(self, i: int) -> np.ndarray:
        t = self.edge_tangent(i)
        return np.array([t[1], -t[0]])

    def edge_measure(self, i: int) -> float:
        a, b = self.edges[i]
        v = self.nodes[b] - self.nodes[a]
        return math.sqrt(float(v @ v))

    def edge_measures(self) -> list[float]:
        return [self.edge_measure(i) for i in range(self.number_of_edges())]

    def uniform_refine(self, n: int = 1) -> None:
        """Split every triangle into four, ``n`` times."""
        if n < 0:
            raise ValueError("number of refinements must be non-negative")
        for _ in range(n):
            if len(self.cell2edge) != len(self.cells):
                self.init_top()
            nn = self.number_of_nodes()
            self.nodes.extend(self.edge_barycenters())
            pairs = list(zip(self.cells, self.cell2edge))
            self.cells = (
                [(c[0], e[2] + nn, e[1] + nn) for c, e in pairs]
                + [(c[1], e[0] + nn, e[2] + nn) for c, e in pairs]
                + [(c[2], e[1] + nn, e[0] + nn) for c, e in pairs]
                + [(e[0] + nn, e[1] + nn, e[2] + nn) for _, e in pairs]
            )
            self.init_top()

    def __str__(self) -> str:
        sections = [
            ("Nodes", [tuple(float(x) for x in p) for p in self.nodes]),
            ("Edges", self.edges),
            ("Cells", self.cells),
            ("Edge2cell", self.edge2cell),
            ("Cell2edge", self.cell2edge),
        ]
        lines = []
        for title, entities in sections:
            lines.append(f"{title}:")
            lines.extend(
                f"{i}:" + "".join(f" {v}" for v in e) for i, e in enumerate(entities)
            )
        return "\n".join(lines)