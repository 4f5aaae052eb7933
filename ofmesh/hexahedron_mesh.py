"""Unstructured hexahedral mesh with face and edge topology."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np

from .topology import MeshTopology


def _topology(
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


def _reference_point(rnode: Sequence[float], dim: int) -> tuple[float, ...]:
    if len(rnode) != dim:
        raise ValueError(f"reference point must have {dim} coordinates")
    return tuple(float(r) for r in rnode)


class HexahedronMesh:
    """Hexahedral mesh stored as 3D node coordinates and node octuples.

    Faces, edges and the face/cell and cell/edge relations are built by
    :meth:`init_top`. ``face2cell[k]`` is
    ``(left cell, right cell, left local, right local)``; on a boundary face
    both cells are the same.
    """

    LOCAL_EDGE = (
        (0, 1), (1, 2), (2, 3), (0, 3),
        (0, 4), (1, 5), (2, 6), (3, 7),
        (4, 5), (5, 6), (6, 7), (4, 7),
    )
    LOCAL_FACE = (
        (0, 3, 2, 1), (4, 5, 6, 7),
        (0, 4, 7, 3), (1, 2, 6, 5),
        (0, 1, 5, 4), (2, 3, 7, 6),
    )
    LOCAL_FACE_TO_EDGE = (
        (3, 2, 1, 0), (8, 9, 10, 11),
        (4, 11, 7, 3), (1, 6, 9, 5),
        (0, 5, 8, 4), (2, 7, 10, 6),
    )
    # Local vertices of each child cell, in the order {n, e, f, e, e, f, c, f}.
    REFINE = (
        (0, 0, 0, 3, 4, 4, 0, 2), (1, 1, 0, 0, 5, 3, 0, 4),
        (2, 2, 0, 1, 6, 5, 0, 3), (3, 3, 0, 2, 7, 2, 0, 5),
        (4, 11, 1, 8, 4, 2, 0, 4), (5, 8, 1, 9, 5, 4, 0, 3),
        (6, 9, 1, 10, 6, 3, 0, 5), (7, 10, 1, 11, 7, 5, 0, 2),
    )
    VTK_INDEX = (0, 1, 2, 3, 4, 5, 6, 7)
    ABAQUS_INDEX = (0, 1, 2, 3, 4, 5, 6, 7)
    NODES_PER_CELL = 8
    GEO_DIMENSION = 3
    TOP_DIMENSION = 3

    def __init__(
        self,
        nodes: Iterable[Sequence[float]] = (),
        cells: Iterable[Sequence[int]] = (),
    ) -> None:
        self.nodes: list[np.ndarray] = []
        self.cells: list[tuple[int, ...]] = []
        self.edges: list[tuple[int, int]] = []
        self.faces: list[tuple[int, int, int, int]] = []
        self.face2cell: list[tuple[int, int, int, int]] = []
        self.cell2face: list[tuple[int, ...]] = []
        self.cell2edge: list[tuple[int, ...]] = []
        for node in nodes:
            self.insert_node(node)
        for cell in cells:
            self.insert_cell(cell)

    def insert_node(self, node: Sequence[float]) -> None:
        """Append a node given by three coordinates."""
        point = np.asarray(node, dtype=float)
        if point.shape != (3,):
            raise ValueError("a node must have exactly three coordinates")
        self.nodes.append(point)

    def insert_cell(self, cell: Sequence[int]) -> None:
        """Append a hexahedron given by eight node indices."""
        if len(cell) != 8:
            raise ValueError("a hexahedron needs exactly eight nodes")
        self.cells.append(tuple(int(v) for v in cell))

    def number_of_nodes(self) -> int:
        return len(self.nodes)

    def number_of_cells(self) -> int:
        return len(self.cells)

    def number_of_edges(self) -> int:
        return len(self.edges)

    def number_of_faces(self) -> int:
        return len(self.faces)

    def vtk_cell_type(self) -> int:
        """VTK cell type of a hexahedron."""
        return 12

    def init_top(self) -> None:
        """Build faces, edges and their relations to the cells."""
        face_index: dict[tuple[int, ...], int] = {}
        face2cell: list[list[int]] = []
        cell2face: list[tuple[int, ...]] = []
        for i, cell in enumerate(self.cells):
            local = []
            for j, lf in enumerate(self.LOCAL_FACE):
                key = tuple(sorted(cell[v] for v in lf))
                k = face_index.get(key)
                if k is None:
                    k = len(face2cell)
                    face_index[key] = k
                    face2cell.append([i, i, j, j])
                else:
                    face2cell[k][1] = i
                    face2cell[k][3] = j
                local.append(k)
            cell2face.append(tuple(local))
        self.face2cell = [tuple(f) for f in face2cell]
        self.cell2face = cell2face
        self.faces = [
            tuple(self.cells[left][v] for v in self.LOCAL_FACE[j])
            for left, _, j, _ in self.face2cell
        ]

        edge_index: dict[tuple[int, int], int] = {}
        edges: list[tuple[int, int]] = []
        cell2edge: list[tuple[int, ...]] = []
        for cell in self.cells:
            local = []
            for a, b in self.LOCAL_EDGE:
                key = (min(cell[a], cell[b]), max(cell[a], cell[b]))
                k = edge_index.get(key)
                if k is None:
                    k = len(edges)
                    edge_index[key] = k
                    edges.append((cell[a], cell[b]))
                local.append(k)
            cell2edge.append(tuple(local))
        self.edges = edges
        self.cell2edge = cell2edge

    def edge_measure(self, i: int) -> float:
        a, b = self.edges[i]
        v = self.nodes[b] - self.nodes[a]
        return math.sqrt(float(v @ v))

    def edge_measures(self) -> list[float]:
        return [self.edge_measure(i) for i in range(self.number_of_edges())]

    def edge_barycenter(self, i: int) -> np.ndarray:
        a, b = self.edges[i]
        return (self.nodes[a] + self.nodes[b]) / 2.0

    def face_barycenter(self, i: int) -> np.ndarray:
        return sum((self.nodes[v] for v in self.faces[i]), np.zeros(3)) / 4.0

    def cell_barycenter(self, i: int) -> np.ndarray:
        return sum((self.nodes[v] for v in self.cells[i]), np.zeros(3)) / 8.0

    def cell_shape_function(self, rnode: Sequence[float]) -> np.ndarray:
        """Values of the eight trilinear shape functions at a point of [0, 1]^3."""
        u, v, w = _reference_point(rnode, 3)
        return np.array([
            (1 - u) * (1 - v) * (1 - w),
            u * (1 - v) * (1 - w),
            u * v * (1 - w),
            (1 - u) * v * (1 - w),
            (1 - u) * (1 - v) * w,
            u * (1 - v) * w,
            u * v * w,
            (1 - u) * v * w,
        ])

    def cell_grad_shape_function(self, rnode: Sequence[float]) -> np.ndarray:
        """Reference gradients of the shape functions, one row per vertex."""
        u, v, w = _reference_point(rnode, 3)
        return np.array([
            [-(1 - v) * (1 - w), -(1 - u) * (1 - w), -(1 - u) * (1 - v)],
            [(1 - v) * (1 - w), -u * (1 - w), -u * (1 - v)],
            [v * (1 - w), u * (1 - w), -u * v],
            [-v * (1 - w), (1 - u) * (1 - w), -(1 - u) * v],
            [-(1 - v) * w, -(1 - u) * w, (1 - u) * (1 - v)],
            [(1 - v) * w, -u * w, u * (1 - v)],
            [v * w, u * w, u * v],
            [-v * w, (1 - u) * w, (1 - u) * v],
        ])

    def cell_jacobi_matrix(self, i: int, rnode: Sequence[float]) -> np.ndarray:
        """Jacobi matrix of cell ``i``; row ``m`` is the derivative along axis ``m``."""
        gphi = self.cell_grad_shape_function(rnode)
        coords = np.array([self.nodes[v] for v in self.cells[i]])
        return gphi.T @ coords

    def face_shape_function(self, rnode: Sequence[float]) -> np.ndarray:
        """Values of the four bilinear shape functions at a point of [0, 1]^2."""
        u, v = _reference_point(rnode, 2)
        return np.array([(1 - u) * (1 - v), u * (1 - v), u * v, (1 - u) * v])

    def face_grad_shape_function(self, rnode: Sequence[float]) -> np.ndarray:
        """Reference gradients of the face shape functions, one row per vertex."""
        u, v = _reference_point(rnode, 2)
        return np.array([
            [-(1 - v), -(1 - u)],
            [1 - v, -u],
            [v, u],
            [-v, 1 - u],
        ])

    def face_jacobi_matrix(self, i: int, rnode: Sequence[float]) -> np.ndarray:
        """2x3 Jacobi matrix of face ``i``; rows are the two tangent derivatives."""
        gphi = self.face_grad_shape_function(rnode)
        coords = np.array([self.nodes[v] for v in self.faces[i]])
        return gphi.T @ coords

    def uniform_refine(self, n: int = 1) -> None:
        """Split every hexahedron into eight, ``n`` times."""
        if n < 0:
            raise ValueError("number of refinements must be non-negative")
        for _ in range(n):
            if len(self.cell2edge) != len(self.cells):
                self.init_top()
            nn = self.number_of_nodes()
            ne = self.number_of_edges()
            nf = self.number_of_faces()
            nc = self.number_of_cells()
            self.nodes.extend(self.edge_barycenter(j) for j in range(ne))
            self.nodes.extend(self.face_barycenter(j) for j in range(nf))
            self.nodes.extend(self.cell_barycenter(j) for j in range(nc))

            e0 = nn
            f0 = nn + ne
            c0 = nn + ne + nf
            old = list(zip(self.cells, self.cell2edge, self.cell2face))
            cells = []
            for k, r in enumerate(self.REFINE):
                for j, (c, c2e, c2f) in enumerate(old):
                    cells.append((
                        c[k],
                        e0 + c2e[r[1]],
                        f0 + c2f[r[2]],
                        e0 + c2e[r[3]],
                        e0 + c2e[r[4]],
                        f0 + c2f[r[5]],
                        c0 + j,
                        f0 + c2f[r[7]],
                    ))
            self.cells = cells
            self.init_top()

    def is_boundary_face(self) -> list[bool]:
        return [f[0] == f[1] for f in self.face2cell]

    def is_boundary_node(self) -> list[bool]:
        flags = [False] * self.number_of_nodes()
        for face, f2c in zip(self.faces, self.face2cell):
            if f2c[0] == f2c[1]:
                for v in face:
                    flags[v] = True
        return flags

    def cell_to_node(self) -> MeshTopology:
        return _topology(3, 0, self.number_of_nodes(), self.cells)

    def cell_to_cell(self) -> MeshTopology:
        """Cells across each face; a boundary face lists the cell itself."""
        nc = self.number_of_cells()
        adjacency: list[list[int]] = [[] for _ in range(nc)]
        for left, right, _, _ in self.face2cell:
            adjacency[left].append(right)
            if left != right:
                adjacency[right].append(left)
        return _topology(3, 3, nc, adjacency)

    def node_to_node(self) -> MeshTopology:
        nn = self.number_of_nodes()
        adjacency: list[list[int]] = [[] for _ in range(nn)]
        for a, b in self.edges:
            adjacency[a].append(b)
            adjacency[b].append(a)
        return _topology(0, 0, nn, adjacency)

    def node_to_cell(self) -> MeshTopology:
        """Cells around each node, with the node's local index in each cell."""
        nn = self.number_of_nodes()
        adjacency: list[list[int]] = [[] for _ in range(nn)]
        local: list[list[int]] = [[] for _ in range(nn)]
        for i, cell in enumerate(self.cells):
            for j, v in enumerate(cell):
                adjacency[v].append(i)
                local[v].append(j)
        return _topology(0, 3, self.number_of_cells(), adjacency, local)

    def __str__(self) -> str:
        sections = [
            ("Nodes", [tuple(float(x) for x in p) for p in self.nodes]),
            ("Edges", self.edges),
            ("Faces", self.faces),
            ("Cells", self.cells),
            ("Face2cell", self.face2cell),
            ("Cell2face", self.cell2face),
        ]
        lines = []
        for title, entities in sections:
            lines.append(f"{title}:")
            lines.extend(
                f"{i}:" + "".join(f" {v}" for v in e) for i, e in enumerate(entities)
            )
        return "\n".join(lines)