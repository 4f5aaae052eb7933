"""Patch quality and descent step for quadrilateral meshes."""

from __future__ import annotations

import math

import numpy as np

from .quality import QuadPositiveJacobiQuality
from .topology import AdjEntitySet, MeshTopology

_LENGTH_CAP = 100000.0


def _node_to_cell(mesh) -> MeshTopology:
    nn = len(mesh.nodes)
    adjacency: list[list[int]] = [[] for _ in range(nn)]
    local: list[list[int]] = [[] for _ in range(nn)]
    for i, cell in enumerate(mesh.cells):
        for j, v in enumerate(cell):
            adjacency[v].append(i)
            local[v].append(j)
    top = MeshTopology(0, 2, nn, len(mesh.cells))
    offsets = [0]
    for adj in adjacency:
        offsets.append(offsets[-1] + len(adj))
    top.locations = offsets
    top.neighbors = [c for adj in adjacency for c in adj]
    top.local_indices = [j for loc in local for j in loc]
    return top


class QuadJacobiPositiveQualityFunction:
    """Sum of corner Jacobi qualities over the cells around a node."""

    def __init__(self, mesh) -> None:
        self.mesh = mesh
        self._quality = QuadPositiveJacobiQuality(mesh)
        self._n2c = _node_to_cell(mesh)

    def _patch(self, i: int) -> AdjEntitySet:
        return self._n2c.adj_entities_with_local(i)

    def quality_of_cell(self, i: int) -> float:
        """Sum over the four corners of cell ``i`` of ``(L1 + L2) / (2 J)``."""
        p = [np.asarray(self.mesh.nodes[v], dtype=float)[:2] for v in self.mesh.cells[i]]
        q = 0.0
        for j in range(4):
            v1 = p[(j + 1) % 4] - p[j]
            v2 = p[(j + 3) % 4] - p[j]
            jac = float(v1[0] * v2[1] - v1[1] * v2[0])
            num = float(v1 @ v1 + v2 @ v2)
            q += num / (2.0 * jac) if jac != 0 else math.inf
        return q

    def value(self, i: int) -> float:
        """Sum of the cell qualities around node ``i``."""
        return sum(self.quality_of_cell(c) for c in self._patch(i))

    def gradient(self, i: int) -> np.ndarray:
        """Descent step at node ``i``: its length is the shortest patch edge.

        The zero vector is returned when the summed direction vanishes.
        """
        patch = self._patch(i)
        v0 = sum(
            (self.nabla(c, j) for c, j in zip(patch.entities, patch.local)),
            np.zeros(2),
        )
        norm = float(np.linalg.norm(v0))
        if norm == 0.0:
            return np.zeros(2)
        return self.min_len(i) * v0 / norm

    def nabla(self, c: int, i: int) -> np.ndarray:
        """Descent direction of cell ``c`` at its local vertex ``i``."""
        return -self._quality.gradient(c, i)

    def min_len(self, i: int) -> float:
        """Shortest edge leaving node ``i`` towards the next cell vertex."""
        nodes = self.mesh.nodes
        lengths = []
        patch = self._patch(i)
        for c, j in zip(patch.entities, patch.local):
            cell = self.mesh.cells[c]
            v = np.asarray(nodes[cell[(j + 1) % 4]], dtype=float) - np.asarray(
                nodes[cell[j]], dtype=float
            )
            lengths.append(float(np.linalg.norm(v)))
        return min([_LENGTH_CAP, *lengths])