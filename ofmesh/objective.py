"""Objective functions over the patch of cells around one node."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np

from .topology import AdjEntitySet


class NodePatchObjective(ABC):
    """Quality of a node patch as a function of the position of its centre."""

    @abstractmethod
    def value(self, node: Sequence[float]) -> float:
        """Patch quality when the centre node is placed at ``node``."""

    @abstractmethod
    def gradient(self) -> np.ndarray:
        """Gradient of the patch quality at the centre node."""

    @abstractmethod
    def direction(self) -> np.ndarray:
        """Direction in which to move the centre node."""


class SumNodePatchObjective(NodePatchObjective):
    """Sum of the qualities of the cells around a node.

    ``patch`` is the node's entry of a node-to-cell relation carrying local
    indices; ``quality_cls`` is a cell quality class built from the mesh.
    """

    def __init__(self, mesh, patch: AdjEntitySet, quality_cls) -> None:
        if patch.local is None:
            raise ValueError("the patch must carry local indices")
        self.mesh = mesh
        self.patch = patch
        self._node = np.array(mesh.nodes[patch.id], dtype=float)
        self._quality = quality_cls(mesh)

    def value(self, node: Sequence[float]) -> float:
        pid = self.patch.id
        self.mesh.nodes[pid] = np.asarray(node, dtype=float)
        try:
            return float(sum(self._quality.quality(c) for c in self.patch))
        finally:
            self.mesh.nodes[pid] = self._node.copy()

    def gradient(self) -> np.ndarray:
        """Mean of the cell quality gradients at the centre node."""
        if len(self.patch) == 0:
            raise ValueError("the patch has no cells")
        total = sum(
            self._quality.gradient(c, j)
            for c, j in zip(self.patch.entities, self.patch.local)
        )
        return total / len(self.patch)

    def direction(self) -> np.ndarray:
        return -self.gradient()