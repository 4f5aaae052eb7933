"""Adjacency relations between two kinds of mesh entities."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class AdjEntitySet:
    """The B entities adjacent to one A entity.

    ``local`` holds, for each adjacent entity, the local index of the A
    entity inside it, or ``None`` when the relation carries no local indices.
    """

    id: int
    entities: tuple[int, ...]
    local: tuple[int, ...] | None = None

    def __len__(self) -> int:
        return len(self.entities)

    def __getitem__(self, i: int) -> int:
        return self.entities[i]

    def __iter__(self) -> Iterator[int]:
        return iter(self.entities)


class MeshTopology:
    """Adjacency from entities A to entities B in offset (CSR) form.

    ``neighbors`` lists the adjacent B entities of every A entity one after
    another, ``locations`` holds where each A entity's run starts (with one
    trailing entry), and ``local_indices`` optionally runs parallel to
    ``neighbors``.
    """

    def __init__(self, ta: int = -1, tb: int = -1, na: int = 0, nb: int = 0) -> None:
        self.neighbors: list[int] = []
        self.local_indices: list[int] = []
        self.locations: list[int] = []
        self.init(ta, tb, na, nb)

    def init(self, ta: int, tb: int, na: int, nb: int) -> None:
        """Set the dimensions and counts and reset the offsets to zero."""
        if na < 0 or nb < 0:
            raise ValueError("entity counts must be non-negative")
        self.ta = ta
        self.tb = tb
        self.na = na
        self.nb = nb
        self.locations = [0] * (na + 1)

    def empty(self) -> bool:
        """True when the relation has not been set up."""
        return self.ta == -1 or self.tb == -1 or self.na == 0 or self.nb == 0

    def clear(self) -> None:
        """Drop all data and return to the unset state."""
        self.neighbors = []
        self.local_indices = []
        self.locations = []
        self.ta = -1
        self.tb = -1
        self.na = 0
        self.nb = 0

    def _span(self, i: int) -> tuple[int, int]:
        if not 0 <= i < len(self.locations) - 1:
            raise IndexError(f"entity {i} out of range")
        return self.locations[i], self.locations[i + 1]

    def number_of_adj_entities(self, i: int) -> int:
        """Number of B entities adjacent to the A entity ``i``."""
        start, end = self._span(i)
        return end - start

    def adj_entities(self, i: int) -> AdjEntitySet:
        """The B entities adjacent to the A entity ``i``."""
        start, end = self._span(i)
        return AdjEntitySet(i, tuple(self.neighbors[start:end]))

    def adj_entities_with_local(self, i: int) -> AdjEntitySet:
        """The adjacent B entities of ``i`` together with local indices."""
        if len(self.local_indices) != len(self.neighbors):
            raise ValueError("this relation carries no local indices")
        start, end = self._span(i)
        return AdjEntitySet(
            i,
            tuple(self.neighbors[start:end]),
            tuple(self.local_indices[start:end]),
        )