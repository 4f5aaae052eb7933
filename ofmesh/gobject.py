"""Basic geometric entities that make up a geometric region."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class GObjectType(IntEnum):
    """Topological dimension of a geometric entity."""

    VERTEX = 0
    CURVE = 1
    SURFACE = 2
    PART = 3


@dataclass(frozen=True)
class GObject:
    """A named geometric entity with an id and a type."""

    name: str
    id: int
    type: GObjectType = GObjectType.VERTEX

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", GObjectType(self.type))