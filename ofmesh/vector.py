"""A dense vector of floats with the few operations the solvers need."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator


class Vector:
    """Fixed-length vector of floats."""

    __slots__ = ("_data",)

    def __init__(self, values: Iterable[float] = ()) -> None:
        self._data = [float(v) for v in values]

    @classmethod
    def filled(cls, size: int, value: float = 0.0) -> "Vector":
        """Return a vector of ``size`` entries, all equal to ``value``."""
        if size < 0:
            raise ValueError("size must be non-negative")
        return cls([value] * size)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, i: int) -> float:
        return self._data[i]

    def __setitem__(self, i: int, value: float) -> None:
        self._data[i] = float(value)

    def __iter__(self) -> Iterator[float]:
        return iter(self._data)

    def _check_size(self, other: "Vector") -> None:
        if len(other) != len(self):
            raise ValueError(
                f"size mismatch: {len(self)} and {len(other)}"
            )

    def __sub__(self, other: "Vector") -> "Vector":
        self._check_size(other)
        return Vector(a - b for a, b in zip(self._data, other))

    def __iadd__(self, other: "Vector") -> "Vector":
        self._check_size(other)
        self._data = [a + b for a, b in zip(self._data, other)]
        return self

    def __isub__(self, other: "Vector") -> "Vector":
        self._check_size(other)
        self._data = [a - b for a, b in zip(self._data, other)]
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._data == other._data

    def norm(self) -> float:
        """Euclidean norm."""
        return math.sqrt(sum(v * v for v in self._data))

    def maxnorm(self) -> float:
        """Largest absolute entry, 0.0 for an empty vector."""
        return max((abs(v) for v in self._data), default=0.0)

    def __repr__(self) -> str:
        return f"Vector({self._data!r})"

    def __str__(self) -> str:
        body = "".join(f"{v} " for v in self._data)
        return f"Vector({len(self)})\n{body}\n"