"""Named data arrays grouped into components of fixed or variable size."""

from __future__ import annotations

import copy
from collections.abc import Iterator
from typing import Any


class _DataArray:
    """Named flat array of values with a default used for new entries."""

    def __init__(self, name: str, default: Any = 0) -> None:
        self.name = name
        self.default = default
        self.data: list[Any] = []

    @property
    def value_type(self) -> type:
        """Type of the default value."""
        return type(self.default)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.data)

    def _resize(self, n: int) -> None:
        if n < 0:
            raise ValueError("size must be non-negative")
        if n <= len(self.data):
            del self.data[n:]
        else:
            self.data.extend(copy.copy(self.default) for _ in range(n - len(self.data)))

    def _reset(self, i: int) -> None:
        self.data[i] = copy.copy(self.default)

    def _swap(self, i0: int, i1: int) -> None:
        self.data[i0], self.data[i1] = self.data[i1], self.data[i0]

    def _transfer(self, other, source: int | None, target: int | None) -> bool:
        if not (type(other) is type(self) and other.value_type is self.value_type):
            return False
        if source is None and target is None:
            n = len(other.data)
            if n > len(self.data):
                raise ValueError(
                    f"cannot transfer {n} values into an array of size {len(self.data)}"
                )
            if n:
                self.data[len(self.data) - n:] = list(other.data)
            return True
        if source is None or target is None:
            raise ValueError("give both source and target, or neither")
        self.data[target] = other.data[source]
        return True


class ComponentDataArray(_DataArray):
    """Data array split into consecutive components of ``csize`` values."""

    def __init__(self, name: str, csize: int = 1, default: Any = 0) -> None:
        if csize <= 0:
            raise ValueError("component size must be positive")
        super().__init__(name, default)
        self.csize = csize

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, i: int) -> Any:
        return self.data[i]

    def __setitem__(self, i: int, value: Any) -> None:
        self.data[i] = value

    def resize(self, n: int) -> None:
        """Truncate to ``n`` entries or pad with the default."""
        self._resize(n)

    def push_back(self) -> None:
        """Append one default entry."""
        self.data.append(copy.copy(self.default))

    def reset(self, i: int) -> None:
        """Set entry ``i`` back to the default."""
        self._reset(i)

    def swap(self, i0: int, i1: int) -> None:
        """Exchange entries ``i0`` and ``i1``."""
        self._swap(i0, i1)

    def transfer(self, other, source: int | None = None, target: int | None = None) -> bool:
        """Copy values from ``other``; return False if it is a different kind of array.

        With no indices, all of ``other`` overwrites the last entries of this
        array. With indices, ``other[source]`` is copied to ``self[target]``.
        """
        return self._transfer(other, source, target)

    def clone(self) -> "ComponentDataArray":
        """Copy with the same name, component size, default and data."""
        result = self.empty_clone()
        result.data = list(self.data)
        return result

    def empty_clone(self) -> "ComponentDataArray":
        """Copy with the same name, component size and default, but no data."""
        return ComponentDataArray(self.name, self.csize, self.default)

    def number_of_components(self) -> int:
        return len(self.data) // self.csize

    def component(self, i: int) -> list[Any]:
        """Values of component ``i``."""
        if not 0 <= i < self.number_of_components():
            raise IndexError(f"component {i} out of range")
        return self.data[i * self.csize:(i + 1) * self.csize]

    def components(self) -> Iterator[list[Any]]:
        """All complete components in order."""
        for i in range(self.number_of_components()):
            yield self.component(i)


class OffsetDataArray(_DataArray):
    """Data array split into components by an offset list.

    Component ``i`` holds ``data[offset[i]:offset[i + 1]]``.
    """

    def __init__(self, name: str, default: Any = 0) -> None:
        super().__init__(name, default)
        self.offset: list[int] = []

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, i: int) -> Any:
        return self.data[i]

    def __setitem__(self, i: int, value: Any) -> None:
        self.data[i] = value

    def resize(self, n: int) -> None:
        """Truncate to ``n`` entries or pad with the default."""
        self._resize(n)

    def push_back(self) -> None:
        """Append one default entry."""
        self.data.append(copy.copy(self.default))

    def reset(self, i: int) -> None:
        """Set entry ``i`` back to the default."""
        self._reset(i)

    def swap(self, i0: int, i1: int) -> None:
        """Exchange entries ``i0`` and ``i1``."""
        self._swap(i0, i1)

    def transfer(self, other, source: int | None = None, target: int | None = None) -> bool:
        """Copy values from ``other``; return False if it is a different kind of array.

        With no indices, all of ``other`` overwrites the last entries of this
        array. With indices, ``other[source]`` is copied to ``self[target]``.
        """
        return self._transfer(other, source, target)

    def clone(self) -> "OffsetDataArray":
        """Copy with the same name, default, data and offsets."""
        result = self.empty_clone()
        result.data = list(self.data)
        result.offset = list(self.offset)
        return result

    def empty_clone(self) -> "OffsetDataArray":
        """Copy with the same name and default, but no data or offsets."""
        return OffsetDataArray(self.name, self.default)

    def number_of_components(self) -> int:
        return max(len(self.offset) - 1, 0)

    def component(self, i: int) -> list[Any]:
        """Values of component ``i``."""
        if not 0 <= i < self.number_of_components():
            raise IndexError(f"component {i} out of range")
        return self.data[self.offset[i]:self.offset[i + 1]]

    def components(self) -> Iterator[list[Any]]:
        """All components in order."""
        for i in range(self.number_of_components()):
            yield self.component(i)