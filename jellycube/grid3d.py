"""Fixed-size three-dimensional grid of values."""

from __future__ import annotations

from collections.abc import Iterator
from itertools import product
from typing import Any


class Grid3D:
    """A dense 3D grid addressed by ``grid[x, y, z]``.

    Values are stored with ``x`` varying fastest, then ``y``, then ``z``.
    Every cell starts as ``0``.
    """

    def __init__(self, size_x: int, size_y: int, size_z: int) -> None:
        if min(size_x, size_y, size_z) < 0:
            raise ValueError("grid sizes must not be negative")
        self.size_x = size_x
        self.size_y = size_y
        self.size_z = size_z
        self._data: list[Any] = [0] * (size_x * size_y * size_z)

    def _offset(self, key: Any) -> int:
        if not isinstance(key, tuple) or len(key) != 3:
            raise TypeError("grid index must be a tuple (x, y, z)")
        x, y, z = key
        for value, size in zip(key, (self.size_x, self.size_y, self.size_z)):
            if not 0 <= value < size:
                raise IndexError(f"grid index {key} out of range")
        return self.size_x * self.size_y * z + self.size_x * y + x

    def __getitem__(self, key: tuple[int, int, int]) -> Any:
        return self._data[self._offset(key)]

    def __setitem__(self, key: tuple[int, int, int], value: Any) -> None:
        self._data[self._offset(key)] = value

    def __iter__(self) -> Iterator[Any]:
        """Yield the values with ``x`` outermost and ``z`` innermost."""
        for key in product(range(self.size_x), range(self.size_y), range(self.size_z)):
            yield self[key]

    def __len__(self) -> int:
        return len(self._data)