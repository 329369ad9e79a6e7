"""
Cell ownership grid.

Cells are stored row-major (cells[y, x]) as int8 Color values, so every
cell always holds exactly one of the two colors.
"""

import numpy as np
from enum import IntEnum

from territory.errors import OutOfBounds


class Color(IntEnum):
    DARK = 0
    LIGHT = 1

    @property
    def opposite(self) -> 'Color':
        return Color.LIGHT if self is Color.DARK else Color.DARK


class Grid:
    """Square grid of cells, each owned by DARK or LIGHT."""

    def __init__(self, cells: np.ndarray):
        cells = np.asarray(cells, dtype=np.int8)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ValueError(f"Grid must be square, got shape {cells.shape}")
        if not np.isin(cells, (Color.DARK, Color.LIGHT)).all():
            raise ValueError("Grid cells must hold Color values only")
        self.cells = cells.copy()

    @classmethod
    def split(cls, size: int) -> 'Grid':
        """Left half DARK, right half LIGHT."""
        cells = np.full((size, size), Color.LIGHT, dtype=np.int8)
        columns = np.arange(size)
        cells[:, columns < size / 2] = Color.DARK
        return cls(cells)

    @property
    def size(self) -> int:
        return self.cells.shape[0]

    def _check(self, x: int, y: int):
        n = self.size
        if not (0 <= x < n and 0 <= y < n):
            raise OutOfBounds(f"Cell ({x}, {y}) outside grid of size {n}")

    def color_at(self, x: int, y: int) -> Color:
        self._check(x, y)
        return Color(int(self.cells[y, x]))

    def flip(self, x: int, y: int):
        self._check(x, y)
        self.cells[y, x] = self.color_at(x, y).opposite

    def count_color(self, color: Color) -> int:
        # fresh full scan, no cached count
        return int(np.count_nonzero(self.cells == color))

    def snapshot(self) -> np.ndarray:
        view = self.cells.copy()
        view.flags.writeable = False
        return view
