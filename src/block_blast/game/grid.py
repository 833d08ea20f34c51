from __future__ import annotations

from typing import List, Tuple

import numpy as np

from .shapes import Shape


class GameGrid:
    """Square board of binary cells.

    The grid uses 0 for empty cells and 1 for occupied ones and is indexed
    as ``grid[row, col]``. Shape offsets are (x, y), so offset (x, y) anchored
    at (row, col) lands on ``grid[row + y, col + x]``.
    """

    def __init__(self, size: int = 10) -> None:
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)

    @classmethod
    def from_array(cls, cells: np.ndarray) -> "GameGrid":
        arr = np.asarray(cells)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError(f"board must be square, got shape {arr.shape}")
        if not np.isin(arr, (0, 1)).all():
            raise ValueError("board cells must be 0 or 1")
        new_grid = cls(arr.shape[0])
        new_grid.grid = arr.astype(np.int8, copy=True)
        return new_grid

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def can_place(self, shape: Shape, row: int, col: int) -> bool:
        """Check if `shape` anchored at (row, col) fits on empty in-bounds cells."""
        for r, c in shape.cells_at(row, col):
            if not self.is_inside(r, c):
                return False
            if self.grid[r, c] != 0:
                return False
        return True

    def place_cells(self, shape: Shape, row: int, col: int) -> int:
        """
        Mark the shape's cells occupied and return the number of cells placed.
        Assumes position is already validated
        """
        for r, c in shape.cells_at(row, col):
            self.grid[r, c] = 1
        return shape.size

    def find_full_lines(self) -> Tuple[List[int], List[int]]:
        """Indices of full rows and full columns, both taken from the current board."""
        filled = self.grid != 0
        rows = [int(r) for r in np.flatnonzero(filled.all(axis=1))]
        cols = [int(c) for c in np.flatnonzero(filled.all(axis=0))]
        return rows, cols

    def clear_lines(self, rows: List[int], cols: List[int]) -> int:
        """Empty the given rows and columns and return how many cells were freed."""
        before = self.filled_count()
        if rows:
            self.grid[rows, :] = 0
        if cols:
            self.grid[:, cols] = 0
        return before - self.filled_count()

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def restore(self, cells: np.ndarray) -> None:
        if cells.shape != self.grid.shape:
            raise ValueError(f"snapshot shape {cells.shape} does not match board {self.grid.shape}")
        self.grid = np.array(cells, dtype=np.int8, copy=True)
