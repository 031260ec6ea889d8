from __future__ import annotations

import numpy as np

from .shapes import ShapeKind

EMPTY = 0


class Board:
    """Fixed-size grid of settled cells.

    Row 0 is the top. Cells hold 0 when empty, otherwise the `ShapeKind`
    value whose color the cell is painted with.
    """

    def __init__(self, cols: int, rows: int) -> None:
        self.cols = int(cols)
        self.rows = int(rows)
        self.grid = np.zeros((self.rows, self.cols), dtype=np.int8)

    def clear(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_occupied(self, x: int, y: int) -> bool:
        return self.grid[y, x] != EMPTY

    def cell(self, x: int, y: int) -> int:
        return int(self.grid[y, x])

    def set_cell(self, x: int, y: int, color: int) -> None:
        assert self.is_inside(x, y), f"cell ({x}, {y}) outside {self.cols}x{self.rows} board"
        assert 1 <= color <= len(ShapeKind), f"color {color} is not a catalog kind"
        self.grid[y, x] = int(ShapeKind(color))

    def is_row_full(self, row: int) -> bool:
        assert 0 <= row < self.rows, f"row {row} outside board"
        return bool(np.all(self.grid[row] != EMPTY))

    def remove_row(self, row: int) -> None:
        """Drop `row` and shift everything above it down by one, leaving an empty top row."""
        assert 0 <= row < self.rows, f"row {row} outside board"
        self.grid[1 : row + 1] = self.grid[0:row].copy()
        self.grid[0] = EMPTY

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def view(self) -> np.ndarray:
        """Read-only view of the grid for renderers."""
        v = self.grid.view()
        v.flags.writeable = False
        return v

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
