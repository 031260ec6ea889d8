from __future__ import annotations

import numpy as np

from .board import Board
from .shapes import Shape


def collides(shape: Shape, x: int, y: int, board: Board) -> bool:
    """True if `shape` placed with its top-left at (x, y) hits a wall, the floor or a settled cell.

    Cells above the top edge (negative rows) only collide with the side walls.
    """
    for i, j in zip(*np.nonzero(shape)):
        bx = x + int(j)
        by = y + int(i)
        if bx < 0 or bx >= board.cols or by >= board.rows:
            return True
        if by >= 0 and board.is_occupied(bx, by):
            return True
    return False
