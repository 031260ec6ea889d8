from __future__ import annotations

import logging
from typing import Callable, Optional

from .board import Board

logger = logging.getLogger(__name__)


def clear_full_rows(board: Board, on_line_cleared: Optional[Callable[[int], None]] = None) -> int:
    """Remove every full row, scanning bottom to top, and return how many were removed.

    `on_line_cleared(row)` fires before each removal. After a removal the same
    index is examined again because the row above has shifted into it.
    """
    cleared = 0
    y = board.rows - 1
    while y >= 0:
        if board.is_row_full(y):
            if on_line_cleared is not None:
                on_line_cleared(y)
            board.remove_row(y)
            cleared += 1
            logger.debug("cleared row %d", y)
        else:
            y -= 1
    return cleared
