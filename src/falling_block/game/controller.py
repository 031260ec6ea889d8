from __future__ import annotations

import logging
import random
from typing import Optional

from .board import Board
from .collision import collides
from .events import EVENT_LINE_CLEARED, EVENT_PIECE_LOCKED, EVENT_TOPPED_OUT, EventBus
from .pieces import ActivePiece
from .rules import clear_full_rows
from .shapes import ShapeKind

logger = logging.getLogger(__name__)


class PieceController:
    """Owns the falling piece and applies moves to it against a board.

    Every move is checked with `collides` first and is either applied whole
    or skipped; the only way cells reach the board is `lock`.
    """

    def __init__(self, board: Board, rng: Optional[random.Random] = None, bus: Optional[EventBus] = None) -> None:
        self.board = board
        self.rng = rng or random.Random()
        self.bus = bus or EventBus()
        self.piece: Optional[ActivePiece] = None
        self.pieces_locked = 0
        self.lines_cleared_total = 0
        self.top_outs = 0

    def _random_kind(self) -> ShapeKind:
        return self.rng.choice(list(ShapeKind))

    def spawn(self, kind: Optional[ShapeKind] = None) -> ActivePiece:
        """Place a new piece centered on the top row, wiping the board if it is already blocked."""
        if kind is None:
            kind = self._random_kind()
        piece = ActivePiece.spawn(ShapeKind(kind), self.board.cols)
        self.piece = piece
        if collides(piece.shape, piece.x, piece.y, self.board):
            logger.debug("topped out spawning %s; clearing board", piece.kind.name)
            self.board.clear()
            self.top_outs += 1
            self.bus.emit(EVENT_TOPPED_OUT, piece=piece)
        else:
            logger.debug("spawned %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        return piece

    def _try(self, candidate: ActivePiece) -> bool:
        if collides(candidate.shape, candidate.x, candidate.y, self.board):
            return False
        self.piece = candidate
        return True

    def translate(self, dx: int) -> bool:
        if self.piece is None:
            return False
        return self._try(self.piece.moved(dx, 0))

    def rotate(self) -> bool:
        if self.piece is None:
            return False
        return self._try(self.piece.rotated())

    def can_descend(self) -> bool:
        return self.piece is not None and not collides(self.piece.shape, self.piece.x, self.piece.y + 1, self.board)

    def drop(self) -> bool:
        """Descend one row, or lock and respawn when the piece is resting.

        Returns True when the piece moved down, False when it locked.
        """
        if self.piece is None:
            return False
        if self.can_descend():
            self.piece = self.piece.moved(0, 1)
            return True
        self.lock()
        return False

    # Gravity ticks and manual drops both take one row or lock.
    soft_drop = drop
    hard_drop = drop

    def merge(self) -> None:
        assert self.piece is not None, "merge without an active piece"
        value = int(self.piece.kind)
        for x, y in self.piece.cells():
            self.board.set_cell(x, y, value)

    def lock(self) -> int:
        """Merge the piece, clear full rows and spawn the next piece. Returns rows cleared."""
        assert self.piece is not None, "lock without an active piece"
        locked = self.piece
        self.merge()
        lines = clear_full_rows(self.board, lambda row: self.bus.emit(EVENT_LINE_CLEARED, row=row))
        self.pieces_locked += 1
        self.lines_cleared_total += lines
        logger.debug("locked %s at (%d, %d), %d rows cleared", locked.kind.name, locked.x, locked.y, lines)
        self.bus.emit(EVENT_PIECE_LOCKED, piece=locked, lines=lines)
        self.spawn()
        return lines
