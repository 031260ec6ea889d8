"""Game engine for the falling-block puzzle.

Exports the core engine and supporting classes:
- Board: settled-cell grid with row removal
- ActivePiece / ShapeKind: the falling piece and the shape catalog
- collides / rotate_clockwise: pure collision and rotation helpers
- PieceController: moves, rotation, drop and lock
- GameSession: game loop state machine and control surface
- ManualScheduler / ThreadedScheduler: tick sources
"""

from .board import Board
from .collision import collides
from .controller import PieceController
from .core import Action, GameConfig, GameSession, GameState, LoopState
from .events import (
    EVENT_LINE_CLEARED,
    EVENT_LOOP_STATE,
    EVENT_PIECE_LOCKED,
    EVENT_RENDER,
    EVENT_TOPPED_OUT,
    EventBus,
)
from .pieces import ActivePiece
from .rules import clear_full_rows
from .scheduler import ManualScheduler, Scheduler, ThreadedScheduler, TimerHandle
from .shapes import COLORS, SHAPES, ShapeKind, rotate_clockwise

__all__ = [
    "Action",
    "ActivePiece",
    "Board",
    "COLORS",
    "EVENT_LINE_CLEARED",
    "EVENT_LOOP_STATE",
    "EVENT_PIECE_LOCKED",
    "EVENT_RENDER",
    "EVENT_TOPPED_OUT",
    "EventBus",
    "GameConfig",
    "GameSession",
    "GameState",
    "LoopState",
    "ManualScheduler",
    "PieceController",
    "SHAPES",
    "Scheduler",
    "ShapeKind",
    "ThreadedScheduler",
    "TimerHandle",
    "clear_full_rows",
    "collides",
    "rotate_clockwise",
]
