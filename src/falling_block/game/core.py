from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, fields
from enum import Enum, IntEnum
from typing import Any, Callable, Mapping, Optional

import numpy as np

from .board import Board
from .controller import PieceController
from .events import EVENT_LINE_CLEARED, EVENT_LOOP_STATE, EVENT_RENDER, EventBus
from .pieces import ActivePiece
from .scheduler import ManualScheduler, Scheduler, TimerHandle
from .shapes import MAX_SHAPE_HEIGHT, MAX_SHAPE_WIDTH, ShapeKind

logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    SOFT_DROP = 3
    DROP = 4
    NONE = 5


class LoopState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


_CAMEL_KEYS = {"tickIntervalMs": "tick_interval_ms", "randomSeed": "random_seed"}


@dataclass
class GameConfig:
    cols: int = 10
    rows: int = 20
    tick_interval_ms: int = 500
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("cols", "rows", "tick_interval_ms"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.cols < MAX_SHAPE_WIDTH:
            raise ValueError(f"cols must be at least {MAX_SHAPE_WIDTH} to fit every piece, got {self.cols}")
        if self.rows < MAX_SHAPE_HEIGHT:
            raise ValueError(f"rows must be at least {MAX_SHAPE_HEIGHT} to fit every piece, got {self.rows}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known:
                raise ValueError(f"unknown config key: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)


@dataclass
class GameState:
    board: Board
    piece: Optional[ActivePiece] = None


class GameSession:
    """A running game: board, falling piece and the gravity timer.

    All public methods are the control surface for input adapters. They are
    serialised behind one lock, so a scheduler may call the tick from another
    thread. A render event follows every operation that changed the frame.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        scheduler: Optional[Scheduler] = None,
        bus: Optional[EventBus] = None,
        render: Optional[Callable[[np.ndarray, Optional[ActivePiece]], None]] = None,
        on_line_cleared: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.scheduler: Scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.bus = bus or EventBus()
        self.rng = random.Random(self.config.random_seed)
        self.state = GameState(board=Board(self.config.cols, self.config.rows))
        self.controller = PieceController(self.state.board, self.rng, self.bus)
        self.loop_state = LoopState.STOPPED
        self._timer: Optional[TimerHandle] = None
        self._generation = 0
        self._lock = threading.RLock()

        if render is not None:
            self.bus.subscribe(EVENT_RENDER, lambda sender, board, piece: render(board, piece))
        if on_line_cleared is not None:
            self.bus.subscribe(EVENT_LINE_CLEARED, lambda sender, row: on_line_cleared(row))

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def piece(self) -> Optional[ActivePiece]:
        return self.controller.piece

    @property
    def lines_cleared_total(self) -> int:
        return self.controller.lines_cleared_total

    @property
    def pieces_locked(self) -> int:
        return self.controller.pieces_locked

    @property
    def top_outs(self) -> int:
        return self.controller.top_outs

    # -- internals ---------------------------------------------------------

    def _sync(self) -> None:
        self.state.piece = self.controller.piece

    def _render(self) -> None:
        self._sync()
        self.bus.emit(EVENT_RENDER, board=self.board.view(), piece=self.state.piece)

    def _set_loop_state(self, state: LoopState) -> None:
        if state is not self.loop_state:
            logger.debug("loop %s -> %s", self.loop_state.value, state.value)
            self.loop_state = state
            self.bus.emit(EVENT_LOOP_STATE, state=state)

    def _start_timer(self) -> None:
        self._cancel_timer()
        generation = self._generation
        self._timer = self.scheduler.schedule_repeating(
            self.config.tick_interval_ms, lambda: self._on_timer(generation)
        )

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            # A thread-driven timer may fire after it was replaced.
            if generation != self._generation:
                return
            self.tick()

    # -- game loop ---------------------------------------------------------

    def start(self, kind: Optional[ShapeKind] = None) -> None:
        """Empty the board, spawn a piece and start ticking. Valid from any state."""
        with self._lock:
            self.board.clear()
            self.controller.spawn(kind)
            self._start_timer()
            self._set_loop_state(LoopState.RUNNING)
            self._render()

    reset = start

    def pause(self) -> bool:
        with self._lock:
            if self.loop_state is not LoopState.RUNNING:
                return False
            self._cancel_timer()
            self._set_loop_state(LoopState.PAUSED)
            return True

    def resume(self) -> bool:
        with self._lock:
            if self.loop_state is not LoopState.PAUSED:
                return False
            self._start_timer()
            self._set_loop_state(LoopState.RUNNING)
            return True

    def stop(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._set_loop_state(LoopState.STOPPED)

    def tick(self) -> None:
        """One gravity step: descend a row or lock. Ignored unless running."""
        with self._lock:
            if self.loop_state is not LoopState.RUNNING:
                return
            self.controller.drop()
            self._render()

    # -- control surface ---------------------------------------------------

    def move_left(self) -> bool:
        return self._translate(-1)

    def move_right(self) -> bool:
        return self._translate(1)

    def _translate(self, dx: int) -> bool:
        with self._lock:
            moved = self.controller.translate(dx)
            if moved:
                self._render()
            return moved

    def rotate_clockwise(self) -> bool:
        with self._lock:
            rotated = self.controller.rotate()
            if rotated:
                self._render()
            return rotated

    def soft_drop_one_or_lock(self) -> bool:
        """Returns True if the piece moved down, False if it locked (or there is no piece)."""
        with self._lock:
            if self.controller.piece is None:
                return False
            moved = self.controller.soft_drop()
            self._render()
            return moved

    def instant_lock_step(self) -> bool:
        """Manual equivalent of a gravity tick."""
        with self._lock:
            if self.controller.piece is None:
                return False
            moved = self.controller.hard_drop()
            self._render()
            return moved

    def apply(self, action: Action) -> None:
        action = Action(action)
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE_CW:
            self.rotate_clockwise()
        elif action == Action.SOFT_DROP:
            self.soft_drop_one_or_lock()
        elif action == Action.DROP:
            self.instant_lock_step()
        elif action == Action.NONE:
            pass

    # -- observation -------------------------------------------------------

    def get_state(self) -> np.ndarray:
        """Copy of the board with the falling piece overlaid as negative kind values."""
        with self._lock:
            state = self.board.clone_state()
            piece = self.controller.piece
            if piece is not None:
                for x, y in piece.cells():
                    if self.board.is_inside(x, y):
                        state[y, x] = -int(piece.kind)
            return state
