from __future__ import annotations

from typing import Callable, Dict

from blinker import Signal


class EventBus:
    """Synchronous event bus backed by blinker signals."""

    def __init__(self) -> None:
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn: Callable) -> None:
        sig = self._signals.setdefault(name, Signal(name))
        # Strong reference so lambdas and bound methods of short-lived adapters stay connected.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn: Callable) -> None:
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload) -> None:
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


EVENT_RENDER = "render"                # payload: board=np.ndarray (read-only), piece=ActivePiece|None
EVENT_LINE_CLEARED = "line_cleared"    # payload: row=int
EVENT_TOPPED_OUT = "topped_out"        # payload: piece=ActivePiece
EVENT_PIECE_LOCKED = "piece_locked"    # payload: piece=ActivePiece, lines=int
EVENT_LOOP_STATE = "loop_state"        # payload: state=LoopState
