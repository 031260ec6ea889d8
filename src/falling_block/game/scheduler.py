from __future__ import annotations

import heapq
import itertools
import threading
from typing import Callable, List, Protocol, Tuple

Callback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule_repeating(self, interval_ms: int, callback: Callback) -> TimerHandle: ...


def _check_interval(interval_ms: int) -> int:
    interval_ms = int(interval_ms)
    if interval_ms <= 0:
        raise ValueError(f"interval_ms must be positive, got {interval_ms}")
    return interval_ms


class _ManualTimer:
    def __init__(self, interval_ms: int, callback: Callback) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler on a virtual millisecond clock that only moves when `advance` is called."""

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: List[Tuple[int, int, _ManualTimer]] = []
        self._seq = itertools.count()

    def schedule_repeating(self, interval_ms: int, callback: Callback) -> _ManualTimer:
        timer = _ManualTimer(_check_interval(interval_ms), callback)
        heapq.heappush(self._queue, (self.now_ms + timer.interval_ms, next(self._seq), timer))
        return timer

    def advance(self, ms: int) -> int:
        """Move the clock forward by `ms`, firing due callbacks in order. Returns how many fired."""
        target = self.now_ms + int(ms)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now_ms = due
            timer.callback()
            fired += 1
            if not timer.cancelled:
                heapq.heappush(self._queue, (due + timer.interval_ms, next(self._seq), timer))
        self.now_ms = target
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for _, _, t in self._queue if not t.cancelled)


class _ThreadTimer:
    def __init__(self, interval_ms: int, callback: Callback) -> None:
        self._interval = interval_ms / 1000.0
        self._callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name="falling-block-tick", daemon=True)

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            self._callback()

    def cancel(self) -> None:
        self._stopped.set()


class ThreadedScheduler:
    """Fires callbacks from a daemon thread per timer.

    Callers must serialise state mutation themselves; `GameSession` does so with a lock.
    """

    def schedule_repeating(self, interval_ms: int, callback: Callback) -> _ThreadTimer:
        timer = _ThreadTimer(_check_interval(interval_ms), callback)
        timer._thread.start()
        return timer
