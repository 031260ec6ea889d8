import threading

import pytest

from falling_block.game import ManualScheduler, ThreadedScheduler


def test_manual_scheduler_fires_on_interval():
    sched = ManualScheduler()
    ticks = []
    sched.schedule_repeating(500, lambda: ticks.append(sched.now_ms))
    assert sched.advance(499) == 0
    assert sched.advance(1) == 1
    assert sched.advance(1000) == 2
    assert ticks == [500, 1000, 1500]


def test_cancel_stops_future_callbacks_and_is_idempotent():
    sched = ManualScheduler()
    ticks = []
    handle = sched.schedule_repeating(100, lambda: ticks.append(1))
    sched.advance(250)
    handle.cancel()
    handle.cancel()
    sched.advance(1000)
    assert len(ticks) == 2
    assert sched.pending == 0


def test_cancel_from_inside_callback():
    sched = ManualScheduler()
    ticks = []
    handle = None

    def cb():
        ticks.append(1)
        handle.cancel()

    handle = sched.schedule_repeating(100, cb)
    sched.advance(1000)
    assert ticks == [1]


def test_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        ManualScheduler().schedule_repeating(0, lambda: None)
    with pytest.raises(ValueError):
        ThreadedScheduler().schedule_repeating(-5, lambda: None)


def test_threaded_scheduler_ticks_until_cancelled():
    fired = threading.Event()
    count = []

    def cb():
        count.append(1)
        fired.set()

    handle = ThreadedScheduler().schedule_repeating(10, cb)
    assert fired.wait(2.0)
    handle.cancel()
    assert count
