"""Tests for loop scheduling, cancellation, stepping, and running."""

import logging

import pytest
from tick_loop import Loop, LoopError, ManualClock, MonotonicClock, TimerHandle


def make_loop(start: int = 0) -> tuple[Loop, ManualClock]:
    clock = ManualClock(start)
    return Loop(clock), clock


# --- Initialization ---

def test_loop_defaults_to_monotonic_clock():
    loop = Loop()
    assert isinstance(loop.clock, MonotonicClock)
    assert loop.pending == 0
    assert loop.next_deadline() is None


def test_time_reads_clock():
    loop, clock = make_loop(start=1234)
    assert loop.time() == 1234
    clock.advance(6)
    assert loop.time() == 1240


# --- Scheduling ---

def test_call_later_returns_handle():
    loop, _ = make_loop()
    handle = loop.call_later(100, lambda: None)
    assert isinstance(handle, TimerHandle)
    assert handle.when == 100
    assert not handle.cancelled
    assert loop.pending == 1
    assert loop.next_deadline() == 100


def test_call_later_negative_delay_raises():
    loop, _ = make_loop()
    with pytest.raises(ValueError, match="non-negative"):
        loop.call_later(-1, lambda: None)


def test_call_at_uses_absolute_time():
    loop, clock = make_loop(start=50)
    handle = loop.call_at(80, lambda: None)
    assert handle.when == 80


# --- step() ---

def test_step_runs_only_due_callbacks():
    loop, clock = make_loop()
    calls = []
    loop.call_later(10, lambda: calls.append("a"))
    loop.call_later(20, lambda: calls.append("b"))

    assert loop.step() == 0
    clock.advance(10)
    assert loop.step() == 1
    assert calls == ["a"]
    clock.advance(10)
    assert loop.step() == 1
    assert calls == ["a", "b"]
    assert loop.pending == 0


def test_step_orders_by_deadline_then_fifo():
    loop, clock = make_loop()
    order = []
    loop.call_later(30, lambda: order.append("late"))
    loop.call_later(10, lambda: order.append("first"))
    loop.call_later(10, lambda: order.append("second"))
    loop.call_later(20, lambda: order.append("middle"))

    clock.advance(100)
    loop.step()
    assert order == ["first", "second", "middle", "late"]


def test_callbacks_scheduled_during_step_wait_for_next_pass():
    """Test a zero-delay reschedule does not run in the same pass."""
    loop, _ = make_loop()
    calls = []

    def again():
        calls.append(len(calls))
        loop.call_later(0, again)

    loop.call_later(0, again)
    assert loop.step() == 1
    assert loop.step() == 1
    assert calls == [0, 1]


def test_step_from_callback_raises():
    loop, _ = make_loop()
    errors = []

    def nested():
        try:
            loop.step()
        except LoopError as exc:
            errors.append(exc)

    loop.call_later(0, nested)
    loop.step()
    assert len(errors) == 1


def test_callback_exception_is_logged_and_pass_continues(caplog):
    loop, _ = make_loop()
    calls = []

    def boom():
        raise RuntimeError("boom")

    loop.call_later(0, boom)
    loop.call_later(0, lambda: calls.append("after"))

    with caplog.at_level(logging.ERROR, logger="tick_loop.loop"):
        ran = loop.step()

    assert ran == 2
    assert calls == ["after"]
    assert "Exception in timer callback" in caplog.text
    assert "boom" in caplog.text


# --- Cancellation ---

def test_cancel_removes_from_queue():
    loop, clock = make_loop()
    calls = []
    handle = loop.call_later(10, lambda: calls.append(1))
    handle.cancel()

    assert handle.cancelled
    assert loop.pending == 0
    clock.advance(10)
    loop.step()
    assert calls == []


def test_cancel_is_idempotent():
    loop, _ = make_loop()
    handle = loop.call_later(10, lambda: None)
    loop.cancel(handle)
    loop.cancel(handle)
    handle.cancel()
    assert loop.pending == 0


def test_cancel_keeps_other_timers_ordered():
    loop, clock = make_loop()
    order = []
    loop.call_later(30, lambda: order.append(30))
    middle = loop.call_later(20, lambda: order.append(20))
    loop.call_later(10, lambda: order.append(10))
    middle.cancel()

    assert loop.next_deadline() == 10
    clock.advance(30)
    loop.step()
    assert order == [10, 30]


def test_cancel_due_callback_from_earlier_callback_in_same_pass():
    """Test a handle already due in this pass is voided by cancel()."""
    loop, _ = make_loop()
    calls = []
    handles = []

    def killer():
        calls.append("killer")
        handles[0].cancel()

    loop.call_later(0, killer)
    handles.append(loop.call_later(0, lambda: calls.append("victim")))

    assert loop.step() == 1
    assert calls == ["killer"]
    assert handles[0].cancelled


def test_cancel_after_run_is_harmless():
    loop, _ = make_loop()
    handle = loop.call_later(0, lambda: None)
    loop.step()
    handle.cancel()
    assert loop.pending == 0


# --- run() / run_for() ---

def test_run_drains_timers_on_manual_clock():
    loop, clock = make_loop()
    fired = []
    for delay in (100, 250, 1000):
        loop.call_later(delay, lambda d=delay: fired.append((d, clock.now())))

    loop.run()

    assert fired == [(100, 100), (250, 250), (1000, 1000)]
    assert clock.now() == 1000
    assert not loop.is_running


def test_run_returns_immediately_when_idle():
    loop, clock = make_loop()
    loop.run()
    assert clock.now() == 0


def test_run_timeout_stops_before_later_timers():
    loop, clock = make_loop()
    fired = []
    loop.call_later(100, lambda: fired.append(100))
    loop.call_later(900, lambda: fired.append(900))

    loop.run(timeout=500)

    assert fired == [100]
    assert clock.now() == 500
    assert loop.pending == 1


def test_run_for_advances_even_when_idle():
    loop, clock = make_loop()
    loop.run_for(750)
    assert clock.now() == 750


def test_run_for_fires_timer_on_boundary():
    loop, clock = make_loop()
    fired = []
    loop.call_later(300, lambda: fired.append(clock.now()))
    loop.run_for(300)
    assert fired == [300]


def test_run_for_negative_raises():
    loop, _ = make_loop()
    with pytest.raises(ValueError):
        loop.run_for(-1)


def test_stop_from_callback():
    loop, clock = make_loop()
    fired = []
    loop.call_later(10, loop.stop)
    loop.call_later(20, lambda: fired.append(20))

    loop.run()

    assert fired == []
    assert clock.now() == 10
    assert loop.pending == 1


def test_run_is_not_reentrant():
    loop, _ = make_loop()
    errors = []

    def nested():
        try:
            loop.run()
        except LoopError as exc:
            errors.append(exc)

    loop.call_later(0, nested)
    loop.run()
    assert len(errors) == 1


def test_run_hooks_called_once():
    loop, _ = make_loop()
    events = []
    loop.on_start(lambda lp: events.append(("start", lp.is_running)))
    loop.on_stop(lambda lp: events.append(("stop", lp.is_running)))
    loop.call_later(10, lambda: events.append(("tick", None)))

    loop.run()

    assert events == [("start", True), ("tick", None), ("stop", False)]


def test_step_does_not_call_hooks():
    loop, _ = make_loop()
    hooks = []
    loop.on_start(lambda lp: hooks.append("start"))
    loop.on_stop(lambda lp: hooks.append("stop"))
    loop.step()
    assert hooks == []


def test_run_on_real_clock_paces_with_sleep():
    loop = Loop()
    start = loop.time()
    fired = []
    loop.call_later(30, lambda: fired.append(loop.time() - start))
    loop.run()
    assert len(fired) == 1
    assert fired[0] >= 30
