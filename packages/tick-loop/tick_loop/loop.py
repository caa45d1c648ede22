"""Loop - timer queue, pacing, and lifecycle hooks."""

from __future__ import annotations

import heapq
import logging
from typing import Callable

from tick_loop.clock import MonotonicClock
from tick_loop.types import Callback, Clock, LoopError, TimerHandle

logger = logging.getLogger(__name__)


class Loop:
    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock if clock is not None else MonotonicClock()
        self._heap: list[TimerHandle] = []
        self._seq = 0
        self._start_hooks: list[Callable[[Loop], None]] = []
        self._stop_hooks: list[Callable[[Loop], None]] = []
        self._stop_requested: bool = False
        self._running: bool = False
        self._stepping: bool = False

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def pending(self) -> int:
        return len(self._heap)

    @property
    def is_running(self) -> bool:
        return self._running

    def time(self) -> int:
        return self._clock.now()

    def next_deadline(self) -> int | None:
        return self._heap[0].when if self._heap else None

    # -- Scheduling --

    def call_at(self, when: int, callback: Callback) -> TimerHandle:
        handle = TimerHandle(when, self._seq, callback, self)
        self._seq += 1
        heapq.heappush(self._heap, handle)
        return handle

    def call_later(self, delay: int, callback: Callback) -> TimerHandle:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        return self.call_at(self._clock.now() + delay, callback)

    def cancel(self, handle: TimerHandle) -> None:
        handle.cancel()

    def _discard(self, handle: TimerHandle) -> None:
        try:
            self._heap.remove(handle)
        except ValueError:
            return
        heapq.heapify(self._heap)

    # -- Hooks --

    def on_start(self, hook: Callable[[Loop], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[Loop], None]) -> None:
        self._stop_hooks.append(hook)

    def stop(self) -> None:
        self._stop_requested = True

    # -- Running --

    def step(self) -> int:
        """Run every callback due now. Returns how many ran.

        Callbacks scheduled while stepping are left for the next pass, so a
        zero-delay reschedule cannot starve the caller.
        """
        if self._stepping:
            raise LoopError("step() called from inside a timer callback")
        now = self._clock.now()
        ready: list[TimerHandle] = []
        while self._heap and self._heap[0].when <= now:
            handle = heapq.heappop(self._heap)
            handle._detach()
            ready.append(handle)

        ran = 0
        self._stepping = True
        try:
            for handle in ready:
                if handle.cancelled:
                    continue
                ran += 1
                try:
                    handle.callback()
                except Exception:
                    logger.exception("Exception in timer callback %r", handle.callback)
        finally:
            self._stepping = False
        return ran

    def run(self, timeout: int | None = None) -> None:
        """Run until no timers are pending, stop() is called, or timeout ms pass."""
        until = None if timeout is None else self._clock.now() + timeout
        self._run(until, stop_when_idle=True)

    def run_for(self, ms: int) -> None:
        """Run until the clock has moved forward by ms, idle or not."""
        if ms < 0:
            raise ValueError("ms must be non-negative")
        self._run(self._clock.now() + ms, stop_when_idle=False)

    def _run(self, until: int | None, stop_when_idle: bool) -> None:
        if self._running:
            raise LoopError("loop is already running")
        self._running = True
        self._stop_requested = False
        for hook in self._start_hooks:
            hook(self)

        try:
            while not self._stop_requested:
                self.step()
                if self._stop_requested:
                    break
                now = self._clock.now()
                if until is not None and now >= until:
                    break
                if not self._heap:
                    if stop_when_idle or until is None:
                        break
                    wake = until
                else:
                    wake = self._heap[0].when
                    if until is not None:
                        wake = min(wake, until)
                self._clock.sleep(max(wake - now, 0))
        finally:
            self._running = False
            for hook in self._stop_hooks:
                hook(self)
