"""Monotonic clocks measured in integer milliseconds."""

import time


class MonotonicClock:
    def now(self) -> int:
        return time.monotonic_ns() // 1_000_000

    def sleep(self, ms: int) -> None:
        if ms > 0:
            time.sleep(ms / 1000.0)


class ManualClock:
    """Clock that only moves when told to.

    ``advance()`` moves time without running anything, which is how a stalled
    process looks to the loop. ``sleep()`` advances instantly, so a loop run on
    a ManualClock finishes without waiting.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("start must be non-negative")
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("cannot advance a clock backwards")
        self._now += ms
        return self._now

    def set(self, when: int) -> None:
        if when < self._now:
            raise ValueError("cannot move a clock backwards")
        self._now = when

    def sleep(self, ms: int) -> None:
        if ms > 0:
            self._now += ms
