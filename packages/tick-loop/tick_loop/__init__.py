"""tick-loop - A minimal single-threaded timer loop on a monotonic clock."""

from tick_loop.clock import ManualClock, MonotonicClock
from tick_loop.loop import Loop
from tick_loop.types import Clock, LoopError, TimerHandle

__all__ = [
    "Loop",
    "Clock",
    "MonotonicClock",
    "ManualClock",
    "TimerHandle",
    "LoopError",
]
