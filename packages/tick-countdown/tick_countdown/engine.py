"""CountdownEngine - drift-corrected fixed-rate ticking toward a deadline."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tick_countdown.events import EngineState, EventHandler, Finish, Tick

if TYPE_CHECKING:
    from tick_loop import Loop, TimerHandle

logger = logging.getLogger(__name__)


class CountdownEngine:
    """One countdown session on a Loop.

    Ticks land on the nominal boundaries ``anchor + k * interval``. Boundaries
    missed while the process was stalled are skipped rather than replayed, and
    the last fire lands exactly on the deadline. A spent engine (finished or
    cancelled) cannot be restarted; build a new one.
    """

    def __init__(
        self,
        loop: Loop,
        duration: int,
        interval: int,
        on_event: EventHandler,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._loop = loop
        self._duration = duration
        self._interval = interval
        self._on_event = on_event
        self._state = EngineState.IDLE
        self._anchor = 0
        self._deadline = 0
        self._handle: TimerHandle | None = None

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def interval(self) -> int:
        return self._interval

    @property
    def deadline(self) -> int | None:
        if self._state is EngineState.IDLE:
            return None
        return self._deadline

    def remaining(self) -> int:
        """Milliseconds left, 0 once finished or cancelled, full duration when idle."""
        if self._state is EngineState.IDLE:
            return max(self._duration, 0)
        if self._state is not EngineState.RUNNING:
            return 0
        return max(self._deadline - self._loop.time(), 0)

    def start(self) -> None:
        if self._state is not EngineState.IDLE:
            logger.debug("start() ignored on %s engine", self._state.value)
            return
        now = self._loop.time()
        self._anchor = now
        self._deadline = now + self._duration
        self._state = EngineState.RUNNING
        self._schedule(now)

    def cancel(self) -> None:
        if self._state in (EngineState.FINISHED, EngineState.CANCELLED):
            return
        self._state = EngineState.CANCELLED
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def next_delay(self, now: int) -> int:
        left = self._deadline - now
        if left <= self._interval:
            return max(left, 0)
        return self._interval - (now - self._anchor) % self._interval

    def _schedule(self, now: int) -> None:
        self._handle = self._loop.call_later(self.next_delay(now), self._fire)

    def _fire(self) -> None:
        self._handle = None
        if self._state is not EngineState.RUNNING:
            return
        now = self._loop.time()
        remaining = self._deadline - now
        if remaining <= 0:
            self._state = EngineState.FINISHED
            self._on_event(Finish())
            return
        # Reschedule before emitting: the handler may cancel us.
        self._schedule(now)
        self._on_event(Tick(remaining))
