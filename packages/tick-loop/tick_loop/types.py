"""Shared types for the timer loop."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol

Callback = Callable[[], None]

if TYPE_CHECKING:
    from tick_loop.loop import Loop


class Clock(Protocol):
    """Monotonic millisecond time source."""

    def now(self) -> int: ...

    def sleep(self, ms: int) -> None: ...


class LoopError(RuntimeError):
    """Raised on loop misuse (re-entrant run)."""


class TimerHandle:
    """A scheduled callback. Ordered by deadline, then by scheduling order."""

    __slots__ = ("when", "seq", "callback", "_loop", "_cancelled")

    def __init__(self, when: int, seq: int, callback: Callback, loop: Loop) -> None:
        self.when = when
        self.seq = seq
        self.callback = callback
        self._loop: Loop | None = loop
        self._cancelled = False

    def __lt__(self, other: TimerHandle) -> bool:
        return (self.when, self.seq) < (other.when, other.seq)

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "pending"
        return f"<TimerHandle when={self.when} seq={self.seq} {state}>"

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Void the callback and drop it from its loop. Idempotent."""
        if self._cancelled:
            return
        self._cancelled = True
        loop = self._loop
        self._loop = None
        if loop is not None:
            loop._discard(self)

    def _detach(self) -> None:
        self._loop = None
