"""Countdown events and engine states."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Union


@dataclass(frozen=True, slots=True)
class Tick:
    """Periodic notification. ``remaining`` is milliseconds until the deadline."""

    remaining: int


@dataclass(frozen=True, slots=True)
class Finish:
    """Terminal notification. Delivered at most once per engine."""


CountdownEvent = Union[Tick, Finish]

EventHandler = Callable[[CountdownEvent], None]


class EngineState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"
    CANCELLED = "cancelled"
