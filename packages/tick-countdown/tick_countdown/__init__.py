"""tick-countdown - Visibility-aware countdown text component for tick-loop."""
from __future__ import annotations

from tick_countdown.binder import DisplayBinder, DisplaySink, TextBuffer
from tick_countdown.config import CountdownConfig
from tick_countdown.engine import CountdownEngine
from tick_countdown.events import CountdownEvent, EngineState, Finish, Tick
from tick_countdown.format import DisplayFormatter, TimeFormat, format_time, split_duration
from tick_countdown.reconciler import RunReconciler
from tick_countdown.view import CountdownView

__all__ = [
    "CountdownView",
    "CountdownConfig",
    "CountdownEngine",
    "CountdownEvent",
    "EngineState",
    "Tick",
    "Finish",
    "RunReconciler",
    "DisplayBinder",
    "DisplaySink",
    "TextBuffer",
    "DisplayFormatter",
    "TimeFormat",
    "format_time",
    "split_duration",
]
