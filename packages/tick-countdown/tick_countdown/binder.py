"""DisplayBinder - routes countdown events to the render sink and observer."""
from __future__ import annotations

from typing import Any, Callable, Protocol

from tick_countdown.events import CountdownEvent, Tick
from tick_countdown.format import DisplayFormatter

Observer = Callable[[Any, CountdownEvent], None]


class DisplaySink(Protocol):
    def set_display_text(self, text: str) -> None: ...


class TextBuffer:
    """In-memory sink. Keeps the last text and every write in order."""

    def __init__(self) -> None:
        self.text = ""
        self.history: list[str] = []

    def set_display_text(self, text: str) -> None:
        self.text = text
        self.history.append(text)


class DisplayBinder:
    def __init__(
        self,
        owner: Any,
        formatter: DisplayFormatter,
        sink: DisplaySink,
    ) -> None:
        self._owner = owner
        self._formatter = formatter
        self._sink = sink
        self._observer: Observer | None = None
        self.auto_display = False

    @property
    def observer(self) -> Observer | None:
        return self._observer

    @property
    def sink(self) -> DisplaySink:
        return self._sink

    def set_observer(self, observer: Observer | None) -> None:
        """Replace the single observer slot. None clears it."""
        self._observer = observer

    def __call__(self, event: CountdownEvent) -> None:
        try:
            if isinstance(event, Tick) and self.auto_display:
                self._sink.set_display_text(self._formatter.render(event.remaining))
        finally:
            if self._observer is not None:
                self._observer(self._owner, event)
