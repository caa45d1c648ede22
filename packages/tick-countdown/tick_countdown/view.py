"""CountdownView - a countdown text component driven by a Loop."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tick_countdown.binder import DisplayBinder, DisplaySink, Observer, TextBuffer
from tick_countdown.config import CountdownConfig
from tick_countdown.engine import CountdownEngine
from tick_countdown.format import DisplayFormatter, TimeFormat
from tick_countdown.reconciler import RunReconciler

if TYPE_CHECKING:
    from tick_loop import Loop

logger = logging.getLogger(__name__)


class CountdownView:
    """Counts down toward ``time_in_future`` while started and visible.

    The host reports visibility through ``set_visible`` (or the
    ``on_visibility_changed`` / ``on_detached`` lifecycle hooks); the client
    calls ``start`` and ``cancel``. A fresh engine is built every time the
    view becomes both started and visible, and cancelled as soon as either
    stops holding, so a view that is never shown never schedules anything.

    Example::

        loop = Loop()
        view = CountdownView(loop, config=CountdownConfig(
            time_in_future=10_000, time_format=TimeFormat.MIN_SEC,
            auto_display_text=True,
        ))
        view.set_visible(True)
        view.start()
        loop.run()
    """

    def __init__(
        self,
        loop: Loop,
        sink: DisplaySink | None = None,
        config: CountdownConfig | None = None,
    ) -> None:
        self._loop = loop
        self._formatter = DisplayFormatter()
        self._binder = DisplayBinder(
            self, self._formatter, sink if sink is not None else TextBuffer()
        )
        self._reconciler = RunReconciler(self._run, self._pause)
        self._engine: CountdownEngine | None = None
        self._time_in_future = 0
        self._interval = 1000
        self.apply_config(config if config is not None else CountdownConfig())

    def __repr__(self) -> str:
        return (
            f"<CountdownView started={self.is_started} visible={self.is_visible} "
            f"running={self.is_running}>"
        )

    # -- Configuration --

    def apply_config(self, config: CountdownConfig) -> None:
        self._time_in_future = config.time_in_future
        self._interval = config.countdown_interval
        self._formatter.time_format = config.time_format
        self._formatter.template = config.template
        self._binder.auto_display = config.auto_display_text

    def set_time_in_future(self, ms: int) -> None:
        """Countdown length. Applies to the next engine, not a running one."""
        if ms < 0:
            raise ValueError("time_in_future must be non-negative")
        self._time_in_future = ms

    @property
    def time_in_future(self) -> int:
        return self._time_in_future

    def set_countdown_interval(self, ms: int) -> None:
        if ms <= 0:
            raise ValueError("countdown_interval must be positive")
        self._interval = ms

    @property
    def countdown_interval(self) -> int:
        return self._interval

    def set_time_format(self, time_format: TimeFormat | str) -> None:
        self._formatter.time_format = TimeFormat.parse(time_format)

    @property
    def time_format(self) -> TimeFormat:
        return self._formatter.time_format

    def set_format(self, template: str | None) -> None:
        """Wrap the time text in a ``%s`` template, or show it bare with None."""
        self._formatter.template = template

    @property
    def template(self) -> str | None:
        return self._formatter.template

    def set_auto_display_text(self, enabled: bool) -> None:
        self._binder.auto_display = bool(enabled)

    @property
    def auto_display_text(self) -> bool:
        return self._binder.auto_display

    def add_countdown_callback(self, observer: Observer | None) -> None:
        """Register the tick/finish observer, replacing any previous one."""
        self._binder.set_observer(observer)

    # -- Client control --

    def start(self) -> None:
        self._reconciler.set_started(True)

    def cancel(self) -> None:
        self._reconciler.set_started(False)

    # -- Host lifecycle --

    def set_visible(self, visible: bool) -> None:
        self._reconciler.set_visible(visible)

    def on_visibility_changed(self, visible: bool) -> None:
        self.set_visible(visible)

    def on_attached(self) -> None:
        self._reconciler.reconcile()

    def on_detached(self) -> None:
        self.set_visible(False)

    # -- Queries --

    @property
    def is_started(self) -> bool:
        return self._reconciler.started

    @property
    def is_visible(self) -> bool:
        return self._reconciler.visible

    @property
    def is_running(self) -> bool:
        return self._reconciler.running

    @property
    def engine(self) -> CountdownEngine | None:
        return self._engine

    @property
    def sink(self) -> DisplaySink:
        return self._binder.sink

    @property
    def display_text(self) -> str | None:
        sink = self._binder.sink
        return sink.text if isinstance(sink, TextBuffer) else None

    def format_remaining(self, ms: int) -> str:
        return self._formatter.render(ms)

    # -- Reconciler callbacks --

    def _run(self) -> None:
        if self._engine is not None:
            self._engine.cancel()
        self._engine = CountdownEngine(
            self._loop, self._time_in_future, self._interval, self._binder
        )
        logger.debug(
            "countdown started: %d ms every %d ms", self._time_in_future, self._interval
        )
        self._engine.start()

    def _pause(self) -> None:
        if self._engine is not None:
            self._engine.cancel()
            self._engine = None
            logger.debug("countdown paused")
