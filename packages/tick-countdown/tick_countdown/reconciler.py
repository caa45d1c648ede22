"""RunReconciler - edge-triggered run/pause from started and visible flags."""
from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class RunReconciler:
    """Derives ``running = started and visible`` and acts only on its edges.

    ``on_run`` fires when running goes False -> True, ``on_pause`` when it goes
    True -> False. Repeating an input that does not change ``running`` is a
    no-op, so the two callbacks always alternate, starting with ``on_run``.
    """

    def __init__(
        self,
        on_run: Callable[[], None],
        on_pause: Callable[[], None],
    ) -> None:
        self._on_run = on_run
        self._on_pause = on_pause
        self._started = False
        self._visible = False
        self._running = False

    @property
    def started(self) -> bool:
        return self._started

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def running(self) -> bool:
        return self._running

    def set_started(self, started: bool) -> bool:
        self._started = bool(started)
        return self._reconcile()

    def set_visible(self, visible: bool) -> bool:
        self._visible = bool(visible)
        return self._reconcile()

    def reconcile(self) -> bool:
        return self._reconcile()

    def _reconcile(self) -> bool:
        running = self._started and self._visible
        if running == self._running:
            return running
        # Record first so a callback that re-enters sees the new state.
        self._running = running
        logger.debug(
            "running -> %s (started=%s, visible=%s)",
            running, self._started, self._visible,
        )
        if running:
            self._on_run()
        else:
            self._on_pause()
        return running
