"""
Timers behind the "scroll to and flash" effect.

A presentation layer hands every :class:`FlashEvent` to a
:class:`HighlightScheduler` together with its own scroll/highlight hooks.
Scheduling a new event cancels the timers still pending for the previous
one, so a stale un-highlight never fires on top of a fresh highlight.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Protocol

from json_explorer.state.navigator import FlashEvent
from json_explorer.tree.paths import JsonPath

logger = logging.getLogger(__name__)

PathCallback = Callable[[JsonPath], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class HighlightScheduler:
    def __init__(
        self,
        on_scroll: PathCallback,
        on_flash: PathCallback,
        on_unflash: PathCallback,
        timer_factory: Optional[TimerFactory] = None,
    ) -> None:
        self._on_scroll = on_scroll
        self._on_flash = on_flash
        self._on_unflash = on_unflash
        self._timer_factory = timer_factory or thread_timer
        self._pending: list[TimerHandle] = []
        self._lock = threading.RLock()

    def __call__(self, event: FlashEvent) -> None:
        self.schedule(event)

    def schedule(self, event: FlashEvent) -> None:
        with self._lock:
            self._cancel_pending()
            self._pending.append(
                self._timer_factory(event.settle_delay, lambda: self._reveal(event))
            )

    def cancel(self) -> None:
        with self._lock:
            self._cancel_pending()

    def _reveal(self, event: FlashEvent) -> None:
        self._on_scroll(event.path)
        self._on_flash(event.path)
        with self._lock:
            self._pending.append(
                self._timer_factory(event.duration, lambda: self._on_unflash(event.path))
            )

    def _cancel_pending(self) -> None:
        if self._pending:
            logger.debug("Cancelling %d pending highlight timers", len(self._pending))
        for handle in self._pending:
            handle.cancel()
        self._pending = []
