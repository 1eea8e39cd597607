from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> Cancellable: ...


class ThreadingScheduler:
    """Runs delayed callbacks on daemon ``threading.Timer`` threads."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> Cancellable:
        timer = threading.Timer(delay_seconds, callback)
        timer.daemon = True
        timer.start()
        return timer


class Debouncer:
    """Fires ``callback`` once input has been quiet for ``wait_ms``.

    Every ``trigger`` cancels the pending task and schedules a new one. A
    generation counter guards against a timer that was already running when
    it got cancelled: only the task of the latest trigger may fire.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        wait_ms: int = 500,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.callback = callback
        self.wait_ms = max(0, wait_ms)
        self.scheduler = scheduler or ThreadingScheduler()
        self._lock = threading.Lock()
        self._generation = 0
        self._pending: Cancellable | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def trigger(self) -> None:
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            if self.wait_ms == 0:
                fire_now = True
            else:
                fire_now = False
                self._pending = self.scheduler.call_later(self.wait_ms / 1000, lambda: self._fire(generation))
        if fire_now:
            self.callback()

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()
            self._generation += 1

    def flush(self) -> bool:
        """Run a pending callback immediately; returns False when nothing was pending."""
        with self._lock:
            if self._pending is None:
                return False
            self._cancel_locked()
            self._generation += 1
        self.callback()
        return True

    def _cancel_locked(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug("debounce_stale_timer_dropped", extra={"generation": generation})
                return
            self._pending = None
        self.callback()
