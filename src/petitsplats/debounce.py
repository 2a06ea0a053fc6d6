from __future__ import annotations

from collections.abc import Callable
import logging
import threading
from typing import Any, Protocol

from .errors import InvalidArgument

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 300


class TimerHandle(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


class Debouncer:
    def __init__(
        self,
        func: Callable[[Any], Any],
        wait_ms: int = DEFAULT_DEBOUNCE_MS,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        if wait_ms < 0:
            raise InvalidArgument(f"Debounce window must be >= 0 ms, got {wait_ms}")
        self._func = func
        self.wait_ms = wait_ms
        self._timer_factory = timer_factory or _thread_timer
        self._lock = threading.Lock()
        # Serializes calls into func between the timer thread and flush().
        self._call_lock = threading.RLock()
        self._timer: TimerHandle | None = None
        self._pending: tuple[Any] | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def __call__(self, value: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (value,)
            self._timer = self._timer_factory(self.wait_ms / 1000.0, self._fire)
            self._timer.start()

    def flush(self) -> Any:
        with self._call_lock:
            return self._run_pending()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def _fire(self) -> None:
        with self._call_lock:
            self._run_pending()

    def _run_pending(self) -> Any:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            pending = self._pending
            self._timer = None
            self._pending = None
        if pending is None:
            return None
        logger.debug("Debounced call with %r", pending[0])
        # func runs without self._lock so it may call back into the debouncer.
        return self._func(pending[0])


# The default timer calls back on a worker thread. Callers that share a
# controller with a UI event loop should pass that loop's single-shot timer.
def _thread_timer(interval: float, callback: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    return timer


def debounced_query(
    controller: Any,
    wait_ms: int = DEFAULT_DEBOUNCE_MS,
    timer_factory: TimerFactory | None = None,
) -> Debouncer:
    return Debouncer(controller.set_query, wait_ms=wait_ms, timer_factory=timer_factory)
