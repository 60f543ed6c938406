from __future__ import annotations

import functools
import threading
from typing import Any, Callable, Protocol


class _Timer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], _Timer]


class Debouncer:
    """Delay ``func`` until ``wait_seconds`` pass without another call.

    Only the latest arguments are delivered. Used for search-as-you-type
    callers of the list and search endpoints.
    """

    def __init__(
        self,
        wait_seconds: float,
        func: Callable[..., Any],
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        if wait_seconds < 0:
            raise ValueError("wait_seconds must be >= 0")
        self.wait_seconds = wait_seconds
        self.func = func
        self.timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: _Timer | None = None
        self._pending: tuple[tuple[Any, ...], dict[str, Any]] | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = self.timer_factory(self.wait_seconds, self._fire)
            if isinstance(self._timer, threading.Thread):
                self._timer.daemon = True
            self._timer.start()

    def flush(self) -> Any:
        """Run the pending call now, if any, and return its result."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            pending, self._pending = self._pending, None
        if pending is None:
            return None
        args, kwargs = pending
        return self.func(*args, **kwargs)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
            pending, self._pending = self._pending, None
        if pending is not None:
            args, kwargs = pending
            self.func(*args, **kwargs)


def debounce(wait_seconds: float) -> Callable[[Callable[..., Any]], Debouncer]:
    def decorator(func: Callable[..., Any]) -> Debouncer:
        debouncer = Debouncer(wait_seconds, func)
        functools.update_wrapper(debouncer, func)
        return debouncer

    return decorator
