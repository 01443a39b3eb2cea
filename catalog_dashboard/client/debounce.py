"""
Trailing debounce for search inputs.

Each call restarts the timer; the wrapped function runs once, with the
arguments of the last call, after ``wait`` seconds without calls.
"""

import threading
from typing import Any, Callable, Optional, Tuple


class Debouncer:
    def __init__(self, func: Callable[..., Any], wait: float = 0.3) -> None:
        self.func = func
        self.wait = wait
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Tuple[tuple, dict]] = None
        self._lock = threading.Lock()

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self.wait, self._fire)
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def _take_pending(self) -> Optional[Tuple[tuple, dict]]:
        with self._lock:
            pending, self._pending = self._pending, None
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            return pending

    def _fire(self) -> None:
        pending = self._take_pending()
        if pending is not None:
            args, kwargs = pending
            self.func(*args, **kwargs)

    def flush(self) -> None:
        """Run the pending call now instead of waiting for the timer."""
        self._fire()

    def cancel(self) -> None:
        self._take_pending()
