"""Background actor for the scripted antagonist encounter."""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable, Sequence


class AntagonistTicker:
    """Emit the antagonist's warnings on a fixed period until cancelled.

    Emission and cancellation share one lock: once :meth:`cancel` has
    returned no further warning is written, even if the period elapses at
    the same moment.
    """

    def __init__(
        self,
        emit: Callable[[str], None],
        warnings: Sequence[str],
        period: float = 10.0,
        debug: Callable[[str], None] | None = None,
    ):
        self._emit = emit
        self._warnings = list(warnings)
        self.period = period
        self._debug = debug or (lambda message: None)
        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self.emitted = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop_event.is_set()

    @property
    def cancelled(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> None:
        if self._thread is not None or not self._warnings:
            return
        self._thread = threading.Thread(target=self._loop, name="antagonist-ticker", daemon=True)
        self._thread.start()
        self._debug(f"ticker started period {self.period}")

    def _loop(self) -> None:
        for message in itertools.cycle(self._warnings):
            if self._stop_event.wait(self.period):
                return
            with self._lock:
                if self._stop_event.is_set():
                    return
                self._emit(message)
                self.emitted += 1

    def cancel(self) -> bool:
        """Stop the ticker; return False if it was already cancelled."""
        with self._lock:
            if self._stop_event.is_set():
                return False
            self._stop_event.set()
        self._debug("ticker cancelled")
        return True

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)


__all__ = ["AntagonistTicker"]
