"""Input and output backends."""

from __future__ import annotations

import threading

from .interfaces import IOBackend


class ConsoleIO(IOBackend):
    """Read from stdin and write to stdout."""

    def get_input(self, prompt: str = "> ") -> str:
        return input(prompt)

    def output(self, text: str) -> None:
        print(text)


class SynchronizedIO(IOBackend):
    """Wrap another backend so whole messages from several threads never interleave."""

    def __init__(self, inner: IOBackend):
        self.inner = inner
        self._lock = threading.Lock()

    def get_input(self, prompt: str = "> ") -> str:
        return self.inner.get_input(prompt)

    def output(self, text: str) -> None:
        with self._lock:
            self.inner.output(text)


__all__ = ["ConsoleIO", "SynchronizedIO"]
