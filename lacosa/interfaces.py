"""Protocol interfaces for engine backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .parser import Intent
    from .world import WorldState


@runtime_checkable
class IOBackend(Protocol):
    """Interface for input and output backends."""

    def get_input(self, prompt: str = "> ") -> str:  # pragma: no cover - interface
        """Return user input for the given prompt."""
        ...

    def output(self, text: str) -> None:  # pragma: no cover - interface
        """Display ``text`` to the user."""
        ...


@runtime_checkable
class Handler(Protocol):
    """A verb rule called for every intent.

    Implementations check the command type themselves and return an empty
    string when the intent is not theirs.
    """

    def __call__(self, world: WorldState, intent: Intent) -> str:  # pragma: no cover - interface
        """Apply the rule and return its narration."""
        ...


__all__ = ["IOBackend", "Handler"]
