"""Broadcast each intent to every handler and collect the narration."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .interfaces import Handler
from .parser import Intent
from .world import WorldState

Continuation = Callable[[str], list[str]]


class InputRouter:
    """Hold the continuation that will consume the next raw input line.

    Used while waiting for a door code or a dialogue choice: the line then
    bypasses the parser entirely.
    """

    def __init__(self) -> None:
        self._pending: Continuation | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def redirect(self, continuation: Continuation) -> None:
        self._pending = continuation

    def take(self) -> Continuation | None:
        continuation, self._pending = self._pending, None
        return continuation

    def clear(self) -> None:
        self._pending = None


class TurnDispatcher:
    """Flat broadcast over an ordered handler list.

    There is no routing table: every handler sees every intent and returns
    an empty string when it is not concerned.
    """

    def __init__(
        self,
        handlers: Sequence[Handler],
        messages: dict[str, str],
        on_room_changed: Callable[[str], None] | None = None,
    ):
        self.handlers = list(handlers)
        self.messages = messages
        self.on_room_changed = on_room_changed

    def dispatch(self, world: WorldState, intent: Intent) -> list[str]:
        if intent.command is None:
            return [self.messages["not_understood"]]
        before = world.current
        outputs = [handler(world, intent) for handler in self.handlers]
        lines = [text for text in outputs if text]
        if world.current != before:
            lines.append(world.describe_room())
            self.room_changed(world)
        return lines

    def room_changed(self, world: WorldState) -> None:
        world.debug(f"room_changed {world.current}")
        if self.on_room_changed:
            self.on_room_changed(world.current)


__all__ = ["TurnDispatcher", "InputRouter", "Continuation"]
