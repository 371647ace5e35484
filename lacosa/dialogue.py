"""Branching conversations with characters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .world import WorldState
from .world_model import Dialogue, PlayerLine

CLIMAX_EVENT = "climax"


class DialogueState(Enum):
    INACTIVE = "inactive"
    AWAITING_CHOICE = "awaiting_choice"
    TERMINATED = "terminated"


class Outcome(Enum):
    CONTINUE = "continue"
    TERMINATE = "terminate"
    TERMINATE_AND_TRIGGER = "terminate_and_trigger"


@dataclass
class DialogueResult:
    outcome: Outcome
    lines: list[str] = field(default_factory=list)
    event: str | None = None

    @property
    def finished(self) -> bool:
        return self.outcome is not Outcome.CONTINUE


class DialogueEngine:
    """Walk one character's line/reply graph, one numeric choice at a time.

    Options are re-filtered on every prompt, so the number typed by the
    player always refers to the list that was shown last.
    """

    def __init__(self, messages: dict[str, str]):
        self.messages = messages
        self.state = DialogueState.INACTIVE
        self.world: WorldState | None = None
        self.character_id: str | None = None
        self.node: int | None = None
        self.continuation: str | None = None
        self._dialogue = Dialogue()

    def options(self) -> list[PlayerLine]:
        return [line for line in self._dialogue.lines if line.node == self.node and not line.used]

    def _render_options(self, options: list[PlayerLine]) -> str:
        rows = [self.messages["dialogue_options"]]
        rows.extend(f"{index}. {line.text.strip()}" for index, line in enumerate(options, start=1))
        rows.append(self.messages["dialogue_prompt"])
        return "\n".join(rows)

    def start(self, world: WorldState, character_id: str, continuation: str | None = None) -> DialogueResult:
        self.world = world
        self.character_id = character_id
        self.continuation = continuation
        self._dialogue = world.dialogues.get(character_id) or Dialogue()
        self.node = 1
        self.state = DialogueState.AWAITING_CHOICE
        world.debug(f"dialogue start {character_id} node {self.node}")
        options = self.options()
        if not options:
            return self._terminate(world, character_id, [])
        return DialogueResult(Outcome.CONTINUE, [self._render_options(options)])

    def choose(self, raw: str) -> DialogueResult:
        world, char_id = self.world, self.character_id
        if self.state is not DialogueState.AWAITING_CHOICE or world is None or char_id is None:
            raise RuntimeError("No dialogue is waiting for a choice")
        options = self.options()
        try:
            choice = int(raw.strip())
        except ValueError:
            return self._reprompt(self.messages["dialogue_not_a_number"])
        if not 1 <= choice <= len(options):
            msg = self.messages["dialogue_out_of_range"].format(count=len(options))
            return self._reprompt(msg)

        line = options[choice - 1]
        line.used = True
        world.debug(f"dialogue {char_id} line {line.id} used")
        lines: list[str] = []
        reply = self._dialogue.reply(line.reply)
        next_node = None
        if reply is not None:
            name = world.characters[char_id].name
            lines.append(self.messages["dialogue_reply"].format(name=name, text=reply.text.strip()))
            next_node = reply.next_node
        world.refresh_observation()
        if reply is not None:
            world.apply_effect(reply.effect)
        if next_node is None:
            return self._terminate(world, char_id, lines)
        self.node = next_node
        world.debug(f"dialogue {char_id} node {self.node}")
        options = self.options()
        if not options:
            return self._terminate(world, char_id, lines)
        lines.append(self._render_options(options))
        return DialogueResult(Outcome.CONTINUE, lines)

    def _reprompt(self, error: str) -> DialogueResult:
        return DialogueResult(Outcome.CONTINUE, [error, self.messages["dialogue_prompt"]])

    def _terminate(self, world: WorldState, char_id: str, lines: list[str]) -> DialogueResult:
        self.state = DialogueState.TERMINATED
        world.mark_interacted(char_id)
        lines.append(self.messages["dialogue_end"])
        climax = world.scenario.climax
        if climax and climax.character == char_id and world.current == climax.room:
            return DialogueResult(Outcome.TERMINATE_AND_TRIGGER, lines, CLIMAX_EVENT)
        if self.continuation:
            return DialogueResult(Outcome.TERMINATE_AND_TRIGGER, lines, self.continuation)
        return DialogueResult(Outcome.TERMINATE, lines)


__all__ = ["DialogueEngine", "DialogueResult", "DialogueState", "Outcome", "CLIMAX_EVENT"]
