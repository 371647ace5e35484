"""Turn raw player input into structured intents."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from .world_model import Character, Command, CommandType, Direction, Item

_DIRECTIONS = {d.value: d for d in Direction if d is not Direction.INVALID}


@dataclass
class Intent:
    """Result of parsing one line.

    ``command`` is ``None`` when the verb was not understood. Entity fields
    hold ids; all of them may be filled at once and handlers decide which one
    matters for their verb.
    """

    command: Command | None
    room_item: str | None = None
    inventory_item: str | None = None
    direction: Direction | None = None
    character: str | None = None
    tokens: list[str] = field(default_factory=list)

    def is_a(self, command_type: CommandType) -> bool:
        return self.command is not None and self.command.type is command_type

    @property
    def has_arguments(self) -> bool:
        return len(self.tokens) > 1


def tokenize(raw: str, stopwords: Iterable[str]) -> list[str]:
    """Lowercase ``raw``, split it on whitespace and drop stopwords."""
    stop = set(stopwords)
    return [token for token in raw.lower().split() if token not in stop]


def resolve_command(token: str, catalog: Sequence[Command]) -> int | None:
    """Return the catalog index of the first command named or aliased by ``token``."""
    for index, command in enumerate(catalog):
        if command.matches(token):
            return index
    return None


def find_entity(token: str, pool: Mapping[str, Item | Character]) -> str | None:
    for entity_id, entity in pool.items():
        if entity.matches(token):
            return entity_id
    return None


def _scan_characters(tokens: Sequence[str], characters: Mapping[str, Character]) -> str | None:
    for token in tokens[1:]:
        found = find_entity(token, characters)
        if found:
            return found
    return None


def resolve_entities(
    tokens: Sequence[str],
    room_items: Mapping[str, Item],
    inventory: Mapping[str, Item],
    characters: Mapping[str, Character],
) -> tuple[str | None, str | None, str | None]:
    """Return ``(room_item, inventory_item, character)`` for the tokens after the verb.

    A room item found on the second token is looked up again on the third
    token when there is one; the inventory and character lookups fall back
    to the third token only when the second one found nothing.
    """
    room_item = find_entity(tokens[1], room_items)
    if room_item and len(tokens) > 2:
        room_item = find_entity(tokens[2], room_items)
    inventory_item = None
    if room_item is None:
        inventory_item = find_entity(tokens[1], inventory)
        if inventory_item is None and len(tokens) > 2:
            inventory_item = find_entity(tokens[2], inventory)
    character = find_entity(tokens[1], characters)
    if character is None and len(tokens) > 2:
        character = find_entity(tokens[2], characters)
    return room_item, inventory_item, character


class Parser:
    def __init__(self, catalog: Sequence[Command], stopwords: Iterable[str]):
        self.catalog = list(catalog)
        self.stopwords = set(stopwords)

    def parse(
        self,
        raw: str,
        room_items: Mapping[str, Item],
        inventory: Mapping[str, Item],
        characters: Mapping[str, Character],
    ) -> Intent | None:
        """Return the intent for ``raw`` or ``None`` when nothing is left after tokenizing."""
        tokens = tokenize(raw, self.stopwords)
        if not tokens:
            return None
        index = resolve_command(tokens[0], self.catalog)
        if index is None:
            return Intent(None, tokens=tokens)
        command = self.catalog[index]
        kind = command.type

        if kind is CommandType.MOVE and len(tokens) == 2:
            direction = _DIRECTIONS.get(tokens[1].lower(), Direction.INVALID)
            return Intent(command, direction=direction, tokens=tokens)
        if kind is CommandType.TALK:
            if len(tokens) == 1:
                return Intent(command, direction=Direction.INVALID, tokens=tokens)
            return Intent(command, character=_scan_characters(tokens, characters), tokens=tokens)
        if kind is CommandType.OBSERVE and len(tokens) > 1:
            return Intent(command, direction=Direction.INVALID, tokens=tokens)
        if kind is CommandType.SHOOT:
            return Intent(command, character=_scan_characters(tokens, characters), tokens=tokens)
        if len(tokens) == 1:
            return Intent(command, tokens=tokens)

        room_item, inventory_item, character = resolve_entities(tokens, room_items, inventory, characters)
        return Intent(
            command,
            room_item=room_item,
            inventory_item=inventory_item,
            character=character,
            tokens=tokens,
        )


__all__ = ["Intent", "Parser", "tokenize", "resolve_command", "resolve_entities", "find_entity"]
