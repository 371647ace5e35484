"""Integrity checks for game data and save files."""

from __future__ import annotations

from typing import Any

from . import world
from .world_model import EXIT_GAME, Flags, LocationTag

_FLAG_NAMES = set(Flags.model_fields)


def _check_conditions(where: str, cfg: dict[str, Any] | None, w: world.WorldState, errors: list[str]) -> None:
    """Validate a preconditions or effect mapping."""
    if not cfg:
        return
    loc = cfg.get("is_location")
    if loc and loc not in w.rooms:
        errors.append(f"{where} references missing room '{loc}'")
    for cond in cfg.get("item_conditions") or []:
        item = cond.get("item")
        if item not in w.items:
            errors.append(f"{where} references missing item '{item}'")
        location = cond.get("location")
        if location and not isinstance(location, LocationTag) and location not in w.rooms:
            errors.append(f"{where} references missing location '{location}'")
    for name in cfg.get("flags") or {}:
        if name not in _FLAG_NAMES:
            errors.append(f"{where} references unknown flag '{name}'")


def validate_world_structure(w: world.WorldState) -> list[str]:
    """Validate cross references inside the world and return error messages."""

    errors: list[str] = []

    if w.current not in w.rooms:
        errors.append(f"Start room '{w.current}' does not exist")

    for room_id, room in w.rooms.items():
        for direction, target in room.exits.items():
            if target != EXIT_GAME and target not in w.rooms:
                errors.append(f"Room '{room_id}' has exit {direction.value} to missing room '{target}'")
        if room.locked and not room.code:
            errors.append(f"Room '{room_id}' is locked but has no code")
        if room.entry:
            _check_conditions(f"Room '{room_id}' entry", room.entry.preconditions, w, errors)
            for gate in room.entry.refusals:
                _check_conditions(f"Room '{room_id}' entry refusal", gate.preconditions, w, errors)
                _check_conditions(f"Room '{room_id}' entry refusal", gate.effect, w, errors)

    for item_id, item in w.items.items():
        loc = item.location
        if loc is not None and not isinstance(loc, LocationTag) and loc not in w.rooms:
            errors.append(f"Item '{item_id}' is in missing room '{loc}'")
        if item.take:
            _check_conditions(f"Item '{item_id}' take", item.take.preconditions, w, errors)
            _check_conditions(f"Item '{item_id}' take", item.take.effect, w, errors)

    for char_id, char in w.characters.items():
        if char.room is not None and char.room not in w.rooms:
            errors.append(f"Character '{char_id}' is in missing room '{char.room}'")
        _check_conditions(f"Character '{char_id}' talk", char.talk_preconditions, w, errors)

    for char_id, dialogue in w.dialogues.items():
        if char_id not in w.characters:
            errors.append(f"Dialogue for missing character '{char_id}'")
        nodes = {line.node for line in dialogue.lines}
        for line in dialogue.lines:
            if dialogue.reply(line.reply) is None:
                errors.append(f"Dialogue '{char_id}' line {line.id} references missing reply {line.reply}")
        for reply in dialogue.replies:
            if reply.next_node is not None and reply.next_node not in nodes:
                errors.append(f"Dialogue '{char_id}' reply {reply.id} leads to empty node {reply.next_node}")
            _check_conditions(f"Dialogue '{char_id}' reply {reply.id}", reply.effect, w, errors)

    for action in w.actions:
        if action.item not in w.items:
            errors.append(f"Action '{action.trigger}' references missing item '{action.item}'")
        _check_conditions(f"Action '{action.trigger} {action.item}'", action.preconditions, w, errors)
        _check_conditions(f"Action '{action.trigger} {action.item}'", action.effect, w, errors)

    scenario = w.scenario
    if scenario.torch:
        torch = w.items.get(scenario.torch)
        if torch is None:
            errors.append(f"Scenario torch '{scenario.torch}' does not exist")
        elif torch.activation is None:
            errors.append(f"Scenario torch '{scenario.torch}' is not activatable")
    antagonist = scenario.antagonist
    if antagonist:
        if antagonist.character not in w.characters:
            errors.append(f"Antagonist references missing character '{antagonist.character}'")
        if antagonist.room not in w.rooms:
            errors.append(f"Antagonist references missing room '{antagonist.room}'")
        for item in (antagonist.trigger_item, antagonist.hint_item):
            if item and item not in w.items:
                errors.append(f"Antagonist references missing item '{item}'")
        if antagonist.period <= 0:
            errors.append(f"Antagonist period '{antagonist.period}' must be positive")
    if scenario.climax:
        if scenario.climax.character not in w.characters:
            errors.append(f"Climax references missing character '{scenario.climax.character}'")
        if scenario.climax.room not in w.rooms:
            errors.append(f"Climax references missing room '{scenario.climax.room}'")

    return errors


def validate_save(data: dict[str, Any], w: world.WorldState) -> list[str]:
    """Validate that a save file only references existing data."""

    errors: list[str] = []
    current = data.get("current")
    if current and current not in w.rooms:
        errors.append(f"Save references missing room '{current}'")
    for item_id, cfg in (data.get("items") or {}).items():
        if item_id not in w.items:
            errors.append(f"Save references missing item '{item_id}'")
            continue
        loc = (cfg or {}).get("location")
        if loc and loc != LocationTag.INVENTORY.value and loc not in w.rooms:
            errors.append(f"Save places item '{item_id}' in missing room '{loc}'")
    for room_id in data.get("rooms") or {}:
        if room_id not in w.rooms:
            errors.append(f"Save references missing room '{room_id}'")
    for char_id in data.get("characters") or {}:
        if char_id not in w.characters:
            errors.append(f"Save references missing character '{char_id}'")
    for name in data.get("flags") or {}:
        if name not in _FLAG_NAMES:
            errors.append(f"Save references unknown flag '{name}'")
    return errors


__all__ = ["validate_world_structure", "validate_save"]
