"""World state loaded from data files."""

from __future__ import annotations

import inspect
import os
import sys
from pathlib import Path
from typing import Any

import yaml

from .world_model import (
    Action,
    Character,
    Dialogue,
    Flags,
    Item,
    LocationTag,
    ObservationReason,
    Room,
    Scenario,
)


def _convert_tags(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _convert_tags(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_convert_tags(v) for v in obj]
    if isinstance(obj, str) and obj in LocationTag._value2member_map_:
        return LocationTag(obj)
    return obj


class WorldState:
    """Mutable aggregate of rooms, items, characters, dialogues and narrative flags.

    The inventory is not stored separately: an item belongs to the inventory
    when its location is :attr:`LocationTag.INVENTORY`, so every item sits in
    exactly one place.
    """

    def __init__(self, data: dict[str, Any], debug: bool = False):
        data = _convert_tags(data)
        self._debug_enabled = debug
        self.rooms = {room_id: Room(**cfg) for room_id, cfg in data.get("rooms", {}).items()}
        self.items = {item_id: Item(**cfg) for item_id, cfg in data.get("items", {}).items()}
        self.characters = {char_id: Character(**cfg) for char_id, cfg in data.get("characters", {}).items()}
        self.dialogues = {char_id: Dialogue(**cfg) for char_id, cfg in (data.get("dialogues") or {}).items()}
        self.actions = [Action(**act) for act in data.get("actions", [])]
        self.scenario = Scenario(**(data.get("scenario") or {}))
        antagonist = self.scenario.antagonist
        if antagonist and antagonist.character in self.characters:
            self.characters[antagonist.character].health = antagonist.health
        self.flags = Flags(**(data.get("flags") or {}))
        self.current: str = data["start"]
        self.intro: str = data.get("intro", "")
        self._base = self._snapshot()

    @classmethod
    def from_file(cls, path: str | Path, debug: bool = False) -> "WorldState":
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return cls(data, debug=debug)

    def debug(self, message: str) -> None:
        if self._debug_enabled:
            frame = inspect.stack()[1]
            filename = os.path.basename(frame.filename)
            lineno = frame.lineno
            print(f"{filename}:{lineno} -- {message}", file=sys.stderr)

    # --- queries ---
    @property
    def room(self) -> Room:
        return self.rooms[self.current]

    def items_in_room(self, room_id: str | None = None) -> dict[str, Item]:
        room_id = room_id or self.current
        return {item_id: item for item_id, item in self.items.items() if item.location == room_id}

    def inventory(self) -> dict[str, Item]:
        return {item_id: item for item_id, item in self.items.items() if item.in_inventory}

    def characters_in_room(self, room_id: str | None = None) -> dict[str, Character]:
        room_id = room_id or self.current
        return {char_id: char for char_id, char in self.characters.items() if char.room == room_id}

    def in_inventory(self, item_id: str) -> bool:
        item = self.items.get(item_id)
        return bool(item and item.in_inventory)

    def is_dark(self) -> bool:
        return not self.room.visible and not self.flags.torch_lit

    def encounter_active(self) -> bool:
        """Return True while the antagonist is awake and still alive."""
        return self.flags.antagonist_active and not self.flags.antagonist_defeated

    def in_antagonist_room(self) -> bool:
        antagonist = self.scenario.antagonist
        return bool(antagonist and self.current == antagonist.room)

    def describe_room(self) -> str:
        room = self.room
        return f"{room.name}\n\n{room.description.rstrip()}"

    # --- mutations ---
    def move_to(self, room_id: str) -> None:
        self.current = room_id
        self.debug(f"location {room_id}")

    def move_item(self, item_id: str, location: str | LocationTag) -> None:
        item = self.items[item_id]
        item.location = location
        self.debug(f"item {item_id} location {location.value if isinstance(location, LocationTag) else location}")
        if location is LocationTag.INVENTORY:
            self.debug(f"inventory {list(self.inventory())}")

    def set_flag(self, name: str, value: bool) -> None:
        setattr(self.flags, name, value)
        self.debug(f"flag {name} {value}")

    def set_torch(self, lit: bool) -> None:
        self.set_flag("torch_lit", lit)
        torch = self.items.get(self.scenario.torch or "")
        if torch and torch.activation:
            torch.activation.active = lit

    def set_item_active(self, item_id: str, active: bool) -> None:
        if item_id == self.scenario.torch:
            self.set_torch(active)
            return
        item = self.items[item_id]
        if item.activation:
            item.activation.active = active
            self.debug(f"item {item_id} active {active}")

    def refresh_observation(self, room_id: str | None = None, *, force: bool = False) -> None:
        """Switch a room to its updated observation.

        Without ``force`` only rooms whose reason is ``event`` are switched.
        """
        room_id = room_id or self.current
        room = self.rooms[room_id]
        if force or room.reason is ObservationReason.EVENT:
            room.observation_updated = True
            self.debug(f"room {room_id} observation updated")

    def unlock(self, room_id: str) -> None:
        self.rooms[room_id].locked = False
        self.debug(f"room {room_id} unlocked")

    def mark_interacted(self, char_id: str) -> None:
        self.characters[char_id].interaction_occurred = True
        self.debug(f"character {char_id} interaction_occurred")

    def set_health(self, char_id: str, health: int) -> None:
        self.characters[char_id].health = health
        self.debug(f"character {char_id} health {health}")

    # --- preconditions and effects ---
    def _check_item_condition(self, cond: dict[str, Any]) -> bool:
        item = self.items.get(cond.get("item", ""))
        if not item:
            return False
        location = cond.get("location")
        if location is None:
            return True
        if location is LocationTag.INVENTORY:
            return item.in_inventory
        return item.location == location

    def check_preconditions(self, pre: dict[str, Any] | None) -> bool:
        if not pre:
            return True
        loc = pre.get("is_location")
        if loc and self.current != loc:
            return False
        for cond in pre.get("item_conditions") or []:
            if not self._check_item_condition(cond):
                return False
        for name, expected in (pre.get("flags") or {}).items():
            if getattr(self.flags, name) != expected:
                return False
        return True

    def apply_effect(self, effect: dict[str, Any] | None) -> None:
        if not effect:
            return
        for name, value in (effect.get("flags") or {}).items():
            self.set_flag(name, value)
        for cond in effect.get("item_conditions") or []:
            self.move_item(cond["item"], cond["location"])
        if effect.get("refresh_observation"):
            self.refresh_observation()

    # --- persistence ---
    def _snapshot(self) -> dict[str, Any]:
        return {
            "items": {item_id: self._item_state(item) for item_id, item in self.items.items()},
            "rooms": {room_id: self._room_state(room) for room_id, room in self.rooms.items()},
            "characters": {cid: self._character_state(char) for cid, char in self.characters.items()},
            "flags": self.flags.model_dump(),
        }

    @staticmethod
    def _item_state(item: Item) -> dict[str, Any]:
        location = item.location.value if isinstance(item.location, LocationTag) else item.location
        state: dict[str, Any] = {"location": location}
        if item.activation:
            state["active"] = item.activation.active
        return state

    @staticmethod
    def _room_state(room: Room) -> dict[str, Any]:
        return {"locked": room.locked, "observation_updated": room.observation_updated}

    @staticmethod
    def _character_state(char: Character) -> dict[str, Any]:
        return {"health": char.health, "interaction_occurred": char.interaction_occurred}

    def to_state(self) -> dict[str, Any]:
        """Return the minimal state describing differences from the base world."""
        state: dict[str, Any] = {"current": self.current}
        snapshot = self._snapshot()
        for section in ("items", "rooms", "characters"):
            diff = {
                key: value for key, value in snapshot[section].items() if value != self._base[section].get(key)
            }
            if diff:
                state[section] = diff
        flags = {k: v for k, v in snapshot["flags"].items() if v != self._base["flags"][k]}
        if flags:
            state["flags"] = flags
        used = {
            char_id: [line.id for line in dialogue.lines if line.used]
            for char_id, dialogue in self.dialogues.items()
            if any(line.used for line in dialogue.lines)
        }
        if used:
            state["used_lines"] = used
        return state

    def load_state(self, data: dict[str, Any]) -> None:
        self.current = data.get("current", self.current)
        for item_id, cfg in (data.get("items") or {}).items():
            item = self.items.get(item_id)
            if not item:
                continue
            location = cfg.get("location")
            item.location = LocationTag(location) if location in LocationTag._value2member_map_ else location
            if item.activation and "active" in cfg:
                item.activation.active = bool(cfg["active"])
        for room_id, cfg in (data.get("rooms") or {}).items():
            room = self.rooms.get(room_id)
            if room:
                room.locked = bool(cfg.get("locked", room.locked))
                room.observation_updated = bool(cfg.get("observation_updated", room.observation_updated))
        for char_id, cfg in (data.get("characters") or {}).items():
            char = self.characters.get(char_id)
            if char:
                char.health = int(cfg.get("health", char.health))
                char.interaction_occurred = bool(cfg.get("interaction_occurred", char.interaction_occurred))
        for name, value in (data.get("flags") or {}).items():
            setattr(self.flags, name, bool(value))
        for char_id, line_ids in (data.get("used_lines") or {}).items():
            dialogue = self.dialogues.get(char_id)
            if not dialogue:
                continue
            for line in dialogue.lines:
                if line.id in line_ids:
                    line.used = True
        self.debug(f"state_loaded current {self.current} inventory {list(self.inventory())}")


__all__ = ["WorldState"]
