"""Verb handlers broadcast by the turn dispatcher."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import wraps
from typing import Any

from .dispatcher import InputRouter
from .interfaces import Handler
from .parser import Intent, find_entity
from .world import WorldState
from .world_model import (
    EXIT_GAME,
    Antagonist,
    Command,
    CommandType,
    Direction,
    LocationTag,
    ObservationReason,
)


def handles(command_type: CommandType):
    """Return an empty string for intents of any other command type."""

    def decorator(func):
        @wraps(func)
        def wrapper(self, world: WorldState, intent: Intent) -> str:
            if not intent.is_a(command_type):
                return ""
            return func(self, world, intent)

        return wrapper

    return decorator


class BaseHandler:
    def __init__(self, messages: dict[str, str]):
        self.messages = messages

    def msg(self, key: str, **kwargs: Any) -> str:
        text = self.messages[key]
        return text.format(**kwargs) if kwargs else text


class TalkHandler(BaseHandler):
    def __init__(self, messages: dict[str, str], begin_dialogue: Callable[[WorldState, str], str]):
        super().__init__(messages)
        self.begin_dialogue = begin_dialogue

    @handles(CommandType.TALK)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        if intent.character is None:
            if intent.direction is Direction.INVALID:
                return self.msg("talk_missing_target")
            return self.msg("talk_unknown_target")
        character = world.characters[intent.character]
        if not world.check_preconditions(character.talk_preconditions):
            return self.msg("talk_hidden")
        if character.interaction_occurred:
            return self.msg("talk_exhausted")
        return self.begin_dialogue(world, intent.character)


class InventoryHandler(BaseHandler):
    @handles(CommandType.INVENTORY)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        if intent.has_arguments:
            return self.msg("inventory_malformed")
        inventory = world.inventory()
        if not inventory:
            return self.msg("inventory_empty")
        rows = [self.msg("inventory_header"), ""]
        for item in inventory.values():
            if item.weapon:
                rows.append(self.msg("inventory_weapon", name=item.name, ammo=item.weapon.ammo))
            else:
                rows.append(self.msg("inventory_item", name=item.name))
        return "\n".join(rows)


class ExamineHandler(BaseHandler):
    """Describe an item; the antagonist's lair object wakes the creature up."""

    def __init__(self, messages: dict[str, str], start_ticker: Callable[[WorldState], None]):
        super().__init__(messages)
        self.start_ticker = start_ticker

    @handles(CommandType.EXAMINE)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        item_id = intent.inventory_item or intent.room_item
        if intent.character or intent.direction or item_id is None:
            return self.msg("examine_unknown")
        if world.is_dark():
            return self.msg("examine_dark")
        antagonist = world.scenario.antagonist
        if antagonist and intent.room_item == antagonist.trigger_item and world.in_antagonist_room():
            return self._lair(world, antagonist)
        description = world.items[item_id].description.strip()
        if not description:
            return self.msg("examine_nothing")
        return self.msg("examine_text", text=description)

    def _lair(self, world: WorldState, antagonist: Antagonist) -> str:
        if not world.flags.antagonist_active and not world.flags.antagonist_defeated:
            world.set_flag("antagonist_active", True)
            self.start_ticker(world)
            return antagonist.reveal.rstrip()
        if antagonist.hint_item and antagonist.hint_item in world.items_in_room():
            return self.msg("examine_text", text=antagonist.hint)
        return self.msg("examine_text", text=antagonist.exhausted)


class MoveHandler(BaseHandler):
    """Move between rooms.

    A locked destination suspends the turn: the next raw line goes to the
    router continuation and is compared with the door code.
    """

    def __init__(
        self,
        messages: dict[str, str],
        router: InputRouter,
        room_changed: Callable[[WorldState], None],
    ):
        super().__init__(messages)
        self.router = router
        self.room_changed = room_changed

    @handles(CommandType.MOVE)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        if intent.direction is None:
            return self.msg("move_no_direction")
        if intent.direction is Direction.INVALID:
            return self.msg("move_invalid_direction")
        target = world.room.neighbour(intent.direction)
        if target is None:
            return self.msg("move_no_room")
        if target == EXIT_GAME:
            return self.msg("move_exit_game")
        if world.in_antagonist_room() and world.encounter_active():
            return self.msg("move_blocked")
        prefix: list[str] = []
        if world.flags.torch_lit:
            world.set_torch(False)
            prefix.append(self.msg("torch_switched_off"))
        refusal = self._entry_refusal(world, target)
        if refusal is None:
            room = world.rooms[target]
            if room.locked:
                self.router.redirect(lambda code: self._try_code(world, target, code))
                refusal = self.msg("door_locked")
            else:
                world.move_to(target)
                refusal = ""
        return "\n".join(prefix + [refusal]) if refusal else "\n".join(prefix)

    def _entry_refusal(self, world: WorldState, target: str) -> str | None:
        entry = world.rooms[target].entry
        if entry is None or world.check_preconditions(entry.preconditions):
            return None
        for gate in entry.refusals:
            if world.check_preconditions(gate.preconditions):
                world.apply_effect(gate.effect)
                return (gate.message or "").rstrip() or self.msg("move_entry_refused")
        return self.msg("move_entry_refused")

    def _try_code(self, world: WorldState, target: str, code: str) -> list[str]:
        room = world.rooms[target]
        if code.strip() != (room.code or ""):
            world.debug(f"room {target} wrong code")
            return [self.msg("door_wrong_code")]
        world.unlock(target)
        world.move_to(target)
        self.room_changed(world)
        return [self.msg("door_unlocked"), world.describe_room()]


class ObserveHandler(BaseHandler):
    @handles(CommandType.OBSERVE)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        if intent.direction is Direction.INVALID:
            return self.msg("observe_malformed")
        if world.is_dark():
            return self.msg("observe_dark")
        text = world.room.current_observation()
        if not text:
            return self.msg("observe_nothing")
        return self.msg("observe_text", text=text.rstrip())


class TakeHandler(BaseHandler):
    @handles(CommandType.TAKE)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        if intent.room_item is None:
            named = intent.inventory_item or any(find_entity(token, world.items) for token in intent.tokens[1:])
            return self.msg("take_not_here" if named else "take_unknown")
        item = world.items[intent.room_item]
        if not item.collectible:
            return self.msg("take_not_collectible")
        gate = item.take
        if gate and not world.check_preconditions(gate.preconditions):
            return gate.message or self.msg("take_refused")
        world.move_item(intent.room_item, LocationTag.INVENTORY)
        if gate:
            world.apply_effect(gate.effect)
        return self.msg("take_done", name=item.name)


class ReadHandler(BaseHandler):
    @handles(CommandType.READ)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        item_id = intent.inventory_item or intent.room_item
        if item_id is None:
            return self.msg("read_unknown")
        item = world.items[item_id]
        if item.reading is None:
            return self.msg("read_nothing")
        return self.msg("read_text", name=item.name, text=item.reading.text.rstrip())


class ShootHandler(BaseHandler):
    def __init__(self, messages: dict[str, str], stop_ticker: Callable[[WorldState], None]):
        super().__init__(messages)
        self.stop_ticker = stop_ticker

    @handles(CommandType.SHOOT)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        if intent.character is None:
            return self.msg("shoot_no_target")
        antagonist = world.scenario.antagonist
        character = world.characters[intent.character]
        if antagonist and intent.character == antagonist.character:
            if not world.in_antagonist_room() or not world.flags.antagonist_active:
                return self.msg("shoot_unknown_target")
            return self._hit(world, antagonist, intent.character)
        if character.room == world.current:
            return self.msg("shoot_forbidden", name=character.name)
        return self.msg("shoot_not_found")

    def _hit(self, world: WorldState, antagonist: Antagonist, char_id: str) -> str:
        health = world.characters[char_id].health
        if health <= 0:
            return antagonist.already_dead
        text = antagonist.hits.get(health, "")
        world.set_health(char_id, health - 1)
        if health - 1 > 0:
            return text
        world.set_flag("antagonist_defeated", True)
        self.stop_ticker(world)
        world.refresh_observation(force=True)
        return "\n\n".join(part for part in (text, antagonist.defeat) if part)


class ActivateHandler(BaseHandler):
    @handles(CommandType.ACTIVATE)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        if intent.character or intent.direction or not (intent.inventory_item or intent.room_item):
            return self.msg("activate_unknown")
        item_id = intent.inventory_item
        if item_id is None or world.items[item_id].activation is None:
            return self.msg("activate_not_activatable")
        if item_id == world.scenario.torch:
            return self._torch(world)
        item = world.items[item_id]
        if item.activation and item.activation.active:
            return self.msg("item_already_active", name=item.name)
        world.set_item_active(item_id, True)
        return self.msg("item_activated", name=item.name)

    def _torch(self, world: WorldState) -> str:
        if world.flags.torch_lit:
            return self.msg("torch_already_on")
        room = world.room
        world.set_torch(True)
        if room.visible:
            return self.msg("torch_on_bright")
        if room.reason is ObservationReason.TORCH:
            return self.msg("torch_on_dark")
        return self.msg("torch_on")


class HelpHandler(BaseHandler):
    def __init__(self, messages: dict[str, str], catalog: Sequence[Command]):
        super().__init__(messages)
        self.catalog = list(catalog)

    @handles(CommandType.HELP)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        rows = [self.msg("help_header"), ""]
        width = max((len(cmd.name) for cmd in self.catalog), default=0)
        for cmd in self.catalog:
            # input is lowercased, so capitalized aliases can never be typed
            aliases = ", ".join(alias for alias in cmd.aliases if alias.islower())
            rows.append(f"  {cmd.name.ljust(width)}  {aliases}".rstrip())
        rows.append("")
        rows.append(self.msg("help_instructions").rstrip())
        return "\n".join(rows)


class DeactivateHandler(BaseHandler):
    @handles(CommandType.DEACTIVATE)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        if intent.character or intent.direction or not (intent.inventory_item or intent.room_item):
            return self.msg("deactivate_unknown")
        item_id = intent.inventory_item
        if item_id is None or world.items[item_id].activation is None:
            return self.msg("deactivate_not_deactivatable")
        if item_id == world.scenario.torch:
            return self._torch(world)
        item = world.items[item_id]
        if item.activation and not item.activation.active:
            return self.msg("item_not_active", name=item.name)
        world.set_item_active(item_id, False)
        return self.msg("item_deactivated", name=item.name)

    def _torch(self, world: WorldState) -> str:
        if not world.flags.torch_lit:
            return self.msg("torch_not_on")
        if world.room.reason is ObservationReason.TORCH:
            if world.encounter_active():
                return self.msg("torch_off_refused")
            world.set_torch(False)
            return self.msg("torch_off_dark")
        world.set_torch(False)
        return self.msg("torch_off")


class UseHandler(BaseHandler):
    """Run the first scripted ``use`` action whose preconditions hold."""

    @handles(CommandType.USE)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        item_id = intent.inventory_item
        if item_id is None:
            return self.msg("use_unknown")
        for action in world.actions:
            if action.trigger != "use" or action.item != item_id:
                continue
            if not world.check_preconditions(action.preconditions):
                continue
            world.apply_effect(action.effect)
            world.debug(f"action use {item_id}")
            return action.message.rstrip()
        return self.msg("use_unusable")


class SaveHandler(BaseHandler):
    def __init__(self, messages: dict[str, str], save: Callable[[WorldState], int] | None):
        super().__init__(messages)
        self.save = save

    @handles(CommandType.SAVE)
    def __call__(self, world: WorldState, intent: Intent) -> str:
        if intent.has_arguments:
            return self.msg("save_malformed")
        if world.in_antagonist_room() and world.encounter_active():
            return self.msg("save_refused")
        if self.save is None:
            return self.msg("save_unavailable")
        try:
            slot = self.save(world)
        except OSError as exc:
            return self.msg("save_failed", error=exc)
        return self.msg("save_done", slot=slot)


def default_handlers(
    messages: dict[str, str],
    catalog: Sequence[Command],
    router: InputRouter,
    *,
    begin_dialogue: Callable[[WorldState, str], str],
    room_changed: Callable[[WorldState], None],
    start_ticker: Callable[[WorldState], None],
    stop_ticker: Callable[[WorldState], None],
    save: Callable[[WorldState], int] | None = None,
) -> list[Handler]:
    """Return the handlers in registration order."""
    return [
        TalkHandler(messages, begin_dialogue),
        InventoryHandler(messages),
        ExamineHandler(messages, start_ticker),
        MoveHandler(messages, router, room_changed),
        ObserveHandler(messages),
        TakeHandler(messages),
        ReadHandler(messages),
        ShootHandler(messages, stop_ticker),
        ActivateHandler(messages),
        HelpHandler(messages, catalog),
        DeactivateHandler(messages),
        UseHandler(messages),
        SaveHandler(messages, save),
    ]


__all__ = [
    "handles",
    "BaseHandler",
    "TalkHandler",
    "InventoryHandler",
    "ExamineHandler",
    "MoveHandler",
    "ObserveHandler",
    "TakeHandler",
    "ReadHandler",
    "ShootHandler",
    "ActivateHandler",
    "HelpHandler",
    "DeactivateHandler",
    "UseHandler",
    "SaveHandler",
    "default_handlers",
]
