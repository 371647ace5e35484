"""Data models for world elements."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

EXIT_GAME = "EXIT"


class LocationTag(Enum):
    INVENTORY = "INVENTORY"


class CommandType(Enum):
    INVENTORY = "inventory"
    TALK = "talk"
    TAKE = "take"
    MOVE = "move"
    QUIT = "quit"
    OBSERVE = "observe"
    USE = "use"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    HELP = "help"
    READ = "read"
    EXAMINE = "examine"
    SHOOT = "shoot"
    SAVE = "save"


class Direction(Enum):
    NORD = "nord"
    SUD = "sud"
    EST = "est"
    OVEST = "ovest"
    INVALID = "invalid"


class ObservationReason(Enum):
    NONE = "none"
    TORCH = "torch"
    EVENT = "event"


class _Named(BaseModel):
    name: str
    aliases: list[str] = Field(default_factory=list)  # noqa

    def matches(self, token: str) -> bool:
        """Exact, case-sensitive match against the name or one of the aliases."""
        return token == self.name or token in self.aliases


class Command(_Named):
    type: CommandType

    model_config = ConfigDict(extra="forbid", frozen=True)


class Activation(BaseModel):
    active: bool = False

    model_config = ConfigDict(extra="forbid")


class Reading(BaseModel):
    text: str

    model_config = ConfigDict(extra="forbid")


class Weapon(BaseModel):
    ammo: int = 0

    model_config = ConfigDict(extra="forbid")


class Gate(BaseModel):
    preconditions: dict[str, Any] | None = None
    effect: dict[str, Any] | None = None
    message: str | None = None

    model_config = ConfigDict(extra="forbid")


class Item(_Named):
    description: str = ""
    location: str | LocationTag | None = None
    collectible: bool = False
    activation: Activation | None = None
    reading: Reading | None = None
    weapon: Weapon | None = None
    take: Gate | None = None

    model_config = ConfigDict(extra="forbid")

    @property
    def in_inventory(self) -> bool:
        return self.location is LocationTag.INVENTORY


class Character(_Named):
    room: str | None = None
    health: int = 4
    interaction_occurred: bool = False
    talk_preconditions: dict[str, Any] | None = None

    model_config = ConfigDict(extra="forbid")


class Entry(BaseModel):
    preconditions: dict[str, Any] | None = None
    refusals: list[Gate] = Field(default_factory=list)  # noqa

    model_config = ConfigDict(extra="forbid")


class Room(BaseModel):
    name: str
    description: str
    observation: str | None = None
    updated_observation: str | None = None
    reason: ObservationReason = ObservationReason.NONE
    observation_updated: bool = False
    visible: bool = True
    locked: bool = False
    code: str | None = None
    exits: dict[Direction, str] = Field(default_factory=dict)  # noqa
    entry: Entry | None = None

    model_config = ConfigDict(extra="forbid")

    def neighbour(self, direction: Direction) -> str | None:
        return self.exits.get(direction)

    def current_observation(self) -> str | None:
        if self.observation_updated and self.updated_observation:
            return self.updated_observation
        return self.observation or None


class PlayerLine(BaseModel):
    id: int
    node: int
    text: str
    reply: int
    used: bool = False

    model_config = ConfigDict(extra="forbid")


class CharacterReply(BaseModel):
    id: int
    text: str
    next_node: int | None = None
    effect: dict[str, Any] | None = None

    model_config = ConfigDict(extra="forbid")


class Dialogue(BaseModel):
    lines: list[PlayerLine] = Field(default_factory=list)  # noqa
    replies: list[CharacterReply] = Field(default_factory=list)  # noqa

    model_config = ConfigDict(extra="forbid")

    def reply(self, reply_id: int) -> CharacterReply | None:
        for reply in self.replies:
            if reply.id == reply_id:
                return reply
        return None


class Action(BaseModel):
    trigger: str
    item: str
    preconditions: dict[str, Any] | None = None
    effect: dict[str, Any] | None = None
    message: str = ""

    model_config = ConfigDict(extra="forbid")


class Antagonist(BaseModel):
    character: str
    room: str
    trigger_item: str
    hint_item: str | None = None
    health: int = 4
    period: float = 10.0
    warnings: list[str] = Field(default_factory=list)  # noqa
    reveal: str = ""
    hint: str = ""
    exhausted: str = ""
    hits: dict[int, str] = Field(default_factory=dict)  # noqa
    already_dead: str = ""
    defeat: str = ""

    model_config = ConfigDict(extra="forbid")


class Climax(BaseModel):
    character: str
    room: str

    model_config = ConfigDict(extra="forbid")


class Scenario(BaseModel):
    torch: str | None = None
    antagonist: Antagonist | None = None
    climax: Climax | None = None

    model_config = ConfigDict(extra="forbid")


class Flags(BaseModel):
    torch_lit: bool = False
    antagonist_active: bool = False
    antagonist_defeated: bool = False
    ground_dug: bool = False
    survivor_warned: bool = False
    survivor_heard: bool = False

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


__all__ = [
    "EXIT_GAME",
    "LocationTag",
    "CommandType",
    "Direction",
    "ObservationReason",
    "Command",
    "Activation",
    "Reading",
    "Weapon",
    "Gate",
    "Item",
    "Character",
    "Entry",
    "Room",
    "PlayerLine",
    "CharacterReply",
    "Dialogue",
    "Action",
    "Antagonist",
    "Climax",
    "Scenario",
    "Flags",
]
