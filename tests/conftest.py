import shutil
import sys
from pathlib import Path

import pytest
import yaml

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from lacosa.game import Game  # noqa: E402
from lacosa.interfaces import IOBackend  # noqa: E402


class DummyIO(IOBackend):
    def __init__(self, inputs: list[str] | None = None) -> None:
        self.inputs = inputs or []
        self.outputs: list[str] = []

    def get_input(self, prompt: str = "> ") -> str:  # noqa: ARG002 - test stub
        if not self.inputs:
            raise EOFError
        return self.inputs.pop(0)

    def output(self, text: str) -> None:
        self.outputs.append(text)


WORLD = {
    "start": "hall",
    "intro": "Intro.",
    "rooms": {
        "hall": {
            "name": "Atrio",
            "description": "Un atrio.",
            "observation": "Vedi una LISTA.",
            "exits": {"nord": "lab", "est": "vault", "ovest": "kennel", "sud": "EXIT"},
        },
        "lab": {
            "name": "Laboratorio",
            "description": "Un laboratorio.",
            "observation": "Un uomo ferito.",
            "updated_observation": "Un cadavere.",
            "reason": "event",
            "exits": {"sud": "hall", "nord": "radio"},
        },
        "vault": {
            "name": "Caveau",
            "description": "Un caveau.",
            "locked": True,
            "code": "1234",
            "exits": {"ovest": "hall"},
        },
        "kennel": {
            "name": "Canile",
            "description": "Buio pesto.",
            "observation": "Peli ovunque.",
            "updated_observation": "Una carcassa.",
            "reason": "torch",
            "visible": False,
            "exits": {"est": "hall"},
        },
        "radio": {
            "name": "Radio",
            "description": "Una radio.",
            "exits": {"sud": "lab"},
            "entry": {
                "preconditions": {"item_conditions": [{"item": "lanciafiamme", "location": "INVENTORY"}]},
                "refusals": [
                    {
                        "preconditions": {"flags": {"survivor_warned": False}},
                        "effect": {"flags": {"survivor_warned": True}},
                        "message": "BAMM",
                    },
                    {"message": "Armato"},
                ],
            },
        },
    },
    "items": {
        "torcia": {
            "name": "Torcia",
            "aliases": ["torcia"],
            "description": "Una torcia.",
            "location": "INVENTORY",
            "collectible": True,
            "activation": {"active": False},
        },
        "pistola": {
            "name": "Pistola",
            "aliases": ["pistola"],
            "description": "Una pistola.",
            "location": "INVENTORY",
            "collectible": True,
            "weapon": {"ammo": 6},
        },
        "radio": {
            "name": "Ricetrasmettitore",
            "aliases": ["radio"],
            "description": "Una radio portatile.",
            "location": "INVENTORY",
            "collectible": True,
            "activation": {"active": False},
        },
        "lista": {
            "name": "Lista",
            "aliases": ["lista"],
            "description": "Una lista.",
            "location": "hall",
            "reading": {"text": "Gasly, Sips."},
        },
        "gemma": {
            "name": "Gemma",
            "aliases": ["gemma"],
            "description": "Una gemma.",
            "location": "hall",
            "collectible": True,
        },
        "pala": {
            "name": "Pala",
            "aliases": ["pala"],
            "description": "Una pala.",
            "location": "kennel",
            "collectible": True,
            "take": {"preconditions": {"flags": {"antagonist_defeated": True}}},
        },
        "poltiglia": {"name": "Poltiglia", "aliases": ["poltiglia"], "location": "kennel"},
        "lanciafiamme": {
            "name": "Lanciafiamme",
            "aliases": ["lanciafiamme"],
            "description": "Un lanciafiamme.",
            "location": "vault",
            "collectible": True,
            "weapon": {"ammo": 10},
        },
    },
    "characters": {
        "guardia": {"name": "Guardia", "aliases": ["guardia", "uomo"], "room": "lab"},
        "canide": {"name": "Canide", "aliases": ["cane", "creatura"], "room": "kennel"},
        "gasly": {"name": "Gasly", "aliases": ["gasly"], "room": "radio"},
        "sips": {"name": "Sips", "aliases": ["sips"], "room": None},
    },
    "dialogues": {
        "guardia": {
            "lines": [
                {"id": 1, "node": 1, "reply": 1, "text": "Prima domanda"},
                {"id": 2, "node": 1, "reply": 1, "text": "Seconda domanda"},
                {"id": 3, "node": 1, "reply": 1, "text": "Terza domanda"},
            ],
            "replies": [{"id": 1, "next_node": 1, "text": "Siiips"}],
        },
        "gasly": {
            "lines": [{"id": 10, "node": 1, "reply": 10, "text": "Andiamo"}],
            "replies": [{"id": 10, "next_node": None, "text": "Va bene"}],
        },
        "sips": {
            "lines": [
                {"id": 20, "node": 1, "reply": 20, "text": "Chi sei?"},
                {"id": 21, "node": 1, "reply": 21, "text": "Brucia"},
            ],
            "replies": [
                {"id": 20, "next_node": 1, "text": "Sono Sips"},
                {"id": 21, "next_node": None, "text": "No!"},
            ],
        },
    },
    "actions": [
        {"trigger": "use", "item": "radio", "message": "Nessuno risponde."},
    ],
    "scenario": {
        "torch": "torcia",
        "antagonist": {
            "character": "canide",
            "room": "kennel",
            "trigger_item": "poltiglia",
            "hint_item": "pala",
            "health": 4,
            "period": 10,
            "warnings": ["!!W1!!", "!!W2!!"],
            "reveal": "REVEAL",
            "hint": "HINT",
            "exhausted": "OSSA",
            "hits": {4: "H4", 3: "H3", 2: "H2", 1: "H1"},
            "already_dead": "MORTA",
            "defeat": "DEFEAT",
        },
        "climax": {"character": "gasly", "room": "radio"},
    },
}


def write_world(data_dir: Path, world: dict) -> Path:
    path = data_dir / "it" / "world.it.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.safe_dump(world, fh, allow_unicode=True)
    return path


@pytest.fixture
def io_backend() -> DummyIO:
    return DummyIO()


@pytest.fixture
def data_dir(tmp_path):
    lang_dir = tmp_path / "it"
    lang_dir.mkdir()
    for kind in ("messages", "commands", "stopwords"):
        shutil.copy(ROOT_DIR / "data" / "it" / f"{kind}.it.yaml", lang_dir / f"{kind}.it.yaml")
    write_world(tmp_path, WORLD)
    return tmp_path


@pytest.fixture
def world_file(data_dir) -> Path:
    return data_dir / "it" / "world.it.yaml"


@pytest.fixture
def game(world_file, io_backend):
    g = Game(str(world_file), "it", io_backend=io_backend, ticker_period=0.02)
    yield g
    g.stop()
