import pytest

from lacosa import i18n
from lacosa.parser import Parser, resolve_command, resolve_entities, tokenize
from lacosa.world_model import Character, CommandType, Direction, Item

from tests.conftest import DummyIO


@pytest.fixture
def catalog():
    return i18n.load_commands("it", DummyIO())


@pytest.fixture
def parser(catalog):
    return Parser(catalog, i18n.load_stopwords("it", DummyIO()))


ROOM = {
    "gemma": Item(name="Gemma", aliases=["gemma"], location="hall"),
    "lista": Item(name="Lista", aliases=["lista"], location="hall"),
}
INVENTORY = {"torcia": Item(name="Torcia", aliases=["torcia"])}
CHARACTERS = {"guardia": Character(name="Guardia", aliases=["guardia", "uomo"], room="hall")}


def parse(parser, raw):
    return parser.parse(raw, ROOM, INVENTORY, CHARACTERS)


def test_tokenize_lowercases_and_drops_stopwords():
    assert tokenize("Prendi  LA Gemma", {"la"}) == ["prendi", "gemma"]


@pytest.mark.parametrize("raw", ["", "   ", "la", "il la  di"])
def test_blank_or_stopword_input_is_no_intent(parser, raw):
    assert parse(parser, raw) is None


def test_every_name_and_alias_resolves(catalog):
    for index, command in enumerate(catalog):
        assert resolve_command(command.name, catalog) == index
        for alias in command.aliases:
            found = resolve_command(alias, catalog)
            assert catalog[found].type is command.type


def test_unknown_verb_gives_null_command(parser):
    intent = parse(parser, "balla")
    assert intent is not None
    assert intent.command is None


def test_capitalized_alias_cannot_match_after_lowercasing(parser):
    intent = parse(parser, "Guarda")
    assert intent.is_a(CommandType.OBSERVE)
    assert intent.command.matches("guarda")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("vai nord", Direction.NORD),
        ("vai a NORD", Direction.NORD),
        ("cammina ovest", Direction.OVEST),
        ("vai qualcosainvalido", Direction.INVALID),
    ],
)
def test_move_directions(parser, raw, expected):
    intent = parse(parser, raw)
    assert intent.is_a(CommandType.MOVE)
    assert intent.direction is expected


def test_move_without_direction_is_not_invalid(parser):
    intent = parse(parser, "vai")
    assert intent.is_a(CommandType.MOVE)
    assert intent.direction is None


def test_observe_with_argument_is_malformed(parser):
    assert parse(parser, "osserva").direction is None
    assert parse(parser, "osserva stanza").direction is Direction.INVALID


def test_talk_scans_all_tokens_for_a_character(parser):
    intent = parse(parser, "parla subito con uomo")
    assert intent.is_a(CommandType.TALK)
    assert intent.character == "guardia"
    assert intent.room_item is None


def test_talk_without_target(parser):
    intent = parse(parser, "parla")
    assert intent.character is None
    assert intent.direction is Direction.INVALID


def test_shoot_ignores_items(parser):
    intent = parse(parser, "spara gemma")
    assert intent.is_a(CommandType.SHOOT)
    assert intent.character is None
    assert intent.room_item is None


def test_room_item_then_inventory_item(parser):
    assert parse(parser, "prendi gemma").room_item == "gemma"
    intent = parse(parser, "esamina torcia")
    assert intent.room_item is None
    assert intent.inventory_item == "torcia"


def test_room_item_path_rechecks_third_token():
    tokens = ["usa", "gemma", "lista"]
    assert resolve_entities(tokens, ROOM, INVENTORY, CHARACTERS) == ("lista", None, None)
    tokens = ["usa", "gemma", "nulla"]
    assert resolve_entities(tokens, ROOM, INVENTORY, CHARACTERS) == (None, None, None)


def test_inventory_and_character_fall_back_to_third_token():
    tokens = ["usa", "nulla", "torcia"]
    assert resolve_entities(tokens, ROOM, INVENTORY, CHARACTERS) == (None, "torcia", None)
    tokens = ["usa", "torcia", "guardia"]
    assert resolve_entities(tokens, ROOM, INVENTORY, CHARACTERS) == (None, "torcia", "guardia")


def test_single_token_command_has_no_arguments(parser):
    intent = parse(parser, "inventario")
    assert intent.is_a(CommandType.INVENTORY)
    assert not intent.has_arguments
    assert parse(parser, "inventario tutto").has_arguments
