def test_use_scripted_action(game):
    assert game.handle_input("usa radio") == ["Nessuno risponde."]


def test_use_refusals(game):
    assert game.handle_input("usa") == ["Oggetto da usare non identificato."]
    assert game.handle_input("usa gemma") == ["Oggetto da usare non identificato."]
    game.handle_input("prendi gemma")
    assert game.handle_input("usa gemma") == [
        "L'oggetto specificato non può essere \"usato\". Ma forse è possibile interagirci in un altro modo."
    ]


def test_use_action_preconditions_and_effect(game):
    world = game.world
    world.actions[0].preconditions = {"is_location": "lab"}
    world.actions[0].effect = {"flags": {"ground_dug": True}, "refresh_observation": True}
    assert game.handle_input("usa radio") != ["Nessuno risponde."]
    world.move_to("lab")
    assert game.handle_input("usa radio") == ["Nessuno risponde."]
    assert world.flags.ground_dug
    assert world.rooms["lab"].observation_updated


def test_activate_and_deactivate_device(game):
    assert game.handle_input("attiva radio") == ["Hai attivato: Ricetrasmettitore"]
    assert game.handle_input("accendi radio") == ["Ricetrasmettitore è già attivo."]
    assert game.handle_input("disattiva radio") == ["Hai disattivato: Ricetrasmettitore"]
    assert game.handle_input("spegni radio") == ["Ricetrasmettitore non è attivo."]


def test_activate_refusals(game):
    assert game.handle_input("attiva") == ["Oggetto da attivare non identificato."]
    assert game.handle_input("attiva lista") == ["Oggetto non 'attivabile'"]
    assert game.handle_input("attiva pistola") == ["Oggetto non 'attivabile'"]
    assert game.handle_input("disattiva pistola") == ["Oggetto non disattivabile"]
    assert game.handle_input("disattiva") == ["Oggetto da disattivare non identificato."]


def test_torch_messages(game):
    assert game.handle_input("spegni torcia") == ["La torcia non è accesa."]
    assert game.handle_input("accendi torcia") == [
        "Accendi la TORCIA ma tutto è lo stesso. "
        "{Accendere la torcia non cambia nulla qui, la stanza è già abbastanza illuminata}"
    ]
    assert game.handle_input("accendi torcia") == ["La torcia è già accesa"]
    assert game.handle_input("spegni torcia") == ["Torcia disattivata."]


def test_torch_off_in_dark_room(game):
    game.handle_input("vai ovest")
    game.handle_input("accendi torcia")
    assert game.handle_input("spegni torcia") == ["Torcia disattivata. {Adesso non vedo più un accidenti}."]
    assert game.world.is_dark()
