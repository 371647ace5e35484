def test_observe_current_room(game):
    assert game.handle_input("osserva") == ["👁️: Vedi una LISTA."]
    assert game.handle_input("guarda attentamente") == [
        "Comando non valido. 'Osserva' è un comando semplice e non accetta parametri."
    ]


def test_observe_nothing(game):
    game.world.move_to("vault")
    assert game.handle_input("osserva") == ["👁️: Non c'è niente di interessante qui."]


def test_dark_room_needs_torch(game):
    game.handle_input("vai ovest")
    assert game.handle_input("osserva") == ["👁️: Non si vede niente."]
    assert game.handle_input("esamina poltiglia") == ["Non puoi esaminare oggetti al buio."]
    assert game.handle_input("accendi torcia") == [
        "Hai attivato la TORCIA. Adesso puoi osservare chiaramente cosa c'è nella stanza."
    ]
    assert game.handle_input("osserva") == ["👁️: Peli ovunque."]


def test_examine_item(game):
    assert game.handle_input("esamina lista") == ["🔎: Una lista."]
    assert game.handle_input("esamina torcia") == ["🔎: Una torcia."]
    assert game.handle_input("esamina drago") == ["Oggetto da esaminare non identificato."]


def test_examine_empty_description(game):
    game.world.move_item("poltiglia", "hall")
    assert game.handle_input("esamina poltiglia") == ["🔎: Non c'è nulla da esaminare qui."]


def test_read(game):
    assert game.handle_input("leggi lista") == ["Lettura di Lista...\n\nGasly, Sips."]
    assert game.handle_input("leggi gemma") == ["Non c'è nulla da leggere."]
    assert game.handle_input("leggi") == ["Oggetto da leggere non identificato."]


def test_help_lists_typable_aliases(game):
    (text,) = game.handle_input("aiuto")
    assert text.startswith("Lettura Istruzioni...")
    assert "comunica" in text
    assert "Parla," not in text
    assert "Durante un dialogo" in text


def test_not_understood_and_empty(game):
    assert game.handle_input("balla") == [
        "Non ho capito cosa intendi fare. Riprova inserendo un altro comando."
    ]
    assert game.handle_input("") == []


def test_quit(game):
    assert game.handle_input("fine") == ["Alla prossima!"]
    assert not game.running
