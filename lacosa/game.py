"""Core game loop orchestrator."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import yaml
from pydantic import ValidationError

from lacosa import i18n, integrity

from .dialogue import CLIMAX_EVENT, DialogueEngine, DialogueResult, Outcome
from .dispatcher import InputRouter, TurnDispatcher
from .handlers import default_handlers
from .interfaces import IOBackend
from .io import ConsoleIO, SynchronizedIO
from .parser import Parser
from .persistence import SaveManager
from .ticker import AntagonistTicker
from .world import WorldState
from .world_model import CommandType


class Game:
    """One play session.

    ``handle_input`` processes exactly one raw line: it goes to a pending
    continuation (door code, dialogue choice) when there is one, otherwise
    through the parser and the turn dispatcher.
    """

    def __init__(
        self,
        world_data_path: str,
        language: str = "it",
        io_backend: IOBackend | None = None,
        debug: bool = False,
        *,
        slot: int = 1,
        ticker_period: float | None = None,
        on_room_changed: Callable[[str], None] | None = None,
        on_event: Callable[[str], None] | None = None,
    ) -> None:
        data_path = Path(world_data_path)
        self.data_dir = data_path.parent.parent
        self.debug = debug
        self.language = language
        self.io = SynchronizedIO(io_backend or ConsoleIO())
        self.save_manager = SaveManager(self.data_dir, slot)

        try:
            save_data = self.save_manager.load()
        except (OSError, yaml.YAMLError) as exc:
            self.io.output(f"ERROR: Failed to load save file: {exc}")
            raise SystemExit from exc

        try:
            self.world = WorldState.from_file(data_path, debug=debug)
        except FileNotFoundError as exc:
            self.io.output(f"ERROR: Missing world file: {exc}")
            raise SystemExit from exc
        except yaml.YAMLError as exc:
            self.io.output(f"ERROR: Invalid world file: {exc}")
            raise SystemExit from exc
        except (KeyError, ValidationError) as exc:
            self.io.output(f"ERROR: Invalid world definition: {exc}")
            raise SystemExit from exc

        self.messages = i18n.load_messages(language, self.io, self.data_dir)
        self.catalog = i18n.load_commands(language, self.io, self.data_dir)
        stopwords = i18n.load_stopwords(language, self.io, self.data_dir)

        errors = integrity.validate_world_structure(self.world)
        if save_data:
            errors.extend(integrity.validate_save(save_data, self.world))
        if errors:
            for msg in errors:
                self.io.output(f"ERROR: {msg}")
            raise SystemExit("Integrity check failed")

        self._show_intro = not save_data
        if save_data:
            self.world.load_state(save_data)

        self.on_room_changed = on_room_changed
        self.on_event = on_event
        self.ticker_period = ticker_period
        self.ticker: AntagonistTicker | None = None
        self.parser = Parser(self.catalog, stopwords)
        self.router = InputRouter()
        self.dialogue = DialogueEngine(self.messages)
        handlers = default_handlers(
            self.messages,
            self.catalog,
            self.router,
            begin_dialogue=self._begin_dialogue,
            room_changed=lambda world: self.dispatcher.room_changed(world),
            start_ticker=self._start_ticker,
            stop_ticker=self._stop_ticker,
            save=self._save,
        )
        self.dispatcher = TurnDispatcher(handlers, self.messages, on_room_changed=self._room_changed)
        self.running = True
        inv = list(self.world.inventory())
        self.world.debug(f"game_init language {language} current {self.world.current} inventory {inv}")

    # --- hooks wired into handlers ---
    def _room_changed(self, room_id: str) -> None:
        if self.on_room_changed:
            self.on_room_changed(room_id)

    def _start_ticker(self, world: WorldState) -> None:
        antagonist = world.scenario.antagonist
        if antagonist is None or (self.ticker and not self.ticker.cancelled):
            return
        period = self.ticker_period if self.ticker_period is not None else antagonist.period
        self.ticker = AntagonistTicker(self.io.output, antagonist.warnings, period, debug=world.debug)
        self.ticker.start()

    def _stop_ticker(self, world: WorldState) -> None:  # noqa: ARG002 - handler callback signature
        if self.ticker:
            self.ticker.cancel()

    def _save(self, world: WorldState) -> int:
        return self.save_manager.save(world, self.language)

    # --- dialogue ---
    def _begin_dialogue(self, world: WorldState, character_id: str) -> str:
        return "\n\n".join(self._after_dialogue(self.dialogue.start(world, character_id)))

    def start_dialogue(self, character_id: str, continuation: str | None = None) -> list[str]:
        """Open a dialogue outside the normal turn, e.g. from a cutscene."""
        result = self.dialogue.start(self.world, character_id, continuation)
        return self._emit(self._after_dialogue(result))

    def _choose(self, raw: str) -> list[str]:
        return self._after_dialogue(self.dialogue.choose(raw))

    def _after_dialogue(self, result: DialogueResult) -> list[str]:
        if result.outcome is Outcome.CONTINUE:
            self.router.redirect(self._choose)
        elif result.outcome is Outcome.TERMINATE_AND_TRIGGER and result.event:
            self._trigger(result.event)
        return result.lines

    def _trigger(self, event: str) -> None:
        self.world.debug(f"event {event}")
        if self.on_event:
            self.on_event(event)
        if event == CLIMAX_EVENT and not self.router.pending:
            self.stop()

    # --- turn processing ---
    def _emit(self, lines: list[str]) -> list[str]:
        for line in lines:
            self.io.output(line)
        return lines

    def _quit(self) -> list[str]:
        if self.world.encounter_active():
            return [self.messages["quit_refused"]]
        self.stop()
        return [self.messages["farewell"]]

    def handle_input(self, raw: str) -> list[str]:
        if self.debug:
            self.world.debug(f"input={raw}")
        continuation = self.router.take()
        if continuation is not None:
            return self._emit(continuation(raw))
        world = self.world
        intent = self.parser.parse(raw, world.items_in_room(), world.inventory(), world.characters_in_room())
        if intent is None:
            return []
        if intent.is_a(CommandType.QUIT):
            return self._emit(self._quit())
        return self._emit(self.dispatcher.dispatch(world, intent))

    def stop(self) -> None:
        self.running = False
        self.router.clear()
        if self.ticker:
            self.ticker.cancel()
            self.ticker.join(timeout=1.0)

    def run(self) -> None:
        if self._show_intro and self.world.intro:
            self.io.output(self.world.intro.rstrip())
        self.io.output(self.world.describe_room())
        try:
            while self.running:
                self.handle_input(self.io.get_input())
        except (EOFError, KeyboardInterrupt):
            self.io.output(self.messages["farewell"])
        finally:
            self.stop()


def run(
    world_data_path: str,
    language: str = "it",
    io_backend: IOBackend | None = None,
    debug: bool = False,
    *,
    slot: int = 1,
) -> None:
    Game(world_data_path, language, io_backend=io_backend, debug=debug, slot=slot).run()
