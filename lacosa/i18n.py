"""Loaders for language-specific content files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .interfaces import IOBackend
from .world_model import Command

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _load_yaml(path: Path, io: IOBackend):
    try:
        with open(path, encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except FileNotFoundError as exc:
        io.output(f"ERROR: Missing file '{path.name}'")
        raise SystemExit from exc
    except yaml.YAMLError as exc:
        io.output(f"ERROR: Invalid YAML in '{path.name}': {exc}")
        raise SystemExit from exc


def _lang_path(data_dir: Path | None, language: str, kind: str) -> Path:
    return (data_dir or DATA_DIR) / language / f"{kind}.{language}.yaml"


def load_messages(language: str, io: IOBackend, data_dir: Path | None = None) -> dict[str, str]:
    """Load engine messages for the given language code."""
    return _load_yaml(_lang_path(data_dir, language, "messages"), io) or {}


def load_commands(language: str, io: IOBackend, data_dir: Path | None = None) -> list[Command]:
    """Load the command catalog in registration order."""
    path = _lang_path(data_dir, language, "commands")
    data = _load_yaml(path, io) or []
    try:
        return [Command(**entry) for entry in data]
    except (TypeError, ValidationError) as exc:
        io.output(f"ERROR: Invalid command definition in '{path.name}': {exc}")
        raise SystemExit from exc


def load_stopwords(language: str, io: IOBackend, data_dir: Path | None = None) -> set[str]:
    data = _load_yaml(_lang_path(data_dir, language, "stopwords"), io) or []
    return {str(word).lower() for word in data}


def world_path(language: str, data_dir: Path | None = None) -> Path:
    return _lang_path(data_dir, language, "world")
