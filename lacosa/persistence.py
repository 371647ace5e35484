"""Save game state to disk."""

from __future__ import annotations

import contextlib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:  # pragma: no cover - used for type checking only
    from .world import WorldState


class SaveManager:
    """Handle persisting the game state in numbered slots.

    Parameters
    ----------
    data_dir:
        Directory where the ``save_<slot>.yaml`` files are stored.
    slot:
        Slot used by this session.
    """

    def __init__(self, data_dir: Path, slot: int = 1):
        self.data_dir = data_dir
        self.slot = slot
        self.save_path = self.data_dir / f"save_{slot}.yaml"

    def load(self) -> dict[str, Any]:
        """Return previously saved data if available."""

        if not self.save_path.exists():
            return {}
        with open(self.save_path, encoding="utf-8") as fh:
            return yaml.safe_load(fh) or {}

    def save(self, world: WorldState, language: str) -> int:
        """Persist the current world state and language, return the slot number."""

        data = world.to_state()
        data["language"] = language
        with open(self.save_path, "w", encoding="utf-8") as fh:
            yaml.safe_dump(data, fh, allow_unicode=True)
        world.debug(f"saved slot {self.slot}")
        return self.slot

    def cleanup(self) -> None:
        """Remove the save file if it exists."""

        if self.save_path.exists():
            with contextlib.suppress(OSError):
                self.save_path.unlink()


__all__ = ["SaveManager"]
