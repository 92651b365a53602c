"""JSON-file settings store: the committed settings and their change notifications."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Callable, Optional

from netplay_settings.models import SaveData

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = Path(
    os.environ.get("NETPLAY_SETTINGS_PATH", PROJECT_ROOT / "config" / "settings.json")
)


class JsonSettingsStore:
    """Holds the committed SaveData in memory and mirrors it to a JSON file."""

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path is not None else CONFIG_PATH
        self._data: Optional[SaveData] = None
        self._character_listeners: list[Callable[[int], None]] = []

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> SaveData:
        if not self._path.exists():
            logger.warning(f"Settings not found at {self._path}, using defaults")
            return SaveData()
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read settings from {self._path}: {e}")
            return SaveData()
        if not isinstance(data, dict):
            logger.error(f"Settings file {self._path} does not hold an object, using defaults")
            return SaveData()
        logger.info(f"Loaded settings from {self._path}")
        return SaveData.from_dict(data)

    def load(self) -> SaveData:
        """Return a private copy of the committed settings."""
        if self._data is None:
            self._data = self._read()
        return self._data.copy()

    def save(self, data: SaveData) -> None:
        previous = self._data
        self._data = data.copy()
        self._write()
        if previous is None or previous.character != data.character:
            self._notify_character(data.character)

    def set_character(self, character: int) -> None:
        """Commit only the character (runtime hotkeys), notifying open editors."""
        current = self.load()
        if current.character == character:
            return
        current.character = character
        self._data = current
        self._write()
        self._notify_character(character)

    def _write(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w") as f:
            json.dump(self._data.to_dict(), f, indent=2)
        logger.info(f"Settings saved to {self._path}")

    def add_character_listener(self, callback: Callable[[int], None]) -> None:
        self._character_listeners.append(callback)

    def remove_character_listener(self, callback: Callable[[int], None]) -> None:
        if callback in self._character_listeners:
            self._character_listeners.remove(callback)

    def _notify_character(self, character: int) -> None:
        for cb in list(self._character_listeners):
            cb(character)
