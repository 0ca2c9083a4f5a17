"""Durable storage of the settings and history slots."""

import os
import json
import logging
from pathlib import Path
from typing import Any, List, Sequence

from ..models.history import TranscriptionItem
from ..models.settings import Settings

logger = logging.getLogger(__name__)

SETTINGS_SLOT = "settings"
HISTORY_SLOT = "history"
HISTORY_LIMIT = 50

_MISSING = object()


class StateStorage:
    """Reads and writes the two durable slots as JSON files in a data directory."""

    def __init__(self, data_dir: str = "./data"):
        """Initialize storage with data directory.

        Args:
            data_dir: Directory holding one JSON file per slot
        """
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"StateStorage initialized with data_dir: {self.data_dir}")

    def slot_path(self, slot: str) -> Path:
        return self.data_dir / f"{slot}.json"

    def read_slot(self, slot: str) -> Any:
        """Read and parse a slot.

        Returns:
            The parsed value, or None if the slot is absent or cannot be parsed
        """
        value = self._read(slot)
        return None if value is _MISSING else value

    def _read(self, slot: str) -> Any:
        path = self.slot_path(slot)
        if not path.exists():
            logger.debug(f"Slot '{slot}' not found at {path}")
            return _MISSING

        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read slot '{slot}', treating as absent: {e}")
            return _MISSING

    def write_slot(self, slot: str, value: Any) -> bool:
        """Overwrite a slot with the serialized value.

        Returns:
            True if the slot was written. Failures are logged, never raised.
        """
        path = self.slot_path(slot)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(value, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
            logger.debug(f"Slot '{slot}' saved: {path}")
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving slot '{slot}': {e}")
            return False

    def load_settings(self) -> Settings:
        """Load settings as defaults merged with the stored value."""
        stored = self._read(SETTINGS_SLOT)
        if stored is _MISSING:
            return Settings()
        if not isinstance(stored, dict):
            logger.warning(f"Stored settings are not an object ({type(stored).__name__}), using defaults")
            return Settings()

        try:
            return Settings.from_dict(stored)
        except TypeError as e:
            logger.warning(f"Stored settings could not be applied, using defaults: {e}")
            return Settings()

    def save_settings(self, settings: Settings) -> bool:
        return self.write_slot(SETTINGS_SLOT, settings.to_dict())

    def load_history(self, limit: int = HISTORY_LIMIT) -> List[TranscriptionItem]:
        """Load history, newest first.

        A slot that is absent or not a list yields an empty history. Entries
        that cannot be parsed are skipped. At most ``limit`` entries are kept.
        """
        stored = self._read(HISTORY_SLOT)
        if stored is _MISSING:
            return []
        if not isinstance(stored, list):
            logger.warning(f"Stored history is not a list ({type(stored).__name__}), starting empty")
            return []

        items = []
        for index, entry in enumerate(stored):
            try:
                items.append(TranscriptionItem.from_dict(entry))
            except (KeyError, TypeError) as e:
                logger.warning(f"Skipping unreadable history entry #{index}: {e}")

        if len(items) > limit:
            logger.warning(f"Stored history has {len(items)} entries, keeping newest {limit}")
            items = items[:limit]

        logger.info(f"Loaded {len(items)} history entries")
        return items

    def save_history(self, history: Sequence[TranscriptionItem]) -> bool:
        return self.write_slot(HISTORY_SLOT, [item.to_dict() for item in history])

