"""Settings data model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class Language(str, Enum):
    """UI and output language."""
    PL = "pl"
    EN = "en"


DEFAULT_HOTKEY = "Ctrl+Shift+Space"

# Python attribute name -> serialized name
SETTINGS_FIELD_NAMES = {
    "language": "language",
    "microphone": "microphone",
    "api_key": "apiKey",
    "hotkey": "hotkey",
    "has_completed_wizard": "hasCompletedWizard",
}

SERIALIZED_TO_FIELD = {v: k for k, v in SETTINGS_FIELD_NAMES.items()}


@dataclass(frozen=True)
class Settings:
    """User settings. One value per process, replaced as a whole on every merge."""
    language: str = Language.PL.value
    microphone: str = "default"
    api_key: str = field(default="", repr=False)  # never shown in logs
    hotkey: str = DEFAULT_HOTKEY
    has_completed_wizard: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the durable (camelCase) field names."""
        return {
            serialized: getattr(self, name)
            for name, serialized in SETTINGS_FIELD_NAMES.items()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: "Settings" = None) -> "Settings":
        """Build settings from stored data merged over ``base`` (defaults if None).

        Unknown keys are dropped. Both serialized and attribute names are accepted.
        """
        values = (base or cls()).__dict__.copy()
        for key, value in data.items():
            name = normalize_settings_key(key)
            if name is not None:
                values[name] = value.value if isinstance(value, Enum) else value
        return cls(**values)


def normalize_settings_key(key: str):
    """Map a serialized or attribute name to the attribute name, or None if unknown."""
    if key in SETTINGS_FIELD_NAMES:
        return key
    return SERIALIZED_TO_FIELD.get(key)
