"""Transcription history data models."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class TranscriptionItem:
    """A finished transcription kept in history. Never modified after creation."""
    id: str
    text: str
    raw_text: str
    language: str
    timestamp: int  # milliseconds since epoch

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "rawText": self.raw_text,
            "language": self.language,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranscriptionItem":
        """Create an item from its stored form.

        Raises:
            KeyError: A required field is missing
            TypeError: ``data`` is not a mapping or a field has the wrong type
        """
        if not isinstance(data, dict):
            raise TypeError(f"History entry must be an object, got {type(data).__name__}")

        item = cls(
            id=data["id"],
            text=data["text"],
            raw_text=data.get("rawText", data["text"]),
            language=data["language"],
            timestamp=data["timestamp"],
        )
        if not isinstance(item.id, str) or not isinstance(item.text, str):
            raise TypeError("History entry id and text must be strings")
        if isinstance(item.timestamp, bool) or not isinstance(item.timestamp, (int, float)):
            raise TypeError("History entry timestamp must be a number")
        return item
