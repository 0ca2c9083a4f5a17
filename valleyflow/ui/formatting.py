"""Text helpers shared by the presentation layer."""

from datetime import datetime, tzinfo
from typing import Optional

PREVIEW_LENGTH = 50

_MONTHS = {
    "en": ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
    "pl": ["sty", "lut", "mar", "kwi", "maj", "cze", "lip", "sie", "wrz", "paź", "lis", "gru"],
}

TEXTS = {
    "ready": {"pl": "Gotowy", "en": "Ready"},
    "recording": {"pl": "Nagrywanie", "en": "Recording"},
    "processing": {"pl": "Przetwarzanie", "en": "Processing"},
    "cancel": {"pl": "Anuluj", "en": "Cancel"},
    "settings": {"pl": "Ustawienia", "en": "Settings"},
    "history": {"pl": "Historia", "en": "History"},
    "history_empty": {"pl": "Brak transkrypcji", "en": "No transcriptions yet"},
    "clear": {"pl": "Wyczyść", "en": "Clear"},
    "copy": {"pl": "Kopiuj", "en": "Copy"},
    "copied": {"pl": "Skopiowano!", "en": "Copied!"},
    "error": {"pl": "Błąd", "en": "Error"},
}


def translate(key: str, language: str) -> str:
    """Return the UI string for key in language, falling back to English then the key."""
    entry = TEXTS.get(key)
    if entry is None:
        return key
    return entry.get(language, entry["en"])


def format_recording_time(seconds: int) -> str:
    """Format elapsed seconds as MM:SS."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def history_preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    if len(text) > length:
        return text[:length] + "..."
    return text


def format_timestamp(timestamp_ms: int, language: str, tz: Optional[tzinfo] = None) -> str:
    """Short date and time, e.g. 'Oct 18, 14:05' or '18 paź, 14:05'."""
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz)
    months = _MONTHS.get(language, _MONTHS["en"])
    month = months[moment.month - 1]
    clock = moment.strftime("%H:%M")
    if language == "pl":
        return f"{moment.day} {month}, {clock}"
    return f"{month} {moment.day}, {clock}"
