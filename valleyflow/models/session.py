"""Live session and application state snapshot models."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .history import TranscriptionItem
from .settings import Settings


@dataclass(frozen=True)
class AppState:
    """Consistent read-only view of the store after the latest mutation."""
    settings: Settings = field(default_factory=Settings)
    history: Tuple[TranscriptionItem, ...] = ()
    is_recording: bool = False
    is_processing: bool = False
    recording_time: int = 0
    error: Optional[str] = None  # transient, never persisted
