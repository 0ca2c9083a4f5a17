"""Data models for the ValleyFlow application."""

from .settings import Settings, Language, DEFAULT_HOTKEY
from .history import TranscriptionItem
from .session import AppState
from .events import Notification, NavigationTarget, CANCEL_RECORDING_TOPIC

__all__ = [
    "Settings",
    "Language",
    "DEFAULT_HOTKEY",
    "TranscriptionItem",
    "AppState",
    "Notification",
    "NavigationTarget",
    "CANCEL_RECORDING_TOPIC",
]
