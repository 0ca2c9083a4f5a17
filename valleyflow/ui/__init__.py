"""Presentation helpers."""

from .formatting import translate, format_recording_time, history_preview, format_timestamp
from .clipboard import copy_to_clipboard
from .status_screen import StatusScreen, status_line

__all__ = [
    "translate",
    "format_recording_time",
    "history_preview",
    "format_timestamp",
    "copy_to_clipboard",
    "StatusScreen",
    "status_line",
]
