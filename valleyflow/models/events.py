"""Notification channels published by the native backend."""

from enum import Enum


class Notification(Enum):
    """Named backend channels consumed by the event bridge.

    Values are the channel names used by the native backend.
    """
    RECORDING_STATE = "recording-state"            # payload: bool
    RECORDING_PROCESSING = "recording-processing"  # payload: bool
    TRANSCRIPTION_RAW = "transcription-raw"        # payload: str
    TRANSCRIPTION_COMPLETE = "transcription-complete"  # payload: str
    RECORDING_ERROR = "recording-error"            # payload: str
    OPEN_SETTINGS = "open-settings"                # no payload
    OPEN_HISTORY = "open-history"                  # no payload

    @property
    def has_payload(self) -> bool:
        return self not in (Notification.OPEN_SETTINGS, Notification.OPEN_HISTORY)

    def topic(self, prefix: str = "backend") -> str:
        """Pub/sub topic name for this channel, e.g. ``backend.recording_state``."""
        return f"{prefix}.{self.value.replace('-', '_')}"


class NavigationTarget(str, Enum):
    """Screens the backend can ask the presentation layer to open."""
    SETTINGS = "settings"
    HISTORY = "history"


# Outgoing command topic (placeholder for a future backend command interface)
CANCEL_RECORDING_TOPIC = "command.cancel_recording"
