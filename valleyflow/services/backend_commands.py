"""Commands sent from the front-end to the native backend.

These are placeholders: only cancel_recording goes out over pub/sub, the
device queries return simulated results until the backend exposes them.
"""

import logging
from dataclasses import dataclass
from typing import List
from pubsub import pub

from ..models.events import CANCEL_RECORDING_TOPIC

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AudioDevice:
    """An audio input device the user can pick."""
    id: str
    name: str


@dataclass(frozen=True)
class MicrophoneTestResult:
    device_id: str
    success: bool
    message: str = ""


DEFAULT_DEVICE = AudioDevice(id="default", name="Default Microphone")


class BackendCommands:
    """Front-end to backend command interface."""

    def __init__(self, cancel_topic: str = CANCEL_RECORDING_TOPIC):
        self.cancel_topic = cancel_topic

    def cancel_recording(self) -> None:
        """Ask the backend to abort the current recording."""
        logger.info("Requesting backend to cancel recording")
        pub.sendMessage(self.cancel_topic)

    def list_microphones(self) -> List[AudioDevice]:
        # TODO: query the backend for real input devices once it exposes a device-list command
        logger.debug("Listing microphones (simulated)")
        return [DEFAULT_DEVICE]

    def test_microphone(self, device_id: str = "default") -> MicrophoneTestResult:
        logger.info(f"Testing microphone '{device_id}' (simulated)")
        return MicrophoneTestResult(device_id=device_id, success=True, message="simulated")
