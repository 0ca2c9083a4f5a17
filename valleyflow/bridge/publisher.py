"""Backend notification publisher for pub/sub event publishing."""

import logging
from typing import Any
from pubsub import pub

from ..models.events import Notification

logger = logging.getLogger(__name__)


class BackendPublisher:
    """Publishes backend notifications using pubsub.pub.

    The native backend side of the channel contract: anything that feeds
    notifications to the event bridge (the simulated backend, a native host
    adapter, tests) goes through here.
    """

    def __init__(self, topic_prefix: str = "backend"):
        """Initialize backend publisher.

        Args:
            topic_prefix: Parent pub/sub topic for all backend channels
        """
        self.topic_prefix = topic_prefix
        logger.info(f"BackendPublisher initialized with topic prefix: {topic_prefix}")

    def publish(self, notification: Notification, payload: Any = None) -> None:
        """Publish one notification.

        Args:
            notification: Channel to publish on
            payload: bool or str payload; ignored for channels without one
        """
        topic = notification.topic(self.topic_prefix)
        if notification.has_payload:
            pub.sendMessage(topic, payload=payload)
        else:
            pub.sendMessage(topic)
        logger.debug(f"Published {notification.value}")

    def recording_state(self, is_recording: bool) -> None:
        self.publish(Notification.RECORDING_STATE, is_recording)

    def recording_processing(self, is_processing: bool) -> None:
        self.publish(Notification.RECORDING_PROCESSING, is_processing)

    def transcription_raw(self, text: str) -> None:
        self.publish(Notification.TRANSCRIPTION_RAW, text)

    def transcription_complete(self, text: str) -> None:
        self.publish(Notification.TRANSCRIPTION_COMPLETE, text)

    def recording_error(self, message: str) -> None:
        self.publish(Notification.RECORDING_ERROR, message)

    def open_settings(self) -> None:
        self.publish(Notification.OPEN_SETTINGS)

    def open_history(self) -> None:
        self.publish(Notification.OPEN_HISTORY)
