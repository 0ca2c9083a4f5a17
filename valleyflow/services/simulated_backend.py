"""Simulated native backend that publishes one dictation cycle."""

import logging
import threading
from typing import Optional

from ..bridge.publisher import BackendPublisher

logger = logging.getLogger(__name__)


class SimulatedBackend:
    """Plays a recording → processing → transcription sequence on a thread.

    Used for running the front-end without the native host.
    """

    def __init__(self,
                 publisher: BackendPublisher,
                 text: str = "Hello from the simulated backend",
                 recording_seconds: float = 3.0,
                 processing_seconds: float = 1.0):
        self.publisher = publisher
        self.text = text
        self.recording_seconds = recording_seconds
        self.processing_seconds = processing_seconds
        self.thread: Optional[threading.Thread] = None
        self.shutdown_event = threading.Event()

    def start(self) -> None:
        self.thread = threading.Thread(target=self._run_cycle, name="simulated_backend", daemon=True)
        self.thread.start()
        logger.info("Simulated backend started")

    def _run_cycle(self) -> None:
        try:
            self.publisher.recording_state(True)
            if self.shutdown_event.wait(self.recording_seconds):
                self.publisher.recording_state(False)
                return

            self.publisher.recording_state(False)
            self.publisher.recording_processing(True)
            if self.shutdown_event.wait(self.processing_seconds):
                self.publisher.recording_processing(False)
                return

            self.publisher.transcription_raw(self.text)
            self.publisher.transcription_complete(self.text)
            self.publisher.recording_processing(False)
            logger.info("Simulated dictation cycle finished")
        except Exception as e:
            logger.error(f"Simulated backend failed: {e}", exc_info=True)
            self._report_error(str(e))

    def _report_error(self, message: str) -> None:
        try:
            self.publisher.recording_error(message)
        except Exception as e:
            logger.error(f"Simulated backend could not publish recording error: {e}", exc_info=True)

    def stop(self, timeout: float = 2.0) -> None:
        self.shutdown_event.set()
        if self.thread is not None:
            self.thread.join(timeout=timeout)
        logger.info("Simulated backend stopped")
