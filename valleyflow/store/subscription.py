"""Release handle for listener registrations."""

import logging
import threading
from typing import Callable, List

logger = logging.getLogger(__name__)


class Subscription:
    """Owns one or more listener registrations and removes them all on release.

    The owner keeps the handle and calls ``release()`` on teardown, or uses it
    as a context manager.
    """

    def __init__(self, name: str, release_callbacks: List[Callable[[], None]] = None):
        self.name = name
        self._release_callbacks = list(release_callbacks or [])
        self._lock = threading.Lock()
        self._released = False

    @property
    def active(self) -> bool:
        return not self._released and bool(self._release_callbacks)

    def __len__(self) -> int:
        return 0 if self._released else len(self._release_callbacks)

    def release(self) -> None:
        """Remove every registration held by this handle. Safe to call twice."""
        with self._lock:
            if self._released:
                return
            self._released = True
            callbacks, self._release_callbacks = self._release_callbacks, []

        # Every callback runs even if an earlier one fails
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Error releasing listener for '{self.name}': {e}", exc_info=True)

        logger.debug(f"Subscription '{self.name}' released ({len(callbacks)} listeners)")

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *args) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else f"{len(self._release_callbacks)} listeners"
        return f"Subscription({self.name!r}, {state})"
