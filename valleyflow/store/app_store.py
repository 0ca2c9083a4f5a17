"""Application state store: settings, history and live recording status."""

import time
import uuid
import logging
import threading
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from ..models.history import TranscriptionItem
from ..models.session import AppState
from ..models.settings import Settings, normalize_settings_key
from ..storage.state_storage import StateStorage, HISTORY_LIMIT
from .subscription import Subscription

logger = logging.getLogger(__name__)

MAX_RECORDING_TIME = 299  # seconds, the counter freezes here (5 minute limit)

StateListener = Callable[[AppState], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_id() -> str:
    return str(uuid.uuid4())


class AppStore:
    """Single source of truth for application state.

    Settings and history are loaded from storage once at construction and
    written back after every change to them. Recording/processing status is
    kept in memory only. Listeners receive an ``AppState`` snapshot after
    each change.
    """

    def __init__(self,
                 storage: Optional[StateStorage] = None,
                 history_limit: int = HISTORY_LIMIT,
                 clock: Callable[[], int] = _now_ms,
                 id_factory: Callable[[], str] = _new_id):
        """Initialize the store.

        Args:
            storage: Durable storage; None keeps everything in memory
            history_limit: Maximum number of history entries retained
            clock: Returns the current time in milliseconds since epoch
            id_factory: Returns a fresh unique id for history entries
        """
        self.storage = storage
        self.history_limit = history_limit
        self._clock = clock
        self._id_factory = id_factory

        self._lock = threading.RLock()
        self._listeners: List[StateListener] = []

        if storage is not None:
            settings = storage.load_settings()
            history = tuple(storage.load_history(history_limit))
        else:
            settings = Settings()
            history = ()

        self._state = AppState(settings=settings, history=history)
        logger.info(f"AppStore initialized: language={settings.language}, "
                    f"history={len(history)} entries, wizard_done={settings.has_completed_wizard}")

    # -- reading --------------------------------------------------------

    def snapshot(self) -> AppState:
        with self._lock:
            return self._state

    @property
    def settings(self) -> Settings:
        return self.snapshot().settings

    @property
    def history(self):
        return self.snapshot().history

    @property
    def is_recording(self) -> bool:
        return self.snapshot().is_recording

    @property
    def is_processing(self) -> bool:
        return self.snapshot().is_processing

    @property
    def recording_time(self) -> int:
        return self.snapshot().recording_time

    @property
    def error(self) -> Optional[str]:
        return self.snapshot().error

    def subscribe(self, listener: StateListener) -> Subscription:
        """Register a listener called with the new state after every change."""
        with self._lock:
            self._listeners.append(listener)

        def _remove():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return Subscription(f"store:{getattr(listener, '__name__', repr(listener))}", [_remove])

    # -- durable mutations ----------------------------------------------

    def update_settings(self, partial: Optional[Dict[str, Any]] = None, **fields: Any) -> Settings:
        """Merge the given fields into the current settings and persist the result.

        Fields may use attribute names (``api_key``) or stored names (``apiKey``).
        Values are not validated. Unknown fields are ignored.
        """
        changes = dict(partial or {})
        changes.update(fields)

        known = {}
        for key, value in changes.items():
            name = normalize_settings_key(key)
            if name is None:
                logger.warning(f"Ignoring unknown settings field: {key}")
                continue
            known[name] = value

        with self._lock:
            settings = Settings.from_dict(known, base=self._state.settings)
            self._state = replace(self._state, settings=settings)

        logger.info(f"Settings updated: {sorted(known)}")
        self._persist_settings(settings)
        self._notify()
        return settings

    def add_to_history(self, text: str, raw_text: str, language: str) -> TranscriptionItem:
        """Prepend a new entry and drop the oldest ones beyond the history limit."""
        item = TranscriptionItem(
            id=self._id_factory(),
            text=text,
            raw_text=raw_text,
            language=getattr(language, "value", language),
            timestamp=self._clock(),
        )

        with self._lock:
            history = ((item,) + self._state.history)[:self.history_limit]
            self._state = replace(self._state, history=history)

        logger.info(f"Added history entry {item.id} ({len(item.text)} chars), total={len(history)}")
        self._persist_history(history)
        self._notify()
        return item

    def clear_history(self) -> None:
        with self._lock:
            self._state = replace(self._state, history=())

        logger.info("History cleared")
        self._persist_history(())
        self._notify()

    # -- live session mutations -----------------------------------------

    def set_recording(self, is_recording: bool) -> None:
        self._set_live(is_recording=bool(is_recording))

    def set_processing(self, is_processing: bool) -> None:
        self._set_live(is_processing=bool(is_processing))

    def set_recording_time(self, seconds: int) -> None:
        self._set_live(recording_time=max(0, min(int(seconds), MAX_RECORDING_TIME)))

    def tick_recording_time(self) -> bool:
        """Add one second to ``recording_time`` while recording, holding at the ceiling.

        The check and the increment happen under one lock, so a concurrent
        reset or stop is never overwritten by a stale tick.

        Returns:
            True if the counter advanced
        """
        with self._lock:
            current = self._state
            if not current.is_recording or current.recording_time >= MAX_RECORDING_TIME:
                return False
            self._state = replace(current, recording_time=current.recording_time + 1)

        self._notify()
        return True

    def set_error(self, message: Optional[str]) -> None:
        """Set or clear the transient error shown to the user."""
        self._set_live(error=message)

    def clear_error(self) -> None:
        self._set_live(error=None)

    def _set_live(self, **changes: Any) -> None:
        with self._lock:
            current = self._state
            if all(getattr(current, name) == value for name, value in changes.items()):
                return
            self._state = replace(current, **changes)

        logger.debug(f"Live state changed: {changes}")
        self._notify()

    # -- internals ------------------------------------------------------

    def _persist_settings(self, settings: Settings) -> None:
        if self.storage is None:
            return
        try:
            self.storage.save_settings(settings)
        except Exception as e:
            logger.error(f"Failed to persist settings: {e}", exc_info=True)

    def _persist_history(self, history) -> None:
        if self.storage is None:
            return
        try:
            self.storage.save_history(history)
        except Exception as e:
            logger.error(f"Failed to persist history: {e}", exc_info=True)

    def _notify(self) -> None:
        with self._lock:
            state = self._state
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(state)
            except Exception as e:
                logger.error(f"State listener {listener!r} failed: {e}", exc_info=True)
