"""Recording timer that advances the elapsed-time counter while recording."""

import logging
import threading
from typing import Optional

from ..bridge.dispatcher import Dispatcher
from ..models.session import AppState
from ..store.app_store import AppStore
from ..store.subscription import Subscription

logger = logging.getLogger(__name__)


class RecordingTimer:
    """Ticks once per interval while the store reports an active recording.

    ``attach()`` watches the store and starts the ticker when recording
    begins and stops it as soon as recording ends. Each tick adds one second
    to ``recording_time`` and holds at ``MAX_RECORDING_TIME``. The timer does
    not reset the counter; that happens when recording starts.
    """

    def __init__(self,
                 store: AppStore,
                 dispatcher: Optional[Dispatcher] = None,
                 interval: float = 1.0):
        """Initialize the recording timer.

        Args:
            store: Store holding the recording state
            dispatcher: Consumer loop ticks are posted to, or None to tick on the timer thread
            interval: Seconds between ticks
        """
        self.store = store
        self.dispatcher = dispatcher
        self.interval = interval

        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None
        self._store_subscription: Optional[Subscription] = None
        self._local = threading.local()

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._thread is not None and not self._stop_event.is_set()

    def attach(self) -> Subscription:
        """Follow the store's recording flag. Releasing the handle stops the timer."""
        if self._store_subscription is not None and self._store_subscription.active:
            return self._store_subscription

        store_subscription = self.store.subscribe(self._on_state_change)
        self._store_subscription = Subscription("recording-timer", [store_subscription.release, self.stop])

        # Recording may already be in progress when attached
        self._on_state_change(self.store.snapshot())
        logger.info("RecordingTimer attached to store")
        return self._store_subscription

    def detach(self) -> None:
        if self._store_subscription is not None:
            self._store_subscription.release()

    def _on_state_change(self, state: AppState) -> None:
        # Ticks only move the counter; their notifications must not start or stop the ticker
        if getattr(self._local, "ticking", False):
            return
        if state.is_recording and not self.is_running:
            self.start()
        elif not state.is_recording and self.is_running:
            self.stop()

    def start(self) -> None:
        """Start ticking. No-op if already running."""
        with self._lock:
            if self._thread is not None and not self._stop_event.is_set():
                return
            stop_event = threading.Event()
            thread = threading.Thread(target=self._tick_loop, args=(stop_event,),
                                      name="recording_timer", daemon=True)
            self._stop_event = stop_event
            self._thread = thread
        thread.start()
        logger.debug(f"Recording timer started (interval={self.interval}s)")

    def stop(self, timeout: float = 2.0) -> None:
        """Stop ticking immediately. No-op if not running."""
        with self._lock:
            thread, stop_event = self._thread, self._stop_event
            self._thread = None
            self._stop_event = None
        if thread is None:
            return

        stop_event.set()
        if thread is not threading.current_thread():
            thread.join(timeout=timeout)
            if thread.is_alive():
                logger.warning(f"Recording timer thread did not exit within {timeout}s")
        logger.debug("Recording timer stopped")

    def _tick_loop(self, stop_event: threading.Event) -> None:
        self._local.ticking = True
        while not stop_event.wait(self.interval):
            if self.dispatcher is None:
                self._tick_if_current(stop_event)
            elif not self.dispatcher.post(self._tick_if_current, stop_event):
                break

    def _tick_if_current(self, stop_event: threading.Event) -> None:
        # A tick queued before stop() must not land after it
        if stop_event.is_set():
            return
        self.tick()

    def tick(self) -> None:
        """Advance the counter by one second while recording, holding at the ceiling."""
        self.store.tick_recording_time()
