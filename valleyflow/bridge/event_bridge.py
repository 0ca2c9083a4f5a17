"""Event bridge: turns backend notifications into store mutations."""

import logging
from typing import Callable, Optional
from pubsub import pub

from ..models.events import Notification, NavigationTarget
from ..store.app_store import AppStore
from ..store.subscription import Subscription
from .dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class EventBridge:
    """Subscribes to the backend notification topics for one UI scope.

    ``subscribe()`` attaches a listener to every channel in ``Notification``
    and returns a single handle; releasing it detaches all of them. When a
    dispatcher is given, mutations are queued onto it so they run on the
    dispatcher's thread in delivery order; otherwise they run on the thread
    that published the notification.
    """

    def __init__(self,
                 store: AppStore,
                 dispatcher: Optional[Dispatcher] = None,
                 topic_prefix: str = "backend",
                 reset_on_error: bool = False,
                 on_error: Optional[Callable[[str], None]] = None,
                 on_navigate: Optional[Callable[[NavigationTarget], None]] = None,
                 on_raw_transcription: Optional[Callable[[str], None]] = None):
        """Initialize the event bridge.

        Args:
            store: Store receiving the mutations
            dispatcher: Consumer loop to run mutations on, or None to apply directly
            topic_prefix: Parent pub/sub topic of the backend channels
            reset_on_error: Also clear recording/processing flags on recording-error
            on_error: Presentation callback for backend error messages
            on_navigate: Presentation callback for open-settings / open-history
            on_raw_transcription: Presentation callback for transcription-raw
        """
        self.store = store
        self.dispatcher = dispatcher
        self.topic_prefix = topic_prefix
        self.reset_on_error = reset_on_error
        self.on_error = on_error
        self.on_navigate = on_navigate
        self.on_raw_transcription = on_raw_transcription
        self.last_raw_text: Optional[str] = None

        self._subscription: Optional[Subscription] = None
        self._listeners = {
            Notification.RECORDING_STATE: self._on_recording_state,
            Notification.RECORDING_PROCESSING: self._on_recording_processing,
            Notification.TRANSCRIPTION_RAW: self._on_transcription_raw,
            Notification.TRANSCRIPTION_COMPLETE: self._on_transcription_complete,
            Notification.RECORDING_ERROR: self._on_recording_error,
            Notification.OPEN_SETTINGS: self._on_open_settings,
            Notification.OPEN_HISTORY: self._on_open_history,
        }

    @property
    def is_subscribed(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def subscribe(self) -> Subscription:
        """Attach listeners to every backend channel.

        Returns:
            Handle whose ``release()`` detaches all listeners together. If
            pub/sub is unavailable the handle is empty and nothing is attached.
        """
        if self.is_subscribed:
            logger.warning("EventBridge already subscribed, returning existing handle")
            return self._subscription

        release_callbacks = []
        try:
            for notification, listener in self._listeners.items():
                topic = notification.topic(self.topic_prefix)
                pub.subscribe(listener, topic)
                release_callbacks.append(self._make_unsubscriber(listener, topic))
        except Exception as e:
            logger.error(f"Backend channels unavailable, running without backend events: {e}")
            Subscription("event-bridge-partial", release_callbacks).release()
            self._subscription = Subscription("event-bridge")
            return self._subscription

        self._subscription = Subscription("event-bridge", release_callbacks)
        logger.info(f"EventBridge subscribed to {len(release_callbacks)} channels under '{self.topic_prefix}'")
        return self._subscription

    def unsubscribe(self) -> None:
        if self._subscription is not None:
            self._subscription.release()
            logger.info("EventBridge unsubscribed")

    @staticmethod
    def _make_unsubscriber(listener, topic: str) -> Callable[[], None]:
        def _unsubscribe():
            pub.unsubscribe(listener, topic)
        return _unsubscribe

    def _deliver(self, func: Callable, *args) -> None:
        """Apply a mutation now or queue it, bound to the current subscription."""
        subscription = self._subscription

        def _apply():
            if subscription is None or not subscription.active:
                logger.debug(f"Dropping {func.__name__}: bridge scope was torn down")
                return
            func(*args)

        if self.dispatcher is None:
            _apply()
        else:
            self.dispatcher.post(_apply)

    # -- pub/sub listeners (run on the publishing thread) ----------------

    def _on_recording_state(self, payload):
        self._deliver(self._apply_recording_state, bool(payload))

    def _on_recording_processing(self, payload):
        self._deliver(self._apply_recording_processing, bool(payload))

    def _on_transcription_raw(self, payload):
        self._deliver(self._apply_transcription_raw, payload)

    def _on_transcription_complete(self, payload):
        self._deliver(self._apply_transcription_complete, payload)

    def _on_recording_error(self, payload):
        self._deliver(self._apply_recording_error, payload)

    def _on_open_settings(self):
        self._deliver(self._apply_navigation, NavigationTarget.SETTINGS)

    def _on_open_history(self):
        self._deliver(self._apply_navigation, NavigationTarget.HISTORY)

    # -- mutations (run on the consumer thread) --------------------------

    def _apply_recording_state(self, is_recording: bool) -> None:
        logger.info(f"recording-state: {is_recording}")
        if is_recording:
            self.store.set_recording_time(0)
            self.store.clear_error()
        self.store.set_recording(is_recording)

    def _apply_recording_processing(self, is_processing: bool) -> None:
        logger.info(f"recording-processing: {is_processing}")
        self.store.set_processing(is_processing)

    def _apply_transcription_raw(self, text) -> None:
        text = "" if text is None else str(text)
        self.last_raw_text = text
        logger.debug(f"transcription-raw received ({len(text)} chars)")
        self._call_presentation(self.on_raw_transcription, text)

    def _apply_transcription_complete(self, text) -> None:
        text = "" if text is None else str(text)
        language = self.store.settings.language
        self.store.add_to_history(text=text, raw_text=text, language=language)

    def _apply_recording_error(self, message) -> None:
        message = "" if message is None else str(message)
        logger.warning(f"recording-error: {message}")
        self.store.set_error(message)
        if self.reset_on_error:
            self.store.set_recording(False)
            self.store.set_processing(False)
        self._call_presentation(self.on_error, message)

    def _apply_navigation(self, target: NavigationTarget) -> None:
        logger.info(f"Navigation requested: {target.value}")
        self._call_presentation(self.on_navigate, target)

    @staticmethod
    def _call_presentation(callback, *args) -> None:
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as e:
            logger.error(f"Presentation callback {callback!r} failed: {e}", exc_info=True)
