"""Unit tests for EventBridge."""

from unittest.mock import Mock, patch

import pytest
from pubsub import pub

from valleyflow.bridge import EventBridge
from valleyflow.models import Notification, NavigationTarget


def _is_attached(listener, topic_name):
    topic = pub.getDefaultTopicMgr().getTopic(topic_name, okIfNone=True)
    return topic is not None and topic.hasListener(listener)


@pytest.fixture
def bridge(memory_store):
    b = EventBridge(memory_store)
    handle = b.subscribe()
    yield b
    handle.release()


@pytest.mark.unit
class TestNotificationTopics:

    def test_topic_names(self):
        assert Notification.RECORDING_STATE.topic() == "backend.recording_state"
        assert Notification.OPEN_HISTORY.topic("native") == "native.open_history"

    def test_payload_channels(self):
        assert Notification.TRANSCRIPTION_COMPLETE.has_payload
        assert not Notification.OPEN_SETTINGS.has_payload


@pytest.mark.unit
class TestEventBridgeMutations:
    """Each channel maps onto the documented store mutation."""

    def test_recording_state_true_resets_counter_and_error(self, bridge, memory_store, publisher):
        memory_store.set_recording_time(299)
        memory_store.set_error("old failure")

        publisher.recording_state(True)

        assert memory_store.is_recording is True
        assert memory_store.recording_time == 0
        assert memory_store.error is None

    def test_recording_state_false(self, bridge, memory_store, publisher):
        publisher.recording_state(True)
        memory_store.set_recording_time(12)

        publisher.recording_state(False)

        assert memory_store.is_recording is False
        assert memory_store.recording_time == 12

    def test_recording_processing(self, bridge, memory_store, publisher):
        publisher.recording_processing(True)
        assert memory_store.is_processing is True

        publisher.recording_processing(False)
        assert memory_store.is_processing is False

    def test_transcription_complete_adds_history(self, bridge, memory_store, publisher):
        memory_store.update_settings(language="en")

        publisher.transcription_complete("hello world")

        item = memory_store.history[0]
        assert item.text == "hello world"
        assert item.raw_text == "hello world"
        assert item.language == "en"

    def test_language_captured_at_delivery(self, bridge, memory_store, publisher):
        publisher.transcription_complete("first")
        memory_store.update_settings(language="en")
        publisher.transcription_complete("second")

        assert memory_store.history[0].language == "en"
        assert memory_store.history[1].language == "pl"

    def test_identical_transcriptions_each_appended(self, bridge, memory_store, publisher):
        publisher.transcription_complete("same")
        publisher.transcription_complete("same")

        assert len(memory_store.history) == 2

    def test_transcription_raw_not_stored(self, memory_store, publisher):
        on_raw = Mock()
        bridge = EventBridge(memory_store, on_raw_transcription=on_raw)
        bridge.subscribe()

        publisher.transcription_raw("uh hello")

        on_raw.assert_called_once_with("uh hello")
        assert bridge.last_raw_text == "uh hello"
        assert memory_store.history == ()

    def test_recording_error_keeps_flags_by_default(self, memory_store, publisher):
        on_error = Mock()
        bridge = EventBridge(memory_store, on_error=on_error)
        bridge.subscribe()
        publisher.recording_state(True)

        publisher.recording_error("Microphone not found")

        assert memory_store.error == "Microphone not found"
        assert memory_store.is_recording is True
        on_error.assert_called_once_with("Microphone not found")

    def test_recording_error_resets_flags_when_configured(self, memory_store, publisher):
        bridge = EventBridge(memory_store, reset_on_error=True)
        bridge.subscribe()
        publisher.recording_state(True)
        publisher.recording_processing(True)

        publisher.recording_error("API timeout")

        assert memory_store.error == "API timeout"
        assert memory_store.is_recording is False
        assert memory_store.is_processing is False

    def test_navigation_forwarded_without_mutation(self, memory_store, publisher, state_recorder):
        on_navigate = Mock()
        bridge = EventBridge(memory_store, on_navigate=on_navigate)
        bridge.subscribe()
        memory_store.subscribe(state_recorder)

        publisher.open_settings()
        publisher.open_history()

        assert on_navigate.call_args_list[0].args == (NavigationTarget.SETTINGS,)
        assert on_navigate.call_args_list[1].args == (NavigationTarget.HISTORY,)
        assert state_recorder.states == []

    def test_failing_presentation_callback_absorbed(self, memory_store, publisher):
        bridge = EventBridge(memory_store, on_error=Mock(side_effect=RuntimeError("ui gone")))
        bridge.subscribe()

        publisher.recording_error("boom")

        assert memory_store.error == "boom"

    def test_out_of_order_delivery_applied_as_received(self, bridge, memory_store, publisher):
        publisher.transcription_complete("early")
        publisher.recording_processing(False)
        publisher.recording_state(False)

        assert len(memory_store.history) == 1
        assert memory_store.is_recording is False
        assert memory_store.is_processing is False


@pytest.mark.unit
class TestEventBridgeLifecycle:
    """Subscription lifetime."""

    def test_subscribes_every_channel(self, memory_store):
        bridge = EventBridge(memory_store)

        handle = bridge.subscribe()

        assert len(handle) == len(Notification)
        assert bridge.is_subscribed

    def test_release_detaches_all_listeners(self, memory_store, publisher, state_recorder):
        bridge = EventBridge(memory_store)
        handle = bridge.subscribe()
        handle.release()
        memory_store.subscribe(state_recorder)

        publisher.recording_state(True)
        publisher.recording_processing(True)
        publisher.transcription_complete("ignored")
        publisher.recording_error("ignored")

        assert state_recorder.states == []
        assert memory_store.history == ()
        assert not bridge.is_subscribed
        for notification, listener in bridge._listeners.items():
            assert not _is_attached(listener, notification.topic())

    def test_remount_does_not_duplicate(self, memory_store, publisher):
        bridge = EventBridge(memory_store)
        bridge.subscribe().release()
        bridge.subscribe()

        publisher.transcription_complete("once")

        assert len(memory_store.history) == 1

    def test_double_subscribe_returns_same_handle(self, memory_store, publisher):
        bridge = EventBridge(memory_store)

        first = bridge.subscribe()
        second = bridge.subscribe()
        publisher.transcription_complete("once")

        assert first is second
        assert len(memory_store.history) == 1

    def test_subscription_failure_attaches_nothing(self, memory_store, publisher):
        bridge = EventBridge(memory_store)
        real_subscribe = pub.subscribe
        calls = {"n": 0}

        def flaky_subscribe(listener, topic):
            calls["n"] += 1
            if calls["n"] == 3:
                raise RuntimeError("channel unavailable")
            return real_subscribe(listener, topic)

        with patch.object(pub, "subscribe", side_effect=flaky_subscribe):
            handle = bridge.subscribe()

        publisher.recording_state(True)

        assert handle.active is False
        assert memory_store.is_recording is False
        for notification, listener in bridge._listeners.items():
            assert not _is_attached(listener, notification.topic())

    def test_queued_events_dropped_after_teardown(self, memory_store, dispatcher, publisher):
        bridge = EventBridge(memory_store, dispatcher=dispatcher)
        handle = bridge.subscribe()
        publisher.transcription_complete("queued")

        handle.release()
        dispatcher.run_pending()

        assert memory_store.history == ()

    def test_dispatcher_applies_in_delivery_order(self, memory_store, dispatcher, publisher):
        bridge = EventBridge(memory_store, dispatcher=dispatcher)
        bridge.subscribe()

        publisher.recording_state(True)
        publisher.recording_state(False)
        publisher.recording_processing(True)
        assert memory_store.is_recording is False
        assert memory_store.is_processing is False

        dispatcher.run_pending()

        assert memory_store.is_recording is False
        assert memory_store.is_processing is True
