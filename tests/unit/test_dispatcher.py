"""Unit tests for Dispatcher and Subscription."""

import threading
from unittest.mock import Mock

import pytest

from valleyflow.bridge import Dispatcher
from valleyflow.store import Subscription


@pytest.mark.unit
class TestDispatcher:
    """Test cases for the single consumer loop."""

    def test_run_pending_executes_in_order(self, dispatcher):
        calls = []
        for i in range(5):
            dispatcher.post(calls.append, i)

        executed = dispatcher.run_pending()

        assert executed == 5
        assert calls == [0, 1, 2, 3, 4]

    def test_run_pending_on_empty_queue(self, dispatcher):
        assert dispatcher.run_pending() == 0

    def test_failing_call_does_not_stop_loop(self, dispatcher):
        calls = []
        dispatcher.post(Mock(side_effect=RuntimeError("boom")))
        dispatcher.post(calls.append, "after")

        dispatcher.run_pending()

        assert calls == ["after"]

    def test_post_after_stop_is_dropped(self):
        dispatcher = Dispatcher("stopped")
        dispatcher.stop()
        calls = []

        assert dispatcher.post(calls.append, 1) is False
        dispatcher.run_pending()

        assert calls == []
        assert dispatcher.is_closed

    def test_worker_thread_runs_calls_on_one_thread(self):
        dispatcher = Dispatcher("worker")
        threads = []
        dispatcher.start()

        posters = [
            threading.Thread(target=lambda: dispatcher.post(lambda: threads.append(threading.current_thread().name)))
            for _ in range(10)
        ]
        for poster in posters:
            poster.start()
        for poster in posters:
            poster.join()
        dispatcher.wait_idle()

        assert len(threads) == 10
        assert set(threads) == {"worker_worker"}
        assert dispatcher.stop(timeout=2.0) is True

    def test_stop_drains_pending_calls(self):
        dispatcher = Dispatcher("drain")
        calls = []
        for i in range(3):
            dispatcher.post(calls.append, i)
        dispatcher.start()

        assert dispatcher.stop(timeout=2.0) is True
        assert calls == [0, 1, 2]

    def test_stop_without_consumer_runs_pending_calls(self):
        dispatcher = Dispatcher("pumped")
        calls = []
        for i in range(3):
            dispatcher.post(calls.append, i)

        assert dispatcher.stop() is True

        assert calls == [0, 1, 2]
        assert dispatcher.task_queue.empty()

    def test_run_after_stop_returns_immediately(self):
        dispatcher = Dispatcher("late_run")
        dispatcher.stop()
        runner = threading.Thread(target=dispatcher.run)

        runner.start()
        runner.join(timeout=1.0)

        assert not runner.is_alive()

    def test_run_blocks_until_stop(self):
        dispatcher = Dispatcher("blocking")
        calls = []
        dispatcher.post(calls.append, "queued")
        dispatcher.post(dispatcher.stop)

        dispatcher.run()

        assert calls == ["queued"]


@pytest.mark.unit
class TestSubscription:
    """Release handle behaviour."""

    def test_release_runs_all_callbacks_once(self):
        first, second = Mock(), Mock()
        handle = Subscription("test", [first, second])

        handle.release()
        handle.release()

        first.assert_called_once_with()
        second.assert_called_once_with()
        assert handle.active is False
        assert len(handle) == 0

    def test_failing_callback_does_not_skip_rest(self):
        failing = Mock(side_effect=RuntimeError("gone"))
        remaining = Mock()
        handle = Subscription("test", [failing, remaining])

        handle.release()

        remaining.assert_called_once_with()

    def test_context_manager_releases(self):
        callback = Mock()

        with Subscription("test", [callback]) as handle:
            assert handle.active

        callback.assert_called_once_with()

    def test_empty_handle_is_inactive(self):
        assert Subscription("empty").active is False
